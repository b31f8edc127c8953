from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from . import models
from .stats import NetworkStats
from .validation import build_network_data


class WireModel(BaseModel):
    """JSON shape shared with the visualization front end (camelCase on the wire)."""

    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class NetworkNodeValue(WireModel):
    id: str
    name: str
    type: str
    size: float
    color: str
    data: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, node: models.NetworkNode) -> "NetworkNodeValue":
        return cls(
            id=node.id,
            name=node.name,
            type=node.type,
            size=node.size,
            color=node.color,
            data=dict(node.data),
        )

    def to_domain(self) -> models.NetworkNode:
        return models.NetworkNode(**self.model_dump())


class NetworkLinkValue(WireModel):
    source: str
    target: str
    value: float
    type: str
    color: str = ""
    data: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, link: models.NetworkLink) -> "NetworkLinkValue":
        return cls(
            source=link.source,
            target=link.target,
            value=link.value,
            type=link.type,
            color=link.color,
            data=dict(link.data),
        )

    def to_domain(self) -> models.NetworkLink:
        return models.NetworkLink(**self.model_dump())


class NetworkDataValue(WireModel):
    nodes: list[NetworkNodeValue] = Field(default_factory=list)
    links: list[NetworkLinkValue] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, data: models.NetworkData) -> "NetworkDataValue":
        return cls(
            nodes=[NetworkNodeValue.from_domain(node) for node in data.nodes],
            links=[NetworkLinkValue.from_domain(link) for link in data.links],
        )

    def to_domain(self) -> models.NetworkData:
        return build_network_data(
            (node.to_domain() for node in self.nodes),
            (link.to_domain() for link in self.links),
        )


class PointValue(WireModel):
    x: float
    y: float


class ClusterMetricsValue(WireModel):
    density: float
    centrality_score: float
    influence: float


class NetworkClusterValue(WireModel):
    id: str
    name: str
    node_ids: list[str]
    color: str
    center: PointValue
    metrics: ClusterMetricsValue

    @classmethod
    def from_domain(cls, cluster: models.NetworkCluster) -> "NetworkClusterValue":
        return cls(
            id=cluster.id,
            name=cluster.name,
            node_ids=list(cluster.node_ids),
            color=cluster.color,
            center=PointValue(x=cluster.center.x, y=cluster.center.y),
            metrics=ClusterMetricsValue(
                density=cluster.metrics.density,
                centrality_score=cluster.metrics.centrality_score,
                influence=cluster.metrics.influence,
            ),
        )

    def to_domain(self) -> models.NetworkCluster:
        return models.NetworkCluster(
            id=self.id,
            name=self.name,
            node_ids=tuple(dict.fromkeys(self.node_ids)),
            color=self.color,
            center=models.Point(x=self.center.x, y=self.center.y),
            metrics=models.ClusterMetrics(**self.metrics.model_dump()),
        )


class NetworkStatsValue(WireModel):
    node_count: int
    link_count: int
    density: float
    avg_degree: float
    max_degree: int

    @classmethod
    def from_domain(cls, stats: NetworkStats) -> "NetworkStatsValue":
        return cls(
            node_count=stats.node_count,
            link_count=stats.link_count,
            density=stats.density,
            avg_degree=stats.avg_degree,
            max_degree=stats.max_degree,
        )
