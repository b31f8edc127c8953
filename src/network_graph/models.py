from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

NODE_TYPES: tuple[str, ...] = ("user", "post", "topic", "keyword", "hashtag")
LINK_TYPES: tuple[str, ...] = (
    "follows",
    "mentions",
    "retweets",
    "replies",
    "shared_topic",
    "keyword_match",
)


@dataclass(frozen=True, slots=True)
class NetworkNode:
    id: str
    name: str
    type: str
    size: float
    color: str
    data: dict[str, Any] = field(default_factory=dict, hash=False)


@dataclass(frozen=True, slots=True)
class NetworkLink:
    source: str
    target: str
    value: float
    type: str
    color: str = ""
    data: dict[str, Any] = field(default_factory=dict, hash=False)


@dataclass(frozen=True, slots=True)
class NetworkData:
    """Immutable node/link graph.

    Nodes are addressed by id through ``node_index()``; links only carry ids,
    so the graph never holds references between node objects. Instances are
    expected to have gone through ``network_graph.validation.validate``.
    """

    nodes: tuple[NetworkNode, ...] = ()
    links: tuple[NetworkLink, ...] = ()

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def link_count(self) -> int:
        return len(self.links)

    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]

    def node_index(self) -> dict[str, NetworkNode]:
        return {node.id: node for node in self.nodes}


@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class ClusterMetrics:
    density: float
    centrality_score: float
    influence: float


@dataclass(frozen=True, slots=True)
class NetworkCluster:
    id: str
    name: str
    node_ids: tuple[str, ...]
    color: str
    center: Point
    metrics: ClusterMetrics

    @property
    def size(self) -> int:
        return len(self.node_ids)
