from __future__ import annotations

import math

from pydantic import Field

from network_graph.wire_models import (
    NetworkClusterValue,
    NetworkLinkValue,
    NetworkNodeValue,
    NetworkStatsValue,
    WireModel,
)

from . import models


def _finite_or_none(value: float) -> float | None:
    return value if math.isfinite(value) else None


class CategoryOptionValue(WireModel):
    type: str
    label: str
    color: str = ""
    count: int = 0


class CategoryFilterValue(WireModel):
    enabled: bool = False
    selected: list[str] = Field(default_factory=list)
    available: list[CategoryOptionValue] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, category: models.CategoryFilter) -> "CategoryFilterValue":
        return cls(
            enabled=category.enabled,
            selected=list(category.selected),
            available=[
                CategoryOptionValue(type=option.type, label=option.label, color=option.color, count=option.count)
                for option in category.available
            ],
        )

    def to_domain(self) -> models.CategoryFilter:
        return models.CategoryFilter(
            enabled=self.enabled,
            selected=tuple(self.selected),
            available=tuple(models.CategoryOption(**option.model_dump()) for option in self.available),
        )


class ValueRangeValue(WireModel):
    min: float = 0.0
    max: float = 0.0


class RangeFilterValue(WireModel):
    enabled: bool = False
    minimum: float = 0.0
    maximum: float | None = Field(default=None, description="None means unbounded")
    bounds: ValueRangeValue = Field(default_factory=ValueRangeValue)

    @classmethod
    def from_domain(cls, range_filter: models.RangeFilter) -> "RangeFilterValue":
        return cls(
            enabled=range_filter.enabled,
            minimum=range_filter.minimum,
            maximum=_finite_or_none(range_filter.maximum),
            bounds=ValueRangeValue(min=range_filter.bounds.min, max=range_filter.bounds.max),
        )

    def to_domain(self) -> models.RangeFilter:
        return models.RangeFilter(
            enabled=self.enabled,
            minimum=self.minimum,
            maximum=float("inf") if self.maximum is None else self.maximum,
            bounds=models.ValueRange(min=self.bounds.min, max=self.bounds.max),
        )


class ClusterFilterValue(WireModel):
    enabled: bool = False
    selected_clusters: list[str] = Field(default_factory=list)
    clusters: list[NetworkClusterValue] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, cluster_filter: models.ClusterFilter) -> "ClusterFilterValue":
        return cls(
            enabled=cluster_filter.enabled,
            selected_clusters=list(cluster_filter.selected_clusters),
            clusters=[NetworkClusterValue.from_domain(cluster) for cluster in cluster_filter.clusters],
        )

    def to_domain(self) -> models.ClusterFilter:
        return models.ClusterFilter(
            enabled=self.enabled,
            selected_clusters=tuple(self.selected_clusters),
            clusters=tuple(cluster.to_domain() for cluster in self.clusters),
        )


class SearchFilterValue(WireModel):
    enabled: bool = False
    query: str = ""
    fields: list[str] = Field(default_factory=lambda: list(models.SEARCH_FIELDS))

    @classmethod
    def from_domain(cls, search: models.SearchFilter) -> "SearchFilterValue":
        return cls(enabled=search.enabled, query=search.query, fields=list(search.fields))

    def to_domain(self) -> models.SearchFilter:
        return models.SearchFilter(enabled=self.enabled, query=self.query, fields=tuple(self.fields))


class FilterSettingsValue(WireModel):
    node_types: CategoryFilterValue = Field(default_factory=CategoryFilterValue)
    link_types: CategoryFilterValue = Field(default_factory=CategoryFilterValue)
    size_filter: RangeFilterValue = Field(default_factory=RangeFilterValue)
    value_filter: RangeFilterValue = Field(default_factory=RangeFilterValue)
    degree_filter: RangeFilterValue = Field(default_factory=RangeFilterValue)
    cluster_filter: ClusterFilterValue = Field(default_factory=ClusterFilterValue)
    search_filter: SearchFilterValue = Field(default_factory=SearchFilterValue)

    @classmethod
    def from_domain(cls, settings: models.FilterSettings) -> "FilterSettingsValue":
        return cls(
            node_types=CategoryFilterValue.from_domain(settings.node_types),
            link_types=CategoryFilterValue.from_domain(settings.link_types),
            size_filter=RangeFilterValue.from_domain(settings.size_filter),
            value_filter=RangeFilterValue.from_domain(settings.value_filter),
            degree_filter=RangeFilterValue.from_domain(settings.degree_filter),
            cluster_filter=ClusterFilterValue.from_domain(settings.cluster_filter),
            search_filter=SearchFilterValue.from_domain(settings.search_filter),
        )

    def to_domain(self) -> models.FilterSettings:
        return models.FilterSettings(
            node_types=self.node_types.to_domain(),
            link_types=self.link_types.to_domain(),
            size_filter=self.size_filter.to_domain(),
            value_filter=self.value_filter.to_domain(),
            degree_filter=self.degree_filter.to_domain(),
            cluster_filter=self.cluster_filter.to_domain(),
            search_filter=self.search_filter.to_domain(),
        )


class FilterResultValue(WireModel):
    visible_nodes: list[NetworkNodeValue]
    visible_links: list[NetworkLinkValue]
    stats: NetworkStatsValue

    @classmethod
    def from_domain(cls, result: models.FilterResult) -> "FilterResultValue":
        return cls(
            visible_nodes=[NetworkNodeValue.from_domain(node) for node in result.visible_nodes],
            visible_links=[NetworkLinkValue.from_domain(link) for link in result.visible_links],
            stats=NetworkStatsValue.from_domain(result.stats),
        )
