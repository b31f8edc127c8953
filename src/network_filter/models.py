from __future__ import annotations

from dataclasses import dataclass, field

from network_graph.models import NetworkCluster, NetworkLink, NetworkNode
from network_graph.stats import NetworkStats

SEARCH_FIELDS: tuple[str, ...] = ("name", "type", "id")


@dataclass(frozen=True, slots=True)
class CategoryOption:
    type: str
    label: str
    color: str
    count: int


@dataclass(frozen=True, slots=True)
class ValueRange:
    min: float = 0.0
    max: float = 0.0


@dataclass(frozen=True, slots=True)
class CategoryFilter:
    enabled: bool = False
    selected: tuple[str, ...] = ()
    available: tuple[CategoryOption, ...] = ()


@dataclass(frozen=True, slots=True)
class RangeFilter:
    enabled: bool = False
    minimum: float = 0.0
    maximum: float = float("inf")
    bounds: ValueRange = field(default_factory=ValueRange)

    def contains(self, value: float) -> bool:
        return self.minimum <= value <= self.maximum


@dataclass(frozen=True, slots=True)
class ClusterFilter:
    enabled: bool = False
    selected_clusters: tuple[str, ...] = ()
    clusters: tuple[NetworkCluster, ...] = ()


@dataclass(frozen=True, slots=True)
class SearchFilter:
    enabled: bool = False
    query: str = ""
    fields: tuple[str, ...] = SEARCH_FIELDS


@dataclass(frozen=True, slots=True)
class FilterSettings:
    node_types: CategoryFilter = field(default_factory=CategoryFilter)
    link_types: CategoryFilter = field(default_factory=CategoryFilter)
    size_filter: RangeFilter = field(default_factory=RangeFilter)
    value_filter: RangeFilter = field(default_factory=RangeFilter)
    degree_filter: RangeFilter = field(default_factory=RangeFilter)
    cluster_filter: ClusterFilter = field(default_factory=ClusterFilter)
    search_filter: SearchFilter = field(default_factory=SearchFilter)


@dataclass(frozen=True, slots=True)
class FilterResult:
    visible_nodes: tuple[NetworkNode, ...]
    visible_links: tuple[NetworkLink, ...]
    stats: NetworkStats


@dataclass(frozen=True, slots=True)
class FilterSummary:
    original_node_count: int
    original_link_count: int
    filtered_node_count: int
    filtered_link_count: int
    active: bool
