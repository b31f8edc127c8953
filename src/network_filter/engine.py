from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence

from network_graph.models import LINK_TYPES, NODE_TYPES, NetworkCluster, NetworkData, NetworkLink, NetworkNode
from network_graph.stats import compute_stats, degree_map

from .metrics import FILTER_CALLS, FILTER_LATENCY_SECONDS, VISIBLE_NODES
from .models import (
    SEARCH_FIELDS,
    CategoryFilter,
    CategoryOption,
    ClusterFilter,
    FilterResult,
    FilterSettings,
    FilterSummary,
    RangeFilter,
    SearchFilter,
    ValueRange,
)


def _label(category: str) -> str:
    return category.replace("_", " ").title()


def _options(items: Sequence[NetworkNode] | Sequence[NetworkLink], known: tuple[str, ...]) -> tuple[CategoryOption, ...]:
    counts: dict[str, int] = {}
    colors: dict[str, str] = {}
    for item in items:
        counts[item.type] = counts.get(item.type, 0) + 1
        if item.color and item.type not in colors:
            colors[item.type] = item.color
    return tuple(
        CategoryOption(type=category, label=_label(category), color=colors.get(category, ""), count=counts[category])
        for category in known
        if category in counts
    )


def category_options(data: NetworkData) -> tuple[tuple[CategoryOption, ...], tuple[CategoryOption, ...]]:
    """Node-type and link-type options present in ``data``, with their counts."""
    return _options(data.nodes, NODE_TYPES), _options(data.links, LINK_TYPES)


def _observed(values: Iterable[float]) -> ValueRange:
    values = list(values)
    if not values:
        return ValueRange(0.0, 0.0)
    return ValueRange(min(values), max(values))


def _category_active(category: CategoryFilter) -> bool:
    # an enabled dimension with nothing picked restricts nothing
    return category.enabled and bool(category.selected)


def has_active_filters(settings: FilterSettings) -> bool:
    return (
        _category_active(settings.node_types)
        or _category_active(settings.link_types)
        or settings.size_filter.enabled
        or settings.value_filter.enabled
        or settings.degree_filter.enabled
        or (settings.cluster_filter.enabled and bool(settings.cluster_filter.selected_clusters))
        or (settings.search_filter.enabled and bool(settings.search_filter.query))
    )


class FilterEngine:
    """Derives the visible subgraph for a set of filter settings.

    Evaluation order is fixed so the result does not depend on the order in
    which dimensions were toggled:

    1. node type, size range, text search and cluster membership each keep a
       node set; their intersection is the candidate set;
    2. a link survives only if both endpoints are candidates;
    3. link type and value range narrow the links;
    4. the degree filter recomputes degrees over the surviving links, drops
       out-of-range nodes and re-applies link containment once.

    ``filter`` never raises: an inverted range simply matches nothing.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger("network-filter")

    @staticmethod
    def _search_matches(node: NetworkNode, search: SearchFilter, query: str) -> bool:
        for name in search.fields:
            if name not in SEARCH_FIELDS:
                continue
            if query in str(getattr(node, name)).lower():
                return True
        return False

    @staticmethod
    def _cluster_members(cluster_filter: ClusterFilter) -> set[str]:
        selected = set(cluster_filter.selected_clusters)
        members: set[str] = set()
        for cluster in cluster_filter.clusters:
            if cluster.id in selected:
                members.update(cluster.node_ids)
        return members

    def _candidate_nodes(self, nodes: Sequence[NetworkNode], settings: FilterSettings) -> list[NetworkNode]:
        node_types = settings.node_types
        size_filter = settings.size_filter
        search = settings.search_filter
        query = search.query.lower() if search.enabled else ""
        cluster_filter = settings.cluster_filter
        members = (
            self._cluster_members(cluster_filter)
            if cluster_filter.enabled and cluster_filter.selected_clusters
            else None
        )

        kept: list[NetworkNode] = []
        for node in nodes:
            if _category_active(node_types) and node.type not in node_types.selected:
                continue
            if size_filter.enabled and not size_filter.contains(node.size):
                continue
            if query and not self._search_matches(node, search, query):
                continue
            if members is not None and node.id not in members:
                continue
            kept.append(node)
        return kept

    @staticmethod
    def _link_matches(link: NetworkLink, settings: FilterSettings) -> bool:
        link_types = settings.link_types
        if _category_active(link_types) and link.type not in link_types.selected:
            return False
        if settings.value_filter.enabled and not settings.value_filter.contains(link.value):
            return False
        return True

    @staticmethod
    def _contained(links: Iterable[NetworkLink], node_ids: set[str]) -> list[NetworkLink]:
        return [link for link in links if link.source in node_ids and link.target in node_ids]

    def filter(self, data: NetworkData, settings: FilterSettings) -> FilterResult:
        started = time.perf_counter()

        nodes = self._candidate_nodes(data.nodes, settings)
        links = self._contained(data.links, {node.id for node in nodes})
        links = [link for link in links if self._link_matches(link, settings)]

        degree_filter = settings.degree_filter
        if degree_filter.enabled:
            # single extra pass, not iterated to a fixed point
            degrees = degree_map((node.id for node in nodes), links)
            nodes = [node for node in nodes if degree_filter.contains(degrees[node.id])]
            links = self._contained(links, {node.id for node in nodes})

        visible = NetworkData(nodes=tuple(nodes), links=tuple(links))
        result = FilterResult(
            visible_nodes=visible.nodes,
            visible_links=visible.links,
            stats=compute_stats(visible),
        )

        elapsed = time.perf_counter() - started
        FILTER_CALLS.inc()
        FILTER_LATENCY_SECONDS.observe(elapsed)
        VISIBLE_NODES.observe(len(nodes))
        self.logger.debug(
            "filter applied nodes=%d/%d links=%d/%d elapsed_ms=%.3f",
            len(nodes),
            data.node_count,
            len(links),
            data.link_count,
            elapsed * 1000.0,
        )
        return result

    def reset(self, data: NetworkData, clusters: Sequence[NetworkCluster] = ()) -> FilterSettings:
        node_options, link_options = category_options(data)
        size_bounds = _observed(node.size for node in data.nodes)
        value_bounds = _observed(link.value for link in data.links)
        degree_bounds = _observed(degree_map(data.node_ids(), data.links).values())

        def disabled_range(bounds: ValueRange) -> RangeFilter:
            return RangeFilter(enabled=False, minimum=bounds.min, maximum=bounds.max, bounds=bounds)

        return FilterSettings(
            node_types=CategoryFilter(enabled=False, selected=(), available=node_options),
            link_types=CategoryFilter(enabled=False, selected=(), available=link_options),
            size_filter=disabled_range(size_bounds),
            value_filter=disabled_range(value_bounds),
            degree_filter=disabled_range(degree_bounds),
            cluster_filter=ClusterFilter(enabled=False, selected_clusters=(), clusters=tuple(clusters)),
            search_filter=SearchFilter(enabled=False, query="", fields=SEARCH_FIELDS),
        )

    def summarize(self, data: NetworkData, settings: FilterSettings) -> FilterSummary:
        result = self.filter(data, settings)
        return FilterSummary(
            original_node_count=data.node_count,
            original_link_count=data.link_count,
            filtered_node_count=result.stats.node_count,
            filtered_link_count=result.stats.link_count,
            active=has_active_filters(settings),
        )
