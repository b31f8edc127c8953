"""
Immutable edits of ``FilterSettings``.

Every helper returns a new settings value; the input is never modified, so a
caller can keep the previous settings around (undo, debounced re-filtering).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import replace

from network_graph.models import NetworkCluster

from .models import SEARCH_FIELDS, CategoryFilter, FilterSettings, RangeFilter

RANGE_DIMENSIONS = ("size_filter", "value_filter", "degree_filter")
DIMENSIONS = (
    "node_types",
    "link_types",
    "size_filter",
    "value_filter",
    "degree_filter",
    "cluster_filter",
    "search_filter",
)


def _toggled(values: tuple[str, ...], value: str) -> tuple[str, ...]:
    if value in values:
        return tuple(item for item in values if item != value)
    return values + (value,)


def _toggle_category(category: CategoryFilter, value: str) -> CategoryFilter:
    return replace(category, enabled=True, selected=_toggled(category.selected, value))


def toggle_node_type(settings: FilterSettings, node_type: str) -> FilterSettings:
    return replace(settings, node_types=_toggle_category(settings.node_types, node_type))


def toggle_link_type(settings: FilterSettings, link_type: str) -> FilterSettings:
    return replace(settings, link_types=_toggle_category(settings.link_types, link_type))


def toggle_cluster(settings: FilterSettings, cluster_id: str) -> FilterSettings:
    cluster_filter = settings.cluster_filter
    return replace(
        settings,
        cluster_filter=replace(
            cluster_filter,
            enabled=True,
            selected_clusters=_toggled(cluster_filter.selected_clusters, cluster_id),
        ),
    )


def set_clusters(settings: FilterSettings, clusters: Sequence[NetworkCluster]) -> FilterSettings:
    """Swap in a fresh clustering result, keeping only selections that still exist."""
    known = {cluster.id for cluster in clusters}
    cluster_filter = settings.cluster_filter
    return replace(
        settings,
        cluster_filter=replace(
            cluster_filter,
            clusters=tuple(clusters),
            selected_clusters=tuple(cid for cid in cluster_filter.selected_clusters if cid in known),
        ),
    )


def set_search_query(settings: FilterSettings, query: str) -> FilterSettings:
    return replace(settings, search_filter=replace(settings.search_filter, query=query, enabled=bool(query)))


def set_search_fields(settings: FilterSettings, fields: Iterable[str]) -> FilterSettings:
    wanted = set(fields)
    return replace(
        settings,
        search_filter=replace(settings.search_filter, fields=tuple(name for name in SEARCH_FIELDS if name in wanted)),
    )


def set_range(settings: FilterSettings, dimension: str, minimum: float, maximum: float) -> FilterSettings:
    if dimension not in RANGE_DIMENSIONS:
        raise ValueError(f"{dimension!r} is not a range dimension")
    current: RangeFilter = getattr(settings, dimension)
    return replace(settings, **{dimension: replace(current, minimum=minimum, maximum=maximum)})


def set_enabled(settings: FilterSettings, dimension: str, enabled: bool) -> FilterSettings:
    if dimension not in DIMENSIONS:
        raise ValueError(f"unknown filter dimension {dimension!r}")
    return replace(settings, **{dimension: replace(getattr(settings, dimension), enabled=enabled)})


def reset_filters(settings: FilterSettings) -> FilterSettings:
    """Disable every dimension, keeping available options, observed bounds and clusters."""

    def full_range(current: RangeFilter) -> RangeFilter:
        return replace(current, enabled=False, minimum=current.bounds.min, maximum=current.bounds.max)

    return FilterSettings(
        node_types=replace(settings.node_types, enabled=False, selected=()),
        link_types=replace(settings.link_types, enabled=False, selected=()),
        size_filter=full_range(settings.size_filter),
        value_filter=full_range(settings.value_filter),
        degree_filter=full_range(settings.degree_filter),
        cluster_filter=replace(settings.cluster_filter, enabled=False, selected_clusters=()),
        search_filter=replace(settings.search_filter, enabled=False, query=""),
    )
