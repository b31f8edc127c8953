from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .models import NetworkData, NetworkLink


@dataclass(frozen=True, slots=True)
class NetworkStats:
    node_count: int
    link_count: int
    density: float
    avg_degree: float
    max_degree: int


def degree(data: NetworkData, node_id: str) -> int:
    """Undirected degree: links where the node is source or target (self-loops count twice)."""
    count = 0
    for link in data.links:
        if link.source == node_id:
            count += 1
        if link.target == node_id:
            count += 1
    return count


def degree_map(node_ids: Iterable[str], links: Iterable[NetworkLink]) -> dict[str, int]:
    degrees = {node_id: 0 for node_id in node_ids}
    for link in links:
        if link.source in degrees:
            degrees[link.source] += 1
        if link.target in degrees:
            degrees[link.target] += 1
    return degrees


def adjacency(data: NetworkData) -> dict[str, list[str]]:
    neighbors: dict[str, list[str]] = {node.id: [] for node in data.nodes}
    for link in data.links:
        neighbors[link.source].append(link.target)
        if link.source != link.target:
            neighbors[link.target].append(link.source)
    return neighbors


def compute_stats(data: NetworkData) -> NetworkStats:
    node_count = len(data.nodes)
    link_count = len(data.links)

    # possible undirected pairs; guarded so tiny graphs report zero density
    possible = node_count * (node_count - 1) / 2
    density = link_count / possible if node_count >= 2 else 0.0

    # only nodes touching a link contribute, like the statistics panel
    touched = [value for value in degree_map(data.node_ids(), data.links).values() if value > 0]
    avg_degree = sum(touched) / len(touched) if touched else 0.0
    max_degree = max(touched) if touched else 0

    return NetworkStats(
        node_count=node_count,
        link_count=link_count,
        density=density,
        avg_degree=avg_degree,
        max_degree=max_degree,
    )
