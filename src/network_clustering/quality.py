"""
Partition quality measures.

Math notes:
- Modularity Q = sum_c [ L_c / m - gamma * (d_c / 2m)^2 ] where L_c counts links
  with both endpoints in community c and d_c sums member degrees. Links are
  unweighted; nodes outside every cluster are scored as singletons.
- Silhouette s(i) = (b - a) / max(a, b) with a the mean intra-cluster distance
  and b the lowest mean distance to another cluster; singleton clusters score 0.
- Performance maps modularity from [-1, 1] onto [0, 1].
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from network_graph.models import ClusterMetrics

from .arena import GraphArena
from .rng import SeededRandom

SparseVector = dict[int, float]


def modularity(arena: GraphArena, assignment: Sequence[int], resolution: float = 1.0) -> float:
    m = arena.link_count
    if m == 0:
        return 0.0

    internal: dict[int, float] = {}
    degree_sum: dict[int, float] = {}
    for u, v in arena.edges:
        if assignment[u] == assignment[v]:
            internal[assignment[u]] = internal.get(assignment[u], 0.0) + 1.0
    for idx, value in enumerate(arena.degrees()):
        degree_sum[assignment[idx]] = degree_sum.get(assignment[idx], 0.0) + value

    two_m = 2.0 * m
    return sum(
        internal.get(community, 0.0) / m - resolution * (total / two_m) ** 2
        for community, total in degree_sum.items()
    )


def performance(modularity_value: float) -> float:
    return min(1.0, max(0.0, (modularity_value + 1.0) / 2.0))


def coverage(cluster_sizes: Sequence[int], node_count: int) -> float:
    return sum(cluster_sizes) / node_count if node_count else 0.0


def sparse_distance(left: SparseVector, right: SparseVector) -> float:
    keys = set(left) | set(right)
    return math.sqrt(sum((left.get(key, 0.0) - right.get(key, 0.0)) ** 2 for key in keys))


def silhouette_score(
    vectors: Sequence[SparseVector],
    labels: Sequence[int],
    members: Sequence[int],
    rng: SeededRandom | None = None,
    sample_size: int = 0,
) -> float:
    """Mean silhouette over ``members`` (node indices), optionally on a seeded sample."""
    clusters: dict[int, list[int]] = {}
    for idx in members:
        clusters.setdefault(labels[idx], []).append(idx)
    if len(clusters) < 2:
        return 0.0

    population = list(members)
    if rng is not None and 0 < sample_size < len(population):
        population = sorted(rng.sample(population, sample_size))
        clusters = {}
        for idx in population:
            clusters.setdefault(labels[idx], []).append(idx)
        if len(clusters) < 2:
            return 0.0

    scores: list[float] = []
    for idx in population:
        own = labels[idx]
        if len(clusters[own]) < 2:
            scores.append(0.0)
            continue
        a = sum(sparse_distance(vectors[idx], vectors[j]) for j in clusters[own] if j != idx) / (len(clusters[own]) - 1)
        b = min(
            sum(sparse_distance(vectors[idx], vectors[j]) for j in group) / len(group)
            for label, group in clusters.items()
            if label != own
        )
        denom = max(a, b)
        scores.append((b - a) / denom if denom > 0 else 0.0)
    return sum(scores) / len(scores)


def cluster_metrics(arena: GraphArena, member_indices: Sequence[int], degrees: Sequence[int]) -> ClusterMetrics:
    members = set(member_indices)
    size = len(members)

    internal = sum(1 for u, v in arena.edges if u in members and v in members)
    pairs = size * (size - 1) / 2
    density = internal / pairs if pairs else 0.0

    denom = arena.node_count - 1
    centrality = (
        sum(degrees[idx] / denom for idx in member_indices) / size if size and denom > 0 else 0.0
    )

    total_size = sum(arena.sizes)
    influence = sum(arena.sizes[idx] for idx in member_indices) / total_size if total_size > 0 else 0.0

    return ClusterMetrics(density=density, centrality_score=centrality, influence=influence)
