from __future__ import annotations

import math

from .arena import GraphArena
from .cancellation import CancellationToken
from .config import ClusteringConfig
from .models import ParameterBounds, ResolvedParameters
from .quality import SparseVector
from .rng import SeededRandom

K_MIN = 2
K_MAX = 20
RESOLUTION_MIN = 0.1
RESOLUTION_MAX = 2.0
ITERATIONS_MIN = 10
ITERATIONS_MAX = 1000
EPS = 1e-12


def _renumber(labels: list[int]) -> tuple[list[int], int]:
    # dense ids in order of first appearance
    mapping: dict[int, int] = {}
    out = []
    for label in labels:
        if label not in mapping:
            mapping[label] = len(mapping)
        out.append(mapping[label])
    return out, len(mapping)


class _Level:
    """Weighted graph for one level of a multi-level optimisation.

    ``adj[i][j]`` is the link weight between level nodes i and j; internal
    weight sits on the diagonal counted twice, so row sums are degrees.
    """

    __slots__ = ("adj", "degrees", "m2")

    def __init__(self, adj: list[dict[int, float]]) -> None:
        self.adj = adj
        self.degrees = [sum(row.values()) for row in adj]
        self.m2 = sum(self.degrees)

    @property
    def size(self) -> int:
        return len(self.adj)

    def aggregate(self, groups: list[int], count: int) -> "_Level":
        adj: list[dict[int, float]] = [{} for _ in range(count)]
        for i, row in enumerate(self.adj):
            target = adj[groups[i]]
            for j, weight in row.items():
                gj = groups[j]
                target[gj] = target.get(gj, 0.0) + weight
        return _Level(adj)

    def split_disconnected(self, communities: list[int]) -> list[int]:
        labels = [-1] * self.size
        next_label = 0
        for start in range(self.size):
            if labels[start] != -1:
                continue
            labels[start] = next_label
            stack = [start]
            while stack:
                i = stack.pop()
                for j, weight in self.adj[i].items():
                    if labels[j] == -1 and weight > 0 and communities[j] == communities[start]:
                        labels[j] = next_label
                        stack.append(j)
            next_label += 1
        return labels


def _local_moving(
    level: _Level,
    resolution: float,
    rng: SeededRandom,
    token: CancellationToken,
    initial: list[int] | None,
    budget: int,
    spent: int = 0,
    total: int = 0,
) -> tuple[list[int], int, int]:
    """Move single nodes to the neighbouring community with the best modularity gain.

    Gain of inserting node i into community C, up to a constant factor:
    k_i,in(C) - resolution * tot(C) * k_i / 2m. Returns (communities, moves, sweeps).
    Progress is reported as ``spent + sweeps`` out of ``total`` sweeps.
    """
    community = list(initial) if initial is not None else list(range(level.size))
    if level.m2 == 0:
        return community, 0, 1

    totals: dict[int, float] = {}
    for idx, label in enumerate(community):
        totals[label] = totals.get(label, 0.0) + level.degrees[idx]

    order = list(range(level.size))
    moves = 0
    sweeps = 0
    while sweeps < budget:
        token.raise_if_cancelled()
        sweeps += 1
        rng.shuffle(order)
        moved = 0
        for i in order:
            current = community[i]
            k_i = level.degrees[i]
            links_to: dict[int, float] = {}
            for j, weight in level.adj[i].items():
                if j != i:
                    links_to[community[j]] = links_to.get(community[j], 0.0) + weight

            totals[current] -= k_i
            best = current
            best_gain = links_to.get(current, 0.0) - resolution * totals[current] * k_i / level.m2
            for label, weight in links_to.items():
                gain = weight - resolution * totals[label] * k_i / level.m2
                if gain > best_gain + EPS:
                    best, best_gain = label, gain
            totals[best] = totals.get(best, 0.0) + k_i
            if best != current:
                community[i] = best
                moved += 1
        moves += moved
        token.report_progress(spent + sweeps, total)
        if not moved:
            break
    return community, moves, sweeps


class ClusteringStrategy:
    """Contract every community-detection strategy satisfies.

    ``partition`` returns one community label per arena node. All randomness
    must come from ``rng`` and ``token`` must be checked between iterations.
    """

    name = ""
    description = ""
    distance_based = False
    uses_k = False
    uses_resolution = False
    default_max_iterations = 100
    default_min_cluster_size = 3
    min_cluster_size_floor = 2

    def constraints(self, node_count: int) -> dict[str, ParameterBounds]:
        bounds: dict[str, ParameterBounds] = {}
        if self.uses_k:
            k_max = max(K_MIN, min(K_MAX, node_count // 3))
            bounds["k"] = ParameterBounds("k", K_MIN, k_max, min(4, k_max), 1)
        if self.uses_resolution:
            bounds["resolution"] = ParameterBounds(
                "resolution", RESOLUTION_MIN, RESOLUTION_MAX, 1.0, 0.1, integral=False
            )
        bounds["max_iterations"] = ParameterBounds(
            "max_iterations", ITERATIONS_MIN, ITERATIONS_MAX, self.default_max_iterations, 10
        )
        floor = self.min_cluster_size_floor
        size_max = max(floor, node_count // 4)
        bounds["min_cluster_size"] = ParameterBounds(
            "min_cluster_size", floor, size_max, min(self.default_min_cluster_size, size_max), 1
        )
        return bounds

    def partition(
        self,
        arena: GraphArena,
        params: ResolvedParameters,
        rng: SeededRandom,
        token: CancellationToken,
    ) -> list[int]:
        raise NotImplementedError


class LouvainStrategy(ClusteringStrategy):
    name = "louvain"
    description = "Louvain method optimizes modularity to find communities. Good for large networks."
    uses_resolution = True

    refine = False

    def partition(self, arena, params, rng, token):
        level = _Level(arena.weighted_adjacency())
        membership = list(range(arena.node_count))
        initial: list[int] | None = None
        budget = params.max_iterations
        resolution = params.resolution if params.resolution is not None else 1.0

        while True:
            communities, moves, sweeps = _local_moving(
                level, resolution, rng, token, initial, budget, params.max_iterations - budget, params.max_iterations
            )
            budget -= max(1, sweeps)
            groups, count = _renumber(level.split_disconnected(communities) if self.refine else communities)

            if moves == 0 or count == level.size or budget <= 0:
                final, _ = _renumber(groups if self.refine else communities)
                token.report_progress(1, 1)
                return [final[node] for node in membership]

            membership = [groups[node] for node in membership]
            if self.refine:
                # aggregated nodes start inside the community they were refined from
                parents = [0] * count
                for idx, group in enumerate(groups):
                    parents[group] = communities[idx]
                initial, _ = _renumber(parents)
            level = level.aggregate(groups, count)


class LeidenStrategy(LouvainStrategy):
    name = "leiden"
    description = "Leiden algorithm improves upon Louvain with better quality guarantees."

    refine = True


class ModularityStrategy(ClusteringStrategy):
    name = "modularity"
    description = "Direct modularity optimization finds optimal community structure."
    default_max_iterations = 50

    def partition(self, arena, params, rng, token):
        level = _Level(arena.weighted_adjacency())
        membership = list(range(arena.node_count))
        if level.m2 == 0:
            return membership

        for iteration in range(params.max_iterations):
            token.raise_if_cancelled()
            m2 = level.m2
            candidates: list[tuple[float, float, int, int]] = []
            for c, row in enumerate(level.adj):
                for d, weight in row.items():
                    if d <= c:
                        continue
                    # merge gain dQ = 2 * (e_cd - a_c * a_d)
                    gain = 2.0 * (weight / m2 - (level.degrees[c] / m2) * (level.degrees[d] / m2))
                    if gain > EPS:
                        candidates.append((gain, rng.next(), c, d))
            if not candidates:
                token.report_progress(1, 1)
                break

            # merge only pairs that are each other's best offer; the top pair always is
            candidates.sort(key=lambda item: (-item[0], item[1]))
            merged = list(range(level.size))
            offered: set[int] = set()
            for _gain, _tiebreak, c, d in candidates:
                if c not in offered and d not in offered:
                    merged[d] = c
                offered.update((c, d))

            groups, count = _renumber(merged)
            membership = [groups[node] for node in membership]
            level = level.aggregate(groups, count)
            token.report_progress(iteration + 1, params.max_iterations)

        return _renumber(membership)[0]


class KMeansStrategy(ClusteringStrategy):
    name = "kmeans"
    description = "K-means clustering groups nodes based on structural similarity."
    distance_based = True
    uses_k = True
    default_min_cluster_size = 2
    min_cluster_size_floor = 1

    def __init__(self, restarts: int = 3, tolerance: float = 1e-7) -> None:
        self.restarts = max(1, restarts)
        self.tolerance = tolerance

    @staticmethod
    def features(arena: GraphArena) -> list[SparseVector]:
        """Unit-length adjacency profile of every node, including itself."""
        vectors: list[SparseVector] = []
        for idx, row in enumerate(arena.weighted_adjacency()):
            vec = dict(row)
            vec[idx] = vec.get(idx, 0.0) + 1.0
            norm = math.sqrt(sum(weight * weight for weight in vec.values()))
            vectors.append({key: weight / norm for key, weight in vec.items()})
        return vectors

    @staticmethod
    def _sq_distance(vec: SparseVector, centroid: SparseVector, centroid_norm: float) -> float:
        # |x|^2 == 1 for every feature vector
        dot = sum(weight * centroid.get(key, 0.0) for key, weight in vec.items())
        return max(0.0, 1.0 + centroid_norm - 2.0 * dot)

    @staticmethod
    def _norm(centroid: SparseVector) -> float:
        return sum(weight * weight for weight in centroid.values())

    def _seed_centroids(self, vectors: list[SparseVector], k: int, rng: SeededRandom) -> list[SparseVector]:
        # k-means++ seeding
        centroids = [dict(vectors[rng.randrange(len(vectors))])]
        norm = self._norm(centroids[0])
        nearest = [self._sq_distance(vec, centroids[0], norm) for vec in vectors]
        while len(centroids) < k:
            chosen = dict(vectors[rng.weighted_index(nearest)])
            norm = self._norm(chosen)
            centroids.append(chosen)
            nearest = [min(d, self._sq_distance(vec, chosen, norm)) for d, vec in zip(nearest, vectors)]
        return centroids

    def _lloyd(
        self,
        vectors: list[SparseVector],
        k: int,
        max_iterations: int,
        rng: SeededRandom,
        token: CancellationToken,
        spent: int = 0,
        total: int = 0,
    ) -> tuple[list[int], float]:
        centroids = self._seed_centroids(vectors, k, rng)
        labels = [-1] * len(vectors)
        inertia = math.inf

        for iteration in range(max_iterations):
            token.raise_if_cancelled()
            token.report_progress(spent + iteration, total)
            norms = [self._norm(centroid) for centroid in centroids]
            changed = 0
            inertia = 0.0
            for idx, vec in enumerate(vectors):
                best, best_dist = 0, math.inf
                for c_idx, centroid in enumerate(centroids):
                    dist = self._sq_distance(vec, centroid, norms[c_idx])
                    if dist < best_dist - self.tolerance:
                        best, best_dist = c_idx, dist
                inertia += best_dist
                if labels[idx] != best:
                    labels[idx] = best
                    changed += 1
            if not changed:
                break

            sums: list[SparseVector] = [{} for _ in centroids]
            counts = [0] * len(centroids)
            for idx, vec in enumerate(vectors):
                target = sums[labels[idx]]
                counts[labels[idx]] += 1
                for key, weight in vec.items():
                    target[key] = target.get(key, 0.0) + weight
            for c_idx, summed in enumerate(sums):
                # an empty cluster keeps its previous centroid
                if counts[c_idx]:
                    centroids[c_idx] = {key: weight / counts[c_idx] for key, weight in summed.items()}

        return labels, inertia

    def partition(self, arena, params, rng, token):
        vectors = self.features(arena)
        k = min(params.k or K_MIN, arena.node_count)
        best_labels: list[int] = []
        best_inertia = math.inf
        total = self.restarts * params.max_iterations
        for restart in range(self.restarts):
            spent = restart * params.max_iterations
            labels, inertia = self._lloyd(vectors, k, params.max_iterations, rng, token, spent, total)
            token.report_progress(spent + params.max_iterations, total)
            if inertia < best_inertia - self.tolerance:
                best_labels, best_inertia = labels, inertia
        return best_labels


def build_strategies(config: ClusteringConfig) -> dict[str, ClusteringStrategy]:
    strategies: list[ClusteringStrategy] = [
        LouvainStrategy(),
        LeidenStrategy(),
        KMeansStrategy(restarts=config.kmeans_restarts, tolerance=config.convergence_tolerance),
        ModularityStrategy(),
    ]
    return {strategy.name: strategy for strategy in strategies}
