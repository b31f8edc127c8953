from __future__ import annotations

import logging
import math
import time

from network_graph.errors import (
    CancellationError,
    InsufficientDataError,
    NetworkAnalysisError,
    ParameterOutOfRangeError,
    UnsupportedAlgorithmError,
)
from network_graph.models import NetworkCluster, NetworkData, Point
from network_graph.validation import validate

from . import quality
from .arena import GraphArena
from .cancellation import CancellationToken
from .config import ClusteringConfig, load_clustering_config
from .metrics import CLUSTERING_DURATION_SECONDS, CLUSTERING_RUNS
from .models import (
    ClusteringMetrics,
    ClusteringParameters,
    ClusteringResult,
    ParameterBounds,
    ResolvedParameters,
)
from .rng import SeededRandom
from .strategies import ClusteringStrategy, KMeansStrategy, build_strategies

CENTER_RADIUS = 200.0


class ClusteringEngine:
    """Runs a community-detection strategy and scores the resulting partition.

    The engine keeps no state between calls: parameter bounds are derived from
    the graph passed to each ``run``, randomness comes from a generator seeded
    for that call only, and a cancelled or failed run never yields clusters.

    Communities smaller than ``min_cluster_size`` are dropped rather than
    merged, so they show up as lower coverage.
    """

    def __init__(self, config: ClusteringConfig | None = None) -> None:
        self.config = config or load_clustering_config()
        self.logger = logging.getLogger("network-clustering")
        self._strategies = build_strategies(self.config)

    @property
    def algorithms(self) -> tuple[str, ...]:
        return tuple(self._strategies)

    def strategy(self, algorithm: str) -> ClusteringStrategy:
        try:
            return self._strategies[algorithm]
        except KeyError:
            raise UnsupportedAlgorithmError(f"unknown clustering algorithm {algorithm!r}") from None

    def algorithm_descriptions(self) -> dict[str, str]:
        return {name: strategy.description for name, strategy in self._strategies.items()}

    def parameter_constraints(self, algorithm: str, node_count: int) -> dict[str, ParameterBounds]:
        return self.strategy(algorithm).constraints(node_count)

    @staticmethod
    def _check_type(bounds: ParameterBounds, value: object) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ParameterOutOfRangeError(bounds.name, value, bounds.minimum, bounds.maximum)
        if bounds.integral and isinstance(value, float) and not value.is_integer():
            raise ParameterOutOfRangeError(bounds.name, value, bounds.minimum, bounds.maximum)

    def resolve_parameters(
        self,
        algorithm: str,
        node_count: int,
        params: ClusteringParameters | None = None,
    ) -> ResolvedParameters:
        strategy = self.strategy(algorithm)
        params = params or ClusteringParameters()
        bounds = strategy.constraints(node_count)

        explicit: dict[str, object] = {}
        for name, bound in bounds.items():
            value = getattr(params, name)
            if value is not None:
                self._check_type(bound, value)
                explicit[name] = value
        if params.seed is not None and (isinstance(params.seed, bool) or not isinstance(params.seed, int)):
            raise ParameterOutOfRangeError("seed", params.seed, -math.inf, math.inf)

        values: dict[str, float] = {
            name: explicit.get(name, bound.clamp(bound.default)) for name, bound in bounds.items()
        }

        if node_count == 0:
            raise InsufficientDataError("cannot cluster an empty graph")
        if values["min_cluster_size"] > node_count:
            raise InsufficientDataError(
                f"graph has {node_count} nodes, fewer than min_cluster_size={values['min_cluster_size']}"
            )
        if strategy.uses_k and values["k"] > node_count:
            raise InsufficientDataError(f"graph has {node_count} nodes, fewer than k={values['k']}")

        for name, value in explicit.items():
            bound = bounds[name]
            if not bound.contains(value):
                raise ParameterOutOfRangeError(name, value, bound.minimum, bound.maximum)

        return ResolvedParameters(
            max_iterations=int(values["max_iterations"]),
            min_cluster_size=int(values["min_cluster_size"]),
            seed=params.seed if params.seed is not None else self.config.default_seed,
            k=int(values["k"]) if "k" in values else None,
            resolution=float(values["resolution"]) if "resolution" in values else None,
        )

    @staticmethod
    def _communities(labels: list[int]) -> list[list[int]]:
        grouped: dict[int, list[int]] = {}
        for idx, label in enumerate(labels):
            grouped.setdefault(label, []).append(idx)
        return list(grouped.values())

    @staticmethod
    def _center(position: int, count: int) -> Point:
        if count <= 1:
            return Point(0.0, 0.0)
        angle = 2.0 * math.pi * position / count
        return Point(round(CENTER_RADIUS * math.cos(angle), 6), round(CENTER_RADIUS * math.sin(angle), 6))

    def _build_clusters(self, arena: GraphArena, communities: list[list[int]]) -> tuple[NetworkCluster, ...]:
        degrees = arena.degrees()
        count = len(communities)
        return tuple(
            NetworkCluster(
                id=f"cluster-{position}",
                name=f"Cluster {position + 1}",
                node_ids=tuple(arena.ids[idx] for idx in members),
                color=f"hsl({round(position * 360 / count)}, 70%, 50%)",
                center=self._center(position, count),
                metrics=quality.cluster_metrics(arena, members, degrees),
            )
            for position, members in enumerate(communities)
        )

    def _execute(
        self,
        graph: NetworkData,
        algorithm: str,
        params: ClusteringParameters | None,
        token: CancellationToken,
        started: float,
    ) -> ClusteringResult:
        validate(graph)
        strategy = self.strategy(algorithm)
        resolved = self.resolve_parameters(algorithm, graph.node_count, params)
        token.raise_if_cancelled()

        arena = GraphArena.from_network(graph)
        rng = SeededRandom(resolved.seed)
        labels = strategy.partition(arena, resolved, rng, token)
        token.raise_if_cancelled()

        kept = [members for members in self._communities(labels) if len(members) >= resolved.min_cluster_size]
        kept.sort(key=lambda members: (-len(members), members[0]))

        # excluded nodes are scored as singletons
        assignment = [len(kept) + idx for idx in range(arena.node_count)]
        for position, members in enumerate(kept):
            for idx in members:
                assignment[idx] = position

        modularity = quality.modularity(arena, assignment)
        silhouette = None
        if strategy.distance_based:
            clustered = sorted(idx for members in kept for idx in members)
            silhouette = quality.silhouette_score(
                KMeansStrategy.features(arena),
                assignment,
                clustered,
                rng=rng,
                sample_size=self.config.silhouette_sample_size,
            )
        token.raise_if_cancelled()

        clusters = self._build_clusters(arena, kept)
        metrics = ClusteringMetrics(
            modularity=modularity,
            coverage=quality.coverage([cluster.size for cluster in clusters], arena.node_count),
            performance=quality.performance(modularity),
            silhouette_score=silhouette,
        )
        return ClusteringResult(
            clusters=clusters,
            metrics=metrics,
            algorithm=algorithm,
            parameters=resolved.as_parameters(),
            execution_time=(time.perf_counter() - started) * 1000.0,
        )

    def run(
        self,
        graph: NetworkData,
        algorithm: str,
        params: ClusteringParameters | None = None,
        token: CancellationToken | None = None,
    ) -> ClusteringResult:
        started = time.perf_counter()
        token = token or CancellationToken()
        try:
            result = self._execute(graph, algorithm, params, token, started)
        except CancellationError:
            CLUSTERING_RUNS.labels(algorithm=algorithm, outcome="cancelled").inc()
            self.logger.info("clustering cancelled algorithm=%s nodes=%d", algorithm, graph.node_count)
            raise
        except NetworkAnalysisError as exc:
            CLUSTERING_RUNS.labels(algorithm=algorithm, outcome="failed").inc()
            self.logger.warning("clustering rejected algorithm=%s reason=%s", algorithm, exc)
            raise
        except Exception:
            CLUSTERING_RUNS.labels(algorithm=algorithm, outcome="failed").inc()
            self.logger.exception("clustering failed algorithm=%s", algorithm)
            raise

        CLUSTERING_RUNS.labels(algorithm=algorithm, outcome="completed").inc()
        CLUSTERING_DURATION_SECONDS.labels(algorithm=algorithm).observe(result.execution_time / 1000.0)
        self.logger.info(
            "clustering completed algorithm=%s nodes=%d clusters=%d modularity=%.4f coverage=%.3f elapsed_ms=%.1f",
            algorithm,
            graph.node_count,
            len(result.clusters),
            result.metrics.modularity,
            result.metrics.coverage,
            result.execution_time,
        )
        return result
