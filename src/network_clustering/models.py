from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from network_graph.models import NetworkCluster

ALGORITHMS: tuple[str, ...] = ("louvain", "leiden", "kmeans", "modularity")


class RunState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def terminal(self) -> bool:
        return self in (RunState.COMPLETED, RunState.FAILED, RunState.CANCELLED)


@dataclass(frozen=True, slots=True)
class ClusteringParameters:
    k: int | None = None
    resolution: float | None = None
    max_iterations: int | None = None
    min_cluster_size: int | None = None
    seed: int | None = None


@dataclass(frozen=True, slots=True)
class ResolvedParameters:
    """Parameters after defaults and graph-derived bounds have been applied."""

    max_iterations: int
    min_cluster_size: int
    seed: int
    k: int | None = None
    resolution: float | None = None

    def as_parameters(self) -> ClusteringParameters:
        return ClusteringParameters(
            k=self.k,
            resolution=self.resolution,
            max_iterations=self.max_iterations,
            min_cluster_size=self.min_cluster_size,
            seed=self.seed,
        )


@dataclass(frozen=True, slots=True)
class ParameterBounds:
    name: str
    minimum: float
    maximum: float
    default: float
    step: float
    integral: bool = True

    def clamp(self, value: float) -> float:
        return min(self.maximum, max(self.minimum, value))

    def contains(self, value: float) -> bool:
        return self.minimum <= value <= self.maximum


@dataclass(frozen=True, slots=True)
class ClusteringMetrics:
    modularity: float
    coverage: float
    performance: float
    silhouette_score: float | None = None


@dataclass(frozen=True, slots=True)
class ClusteringResult:
    clusters: tuple[NetworkCluster, ...]
    metrics: ClusteringMetrics
    algorithm: str
    parameters: ClusteringParameters
    execution_time: float
