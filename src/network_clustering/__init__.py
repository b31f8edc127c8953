from .cancellation import CancellationToken
from .engine import ClusteringEngine
from .models import (
    ALGORITHMS,
    ClusteringMetrics,
    ClusteringParameters,
    ClusteringResult,
    ParameterBounds,
    ResolvedParameters,
    RunState,
)
from .rng import SeededRandom
from .service import ClusteringRun, ClusteringService

__all__ = [
    "ALGORITHMS",
    "CancellationToken",
    "ClusteringEngine",
    "ClusteringMetrics",
    "ClusteringParameters",
    "ClusteringResult",
    "ClusteringRun",
    "ClusteringService",
    "ParameterBounds",
    "ResolvedParameters",
    "RunState",
    "SeededRandom",
]
