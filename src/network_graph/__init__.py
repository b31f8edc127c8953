from .errors import (
    CancellationError,
    InsufficientDataError,
    NetworkAnalysisError,
    ParameterOutOfRangeError,
    UnsupportedAlgorithmError,
    ValidationError,
)
from .models import (
    LINK_TYPES,
    NODE_TYPES,
    ClusterMetrics,
    NetworkCluster,
    NetworkData,
    NetworkLink,
    NetworkNode,
    Point,
)
from .stats import NetworkStats, adjacency, compute_stats, degree, degree_map
from .validation import build_network_data, validate

__all__ = [
    "CancellationError",
    "ClusterMetrics",
    "InsufficientDataError",
    "LINK_TYPES",
    "NODE_TYPES",
    "NetworkAnalysisError",
    "NetworkCluster",
    "NetworkData",
    "NetworkLink",
    "NetworkNode",
    "NetworkStats",
    "ParameterOutOfRangeError",
    "Point",
    "UnsupportedAlgorithmError",
    "ValidationError",
    "adjacency",
    "build_network_data",
    "compute_stats",
    "degree",
    "degree_map",
    "validate",
]
