from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(slots=True)
class ClusteringConfig:
    default_seed: int
    silhouette_sample_size: int
    kmeans_restarts: int
    convergence_tolerance: float


def load_clustering_config() -> ClusteringConfig:
    return ClusteringConfig(
        default_seed=int(os.getenv("NETWORK_CLUSTERING_DEFAULT_SEED", "42")),
        silhouette_sample_size=int(os.getenv("NETWORK_CLUSTERING_SILHOUETTE_SAMPLE", "500")),
        kmeans_restarts=int(os.getenv("NETWORK_CLUSTERING_KMEANS_RESTARTS", "3")),
        convergence_tolerance=float(os.getenv("NETWORK_CLUSTERING_TOLERANCE", "1e-7")),
    )
