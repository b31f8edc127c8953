from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

CLUSTERING_RUNS = Counter(
    "network_clustering_runs_total",
    "Clustering runs by algorithm and terminal state",
    ["algorithm", "outcome"],
)
CLUSTERING_DURATION_SECONDS = Histogram(
    "network_clustering_duration_seconds",
    "Wall-clock duration of completed clustering runs",
    ["algorithm"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30),
)
CLUSTERING_RUNS_IN_FLIGHT = Gauge(
    "network_clustering_runs_in_flight",
    "Clustering runs currently executing in worker threads",
)
