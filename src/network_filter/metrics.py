from __future__ import annotations

from prometheus_client import Counter, Histogram

FILTER_CALLS = Counter("network_filter_calls_total", "Number of filter evaluations")
FILTER_LATENCY_SECONDS = Histogram(
    "network_filter_latency_seconds",
    "Latency of a single filter evaluation",
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5),
)
VISIBLE_NODES = Histogram(
    "network_filter_visible_nodes",
    "Number of nodes left visible by a filter evaluation",
    buckets=(0, 10, 50, 100, 250, 500, 1000, 2500, 5000, 10000),
)
