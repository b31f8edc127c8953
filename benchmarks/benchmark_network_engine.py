from __future__ import annotations

import logging
import random
import time

from network_clustering.config import ClusteringConfig
from network_clustering.engine import ClusteringEngine
from network_clustering.models import ALGORITHMS, ClusteringParameters
from network_filter.engine import FilterEngine
from network_filter.settings import set_enabled, set_range, set_search_query, toggle_node_type
from network_graph.models import LINK_TYPES, NODE_TYPES, NetworkData, NetworkLink, NetworkNode
from network_graph.validation import build_network_data


def make_engine() -> ClusteringEngine:
    cfg = ClusteringConfig(
        default_seed=42,
        silhouette_sample_size=300,
        kmeans_restarts=3,
        convergence_tolerance=1e-7,
    )
    return ClusteringEngine(cfg)


def make_network(node_count: int, groups: int, rng: random.Random) -> NetworkData:
    nodes = [
        NetworkNode(
            id=f"node-{i}",
            name=f"Account {i}",
            type=NODE_TYPES[i % len(NODE_TYPES)],
            size=rng.uniform(1.0, 20.0),
            color="",
        )
        for i in range(node_count)
    ]
    links = []
    for i in range(node_count):
        for _ in range(4):
            # mostly inside the planted group, occasionally across
            if rng.random() < 0.85:
                j = rng.randrange(node_count // groups) * groups + i % groups
            else:
                j = rng.randrange(node_count)
            if j < node_count and j != i:
                links.append(
                    NetworkLink(
                        source=f"node-{i}",
                        target=f"node-{j}",
                        value=rng.uniform(0.0, 10.0),
                        type=rng.choice(LINK_TYPES),
                    )
                )
    return build_network_data(nodes, links)


def bench_filters(data: NetworkData, iterations: int) -> None:
    engine = FilterEngine()
    settings = engine.reset(data)
    settings = toggle_node_type(settings, "user")
    settings = set_enabled(set_range(settings, "value_filter", 2.0, 8.0), "value_filter", True)
    settings = set_enabled(set_range(settings, "degree_filter", 1, 50), "degree_filter", True)
    settings = set_search_query(settings, "1")

    start = time.perf_counter()
    for _ in range(iterations):
        result = engine.filter(data, settings)
    elapsed = time.perf_counter() - start

    print(f"filter_iterations={iterations}")
    print(f"filter_elapsed_sec={elapsed:.4f}")
    print(f"filters_per_second={iterations/elapsed:.2f}")
    print(f"visible_nodes={len(result.visible_nodes)}")
    print(f"visible_links={len(result.visible_links)}")


def bench_clustering(data: NetworkData) -> None:
    engine = make_engine()
    for algorithm in ALGORITHMS:
        params = ClusteringParameters(k=5) if algorithm == "kmeans" else ClusteringParameters()
        result = engine.run(data, algorithm, params)
        print(
            f"algorithm={algorithm} clusters={len(result.clusters)} "
            f"modularity={result.metrics.modularity:.4f} coverage={result.metrics.coverage:.3f} "
            f"elapsed_ms={result.execution_time:.1f}"
        )


def main(node_count: int = 1000, iterations: int = 200) -> None:
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    rng = random.Random(42)
    data = make_network(node_count, groups=5, rng=rng)

    print(f"node_count={data.node_count}")
    print(f"link_count={data.link_count}")
    bench_filters(data, iterations)
    bench_clustering(data)


if __name__ == "__main__":
    main()
