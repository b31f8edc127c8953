from __future__ import annotations

from network_graph.models import NetworkData, NetworkLink, NetworkNode
from network_graph.stats import adjacency, compute_stats, degree, degree_map
from network_graph.validation import build_network_data


def sample_network() -> NetworkData:
    nodes = [
        NetworkNode(id=name, name=name, type="topic", size=1.0, color="#999")
        for name in ("a", "b", "c", "d")
    ]
    links = [
        NetworkLink(source="a", target="b", value=1.0, type="shared_topic"),
        NetworkLink(source="b", target="c", value=1.0, type="shared_topic"),
        NetworkLink(source="a", target="c", value=1.0, type="shared_topic"),
    ]
    return build_network_data(nodes, links)


def test_degree_counts_both_directions() -> None:
    data = sample_network()
    assert degree(data, "a") == 2
    assert degree(data, "d") == 0
    assert degree(data, "missing") == 0


def test_self_loop_counts_twice() -> None:
    data = build_network_data(
        [NetworkNode(id="a", name="a", type="user", size=1.0, color="")],
        [NetworkLink(source="a", target="a", value=1.0, type="mentions")],
    )
    assert degree(data, "a") == 2
    assert adjacency(data) == {"a": ["a"]}


def test_degree_map_includes_isolated_nodes() -> None:
    data = sample_network()
    assert degree_map(data.node_ids(), data.links) == {"a": 2, "b": 2, "c": 2, "d": 0}


def test_compute_stats() -> None:
    stats = compute_stats(sample_network())
    assert stats.node_count == 4
    assert stats.link_count == 3
    assert abs(stats.density - 3 / 6) < 1e-12
    # isolated node d does not drag the average down
    assert stats.avg_degree == 2.0
    assert stats.max_degree == 2


def test_compute_stats_never_divides_by_zero() -> None:
    empty = compute_stats(NetworkData())
    assert empty.density == 0.0
    assert empty.avg_degree == 0.0
    assert empty.max_degree == 0

    single = compute_stats(build_network_data([NetworkNode(id="a", name="a", type="user", size=0, color="")], []))
    assert single.node_count == 1
    assert single.density == 0.0
