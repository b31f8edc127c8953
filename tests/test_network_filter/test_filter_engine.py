from __future__ import annotations

from dataclasses import replace

from network_filter.engine import FilterEngine, category_options, has_active_filters
from network_filter.models import ClusterFilter, FilterSettings, RangeFilter, SearchFilter
from network_filter.settings import set_range, toggle_link_type, toggle_node_type
from network_graph.models import ClusterMetrics, NetworkCluster, NetworkData, NetworkLink, NetworkNode, Point
from network_graph.validation import build_network_data


def sample_network() -> NetworkData:
    """Five users and five posts; sizes 1..10 so exactly one node has size 10."""
    nodes = [
        NetworkNode(id=f"u{i}", name=f"User {i}", type="user", size=float(i + 1), color="#1f77b4")
        for i in range(5)
    ] + [
        NetworkNode(id=f"p{i}", name=f"Post {i}", type="post", size=float(i + 6), color="#ff7f0e")
        for i in range(5)
    ]
    edges = [
        ("u0", "u1", "follows"),
        ("u1", "u2", "follows"),
        ("u2", "u3", "mentions"),
        ("u0", "p0", "replies"),
        ("p0", "p1", "shared_topic"),
        ("p1", "p2", "shared_topic"),
        ("u3", "p3", "retweets"),
        ("p3", "p4", "keyword_match"),
    ]
    links = [
        NetworkLink(source=source, target=target, value=float(idx + 1), type=link_type)
        for idx, (source, target, link_type) in enumerate(edges)
    ]
    return build_network_data(nodes, links)


def make_cluster(cluster_id: str, node_ids: tuple[str, ...]) -> NetworkCluster:
    return NetworkCluster(
        id=cluster_id,
        name=cluster_id,
        node_ids=node_ids,
        color="hsl(0, 70%, 50%)",
        center=Point(0.0, 0.0),
        metrics=ClusterMetrics(density=0.0, centrality_score=0.0, influence=0.0),
    )


def ids(nodes) -> list[str]:
    return [node.id for node in nodes]


def assert_contained(result) -> None:
    visible = set(ids(result.visible_nodes))
    for link in result.visible_links:
        assert link.source in visible and link.target in visible


def test_defaults_show_everything() -> None:
    data = sample_network()
    engine = FilterEngine()
    for settings in (FilterSettings(), engine.reset(data)):
        result = engine.filter(data, settings)
        assert len(result.visible_nodes) == 10
        assert len(result.visible_links) == 8
        assert result.stats.node_count == 10
        assert result.stats.link_count == 8


def test_node_type_filter_keeps_users_and_their_links() -> None:
    data = sample_network()
    engine = FilterEngine()
    settings = toggle_node_type(engine.reset(data), "user")

    result = engine.filter(data, settings)

    assert ids(result.visible_nodes) == ["u0", "u1", "u2", "u3", "u4"]
    assert len(result.visible_links) == 3
    assert_contained(result)


def test_enabled_category_with_no_selection_restricts_nothing() -> None:
    data = sample_network()
    settings = replace(FilterSettings(), node_types=replace(FilterSettings().node_types, enabled=True))
    result = FilterEngine().filter(data, settings)
    assert len(result.visible_nodes) == 10


def test_size_range_matching_a_single_value() -> None:
    data = sample_network()
    engine = FilterEngine()
    settings = set_range(engine.reset(data), "size_filter", 10, 10)
    settings = replace(settings, size_filter=replace(settings.size_filter, enabled=True))

    result = engine.filter(data, settings)

    assert ids(result.visible_nodes) == ["p4"]
    assert result.visible_links == ()


def test_inverted_range_yields_empty_result() -> None:
    data = sample_network()
    settings = replace(FilterSettings(), size_filter=RangeFilter(enabled=True, minimum=8, maximum=2))
    result = FilterEngine().filter(data, settings)
    assert result.visible_nodes == ()
    assert result.visible_links == ()
    assert result.stats.density == 0.0


def test_link_filters_keep_all_nodes() -> None:
    data = sample_network()
    engine = FilterEngine()

    by_type = engine.filter(data, toggle_link_type(FilterSettings(), "shared_topic"))
    assert len(by_type.visible_nodes) == 10
    assert [(link.source, link.target) for link in by_type.visible_links] == [("p0", "p1"), ("p1", "p2")]

    by_value = engine.filter(data, replace(FilterSettings(), value_filter=RangeFilter(enabled=True, minimum=6, maximum=8)))
    assert len(by_value.visible_nodes) == 10
    assert [link.value for link in by_value.visible_links] == [6.0, 7.0, 8.0]


def test_degree_filter_is_a_single_pass() -> None:
    data = sample_network()
    settings = replace(FilterSettings(), degree_filter=RangeFilter(enabled=True, minimum=2, maximum=10))

    result = FilterEngine().filter(data, settings)

    # u4 (0), p2 (1) and p4 (1) go; p1 drops to degree 1 afterwards but stays
    assert ids(result.visible_nodes) == ["u0", "u1", "u2", "u3", "p0", "p1", "p3"]
    assert len(result.visible_links) == 6
    assert_contained(result)


def test_degree_is_measured_on_surviving_links() -> None:
    data = sample_network()
    settings = toggle_link_type(FilterSettings(), "follows")
    settings = replace(settings, degree_filter=RangeFilter(enabled=True, minimum=2, maximum=2))

    result = FilterEngine().filter(data, settings)

    assert ids(result.visible_nodes) == ["u1"]
    assert result.visible_links == ()


def test_search_is_case_insensitive_and_field_scoped() -> None:
    data = sample_network()
    engine = FilterEngine()

    by_name = engine.filter(data, replace(FilterSettings(), search_filter=SearchFilter(enabled=True, query="POST 3")))
    assert ids(by_name.visible_nodes) == ["p3"]

    by_id = engine.filter(
        data,
        replace(FilterSettings(), search_filter=SearchFilter(enabled=True, query="u", fields=("id",))),
    )
    assert ids(by_id.visible_nodes) == ["u0", "u1", "u2", "u3", "u4"]

    unknown_field = engine.filter(
        data,
        replace(FilterSettings(), search_filter=SearchFilter(enabled=True, query="user", fields=("bio",))),
    )
    assert unknown_field.visible_nodes == ()


def test_cluster_filter_unions_selected_clusters() -> None:
    data = sample_network()
    clusters = (make_cluster("c1", ("u0", "u1", "p0")), make_cluster("c2", ("p3", "p4")))
    settings = replace(
        FilterSettings(),
        cluster_filter=ClusterFilter(enabled=True, selected_clusters=("c1", "missing"), clusters=clusters),
    )

    result = FilterEngine().filter(data, settings)

    assert ids(result.visible_nodes) == ["u0", "u1", "p0"]
    assert len(result.visible_links) == 2


def test_filter_is_idempotent_and_contained() -> None:
    data = sample_network()
    engine = FilterEngine()
    settings = toggle_node_type(engine.reset(data), "post")
    settings = replace(settings, value_filter=RangeFilter(enabled=True, minimum=4, maximum=8))

    first = engine.filter(data, settings)
    second = engine.filter(data, settings)

    assert first == second
    assert_contained(first)


def test_narrowing_a_range_never_grows_the_result() -> None:
    data = sample_network()
    engine = FilterEngine()
    previous = None
    for minimum in range(0, 12):
        settings = replace(FilterSettings(), size_filter=RangeFilter(enabled=True, minimum=minimum, maximum=10))
        count = len(engine.filter(data, settings).visible_nodes)
        if previous is not None:
            assert count <= previous
        previous = count
    assert previous == 0


def test_reset_reports_observed_bounds_and_options() -> None:
    data = sample_network()
    settings = FilterEngine().reset(data)

    assert (settings.size_filter.bounds.min, settings.size_filter.bounds.max) == (1.0, 10.0)
    assert (settings.value_filter.bounds.min, settings.value_filter.bounds.max) == (1.0, 8.0)
    assert (settings.degree_filter.bounds.min, settings.degree_filter.bounds.max) == (0, 2)
    assert settings.size_filter.minimum == 1.0 and settings.size_filter.maximum == 10.0
    assert not has_active_filters(settings)

    node_options, link_options = category_options(data)
    assert [(option.type, option.label, option.count) for option in node_options] == [
        ("user", "User", 5),
        ("post", "Post", 5),
    ]
    assert link_options[0].type == "follows"
    assert {option.type: option.count for option in link_options}["shared_topic"] == 2
    assert settings.node_types.available == node_options


def test_reset_of_empty_network() -> None:
    settings = FilterEngine().reset(NetworkData())
    assert settings.node_types.available == ()
    assert settings.size_filter.bounds.min == 0.0
    assert settings.size_filter.bounds.max == 0.0


def test_summary_counts_and_active_flag() -> None:
    data = sample_network()
    engine = FilterEngine()

    idle = engine.summarize(data, engine.reset(data))
    assert (idle.original_node_count, idle.filtered_node_count, idle.active) == (10, 10, False)

    summary = engine.summarize(data, toggle_node_type(engine.reset(data), "user"))
    assert summary.original_link_count == 8
    assert summary.filtered_node_count == 5
    assert summary.filtered_link_count == 3
    assert summary.active
