from __future__ import annotations

import math

from network_clustering.arena import GraphArena
from network_clustering.cancellation import CancellationToken
from network_clustering.models import ResolvedParameters
from network_clustering.rng import SeededRandom
from network_clustering.strategies import KMeansStrategy, LeidenStrategy, LouvainStrategy, ModularityStrategy
from network_graph.models import NetworkData, NetworkLink, NetworkNode


def _two_triangles() -> GraphArena:
    node_ids = ["a", "b", "c", "d", "e", "f"]
    pairs = [("a", "b"), ("b", "c"), ("a", "c"), ("d", "e"), ("e", "f"), ("d", "f"), ("c", "d")]
    nodes = tuple(NetworkNode(id=node_id, name=node_id, type="keyword", size=1.0, color="") for node_id in node_ids)
    links = tuple(NetworkLink(source=s, target=t, value=1.0, type="keyword_match") for s, t in pairs)
    return GraphArena.from_network(NetworkData(nodes=nodes, links=links))


def _params(**overrides) -> ResolvedParameters:
    values = {"max_iterations": 100, "min_cluster_size": 1, "seed": 11, "k": 2, "resolution": 1.0}
    values.update(overrides)
    return ResolvedParameters(**values)


def _groups(labels: list[int]) -> set[frozenset[int]]:
    grouped: dict[int, set[int]] = {}
    for idx, label in enumerate(labels):
        grouped.setdefault(label, set()).add(idx)
    return {frozenset(members) for members in grouped.values()}


def test_every_strategy_splits_the_bridged_triangles() -> None:
    expected = {frozenset({0, 1, 2}), frozenset({3, 4, 5})}
    for strategy in (LouvainStrategy(), LeidenStrategy(), ModularityStrategy(), KMeansStrategy()):
        labels = strategy.partition(_two_triangles(), _params(), SeededRandom(11), CancellationToken())
        assert len(labels) == 6
        assert _groups(labels) == expected, strategy.name


def test_high_resolution_favours_smaller_communities() -> None:
    arena = _two_triangles()
    coarse = LouvainStrategy().partition(arena, _params(resolution=0.1), SeededRandom(1), CancellationToken())
    fine = LouvainStrategy().partition(arena, _params(resolution=2.0), SeededRandom(1), CancellationToken())
    assert len(set(fine)) >= len(set(coarse))


def test_kmeans_features_are_unit_length() -> None:
    for vector in KMeansStrategy.features(_two_triangles()):
        assert math.isclose(math.sqrt(sum(weight * weight for weight in vector.values())), 1.0)


def test_kmeans_never_exceeds_k_labels() -> None:
    labels = KMeansStrategy(restarts=2).partition(_two_triangles(), _params(k=3), SeededRandom(5), CancellationToken())
    assert len(set(labels)) <= 3


def test_constraints_never_invert() -> None:
    for strategy in (LouvainStrategy(), KMeansStrategy(), ModularityStrategy()):
        for node_count in range(0, 12):
            for bound in strategy.constraints(node_count).values():
                assert bound.minimum <= bound.default <= bound.maximum


def test_seeded_random_is_reproducible() -> None:
    first, second = SeededRandom(99), SeededRandom(99)
    assert [first.next() for _ in range(5)] == [second.next() for _ in range(5)]
    assert first.shuffled(range(10)) == second.shuffled(range(10))
    assert first.seed() == 99
    assert SeededRandom(0).weighted_index([0.0, 0.0, 0.0]) in (0, 1, 2)
    assert SeededRandom(0).weighted_index([0.0, 1.0, 0.0]) == 1
