from __future__ import annotations

import pytest

from network_graph.errors import ValidationError
from network_graph.models import NetworkData, NetworkLink, NetworkNode
from network_graph.validation import build_network_data, validate


def make_node(node_id: str, node_type: str = "user", size: float = 1.0) -> NetworkNode:
    return NetworkNode(id=node_id, name=node_id.upper(), type=node_type, size=size, color="#3366cc")


def make_link(source: str, target: str, value: float = 1.0, link_type: str = "follows") -> NetworkLink:
    return NetworkLink(source=source, target=target, value=value, type=link_type)


def test_valid_graph_is_returned_unchanged() -> None:
    data = NetworkData(
        nodes=(make_node("a"), make_node("b", "post")),
        links=(make_link("a", "b"),),
    )
    assert validate(data) is data


def test_dangling_link_endpoint_is_rejected() -> None:
    data = NetworkData(nodes=(make_node("a"),), links=(make_link("a", "ghost"),))
    with pytest.raises(ValidationError, match="ghost"):
        validate(data)


def test_duplicate_node_id_is_rejected() -> None:
    data = NetworkData(nodes=(make_node("a"), make_node("a", "post")))
    with pytest.raises(ValidationError, match="duplicate"):
        validate(data)


def test_unknown_types_and_negative_weights_are_rejected() -> None:
    with pytest.raises(ValidationError):
        validate(NetworkData(nodes=(make_node("a", "planet"),)))
    with pytest.raises(ValidationError):
        validate(NetworkData(nodes=(make_node("a", size=-1.0),)))
    with pytest.raises(ValidationError):
        validate(NetworkData(nodes=(make_node("a"), make_node("b")), links=(make_link("a", "b", link_type="likes"),)))
    with pytest.raises(ValidationError):
        validate(NetworkData(nodes=(make_node("a"), make_node("b")), links=(make_link("a", "b", value=-0.5),)))


def test_build_network_data_normalises_to_tuples() -> None:
    data = build_network_data([make_node("a"), make_node("b")], [make_link("a", "b")])
    assert isinstance(data.nodes, tuple)
    assert isinstance(data.links, tuple)
    assert data.node_index()["b"].name == "B"


def test_nodes_are_hashable_despite_attribute_map() -> None:
    node = NetworkNode(id="a", name="A", type="user", size=1.0, color="#fff", data={"followers": 10})
    assert {node, node} == {node}
