from __future__ import annotations

from network_clustering.config import ClusteringConfig
from network_clustering.engine import ClusteringEngine
from network_clustering.models import ClusteringParameters
from network_clustering.wire_models import ClusteringParametersValue, ClusteringResultValue, ParameterBoundsValue
from network_graph.models import NetworkData, NetworkLink, NetworkNode


def _engine() -> ClusteringEngine:
    return ClusteringEngine(
        ClusteringConfig(default_seed=3, silhouette_sample_size=500, kmeans_restarts=1, convergence_tolerance=1e-7)
    )


def _graph() -> NetworkData:
    nodes = tuple(NetworkNode(id=f"k{i}", name=f"kw{i}", type="keyword", size=2.0, color="") for i in range(8))
    pairs = [(0, 1), (1, 2), (0, 2), (2, 3), (0, 3), (4, 5), (5, 6), (4, 6), (6, 7), (4, 7), (3, 4)]
    links = tuple(NetworkLink(source=f"k{s}", target=f"k{t}", value=1.0, type="keyword_match") for s, t in pairs)
    return NetworkData(nodes=nodes, links=links)


def test_silhouette_is_omitted_for_graph_strategies() -> None:
    wire = ClusteringResultValue.from_domain(_engine().run(_graph(), "louvain")).to_wire()
    assert "silhouetteScore" not in wire["metrics"]
    assert "executionTime" in wire
    assert wire["parameters"]["maxIterations"] == 100
    assert "k" not in wire["parameters"]


def test_silhouette_is_present_for_kmeans() -> None:
    wire = ClusteringResultValue.from_domain(_engine().run(_graph(), "kmeans", ClusteringParameters(k=2))).to_wire()
    assert "silhouetteScore" in wire["metrics"]
    assert wire["parameters"]["k"] == 2
    assert wire["parameters"]["seed"] == 3


def test_parameters_accept_camel_case() -> None:
    params = ClusteringParametersValue.model_validate({"minClusterSize": 2, "maxIterations": 20}).to_domain()
    assert params == ClusteringParameters(min_cluster_size=2, max_iterations=20)


def test_parameter_bounds_wire_shape() -> None:
    bounds = _engine().parameter_constraints("kmeans", 8)["k"]
    assert ParameterBoundsValue.from_domain(bounds).to_wire() == {
        "name": "k",
        "minimum": 2,
        "maximum": 2,
        "default": 2,
        "step": 1,
    }
