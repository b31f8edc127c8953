from __future__ import annotations

from pydantic import Field

from network_graph.wire_models import NetworkClusterValue, WireModel

from . import models


class ClusteringParametersValue(WireModel):
    k: int | None = None
    resolution: float | None = None
    max_iterations: int | None = None
    min_cluster_size: int | None = None
    seed: int | None = None

    @classmethod
    def from_domain(cls, params: models.ClusteringParameters) -> "ClusteringParametersValue":
        return cls(
            k=params.k,
            resolution=params.resolution,
            max_iterations=params.max_iterations,
            min_cluster_size=params.min_cluster_size,
            seed=params.seed,
        )

    def to_domain(self) -> models.ClusteringParameters:
        return models.ClusteringParameters(**self.model_dump())


class ClusteringMetricsValue(WireModel):
    modularity: float
    silhouette_score: float | None = Field(default=None, description="k-means only")
    coverage: float
    performance: float


class ClusteringResultValue(WireModel):
    clusters: list[NetworkClusterValue]
    metrics: ClusteringMetricsValue
    algorithm: str
    parameters: ClusteringParametersValue
    execution_time: float = Field(description="milliseconds")

    @classmethod
    def from_domain(cls, result: models.ClusteringResult) -> "ClusteringResultValue":
        return cls(
            clusters=[NetworkClusterValue.from_domain(cluster) for cluster in result.clusters],
            metrics=ClusteringMetricsValue(
                modularity=result.metrics.modularity,
                silhouette_score=result.metrics.silhouette_score,
                coverage=result.metrics.coverage,
                performance=result.metrics.performance,
            ),
            algorithm=result.algorithm,
            parameters=ClusteringParametersValue.from_domain(result.parameters),
            execution_time=result.execution_time,
        )


class ParameterBoundsValue(WireModel):
    name: str
    minimum: float
    maximum: float
    default: float
    step: float

    @classmethod
    def from_domain(cls, bounds: models.ParameterBounds) -> "ParameterBoundsValue":
        return cls(
            name=bounds.name,
            minimum=bounds.minimum,
            maximum=bounds.maximum,
            default=bounds.default,
            step=bounds.step,
        )
