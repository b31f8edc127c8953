"""
Exceptions shared by the graph, filter and clustering packages.
"""

from __future__ import annotations


class NetworkAnalysisError(Exception):
    """Base exception for all network analysis errors."""


class ValidationError(NetworkAnalysisError):
    """Raised when a graph is malformed (dangling link endpoint, duplicate node id)."""


class ParameterOutOfRangeError(NetworkAnalysisError):
    """Raised when a clustering parameter falls outside the bounds derived from the graph."""

    def __init__(self, parameter: str, value: object, minimum: float, maximum: float) -> None:
        self.parameter = parameter
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(f"{parameter}={value!r} outside allowed range [{minimum}, {maximum}]")


class InsufficientDataError(NetworkAnalysisError):
    """Raised when the graph is too small for the requested clustering constraints."""


class CancellationError(NetworkAnalysisError):
    """Raised when a clustering run is cancelled by its caller."""


class UnsupportedAlgorithmError(NetworkAnalysisError):
    """Raised when a clustering algorithm name is not registered."""
