"""Infrastructure adapters."""

from flink_deployer.infrastructure.artifacts import (
    LocalArtifactSource,
    RoutingArtifactSource,
    S3ArtifactSource,
)
from flink_deployer.infrastructure.flink_api import FlinkApiError, FlinkRestClient

__all__ = [
    "FlinkApiError",
    "FlinkRestClient",
    "LocalArtifactSource",
    "RoutingArtifactSource",
    "S3ArtifactSource",
]
