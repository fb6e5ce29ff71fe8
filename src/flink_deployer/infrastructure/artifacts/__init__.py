"""Artifact source adapters."""

from flink_deployer.infrastructure.artifacts.local_artifact_source import LocalArtifactSource
from flink_deployer.infrastructure.artifacts.routing_artifact_source import RoutingArtifactSource
from flink_deployer.infrastructure.artifacts.s3_artifact_source import (
    S3ArtifactSource,
    parse_s3_uri,
)

__all__ = ["LocalArtifactSource", "RoutingArtifactSource", "S3ArtifactSource", "parse_s3_uri"]
