"""Artifact source that picks a backend from the location scheme."""

from __future__ import annotations

from flink_deployer.domain.ports import ArtifactSource


class RoutingArtifactSource(ArtifactSource):
    """Send `s3://` locations to the S3 source and everything else to the filesystem."""

    def __init__(self, local: ArtifactSource, s3: ArtifactSource) -> None:
        self._local = local
        self._s3 = s3

    def read_artifact(self, path: str) -> bytes:
        if path.strip().lower().startswith("s3://"):
            return self._s3.read_artifact(path.strip())
        return self._local.read_artifact(path)


__all__ = ["RoutingArtifactSource"]
