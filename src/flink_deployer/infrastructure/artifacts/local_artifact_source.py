"""Filesystem artifact source."""

from __future__ import annotations

from pathlib import Path

from flink_deployer.domain.errors import ArtifactReadError
from flink_deployer.domain.ports import ArtifactSource


class LocalArtifactSource(ArtifactSource):
    """Read artifacts from the local filesystem, relative to `base_dir` if given."""

    def __init__(self, base_dir: str | Path | None = None) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else None

    def read_artifact(self, path: str) -> bytes:
        resolved = Path(path).expanduser()
        if self._base_dir is not None and not resolved.is_absolute():
            resolved = self._base_dir / resolved
        try:
            return resolved.read_bytes()
        except OSError as exc:
            raise ArtifactReadError(f"Unable to read artifact '{resolved}': {exc}") from exc


__all__ = ["LocalArtifactSource"]
