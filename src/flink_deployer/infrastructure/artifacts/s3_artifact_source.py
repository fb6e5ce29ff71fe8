"""S3 artifact source."""

from __future__ import annotations

from typing import Any, Protocol, cast
from urllib.parse import urlparse

from flink_deployer.domain.errors import ArtifactReadError
from flink_deployer.domain.ports import ArtifactSource


class S3Client(Protocol):
    """Subset of S3 client operations used by the artifact source."""

    def get_object(self, *, Bucket: str, Key: str) -> dict[str, Any]:
        """Return the object with its streaming body."""


def parse_s3_uri(uri: str) -> tuple[str, str]:
    """Split `s3://bucket/key` into bucket and key."""

    parsed = urlparse(uri)
    if parsed.scheme != "s3":
        raise ArtifactReadError(f"Unsupported artifact location '{uri}', expected s3://bucket/key.")
    bucket = parsed.netloc
    key = parsed.path.lstrip("/")
    if not bucket or not key:
        raise ArtifactReadError(f"Invalid S3 artifact location '{uri}', expected s3://bucket/key.")
    return bucket, key


class S3ArtifactSource(ArtifactSource):
    """Download artifacts stored as S3 objects."""

    def __init__(
        self,
        region: str | None = None,
        endpoint_url: str | None = None,
        client: S3Client | None = None,
    ) -> None:
        self._region = region
        self._endpoint_url = endpoint_url
        self._client = client

    def read_artifact(self, path: str) -> bytes:
        bucket, key = parse_s3_uri(path)
        try:
            response = self._get_client().get_object(Bucket=bucket, Key=key)
            return cast(bytes, response["Body"].read())
        except ArtifactReadError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise ArtifactReadError(f"Unable to read artifact '{path}': {exc}") from exc

    def _get_client(self) -> S3Client:
        if self._client is None:
            self._client = self._build_default_s3_client()
        return self._client

    def _build_default_s3_client(self) -> S3Client:
        """Create a boto3 S3 client lazily to avoid import-time hard dependency."""

        try:
            import boto3  # type: ignore[import-not-found]
        except ModuleNotFoundError as exc:
            raise ArtifactReadError(
                "boto3 is required for S3 artifacts. Install project dependencies first."
            ) from exc

        client = boto3.client("s3", region_name=self._region, endpoint_url=self._endpoint_url)
        return cast(S3Client, client)


__all__ = ["S3ArtifactSource", "parse_s3_uri"]
