"""Ports for the Flink control plane and artifact storage."""

from __future__ import annotations

from typing import Protocol

from flink_deployer.domain.flink_models import (
    CreateSavepointResponse,
    RunJarResponse,
    UploadJarResponse,
)
from flink_deployer.domain.jobs import Job
from flink_deployer.domain.savepoints import SavepointStatus


class FlinkApi(Protocol):
    """Control-plane operations consumed by the deploy and update services."""

    def list_jobs(self) -> list[Job]:
        """Return all jobs known to the cluster."""

    def upload_jar(
        self,
        filename: str,
        content: bytes,
        api_token: str | None = None,
    ) -> UploadJarResponse:
        """Upload a program artifact and return its server-side filename."""

    def run_jar(
        self,
        jar_id: str,
        *,
        entry_class: str | None = None,
        parallelism: int | None = None,
        program_args: str | None = None,
        savepoint_path: str | None = None,
        allow_non_restored_state: bool = False,
        api_token: str | None = None,
    ) -> RunJarResponse:
        """Start an uploaded artifact."""

    def create_savepoint(
        self,
        job_id: str,
        target_directory: str | None = None,
    ) -> CreateSavepointResponse:
        """Trigger a savepoint that cancels the job once written."""

    def get_savepoint_status(self, job_id: str, request_id: str) -> SavepointStatus:
        """Return the current status of a triggered savepoint."""

    def cancel_job(self, job_id: str) -> None:
        """Cancel a job without a savepoint."""

    def close(self) -> None:
        """Release connections held by the client."""


class ArtifactSource(Protocol):
    """Read access to program artifacts before upload."""

    def read_artifact(self, path: str) -> bytes:
        """Return the artifact bytes stored at `path`."""


__all__ = ["ArtifactSource", "FlinkApi"]
