"""Pydantic models for deploy, update and terminate requests and results."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from flink_deployer.domain.jobs import Job, JobStatus


class DeployerModel(BaseModel):
    """Base model for operation requests and results."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class DeployRequest(DeployerModel):
    """Start a program artifact, optionally restoring from a savepoint.

    Exactly one of `local_filename` and `remote_filename` must be set. The
    check lives in the deploy service so that it runs before any network call
    regardless of how the request was built.
    """

    local_filename: str | None = Field(default=None, alias="localFilename")
    remote_filename: str | None = Field(default=None, alias="remoteFilename")
    entry_class: str | None = Field(default=None, alias="entryClass")
    parallelism: int | None = None
    program_args: str | None = Field(default=None, alias="programArgs")
    savepoint_path: str | None = Field(default=None, alias="savepointPath")
    allow_non_restored_state: bool = Field(default=False, alias="allowNonRestoredState")
    api_token: str | None = Field(default=None, alias="apiToken")


class UpdateRequest(DeployerModel):
    """Replace the running job of a name base with a new artifact."""

    job_name_base: str = Field(default="", alias="jobNameBase")
    local_filename: str | None = Field(default=None, alias="localFilename")
    remote_filename: str | None = Field(default=None, alias="remoteFilename")
    entry_class: str | None = Field(default=None, alias="entryClass")
    parallelism: int | None = None
    program_args: str | None = Field(default=None, alias="programArgs")
    savepoint_dir: str | None = Field(default=None, alias="savepointDir")
    allow_non_restored_state: bool = Field(default=False, alias="allowNonRestoredState")
    api_token: str | None = Field(default=None, alias="apiToken")

    def to_deploy_request(self, savepoint_path: str) -> DeployRequest:
        """Carry the pass-through fields over to a deploy request."""

        return DeployRequest(
            local_filename=self.local_filename,
            remote_filename=self.remote_filename,
            entry_class=self.entry_class,
            parallelism=self.parallelism,
            program_args=self.program_args,
            savepoint_path=savepoint_path,
            allow_non_restored_state=self.allow_non_restored_state,
            api_token=self.api_token,
        )


class TerminateRequest(DeployerModel):
    """Cancel the running job of a name base."""

    job_name_base: str = Field(default="", alias="jobNameBase")


class DeployResult(DeployerModel):
    """Outcome of a successful deploy."""

    jar_id: str = Field(alias="jarId")
    job_id: str | None = Field(default=None, alias="jobId")


class UpdateResult(DeployerModel):
    """Outcome of a successful update."""

    previous_job_id: str = Field(alias="previousJobId")
    savepoint_path: str = Field(alias="savepointPath")
    deploy: DeployResult


class JobSummary(DeployerModel):
    """Job entry returned by job listings."""

    id: str
    name: str
    status: JobStatus

    @classmethod
    def from_job(cls, job: Job) -> JobSummary:
        return cls(id=job.id, name=job.name, status=job.status)


class JobListResponse(DeployerModel):
    """Jobs currently known to the cluster."""

    jobs: list[JobSummary] = Field(default_factory=list)


__all__ = [
    "DeployRequest",
    "DeployResult",
    "DeployerModel",
    "JobListResponse",
    "JobSummary",
    "TerminateRequest",
    "UpdateRequest",
    "UpdateResult",
]
