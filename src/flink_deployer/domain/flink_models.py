"""Pydantic models mapped from Flink REST API JSON payloads."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from flink_deployer.domain.jobs import Job, JobStatus
from flink_deployer.domain.savepoints import SavepointPhase, SavepointStatus


class FlinkModel(BaseModel):
    """Base model for Flink REST payloads."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class JobOverview(FlinkModel):
    """One entry of `/jobs/overview`."""

    jid: str = Field(validation_alias=AliasChoices("jid", "id"))
    name: str = ""
    state: str | None = Field(default=None, validation_alias=AliasChoices("state", "status"))

    def to_job(self) -> Job:
        return Job(id=self.jid, name=self.name, status=JobStatus.parse(self.state))


class JobsOverviewResponse(FlinkModel):
    """Response body of `/jobs/overview`."""

    jobs: list[JobOverview] = Field(default_factory=list)


class UploadJarResponse(FlinkModel):
    """Response body of `/jars/upload`."""

    filename: str
    status: str | None = None


class RunJarResponse(FlinkModel):
    """Response body of `/jars/{jarId}/run`."""

    job_id: str | None = Field(default=None, alias="jobid")


class CreateSavepointResponse(FlinkModel):
    """Response body of `/jobs/{jobId}/savepoints`."""

    request_id: str = Field(alias="request-id")


class SavepointQueueStatus(FlinkModel):
    id: str | None = None


class SavepointOperation(FlinkModel):
    location: str | None = None
    failure_cause: Any = Field(default=None, alias="failure-cause")


class SavepointStatusResponse(FlinkModel):
    """Response body of `/jobs/{jobId}/savepoints/{requestId}`."""

    status: SavepointQueueStatus = Field(default_factory=SavepointQueueStatus)
    operation: SavepointOperation | None = None

    def to_status(self) -> SavepointStatus:
        operation = self.operation or SavepointOperation()
        return SavepointStatus(
            phase=SavepointPhase.parse(self.status.id),
            raw_phase=self.status.id,
            location=operation.location or None,
            failure_cause=_failure_cause_text(operation.failure_cause),
        )


def _failure_cause_text(raw: Any) -> str | None:
    """Flatten `failure-cause`, which newer Flink versions send as an object."""

    if raw is None:
        return None
    if isinstance(raw, str):
        return raw.strip() or None
    if isinstance(raw, dict):
        for key in ("stack-trace", "class", "message"):
            value = raw.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return str(raw)


__all__ = [
    "CreateSavepointResponse",
    "JobOverview",
    "JobsOverviewResponse",
    "RunJarResponse",
    "SavepointOperation",
    "SavepointQueueStatus",
    "SavepointStatusResponse",
    "UploadJarResponse",
]
