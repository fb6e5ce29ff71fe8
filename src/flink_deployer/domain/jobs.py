"""Job snapshot types and selection helpers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum


class JobStatus(StrEnum):
    """Job states reported by the Flink job manager."""

    INITIALIZING = "INITIALIZING"
    CREATED = "CREATED"
    RUNNING = "RUNNING"
    FAILING = "FAILING"
    FAILED = "FAILED"
    CANCELLING = "CANCELLING"
    CANCELED = "CANCELED"
    FINISHED = "FINISHED"
    RESTARTING = "RESTARTING"
    SUSPENDED = "SUSPENDED"
    RECONCILING = "RECONCILING"
    UNRECOGNIZED = "UNRECOGNIZED"

    @classmethod
    def parse(cls, raw: str | None) -> JobStatus:
        """Map a raw engine value onto a known state or `UNRECOGNIZED`.

        Values are matched exactly as the job manager sends them.
        """

        if raw is None:
            return cls.UNRECOGNIZED
        try:
            return cls(raw)
        except ValueError:
            return cls.UNRECOGNIZED


@dataclass(slots=True, frozen=True)
class Job:
    """Read-only snapshot of a job on the cluster."""

    id: str
    name: str
    status: JobStatus


def filter_running_jobs_by_name_base(jobs: Iterable[Job], name_base: str) -> list[Job]:
    """Return running jobs whose name starts with `name_base`, in input order."""

    return [
        job
        for job in jobs
        if job.status is JobStatus.RUNNING and job.name.startswith(name_base)
    ]


__all__ = ["Job", "JobStatus", "filter_running_jobs_by_name_base"]
