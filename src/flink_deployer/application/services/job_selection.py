"""Resolve the single running job behind a job name base."""

from __future__ import annotations

import logging

from flink_deployer.domain.errors import (
    AmbiguousJobError,
    DeployValidationError,
    FlinkApiError,
    NoRunningJobError,
)
from flink_deployer.domain.jobs import Job, filter_running_jobs_by_name_base
from flink_deployer.domain.ports import FlinkApi

logger = logging.getLogger(__name__)


def select_running_job(flink_api: FlinkApi, job_name_base: str, action: str) -> Job:
    """Return the only running job whose name starts with `job_name_base`.

    `action` names the calling operation ("update", "terminate") in error
    messages.
    """

    if not job_name_base:
        raise DeployValidationError("unspecified argument 'job_name_base'")

    try:
        jobs = flink_api.list_jobs()
    except FlinkApiError as exc:
        raise FlinkApiError(
            f"retrieving jobs failed: {exc}",
            status_code=exc.status_code,
            body=exc.body,
        ) from exc

    running_jobs = filter_running_jobs_by_name_base(jobs, job_name_base)
    if not running_jobs:
        raise NoRunningJobError(
            f'no instance running for job name base "{job_name_base}". Aborting {action}'
        )
    if len(running_jobs) > 1:
        raise AmbiguousJobError(
            f'job name with base "{job_name_base}" has {len(running_jobs)} instances '
            f"running. Aborting {action}",
            count=len(running_jobs),
        )

    job = running_jobs[0]
    logger.info(
        "Found exactly 1 running job with base name '%s': '%s' (%s).",
        job_name_base,
        job.name,
        job.id,
    )
    return job


__all__ = ["select_running_job"]
