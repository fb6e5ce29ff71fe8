"""Cancel the running job of a name base."""

from __future__ import annotations

import logging

from flink_deployer.application.services.job_selection import select_running_job
from flink_deployer.domain.jobs import Job
from flink_deployer.domain.ports import FlinkApi

logger = logging.getLogger(__name__)


class TerminateService:
    """Cancel the single running job matching a job name base, without savepoint."""

    def __init__(self, flink_api: FlinkApi) -> None:
        self._flink_api = flink_api

    def terminate(self, job_name_base: str) -> Job:
        job = select_running_job(self._flink_api, job_name_base, "terminate")
        logger.info("Cancelling job '%s' (%s).", job.name, job.id)
        self._flink_api.cancel_job(job.id)
        return job


__all__ = ["TerminateService"]
