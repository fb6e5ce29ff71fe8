"""Zero-downtime job update use-case service."""

from __future__ import annotations

import logging

from flink_deployer.application.services.deploy_service import (
    DeployService,
    validate_artifact_selection,
)
from flink_deployer.application.services.job_selection import select_running_job
from flink_deployer.application.services.savepoint_coordinator import SavepointCoordinator
from flink_deployer.domain.errors import (
    DeployerError,
    FlinkApiError,
    SavepointError,
)
from flink_deployer.domain.operation_models import UpdateRequest, UpdateResult
from flink_deployer.domain.ports import FlinkApi

logger = logging.getLogger(__name__)

DEFAULT_SAVEPOINT_WAIT_SECONDS = 60.0


class UpdateService:
    """Replace a running job with a new artifact restored from its savepoint.

    The sequence is: resolve the single running job for the name base,
    trigger a cancelling savepoint, wait for it, then deploy the new artifact
    from the savepoint location. Any failing step aborts the update. There is
    no rollback: once the savepoint has been requested the old job is being
    cancelled, and a failed deploy leaves the cluster without a running
    instance. The savepoint path is logged so the operator can redeploy
    from it by hand.
    """

    def __init__(
        self,
        flink_api: FlinkApi,
        savepoint_coordinator: SavepointCoordinator,
        deploy_service: DeployService,
        *,
        savepoint_wait_seconds: float = DEFAULT_SAVEPOINT_WAIT_SECONDS,
    ) -> None:
        self._flink_api = flink_api
        self._savepoint_coordinator = savepoint_coordinator
        self._deploy_service = deploy_service
        self._savepoint_wait_seconds = savepoint_wait_seconds

    def update(self, request: UpdateRequest) -> UpdateResult:
        """Run one update; raises a `DeployerError` subclass on any failure."""

        validate_artifact_selection(request.local_filename, request.remote_filename)

        logger.info("Starting job update for base name '%s'.", request.job_name_base)
        job = select_running_job(self._flink_api, request.job_name_base, "update")

        logger.info("Creating savepoint for job '%s'.", job.id)
        try:
            handle = self._savepoint_coordinator.request_savepoint(
                job.id,
                request.savepoint_dir,
            )
        except FlinkApiError as exc:
            raise SavepointError(
                f"failed to create savepoint for job {job.id} due to error: {exc}"
            ) from exc
        logger.warning(
            "Job '%s' is being cancelled as part of the savepoint; "
            "it will not be restarted automatically if the update fails.",
            job.id,
        )

        status = self._savepoint_coordinator.await_completion(
            handle,
            self._savepoint_wait_seconds,
        )
        if not status.location:
            if status.failure_cause:
                logger.error(
                    "Savepoint for job '%s' completed without a location: %s",
                    job.id,
                    status.failure_cause,
                )
            raise SavepointError("savepoint creation failed")
        logger.info("Created savepoint '%s'.", status.location)

        try:
            deploy_result = self._deploy_service.deploy(
                request.to_deploy_request(status.location)
            )
        except DeployerError:
            logger.error(
                "Deploy failed after job '%s' was cancelled. Redeploy manually "
                "from savepoint '%s'.",
                job.id,
                status.location,
            )
            raise

        return UpdateResult(
            previous_job_id=job.id,
            savepoint_path=status.location,
            deploy=deploy_result,
        )


__all__ = ["DEFAULT_SAVEPOINT_WAIT_SECONDS", "UpdateService"]
