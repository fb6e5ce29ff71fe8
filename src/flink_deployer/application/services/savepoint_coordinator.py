"""Savepoint triggering and completion polling."""

from __future__ import annotations

import dataclasses
import logging
import random
import time
from collections.abc import Callable

from flink_deployer.application.services.backoff_poller import (
    BackoffPoller,
    BackoffPolicy,
    BackoffTimeoutError,
    RetryableOperationError,
)
from flink_deployer.domain.errors import DeployValidationError, FlinkApiError, SavepointTimeoutError
from flink_deployer.domain.ports import FlinkApi
from flink_deployer.domain.savepoints import SavepointHandle, SavepointPhase, SavepointStatus

logger = logging.getLogger(__name__)


class SavepointCoordinator:
    """Trigger a cancelling savepoint and wait for the engine to finish it."""

    def __init__(
        self,
        flink_api: FlinkApi,
        backoff_policy: BackoffPolicy | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self._flink_api = flink_api
        self._backoff_policy = backoff_policy or BackoffPolicy()
        self._clock = clock
        self._sleep = sleep
        self._rng = rng

    def request_savepoint(
        self,
        job_id: str,
        target_directory: str | None = None,
    ) -> SavepointHandle:
        """Ask the cluster to write a savepoint of `job_id` and cancel it.

        An empty `target_directory` falls back to the cluster default; the
        client leaves the field out of the request in that case.
        """

        directory = target_directory.strip() if target_directory else None
        response = self._flink_api.create_savepoint(job_id, directory or None)
        logger.info(
            "Savepoint requested for job '%s' (request id '%s').",
            job_id,
            response.request_id,
        )
        return SavepointHandle(job_id=job_id, request_id=response.request_id)

    def await_completion(
        self,
        handle: SavepointHandle,
        max_elapsed_time: float,
    ) -> SavepointStatus:
        """Poll until the savepoint is reported `COMPLETED`.

        The returned status may still carry a failure cause and no location;
        judging that is left to the caller. Raises `SavepointTimeoutError` once
        `max_elapsed_time` seconds have passed without completion.
        """

        if handle.awaited:
            raise DeployValidationError(
                f"savepoint request '{handle.request_id}' for job '{handle.job_id}' "
                "was already awaited"
            )
        handle.awaited = True

        policy = dataclasses.replace(self._backoff_policy, max_elapsed_time=max_elapsed_time)
        poller = BackoffPoller(policy, clock=self._clock, sleep=self._sleep, rng=self._rng)
        try:
            return poller.run(lambda: self._check_status(handle))
        except BackoffTimeoutError as exc:
            raise SavepointTimeoutError(handle.job_id, exc.elapsed_seconds) from exc

    def _check_status(self, handle: SavepointHandle) -> SavepointStatus:
        logger.debug("Checking status of savepoint creation for job '%s'.", handle.job_id)
        try:
            status = self._flink_api.get_savepoint_status(handle.job_id, handle.request_id)
        except FlinkApiError as exc:
            raise RetryableOperationError(
                f'savepoint status check for job "{handle.job_id}" failed: {exc}'
            ) from exc

        if status.phase is SavepointPhase.COMPLETED:
            return status
        if status.phase is SavepointPhase.IN_PROGRESS:
            raise RetryableOperationError(
                f'savepoint creation for job "{handle.job_id}" is still pending'
            )

        # Unknown phases are retried like IN_PROGRESS until the budget runs out.
        logger.warning(
            "Savepoint creation for job '%s' returned an unknown status '%s'.",
            handle.job_id,
            status.raw_phase,
        )
        raise RetryableOperationError(
            f'savepoint creation for job "{handle.job_id}" returned an unknown status '
            f'"{status.raw_phase}"'
        )


__all__ = ["SavepointCoordinator"]
