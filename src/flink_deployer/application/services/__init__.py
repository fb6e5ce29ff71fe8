"""Application services public API."""

from flink_deployer.application.services.backoff_poller import (
    BackoffPoller,
    BackoffPolicy,
    BackoffTimeoutError,
    RetryableOperationError,
)
from flink_deployer.application.services.deploy_service import (
    DeployService,
    extract_jar_id,
    validate_artifact_selection,
)
from flink_deployer.application.services.savepoint_coordinator import SavepointCoordinator
from flink_deployer.application.services.terminate_service import TerminateService
from flink_deployer.application.services.update_service import (
    DEFAULT_SAVEPOINT_WAIT_SECONDS,
    UpdateService,
)

__all__ = [
    "BackoffPoller",
    "BackoffPolicy",
    "BackoffTimeoutError",
    "DEFAULT_SAVEPOINT_WAIT_SECONDS",
    "DeployService",
    "RetryableOperationError",
    "SavepointCoordinator",
    "TerminateService",
    "UpdateService",
    "extract_jar_id",
    "validate_artifact_selection",
]
