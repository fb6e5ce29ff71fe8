"""Domain exceptions for deploy and update operations."""


class DeployerError(Exception):
    """Base class for deployer errors."""


class DeployValidationError(DeployerError):
    """Raised when a request is incomplete or contradictory."""


class JobSelectionError(DeployerError):
    """Raised when the running job for a name base cannot be resolved."""


class NoRunningJobError(JobSelectionError):
    """Raised when no running job matches the job name base."""


class AmbiguousJobError(JobSelectionError):
    """Raised when more than one running job matches the job name base."""

    def __init__(self, message: str, count: int) -> None:
        super().__init__(message)
        self.count = count


class SavepointError(DeployerError):
    """Raised when a savepoint cannot be created or has no usable location."""


class SavepointTimeoutError(SavepointError):
    """Raised when a savepoint does not complete within the wait budget."""

    def __init__(self, job_id: str, elapsed_seconds: float) -> None:
        super().__init__(
            f'failed to create savepoint for job "{job_id}" within {elapsed_seconds:g} seconds'
        )
        self.job_id = job_id
        self.elapsed_seconds = elapsed_seconds


class ArtifactReadError(DeployerError):
    """Raised when a program artifact cannot be read."""


class FlinkApiError(DeployerError):
    """Raised when a Flink REST call fails or returns an unexpected response."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


__all__ = [
    "AmbiguousJobError",
    "ArtifactReadError",
    "DeployValidationError",
    "FlinkApiError",
    "DeployerError",
    "JobSelectionError",
    "NoRunningJobError",
    "SavepointError",
    "SavepointTimeoutError",
]
