"""Domain public API."""

from flink_deployer.domain.errors import (
    AmbiguousJobError,
    ArtifactReadError,
    DeployerError,
    DeployValidationError,
    FlinkApiError,
    JobSelectionError,
    NoRunningJobError,
    SavepointError,
    SavepointTimeoutError,
)
from flink_deployer.domain.flink_models import (
    CreateSavepointResponse,
    JobOverview,
    JobsOverviewResponse,
    RunJarResponse,
    SavepointStatusResponse,
    UploadJarResponse,
)
from flink_deployer.domain.jobs import Job, JobStatus, filter_running_jobs_by_name_base
from flink_deployer.domain.operation_models import (
    DeployRequest,
    DeployResult,
    JobListResponse,
    JobSummary,
    TerminateRequest,
    UpdateRequest,
    UpdateResult,
)
from flink_deployer.domain.ports import ArtifactSource, FlinkApi
from flink_deployer.domain.savepoints import SavepointHandle, SavepointPhase, SavepointStatus

__all__ = [
    "AmbiguousJobError",
    "ArtifactReadError",
    "ArtifactSource",
    "CreateSavepointResponse",
    "DeployRequest",
    "DeployResult",
    "DeployValidationError",
    "DeployerError",
    "FlinkApi",
    "FlinkApiError",
    "Job",
    "JobListResponse",
    "JobOverview",
    "JobSelectionError",
    "JobStatus",
    "JobSummary",
    "JobsOverviewResponse",
    "NoRunningJobError",
    "RunJarResponse",
    "SavepointError",
    "SavepointHandle",
    "SavepointPhase",
    "SavepointStatus",
    "SavepointStatusResponse",
    "SavepointTimeoutError",
    "TerminateRequest",
    "UpdateRequest",
    "UpdateResult",
    "UploadJarResponse",
    "filter_running_jobs_by_name_base",
]
