from __future__ import annotations

import pytest
from flink_fakes import FakeFlinkApi, running_job

from flink_deployer.application.services import TerminateService
from flink_deployer.domain.errors import (
    AmbiguousJobError,
    DeployValidationError,
    FlinkApiError,
    NoRunningJobError,
)


def test_terminate_cancels_the_single_running_job() -> None:
    flink_api = FakeFlinkApi(jobs=[running_job("Job-A", "WordCountStateful v1.0")])

    job = TerminateService(flink_api).terminate("WordCountStateful")

    assert job.id == "Job-A"
    assert flink_api.cancelled_job_ids == ["Job-A"]


def test_terminate_requires_job_name_base() -> None:
    flink_api = FakeFlinkApi()

    with pytest.raises(DeployValidationError):
        TerminateService(flink_api).terminate("")

    assert flink_api.calls == []


def test_terminate_aborts_without_running_instance() -> None:
    flink_api = FakeFlinkApi(jobs=[])

    with pytest.raises(NoRunningJobError, match="Aborting terminate"):
        TerminateService(flink_api).terminate("WordCountStateful")

    assert flink_api.cancelled_job_ids == []


def test_terminate_aborts_with_multiple_running_instances() -> None:
    flink_api = FakeFlinkApi(
        jobs=[
            running_job("Job-A", "WordCountStateful v1.0"),
            running_job("Job-B", "WordCountStateful v1.1"),
        ]
    )

    with pytest.raises(AmbiguousJobError, match="has 2 instances running"):
        TerminateService(flink_api).terminate("WordCountStateful")

    assert "cancel_job" not in flink_api.calls


def test_terminate_propagates_cancel_failure() -> None:
    flink_api = FakeFlinkApi(jobs=[running_job("Job-A", "WordCountStateful v1.0")])
    flink_api.cancel_error = FlinkApiError("failed")

    with pytest.raises(FlinkApiError, match="failed"):
        TerminateService(flink_api).terminate("WordCountStateful")
