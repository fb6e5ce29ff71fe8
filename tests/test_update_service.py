from __future__ import annotations

import logging

import pytest
from flink_fakes import (
    FakeArtifactSource,
    FakeClock,
    FakeFlinkApi,
    completed,
    in_progress,
    running_job,
)

from flink_deployer.application.services import (
    BackoffPolicy,
    DeployService,
    SavepointCoordinator,
    UpdateService,
)
from flink_deployer.domain.errors import (
    AmbiguousJobError,
    DeployValidationError,
    FlinkApiError,
    NoRunningJobError,
    SavepointError,
    SavepointTimeoutError,
)
from flink_deployer.domain.jobs import Job, JobStatus
from flink_deployer.domain.operation_models import UpdateRequest


def _update_service(flink_api: FakeFlinkApi, savepoint_wait_seconds: float = 60) -> UpdateService:
    clock = FakeClock()
    return UpdateService(
        flink_api=flink_api,
        savepoint_coordinator=SavepointCoordinator(
            flink_api,
            BackoffPolicy(randomization_factor=0),
            clock=clock,
            sleep=clock.sleep,
        ),
        deploy_service=DeployService(
            flink_api=flink_api,
            artifact_source=FakeArtifactSource({"testdata/sample.jar": b"jar"}),
        ),
        savepoint_wait_seconds=savepoint_wait_seconds,
    )


def _request(**overrides: object) -> UpdateRequest:
    values: dict[str, object] = {
        "job_name_base": "WordCountStateful",
        "local_filename": "testdata/sample.jar",
        "savepoint_dir": "/data/flink",
    }
    values.update(overrides)
    return UpdateRequest(**values)


def test_update_restarts_new_artifact_from_completed_savepoint() -> None:
    flink_api = FakeFlinkApi(
        jobs=[running_job("Job-A", "WordCountStateful v1.0")],
        savepoint_statuses=[in_progress(), completed("s3://cp/1")],
    )

    result = _update_service(flink_api).update(
        _request(entry_class="org.example.WordCount", parallelism=2, api_token="token")
    )

    assert flink_api.savepoint_calls == [{"job_id": "Job-A", "target_directory": "/data/flink"}]
    assert flink_api.run_calls[0]["savepoint_path"] == "s3://cp/1"
    assert flink_api.run_calls[0]["entry_class"] == "org.example.WordCount"
    assert flink_api.run_calls[0]["parallelism"] == 2
    assert flink_api.upload_calls[0]["api_token"] == "token"
    assert result.previous_job_id == "Job-A"
    assert result.savepoint_path == "s3://cp/1"
    assert result.deploy.job_id == "new-job"


def test_update_observes_savepoint_completion_before_deploy() -> None:
    flink_api = FakeFlinkApi(
        jobs=[running_job("Job-A", "WordCountStateful v1.0")],
        savepoint_statuses=[in_progress(), in_progress(), completed("s3://cp/1")],
    )

    _update_service(flink_api).update(_request())

    last_status_check = max(
        index for index, call in enumerate(flink_api.calls) if call == "get_savepoint_status"
    )
    assert flink_api.calls.index("upload_jar") > last_status_check
    assert flink_api.calls.index("run_jar") > last_status_check


def test_update_requires_job_name_base() -> None:
    flink_api = FakeFlinkApi()

    with pytest.raises(DeployValidationError, match="unspecified argument 'job_name_base'"):
        _update_service(flink_api).update(_request(job_name_base=""))

    assert flink_api.calls == []


def test_update_wraps_job_listing_failures() -> None:
    flink_api = FakeFlinkApi()
    flink_api.list_jobs_error = FlinkApiError("failed", status_code=503)

    with pytest.raises(FlinkApiError) as exc_info:
        _update_service(flink_api).update(_request())

    assert str(exc_info.value) == "retrieving jobs failed: failed"
    assert exc_info.value.status_code == 503


def test_update_aborts_when_no_instance_is_running() -> None:
    flink_api = FakeFlinkApi(jobs=[])

    with pytest.raises(NoRunningJobError) as exc_info:
        _update_service(flink_api).update(_request())

    assert str(exc_info.value) == (
        'no instance running for job name base "WordCountStateful". Aborting update'
    )
    assert "create_savepoint" not in flink_api.calls


def test_update_aborts_when_multiple_instances_are_running() -> None:
    flink_api = FakeFlinkApi(
        jobs=[
            running_job("Job-A", "WordCountStateful v1.0"),
            running_job("Job-B", "WordCountStateful v1.1"),
        ]
    )

    with pytest.raises(AmbiguousJobError) as exc_info:
        _update_service(flink_api).update(_request())

    assert str(exc_info.value) == (
        'job name with base "WordCountStateful" has 2 instances running. Aborting update'
    )
    assert exc_info.value.count == 2
    assert "create_savepoint" not in flink_api.calls


def test_update_ignores_jobs_that_are_not_running() -> None:
    flink_api = FakeFlinkApi(
        jobs=[
            Job(id="Job-Old", name="WordCountStateful v0.9", status=JobStatus.CANCELED),
            running_job("Job-A", "WordCountStateful v1.0"),
        ],
        savepoint_statuses=[completed("s3://cp/1")],
    )

    result = _update_service(flink_api).update(_request())

    assert result.previous_job_id == "Job-A"


def test_update_reports_savepoint_request_failure_with_job_id() -> None:
    flink_api = FakeFlinkApi(jobs=[running_job("Job-A", "WordCountStateful v1.0")])
    flink_api.create_savepoint_error = FlinkApiError("failed")

    with pytest.raises(SavepointError) as exc_info:
        _update_service(flink_api).update(_request())

    assert str(exc_info.value) == "failed to create savepoint for job Job-A due to error: failed"


def test_update_fails_when_completed_savepoint_has_no_location() -> None:
    flink_api = FakeFlinkApi(
        jobs=[running_job("Job-A", "WordCountStateful v1.0")],
        savepoint_statuses=[completed(None, failure_cause="checkpoint declined")],
    )

    with pytest.raises(SavepointError, match="savepoint creation failed"):
        _update_service(flink_api).update(_request())

    assert "upload_jar" not in flink_api.calls
    assert "run_jar" not in flink_api.calls


def test_update_propagates_savepoint_timeout_with_configured_budget() -> None:
    flink_api = FakeFlinkApi(
        jobs=[running_job("Job-A", "WordCountStateful v1.0")],
        savepoint_statuses=[in_progress()],
    )

    with pytest.raises(SavepointTimeoutError) as exc_info:
        _update_service(flink_api, savepoint_wait_seconds=5).update(_request())

    assert str(exc_info.value) == 'failed to create savepoint for job "Job-A" within 5 seconds'
    assert "run_jar" not in flink_api.calls


def test_update_propagates_deploy_failure_and_logs_savepoint_for_recovery(
    caplog: pytest.LogCaptureFixture,
) -> None:
    flink_api = FakeFlinkApi(
        jobs=[running_job("Job-A", "WordCountStateful v1.0")],
        savepoint_statuses=[completed("s3://cp/1")],
    )
    failure = FlinkApiError("failed")
    flink_api.run_error = failure

    with caplog.at_level(logging.ERROR), pytest.raises(FlinkApiError) as exc_info:
        _update_service(flink_api).update(_request())

    assert exc_info.value is failure
    assert "s3://cp/1" in caplog.text
    assert "cancel_job" not in flink_api.calls


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"local_filename": None}, "are unspecified"),
        ({"remote_filename": "/jars/sample.jar"}, "are set"),
    ],
)
def test_update_rejects_invalid_artifact_selection_before_touching_the_job(
    overrides: dict[str, object],
    message: str,
) -> None:
    flink_api = FakeFlinkApi(
        jobs=[running_job("Job-A", "WordCountStateful v1.0")],
        savepoint_statuses=[completed("s3://cp/1")],
    )

    with pytest.raises(DeployValidationError, match=message):
        _update_service(flink_api).update(_request(**overrides))

    assert flink_api.calls == []
