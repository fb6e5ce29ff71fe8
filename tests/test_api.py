from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from flink_fakes import FakeArtifactSource, FakeFlinkApi, completed, running_job

from flink_deployer.api.dependencies import get_services
from flink_deployer.bootstrap import DeployerServices, build_deployer_services
from flink_deployer.config import Settings
from flink_deployer.domain.errors import FlinkApiError, SavepointTimeoutError
from flink_deployer.domain.operation_models import UpdateRequest, UpdateResult
from flink_deployer.main import app


class _TimingOutUpdateService:
    def update(self, request: UpdateRequest) -> UpdateResult:
        raise SavepointTimeoutError(job_id="old-job", elapsed_seconds=60)


def _services(flink_api: FakeFlinkApi) -> DeployerServices:
    return build_deployer_services(
        Settings(),
        flink_api=flink_api,
        artifact_source=FakeArtifactSource({"target/wordcount.jar": b"jar"}),
    )


@pytest.fixture
def flink_api() -> FakeFlinkApi:
    return FakeFlinkApi(
        jobs=[running_job("old-job", "WordCount v1")],
        savepoint_statuses=[completed("s3://savepoints/sp-1")],
    )


@pytest.fixture
def client(flink_api: FakeFlinkApi) -> Iterator[TestClient]:
    app.dependency_overrides[get_services] = lambda: _services(flink_api)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_healthz(client: TestClient) -> None:
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_jobs_returns_cluster_jobs(client: TestClient) -> None:
    response = client.get("/jobs")

    assert response.status_code == 200
    assert response.json() == {
        "jobs": [{"id": "old-job", "name": "WordCount v1", "status": "RUNNING"}]
    }


def test_list_jobs_maps_flink_errors_to_bad_gateway(
    client: TestClient,
    flink_api: FakeFlinkApi,
) -> None:
    flink_api.list_jobs_error = FlinkApiError("GET /jobs/overview failed: refused")

    response = client.get("/jobs")

    assert response.status_code == 502
    assert "refused" in response.json()["detail"]


def test_update_replaces_running_job(client: TestClient, flink_api: FakeFlinkApi) -> None:
    response = client.post(
        "/update",
        json={
            "jobNameBase": "WordCount",
            "localFilename": "target/wordcount.jar",
            "entryClass": "org.example.WordCount",
            "savepointDir": "s3://savepoints",
        },
    )

    assert response.status_code == 200
    assert response.json() == {
        "previousJobId": "old-job",
        "savepointPath": "s3://savepoints/sp-1",
        "deploy": {"jarId": "sample.jar", "jobId": "new-job"},
    }
    assert flink_api.savepoint_calls == [
        {"job_id": "old-job", "target_directory": "s3://savepoints"}
    ]
    assert flink_api.run_calls[0]["savepoint_path"] == "s3://savepoints/sp-1"


def test_update_without_running_job_returns_bad_request(
    client: TestClient,
    flink_api: FakeFlinkApi,
) -> None:
    flink_api.jobs = []

    response = client.post(
        "/update",
        json={"jobNameBase": "WordCount", "remoteFilename": "sample.jar"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == (
        'no instance running for job name base "WordCount". Aborting update'
    )
    assert flink_api.savepoint_calls == []


def test_update_savepoint_timeout_returns_gateway_timeout(flink_api: FakeFlinkApi) -> None:
    services = _services(flink_api)
    app.dependency_overrides[get_services] = lambda: DeployerServices(
        flink_api=services.flink_api,
        deploy=services.deploy,
        update=_TimingOutUpdateService(),  # type: ignore[arg-type]
        terminate=services.terminate,
    )
    try:
        with TestClient(app) as test_client:
            response = test_client.post(
                "/update",
                json={"jobNameBase": "WordCount", "remoteFilename": "sample.jar"},
            )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 504
    assert "within 60 seconds" in response.json()["detail"]


def test_update_rejects_unknown_fields(client: TestClient) -> None:
    response = client.post("/update", json={"jobNameBase": "WordCount", "jar": "x"})

    assert response.status_code == 422


def test_deploy_requires_exactly_one_artifact(client: TestClient) -> None:
    response = client.post(
        "/deploy",
        json={"localFilename": "target/wordcount.jar", "remoteFilename": "sample.jar"},
    )

    assert response.status_code == 400
    assert "are set" in response.json()["detail"]


def test_deploy_starts_remote_jar(client: TestClient, flink_api: FakeFlinkApi) -> None:
    response = client.post(
        "/deploy",
        json={"remoteFilename": "/jars/abc_sample.jar", "parallelism": 2},
    )

    assert response.status_code == 200
    assert response.json() == {"jarId": "abc_sample.jar", "jobId": "new-job"}
    assert flink_api.upload_calls == []
    assert flink_api.run_calls[0]["parallelism"] == 2


def test_terminate_cancels_running_job(client: TestClient, flink_api: FakeFlinkApi) -> None:
    response = client.post("/terminate", json={"jobNameBase": "WordCount"})

    assert response.status_code == 200
    assert response.json() == {"id": "old-job", "name": "WordCount v1", "status": "RUNNING"}
    assert flink_api.cancelled_job_ids == ["old-job"]
