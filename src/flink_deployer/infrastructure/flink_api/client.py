"""HTTP client for the Flink job manager REST API."""

from __future__ import annotations

from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from flink_deployer.domain.errors import FlinkApiError
from flink_deployer.domain.flink_models import (
    CreateSavepointResponse,
    JobsOverviewResponse,
    RunJarResponse,
    SavepointStatusResponse,
    UploadJarResponse,
)
from flink_deployer.domain.jobs import Job
from flink_deployer.domain.ports import FlinkApi
from flink_deployer.domain.savepoints import SavepointStatus

ModelT = TypeVar("ModelT", bound=BaseModel)

_JAR_CONTENT_TYPE = "application/x-java-archive"


class FlinkRestClient(FlinkApi):
    """Wrapper around the job, jar and savepoint endpoints used by the deployer."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        api_token: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = self._normalize_base_url(base_url)
        self._api_token = api_token
        self._http = httpx.Client(timeout=timeout_seconds, transport=transport)

    def close(self) -> None:
        """Release underlying HTTP resources."""

        self._http.close()

    def list_jobs(self) -> list[Job]:
        """Call `GET /jobs/overview`."""

        response = self._request("GET", "/jobs/overview")
        self._ensure_status(response, {200})
        overview = self._parse(response, JobsOverviewResponse)
        return [entry.to_job() for entry in overview.jobs]

    def upload_jar(
        self,
        filename: str,
        content: bytes,
        api_token: str | None = None,
    ) -> UploadJarResponse:
        """Call `POST /jars/upload` with the artifact as `jarfile`."""

        response = self._request(
            "POST",
            "/jars/upload",
            files={"jarfile": (filename, content, _JAR_CONTENT_TYPE)},
            api_token=api_token,
        )
        self._ensure_status(response, {200})
        return self._parse(response, UploadJarResponse)

    def run_jar(
        self,
        jar_id: str,
        *,
        entry_class: str | None = None,
        parallelism: int | None = None,
        program_args: str | None = None,
        savepoint_path: str | None = None,
        allow_non_restored_state: bool = False,
        api_token: str | None = None,
    ) -> RunJarResponse:
        """Call `POST /jars/{jarId}/run`."""

        body: dict[str, Any] = {"allowNonRestoredState": allow_non_restored_state}
        if entry_class:
            body["entryClass"] = entry_class
        if parallelism is not None and parallelism > 0:
            body["parallelism"] = parallelism
        if program_args:
            body["programArgs"] = program_args
        if savepoint_path:
            body["savepointPath"] = savepoint_path

        response = self._request(
            "POST",
            f"/jars/{quote(jar_id, safe='')}/run",
            json=body,
            api_token=api_token,
        )
        self._ensure_status(response, {200})
        return self._parse(response, RunJarResponse)

    def create_savepoint(
        self,
        job_id: str,
        target_directory: str | None = None,
    ) -> CreateSavepointResponse:
        """Call `POST /jobs/{jobId}/savepoints` with `cancel-job` enabled.

        `target-directory` has to be left out entirely for the cluster-default
        savepoint directory to be used.
        """

        body: dict[str, Any] = {"cancel-job": True}
        if target_directory:
            body["target-directory"] = target_directory

        response = self._request(
            "POST",
            f"/jobs/{quote(job_id, safe='')}/savepoints",
            json=body,
        )
        self._ensure_status(response, {202})
        return self._parse(response, CreateSavepointResponse)

    def get_savepoint_status(self, job_id: str, request_id: str) -> SavepointStatus:
        """Call `GET /jobs/{jobId}/savepoints/{requestId}`."""

        response = self._request(
            "GET",
            f"/jobs/{quote(job_id, safe='')}/savepoints/{quote(request_id, safe='')}",
        )
        self._ensure_status(response, {200})
        return self._parse(response, SavepointStatusResponse).to_status()

    def cancel_job(self, job_id: str) -> None:
        """Call `PATCH /jobs/{jobId}?mode=cancel`."""

        response = self._request(
            "PATCH",
            f"/jobs/{quote(job_id, safe='')}",
            params={"mode": "cancel"},
        )
        self._ensure_status(response, {200, 202})

    def _request(
        self,
        method: str,
        path: str,
        *,
        api_token: str | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        url = f"{self._base_url}{path}"
        headers = self._auth_headers(api_token)
        try:
            return self._http.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            raise FlinkApiError(f"{method} {url} failed: {exc}") from exc

    def _auth_headers(self, api_token: str | None) -> dict[str, str]:
        token = api_token or self._api_token
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    def _ensure_status(self, response: httpx.Response, expected: set[int]) -> None:
        if response.status_code in expected:
            return
        body = response.text.strip()
        raise FlinkApiError(
            f"{response.request.method} {response.request.url} failed: "
            f"Unexpected response status {response.status_code} with body "
            f"{body or '<no response body>'}",
            status_code=response.status_code,
            body=body,
        )

    def _parse(self, response: httpx.Response, model: type[ModelT]) -> ModelT:
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise FlinkApiError(
                f"Unable to parse API response as valid JSON: {response.text}",
                status_code=response.status_code,
                body=response.text,
            ) from exc

    def _normalize_base_url(self, base_url: str) -> str:
        normalized = base_url.strip().rstrip("/")
        if not normalized:
            raise FlinkApiError("Flink base URL cannot be empty.")
        return normalized


__all__ = ["FlinkRestClient"]
