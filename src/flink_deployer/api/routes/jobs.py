"""Job listing routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from flink_deployer.api.dependencies import get_services
from flink_deployer.api.errors import raise_http_exception
from flink_deployer.bootstrap import DeployerServices
from flink_deployer.domain.operation_models import JobListResponse, JobSummary

router = APIRouter(tags=["jobs"])


@router.get("/jobs", response_model=JobListResponse, status_code=200)
def list_jobs(services: DeployerServices = Depends(get_services)) -> JobListResponse:
    """List jobs known to the Flink cluster."""

    try:
        jobs = services.flink_api.list_jobs()
    except Exception as exc:  # noqa: BLE001
        raise_http_exception(exc)

    return JobListResponse(jobs=[JobSummary.from_job(job) for job in jobs])


__all__ = ["router"]
