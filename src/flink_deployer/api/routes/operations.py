"""Deploy, update and terminate routes.

Handlers are synchronous: the services block while polling savepoints, so
FastAPI runs them in its worker threadpool.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from flink_deployer.api.dependencies import get_services
from flink_deployer.api.errors import raise_http_exception
from flink_deployer.bootstrap import DeployerServices
from flink_deployer.domain.operation_models import (
    DeployRequest,
    DeployResult,
    JobSummary,
    TerminateRequest,
    UpdateRequest,
    UpdateResult,
)

router = APIRouter(tags=["operations"])


@router.post("/deploy", response_model=DeployResult, status_code=200)
def deploy(
    request: DeployRequest,
    services: DeployerServices = Depends(get_services),
) -> DeployResult:
    """Upload and start an artifact."""

    try:
        return services.deploy.deploy(request)
    except Exception as exc:  # noqa: BLE001
        raise_http_exception(exc)


@router.post("/update", response_model=UpdateResult, status_code=200)
def update(
    request: UpdateRequest,
    services: DeployerServices = Depends(get_services),
) -> UpdateResult:
    """Replace the running job of a name base from a fresh savepoint."""

    try:
        return services.update.update(request)
    except Exception as exc:  # noqa: BLE001
        raise_http_exception(exc)


@router.post("/terminate", response_model=JobSummary, status_code=200)
def terminate(
    request: TerminateRequest,
    services: DeployerServices = Depends(get_services),
) -> JobSummary:
    """Cancel the running job of a name base."""

    try:
        job = services.terminate.terminate(request.job_name_base)
    except Exception as exc:  # noqa: BLE001
        raise_http_exception(exc)

    return JobSummary.from_job(job)


__all__ = ["router"]
