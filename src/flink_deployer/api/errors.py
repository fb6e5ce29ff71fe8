"""Mapping of domain errors onto HTTP responses."""

from __future__ import annotations

from typing import NoReturn

from fastapi import HTTPException

from flink_deployer.domain.errors import (
    ArtifactReadError,
    DeployValidationError,
    FlinkApiError,
    JobSelectionError,
    SavepointError,
    SavepointTimeoutError,
)


def raise_http_exception(exc: Exception) -> NoReturn:
    if isinstance(exc, DeployValidationError | JobSelectionError):
        raise HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, SavepointTimeoutError):
        raise HTTPException(status_code=504, detail=str(exc))
    if isinstance(exc, FlinkApiError | SavepointError | ArtifactReadError):
        raise HTTPException(status_code=502, detail=str(exc))
    raise HTTPException(status_code=500, detail="Unexpected deployer error")


__all__ = ["raise_http_exception"]
