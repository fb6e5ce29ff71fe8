"""Flink REST API infrastructure adapters."""

from flink_deployer.domain.errors import FlinkApiError
from flink_deployer.infrastructure.flink_api.client import FlinkRestClient

__all__ = ["FlinkApiError", "FlinkRestClient"]
