"""Route modules public API."""

from flink_deployer.api.routes.health import router as health_router
from flink_deployer.api.routes.jobs import router as jobs_router
from flink_deployer.api.routes.operations import router as operations_router

__all__ = ["health_router", "jobs_router", "operations_router"]
