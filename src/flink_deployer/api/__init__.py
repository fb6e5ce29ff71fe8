"""HTTP API public surface."""

from flink_deployer.api.router import api_router

__all__ = ["api_router"]
