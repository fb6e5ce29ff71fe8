"""Dependency providers for FastAPI routes."""

from functools import lru_cache

from flink_deployer.bootstrap import DeployerServices, build_deployer_services
from flink_deployer.config import Settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return singleton settings."""

    return Settings()


@lru_cache(maxsize=1)
def get_services() -> DeployerServices:
    """Return singleton service graph."""

    return build_deployer_services(get_settings())


__all__ = ["get_services", "get_settings"]
