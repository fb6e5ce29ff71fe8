"""FastAPI application entrypoint."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from functools import lru_cache

import uvicorn
from fastapi import FastAPI

from flink_deployer import __version__
from flink_deployer.api import api_router
from flink_deployer.api.dependencies import get_services, get_settings
from flink_deployer.bootstrap import DeployerServices, build_deployer_services
from flink_deployer.config import Settings


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build FastAPI application.

    Without `settings` the app uses the environment-backed singletons from
    `api.dependencies`; explicit settings replace both providers.
    """

    override_providers = settings is not None
    app_settings = settings if settings is not None else get_settings()

    @lru_cache(maxsize=1)
    def provide_app_services() -> DeployerServices:
        return build_deployer_services(app_settings)

    provide_services = provide_app_services if override_providers else get_services

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        """Build singleton dependencies at startup and release them on shutdown."""

        services = provide_services()
        yield
        services.close()
        provide_services.cache_clear()

    app = FastAPI(
        title=app_settings.app_name,
        version=__version__,
        lifespan=lifespan,
    )
    if override_providers:
        app.dependency_overrides[get_settings] = lambda: app_settings
        app.dependency_overrides[get_services] = provide_services
    app.include_router(api_router, prefix=app_settings.api_prefix)
    return app


app = create_app()


def run(settings: Settings | None = None) -> None:
    """Run the HTTP API server, with `settings` when given."""

    server_settings = settings or get_settings()
    uvicorn.run(
        create_app(settings) if settings is not None else "flink_deployer.main:app",
        host=server_settings.host,
        port=server_settings.port,
        log_level=server_settings.log_level.lower(),
        reload=False,
    )


__all__ = ["app", "create_app", "run"]
