"""Application bootstrap/wiring."""

import logging
from dataclasses import dataclass

from flink_deployer.application.services import (
    DeployService,
    SavepointCoordinator,
    TerminateService,
    UpdateService,
)
from flink_deployer.config import Settings
from flink_deployer.domain.ports import ArtifactSource, FlinkApi
from flink_deployer.infrastructure.artifacts import (
    LocalArtifactSource,
    RoutingArtifactSource,
    S3ArtifactSource,
)
from flink_deployer.infrastructure.flink_api import FlinkRestClient

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class DeployerServices:
    """Service graph shared by the CLI and the HTTP API."""

    flink_api: FlinkApi
    deploy: DeployService
    update: UpdateService
    terminate: TerminateService

    def close(self) -> None:
        """Release adapter resources."""

        self.flink_api.close()


def build_flink_client(settings: Settings) -> FlinkRestClient:
    logger.debug("Using %s as Flink endpoint.", settings.flink_base_url)
    return FlinkRestClient(
        base_url=settings.flink_base_url,
        timeout_seconds=settings.flink_timeout_seconds,
        api_token=settings.api_token,
    )


def build_artifact_source(settings: Settings) -> ArtifactSource:
    return RoutingArtifactSource(
        local=LocalArtifactSource(base_dir=settings.artifact_base_dir),
        s3=S3ArtifactSource(
            region=settings.aws_region,
            endpoint_url=settings.s3_endpoint_url,
        ),
    )


def build_deployer_services(
    settings: Settings,
    *,
    flink_api: FlinkApi | None = None,
    artifact_source: ArtifactSource | None = None,
) -> DeployerServices:
    """Compose service graph."""

    api = flink_api if flink_api is not None else build_flink_client(settings)
    source = artifact_source if artifact_source is not None else build_artifact_source(settings)

    deploy_service = DeployService(flink_api=api, artifact_source=source)
    coordinator = SavepointCoordinator(
        flink_api=api,
        backoff_policy=settings.backoff_policy(),
    )
    return DeployerServices(
        flink_api=api,
        deploy=deploy_service,
        update=UpdateService(
            flink_api=api,
            savepoint_coordinator=coordinator,
            deploy_service=deploy_service,
            savepoint_wait_seconds=settings.savepoint_wait_seconds,
        ),
        terminate=TerminateService(flink_api=api),
    )


__all__ = [
    "DeployerServices",
    "build_artifact_source",
    "build_deployer_services",
    "build_flink_client",
]
