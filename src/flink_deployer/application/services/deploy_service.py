"""Upload and start program artifacts."""

from __future__ import annotations

import logging

from flink_deployer.domain.errors import DeployValidationError
from flink_deployer.domain.operation_models import DeployRequest, DeployResult
from flink_deployer.domain.ports import ArtifactSource, FlinkApi

logger = logging.getLogger(__name__)


def extract_jar_id(filename: str) -> str:
    """Return the trailing path segment of an uploaded artifact name."""

    return filename.rsplit("/", 1)[-1]


def validate_artifact_selection(local_filename: str | None, remote_filename: str | None) -> None:
    """Require exactly one of a local artifact and an already uploaded one."""

    has_local = bool(local_filename)
    has_remote = bool(remote_filename)
    if not has_local and not has_remote:
        raise DeployValidationError(
            "both properties 'remote_filename' and 'local_filename' are unspecified"
        )
    if has_local and has_remote:
        raise DeployValidationError(
            "both properties 'remote_filename' and 'local_filename' are set"
        )


class DeployService:
    """Upload an artifact when needed and run it, optionally from a savepoint."""

    def __init__(self, flink_api: FlinkApi, artifact_source: ArtifactSource) -> None:
        self._flink_api = flink_api
        self._artifact_source = artifact_source

    def deploy(self, request: DeployRequest) -> DeployResult:
        """Start the artifact described by `request`.

        Upload and run errors propagate unchanged; nothing is retried here.
        """

        validate_artifact_selection(request.local_filename, request.remote_filename)

        if request.local_filename:
            artifact_name = self._upload(request.local_filename, request.api_token)
        else:
            assert request.remote_filename is not None
            artifact_name = request.remote_filename

        jar_id = extract_jar_id(artifact_name)
        if request.savepoint_path:
            logger.info(
                "Starting jar '%s' from savepoint '%s'.", jar_id, request.savepoint_path
            )
        else:
            logger.info("Starting jar '%s' without savepoint.", jar_id)
        if request.allow_non_restored_state:
            logger.warning("Starting jar '%s' with allow-non-restored-state enabled.", jar_id)

        response = self._flink_api.run_jar(
            jar_id,
            entry_class=request.entry_class,
            parallelism=request.parallelism,
            program_args=request.program_args,
            savepoint_path=request.savepoint_path,
            allow_non_restored_state=request.allow_non_restored_state,
            api_token=request.api_token,
        )
        logger.info("Jar '%s' started as job '%s'.", jar_id, response.job_id)
        return DeployResult(jar_id=jar_id, job_id=response.job_id)

    def _upload(self, local_filename: str, api_token: str | None) -> str:
        content = self._artifact_source.read_artifact(local_filename)
        upload_name = extract_jar_id(local_filename)
        logger.info("Uploading '%s' (%s bytes).", local_filename, len(content))
        response = self._flink_api.upload_jar(upload_name, content, api_token=api_token)
        logger.debug("Uploaded '%s' as '%s'.", local_filename, response.filename)
        return response.filename


__all__ = ["DeployService", "extract_jar_id", "validate_artifact_selection"]
