"""Application settings."""

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from flink_deployer.application.services.backoff_poller import BackoffPolicy


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    app_name: str = "Flink Deployer"
    api_prefix: str = ""
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    flink_base_url: str = "http://localhost:8081"
    flink_timeout_seconds: float = 10.0
    api_token: str | None = None
    savepoint_wait_seconds: float = 60.0
    backoff_initial_interval_seconds: float = 0.5
    backoff_multiplier: float = 1.5
    backoff_randomization_factor: float = 0.5
    backoff_max_interval_seconds: float = 60.0
    artifact_base_dir: str | None = None
    aws_region: str = "us-east-1"
    s3_endpoint_url: str | None = None

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Reject settings the deployer cannot run with."""

        if not self.flink_base_url.strip():
            raise ValueError("FLINK_DEPLOYER_FLINK_BASE_URL cannot be empty.")
        if self.flink_timeout_seconds <= 0:
            raise ValueError("FLINK_DEPLOYER_FLINK_TIMEOUT_SECONDS must be > 0.")
        if self.savepoint_wait_seconds <= 0:
            raise ValueError("FLINK_DEPLOYER_SAVEPOINT_WAIT_SECONDS must be > 0.")
        if self.backoff_initial_interval_seconds <= 0:
            raise ValueError("FLINK_DEPLOYER_BACKOFF_INITIAL_INTERVAL_SECONDS must be > 0.")
        if self.backoff_multiplier < 1:
            raise ValueError("FLINK_DEPLOYER_BACKOFF_MULTIPLIER must be >= 1.")
        if not 0 <= self.backoff_randomization_factor <= 1:
            raise ValueError("FLINK_DEPLOYER_BACKOFF_RANDOMIZATION_FACTOR must be within [0, 1].")
        if self.backoff_max_interval_seconds < self.backoff_initial_interval_seconds:
            raise ValueError(
                "FLINK_DEPLOYER_BACKOFF_MAX_INTERVAL_SECONDS must be >= "
                "FLINK_DEPLOYER_BACKOFF_INITIAL_INTERVAL_SECONDS."
            )
        return self

    def backoff_policy(self, max_elapsed_time: float | None = None) -> BackoffPolicy:
        """Build the savepoint polling policy."""

        return BackoffPolicy(
            initial_interval=self.backoff_initial_interval_seconds,
            multiplier=self.backoff_multiplier,
            randomization_factor=self.backoff_randomization_factor,
            max_interval=self.backoff_max_interval_seconds,
            max_elapsed_time=max_elapsed_time or self.savepoint_wait_seconds,
        )

    model_config = SettingsConfigDict(env_prefix="FLINK_DEPLOYER_", extra="ignore")


__all__ = ["Settings"]
