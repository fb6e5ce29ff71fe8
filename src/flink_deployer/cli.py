"""Command line entrypoint.

Example, replacing the running "WordCountStateful" job with a new jar:

    flink-deployer --flink-base-url http://jobmanager:8081 update \
        --job-name-base WordCountStateful \
        --file-name target/wordcount-1.1.jar \
        --entry-class org.example.WordCount \
        --savepoint-dir s3://savepoints/wordcount
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from typing import Any

from flink_deployer.bootstrap import DeployerServices, build_deployer_services
from flink_deployer.config import Settings
from flink_deployer.domain.errors import DeployerError
from flink_deployer.domain.operation_models import DeployRequest, UpdateRequest

logger = logging.getLogger("flink_deployer")


def _add_artifact_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--file-name", dest="local_filename", help="Local or s3:// jar to upload")
    parser.add_argument(
        "--remote-file-name",
        dest="remote_filename",
        help="Jar already uploaded to the cluster",
    )
    parser.add_argument("--entry-class", help="Program entry class")
    parser.add_argument("--parallelism", type=int, help="Job parallelism")
    parser.add_argument("--program-args", help="Program arguments, passed through as one string")
    parser.add_argument(
        "--allow-non-restored-state",
        action="store_true",
        help="Start even if savepoint state cannot be mapped to the new program",
    )
    parser.add_argument("--api-token", help="Bearer token for upload and run calls")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flink-deployer",
        description="Deploy and update jobs on a Flink cluster",
    )
    parser.add_argument("--flink-base-url", help="Flink REST endpoint")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List jobs on the cluster")

    deploy_parser = subparsers.add_parser("deploy", help="Upload and start a jar")
    _add_artifact_arguments(deploy_parser)
    deploy_parser.add_argument("--savepoint-path", help="Savepoint to restore from")

    update_parser = subparsers.add_parser(
        "update",
        help="Replace the running job from a fresh savepoint",
    )
    update_parser.add_argument("--job-name-base", required=True)
    _add_artifact_arguments(update_parser)
    update_parser.add_argument(
        "--savepoint-dir",
        help="Savepoint target directory, cluster default when omitted",
    )
    update_parser.add_argument(
        "--savepoint-wait-seconds",
        type=float,
        help="How long to wait for the savepoint to complete",
    )

    terminate_parser = subparsers.add_parser("terminate", help="Cancel the running job")
    terminate_parser.add_argument("--job-name-base", required=True)

    subparsers.add_parser("serve", help="Run the HTTP API")
    return parser


def _settings_from_args(args: argparse.Namespace) -> Settings:
    overrides: dict[str, Any] = {}
    if args.flink_base_url:
        overrides["flink_base_url"] = args.flink_base_url
    if args.debug:
        overrides["log_level"] = "DEBUG"
    if getattr(args, "savepoint_wait_seconds", None):
        overrides["savepoint_wait_seconds"] = args.savepoint_wait_seconds
    return Settings(**overrides)


def _configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(levelname)5.5s %(asctime)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )


def run_command(args: argparse.Namespace, services: DeployerServices) -> None:
    """Execute one parsed command against the service graph."""

    if args.command == "list":
        for job in services.flink_api.list_jobs():
            print(f"{job.id}\t{job.status}\t{job.name}")
        return

    if args.command == "deploy":
        result = services.deploy.deploy(
            DeployRequest(
                local_filename=args.local_filename,
                remote_filename=args.remote_filename,
                entry_class=args.entry_class,
                parallelism=args.parallelism,
                program_args=args.program_args,
                savepoint_path=args.savepoint_path,
                allow_non_restored_state=args.allow_non_restored_state,
                api_token=args.api_token,
            )
        )
        logger.info("Deployed jar '%s' as job '%s'.", result.jar_id, result.job_id)
        return

    if args.command == "update":
        update_result = services.update.update(
            UpdateRequest(
                job_name_base=args.job_name_base,
                local_filename=args.local_filename,
                remote_filename=args.remote_filename,
                entry_class=args.entry_class,
                parallelism=args.parallelism,
                program_args=args.program_args,
                savepoint_dir=args.savepoint_dir,
                allow_non_restored_state=args.allow_non_restored_state,
                api_token=args.api_token,
            )
        )
        logger.info(
            "Updated job '%s' from savepoint '%s'; new job '%s'.",
            update_result.previous_job_id,
            update_result.savepoint_path,
            update_result.deploy.job_id,
        )
        return

    if args.command == "terminate":
        job = services.terminate.terminate(args.job_name_base)
        logger.info("Terminated job '%s' (%s).", job.name, job.id)
        return

    raise ValueError(f"Unsupported command '{args.command}'.")


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, run the command and return the process exit code."""

    args = build_parser().parse_args(argv)
    try:
        settings = _settings_from_args(args)
    except ValueError as exc:
        logging.basicConfig()
        logger.error("Invalid configuration: %s", exc)
        return 1
    _configure_logging(settings)

    if args.command == "serve":
        from flink_deployer.main import run

        run(settings)
        return 0

    services = build_deployer_services(settings)
    try:
        run_command(args, services)
    except DeployerError as exc:
        logger.error("%s", exc)
        return 1
    finally:
        services.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
