"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from typing_extensions import Annotated

from ..config import load_config
from ..core.errors import (
    ConfigNotFoundError,
    ConfigParsingError,
    ConfigReadError,
    ConfigValidationError,
)
from ..core.models import Job, JobStatus
from ..pipeline import run
from ..rendering.io import ArtifactWriter
from ..settings import Settings
from ..stacks.cloudformation import CloudFormationClient, RegionResolver
from .parsers import parse_file_mode

logger = logging.getLogger(__name__)

CONFIG_ERROR_EXIT = 2
JOB_FAILURE_EXIT = 1
CONTRACT_VIOLATION_EXIT = 3

_CONFIG_ERRORS = (
    ConfigNotFoundError,
    ConfigParsingError,
    ConfigReadError,
    ConfigValidationError,
)

app = typer.Typer(
    name="stackenv",
    help="Export CloudFormation stack outputs as JSON and TypeScript env typings.",
    no_args_is_help=True,
)

ConfigOption = Annotated[
    str,
    typer.Option(
        "--config",
        "-c",
        help="Job configuration YAML (default: $STACKENV_CONFIG_PATH or config.yaml).",
        metavar="PATH",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable verbose logging."),
]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def _load_jobs(config_path: Path) -> list[Job]:
    try:
        return load_config(config_path)
    except _CONFIG_ERRORS as e:
        logger.error(str(e))
        raise typer.Exit(code=CONFIG_ERROR_EXIT) from e


@app.command()
def export(
    config: ConfigOption = "",
    dest_root: Annotated[
        str,
        typer.Option(
            "--dest-root",
            help="Base directory for relative artifact paths (default: cwd).",
            metavar="DIR",
        ),
    ] = "",
    file_mode: Annotated[
        str,
        typer.Option(
            "--mode",
            help="Artifact file permissions in octal (default: 0644).",
            metavar="OCTAL",
        ),
    ] = "",
    default_region: Annotated[
        str,
        typer.Option(
            "--default-region",
            help="Region for jobs without one when AWS_REGION is unset.",
            metavar="REGION",
        ),
    ] = "",
    aws_cli: Annotated[
        str,
        typer.Option("--aws-cli", help="AWS CLI executable.", metavar="BIN"),
    ] = "",
    verbose: VerboseOption = False,
) -> None:
    """Fetch stack outputs and write the configured artifacts."""
    _configure_logging(verbose)
    settings = Settings()

    config_path = Path(config) if config else settings.config_path
    mode = parse_file_mode(file_mode or settings.file_mode)
    cli = aws_cli or settings.aws_cli

    resolver = RegionResolver(
        default_region=default_region or settings.default_region, aws_cli=cli
    )
    fetcher = CloudFormationClient(resolver, aws_cli=cli)
    writer = ArtifactWriter(
        dest_root=Path(dest_root) if dest_root else settings.dest_root,
        file_mode=mode,
    )

    logger.debug(f"Config: {config_path}, dest root: {writer.dest_root}")

    try:
        results = run(config_path, fetcher, writer)
    except _CONFIG_ERRORS as e:
        logger.error(str(e))
        raise typer.Exit(code=CONFIG_ERROR_EXIT) from e

    if any(result.status is JobStatus.CONTRACT_VIOLATION for result in results):
        raise typer.Exit(code=CONTRACT_VIOLATION_EXIT)
    if any(not result.ok for result in results):
        raise typer.Exit(code=JOB_FAILURE_EXIT)


@app.command()
def validate(config: ConfigOption = "", verbose: VerboseOption = False) -> None:
    """Parse and validate the configuration without contacting AWS."""
    _configure_logging(verbose)
    settings = Settings()
    config_path = Path(config) if config else settings.config_path

    jobs = _load_jobs(config_path)
    typer.echo(f"{config_path}: {len(jobs)} valid job(s)")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
