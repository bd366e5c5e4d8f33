"""Export pipeline: configuration -> stack outputs -> artifacts."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Protocol

from .config import load_config
from .core.errors import ArtifactWriteError, OutputContractError, StackFetchError
from .core.models import Job, JobResult, JobStatus, Output
from .rendering.generators import render_artifacts

logger = logging.getLogger(__name__)


class StackFetcher(Protocol):
    def fetch(self, stack_name: str, region: str | None = None) -> list[Output]: ...


class Writer(Protocol):
    def __call__(self, location: Path, text: str) -> Path: ...


def export_job(job: Job, fetcher: StackFetcher, writer: Writer) -> JobResult:
    """Fetch one stack's outputs and write both artifacts.

    Fetch failures, output contract violations and write failures are
    reported in the result so sibling jobs still run.

    Args:
        job: Validated job
        fetcher: Stack output source
        writer: Artifact writer

    Returns:
        Job outcome
    """
    if job.stack_name is None:
        raise ValueError("export_job requires a validated job with a stack_name")

    try:
        outputs = fetcher.fetch(job.stack_name, job.region)
    except StackFetchError as e:
        logger.error(f"Skipping stack {job.stack_name}: {e}")
        return JobResult(job=job, status=JobStatus.FETCH_FAILED, error=str(e))
    except OutputContractError as e:
        logger.error(f"Stack {job.stack_name} returned a malformed output: {e}")
        return JobResult(job=job, status=JobStatus.CONTRACT_VIOLATION, error=str(e))

    if not outputs:
        logger.warning(f"Stack {job.stack_name} has no outputs; writing empty artifacts")

    artifacts = render_artifacts(outputs)

    written: list[Path] = []
    try:
        written.append(writer(job.json_file.location, artifacts.json))
        written.append(writer(job.typescript_file.location, artifacts.typings))
    except ArtifactWriteError as e:
        logger.error(f"Failed to write artifacts for stack {job.stack_name}: {e}")
        return JobResult(
            job=job,
            status=JobStatus.WRITE_FAILED,
            outputs=len(outputs),
            error=str(e),
            written=written,
        )

    logger.info(f"Exported {len(outputs)} output(s) from stack {job.stack_name}")
    return JobResult(
        job=job, status=JobStatus.WRITTEN, outputs=len(outputs), written=written
    )


def export_jobs(
    jobs: Iterable[Job], fetcher: StackFetcher, writer: Writer
) -> list[JobResult]:
    """Export every job in document order."""
    return [export_job(job, fetcher, writer) for job in jobs]


def run(config_path: Path, fetcher: StackFetcher, writer: Writer) -> list[JobResult]:
    """Load, validate and export a configuration file.

    Parse and validation errors are raised before any stack is fetched.
    """
    jobs = load_config(config_path)
    results = export_jobs(jobs, fetcher, writer)

    failed = sum(1 for result in results if not result.ok)
    logger.info(f"Completed: {len(results) - failed} exported, {failed} failed")
    return results
