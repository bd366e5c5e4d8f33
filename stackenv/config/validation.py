"""Job validation rules."""

from __future__ import annotations

import logging
from pathlib import PurePath

from ..core.errors import ConfigValidationError
from ..core.models import Job

logger = logging.getLogger(__name__)

JSON_EXTENSION = "json"
TYPESCRIPT_EXTENSION = "ts"


def extension_of(path: PurePath | str) -> str | None:
    """Return the extension of the final path component, without the dot.

    A name without a dot, or whose only dot is the leading one (``.json``),
    has no extension. ``"name."`` has an empty extension.
    """
    name = PurePath(path).name
    if not name or name == "..":
        return None
    stem, dot, extension = name.rpartition(".")
    if not dot or not stem:
        return None
    return extension


def _location_problems(label: str, location: PurePath, expected: str) -> list[str]:
    extension = extension_of(location)
    if extension is None:
        return [f"The {label} file location {str(location)!r} has no file extension"]
    if extension != expected:
        return [f"The {label} file location has to end with `.{expected}`"]
    return []


def job_problems(job: Job) -> list[str]:
    """Check every rule for a single job and collect the failures."""
    problems: list[str] = []
    if job.stack_name is None:
        problems.append("stack_name is required")
    problems += _location_problems("JSON", job.json_file.location, JSON_EXTENSION)
    problems += _location_problems(
        "TypeScript", job.typescript_file.location, TYPESCRIPT_EXTENSION
    )
    return problems


def validate_job(job: Job) -> None:
    problems = job_problems(job)
    if problems:
        raise ConfigValidationError(problems)


def validate_jobs(jobs: list[Job]) -> None:
    """Validate a whole document; any invalid entry rejects all of them."""
    problems: list[str] = []
    for index, job in enumerate(jobs):
        label = job.stack_name or "<unnamed>"
        problems += [f"entry {index} ({label}): {p}" for p in job_problems(job)]

    if problems:
        logger.debug(f"Rejected configuration with {len(problems)} problem(s)")
        raise ConfigValidationError(problems)
