"""Configuration document loading."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import BinaryIO

import yaml
from pydantic import TypeAdapter, ValidationError

from ..core.errors import ConfigNotFoundError, ConfigParsingError, ConfigReadError
from ..core.models import Job
from .validation import validate_jobs

logger = logging.getLogger(__name__)

_JOBS_ADAPTER = TypeAdapter(list[Job])

_BOOL_TAG = "tag:yaml.org,2002:bool"


class ConfigLoader(yaml.SafeLoader):
    """SafeLoader that only reads true/false as booleans.

    Unquoted yes/no/on/off stay strings, so `region: no` or a stack named
    `on` load as written.
    """


ConfigLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
ConfigLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def read_config(path: Path) -> bytes:
    """Read the raw configuration bytes.

    Args:
        path: Configuration file path

    Returns:
        File contents
    """
    try:
        return path.read_bytes()
    except FileNotFoundError as e:
        raise ConfigNotFoundError(str(path)) from e
    except OSError as e:
        raise ConfigReadError(f"Unknown error occurred: {e}") from e


def parse_config(source: bytes | BinaryIO) -> list[Job]:
    """Parse a YAML job list into candidate jobs.

    Candidate jobs may still break the validation rules; a missing
    ``stack_name`` is accepted here and rejected by validation.

    Args:
        source: Raw bytes or a binary stream

    Returns:
        Jobs in document order
    """
    raw = source if isinstance(source, bytes) else source.read()

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ConfigParsingError(f"Parsing error: {e}") from e

    try:
        data = yaml.load(text, Loader=ConfigLoader)
    except yaml.YAMLError as e:
        raise ConfigParsingError(f"Parsing error: {e}") from e

    try:
        jobs = _JOBS_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise ConfigParsingError(f"Parsing error: {e}") from e

    logger.debug(f"Parsed {len(jobs)} job(s)")
    return jobs


def load_config(path: Path) -> list[Job]:
    """Read, parse and validate a configuration file.

    Either every job in the document is valid or none is returned.
    """
    jobs = parse_config(read_config(path))
    validate_jobs(jobs)
    logger.info(f"Loaded {len(jobs)} job(s) from {path}")
    return jobs
