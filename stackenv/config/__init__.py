"""Configuration parsing and validation."""

from .loader import load_config, parse_config, read_config
from .validation import extension_of, validate_job, validate_jobs

__all__ = [
    "extension_of",
    "load_config",
    "parse_config",
    "read_config",
    "validate_job",
    "validate_jobs",
]
