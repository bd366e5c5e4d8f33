"""Exceptions raised by configuration loading, stack fetching and writing."""

from __future__ import annotations


class StackenvError(Exception):
    """Base class for stackenv errors."""


class ConfigNotFoundError(StackenvError):
    """Raised when the configuration file does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File {path} not found")
        self.path = path


class ConfigReadError(StackenvError):
    """Raised when the configuration file cannot be read for another reason."""


class ConfigParsingError(StackenvError):
    """Raised when the configuration is not UTF-8 YAML shaped as a job list."""


class ConfigValidationError(StackenvError):
    """Raised when one or more jobs break the field or extension rules."""

    def __init__(self, problems: list[str]) -> None:
        super().__init__("Validation errors: " + "; ".join(problems))
        self.problems = problems


class StackFetchError(StackenvError):
    """Base class for per-job failures while fetching stack outputs."""


class StackServiceError(StackFetchError):
    """Raised when CloudFormation answers with a service-level error."""


class StackNotFoundError(StackFetchError):
    """Raised when the requested stack does not exist."""

    def __init__(self, stack_name: str) -> None:
        super().__init__(f"Stack not found: {stack_name}")
        self.stack_name = stack_name


class StackUnknownError(StackFetchError):
    """Raised for transport or tooling failures that are not service replies."""


class OutputContractError(StackenvError):
    """Raised when a stack output is missing its key or value."""


class ArtifactWriteError(StackenvError):
    """Raised when a generated artifact cannot be written."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to write {path}: {reason}")
        self.path = path
