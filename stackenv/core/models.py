"""Domain models for export jobs and stack outputs."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class ConfigFile(BaseModel):
    """Target location of one generated artifact."""

    model_config = ConfigDict(frozen=True)

    location: Path = Field(..., description="Artifact output path")


class Job(BaseModel):
    """One stack export entry from the configuration document.

    Parsed entries are candidates; only entries accepted by
    ``stackenv.config.validation`` are handed to the pipeline.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    stack_name: str | None = Field(default=None, description="CloudFormation stack")
    region: str | None = Field(default=None, description="Region override")
    json_file: ConfigFile = Field(..., alias="json", description="JSON artifact")
    typescript_file: ConfigFile = Field(
        ..., alias="typescript", description="Type declaration artifact"
    )


class Output(BaseModel):
    """A single stack output."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str


OutputSet = list[Output]


class JobStatus(str, Enum):
    WRITTEN = "written"
    FETCH_FAILED = "fetch_failed"
    WRITE_FAILED = "write_failed"
    CONTRACT_VIOLATION = "contract_violation"


class JobResult(BaseModel):
    """Outcome of exporting a single job."""

    job: Job
    status: JobStatus
    outputs: int = 0
    error: str | None = None
    written: list[Path] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is JobStatus.WRITTEN
