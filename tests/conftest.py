from __future__ import annotations

from pathlib import Path

import pytest

from stackenv.core.errors import ArtifactWriteError
from stackenv.core.models import Output

VALID_CONFIG = """\
- stack_name: s1
  json:
    location: a.json
  typescript:
    location: a.ts
- stack_name: s2
  region: eu-west-1
  json:
    location: out/b.json
  typescript:
    location: out/b.ts
"""


class FakeFetcher:
    """Returns canned outputs (or raises canned errors) per stack name."""

    def __init__(self, responses: dict[str, list[Output] | Exception]) -> None:
        self.responses = responses
        self.calls: list[tuple[str, str | None]] = []

    def fetch(self, stack_name: str, region: str | None = None) -> list[Output]:
        self.calls.append((stack_name, region))
        response = self.responses[stack_name]
        if isinstance(response, Exception):
            raise response
        return response


class RecordingWriter:
    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.writes: dict[str, str] = {}
        self.fail_on = fail_on or set()

    def __call__(self, location: Path, text: str) -> Path:
        if str(location) in self.fail_on:
            raise ArtifactWriteError(str(location), "disk full")
        self.writes[str(location)] = text
        return location


@pytest.fixture()
def write_config(tmp_path: Path):
    def _write(content: str | bytes, name: str = "config.yaml") -> Path:
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content)
        return path

    return _write


@pytest.fixture()
def outputs() -> list[Output]:
    return [
        Output(key="Bucket", value="my-bucket"),
        Output(key="QueueUrl", value="https://sqs.example/q"),
    ]


@pytest.fixture()
def clear_aws_region(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("AWS_REGION", raising=False)
    monkeypatch.delenv("AWS_DEFAULT_REGION", raising=False)


