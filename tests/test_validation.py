from __future__ import annotations

from pathlib import Path

import pytest

from stackenv.config.validation import (
    extension_of,
    job_problems,
    validate_job,
    validate_jobs,
)
from stackenv.core.errors import ConfigValidationError
from stackenv.core.models import ConfigFile, Job


def make_job(
    stack_name: str | None = "s1",
    json_location: str = "a.json",
    ts_location: str = "a.ts",
    region: str | None = None,
) -> Job:
    return Job(
        stack_name=stack_name,
        region=region,
        json_file=ConfigFile(location=Path(json_location)),
        typescript_file=ConfigFile(location=Path(ts_location)),
    )


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("a.json", "json"),
        ("dir/a.ts", "ts"),
        ("archive.tar.json", "json"),
        (".env.json", "json"),
        ("a.JSON", "JSON"),
        ("a.", ""),
        ("a", None),
        (".json", None),
        ("dir.d/a", None),
        ("", None),
    ],
)
def test_extension_of(path: str, expected: str | None):
    assert extension_of(path) == expected


class TestJobProblems:
    def test_valid_job_has_no_problems(self):
        assert job_problems(make_job()) == []

    def test_missing_stack_name(self):
        assert job_problems(make_job(stack_name=None)) == ["stack_name is required"]

    def test_json_wrong_extension(self):
        (problem,) = job_problems(make_job(json_location="a.yaml"))
        assert "`.json`" in problem

    def test_json_extension_is_case_sensitive(self):
        assert job_problems(make_job(json_location="a.JSON"))

    def test_json_without_extension(self):
        (problem,) = job_problems(make_job(json_location="outputs"))
        assert "no file extension" in problem

    def test_typescript_wrong_extension(self):
        (problem,) = job_problems(make_job(ts_location="a.d.tsx"))
        assert "`.ts`" in problem

    def test_typescript_without_extension(self):
        (problem,) = job_problems(make_job(ts_location="env"))
        assert "no file extension" in problem

    def test_declaration_file_name_is_accepted(self):
        assert job_problems(make_job(ts_location="types/env.d.ts")) == []

    def test_region_is_opaque(self):
        assert job_problems(make_job(region="not a real region!")) == []

    def test_all_rules_are_checked(self):
        problems = job_problems(
            make_job(stack_name=None, json_location="a", ts_location="a.js")
        )
        assert len(problems) == 3


class TestValidate:
    def test_validate_job_raises_with_problems(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            validate_job(make_job(json_location="a.txt"))
        assert len(exc_info.value.problems) == 1

    def test_validate_job_accepts_valid(self):
        validate_job(make_job())

    def test_validate_jobs_accepts_all_valid(self):
        validate_jobs([make_job(), make_job(stack_name="s2")])

    def test_validate_jobs_accepts_empty_document(self):
        validate_jobs([])

    def test_validate_jobs_aggregates_entries(self):
        jobs = [
            make_job(),
            make_job(stack_name="s2", json_location="b.txt"),
            make_job(stack_name=None),
        ]
        with pytest.raises(ConfigValidationError) as exc_info:
            validate_jobs(jobs)
        problems = exc_info.value.problems
        assert len(problems) == 2
        assert problems[0].startswith("entry 1 (s2):")
        assert problems[1] == "entry 2 (<unnamed>): stack_name is required"
        assert str(exc_info.value).startswith("Validation errors: ")
