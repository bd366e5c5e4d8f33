from __future__ import annotations

import json
import logging
import os
import re
import subprocess
from typing import Any

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from .._utils import run_logged
from ..core.errors import (
    OutputContractError,
    StackNotFoundError,
    StackServiceError,
    StackUnknownError,
)
from ..core.models import Output

logger = logging.getLogger(__name__)

_SERVICE_ERROR = re.compile(r"An error occurred \((?P<code>[^)]+)\)")
_THROTTLING_CODES = {"Throttling", "ThrottlingException", "RequestLimitExceeded"}

THROTTLE_ATTEMPTS = 5


class StackThrottledError(Exception):
    """Raised when CloudFormation throttles describe-stacks; retried."""


class RegionResolver:
    """Resolves the region used for a stack lookup.

    An explicit job region wins, then ``AWS_REGION``, ``AWS_DEFAULT_REGION``,
    the configured default and finally ``aws configure get region``. ``None``
    leaves the choice to the AWS CLI itself.
    """

    def __init__(self, default_region: str | None = None, aws_cli: str = "aws") -> None:
        self.default_region = default_region
        self.aws_cli = aws_cli
        self._configured: str | None = None
        self._configured_loaded = False

    def resolve(self, explicit: str | None = None) -> str | None:
        if explicit:
            return explicit
        for var in ("AWS_REGION", "AWS_DEFAULT_REGION"):
            value = os.environ.get(var, "").strip()
            if value:
                return value
        if self.default_region:
            return self.default_region
        return self._configured_region()

    def _configured_region(self) -> str | None:
        if not self._configured_loaded:
            self._configured_loaded = True
            try:
                result = run_logged(
                    [self.aws_cli, "configure", "get", "region"],
                    check=False,
                )
            except FileNotFoundError:
                logger.debug(f"AWS CLI {self.aws_cli} not found; region left unresolved")
                return None
            value = result.stdout.strip()
            self._configured = value or None
        return self._configured


def _service_error_code(message: str) -> str | None:
    match = _SERVICE_ERROR.search(message)
    return match.group("code") if match else None


def _log_throttle_retry(retry_state: RetryCallState) -> None:
    sleep_for = (
        f"; waiting {retry_state.next_action.sleep:.0f}s"
        if retry_state.next_action and retry_state.next_action.sleep is not None
        else ""
    )
    logger.warning(
        f"describe-stacks throttled "
        f"(attempt {retry_state.attempt_number}/{THROTTLE_ATTEMPTS}){sleep_for}"
    )


def outputs_from_stack(stack: dict[str, Any]) -> list[Output]:
    """Convert a describe-stacks stack entry into an ordered output list."""
    outputs: list[Output] = []
    for index, item in enumerate(stack.get("Outputs") or []):
        key = item.get("OutputKey")
        value = item.get("OutputValue")
        if key is None or value is None:
            missing = "OutputKey" if key is None else "OutputValue"
            raise OutputContractError(
                f"Stack output {index} of {stack.get('StackName', '<unknown>')} "
                f"is missing {missing}"
            )
        outputs.append(Output(key=key, value=value))
    return outputs


class CloudFormationClient:
    """Fetches stack outputs through ``aws cloudformation describe-stacks``."""

    def __init__(
        self,
        region_resolver: RegionResolver | None = None,
        *,
        aws_cli: str = "aws",
        retry_wait: wait_base | None = None,
    ) -> None:
        self.region_resolver = region_resolver or RegionResolver(aws_cli=aws_cli)
        self.aws_cli = aws_cli
        self._retrying = Retrying(
            reraise=True,
            retry=retry_if_exception_type(StackThrottledError),
            stop=stop_after_attempt(THROTTLE_ATTEMPTS),
            wait=retry_wait or wait_exponential(multiplier=1, min=1, max=20),
            before_sleep=_log_throttle_retry,
        )

    def fetch(self, stack_name: str, region: str | None = None) -> list[Output]:
        resolved = self.region_resolver.resolve(region)
        logger.debug(f"Describing stack {stack_name} (region: {resolved or 'cli default'})")

        try:
            stdout = self._retrying(self._describe, stack_name, resolved)
        except StackThrottledError as e:
            raise StackServiceError(str(e)) from e

        try:
            payload = json.loads(stdout)
        except json.JSONDecodeError as e:
            raise StackUnknownError(f"Invalid describe-stacks response: {e}") from e

        if not isinstance(payload, dict):
            raise StackUnknownError(
                f"Unexpected describe-stacks response: {type(payload).__name__}"
            )

        stacks = payload.get("Stacks") or []
        if not stacks:
            raise StackNotFoundError(stack_name)

        return outputs_from_stack(stacks[0])

    def _describe(self, stack_name: str, region: str | None) -> str:
        cmd = [
            self.aws_cli,
            "cloudformation",
            "describe-stacks",
            "--stack-name",
            stack_name,
            "--output",
            "json",
        ]
        if region:
            cmd += ["--region", region]

        try:
            return run_logged(cmd).stdout
        except FileNotFoundError as e:
            raise StackUnknownError(f"AWS CLI not found: {self.aws_cli}") from e
        except subprocess.CalledProcessError as e:
            message = ((e.stderr or "") + (e.output or "")).strip()
            code = _service_error_code(message)
            if "does not exist" in message:
                raise StackNotFoundError(stack_name) from e
            if code in _THROTTLING_CODES:
                raise StackThrottledError(message) from e
            if code is not None:
                raise StackServiceError(message) from e
            raise StackUnknownError(message or f"exit status {e.returncode}") from e
