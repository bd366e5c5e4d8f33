from __future__ import annotations

import logging
import subprocess
from typing import Iterable

logger = logging.getLogger(__name__)


def run_logged(
    cmd: Iterable[str],
    *,
    check: bool = True,
    **kwargs: object,
) -> subprocess.CompletedProcess[str]:
    """
    Run a subprocess with captured text output; stderr of a failed command
    goes to the debug log. Raises CalledProcessError when check=True.
    """
    cmd_list = list(cmd)
    logger.debug(f"Running: {' '.join(cmd_list)}")
    result = subprocess.run(
        cmd_list,
        capture_output=True,
        text=True,
        **kwargs,  # type: ignore[arg-type]
    )
    if result.returncode != 0 and result.stderr:
        logger.debug(f"{cmd_list[0]} exited {result.returncode}: {result.stderr.rstrip()}")
    if check and result.returncode != 0:
        raise subprocess.CalledProcessError(
            result.returncode, result.args, output=result.stdout, stderr=result.stderr
        )
    return result
