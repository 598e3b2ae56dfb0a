"""
Single entry point for spawning external processes.
"""

from __future__ import annotations

import os
import subprocess
from typing import Mapping, Optional, Sequence

from gitsdk.exceptions import ProcessError
from gitsdk.log_utils import logger


def build_environment(
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
) -> dict:
    """
    Return a fresh environment mapping with `overrides` merged over `base`.

    `base` defaults to the ambient `os.environ`, which is copied and never
    modified.
    """
    env = dict(os.environ if base is None else base)
    if overrides:
        env.update(overrides)
    return env


def run_process(
    executable: str,
    args: Sequence[str],
    *,
    env: Optional[Mapping[str, str]] = None,
    description: Optional[str] = None,
) -> subprocess.CompletedProcess:
    """
    Run an external process to completion and fail on a nonzero exit code.

    The child inherits stdout and stderr so its output shows up directly in
    the console; stdin is closed. No timeout is applied.

    Parameters:
        executable: Program to run.
        args: Arguments passed after the program.
        env: Complete environment for the child; the ambient environment is
            used when omitted.
        description: Short label used in the error message, defaults to the
            executable's base name.

    Returns:
        subprocess.CompletedProcess: The finished process (exit code 0).

    Raises:
        ProcessError: The process exited with a nonzero code (`exit_code` is
            set) or could not be started at all (`exit_code` is None).
    """
    command = [executable, *args]
    label = description or os.path.basename(executable)
    logger.debug(f"Running: {' '.join(command)}")

    try:
        result = subprocess.run(
            command,
            stdin=subprocess.DEVNULL,
            env=dict(env) if env is not None else None,
            check=False,
        )
    except OSError as e:
        raise ProcessError(
            f"{label}: failed to start", command=command, details=str(e)
        ) from e

    if result.returncode != 0:
        raise ProcessError(
            f"{label}: exited with code {result.returncode}",
            exit_code=result.returncode,
            command=command,
        )
    return result
