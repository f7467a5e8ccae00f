"""Process execution helpers for external tool invocations."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


class ShellCommandError(RuntimeError):
    """Raised when a command fails and failure was not allowed."""


def execute(
    cmd: str,
    *args: str,
    allow_failure: bool = False,
    timeout: float | None = None,
    cwd: Path | str | None = None,
) -> tuple[str, bool]:
    """Run ``cmd`` with ``args`` and return ``(stdout, success)``.

    With ``allow_failure`` a non-zero exit, a missing executable or a timeout
    yields ``("", False)``; otherwise they raise ShellCommandError.
    """
    argv = [cmd, *args]
    try:
        proc = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            timeout=timeout,
            cwd=cwd,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        if allow_failure:
            logger.debug("command %s failed to run: %s", argv, exc)
            return "", False
        raise ShellCommandError(f"Failed to run {' '.join(argv)}: {exc}") from exc

    if proc.returncode != 0:
        if allow_failure:
            logger.debug("command %s exited with %s", argv, proc.returncode)
            return "", False
        raise ShellCommandError(
            f"{' '.join(argv)} exited with status {proc.returncode}: {proc.stderr.strip()}"
        )

    return proc.stdout.strip(), True


def tool_available(cmd: str) -> bool:
    return shutil.which(cmd) is not None
