"""Version-control helpers."""

from __future__ import annotations

import logging
from pathlib import Path

from . import shell

logger = logging.getLogger(__name__)


def repository_root(cwd: Path) -> Path | None:
    """Return the top-level directory of the git work tree containing ``cwd``.

    Outside a work tree, or without git installed, there is no root.
    """
    try:
        out, _ = shell.execute("git", "rev-parse", "--show-toplevel", cwd=cwd)
    except shell.ShellCommandError as exc:
        logger.debug("no git repository root for %s: %s", cwd, exc)
        return None
    return Path(out) if out else None
