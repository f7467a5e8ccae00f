"""Parse *.cabal files and extract top-level ``build-depends`` names."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_TARGETS = ("executable", "library")

DEPENDENCY_PATTERN = r"\s*.+?\s*"

# Everything from the first whitespace or version operator on is a constraint.
_NAME_PATTERN = re.compile(r"[^\s<>=^&|(]+")


def resolve_targets(targets: Iterable[str] | None) -> tuple[str, ...]:
    """Return the configured targets, or the default pair when none are set."""
    configured = tuple(t for t in (targets or ()) if t)
    return configured or DEFAULT_TARGETS


def build_depends_regex(targets: Iterable[str] | None = None) -> re.Pattern[str]:
    """Compile the regex matching ``build-depends`` lists of the given targets.

    group 1 - the target keyword, e.g. library
    group 2 - the full comma separated dependency list
    """
    alternatives = "|".join(re.escape(t) for t in resolve_targets(targets))
    return re.compile(
        rf"""
        ^({alternatives})
          .*?
          build-depends:({DEPENDENCY_PATTERN}(?:,{DEPENDENCY_PATTERN})*)\n
        """,
        re.MULTILINE | re.DOTALL | re.IGNORECASE | re.VERBOSE,
    )


def dependency_name(specifier: str) -> str | None:
    """Strip any version constraint from a specifier like ``text >=1.2``."""
    match = _NAME_PATTERN.match(specifier.strip())
    if not match:
        return None
    return match.group(0)


def dependency_names(content: str, targets: Iterable[str] | None = None) -> set[str]:
    names: set[str] = set()
    if not content.endswith("\n"):
        content += "\n"
    for match in build_depends_regex(targets).finditer(content):
        for specifier in match.group(2).split(","):
            name = dependency_name(specifier)
            if name:
                names.add(name)
    return names


def parse(path: Path, targets: Iterable[str] | None = None) -> set[str]:
    """Return the set of dependency names declared by ``path``.

    Unreadable or empty files contribute nothing.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("skipping unreadable cabal file %s: %s", path, exc)
        return set()

    if not content.strip():
        logger.debug("skipping empty cabal file %s", path)
        return set()

    return dependency_names(content, targets)
