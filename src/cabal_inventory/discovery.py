"""Cabal manifest discovery utilities."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from .parsers.cabal_file import parse as parse_cabal_file

CABAL_FILE_PATTERN = "*.cabal"


def discover_cabal_files(root: Path) -> list[Path]:
    """Find cabal package files directly inside root (not recursive)."""
    root = root.resolve()
    return sorted(p for p in root.glob(CABAL_FILE_PATTERN) if p.is_file())


def scan_cabal_dependencies(root: Path, targets: Iterable[str] | None = None) -> set[str]:
    """Return the union of top-level dependency names across all cabal files."""
    targets = tuple(targets or ())
    names: set[str] = set()
    for path in discover_cabal_files(root):
        names |= parse_cabal_file(path, targets)
    return names
