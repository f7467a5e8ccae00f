"""Shared fixtures: an in-memory stand-in for the ghc/ghc-pkg executables."""

from __future__ import annotations

import time
from pathlib import Path

import pytest

from cabal_inventory.config import CabalConfig
from cabal_inventory.registry import GhcPkgRegistry


class FakeGhcPkg:
    """Answer ``ghc --numeric-version`` and ``ghc-pkg field`` invocations.

    ``names`` maps bare package names to installed ids; ``packages`` maps
    installed ids to their ghc-pkg fields.
    """

    def __init__(
        self,
        names: dict[str, str] | None = None,
        packages: dict[str, dict[str, str]] | None = None,
        version: str = "9.4.7",
        version_delay: float = 0.0,
    ) -> None:
        self.names = names or {}
        self.packages = packages or {}
        self.version = version
        self.version_delay = version_delay
        self.calls: list[tuple[str, ...]] = []

    def __call__(self, cmd: str, *args: str, allow_failure: bool = False, timeout=None, cwd=None):
        self.calls.append((cmd, *args))
        if cmd == "ghc" and args == ("--numeric-version",):
            time.sleep(self.version_delay)
            return self.version, True
        if cmd != "ghc-pkg" or not args or args[0] != "field":
            return "", False

        target, fields = args[1], args[2].split(",")
        if "--ipid" in args[3:]:
            info = self.packages.get(target)
        else:
            id = self.names.get(target)
            info = dict(self.packages.get(id, {}), id=id) if id else None
        if info is None:
            return "", False

        lines = [f"{field}: {info[field]}" for field in fields if field in info]
        return "\n".join(lines), True

    def field_queries(self) -> list[tuple[str, ...]]:
        return [call for call in self.calls if call[:2] == ("ghc-pkg", "field")]


def _make_registry(fake: FakeGhcPkg, config: CabalConfig, available: bool = True) -> GhcPkgRegistry:
    return GhcPkgRegistry(
        config,
        execute=fake,
        tool_available=lambda cmd: available,
        repository_root=lambda root: None,
    )


@pytest.fixture
def ghc_pkg():
    """Factory for fake ghc-pkg executors."""
    return FakeGhcPkg


@pytest.fixture
def registry_for():
    """Build a registry answering from a fake executor, with ghc installed by default."""
    return _make_registry


@pytest.fixture
def config(tmp_path: Path) -> CabalConfig:
    return CabalConfig(root=tmp_path, query_workers=1)


@pytest.fixture
def scenario() -> FakeGhcPkg:
    """base, text and mylib where mylib -> text -> base."""
    return FakeGhcPkg(
        names={"base": "id1", "text": "id2", "mylib": "id3"},
        packages={
            "id1": {"name": "base", "version": "4.17.0.0", "depends": ""},
            "id2": {"name": "text", "version": "2.0.1", "depends": "id1"},
            "id3": {"name": "mylib", "version": "0.1.0", "depends": "id2"},
        },
    )
