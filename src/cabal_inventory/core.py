"""Core entrypoints for the cabal dependency source.

This module MUST NOT contain CLI-specific concerns so it can be embedded in a
larger multi-ecosystem inventory run.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

from .config import CabalConfig, load_config
from .describer import PackageDescriber
from .discovery import scan_cabal_dependencies
from .models import PackageRecord
from .registry import GhcPkgRegistry
from .report import aggregate
from .resolver import ClosureResolver

logger = logging.getLogger(__name__)


class CabalSource:
    """Inventory of the Haskell packages a cabal project depends on."""

    type = "cabal"

    def __init__(self, config: CabalConfig, registry: GhcPkgRegistry | None = None) -> None:
        self.config = config
        self.registry = registry or GhcPkgRegistry(config)
        self._cabal_file_dependencies: set[str] | None = None
        self._enabled: bool | None = None
        self._dependencies: list[PackageRecord] | None = None

    @property
    def cabal_file_dependencies(self) -> set[str]:
        """Top-level dependency names declared by the project's cabal files."""
        if self._cabal_file_dependencies is None:
            self._cabal_file_dependencies = scan_cabal_dependencies(
                self.config.root, self.config.targets
            )
        return self._cabal_file_dependencies

    def enabled(self) -> bool:
        if self._enabled is None:
            if not self.cabal_file_dependencies:
                logger.debug("no cabal dependencies found in %s", self.config.root)
                self._enabled = False
            elif not self.registry.available:
                logger.debug("ghc is not available, skipping cabal dependencies")
                self._enabled = False
            else:
                self._enabled = True
        return self._enabled

    def package_ids(self) -> set[str]:
        """Return the ids of all direct and transitive dependencies."""
        resolver = ClosureResolver(self.registry, max_workers=self.config.query_workers)
        return resolver.resolve(self.cabal_file_dependencies)

    def dependencies(self) -> list[PackageRecord]:
        if self._dependencies is None:
            self._dependencies = self._describe_all() if self.enabled() else []
        return self._dependencies

    def _describe_all(self) -> list[PackageRecord]:
        ids = sorted(self.package_ids())
        describer = PackageDescriber(self.registry, self.config.root)
        workers = max(1, min(self.config.query_workers, len(ids) or 1))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            records = list(pool.map(describer.describe, ids))
        logger.info("resolved %d cabal dependencies", len(records))
        return sorted(records, key=lambda r: (r.name or "", r.version or "", r.id))


def scan_project(root: Path, config: CabalConfig | None = None) -> dict[str, Any]:
    """Resolve the cabal dependencies of a project into a report dict.

    Params:
        root: project root containing the *.cabal files
        config: optional pre-loaded configuration; loaded from the project
            when None (may raise ConfigError)
    """
    if config is None:
        config = load_config(root)
    source = CabalSource(config)
    return aggregate(source.dependencies(), enabled=source.enabled(), source_type=source.type)
