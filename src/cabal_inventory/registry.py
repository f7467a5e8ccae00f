"""Queries against the ghc package databases via ``ghc-pkg``.

Every query is allowed to fail: a non-zero exit, a timeout or empty output
means the requested id or field is unknown, never a hard error.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from pathlib import Path

from packaging.version import InvalidVersion, Version

from . import git, shell
from .config import CabalConfig
from .parsers.ghc_pkg import field_value, parse_fields

logger = logging.getLogger(__name__)

GHC = "ghc"
GHC_PKG = "ghc-pkg"
GHC_VERSION_PLACEHOLDER = "<ghc_version>"
DB_FLAGS = {"global", "user"}

Execute = Callable[..., tuple[str, bool]]


class GhcPkgRegistry:
    """Installed package lookups for one project.

    The ghc availability probe, the ghc version and the package DB arguments
    are computed once per instance under a lock, since the queries of a
    resolution round run concurrently.
    """

    def __init__(
        self,
        config: CabalConfig,
        execute: Execute = shell.execute,
        tool_available: Callable[[str], bool] = shell.tool_available,
        repository_root: Callable[[Path], Path | None] = git.repository_root,
    ) -> None:
        self.config = config
        self._execute = execute
        self._tool_available = tool_available
        self._repository_root = repository_root
        self._available: bool | None = None
        self._ghc_version: str | None = None
        self._version_probed = False
        self._db_args: list[str] | None = None
        self._lock = threading.RLock()

    @property
    def available(self) -> bool:
        """Whether the ghc toolchain is installed on this host."""
        with self._lock:
            if self._available is None:
                self._available = self._tool_available(GHC)
        return self._available

    @property
    def ghc_version(self) -> str | None:
        with self._lock:
            if not self._version_probed:
                if self.available:
                    self._ghc_version = self._probe_version()
                self._version_probed = True
        return self._ghc_version

    def _probe_version(self) -> str | None:
        out, ok = self._run(GHC, "--numeric-version")
        if not ok or not out:
            return None
        try:
            Version(out)
        except InvalidVersion:
            logger.warning("unexpected ghc version string %r", out)
        return out

    def package_db_args(self) -> list[str]:
        """Return ``ghc-pkg`` package DB selector arguments from configuration.

        ``global`` and ``user`` pass through as flags. Other entries are path
        templates resolved relative to the repository root and only kept when
        they exist.
        """
        with self._lock:
            if self._db_args is None:
                self._db_args = list(self._realize_db_args(self.config.package_dbs))
        return self._db_args

    def _realize_db_args(self, selectors: Iterable[str]) -> Iterable[str]:
        base: Path | None = None
        for selector in selectors:
            if selector in DB_FLAGS:
                yield f"--{selector}"
                continue

            if GHC_VERSION_PLACEHOLDER in selector:
                version = self.ghc_version
                if version is None:
                    logger.debug("dropping package db %s: ghc version unknown", selector)
                    continue
                selector = selector.replace(GHC_VERSION_PLACEHOLDER, version)

            if base is None:
                base = self._repository_root(self.config.root) or self.config.root
            path = (base / Path(selector).expanduser()).resolve()
            if not path.exists():
                logger.debug("dropping missing package db %s", path)
                continue
            yield f"--package-db={path}"

    def _run(self, cmd: str, *args: str) -> tuple[str, bool]:
        return self._execute(
            cmd, *args, allow_failure=True, timeout=self.config.query_timeout
        )

    def _field_command(self, id: str, fields: Iterable[str], *args: str) -> str:
        out, ok = self._run(GHC_PKG, "field", id, ",".join(fields), *args, *self.package_db_args())
        return out if ok else ""

    def resolve_id(self, name: str) -> str | None:
        """Return the installed package id for a bare package name."""
        return field_value(self._field_command(name, ["id"]), "id")

    def fields(self, id: str, names: Iterable[str], use_ipid: bool = True) -> dict[str, str]:
        """Return the requested fields for a package.

        ``use_ipid`` passes ``id`` as an installed package id rather than a
        package name.
        """
        args = ("--ipid",) if use_ipid else ()
        return parse_fields(self._field_command(id, names, *args))

    def depends(self, id: str) -> list[str]:
        """Return the installed package ids that ``id`` depends on."""
        return self.fields(id, ["depends"]).get("depends", "").split()
