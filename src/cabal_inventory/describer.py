"""Build package records from ghc-pkg package information."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from .homepage import sanitize_homepage
from .models import PackageRecord

PACKAGE_INFO_FIELDS = ("name", "version", "synopsis", "homepage", "haddock-html", "data-dir")


class FieldRegistry(Protocol):
    def fields(self, id: str, names: list[str] | tuple[str, ...], use_ipid: bool = True) -> dict[str, str]: ...


def is_descendant(path: str, ancestor: str) -> bool:
    """Whether ``path`` lies strictly below the ``ancestor`` directory."""
    path = os.path.normpath(path)
    ancestor = os.path.normpath(ancestor)
    if path == ancestor:
        return False
    return path.startswith(ancestor.rstrip(os.sep) + os.sep)


def package_docs_dirs(info: Mapping[str, str], root: Path, name: str) -> tuple[str, str | None]:
    """Return the package's documentation directory and license search root.

    Without ``haddock-html`` the docs are expected in ``<root>/vendor/<name>``.
    ``data-dir`` is only accepted as a search root when it is an ancestor of
    the html directory.
    """
    html_dir = info.get("haddock-html")
    if not html_dir:
        return str(root / "vendor" / name), None

    data_dir = info.get("data-dir")
    if not data_dir or not is_descendant(html_dir, data_dir):
        return html_dir, None

    return html_dir, data_dir


class PackageDescriber:
    """Describe resolved package ids for the report."""

    def __init__(self, registry: FieldRegistry, root: Path) -> None:
        self.registry = registry
        self.root = root

    def describe(self, id: str) -> PackageRecord:
        info = self.registry.fields(id, PACKAGE_INFO_FIELDS, use_ipid=True)
        name = info.get("name")
        # vendor fallback needs a directory name even when ghc-pkg has none
        doc_dir, search_root = package_docs_dirs(info, self.root, name or id)
        return PackageRecord(
            id=id,
            name=name,
            version=info.get("version"),
            summary=info.get("synopsis"),
            homepage=sanitize_homepage(info.get("homepage")),
            doc_dir=doc_dir,
            search_root=search_root,
        )
