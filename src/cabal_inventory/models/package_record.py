"""Package record model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PackageRecord:
    """Metadata for one installed package resolved from the ghc package DBs."""

    id: str
    name: str | None = None
    version: str | None = None
    summary: str | None = None
    homepage: str | None = None
    doc_dir: str | None = None
    search_root: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Package id must be non-empty")
        if self.name is not None and not self.name:
            raise ValueError("Package name must be non-empty when present")

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "version": self.version,
            "summary": self.summary,
            "homepage": self.homepage,
            "docDir": self.doc_dir,
            "searchRoot": self.search_root,
        }
