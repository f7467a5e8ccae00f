"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .models import PackageRecord


def aggregate(records: Iterable[PackageRecord], enabled: bool, source_type: str = "cabal") -> dict[str, Any]:
    """Aggregate package records into a single JSON-compatible report.

    A disabled adapter reports an empty dependency list rather than an error.
    """
    dependencies = [record.to_dict() for record in records]
    return {
        "version": "1",
        "type": source_type,
        "enabled": enabled,
        "dependencies": dependencies,
        "totals": {
            "dependencies": len(dependencies),
        },
    }
