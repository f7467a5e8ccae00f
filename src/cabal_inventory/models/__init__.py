"""Data models for the cabal dependency inventory."""

from __future__ import annotations

from .package_record import PackageRecord

__all__ = [
    "PackageRecord",
]
