"""Transitive closure of the ghc-pkg ``depends`` relation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol, TypeVar

from .config import DEFAULT_QUERY_WORKERS

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class DependencyRegistry(Protocol):
    """The registry lookups the resolver relies on."""

    def resolve_id(self, name: str) -> str | None: ...

    def depends(self, id: str) -> list[str]: ...


class ClosureResolver:
    """Expand top-level package names into every package id they depend on.

    Each round queries the ``depends`` field of the ids first seen in the
    previous round. Rounds repeat until no new id turns up, so cycles in the
    relation terminate once every id in them has been seen.
    """

    def __init__(self, registry: DependencyRegistry, max_workers: int = DEFAULT_QUERY_WORKERS) -> None:
        self.registry = registry
        self.max_workers = max(1, max_workers)

    def _map(self, func: Callable[[T], R], items: Iterable[T]) -> list[R]:
        # all queries of a round complete before any result is used
        items = list(items)
        if self.max_workers == 1 or len(items) <= 1:
            return [func(item) for item in items]
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(items))) as pool:
            return list(pool.map(func, items))

    def resolve_ids(self, names: Iterable[str]) -> set[str]:
        """Map bare package names to installed ids, dropping unknown names."""
        return {id for id in self._map(self.registry.resolve_id, sorted(set(names))) if id}

    def resolve(self, raw_names: Iterable[str]) -> set[str]:
        names = set(raw_names)
        if not names:
            return set()

        seen: set[str] = set()
        frontier = self.resolve_ids(names)
        round_number = 0
        while True:
            new_ids = frontier - seen
            if not new_ids:
                break
            round_number += 1
            logger.debug("closure round %d: %d new package ids", round_number, len(new_ids))
            seen |= new_ids

            frontier = set()
            for depends in self._map(self.registry.depends, sorted(new_ids)):
                frontier.update(depends)

        return seen
