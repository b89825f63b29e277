"""Explicit cache of single-pair cross-column results.

Entries are keyed by ``(sheet_id, target, source)``. The sheet identity is
chosen by the caller (for instance a stored file id plus sheet name) and must
change, or be invalidated, whenever the sheet contents change.

Each key is computed at most once: concurrent requests for the same missing
key wait on a per-key lock while the first one computes. A computation that
was running when its sheet was invalidated (or the cache cleared) returns its
result to the caller but does not store it.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from typing import NamedTuple

from sheetstats.analysis.correlation.models import CrossColumnStat
from sheetstats.core.logging import get_logger

logger = get_logger(__name__)


class PairKey(NamedTuple):
    """Cache key of one analyzed pair."""

    sheet_id: str
    target: str
    source: str


class CrossColumnCache:
    """Thread-safe, at-most-once-per-key store of CrossColumnStat."""

    def __init__(self) -> None:
        self._entries: dict[PairKey, CrossColumnStat] = {}
        self._key_locks: dict[PairKey, threading.Lock] = {}
        self._guard = threading.Lock()
        self._generations: dict[str, int] = {}
        self._epoch = 0
        self.computations = 0

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._guard:
            return key in self._entries

    def get(self, sheet_id: str, target: str, source: str) -> CrossColumnStat | None:
        with self._guard:
            return self._entries.get(PairKey(sheet_id, target, source))

    def get_or_compute(
        self,
        sheet_id: str,
        target: str,
        source: str,
        compute: Callable[[], CrossColumnStat],
    ) -> CrossColumnStat:
        """Return the cached stat, computing it once if it is missing.

        Exceptions from ``compute`` propagate and nothing is stored.
        """
        key = PairKey(sheet_id, target, source)
        with self._guard:
            cached = self._entries.get(key)
            if cached is not None:
                return cached
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            with self._guard:
                cached = self._entries.get(key)
            if cached is not None:
                return cached
            generation = self._generation(sheet_id)

            value = compute()
            with self._guard:
                self.computations += 1
                fresh = self._generation_locked(sheet_id) == generation
                if fresh:
                    self._entries[key] = value
            if fresh:
                logger.debug("pair_cached", sheet_id=sheet_id, target=target, source=source)
            else:
                logger.debug(
                    "stale_pair_discarded", sheet_id=sheet_id, target=target, source=source
                )
            return value

    def _generation_locked(self, sheet_id: str) -> tuple[int, int]:
        return self._epoch, self._generations.get(sheet_id, 0)

    def _generation(self, sheet_id: str) -> tuple[int, int]:
        with self._guard:
            return self._generation_locked(sheet_id)

    def seed(self, sheet_id: str, stats: Iterable[CrossColumnStat]) -> int:
        """Preload precomputed stats of a sheet; returns how many were added."""
        added = 0
        with self._guard:
            for stat in stats:
                key = PairKey(sheet_id, stat.target_column, stat.source_column)
                if key not in self._entries:
                    self._entries[key] = stat
                    added += 1
        return added

    def invalidate(self, sheet_id: str) -> int:
        """Drop every entry of a sheet; returns how many were removed."""
        with self._guard:
            self._generations[sheet_id] = self._generations.get(sheet_id, 0) + 1
            stale = [k for k in self._entries if k.sheet_id == sheet_id]
            for key in stale:
                del self._entries[key]
                self._key_locks.pop(key, None)
        if stale:
            logger.debug("cache_invalidated", sheet_id=sheet_id, entries=len(stale))
        return len(stale)

    def clear(self) -> None:
        with self._guard:
            self._entries.clear()
            self._key_locks.clear()
            self._epoch += 1
