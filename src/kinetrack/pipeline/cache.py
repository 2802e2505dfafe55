"""Recomputation throttle for metrics snapshots."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from kinetrack.analysis.metrics import PerformanceMetrics

Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Monotonic clock in milliseconds."""
    return time.monotonic() * 1000.0


@dataclass(frozen=True, slots=True)
class CachedMetrics:
    """A snapshot and the clock reading (ms) when it was computed."""

    snapshot: PerformanceMetrics
    computed_at_ms: float


class MetricsCache:
    """Holds the last computed snapshot and decides when it is stale.

    A snapshot is stale when none exists or strictly more than
    ``interval_ms`` has elapsed since it was computed.
    """

    def __init__(self, interval_ms: float = 33.0, clock: Clock | None = None) -> None:
        self.interval_ms = interval_ms
        self.clock = clock or monotonic_ms
        self._cached: CachedMetrics | None = None

    @property
    def cached(self) -> CachedMetrics | None:
        """Last stored entry."""
        return self._cached

    @property
    def snapshot(self) -> PerformanceMetrics | None:
        """Last stored snapshot."""
        return self._cached.snapshot if self._cached else None

    def is_stale(self, now_ms: float | None = None) -> bool:
        """Check whether the snapshot needs recomputing."""
        if self._cached is None:
            return True
        now = self.clock() if now_ms is None else now_ms
        return now - self._cached.computed_at_ms > self.interval_ms

    def get_or_compute(self, compute: Callable[[], PerformanceMetrics]) -> PerformanceMetrics:
        """Return the cached snapshot, recomputing it first if stale.

        Args:
            compute: Produces a fresh snapshot

        Returns:
            The current snapshot (the same object between recomputations)
        """
        now = self.clock()
        if self._cached is None or self.is_stale(now):
            self._cached = CachedMetrics(snapshot=compute(), computed_at_ms=now)
        return self._cached.snapshot

    def clear(self) -> None:
        """Forget the cached snapshot."""
        self._cached = None
