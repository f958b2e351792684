"""In-memory cache holding the latest rate snapshot."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from dollar_rates.rates import RateRecord


def current_time_millis() -> int:
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class Snapshot:
    """A rate record together with the time it was captured."""

    rates: RateRecord
    updated_at: int


class SnapshotCache:
    """Holds at most one snapshot, replaced wholesale on each write.

    Snapshots are immutable, so a write builds a new one and swaps the
    reference under the lock. Readers get either the old or the new
    snapshot, never a mix of the two.
    """

    def __init__(self, clock: Callable[[], int] = current_time_millis) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._ready = threading.Event()
        self._snapshot: Optional[Snapshot] = None

    def write(self, record: RateRecord) -> None:
        """Publish ``record`` stamped with the current time."""
        with self._lock:
            updated_at = self._clock()
            if self._snapshot is not None and updated_at < self._snapshot.updated_at:
                # wall clock stepped backwards
                updated_at = self._snapshot.updated_at
            self._snapshot = Snapshot(rates=record, updated_at=updated_at)
        self._ready.set()

    def read(self) -> Optional[Snapshot]:
        """Return the current snapshot, or ``None`` before the first write."""
        with self._lock:
            return self._snapshot

    def wait_ready(self, timeout: float | None = None) -> bool:
        """Block until a snapshot exists. Returns ``False`` on timeout."""
        return self._ready.wait(timeout)
