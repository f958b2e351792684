"""Tests for the snapshot cache."""

from __future__ import annotations

import threading
from typing import List

from dollar_rates.cache import Snapshot, SnapshotCache
from dollar_rates.rates import RateRecord


def _record(usd: float) -> RateRecord:
    return RateRecord(eur=usd + 1, cny=usd / 7, try_=usd / 30, rub=usd / 80, usd=usd)


def test_read_before_write_is_none() -> None:
    cache = SnapshotCache()

    assert cache.read() is None
    assert cache.wait_ready(timeout=0) is False


def test_write_then_read_returns_record() -> None:
    cache = SnapshotCache(clock=lambda: 1_700_000_000_000)
    record = _record(36.5)

    cache.write(record)

    assert cache.read() == Snapshot(rates=record, updated_at=1_700_000_000_000)
    assert cache.wait_ready(timeout=0) is True


def test_write_replaces_previous_snapshot() -> None:
    ticks = iter([100, 200])
    cache = SnapshotCache(clock=lambda: next(ticks))

    cache.write(_record(36.5))
    cache.write(_record(37.0))

    snapshot = cache.read()
    assert snapshot is not None
    assert snapshot.rates.usd == 37.0
    assert snapshot.updated_at == 200


def test_timestamp_never_goes_backwards() -> None:
    ticks = iter([500, 400])
    cache = SnapshotCache(clock=lambda: next(ticks))

    cache.write(_record(36.5))
    cache.write(_record(37.0))

    snapshot = cache.read()
    assert snapshot is not None
    assert snapshot.updated_at == 500


def test_default_clock_is_epoch_millis() -> None:
    cache = SnapshotCache()
    cache.write(_record(36.5))

    snapshot = cache.read()
    assert snapshot is not None
    assert snapshot.updated_at > 1_600_000_000_000


def test_concurrent_reads_never_see_torn_snapshot() -> None:
    # updated_at always equals usd * 1000, so a torn read breaks the pairing
    counter = {"value": 0}
    cache = SnapshotCache(clock=lambda: counter["value"] * 1000)
    torn: List[Snapshot] = []
    done = threading.Event()

    def writer() -> None:
        for i in range(1, 2001):
            counter["value"] = i
            cache.write(_record(float(i)))
        done.set()

    def reader() -> None:
        while not done.is_set():
            snapshot = cache.read()
            if snapshot is not None and snapshot.updated_at != int(snapshot.rates.usd) * 1000:
                torn.append(snapshot)

    readers = [threading.Thread(target=reader) for _ in range(4)]
    for thread in readers:
        thread.start()
    writer()
    for thread in readers:
        thread.join()

    assert torn == []
