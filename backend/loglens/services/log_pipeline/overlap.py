# overlap.py - Tells whether two sets of entries ever fell into the same 15 minute window.
# Buckets are counted from the Unix epoch, not from the padded timeline start.

from __future__ import annotations
from datetime import datetime, timezone
from typing import FrozenSet, Iterable

from .entry import LogEntry
from .timeline import INTERVAL

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def bucket_key(ts: datetime) -> int:
    return (ts - EPOCH) // INTERVAL


def bucket_keys(entries: Iterable[LogEntry]) -> FrozenSet[int]:
    return frozenset(bucket_key(e.timestamp) for e in entries)


def overlaps(a: Iterable[LogEntry], b: Iterable[LogEntry]) -> bool:
    return not bucket_keys(a).isdisjoint(bucket_keys(b))
