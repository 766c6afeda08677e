# timeline.py - Spreads entries over fixed 15 minute buckets for the timeline chart.

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple

from .entry import LogEntry, LogLevel

INTERVAL = timedelta(minutes=15)
RANGE_PADDING = timedelta(minutes=30)


@dataclass
class TimeInterval:
    start: datetime
    error_count: int = 0
    warning_count: int = 0
    entries: List[LogEntry] = field(default_factory=list)

    @property
    def end(self) -> datetime:
        return self.start + INTERVAL

    @property
    def duration_minutes(self) -> int:
        return int(INTERVAL.total_seconds() // 60)

    @property
    def count(self) -> int:
        return self.error_count + self.warning_count

    def add(self, entry: LogEntry) -> None:
        if entry.level is LogLevel.ERROR:
            self.error_count += 1
        else:
            self.warning_count += 1
        self.entries.append(entry)


# One dot per raw occurrence, drawn on top of the binned line when a group is selected
@dataclass(frozen=True)
class ScatterPoint:
    timestamp: datetime
    level: LogLevel
    source_file: str
    interval_count: int


def timeline_range(entries: Iterable[LogEntry]) -> Optional[Tuple[datetime, datetime]]:
    """
    (start, end) padded by 30 minutes on both sides, or None when there is nothing to plot.
    Callers pass the level-filtered set so the axis stays put when a group is selected.
    """
    timestamps = [e.timestamp for e in entries]
    if not timestamps:
        return None
    return min(timestamps) - RANGE_PADDING, max(timestamps) + RANGE_PADDING


def make_intervals(start: datetime, end: datetime) -> List[TimeInterval]:
    # The last interval is the one whose [s, s + 15min) contains end
    count = (end - start) // INTERVAL + 1
    return [TimeInterval(start=start + i * INTERVAL) for i in range(count)]


def build_timeline(
    range_entries: Sequence[LogEntry],
    counted_entries: Optional[Iterable[LogEntry]] = None,
) -> List[TimeInterval]:
    """
    Bucket `counted_entries` (defaults to `range_entries`) into intervals
    spanning the padded range of `range_entries`.
    Each bucket is half-open [start, start + 15min).
    """
    bounds = timeline_range(range_entries)
    if bounds is None:
        return []

    start, end = bounds
    intervals = make_intervals(start, end)

    for e in range_entries if counted_entries is None else counted_entries:
        if e.timestamp < start or e.timestamp > end:
            continue
        intervals[(e.timestamp - start) // INTERVAL].add(e)

    return intervals


def build_scatter(intervals: Iterable[TimeInterval]) -> List[ScatterPoint]:
    return [
        ScatterPoint(
            timestamp=e.timestamp,
            level=e.level,
            source_file=e.source_file,
            interval_count=interval.count,
        )
        for interval in intervals
        for e in interval.entries
    ]


def level_totals(intervals: Iterable[TimeInterval]) -> Tuple[int, int]:
    errors = 0
    warnings = 0
    for interval in intervals:
        errors += interval.error_count
        warnings += interval.warning_count
    return errors, warnings
