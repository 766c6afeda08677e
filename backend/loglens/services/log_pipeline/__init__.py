# Log parsing and aggregation module
from .entry import LogEntry, LogLevel
from .timestamps import resolve_timestamp
from .classifier import LineKind, HeaderMatch, classify_line, match_header
from .parser import EntryParser, parse_entries, parse_files
from .summary import FileSummary, summarize_file
from .repository import EntryRepository
from .grouping import (
    GroupKeyPolicy, MessageGroup, GroupRanking,
    group_entries, toggle_selection, filter_by_group,
)
from .timeline import TimeInterval, ScatterPoint, build_timeline, build_scatter, timeline_range
from .overlap import bucket_keys, overlaps

__all__ = [
    "LogEntry",
    "LogLevel",
    "resolve_timestamp",
    "LineKind",
    "HeaderMatch",
    "classify_line",
    "match_header",
    "EntryParser",
    "parse_entries",
    "parse_files",
    "FileSummary",
    "summarize_file",
    "EntryRepository",
    "GroupKeyPolicy",
    "MessageGroup",
    "GroupRanking",
    "group_entries",
    "toggle_selection",
    "filter_by_group",
    "TimeInterval",
    "ScatterPoint",
    "build_timeline",
    "build_scatter",
    "timeline_range",
    "bucket_keys",
    "overlaps",
]
