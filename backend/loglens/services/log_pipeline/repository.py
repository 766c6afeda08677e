# repository.py - Holds every entry parsed in one upload batch. Rebuilt from scratch on each batch.

from __future__ import annotations
from typing import Iterable, List, Optional, Tuple

from .entry import LogEntry, LogLevel
from .parser import parse_files


class EntryRepository:
    """
    All entries of the current batch, in file order then appearance order.
    There is no global chronological sort; consumers order explicitly.
    """

    def __init__(self, entries: Iterable[LogEntry] = ()):
        self._entries: Tuple[LogEntry, ...] = tuple(entries)

    @classmethod
    def from_files(cls, files: Iterable[Tuple[str, str]]) -> "EntryRepository":
        return cls(parse_files(files))

    @property
    def entries(self) -> Tuple[LogEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def filter_level(self, level: Optional[LogLevel]) -> List[LogEntry]:
        if level is None:
            return list(self._entries)
        return [e for e in self._entries if e.level is level]

    def count_level(self, level: LogLevel) -> int:
        return sum(1 for e in self._entries if e.level is level)
