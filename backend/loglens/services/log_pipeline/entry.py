# entry.py - The clean log card every parsed entry is forced into.

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class LogLevel(str, Enum):
    """The only two levels an entry can carry. Values are the bracketed tokens."""
    ERROR = "ERR"
    WARNING = "WRN"

    @classmethod
    def from_token(cls, token: str) -> Optional["LogLevel"]:
        # Exact match only: "err", "ERROR", "WARN" do not normalize
        for level in cls:
            if level.value == token:
                return level
        return None


@dataclass(frozen=True)
class LogEntry:
    timestamp: datetime
    level: LogLevel
    message: str
    source_file: str
