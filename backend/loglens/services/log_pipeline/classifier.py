# classifier.py - Looks at one trimmed line and says what kind of line it is. It never decides what to do with it.

from __future__ import annotations
import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from .entry import LogLevel
from .timestamps import resolve_timestamp


# Example: 2025-04-17 08:21:24.838 +02:00 [ERR] Something failed
HEADER_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3}) ([+-]\d{2}:\d{2}) \[(.*?)\] (.*)$"
)

STACK_BOUNDARY_RE = re.compile(r"^\s*---")


class LineKind(str, Enum):
    HEADER = "header"
    CONTINUATION = "continuation"
    PLAIN = "plain"


@dataclass(frozen=True)
class HeaderMatch:
    """
    A line with the header shape.
    `level` and `timestamp` are None when the token is not ERR/WRN or the
    timestamp does not resolve; such a header cannot start an entry.
    """
    local_time: str
    offset: str
    token: str
    message: str
    level: Optional[LogLevel]
    timestamp: Optional[datetime]

    @property
    def recognized(self) -> bool:
        return self.level is not None and self.timestamp is not None


def match_header(line: str) -> Optional[HeaderMatch]:
    m = HEADER_RE.match(line)
    if not m:
        return None

    local_time, offset, token, message = m.groups()
    level = LogLevel.from_token(token)
    timestamp = resolve_timestamp(local_time, offset) if level is not None else None
    if timestamp is None:
        level = None

    return HeaderMatch(
        local_time=local_time,
        offset=offset,
        token=token,
        message=message,
        level=level,
        timestamp=timestamp,
    )


# .NET stack trace shapes: "at X.Y()", indented frames, inner exception arrows, boundary markers.
def is_continuation(line: str) -> bool:
    return (
        line.startswith("at ")
        or "   at " in line
        or "--- End of" in line
        or " ---> " in line
        or STACK_BOUNDARY_RE.match(line) is not None
    )


def classify_line(line: str) -> LineKind:
    if HEADER_RE.match(line):
        return LineKind.HEADER
    if is_continuation(line):
        return LineKind.CONTINUATION
    return LineKind.PLAIN
