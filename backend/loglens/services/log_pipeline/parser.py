# parser.py - Reads one log file and turns it into clean LogEntry cards, gluing stack trace lines onto the entry they belong to.

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .classifier import LineKind, classify_line, match_header
from .entry import LogEntry


class ParserState(str, Enum):
    IDLE = "idle"
    OPEN = "open"


@dataclass(frozen=True)
class SourceLine:
    """A non-empty physical line: `text` is trimmed for matching, `body` keeps its indentation for the message."""
    text: str
    body: str


def split_source_lines(text: str) -> List[SourceLine]:
    lines: List[SourceLine] = []
    for raw in text.split("\n"):
        trimmed = raw.strip()
        if trimmed:
            lines.append(SourceLine(text=trimmed, body=raw.rstrip()))
    return lines


class EntryParser:
    """
    Per-file state machine.

    IDLE --header(ERR/WRN)--> OPEN
    OPEN --continuation--> OPEN (line appended)
    OPEN --plain, next line is continuation--> OPEN (line appended)
    OPEN --plain otherwise--> IDLE (line dropped)
    OPEN --header(other token)--> IDLE (entry emitted)
    """

    def __init__(self, source_file: str):
        self.source_file = source_file
        self._reset()

    def _reset(self) -> None:
        self.state = ParserState.IDLE
        self._open: Optional[LogEntry] = None
        self._lines: List[str] = []
        self._entries: List[LogEntry] = []

    def parse(self, text: str) -> List[LogEntry]:
        """Parse `text` from a clean state; each call returns only its own entries."""
        self._reset()
        lines = split_source_lines(text)
        for i, line in enumerate(lines):
            lookahead = lines[i + 1] if i + 1 < len(lines) else None
            self._feed(line, lookahead)
        self._close()
        return self._entries

    def _feed(self, line: SourceLine, lookahead: Optional[SourceLine]) -> None:
        kind = classify_line(line.text)

        if kind is LineKind.HEADER:
            self._close()
            header = match_header(line.text)
            if header is not None and header.recognized:
                self._open = LogEntry(
                    timestamp=header.timestamp,
                    level=header.level,
                    message=header.message,
                    source_file=self.source_file,
                )
                self._lines = [header.message]
                self.state = ParserState.OPEN
            return

        if self.state is ParserState.IDLE:
            return

        if kind is LineKind.CONTINUATION:
            self._lines.append(line.body)
            return

        # Plain text sandwiched between trace lines still belongs to the trace
        if lookahead is not None and classify_line(lookahead.text) is LineKind.CONTINUATION:
            self._lines.append(line.body)
            return

        self._close()

    def _close(self) -> None:
        if self._open is not None:
            entry = self._open
            self._entries.append(LogEntry(
                timestamp=entry.timestamp,
                level=entry.level,
                message="\n".join(self._lines),
                source_file=entry.source_file,
            ))
        self._open = None
        self._lines = []
        self.state = ParserState.IDLE


def parse_entries(text: str, source_file: str = "") -> List[LogEntry]:
    """Parse one file's text. Malformed input yields fewer (or zero) entries, never an exception."""
    return EntryParser(source_file).parse(text)


# Files are independent; results keep the order the files were given in.
def parse_files(files: Iterable[Tuple[str, str]]) -> List[LogEntry]:
    entries: List[LogEntry] = []
    for name, text in files:
        entries.extend(parse_entries(text, name))
    return entries
