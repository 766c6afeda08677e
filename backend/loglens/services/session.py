"""
Immutable analysis state.

A SessionSnapshot holds everything a view is computed from: the selected
files (with their quick summaries), the repository built by the last
"process" action, the level filter and the selected group. Every user action
returns a new snapshot; SessionHolder swaps the reference.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from loglens.services.log_pipeline import (
    EntryRepository, FileSummary, LogLevel, toggle_selection
)


@dataclass(frozen=True)
class SelectedFile:
    """A file picked for the next batch, kept as decoded text. `text` is None if it could not be read."""
    name: str
    text: Optional[str]
    size_bytes: int
    summary: FileSummary
    read_error: Optional[str] = None


@dataclass(frozen=True)
class SessionSnapshot:
    files: Tuple[SelectedFile, ...] = ()
    repository: EntryRepository = field(default_factory=EntryRepository)
    level: LogLevel = LogLevel.ERROR
    selected_group: Optional[str] = None

    def with_files_added(self, *new_files: SelectedFile) -> "SessionSnapshot":
        return replace(self, files=self.files + tuple(new_files))

    def with_file_removed(self, index: int) -> "SessionSnapshot":
        if index < 0 or index >= len(self.files):
            raise IndexError(f"No selected file at index {index}")
        return replace(self, files=self.files[:index] + self.files[index + 1:])

    def with_repository(self, repository: EntryRepository) -> "SessionSnapshot":
        # A new batch replaces the old one wholesale; the old selection means nothing now
        return replace(self, repository=repository, selected_group=None)

    def with_level(self, level: LogLevel) -> "SessionSnapshot":
        return replace(self, level=level, selected_group=None)

    def with_selection_toggled(self, key: Optional[str]) -> "SessionSnapshot":
        if key is None:
            return replace(self, selected_group=None)
        return replace(self, selected_group=toggle_selection(self.selected_group, key))


class SessionHolder:
    """Keeps the current snapshot. Readers always see a complete snapshot."""

    def __init__(self, snapshot: Optional[SessionSnapshot] = None):
        self._snapshot = snapshot or SessionSnapshot()

    @property
    def current(self) -> SessionSnapshot:
        return self._snapshot

    def replace(self, snapshot: SessionSnapshot) -> SessionSnapshot:
        self._snapshot = snapshot
        return snapshot

    def reset(self) -> SessionSnapshot:
        return self.replace(SessionSnapshot())
