"""Tests for services/session.py"""

import pytest

from loglens.services.log_pipeline import EntryRepository, FileSummary, LogLevel
from loglens.services.session import SelectedFile, SessionHolder, SessionSnapshot


def selected(name: str) -> SelectedFile:
    return SelectedFile(name=name, text="", size_bytes=0, summary=FileSummary(name))


class TestSessionSnapshot:
    def test_defaults(self):
        snapshot = SessionSnapshot()
        assert snapshot.files == ()
        assert len(snapshot.repository) == 0
        assert snapshot.level is LogLevel.ERROR
        assert snapshot.selected_group is None

    def test_transitions_return_new_snapshots(self):
        original = SessionSnapshot()
        changed = original.with_files_added(selected("a.log"))
        assert original.files == ()
        assert [f.name for f in changed.files] == ["a.log"]

    def test_remove_file(self):
        snapshot = SessionSnapshot().with_files_added(selected("a.log"), selected("b.log"), selected("a.log"))
        snapshot = snapshot.with_file_removed(1)
        assert [f.name for f in snapshot.files] == ["a.log", "a.log"]

    def test_remove_out_of_range(self):
        with pytest.raises(IndexError):
            SessionSnapshot().with_file_removed(0)
        with pytest.raises(IndexError):
            SessionSnapshot().with_files_added(selected("a.log")).with_file_removed(-1)

    def test_selection_toggle(self):
        snapshot = SessionSnapshot().with_selection_toggled("A")
        assert snapshot.selected_group == "A"
        assert snapshot.with_selection_toggled("A").selected_group is None
        assert snapshot.with_selection_toggled("B").selected_group == "B"
        assert snapshot.with_selection_toggled(None).selected_group is None

    def test_level_change_clears_selection(self):
        snapshot = SessionSnapshot().with_selection_toggled("A").with_level(LogLevel.WARNING)
        assert snapshot.level is LogLevel.WARNING
        assert snapshot.selected_group is None

    def test_new_repository_clears_selection(self, make_entry):
        snapshot = SessionSnapshot().with_selection_toggled("A")
        snapshot = snapshot.with_repository(EntryRepository([make_entry("10:00")]))
        assert len(snapshot.repository) == 1
        assert snapshot.selected_group is None

    def test_new_repository_keeps_level(self):
        snapshot = SessionSnapshot().with_level(LogLevel.WARNING).with_repository(EntryRepository())
        assert snapshot.level is LogLevel.WARNING


class TestSessionHolder:
    def test_replace_and_reset(self):
        holder = SessionHolder()
        first = holder.current
        second = holder.replace(first.with_level(LogLevel.WARNING))
        assert holder.current is second
        assert first.level is LogLevel.ERROR
        assert holder.reset().level is LogLevel.ERROR
