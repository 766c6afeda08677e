"""Tests for log_pipeline/parser.py

Grouping-independent; messages are compared verbatim.
"""

from loglens.services.log_pipeline import LogLevel, parse_entries, parse_files
from loglens.services.log_pipeline.parser import EntryParser, ParserState, split_source_lines

from conftest import utc

H1 = "2025-04-17 08:21:24.838 +02:00 [ERR] Boom"
H2 = "2025-04-17 08:25:00.000 +02:00 [WRN] Careful"
H3 = "2025-04-17 08:26:00.000 +02:00 [ERR] Again"
INFO = "2025-04-17 08:25:30.000 +02:00 [INF] Just saying"


def lines(*parts: str) -> str:
    return "\n".join(parts) + "\n"


class TestSplitSourceLines:
    def test_drops_blank_lines_and_keeps_indentation(self):
        result = split_source_lines("a\n\n   at X()  \r\n   \n")
        assert [l.text for l in result] == ["a", "at X()"]
        assert [l.body for l in result] == ["a", "   at X()"]


class TestHeadersOnly:
    def test_one_entry_per_header_in_file_order(self):
        entries = parse_entries(lines(H1, H2, H3), "app.log")
        assert [e.message for e in entries] == ["Boom", "Careful", "Again"]
        assert [e.level for e in entries] == [LogLevel.ERROR, LogLevel.WARNING, LogLevel.ERROR]

    def test_entry_fields(self):
        (entry,) = parse_entries(H1, "app.log")
        assert entry.timestamp == utc(2025, 4, 17, 6, 21, 24, 838000)
        assert entry.source_file == "app.log"

    def test_file_order_is_kept_even_when_not_chronological(self):
        entries = parse_entries(lines(H3, H1))
        assert [e.message for e in entries] == ["Again", "Boom"]


class TestContinuations:
    def test_spec_example(self):
        entries = parse_entries(lines(H1, "   at Foo.Bar()", H2))
        assert len(entries) == 2
        assert entries[0].level is LogLevel.ERROR
        assert entries[0].message == "Boom\n   at Foo.Bar()"
        assert entries[1].level is LogLevel.WARNING
        assert entries[1].message == "Careful"

    def test_n_continuation_lines_joined_in_order(self):
        trace = [
            "   at A.One()",
            "   at B.Two()",
            "--- End of stack trace from previous location ---",
            "   at C.Three()",
        ]
        (entry,) = parse_entries(lines(H1, *trace))
        assert entry.message == "\n".join(["Boom", *trace])

    def test_windows_line_endings(self):
        entries = parse_entries(H1 + "\r\n   at Foo.Bar()\r\n" + H2 + "\r\n")
        assert entries[0].message == "Boom\n   at Foo.Bar()"
        assert entries[1].message == "Careful"

    def test_inner_exception_arrow(self):
        text = lines(H1, "System.Exception: outer ---> System.IO.IOException: inner", "   at X()")
        (entry,) = parse_entries(text)
        assert entry.message.count("\n") == 2


class TestLookahead:
    def test_plain_line_between_trace_lines_is_kept(self):
        text = lines(H1, "   at A()", "System.InvalidOperationException: nope", "   at B()")
        (entry,) = parse_entries(text)
        assert entry.message == "Boom\n   at A()\nSystem.InvalidOperationException: nope\n   at B()"

    def test_plain_line_right_after_header_is_kept_when_trace_follows(self):
        text = lines(H1, "System.Exception: details", "   at A()")
        (entry,) = parse_entries(text)
        assert entry.message == "Boom\nSystem.Exception: details\n   at A()"

    def test_lookahead_skips_blank_lines(self):
        text = H1 + "\nplain\n\n\n   at B()\n"
        (entry,) = parse_entries(text)
        assert entry.message == "Boom\nplain\n   at B()"

    def test_plain_line_without_trace_after_closes_entry(self):
        text = lines(H1, "just a note", "another note", "   at Lost()")
        (entry,) = parse_entries(text)
        assert entry.message == "Boom"

    def test_plain_line_at_end_of_file_closes_entry(self):
        (entry,) = parse_entries(lines(H1, "   at A()", "trailing text"))
        assert entry.message == "Boom\n   at A()"

    def test_closed_entry_is_not_reopened_by_later_trace(self):
        entries = parse_entries(lines(H1, "note", "other", "   at A()", H2))
        assert [e.message for e in entries] == ["Boom", "Careful"]


class TestUnrecognizedHeaders:
    def test_unknown_token_closes_open_entry(self):
        text = lines(H1, "   at A()", INFO, "   at Ignored()", H2)
        entries = parse_entries(text)
        assert [e.message for e in entries] == ["Boom\n   at A()", "Careful"]

    def test_unknown_token_never_starts_entry(self):
        assert parse_entries(lines(INFO, "   at X()")) == []

    def test_bad_timestamp_header_closes_entry(self):
        bad = "2025-13-45 08:00:00.000 +02:00 [ERR] Impossible"
        entries = parse_entries(lines(H1, bad, "   at X()", H2))
        assert [e.message for e in entries] == ["Boom", "Careful"]


class TestMalformedInput:
    def test_garbage_before_header_is_discarded(self):
        entries = parse_entries(lines("garbage not a log line", H1))
        assert [e.message for e in entries] == ["Boom"]

    def test_no_matching_lines(self):
        assert parse_entries("nothing to see\n   at Foo()\n") == []

    def test_empty_text(self):
        assert parse_entries("") == []

    def test_header_out_of_datetime_range_is_unrecognized(self):
        text = lines(H1, "0001-01-01 00:00:00.000 +02:00 [ERR] Too early", "   at A()")
        entries = parse_entries(text)
        assert [e.message for e in entries] == ["Boom"]


class TestParserState:
    def test_state_returns_to_idle(self):
        parser = EntryParser("app.log")
        parser.parse(lines(H1, "   at A()"))
        assert parser.state is ParserState.IDLE

    def test_parse_again_starts_clean(self):
        parser = EntryParser("app.log")
        parser.parse(lines(H1))
        entries = parser.parse(lines(H2))
        assert [e.message for e in entries] == ["Careful"]

    def test_parse_again_drops_entry_left_open(self):
        parser = EntryParser("app.log")
        parser._feed(split_source_lines(H1)[0], None)
        assert parser.state is ParserState.OPEN
        assert parser.parse("") == []


class TestParseFiles:
    def test_files_concatenated_in_given_order(self):
        entries = parse_files([("b.log", H3), ("a.log", lines(H1, H2))])
        assert [(e.source_file, e.message) for e in entries] == [
            ("b.log", "Again"),
            ("a.log", "Boom"),
            ("a.log", "Careful"),
        ]

    def test_sample_log(self, sample_log):
        entries = parse_entries(sample_log, "sample.log")
        assert [e.level for e in entries] == [
            LogLevel.ERROR, LogLevel.WARNING, LogLevel.ERROR, LogLevel.ERROR
        ]
        assert entries[0].message == entries[2].message
        assert entries[0].message.splitlines()[1] == "System.Net.Sockets.SocketException: Connection refused"
