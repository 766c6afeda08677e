"""Tests for log_pipeline/timestamps.py"""

from datetime import timedelta, timezone

from loglens.services.log_pipeline.timestamps import parse_offset, resolve_timestamp

from conftest import utc


class TestParseOffset:
    def test_positive_offset(self):
        assert parse_offset("+02:00") == timezone(timedelta(hours=2))

    def test_negative_offset_with_minutes(self):
        assert parse_offset("-03:30") == timezone(-timedelta(hours=3, minutes=30))

    def test_rejects_out_of_range(self):
        assert parse_offset("+24:00") is None
        assert parse_offset("+02:60") is None

    def test_rejects_wrong_shape(self):
        assert parse_offset("02:00") is None
        assert parse_offset("+2:00") is None
        assert parse_offset("Z") is None


class TestResolveTimestamp:
    def test_positive_offset_is_subtracted(self):
        ts = resolve_timestamp("2025-04-17 08:21:24.838", "+02:00")
        assert ts == utc(2025, 4, 17, 6, 21, 24, 838000)

    def test_negative_offset_is_added(self):
        ts = resolve_timestamp("2025-04-17 08:00:00.000", "-05:00")
        assert ts == utc(2025, 4, 17, 13, 0, 0)

    def test_zero_offset(self):
        ts = resolve_timestamp("2025-04-17 08:00:00.000", "+00:00")
        assert ts == utc(2025, 4, 17, 8, 0, 0)

    def test_result_is_utc(self):
        ts = resolve_timestamp("2025-04-17 08:00:00.000", "+05:30")
        assert ts.tzinfo == timezone.utc
        assert ts == utc(2025, 4, 17, 2, 30, 0)

    def test_crosses_midnight(self):
        ts = resolve_timestamp("2025-01-01 01:00:00.000", "+02:00")
        assert ts == utc(2024, 12, 31, 23, 0, 0)

    def test_instants_from_different_offsets_compare(self):
        a = resolve_timestamp("2025-04-17 10:00:00.000", "+02:00")
        b = resolve_timestamp("2025-04-17 08:00:00.000", "+00:00")
        c = resolve_timestamp("2025-04-17 07:59:59.999", "+00:00")
        assert a == b
        assert c < a

    def test_offset_shift_below_year_one_returns_none(self):
        assert resolve_timestamp("0001-01-01 00:00:00.000", "+02:00") is None

    def test_offset_shift_past_year_9999_returns_none(self):
        assert resolve_timestamp("9999-12-31 22:00:00.000", "-05:00") is None

    def test_instant_too_close_to_datetime_limits_returns_none(self):
        assert resolve_timestamp("9999-12-31 23:50:00.000", "+00:00") is None
        assert resolve_timestamp("0001-01-01 00:10:00.000", "+00:00") is None

    def test_far_but_paddable_instants_resolve(self):
        assert resolve_timestamp("9999-12-31 20:00:00.000", "+00:00") == utc(9999, 12, 31, 20, 0, 0)
        assert resolve_timestamp("0001-01-01 03:00:00.000", "+00:00") == utc(1, 1, 1, 3, 0, 0)

    def test_impossible_date_returns_none(self):
        assert resolve_timestamp("2025-13-01 00:00:00.000", "+00:00") is None
        assert resolve_timestamp("2025-02-30 00:00:00.000", "+00:00") is None

    def test_wrong_precision_returns_none(self):
        assert resolve_timestamp("2025-04-17 08:00:00", "+00:00") is None

    def test_malformed_offset_returns_none(self):
        assert resolve_timestamp("2025-04-17 08:00:00.000", "+0200") is None
