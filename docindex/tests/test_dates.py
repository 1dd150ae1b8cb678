"""Tests for date parsing and priority resolution."""

from datetime import date, datetime, timedelta, timezone

import pytest

from docindex.content.dates import date_to_unix_timestamp, get_date_by_priority, parse_date, to_iso


class TestParseDate:
    """Test parsing of front-matter date values."""

    def test_iso_date_string(self):
        assert parse_date("2024-01-01") == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_yaml_date_object(self):
        assert parse_date(date(2024, 1, 1)) == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_naive_datetime_is_utc(self):
        assert parse_date(datetime(2024, 1, 1, 12, 30)).tzinfo == timezone.utc

    def test_offset_is_converted_to_utc(self):
        value = datetime(2024, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        assert parse_date(value) == datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)

    def test_free_form_string(self):
        assert parse_date("June 1, 2024") == datetime(2024, 6, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", ["June", "June 2024", "19", "Monday"])
    def test_partial_free_form_string_is_invalid(self, value):
        assert parse_date(value) is None

    @pytest.mark.parametrize("value", [None, False, True, "", "   ", "not a date", ["2024-01-01"]])
    def test_invalid_values(self, value):
        assert parse_date(value) is None


class TestToIso:
    """Test canonical ISO formatting."""

    def test_date_only(self):
        assert to_iso("2024-01-01") == "2024-01-01T00:00:00+00:00"

    def test_with_offset(self):
        assert to_iso("2024-01-01T10:00:00-05:00") == "2024-01-01T15:00:00+00:00"

    def test_invalid(self):
        assert to_iso("nope") is None


class TestUnixTimestamp:
    """Test unix-epoch conversion."""

    def test_known_date(self):
        assert date_to_unix_timestamp("2024-01-01") == 1704067200

    def test_invalid(self):
        assert date_to_unix_timestamp(None) is None


class TestGetDateByPriority:
    """Test the date > updatedAt > createdAt precedence."""

    def test_date_wins(self):
        meta = {"date": "2024-01-01", "updatedAt": "2024-05-01", "createdAt": "2023-01-01"}
        assert get_date_by_priority(meta) == "2024-01-01"

    def test_updated_at_before_created_at(self):
        meta = {"updatedAt": "2024-05-01", "createdAt": "2023-01-01"}
        assert get_date_by_priority(meta) == "2024-05-01"

    def test_created_at_fallback(self):
        assert get_date_by_priority({"createdAt": "2023-01-01"}) == "2023-01-01"

    def test_invalid_candidates_are_skipped(self):
        meta = {"date": "garbage", "updatedAt": False, "createdAt": "2023-01-01"}
        assert get_date_by_priority(meta) == "2023-01-01"

    def test_no_valid_date(self):
        assert get_date_by_priority({"date": "garbage"}) is None
        assert get_date_by_priority({}) is None
