"""Tests for due date normalization."""

from datetime import datetime, timezone

import pytest

import date_normalizer
from date_normalizer import normalize_date, parse_date
from errors import DateError


def test_date_only_and_us_format_agree_on_midnight():
    assert normalize_date("2024-01-05") == "01/05/2024 00:00:00"
    assert normalize_date("01/05/2024") == "01/05/2024 00:00:00"


def test_full_timestamp():
    assert normalize_date("2024-03-09 14:05:30") == "03/09/2024 14:05:30"


def test_surrounding_whitespace_is_ignored():
    assert normalize_date("  2024-01-05\n") == "01/05/2024 00:00:00"


def test_naive_iso_is_local_time():
    assert normalize_date("2024-07-01T08:15:00") == "07/01/2024 08:15:00"


def test_offset_iso_is_converted_to_local_time():
    expected = datetime(2024, 7, 1, 8, 15, tzinfo=timezone.utc).astimezone().strftime("%m/%d/%Y %H:%M:%S")
    assert normalize_date("2024-07-01T08:15:00Z") == expected
    assert normalize_date("2024-07-01T10:15:00+02:00") == expected


def test_first_matching_format_wins(monkeypatch):
    """Formats after a match are never tried."""
    calls = []

    def no_iso(value):
        calls.append(value)
        return None

    monkeypatch.setattr(date_normalizer, "_parse_iso8601", no_iso)
    assert parse_date("2024-01-05 10:00:00") == datetime(2024, 1, 5, 10, 0, 0)
    assert calls == []


@pytest.mark.parametrize("raw", ["not-a-date", "", "   ", "2024-13-45", "05.01.2024", "tomorrow"])
def test_unparsable_dates_raise_date_error(raw):
    with pytest.raises(DateError) as excinfo:
        normalize_date(raw)
    assert excinfo.value.describe().startswith("DateError:")
