"""
Unit tests for due date parsing and the relative labels used in summaries.
"""
from datetime import date, timezone
from zoneinfo import ZoneInfo

import pytest

from organizer.domain.common.time import format_local_date, from_iso, parse_due_date
from organizer.domain.notifications.composer import due_date_annotation

TODAY = date(2025, 3, 10)


def test_annotation_today_and_tomorrow_are_exact():
    assert due_date_annotation(date(2025, 3, 10), TODAY) == "(today)"
    assert due_date_annotation(date(2025, 3, 11), TODAY) == "(tomorrow)"


@pytest.mark.parametrize(
    "due, expected",
    [
        (date(2025, 3, 9), "(1 day overdue)"),
        (date(2025, 3, 7), "(3 days overdue)"),
        (date(2025, 2, 8), "(30 days overdue)"),
    ],
)
def test_annotation_overdue_day_count(due, expected):
    assert due_date_annotation(due, TODAY) == expected


def test_annotation_future_date_is_formatted():
    assert due_date_annotation(date(2025, 4, 1), TODAY) == "(01.04.2025)"


def test_annotation_without_due_date():
    assert due_date_annotation(None, TODAY) == ""


def test_parse_plain_date():
    assert parse_due_date("2025-03-10") == date(2025, 3, 10)


def test_parse_datetime_strings():
    assert parse_due_date("2025-03-10T08:30:00") == date(2025, 3, 10)
    assert parse_due_date("2025-03-10 08:30:00") == date(2025, 3, 10)


def test_parse_aware_datetime_uses_local_day():
    # 23:30 UTC is already the next day in Berlin
    assert parse_due_date("2025-03-10T23:30:00Z", ZoneInfo("Europe/Berlin")) == date(2025, 3, 11)
    assert parse_due_date("2025-03-10T23:30:00Z", timezone.utc) == date(2025, 3, 10)


@pytest.mark.parametrize("value", [None, "", "   ", "not a date", "2025-13-45"])
def test_parse_invalid_returns_none(value):
    assert parse_due_date(value) is None


def test_from_iso_accepts_z_suffix():
    assert from_iso("2025-03-10T08:00:00Z").tzinfo is not None


def test_format_local_date():
    assert format_local_date(date(2025, 1, 2)) == "02.01.2025"
