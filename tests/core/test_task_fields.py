"""Task Field Rules — due-date parsing, blank-preserving merge, comment timestamps."""

from datetime import date, datetime, timedelta, timezone

import pytest

from tasktracker.core.task_fields import (
    merge_task_fields, next_comment_timestamp, parse_due_date,
)


def test_parse_due_date_round_trips_day_month_year():
    assert parse_due_date("04-03-2024") == date(2024, 3, 4)


def test_parse_due_date_rolls_over_past_month_end():
    assert parse_due_date("31-02-2024") == date(2024, 3, 2)
    assert parse_due_date("31-04-2025") == date(2025, 5, 1)


def test_parse_due_date_rejects_unvalidated_input():
    with pytest.raises(ValueError):
        parse_due_date("2024-03-04")


def test_merge_keeps_only_non_blank_fields():
    changes = merge_task_fields({
        "title": "", "description": None, "status": "closed", "due_date": "  ",
    })
    assert changes == {"status": "closed"}


def test_merge_parses_due_date():
    changes = merge_task_fields({"title": "Renamed task", "due_date": "01-12-2025"})
    assert changes == {"title": "Renamed task", "due_date": date(2025, 12, 1)}


def test_merge_ignores_unknown_fields():
    assert merge_task_fields({"assigned_to": "someone"}) == {}


def test_first_comment_uses_now():
    now = datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert next_comment_timestamp(None, now) == now


def test_comment_timestamp_never_goes_backwards():
    later = datetime(2025, 1, 1, 12, tzinfo=timezone.utc)
    clock_skewed_now = later - timedelta(seconds=5)
    assert next_comment_timestamp(later, clock_skewed_now) == later


def test_naive_previous_timestamp_is_treated_as_utc():
    previous = datetime(2025, 1, 1, 12)
    now = datetime(2025, 1, 1, 13, tzinfo=timezone.utc)
    assert next_comment_timestamp(previous, now) == now
