"""Tests for the BusinessHours calendar."""

from datetime import datetime, timezone

import pytest

from app.domain.value_objects.business_hours import BusinessHours

# 2024-01-05 is a Friday


def test_rejects_empty_window(berlin):
    with pytest.raises(ValueError):
        BusinessHours(tz=berlin, start_hour=18, end_hour=8)


def test_hours_per_day(calendar):
    assert calendar.hours_per_day == 10


def test_contains_window_edges(calendar, berlin):
    assert calendar.contains(datetime(2024, 1, 5, 8, 0, tzinfo=berlin))
    assert calendar.contains(datetime(2024, 1, 5, 17, 59, tzinfo=berlin))
    assert not calendar.contains(datetime(2024, 1, 5, 18, 0, tzinfo=berlin))
    assert not calendar.contains(datetime(2024, 1, 5, 7, 59, tzinfo=berlin))


def test_weekend_is_closed(calendar, berlin):
    assert not calendar.contains(datetime(2024, 1, 6, 12, 0, tzinfo=berlin))
    assert not calendar.contains(datetime(2024, 1, 7, 12, 0, tzinfo=berlin))


def test_contains_converts_aware_input(calendar):
    # 07:30 UTC is 08:30 in Berlin (CET)
    assert calendar.contains(datetime(2024, 1, 5, 7, 30, tzinfo=timezone.utc))


def test_add_hours_within_one_day(calendar, berlin):
    start = datetime(2024, 1, 5, 9, 0, tzinfo=berlin)
    assert calendar.add_hours(start, 3) == datetime(2024, 1, 5, 12, 0, tzinfo=berlin)


def test_add_hours_ending_at_closing_stays_on_same_day(calendar, berlin):
    start = datetime(2024, 1, 5, 8, 0, tzinfo=berlin)
    assert calendar.add_hours(start, 10) == datetime(2024, 1, 5, 18, 0, tzinfo=berlin)


def test_add_hours_from_weekend_starts_monday(calendar, berlin):
    start = datetime(2024, 1, 6, 10, 0, tzinfo=berlin)
    assert calendar.add_hours(start, 2) == datetime(2024, 1, 8, 10, 0, tzinfo=berlin)


def test_add_hours_after_closing_starts_next_business_day(calendar, berlin):
    start = datetime(2024, 1, 5, 19, 0, tzinfo=berlin)
    assert calendar.add_hours(start, 1) == datetime(2024, 1, 8, 9, 0, tzinfo=berlin)


def test_add_hours_before_opening(calendar, berlin):
    start = datetime(2024, 1, 8, 6, 0, tzinfo=berlin)
    assert calendar.add_hours(start, 1.5) == datetime(2024, 1, 8, 9, 30, tzinfo=berlin)


def test_add_hours_spans_multiple_weeks(calendar, berlin):
    start = datetime(2024, 1, 8, 8, 0, tzinfo=berlin)
    # 100 business hours = ten full business days → ends Friday of the next week
    assert calendar.add_hours(start, 100) == datetime(2024, 1, 19, 18, 0, tzinfo=berlin)


def test_add_hours_naive_stays_naive(calendar):
    result = calendar.add_hours(datetime(2024, 1, 5, 16, 0), 12)
    assert result == datetime(2024, 1, 8, 18, 0)
    assert result.tzinfo is None


def test_hours_between_clips_each_day(calendar, berlin):
    start = datetime(2024, 1, 5, 16, 0, tzinfo=berlin)
    end = datetime(2024, 1, 8, 10, 0, tzinfo=berlin)
    assert calendar.hours_between(start, end) == 4.0


def test_hours_between_full_week(calendar, berlin):
    start = datetime(2024, 1, 8, 0, 0, tzinfo=berlin)
    end = datetime(2024, 1, 15, 0, 0, tzinfo=berlin)
    assert calendar.hours_between(start, end) == 50.0


def test_hours_between_reversed_is_zero(calendar, berlin):
    start = datetime(2024, 1, 8, 12, 0, tzinfo=berlin)
    assert calendar.hours_between(start, start) == 0.0
    assert calendar.hours_between(start, datetime(2024, 1, 8, 9, 0, tzinfo=berlin)) == 0.0


def test_custom_window(berlin):
    cal = BusinessHours(tz=berlin, start_hour=9, end_hour=17)
    start = datetime(2024, 1, 5, 16, 0, tzinfo=berlin)
    assert cal.add_hours(start, 2) == datetime(2024, 1, 8, 10, 0, tzinfo=berlin)
