"""Tests for SLAPolicy."""

from datetime import datetime, timedelta, timezone

import pytest

from app.domain.errors import InvalidSLAParametersError
from app.domain.policies.sla import (
    calculate_business_hours_between,
    check_breach,
    compute_due_dates,
    is_business_hours,
)
from app.domain.value_objects.enums import BreachType
from app.domain.value_objects.sla import SLAParameters

T0 = datetime(2024, 1, 8, 9, 0, tzinfo=timezone.utc)


# ─── Due dates ──────────────────────────────────────────────────────


def test_friday_afternoon_rolls_over_weekend(calendar, berlin):
    start = datetime(2024, 1, 5, 16, 0, tzinfo=berlin)
    due = compute_due_dates(start, SLAParameters(12, 12, business_hours_only=True), calendar)
    assert due.response_due == datetime(2024, 1, 8, 18, 0, tzinfo=berlin)


def test_resolution_is_measured_from_start_not_response(calendar, berlin):
    start = datetime(2024, 1, 8, 8, 0, tzinfo=berlin)
    due = compute_due_dates(start, SLAParameters(4, 8, business_hours_only=True), calendar)
    assert due.response_due == datetime(2024, 1, 8, 12, 0, tzinfo=berlin)
    assert due.resolution_due == datetime(2024, 1, 8, 16, 0, tzinfo=berlin)


def test_round_the_clock_is_plain_addition(calendar):
    start = datetime(2024, 1, 6, 23, 30, tzinfo=timezone.utc)  # Saturday night
    due = compute_due_dates(start, SLAParameters(4, 24), calendar)
    assert due.response_due == start + timedelta(hours=4)
    assert due.resolution_due == start + timedelta(hours=24)


def test_business_due_dates_fall_inside_or_at_closing(calendar, berlin):
    start = datetime(2024, 1, 4, 17, 15, tzinfo=berlin)
    for hours in (0.5, 1, 3.25, 9.75, 10, 17, 41):
        due = calendar.add_hours(start, hours)
        local = due.astimezone(berlin)
        assert calendar.contains(due) or (local.hour, local.minute) == (18, 0)


@pytest.mark.parametrize("response,resolution", [(0, 8), (4, -1), (None, 8)])
def test_non_positive_hours_are_rejected(response, resolution):
    with pytest.raises(InvalidSLAParametersError):
        SLAParameters(response, resolution)


def test_invalid_parameters_are_value_errors():
    with pytest.raises(ValueError):
        SLAParameters(0, 0)


# ─── Breach detection ───────────────────────────────────────────────


def test_not_breached_before_due():
    info = check_breach(T0 + timedelta(hours=1), T0 + timedelta(hours=8), None, None, T0)
    assert not info.is_breached
    assert info.breach_type is None
    assert info.breach_minutes == 0
    assert info.breach_reason is None


def test_response_breach_counts_whole_minutes():
    now = T0 + timedelta(minutes=30, seconds=59)
    info = check_breach(T0, T0 + timedelta(hours=8), None, None, now)
    assert info.is_breached
    assert info.breach_type == BreachType.RESPONSE
    assert info.breach_minutes == 30
    assert info.breach_reason == "Response SLA breached by 30 minutes"


def test_response_exactly_at_due_is_not_breached():
    info = check_breach(T0, None, T0, None, T0 + timedelta(hours=5))
    assert not info.is_breached


def test_late_response_is_measured_at_response_time():
    info = check_breach(T0, None, T0 + timedelta(minutes=20), None, T0 + timedelta(days=2))
    assert info.breach_type == BreachType.RESPONSE
    assert info.breach_minutes == 20


def test_resolution_breach_only():
    due = T0 + timedelta(hours=4)
    info = check_breach(T0, due, T0, None, due + timedelta(minutes=45))
    assert info.breach_type == BreachType.RESOLUTION
    assert info.breach_minutes == 45
    assert info.breach_reason == "Resolution SLA breached by 45 minutes"


def test_both_breached_reports_larger_overrun():
    info = check_breach(
        T0 + timedelta(hours=1),
        T0 + timedelta(hours=3),
        None,
        None,
        T0 + timedelta(hours=4),
    )
    assert info.breach_type == BreachType.BOTH
    assert info.breach_minutes == 180
    assert info.breach_reason == (
        "Response SLA breached by 180 minutes; Resolution SLA breached by 60 minutes"
    )


def test_missing_due_dates_never_breach():
    info = check_breach(None, None, None, None, T0 + timedelta(days=365))
    assert not info.is_breached


def test_breach_is_monotonic_in_now():
    response_due = T0 + timedelta(hours=1)
    resolution_due = T0 + timedelta(hours=4)
    previous = False
    for minutes in range(0, 600, 15):
        info = check_breach(response_due, resolution_due, None, None, T0 + timedelta(minutes=minutes))
        assert info.is_breached or not previous
        previous = info.is_breached
    assert previous


# ─── Helpers ────────────────────────────────────────────────────────


def test_business_hours_between(calendar, berlin):
    start = datetime(2024, 1, 5, 16, 0, tzinfo=berlin)
    end = datetime(2024, 1, 8, 10, 0, tzinfo=berlin)
    assert calculate_business_hours_between(start, end, calendar) == 4.0


def test_is_business_hours_closing_hour_is_closed(calendar, berlin):
    assert is_business_hours(datetime(2024, 1, 8, 17, 59, tzinfo=berlin), calendar)
    assert not is_business_hours(datetime(2024, 1, 8, 18, 0, tzinfo=berlin), calendar)


# ─── Daylight saving (Europe/Berlin springs forward 2026-03-29) ─────


def test_round_the_clock_counts_real_hours_across_dst(calendar, berlin):
    start = datetime(2026, 3, 28, 12, 0, tzinfo=berlin)
    due = compute_due_dates(start, SLAParameters(24, 48), calendar)

    assert due.response_due.astimezone(timezone.utc) - start.astimezone(timezone.utc) == timedelta(hours=24)
    assert due.response_due == datetime(2026, 3, 29, 13, 0, tzinfo=berlin)
    assert due.response_due.tzinfo is berlin


def test_breach_minutes_count_real_time_across_dst(berlin):
    due = datetime(2026, 3, 28, 12, 0, tzinfo=berlin)
    now = datetime(2026, 3, 29, 12, 0, tzinfo=berlin)

    info = check_breach(due, None, None, None, now)

    assert info.breach_minutes == 23 * 60


def test_breach_compares_mixed_zones(berlin):
    due = datetime(2026, 3, 29, 12, 0, tzinfo=berlin)  # 10:00 UTC
    assert not check_breach(due, None, None, None, datetime(2026, 3, 29, 9, 59, tzinfo=timezone.utc)).is_breached
    assert check_breach(due, None, None, None, datetime(2026, 3, 29, 10, 1, tzinfo=timezone.utc)).breach_minutes == 1


def test_naive_round_the_clock_is_plain_addition(calendar):
    start = datetime(2026, 3, 28, 12, 0)
    due = compute_due_dates(start, SLAParameters(24, 48), calendar)
    assert due.response_due == datetime(2026, 3, 29, 12, 0)
