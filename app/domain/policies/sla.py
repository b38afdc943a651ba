"""SLAPolicy — due-date computation and breach detection."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from app.domain.value_objects.business_hours import BusinessHours
from app.domain.value_objects.enums import BreachType
from app.domain.value_objects.sla import SLABreachInfo, SLADueDates, SLAParameters

DEFAULT_TIMEZONE = "Europe/Berlin"
DEFAULT_BUSINESS_HOURS = BusinessHours.from_zone_name(DEFAULT_TIMEZONE)


def compute_due_dates(
    start: datetime,
    params: SLAParameters,
    calendar: BusinessHours = DEFAULT_BUSINESS_HOURS,
) -> SLADueDates:
    """Stamp response and resolution deadlines from *start*.

    Both deadlines are measured from *start* independently; resolution is
    never chained onto the response deadline.
    """
    if params.business_hours_only:
        return SLADueDates(
            response_due=calendar.add_hours(start, params.response_time_hours),
            resolution_due=calendar.add_hours(start, params.resolution_time_hours),
        )

    # 24/7 support: elapsed hours
    return SLADueDates(
        response_due=_add_elapsed(start, params.response_time_hours),
        resolution_due=_add_elapsed(start, params.resolution_time_hours),
    )


def check_breach(
    response_due: datetime | None,
    resolution_due: datetime | None,
    first_response_at: datetime | None,
    resolved_at: datetime | None,
    now: datetime,
) -> SLABreachInfo:
    """Evaluate both SLA dimensions.

    A dimension is measured against its event time when the event happened,
    otherwise against *now*. Missing due dates never breach. When both
    dimensions breach, breach_minutes is the larger of the two.
    """
    response_minutes = _overdue_minutes(response_due, first_response_at, now)
    resolution_minutes = _overdue_minutes(resolution_due, resolved_at, now)

    reasons: list[str] = []
    if response_minutes is not None:
        reasons.append(f"Response SLA breached by {response_minutes} minutes")
    if resolution_minutes is not None:
        reasons.append(f"Resolution SLA breached by {resolution_minutes} minutes")

    if response_minutes is not None and resolution_minutes is not None:
        breach_type = BreachType.BOTH
        minutes = max(response_minutes, resolution_minutes)
    elif response_minutes is not None:
        breach_type = BreachType.RESPONSE
        minutes = response_minutes
    elif resolution_minutes is not None:
        breach_type = BreachType.RESOLUTION
        minutes = resolution_minutes
    else:
        return SLABreachInfo.not_breached()

    return SLABreachInfo(
        is_breached=True,
        breach_type=breach_type,
        breach_minutes=minutes,
        breach_reason="; ".join(reasons),
    )


def calculate_business_hours_between(
    start: datetime,
    end: datetime,
    calendar: BusinessHours = DEFAULT_BUSINESS_HOURS,
) -> float:
    return calendar.hours_between(start, end)


def is_business_hours(
    moment: datetime, calendar: BusinessHours = DEFAULT_BUSINESS_HOURS
) -> bool:
    return calendar.contains(moment)


def _overdue_minutes(
    due: datetime | None, happened_at: datetime | None, now: datetime
) -> int | None:
    """Whole minutes past *due*, or None when this dimension is not breached."""
    if due is None:
        return None
    actual = _utc(happened_at if happened_at is not None else now)
    due = _utc(due)
    if actual <= due:
        return None
    return int((actual - due).total_seconds() // 60)


def _add_elapsed(start: datetime, hours: float) -> datetime:
    """*start* plus *hours* of real elapsed time, in *start*'s zone."""
    if start.tzinfo is None:
        return start + timedelta(hours=hours)
    return (_utc(start) + timedelta(hours=hours)).astimezone(start.tzinfo)


def _utc(moment: datetime) -> datetime:
    # Aware values are compared and subtracted in UTC
    return moment if moment.tzinfo is None else moment.astimezone(timezone.utc)
