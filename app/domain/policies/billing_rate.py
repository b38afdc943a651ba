"""BillingRatePolicy — pure parts of the billing rate hierarchy.

Hierarchy, first hit wins:
  1. user_billing_rates  (most specific matching record)
  2. contract hourly rate
  3. user default billing rate
  4. error — never a silent zero

The internal cost rate is looked up separately and is mandatory.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation

from app.domain.entities.billing_rate import UserBillingRate, UserRateProfile
from app.domain.errors import (
    InvalidHoursError,
    NoCostRateConfiguredError,
    UserNotFoundError,
)
from app.domain.value_objects.money import TimeEntryTotals, round_money

MIN_HOURS = Decimal("0.25")
MAX_HOURS = Decimal("24")


def validate_hours(hours: Decimal | float | str | None) -> Decimal:
    """Return *hours* as Decimal, or raise InvalidHoursError outside [0.25, 24]."""
    if hours is None or isinstance(hours, bool):
        raise InvalidHoursError(hours)
    try:
        value = hours if isinstance(hours, Decimal) else Decimal(str(hours))
    except InvalidOperation:
        raise InvalidHoursError(hours) from None
    if not value.is_finite() or not MIN_HOURS <= value <= MAX_HOURS:
        raise InvalidHoursError(hours)
    return value


def require_cost_rate(profile: UserRateProfile | None, user_id: str) -> Decimal:
    if profile is None:
        raise UserNotFoundError(user_id)
    if profile.internal_cost_rate is None:
        raise NoCostRateConfiguredError(user_id)
    return profile.internal_cost_rate


def pick_specific_rate(
    records: list[UserBillingRate],
    *,
    customer_id: str,
    as_of: date,
    contract_id: str | None = None,
    service_level: str | None = None,
    work_type: str | None = None,
) -> UserBillingRate | None:
    """Select the single best matching rate record.

    A record matches when it is active and valid on *as_of*, is keyed to the
    supplied contract or customer, and its service_level / work_type are
    either null or equal to the requested value.

    Ranking: contract-keyed before customer-keyed, then set service_level
    before null, then set work_type before null, then newest created_at.
    """
    matches = [
        r
        for r in records
        if r.is_valid_on(as_of)
        and (_contract_match(r, contract_id) or r.customer_id == customer_id)
        and _dimension_match(r.service_level, service_level)
        and _dimension_match(r.work_type, work_type)
    ]
    if not matches:
        return None

    # Two stable sorts: newest first, then by specificity
    matches.sort(key=lambda r: r.created_at, reverse=True)
    matches.sort(
        key=lambda r: (
            0 if _contract_match(r, contract_id) else 1,
            0 if r.service_level is not None else 1,
            0 if r.work_type is not None else 1,
        )
    )
    return matches[0]


def calculate_totals(
    hours: Decimal | float | str,
    billing_rate: Decimal | float | str,
    cost_rate: Decimal | float | str,
) -> TimeEntryTotals:
    """Revenue, cost, profit and margin for a time entry, rounded to cents."""
    hours_d = _decimal(hours)
    revenue = hours_d * _decimal(billing_rate)
    cost = hours_d * _decimal(cost_rate)
    profit = revenue - cost
    margin = profit / revenue * 100 if revenue > 0 else Decimal(0)

    return TimeEntryTotals(
        revenue=round_money(revenue),
        cost=round_money(cost),
        profit=round_money(profit),
        margin_percent=round_money(margin),
    )


def _contract_match(record: UserBillingRate, contract_id: str | None) -> bool:
    return contract_id is not None and record.contract_id == contract_id


def _dimension_match(record_value: str | None, requested: str | None) -> bool:
    return record_value is None or (requested is not None and record_value == requested)


def _decimal(value: Decimal | float | str) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))
