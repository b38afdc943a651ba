"""Money value objects for time-entry billing."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from app.domain.value_objects.enums import RateSource

CENTS = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class ResolvedRates:
    """Billing + cost rate pair, snapshotted onto a time entry once."""

    billing_rate: Decimal
    cost_rate: Decimal
    source: RateSource


@dataclass(frozen=True)
class TimeEntryTotals:
    revenue: Decimal
    cost: Decimal
    profit: Decimal
    margin_percent: Decimal
