"""TimeEntry entity — logged work with billing/cost rates snapshotted at creation.

The entity is frozen: an update produces a new TimeEntry carrying the same
billing_rate and cost_rate as the entry it replaces.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from app.domain.policies.billing_rate import calculate_totals
from app.domain.value_objects.enums import RateSource, WorkType
from app.domain.value_objects.money import TimeEntryTotals


@dataclass(frozen=True)
class TimeEntry:
    id: str | None
    ticket_id: str
    user_id: str
    work_date: date
    hours: Decimal
    description: str
    billing_rate: Decimal
    cost_rate: Decimal
    rate_source: RateSource | None = None
    work_type: WorkType = WorkType.SUPPORT
    notes: str | None = None
    billable: bool = True
    billed: bool = False
    created_at: datetime | None = None

    def totals(self) -> TimeEntryTotals:
        return calculate_totals(self.hours, self.billing_rate, self.cost_rate)
