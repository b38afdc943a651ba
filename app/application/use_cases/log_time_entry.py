"""Time-entry use cases — create with a rate snapshot, update without touching it."""

from __future__ import annotations

import logging
from dataclasses import replace

from app.application.dto import TimeEntryCreate, TimeEntryPatch
from app.application.ports.clock import Clock
from app.application.use_cases.resolve_billing_rate import ResolveBillingRateUseCase
from app.domain.entities.ticket import Ticket
from app.domain.entities.time_entry import TimeEntry
from app.domain.errors import RateSnapshotError, TimeEntryLockedError
from app.domain.policies.billing_rate import validate_hours

logger = logging.getLogger(__name__)


class LogTimeEntryUseCase:
    """Build a new TimeEntry with billing/cost rates resolved exactly once.

    The caller must persist the returned entry in the same transaction that
    ran the resolution.
    """

    def __init__(self, resolver: ResolveBillingRateUseCase, clock: Clock):
        self._resolver = resolver
        self._clock = clock

    async def execute(self, request: TimeEntryCreate, ticket: Ticket) -> TimeEntry:
        hours = validate_hours(request.hours)
        now = self._clock.now()
        work_date = request.work_date or now.date()

        rates = await self._resolver.execute(
            user_id=request.user_id,
            customer_id=ticket.customer_id,
            contract_id=ticket.contract_id,
            service_level=request.service_level.value if request.service_level else None,
            work_type=request.work_type.value,
            as_of=work_date,
        )

        entry = TimeEntry(
            id=None,
            ticket_id=request.ticket_id,
            user_id=request.user_id,
            work_date=work_date,
            hours=hours,
            description=request.description,
            billing_rate=rates.billing_rate,
            cost_rate=rates.cost_rate,
            rate_source=rates.source,
            work_type=request.work_type,
            notes=request.notes,
            billable=request.billable,
            billed=False,
            created_at=now,
        )

        totals = entry.totals()
        logger.info(
            "Time entry for ticket %s: user=%s hours=%s billing=%s cost=%s revenue=%s profit=%s",
            request.ticket_id, request.user_id, hours,
            entry.billing_rate, entry.cost_rate, totals.revenue, totals.profit,
        )
        return entry


class UpdateTimeEntryUseCase:
    """Apply a patch to an existing entry; snapshotted rates never change."""

    def execute(self, entry: TimeEntry, patch: TimeEntryPatch) -> TimeEntry:
        if patch.has("billing_rate") or patch.has("cost_rate"):
            logger.warning("Rejected rate change on time entry %s", entry.id)
            raise RateSnapshotError(entry.id)
        if entry.billed:
            raise TimeEntryLockedError(entry.id)

        hours = validate_hours(patch.hours) if patch.has("hours") else entry.hours
        updated = replace(
            entry,
            hours=hours,
            work_date=patch.pick("work_date", entry.work_date) or entry.work_date,
            description=patch.pick("description", entry.description) or entry.description,
            notes=patch.pick("notes", entry.notes),
            work_type=patch.pick("work_type", entry.work_type) or entry.work_type,
            billable=_bool_or(patch.pick("billable", entry.billable), entry.billable),
        )
        logger.info("Time entry %s updated", entry.id)
        return updated


def _bool_or(value: bool | None, default: bool) -> bool:
    return default if value is None else value
