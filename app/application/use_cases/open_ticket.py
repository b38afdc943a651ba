"""OpenTicketUseCase — creation path: optional auto-assignment, then SLA stamping."""

from __future__ import annotations

import logging

from app.application.ports.clock import Clock
from app.application.use_cases.auto_assign import AutoAssignUseCase
from app.domain.entities.ticket import Ticket
from app.domain.policies.sla import DEFAULT_BUSINESS_HOURS, compute_due_dates
from app.domain.value_objects.business_hours import BusinessHours
from app.domain.value_objects.sla import SLAParameters

logger = logging.getLogger(__name__)


class OpenTicketUseCase:
    def __init__(
        self,
        auto_assign: AutoAssignUseCase,
        clock: Clock,
        calendar: BusinessHours = DEFAULT_BUSINESS_HOURS,
    ):
        self._auto_assign = auto_assign
        self._clock = clock
        self._calendar = calendar

    async def execute(
        self,
        ticket: Ticket,
        sla: SLAParameters | None = None,
        auto_assign: bool = False,
    ) -> Ticket:
        """Prepare a freshly created ticket for persistence.

        Args:
            ticket: the new ticket; created_at defaults to the clock.
            sla: contract or default-policy SLA; None means no SLA tracking.
            auto_assign: pick a technician when nobody is assigned yet.

        Returns:
            The same ticket with assignee and SLA due dates filled in.
        """
        if ticket.created_at is None:
            ticket.created_at = self._clock.now()

        if auto_assign and ticket.assigned_to is None:
            await self._auto_assign.execute(ticket)

        if sla is not None:
            due = compute_due_dates(ticket.created_at, sla, self._calendar)
            ticket.apply_due_dates(due)
            logger.info(
                "Ticket %s SLA: response due %s, resolution due %s (business hours: %s)",
                ticket.id, due.response_due.isoformat(), due.resolution_due.isoformat(),
                sla.business_hours_only,
            )

        return ticket
