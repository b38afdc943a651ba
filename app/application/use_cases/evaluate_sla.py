"""SLA tracking use cases — stamping replies and re-evaluating breaches."""

from __future__ import annotations

import logging

from app.application.ports.clock import Clock
from app.domain.entities.ticket import Ticket
from app.domain.policies.sla import check_breach
from app.domain.value_objects.enums import TicketStatus
from app.domain.value_objects.sla import SLABreachInfo

logger = logging.getLogger(__name__)


class EvaluateSlaUseCase:
    """Re-evaluates breach state of a ticket against the clock."""

    def __init__(self, clock: Clock):
        self._clock = clock

    def execute(self, ticket: Ticket) -> SLABreachInfo:
        info = check_breach(
            ticket.sla_response_due,
            ticket.sla_resolution_due,
            ticket.first_response_at,
            ticket.resolved_at,
            self._clock.now(),
        )
        newly_breached = info.is_breached and not ticket.sla_breached
        ticket.apply_breach(info)

        if newly_breached:
            logger.warning(
                "Ticket %s breached SLA (%s): %s",
                ticket.id, info.breach_type.value, info.breach_reason,
            )
        return info

    def poll(self, tickets: list[Ticket]) -> list[Ticket]:
        """Evaluate every open ticket; returns the ones currently breached."""
        open_tickets = [t for t in tickets if t.is_open() and not t.is_deleted()]
        breached = [t for t in open_tickets if self.execute(t).is_breached]

        logger.info("SLA poll: %d/%d open tickets breached", len(breached), len(open_tickets))
        return breached

    def record_reply(self, ticket: Ticket, internal: bool = False) -> bool:
        """Stamp the first customer-facing reply; internal notes never count."""
        stamped = ticket.record_response(self._clock.now(), internal=internal)
        if stamped:
            logger.info("Ticket %s first response at %s", ticket.id, ticket.first_response_at)
            self.execute(ticket)
        return stamped

    def on_status_changed(self, ticket: Ticket) -> SLABreachInfo | None:
        if ticket.status != TicketStatus.RESOLVED:
            return None
        return self.execute(ticket)
