"""Ticket update use cases — every status write passes the lifecycle policy."""

from __future__ import annotations

import logging

from app.application.dto import TicketPatch
from app.application.ports.clock import Clock
from app.application.use_cases.evaluate_sla import EvaluateSlaUseCase
from app.domain.entities.ticket import Ticket
from app.domain.errors import InvalidTransitionError
from app.domain.policies.ticket_lifecycle import validate_transition
from app.domain.value_objects.enums import TicketStatus

logger = logging.getLogger(__name__)


class ChangeTicketStatusUseCase:
    """Validate and apply a status change on the ticket as last read.

    The caller must have read *ticket* inside the transaction that will write
    it back, otherwise a concurrent writer can invalidate the check.
    """

    def __init__(self, clock: Clock, sla: EvaluateSlaUseCase):
        self._clock = clock
        self._sla = sla

    def execute(self, ticket: Ticket, target: TicketStatus) -> bool:
        previous = ticket.status
        try:
            changed = ticket.transition_to(target, self._clock.now())
        except InvalidTransitionError as e:
            logger.warning("Ticket %s: %s", ticket.id, e.message)
            raise

        if changed:
            logger.info("Ticket %s: %s → %s", ticket.id, previous.value, ticket.status.value)
            self._sla.on_status_changed(ticket)
        return changed


class UpdateTicketUseCase:
    def __init__(self, change_status: ChangeTicketStatusUseCase):
        self._change_status = change_status

    def execute(self, ticket: Ticket, patch: TicketPatch) -> Ticket:
        """Apply *patch*; an illegal status leaves the ticket untouched."""
        target = patch.status if patch.has("status") else None
        if target is not None and target != ticket.status:
            validate_transition(ticket.status, target)

        if patch.title is not None:
            ticket.title = patch.title
        if patch.priority is not None:
            ticket.priority = patch.priority
        ticket.description = patch.pick("description", ticket.description)
        ticket.category = patch.pick("category", ticket.category)
        ticket.tags = list(patch.pick("tags", ticket.tags) or [])
        ticket.assigned_to = patch.pick("assigned_to", ticket.assigned_to)
        ticket.contract_id = patch.pick("contract_id", ticket.contract_id)

        if target is not None:
            self._change_status.execute(ticket, target)
        return ticket
