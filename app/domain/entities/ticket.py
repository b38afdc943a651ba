"""Ticket entity — a customer request moving through the service-desk lifecycle."""

from dataclasses import dataclass, field
from datetime import datetime

from app.domain.policies.ticket_lifecycle import OPEN_STATUSES, validate_transition
from app.domain.value_objects.enums import Priority, TicketStatus
from app.domain.value_objects.sla import SLABreachInfo, SLADueDates


@dataclass
class Ticket:
    id: str | None
    customer_id: str
    title: str
    priority: Priority = Priority.MEDIUM
    status: TicketStatus = TicketStatus.NEW
    description: str | None = None
    category: str | None = None
    tags: list[str] = field(default_factory=list)
    contract_id: str | None = None
    assigned_to: str | None = None
    created_at: datetime | None = None

    # SLA tracking
    sla_response_due: datetime | None = None
    sla_resolution_due: datetime | None = None
    first_response_at: datetime | None = None
    resolved_at: datetime | None = None
    closed_at: datetime | None = None
    sla_breached: bool = False
    sla_breach_reason: str | None = None

    deleted_at: datetime | None = None

    def is_open(self) -> bool:
        return self.status in OPEN_STATUSES

    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def transition_to(self, target: TicketStatus, at: datetime) -> bool:
        """Move to *target* if the lifecycle allows it.

        Returns False when *target* is the current status (nothing to do).
        Raises InvalidTransitionError otherwise; the ticket is left untouched.
        """
        if target == self.status:
            return False

        validate_transition(self.status, target)
        self.status = target = TicketStatus(target)

        if target == TicketStatus.RESOLVED and self.resolved_at is None:
            self.resolved_at = at
        if target == TicketStatus.CLOSED and self.closed_at is None:
            self.closed_at = at
        return True

    def record_response(self, at: datetime, internal: bool = False) -> bool:
        """Stamp first_response_at on the first customer-facing reply only."""
        if internal or self.first_response_at is not None:
            return False
        self.first_response_at = at
        return True

    def apply_due_dates(self, due: SLADueDates) -> None:
        self.sla_response_due = due.response_due
        self.sla_resolution_due = due.resolution_due

    def apply_breach(self, info: SLABreachInfo) -> None:
        self.sla_breached = info.is_breached
        self.sla_breach_reason = info.breach_reason
