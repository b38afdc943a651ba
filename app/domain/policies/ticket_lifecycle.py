"""TicketLifecyclePolicy — the status state machine.

Validation is a pure check against the status the caller read. The caller
must re-read and write the new status inside one transaction so two writers
cannot both validate against a stale status.
"""

from __future__ import annotations

from app.domain.errors import InvalidTransitionError
from app.domain.value_objects.enums import TicketStatus

STATUS_TRANSITIONS: dict[TicketStatus, frozenset[TicketStatus]] = {
    TicketStatus.NEW: frozenset(
        {TicketStatus.ASSIGNED, TicketStatus.IN_PROGRESS, TicketStatus.CANCELLED}
    ),
    TicketStatus.ASSIGNED: frozenset(
        {TicketStatus.IN_PROGRESS, TicketStatus.WAITING_CUSTOMER, TicketStatus.CANCELLED}
    ),
    TicketStatus.IN_PROGRESS: frozenset(
        {
            TicketStatus.WAITING_CUSTOMER,
            TicketStatus.WAITING_VENDOR,
            TicketStatus.RESOLVED,
            TicketStatus.CANCELLED,
        }
    ),
    TicketStatus.WAITING_CUSTOMER: frozenset(
        {TicketStatus.IN_PROGRESS, TicketStatus.RESOLVED, TicketStatus.CANCELLED}
    ),
    TicketStatus.WAITING_VENDOR: frozenset(
        {TicketStatus.IN_PROGRESS, TicketStatus.RESOLVED, TicketStatus.CANCELLED}
    ),
    # in_progress here is a reopen
    TicketStatus.RESOLVED: frozenset({TicketStatus.CLOSED, TicketStatus.IN_PROGRESS}),
    TicketStatus.CLOSED: frozenset(),
    TicketStatus.CANCELLED: frozenset(),
}

# Statuses whose SLA clock is still running
OPEN_STATUSES: frozenset[TicketStatus] = frozenset(
    {
        TicketStatus.NEW,
        TicketStatus.ASSIGNED,
        TicketStatus.IN_PROGRESS,
        TicketStatus.WAITING_CUSTOMER,
        TicketStatus.WAITING_VENDOR,
    }
)


def allowed_transitions(current: TicketStatus | str) -> frozenset[TicketStatus]:
    status = _coerce(current)
    if status is None:
        return frozenset()
    return STATUS_TRANSITIONS[status]


def is_terminal(status: TicketStatus | str) -> bool:
    return not allowed_transitions(status)


def can_transition(current: TicketStatus | str, target: TicketStatus | str) -> bool:
    target_status = _coerce(target)
    return target_status is not None and target_status in allowed_transitions(current)


def validate_transition(current: TicketStatus | str, target: TicketStatus | str) -> None:
    """Raise InvalidTransitionError unless *current* → *target* is in the table.

    Same-status requests are not transitions; callers should skip them before
    validating.
    """
    if not can_transition(current, target):
        raise InvalidTransitionError(_value(current), _value(target))


def _coerce(status: TicketStatus | str) -> TicketStatus | None:
    try:
        return TicketStatus(status)
    except ValueError:
        return None


def _value(status: TicketStatus | str) -> str:
    return status.value if isinstance(status, TicketStatus) else str(status)
