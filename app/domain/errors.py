"""Domain exceptions.

Every error raised by the rule engine is deterministic for its inputs; none of
them is worth retrying. The host maps them to transport-level status codes.
"""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base exception for rule-engine violations."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


# ─── Ticket lifecycle ────────────────────────────────────────────────


class InvalidTransitionError(DomainError):
    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(
            f"Invalid status transition from '{current}' to '{target}'",
            {"current": current, "target": target},
        )


class TicketNotOpenError(DomainError):
    def __init__(self, ticket_id: str | None, status: str):
        self.ticket_id = ticket_id
        self.status = status
        super().__init__(
            f"Ticket {ticket_id} is {status} and can no longer change",
            {"ticket_id": ticket_id, "status": status},
        )


# ─── SLA ─────────────────────────────────────────────────────────────


class InvalidSLAParametersError(DomainError, ValueError):
    pass


# ─── Billing ─────────────────────────────────────────────────────────


class UserNotFoundError(DomainError):
    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User {user_id} not found", {"user_id": user_id})


class NoCostRateConfiguredError(DomainError):
    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(
            f"User {user_id} has no internal cost rate configured",
            {"user_id": user_id},
        )


class NoRateConfiguredError(DomainError):
    def __init__(self, user_id: str, customer_id: str):
        self.user_id = user_id
        self.customer_id = customer_id
        super().__init__(
            f"No billing rate configured for user {user_id} and customer {customer_id}",
            {"user_id": user_id, "customer_id": customer_id},
        )


class InvalidHoursError(DomainError, ValueError):
    def __init__(self, hours: Any):
        self.hours = hours
        super().__init__(
            f"Hours must be between 0.25 and 24, got {hours}", {"hours": str(hours)}
        )


class RateSnapshotError(DomainError):
    """Raised on any attempt to change a rate snapshotted on a time entry."""

    def __init__(self, time_entry_id: str | None):
        self.time_entry_id = time_entry_id
        super().__init__(
            "Billing and cost rates cannot be updated after creation",
            {"time_entry_id": time_entry_id},
        )


class TimeEntryLockedError(DomainError):
    def __init__(self, time_entry_id: str | None):
        self.time_entry_id = time_entry_id
        super().__init__(
            "Cannot update time entry that has already been billed",
            {"time_entry_id": time_entry_id},
        )
