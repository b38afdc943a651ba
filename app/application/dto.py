"""Typed request models for the write paths.

Patch models distinguish "not sent" from "sent as null" through pydantic's
``model_fields_set``; use cases read them one named field at a time.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.domain.value_objects.enums import Priority, ServiceLevel, TicketStatus, WorkType


class Patch(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def has(self, name: str) -> bool:
        return name in self.model_fields_set

    def pick(self, name: str, current: Any) -> Any:
        """The patched value of *name*, or *current* when it was not sent."""
        return getattr(self, name) if self.has(name) else current


class TicketPatch(Patch):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    priority: Priority | None = None
    category: str | None = None
    tags: list[str] | None = None
    assigned_to: str | None = None
    contract_id: str | None = None
    status: TicketStatus | None = None


class TimeEntryCreate(BaseModel):
    ticket_id: str
    user_id: str
    hours: Decimal
    description: str = Field(min_length=1, max_length=1000)
    work_date: date | None = None
    work_type: WorkType = WorkType.SUPPORT
    service_level: ServiceLevel | None = None
    notes: str | None = Field(default=None, max_length=2000)
    billable: bool = True


class TimeEntryPatch(Patch):
    work_date: date | None = None
    hours: Decimal | None = None
    description: str | None = Field(default=None, min_length=1, max_length=1000)
    notes: str | None = Field(default=None, max_length=2000)
    work_type: WorkType | None = None
    billable: bool | None = None
    # Accepted only so an attempt can be rejected explicitly
    billing_rate: Decimal | None = None
    cost_rate: Decimal | None = None
