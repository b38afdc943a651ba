"""SLA value objects — parameters, due dates and breach evaluation results."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from app.domain.errors import InvalidSLAParametersError
from app.domain.value_objects.enums import BreachType


@dataclass(frozen=True)
class SLAParameters:
    """Response / resolution commitments, supplied by a contract or default policy."""

    response_time_hours: float
    resolution_time_hours: float
    business_hours_only: bool = False

    def __post_init__(self) -> None:
        for name in ("response_time_hours", "resolution_time_hours"):
            value = getattr(self, name)
            if value is None or value <= 0:
                raise InvalidSLAParametersError(f"{name} must be > 0, got {value!r}")


@dataclass(frozen=True)
class SLADueDates:
    response_due: datetime
    resolution_due: datetime


@dataclass(frozen=True)
class SLABreachInfo:
    is_breached: bool
    breach_type: BreachType | None = None
    breach_minutes: int = 0
    breach_reason: str | None = None

    @classmethod
    def not_breached(cls) -> "SLABreachInfo":
        return cls(is_breached=False)
