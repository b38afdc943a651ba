"""Technician entities — assignment candidates and their workload figures."""

from dataclasses import dataclass, field
from datetime import datetime

from app.domain.value_objects.enums import TechnicianRole


@dataclass
class AssignmentCandidate:
    """A technician eligible for auto-assignment, as of the current request.

    current_workload counts tickets in new / assigned / in_progress.
    """

    user_id: str
    role: TechnicianRole
    current_workload: int = 0
    skills: set[str] = field(default_factory=set)
    is_available: bool = True
    last_assigned_at: datetime | None = None
    name: str | None = None

    def is_senior(self) -> bool:
        return self.role in (TechnicianRole.ADMIN, TechnicianRole.MANAGER)


@dataclass(frozen=True)
class WorkloadStat:
    user_id: str
    name: str | None
    open_tickets: int
    in_progress_tickets: int
    avg_resolution_hours: float
