"""Port interface for read-only technician and workload lookups."""

from abc import ABC, abstractmethod

from app.domain.entities.technician import AssignmentCandidate, WorkloadStat


class TechnicianRepository(ABC):
    @abstractmethod
    async def list_candidates(self) -> list[AssignmentCandidate]:
        """Active technicians/admins/managers with their live workload.

        Ordered by (current_workload ASC, last_assigned_at ASC NULLS FIRST).
        """
        ...

    @abstractmethod
    async def users_with_customer_history(
        self, customer_id: str, user_ids: list[str]
    ) -> set[str]:
        """Subset of *user_ids* that were assigned a non-deleted ticket of the customer."""
        ...

    @abstractmethod
    async def get_workload_stats(self) -> list[WorkloadStat]:
        ...
