"""AutoAssignUseCase — score technicians and assign the best one."""

from __future__ import annotations

import logging

from app.application.ports.clock import Clock
from app.application.ports.technician_repo import TechnicianRepository
from app.domain.entities.technician import WorkloadStat
from app.domain.entities.ticket import Ticket
from app.domain.errors import TicketNotOpenError
from app.domain.policies.assignment_scoring import (
    DEFAULT_WEIGHTS,
    AssignmentCriteria,
    ScoredCandidate,
    ScoringWeights,
    pick_assignee,
    score_candidates,
)
from app.domain.value_objects.enums import TicketStatus

logger = logging.getLogger(__name__)


def criteria_for(ticket: Ticket) -> AssignmentCriteria:
    return AssignmentCriteria(
        priority=ticket.priority,
        category=ticket.category,
        tags=tuple(ticket.tags or ()),
        customer_id=ticket.customer_id,
    )


class AutoAssignUseCase:
    """Candidates and affinity are re-read on every call; nothing is cached."""

    def __init__(
        self,
        technician_repo: TechnicianRepository,
        clock: Clock,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
        recommendation_limit: int = 5,
    ):
        self._technicians = technician_repo
        self._clock = clock
        self._weights = weights
        self._recommendation_limit = recommendation_limit

    async def rank(self, criteria: AssignmentCriteria) -> list[ScoredCandidate]:
        candidates = await self._technicians.list_candidates()
        if not candidates:
            return []

        affinity: set[str] = set()
        if criteria.customer_id:
            affinity = await self._technicians.users_with_customer_history(
                criteria.customer_id, [c.user_id for c in candidates]
            )

        return score_candidates(
            candidates,
            criteria,
            self._clock.now(),
            affinity_user_ids=affinity,
            weights=self._weights,
        )

    async def choose(self, criteria: AssignmentCriteria) -> ScoredCandidate | None:
        best = pick_assignee(await self.rank(criteria))
        if best is None:
            logger.warning("No suitable technician found for criteria %s", criteria)
        return best

    async def execute(self, ticket: Ticket) -> str | None:
        """Assign *ticket* to the best technician.

        A ``new`` ticket also moves to ``assigned``. Returns the assignee's
        user id, or None when the ticket needs manual assignment.
        """
        if not ticket.is_open():
            raise TicketNotOpenError(ticket.id, ticket.status.value)

        best = await self.choose(criteria_for(ticket))
        if best is None:
            logger.warning("Ticket %s left for manual assignment", ticket.id)
            return None

        ticket.assigned_to = best.user_id
        if ticket.status == TicketStatus.NEW:
            ticket.transition_to(TicketStatus.ASSIGNED, self._clock.now())

        logger.info(
            "Ticket %s → technician %s (score %d: %s)",
            ticket.id, best.user_id, best.score, best.reason,
        )
        return best.user_id

    async def recommendations(
        self, criteria: AssignmentCriteria, limit: int | None = None
    ) -> list[ScoredCandidate]:
        """Same ranking as execute(), truncated, without assigning anything."""
        if limit is None:
            limit = self._recommendation_limit
        if limit < 1:
            return []
        return (await self.rank(criteria))[:limit]

    async def workload_stats(self) -> list[WorkloadStat]:
        return await self._technicians.get_workload_stats()
