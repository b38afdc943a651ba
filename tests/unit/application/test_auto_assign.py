"""Tests for AutoAssignUseCase with in-memory fakes."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from app.application.ports.clock import Clock
from app.application.ports.technician_repo import TechnicianRepository
from app.application.use_cases.auto_assign import AutoAssignUseCase, criteria_for
from app.domain.entities.technician import AssignmentCandidate, WorkloadStat
from app.domain.entities.ticket import Ticket
from app.domain.errors import TicketNotOpenError
from app.domain.policies.assignment_scoring import AssignmentCriteria, ScoringWeights
from app.domain.value_objects.enums import Priority, TechnicianRole, TicketStatus

NOW = datetime(2024, 1, 8, 10, 0, tzinfo=timezone.utc)

# ─── In-memory fakes ────────────────────────────────────────────────


class FakeClock(Clock):
    def now(self):
        return NOW


class FakeTechnicianRepo(TechnicianRepository):
    def __init__(self, candidates=None, history=None, stats=None):
        self.candidates: list[AssignmentCandidate] = candidates or []
        # customer_id → user ids that handled it before
        self.history: dict[str, set[str]] = history or {}
        self.stats: list[WorkloadStat] = stats or []
        self.history_lookups = 0

    async def list_candidates(self):
        return list(self.candidates)

    async def users_with_customer_history(self, customer_id, user_ids):
        self.history_lookups += 1
        return self.history.get(customer_id, set()) & set(user_ids)

    async def get_workload_stats(self):
        return list(self.stats)


def _tech(uid, workload=0, skills=None, available=True, role=TechnicianRole.TECHNICIAN):
    return AssignmentCandidate(
        user_id=uid,
        role=role,
        current_workload=workload,
        skills=skills or set(),
        is_available=available,
        last_assigned_at=NOW - timedelta(hours=1),
    )


def _ticket(**kw) -> Ticket:
    data = dict(id="t1", customer_id="c1", title="VPN drops every hour", category="network")
    data.update(kw)
    return Ticket(**data)


def _uc(repo, **kw) -> AutoAssignUseCase:
    return AutoAssignUseCase(technician_repo=repo, clock=FakeClock(), **kw)


def test_criteria_from_ticket():
    criteria = criteria_for(_ticket(priority=Priority.HIGH, tags=["vpn"]))
    assert criteria == AssignmentCriteria(
        priority=Priority.HIGH, category="network", tags=("vpn",), customer_id="c1"
    )


@pytest.mark.asyncio
async def test_assigns_best_candidate_and_moves_new_ticket():
    repo = FakeTechnicianRepo([_tech("idle", workload=0), _tech("netops", workload=2, skills={"Network"})])
    ticket = _ticket()

    chosen = await _uc(repo).execute(ticket)

    assert chosen == "netops"
    assert ticket.assigned_to == "netops"
    assert ticket.status == TicketStatus.ASSIGNED


@pytest.mark.asyncio
async def test_in_progress_ticket_keeps_status():
    repo = FakeTechnicianRepo([_tech("a")])
    ticket = _ticket(status=TicketStatus.IN_PROGRESS, assigned_to="old")

    assert await _uc(repo).execute(ticket) == "a"
    assert ticket.status == TicketStatus.IN_PROGRESS
    assert ticket.assigned_to == "a"


@pytest.mark.asyncio
async def test_empty_pool_leaves_ticket_unassigned():
    ticket = _ticket()
    assert await _uc(FakeTechnicianRepo()).execute(ticket) is None
    assert ticket.assigned_to is None
    assert ticket.status == TicketStatus.NEW


@pytest.mark.asyncio
async def test_nobody_available_means_manual_assignment():
    repo = FakeTechnicianRepo([_tech("a", available=False), _tech("b", available=False)])
    ticket = _ticket()
    assert await _uc(repo).execute(ticket) is None
    assert ticket.assigned_to is None


@pytest.mark.asyncio
async def test_closed_ticket_cannot_be_assigned():
    repo = FakeTechnicianRepo([_tech("a")])
    with pytest.raises(TicketNotOpenError):
        await _uc(repo).execute(_ticket(status=TicketStatus.CLOSED))


@pytest.mark.asyncio
async def test_customer_affinity_breaks_tie():
    repo = FakeTechnicianRepo([_tech("a"), _tech("b")], history={"c1": {"b"}})
    chosen = await _uc(repo).choose(AssignmentCriteria(customer_id="c1"))
    assert chosen.user_id == "b"
    assert "customer affinity" in chosen.reasons


@pytest.mark.asyncio
async def test_affinity_not_queried_without_customer():
    repo = FakeTechnicianRepo([_tech("a")])
    await _uc(repo).rank(AssignmentCriteria(category="network"))
    assert repo.history_lookups == 0


@pytest.mark.asyncio
async def test_recommendations_are_truncated_and_commit_nothing():
    repo = FakeTechnicianRepo([_tech(f"u{i}", workload=i) for i in range(8)])
    recs = await _uc(repo).recommendations(AssignmentCriteria(), limit=3)
    assert [r.user_id for r in recs] == ["u0", "u1", "u2"]
    assert recs[0].score > recs[1].score > recs[2].score


@pytest.mark.asyncio
async def test_recommendations_zero_limit_is_empty():
    repo = FakeTechnicianRepo([_tech("a"), _tech("b")])
    assert await _uc(repo).recommendations(AssignmentCriteria(), limit=0) == []


@pytest.mark.asyncio
async def test_custom_weights_are_used():
    repo = FakeTechnicianRepo([_tech("a")])
    weights = ScoringWeights(availability=1)
    ranked = await _uc(repo, weights=weights).rank(AssignmentCriteria())
    # 1 availability + 50 workload + 0 round robin (assigned an hour ago)
    assert ranked[0].score == 51


@pytest.mark.asyncio
async def test_workload_stats_passthrough():
    stat = WorkloadStat("u1", "Dana", open_tickets=3, in_progress_tickets=1, avg_resolution_hours=5.5)
    assert await _uc(FakeTechnicianRepo(stats=[stat])).workload_stats() == [stat]


@pytest.mark.asyncio
async def test_recommendations_default_limit():
    repo = FakeTechnicianRepo([_tech(f"u{i}") for i in range(10)])
    assert len(await _uc(repo).recommendations(AssignmentCriteria())) == 5
    assert len(await _uc(repo, recommendation_limit=2).recommendations(AssignmentCriteria())) == 2
