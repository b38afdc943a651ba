"""AssignmentScoringPolicy — rank technicians for a ticket.

Score components (additive):
  1. Unavailable                          →  0, nothing else counts.
  2. Available                            → +10
  3. Workload                             → +max(0, 50 - 5 × open tickets)
  4. Category matches a skill             → +30
  5. Each tag matching a skill            → +10
  6. High/critical and admin/manager      → +20
     Critical and workload above 5        → −30
  7. Round robin                          → +min(15, hours since last / 2),
                                            +15 if never assigned
  8. Handled this customer before         → +25

Skill matching is a case-insensitive substring test in either direction.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone

from app.domain.entities.technician import AssignmentCandidate
from app.domain.value_objects.enums import Priority


@dataclass(frozen=True)
class ScoringWeights:
    availability: int = 10
    workload_max: int = 50
    workload_step: int = 5
    category_match: int = 30
    tag_match: int = 10
    senior_for_urgent: int = 20
    critical_overload_threshold: int = 5
    critical_overload_penalty: int = 30
    round_robin_cap: int = 15
    round_robin_hours_per_point: float = 2.0
    customer_affinity: int = 25


DEFAULT_WEIGHTS = ScoringWeights()


@dataclass(frozen=True)
class AssignmentCriteria:
    priority: Priority | None = None
    category: str | None = None
    tags: tuple[str, ...] = ()
    customer_id: str | None = None


@dataclass(frozen=True)
class ScoredCandidate:
    user_id: str
    score: int
    reasons: tuple[str, ...] = field(default_factory=tuple)

    @property
    def reason(self) -> str:
        return ", ".join(self.reasons)


def score_candidate(
    candidate: AssignmentCandidate,
    criteria: AssignmentCriteria,
    now: datetime,
    has_customer_affinity: bool = False,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> ScoredCandidate:
    if not candidate.is_available:
        return ScoredCandidate(candidate.user_id, 0, ("not available",))

    score = weights.availability
    reasons = ["available"]

    workload = candidate.current_workload
    workload_points = max(0, weights.workload_max - workload * weights.workload_step)
    score += workload_points
    reasons.append(f"workload: {workload} tickets ({workload_points}pts)")

    # Skills
    if criteria.category and _matches_any_skill(criteria.category, candidate.skills):
        score += weights.category_match
        reasons.append(f"category match: {criteria.category}")

    matched_tags = [t for t in criteria.tags if _matches_any_skill(t, candidate.skills)]
    if matched_tags:
        score += len(matched_tags) * weights.tag_match
        reasons.append(f"tag match: {', '.join(matched_tags)}")

    # Priority
    if criteria.priority in (Priority.HIGH, Priority.CRITICAL) and candidate.is_senior():
        score += weights.senior_for_urgent
        reasons.append("senior role for high priority")
    if (
        criteria.priority == Priority.CRITICAL
        and workload > weights.critical_overload_threshold
    ):
        score -= weights.critical_overload_penalty
        reasons.append("overloaded for critical ticket")

    rr_points, rr_reason = _round_robin_bonus(candidate.last_assigned_at, now, weights)
    score += rr_points
    reasons.append(rr_reason)

    if criteria.customer_id and has_customer_affinity:
        score += weights.customer_affinity
        reasons.append("customer affinity")

    return ScoredCandidate(candidate.user_id, score, tuple(reasons))


def score_candidates(
    candidates: list[AssignmentCandidate],
    criteria: AssignmentCriteria,
    now: datetime,
    affinity_user_ids: frozenset[str] | set[str] = frozenset(),
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> list[ScoredCandidate]:
    """Score every candidate, highest first.

    Ties keep the input order, so callers should pass candidates ordered by
    (workload ASC, last_assigned_at ASC NULLS FIRST).
    """
    scored = [
        score_candidate(
            c,
            criteria,
            now,
            has_customer_affinity=c.user_id in affinity_user_ids,
            weights=weights,
        )
        for c in candidates
    ]
    scored.sort(key=lambda s: s.score, reverse=True)
    return scored


def pick_assignee(scored: list[ScoredCandidate]) -> ScoredCandidate | None:
    """Best candidate from a ranked list, or None when nobody is suitable.

    An empty pool or a top score of exactly 0 means manual assignment.
    """
    if not scored:
        return None
    best = max(scored, key=lambda s: s.score)
    if best.score == 0:
        return None
    return best


def _matches_any_skill(term: str, skills: set[str]) -> bool:
    needle = term.strip().lower()
    if not needle:
        return False
    for skill in skills:
        s = skill.strip().lower()
        if s and (needle in s or s in needle):
            return True
    return False


def _round_robin_bonus(
    last_assigned_at: datetime | None, now: datetime, weights: ScoringWeights
) -> tuple[int, str]:
    if last_assigned_at is None:
        return weights.round_robin_cap, f"round-robin: never assigned ({weights.round_robin_cap}pts)"

    hours_since = max(0.0, (_utc(now) - _utc(last_assigned_at)).total_seconds() / 3600)
    points = min(
        weights.round_robin_cap,
        math.floor(hours_since / weights.round_robin_hours_per_point),
    )
    return points, f"round-robin: {math.floor(hours_since)}h ago ({points}pts)"


def _utc(moment: datetime) -> datetime:
    return moment if moment.tzinfo is None else moment.astimezone(timezone.utc)
