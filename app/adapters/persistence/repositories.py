"""SQLAlchemy read-only repository implementations."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.models import (
    ContractModel,
    TicketModel,
    UserBillingRateModel,
    UserModel,
)
from app.application.ports.rate_repo import RateRepository
from app.application.ports.technician_repo import TechnicianRepository
from app.domain.entities.billing_rate import UserBillingRate, UserRateProfile
from app.domain.entities.technician import AssignmentCandidate, WorkloadStat
from app.domain.value_objects.enums import TechnicianRole, TicketStatus

# Tickets that count against a technician's current workload
WORKLOAD_STATUSES = (
    TicketStatus.NEW.value,
    TicketStatus.ASSIGNED.value,
    TicketStatus.IN_PROGRESS.value,
)

# ─── Mappers ─────────────────────────────────────────────────────────


def _profile_to_domain(m: UserModel) -> UserRateProfile:
    return UserRateProfile(
        user_id=m.id,
        internal_cost_rate=m.internal_cost_rate,
        default_billing_rate=m.default_billing_rate,
    )


def _rate_to_domain(m: UserBillingRateModel) -> UserBillingRate:
    return UserBillingRate(
        id=m.id,
        user_id=m.user_id,
        billing_rate=m.billing_rate,
        valid_from=m.valid_from,
        created_at=m.created_at,
        customer_id=m.customer_id,
        contract_id=m.contract_id,
        service_level=m.service_level,
        work_type=m.work_type,
        valid_until=m.valid_until,
        is_active=m.is_active,
    )


def _candidate_to_domain(m: UserModel, workload: int) -> AssignmentCandidate:
    return AssignmentCandidate(
        user_id=m.id,
        name=m.name,
        role=TechnicianRole(m.role),
        current_workload=int(workload or 0),
        skills=set(m.skills) if m.skills else set(),
        is_available=m.is_active and m.deleted_at is None,
        last_assigned_at=m.last_assigned_at,
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlRateRepository(RateRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_rate_profile(self, user_id: str) -> UserRateProfile | None:
        result = await self._s.execute(
            select(UserModel).where(UserModel.id == user_id, UserModel.deleted_at.is_(None))
        )
        m = result.scalar_one_or_none()
        return _profile_to_domain(m) if m else None

    async def list_billing_rates(
        self,
        user_id: str,
        customer_id: str,
        contract_id: str | None,
        as_of: date,
    ) -> list[UserBillingRate]:
        scope = UserBillingRateModel.customer_id == customer_id
        if contract_id:
            scope = or_(UserBillingRateModel.contract_id == contract_id, scope)

        result = await self._s.execute(
            select(UserBillingRateModel).where(
                UserBillingRateModel.user_id == user_id,
                UserBillingRateModel.deleted_at.is_(None),
                UserBillingRateModel.is_active.is_(True),
                UserBillingRateModel.valid_from <= as_of,
                or_(
                    UserBillingRateModel.valid_until.is_(None),
                    UserBillingRateModel.valid_until >= as_of,
                ),
                scope,
            )
        )
        return [_rate_to_domain(m) for m in result.scalars()]

    async def get_contract_rate(self, contract_id: str) -> Decimal | None:
        result = await self._s.execute(
            select(ContractModel.hourly_rate).where(
                ContractModel.id == contract_id,
                ContractModel.deleted_at.is_(None),
            )
        )
        return result.scalar_one_or_none()


class SqlTechnicianRepository(TechnicianRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    def _assigned_tickets_join(self):
        return and_(TicketModel.assigned_to == UserModel.id, TicketModel.deleted_at.is_(None))

    def _technician_filter(self):
        return (
            UserModel.role.in_([r.value for r in TechnicianRole]),
            UserModel.deleted_at.is_(None),
        )

    async def list_candidates(self) -> list[AssignmentCandidate]:
        workload = func.count(TicketModel.id).filter(TicketModel.status.in_(WORKLOAD_STATUSES))
        result = await self._s.execute(
            select(UserModel, workload.label("workload"))
            .outerjoin(TicketModel, self._assigned_tickets_join())
            .where(*self._technician_filter(), UserModel.is_active.is_(True))
            .group_by(UserModel.id)
            .order_by(workload.asc(), UserModel.last_assigned_at.asc().nulls_first())
        )
        return [_candidate_to_domain(user, count) for user, count in result.all()]

    async def users_with_customer_history(
        self, customer_id: str, user_ids: list[str]
    ) -> set[str]:
        if not user_ids:
            return set()
        result = await self._s.execute(
            select(TicketModel.assigned_to)
            .where(
                TicketModel.customer_id == customer_id,
                TicketModel.assigned_to.in_(user_ids),
                TicketModel.deleted_at.is_(None),
            )
            .distinct()
        )
        return set(result.scalars())

    async def get_workload_stats(self) -> list[WorkloadStat]:
        open_tickets = func.count(TicketModel.id).filter(
            TicketModel.status.in_((TicketStatus.NEW.value, TicketStatus.ASSIGNED.value))
        )
        in_progress = func.count(TicketModel.id).filter(
            TicketModel.status == TicketStatus.IN_PROGRESS.value
        )
        avg_resolution = func.coalesce(
            func.avg(
                func.extract("epoch", TicketModel.resolved_at - TicketModel.created_at) / 3600
            ).filter(TicketModel.resolved_at.is_not(None)),
            0,
        )
        result = await self._s.execute(
            select(
                UserModel.id,
                UserModel.name,
                open_tickets.label("open_tickets"),
                in_progress.label("in_progress_tickets"),
                avg_resolution.label("avg_resolution_hours"),
            )
            .outerjoin(TicketModel, self._assigned_tickets_join())
            .where(*self._technician_filter())
            .group_by(UserModel.id, UserModel.name)
            .order_by(open_tickets.desc(), in_progress.desc())
        )
        return [
            WorkloadStat(
                user_id=row.id,
                name=row.name,
                open_tickets=int(row.open_tickets),
                in_progress_tickets=int(row.in_progress_tickets),
                avg_resolution_hours=float(row.avg_resolution_hours),
            )
            for row in result.all()
        ]
