"""Wires adapters into use cases for one unit of work.

Hosts open a session with ``session_scope()`` and build the use cases they
need from it::

    async with session_scope() as session:
        entry = await get_log_time_entry_uc(session).execute(request, ticket)
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.clock import SystemClock
from app.adapters.persistence.repositories import SqlRateRepository, SqlTechnicianRepository
from app.application.use_cases.auto_assign import AutoAssignUseCase
from app.application.use_cases.evaluate_sla import EvaluateSlaUseCase
from app.application.use_cases.log_time_entry import LogTimeEntryUseCase, UpdateTimeEntryUseCase
from app.application.use_cases.open_ticket import OpenTicketUseCase
from app.application.use_cases.resolve_billing_rate import ResolveBillingRateUseCase
from app.application.use_cases.update_ticket import ChangeTicketStatusUseCase, UpdateTicketUseCase
from app.config import Settings, settings

# Stateless adapters are shared
_clock = SystemClock()


def get_resolve_billing_rate_uc(session: AsyncSession) -> ResolveBillingRateUseCase:
    return ResolveBillingRateUseCase(rate_repo=SqlRateRepository(session), clock=_clock)


def get_log_time_entry_uc(session: AsyncSession) -> LogTimeEntryUseCase:
    return LogTimeEntryUseCase(resolver=get_resolve_billing_rate_uc(session), clock=_clock)


def get_update_time_entry_uc() -> UpdateTimeEntryUseCase:
    return UpdateTimeEntryUseCase()


def get_auto_assign_uc(session: AsyncSession, config: Settings = settings) -> AutoAssignUseCase:
    return AutoAssignUseCase(
        technician_repo=SqlTechnicianRepository(session),
        clock=_clock,
        weights=config.scoring_weights(),
        recommendation_limit=config.recommendation_limit,
    )


def get_open_ticket_uc(session: AsyncSession, config: Settings = settings) -> OpenTicketUseCase:
    return OpenTicketUseCase(
        auto_assign=get_auto_assign_uc(session, config),
        clock=_clock,
        calendar=config.business_hours(),
    )


def get_evaluate_sla_uc() -> EvaluateSlaUseCase:
    return EvaluateSlaUseCase(clock=_clock)


def get_update_ticket_uc() -> UpdateTicketUseCase:
    return UpdateTicketUseCase(
        change_status=ChangeTicketStatusUseCase(clock=_clock, sla=get_evaluate_sla_uc())
    )
