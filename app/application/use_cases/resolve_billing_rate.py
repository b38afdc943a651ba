"""ResolveBillingRateUseCase — walk the billing rate hierarchy for one time entry."""

from __future__ import annotations

import logging
from datetime import date

from app.application.ports.clock import Clock
from app.application.ports.rate_repo import RateRepository
from app.domain.errors import NoRateConfiguredError
from app.domain.policies.billing_rate import pick_specific_rate, require_cost_rate
from app.domain.value_objects.enums import RateSource
from app.domain.value_objects.money import ResolvedRates

logger = logging.getLogger(__name__)


class ResolveBillingRateUseCase:
    """Resolves (billing_rate, cost_rate) with strict precedence.

    Lookups stop at the first tier that yields a rate, so the contract and
    user default are only read when the tiers above came up empty.
    """

    def __init__(self, rate_repo: RateRepository, clock: Clock):
        self._rates = rate_repo
        self._clock = clock

    async def execute(
        self,
        user_id: str,
        customer_id: str,
        contract_id: str | None = None,
        service_level: str | None = None,
        work_type: str | None = None,
        as_of: date | None = None,
    ) -> ResolvedRates:
        as_of = as_of or self._clock.now().date()
        logger.debug(
            "Resolving billing rates: user=%s customer=%s contract=%s level=%s type=%s date=%s",
            user_id, customer_id, contract_id, service_level, work_type, as_of,
        )

        # Step 1: cost rate is mandatory and independent of the billing tiers
        profile = await self._rates.get_rate_profile(user_id)
        cost_rate = require_cost_rate(profile, user_id)

        # Step 2: most specific user_billing_rates record
        records = await self._rates.list_billing_rates(user_id, customer_id, contract_id, as_of)
        specific = pick_specific_rate(
            records,
            customer_id=customer_id,
            contract_id=contract_id,
            service_level=service_level,
            work_type=work_type,
            as_of=as_of,
        )
        if specific is not None:
            return self._resolved(specific.billing_rate, cost_rate, RateSource.SPECIFIC, user_id)

        # Step 3: contract flat rate
        if contract_id:
            contract_rate = await self._rates.get_contract_rate(contract_id)
            if contract_rate is not None:
                return self._resolved(contract_rate, cost_rate, RateSource.CONTRACT, user_id)

        # Step 4: user's own default
        if profile.default_billing_rate is not None:
            return self._resolved(
                profile.default_billing_rate, cost_rate, RateSource.USER_DEFAULT, user_id
            )

        logger.warning(
            "No billing rate configured for user %s and customer %s", user_id, customer_id
        )
        raise NoRateConfiguredError(user_id, customer_id)

    @staticmethod
    def _resolved(billing_rate, cost_rate, source: RateSource, user_id: str) -> ResolvedRates:
        logger.info(
            "Billing rate for user %s resolved from %s: billing=%s cost=%s",
            user_id, source.value, billing_rate, cost_rate,
        )
        return ResolvedRates(billing_rate=billing_rate, cost_rate=cost_rate, source=source)
