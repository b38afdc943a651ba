"""Port interface for read-only billing rate lookups."""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal

from app.domain.entities.billing_rate import UserBillingRate, UserRateProfile


class RateRepository(ABC):
    @abstractmethod
    async def get_rate_profile(self, user_id: str) -> UserRateProfile | None:
        """Cost and default billing rate of a non-deleted user, None if absent."""
        ...

    @abstractmethod
    async def list_billing_rates(
        self,
        user_id: str,
        customer_id: str,
        contract_id: str | None,
        as_of: date,
    ) -> list[UserBillingRate]:
        """Non-deleted rate records of the user keyed to the contract or customer.

        Implementations may pre-filter on validity; the domain policy checks
        validity and ranking again.
        """
        ...

    @abstractmethod
    async def get_contract_rate(self, contract_id: str) -> Decimal | None:
        ...
