"""Billing rate entities — the records the rate hierarchy is resolved from."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class UserRateProfile:
    """Rates kept on the user record itself."""

    user_id: str
    internal_cost_rate: Decimal | None
    default_billing_rate: Decimal | None = None


@dataclass(frozen=True)
class UserBillingRate:
    """A specific rate for a user, scoped to a contract or a customer.

    service_level / work_type of None act as wildcards.
    """

    id: str
    user_id: str
    billing_rate: Decimal
    valid_from: date
    created_at: datetime
    customer_id: str | None = None
    contract_id: str | None = None
    service_level: str | None = None
    work_type: str | None = None
    valid_until: date | None = None
    is_active: bool = True

    def is_valid_on(self, day: date) -> bool:
        if not self.is_active or self.valid_from > day:
            return False
        return self.valid_until is None or self.valid_until >= day
