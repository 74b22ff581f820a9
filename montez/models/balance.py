"""Tenant balance, payment allocation and arrears summary records."""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import NamedTuple, Optional


class PaymentStatus(str, Enum):
    """Arrears classification of a tenant."""

    CURRENT = "CURRENT"
    """Nothing owed, or still inside the grace period"""

    OVERDUE = "OVERDUE"
    """Past the grace period, up to the delinquency threshold"""

    DELINQUENT = "DELINQUENT"
    """Beyond the delinquency threshold"""


class TenantBalance(NamedTuple):
    """Per-category balances of one tenant.

    Negative balances denote credit.
    """

    tenant_id: str
    apartment: str
    rent_balance: Decimal
    water_balance: Decimal
    other_balance: Decimal
    total_balance: Decimal
    next_payment_due: date
    status: PaymentStatus
    last_payment_date: Optional[date] = None


class OutstandingBalances(NamedTuple):
    """Buckets a single payment is applied against."""

    rent_balance: Decimal
    water_balance: Decimal
    other_balance: Decimal = Decimal(0)
    late_fees: Decimal = Decimal(0)


class PaymentAllocation(NamedTuple):
    """How a payment was distributed.

    rent + water + other + late_fees + unallocated == payment amount.
    unallocated is the excess over all outstanding buckets, kept as credit.
    """

    rent: Decimal
    water: Decimal
    other: Decimal
    late_fees: Decimal
    unallocated: Decimal = Decimal(0)

    @property
    def allocated(self) -> Decimal:
        return self.rent + self.water + self.other + self.late_fees


class BalanceSummary(NamedTuple):
    total_outstanding: Decimal
    total_rent_due: Decimal
    total_water_due: Decimal
    total_other_due: Decimal
    average_balance_per_tenant: Decimal
    tenants_in_arrears: int
