"""Rent expectations and collection summaries."""

from decimal import Decimal
from enum import Enum
from typing import NamedTuple

from montez.models.apartment import UnitType


class RentStatus(str, Enum):
    PAID = "PAID"
    PARTIAL = "PARTIAL"
    OVERDUE = "OVERDUE"
    PENDING = "PENDING"


class RentPayment(NamedTuple):
    """A rent payment for an apartment in the current month."""

    apartment: str
    amount: Decimal
    status: RentStatus


class RentCalculation(NamedTuple):
    apartment: str
    unit_type: UnitType
    expected_rent: Decimal
    actual_rent: Decimal
    difference: Decimal
    status: RentStatus


class MonthlyRentSummary(NamedTuple):
    total_expected: Decimal
    total_collected: Decimal
    collection_rate: float
    pending_amount: Decimal
    overdue_amount: Decimal
