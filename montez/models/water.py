"""Water meter readings and bills."""

from decimal import Decimal
from enum import Enum
from typing import NamedTuple


class Season(str, Enum):
    """Rainfall season, used when estimating consumption."""

    DRY = "DRY"
    WET = "WET"


class ConsumptionTrend(str, Enum):
    INCREASING = "INCREASING"
    DECREASING = "DECREASING"
    STABLE = "STABLE"


class WaterReading(NamedTuple):
    """A metered reading pair for one tenant and billing month."""

    previous_reading: Decimal
    current_reading: Decimal
    rate: Decimal


class WaterBill(NamedTuple):
    """Water bill computed from a reading pair."""

    units: Decimal
    rate: Decimal
    amount: Decimal
    previous_reading: Decimal
    current_reading: Decimal
    consumption: Decimal


class ApartmentWaterUsage(NamedTuple):
    """Billed water usage of one apartment, input to bill summaries."""

    apartment: str
    units: Decimal
    amount: Decimal


class WaterBillSummary(NamedTuple):
    total_units: Decimal
    total_amount: Decimal
    average_consumption: Decimal
    highest_consumer: str
    lowest_consumer: str


class MonthlyConsumption(NamedTuple):
    """Units consumed in a month ("YYYY-MM")."""

    month: str
    units: Decimal


class WaterConsumptionTrend(NamedTuple):
    trend: ConsumptionTrend
    percentage_change: float
