"""Service for water billing from meter readings and consumption estimates."""

import logging
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from montez.config.settings import BillingSettings, get_billing_settings
from montez.errors import ValidationError
from montez.models.apartment import UnitType
from montez.models.water import (
    ApartmentWaterUsage,
    ConsumptionTrend,
    MonthlyConsumption,
    Season,
    WaterBill,
    WaterBillSummary,
    WaterConsumptionTrend,
    WaterReading,
)
from montez.services.money import quantize_money, require_non_negative, to_decimal

logger = logging.getLogger(__name__)


class WaterBillingService:
    """Water bills from meter readings, plus heuristic estimates."""

    def __init__(self, settings: Optional[BillingSettings] = None):
        self.settings = settings or get_billing_settings()

    @property
    def rate(self) -> Decimal:
        return self.settings.water_rate_per_unit

    def calculate_water_bill(self, units, rate=None) -> Decimal:
        """Charge for consumed units.

        Formula: units × rate (rate defaults to water_rate_per_unit)

        Raises:
            ValidationError: If units or rate is negative
        """
        units = require_non_negative(units, "Units")
        rate = self.rate if rate is None else require_non_negative(rate, "Rate")
        return units * rate

    def calculate_water_consumption(self, previous_reading, current_reading) -> Decimal:
        """Units consumed between two meter readings.

        Equal readings are valid and yield zero consumption.

        Raises:
            ValidationError: If a reading is negative or current < previous
        """
        previous = require_non_negative(previous_reading, "Previous reading")
        current = require_non_negative(current_reading, "Current reading")
        if current < previous:
            raise ValidationError(
                "Current reading must be greater than previous reading",
                code="reading_decreased",
            )
        return current - previous

    def calculate_water_bill_from_readings(
        self, previous_reading, current_reading, rate=None
    ) -> WaterBill:
        """Build the full bill record for a reading pair."""
        consumption = self.calculate_water_consumption(previous_reading, current_reading)
        rate = self.rate if rate is None else require_non_negative(rate, "Rate")
        amount = self.calculate_water_bill(consumption, rate)

        return WaterBill(
            units=consumption,
            rate=rate,
            amount=amount,
            previous_reading=to_decimal(previous_reading),
            current_reading=to_decimal(current_reading),
            consumption=consumption,
        )

    def bill_reading(self, reading: WaterReading) -> WaterBill:
        """Bill a stored reading at the rate recorded with it."""
        return self.calculate_water_bill_from_readings(
            reading.previous_reading, reading.current_reading, reading.rate
        )

    def estimate_water_bill(
        self,
        unit_type: UnitType | str,
        occupancy: int,
        season: Season | str = Season.DRY,
    ) -> Decimal:
        """Projected monthly bill for a unit with no readings yet.

        base units = occupancy × water_units_per_person
        × two_bedroom_water_multiplier for two-bedroom units
        × wet_season_water_multiplier in the wet season

        Raises:
            ValidationError: If occupancy is negative or type/season unknown
        """
        try:
            unit_type = UnitType(unit_type)
            season = Season(season)
        except ValueError as e:
            raise ValidationError(str(e), code="unknown_category") from e

        units = require_non_negative(occupancy, "Occupancy") * self.settings.water_units_per_person

        if unit_type == UnitType.TWO_BEDROOM:
            units *= self.settings.two_bedroom_water_multiplier

        if season == Season.WET:
            units *= self.settings.wet_season_water_multiplier

        return quantize_money(self.calculate_water_bill(units))

    def calculate_water_bill_summary(
        self, bills: Sequence[ApartmentWaterUsage]
    ) -> WaterBillSummary:
        """Totals and top/bottom consumers across apartments."""
        total_units = sum((to_decimal(bill.units) for bill in bills), Decimal(0))
        total_amount = sum((to_decimal(bill.amount) for bill in bills), Decimal(0))
        average = total_units / len(bills) if bills else Decimal(0)

        # Stable sort keeps input order among equal consumers
        ranked = sorted(bills, key=lambda bill: to_decimal(bill.units), reverse=True)

        return WaterBillSummary(
            total_units=total_units,
            total_amount=total_amount,
            average_consumption=average,
            highest_consumer=ranked[0].apartment if ranked else "N/A",
            lowest_consumer=ranked[-1].apartment if ranked else "N/A",
        )

    def calculate_consumption_trend(
        self, readings: Iterable[MonthlyConsumption]
    ) -> WaterConsumptionTrend:
        """Compare the earliest and latest month of consumption.

        A change beyond ±trend_threshold_pct is a trend; anything within it is STABLE.
        """
        ordered = sorted(readings, key=lambda reading: reading.month)
        if len(ordered) < 2:
            return WaterConsumptionTrend(ConsumptionTrend.STABLE, 0.0)

        first = to_decimal(ordered[0].units)
        last = to_decimal(ordered[-1].units)
        if first == 0:
            logger.debug("First month has zero consumption, trend undefined")
            return WaterConsumptionTrend(ConsumptionTrend.STABLE, 0.0)

        change = float((last - first) / first * 100)
        threshold = self.settings.trend_threshold_pct

        if change > threshold:
            return WaterConsumptionTrend(ConsumptionTrend.INCREASING, change)
        if change < -threshold:
            return WaterConsumptionTrend(ConsumptionTrend.DECREASING, change)
        return WaterConsumptionTrend(ConsumptionTrend.STABLE, change)
