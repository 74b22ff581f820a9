"""Occupancy analytics over unit snapshots and the apartment roster."""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from montez.config.roster import ApartmentRoster
from montez.config.settings import BillingSettings, get_billing_settings
from montez.models.apartment import UnitType
from montez.models.occupancy import (
    FloorOccupancy,
    OccupancyData,
    OccupancyHistoryPoint,
    OccupancyMetrics,
    UnitStatus,
)
from montez.services.date_utils import DateLike, months_between, to_date
from montez.services.money import to_decimal

logger = logging.getLogger(__name__)

# Fewer history points than this and the trend just repeats the last rate
MIN_TREND_POINTS = 3


class OccupancyService:
    """Occupancy rates, tenure, per-floor breakdown and trend prediction."""

    def __init__(
        self,
        roster: Optional[ApartmentRoster] = None,
        settings: Optional[BillingSettings] = None,
    ):
        self.settings = settings or get_billing_settings()
        self.roster = roster if roster is not None else ApartmentRoster.load(settings=self.settings)

    @property
    def total_units(self) -> int:
        """Building unit count: total_units setting if set, else roster size."""
        if self.settings.total_units is not None:
            return self.settings.total_units
        return len(self.roster)

    def _percent_of_total(self, units: int) -> float:
        total = self.total_units
        if total == 0:
            logger.warning("Total unit count is zero, cannot compute rate")
            return 0.0
        return units / total * 100

    def calculate_occupancy_rate(self, occupied_units: int) -> float:
        """Occupied units as a percentage of all units (0 if there are none)."""
        return self._percent_of_total(occupied_units)

    def calculate_vacancy_rate(self, vacant_units: int) -> float:
        """Vacant units as a percentage of all units (0 if there are none)."""
        return self._percent_of_total(vacant_units)

    def calculate_occupancy_metrics(
        self, units: Sequence[OccupancyData], now: Optional[DateLike] = None
    ) -> OccupancyMetrics:
        """Counts, rates, average tenure and upcoming vacancies.

        Average tenure is in whole calendar months since move-in, floored at 0,
        averaged over all occupied units. An upcoming vacancy is an occupied
        unit whose lease ends after today and within
        upcoming_vacancy_window_days; a lease ending today has already lapsed.
        """
        now = to_date(now) if now is not None else date.today()

        occupied = [unit for unit in units if unit.status == UnitStatus.OCCUPIED]
        vacant_count = sum(1 for unit in units if unit.status == UnitStatus.VACANT)
        maintenance_count = sum(1 for unit in units if unit.status == UnitStatus.MAINTENANCE)

        total_tenure = sum(
            max(0, months_between(unit.move_in_date, now))
            for unit in occupied
            if unit.move_in_date
        )
        average_tenure = total_tenure / len(occupied) if occupied else 0.0

        window_end = now + timedelta(days=self.settings.upcoming_vacancy_window_days)
        upcoming = sum(
            1
            for unit in occupied
            if unit.lease_end_date and now < to_date(unit.lease_end_date) <= window_end
        )

        return OccupancyMetrics(
            occupied_units=len(occupied),
            vacant_units=vacant_count,
            maintenance_units=maintenance_count,
            occupancy_rate=self.calculate_occupancy_rate(len(occupied)),
            vacancy_rate=self.calculate_vacancy_rate(vacant_count),
            average_tenure=average_tenure,
            upcoming_vacancies=upcoming,
        )

    def calculate_floor_occupancy(self, units: Iterable[OccupancyData]) -> List[FloorOccupancy]:
        """Occupied/total/rate for each roster floor, lowest floor first."""
        occupied_by_floor: Dict[int, int] = {}
        for unit in units:
            if unit.status != UnitStatus.OCCUPIED:
                continue
            apartment = self.roster.get(unit.apartment)
            if apartment is None:
                logger.warning("Apartment %s is not in the roster, skipping", unit.apartment)
                continue
            occupied_by_floor[apartment.floor] = occupied_by_floor.get(apartment.floor, 0) + 1

        result = []
        for floor in self.roster.floors:
            floor_units = len(self.roster.on_floor(floor))
            occupied = occupied_by_floor.get(floor, 0)
            result.append(
                FloorOccupancy(
                    floor=floor,
                    total_units=floor_units,
                    occupied_units=occupied,
                    occupancy_rate=occupied / floor_units * 100 if floor_units else 0.0,
                )
            )
        return result

    def calculate_unit_type_occupancy(self, apartments: Iterable[str]) -> Dict[UnitType, int]:
        """Count occupied apartment numbers by bedroom type."""
        counts = {unit_type: 0 for unit_type in UnitType}
        for number in apartments:
            apartment = self.roster.get(number)
            if apartment is not None:
                counts[apartment.unit_type] += 1
        return counts

    def calculate_average_tenancy_duration(
        self, move_in_dates: Sequence[DateLike], now: Optional[DateLike] = None
    ) -> float:
        """Mean months since move-in (0 for no tenants)."""
        if not move_in_dates:
            return 0.0
        now = to_date(now) if now is not None else date.today()
        total = sum(max(0, months_between(moved_in, now)) for moved_in in move_in_dates)
        return total / len(move_in_dates)

    def calculate_revenue_per_unit(self, total_revenue, occupied_units: int) -> Decimal:
        if occupied_units <= 0:
            return Decimal(0)
        return to_decimal(total_revenue, "Total revenue") / occupied_units

    def predict_occupancy_trend(
        self, history: Sequence[OccupancyHistoryPoint], months_to_predict: int = 3
    ) -> List[float]:
        """Extrapolate occupancy with an ordinary least squares line.

        x is the history index (0..n-1), y the occupancy rate. With fewer than
        three points the last known rate (or 0) is repeated. Predictions are
        clamped to [0, 100].
        """
        months_to_predict = max(months_to_predict, 0)

        if len(history) < MIN_TREND_POINTS:
            last = history[-1].occupancy_rate if history else 0
            return [last] * months_to_predict

        n = len(history)
        xs = range(n)
        ys = [point.occupancy_rate for point in history]

        sum_x = sum(xs)
        sum_y = sum(ys)
        sum_xy = sum(x * y for x, y in zip(xs, ys))
        sum_x2 = sum(x * x for x in xs)

        slope = (n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x * sum_x)
        intercept = (sum_y - slope * sum_x) / n

        predictions = [slope * (n + i) + intercept for i in range(months_to_predict)]
        return [max(0.0, min(100.0, prediction)) for prediction in predictions]
