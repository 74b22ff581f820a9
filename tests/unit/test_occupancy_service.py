"""Unit tests for occupancy service."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from montez.config.roster import ApartmentRoster
from montez.config.settings import BillingSettings
from montez.models.apartment import UnitType
from montez.models.occupancy import OccupancyData, OccupancyHistoryPoint, UnitStatus
from montez.services.occupancy_service import OccupancyService

NOW = date(2025, 6, 15)


def history(*rates):
    return [OccupancyHistoryPoint(str(i + 1), rate) for i, rate in enumerate(rates)]


class TestOccupancyRates:
    """Rates against the total unit count."""

    def test_total_units_from_roster(self, occupancy_service):
        """Test total units taken from roster size."""
        assert occupancy_service.total_units == 22

    def test_occupancy_rate(self, occupancy_service):
        """Test occupancy rate as a percentage of total units."""
        assert occupancy_service.calculate_occupancy_rate(11) == pytest.approx(50.0)

    def test_vacancy_rate(self, occupancy_service):
        """Test vacancy rate as a percentage of total units."""
        assert occupancy_service.calculate_vacancy_rate(22) == pytest.approx(100.0)

    def test_total_units_override(self, roster):
        """Test total_units setting overrides roster size."""
        service = OccupancyService(roster, BillingSettings(_env_file=None, total_units=26))
        assert service.total_units == 26
        assert service.calculate_occupancy_rate(13) == pytest.approx(50.0)

    def test_zero_total_units_returns_zero(self, roster):
        """Test zero total units gives zero rates."""
        service = OccupancyService(roster, BillingSettings(_env_file=None, total_units=0))
        assert service.calculate_occupancy_rate(0) == 0
        assert service.calculate_vacancy_rate(5) == 0

    def test_empty_roster_returns_zero(self, settings):
        """Test empty roster gives zero rates."""
        service = OccupancyService(ApartmentRoster([]), settings)
        assert service.calculate_occupancy_rate(0) == 0


class TestOccupancyMetrics:
    """Counts, tenure and upcoming vacancies."""

    @pytest.fixture
    def units(self):
        return [
            OccupancyData(
                "1A1",
                UnitStatus.OCCUPIED,
                tenant_name="Wanjiru",
                move_in_date=date(2024, 6, 1),
                lease_end_date=date(2025, 7, 1),
            ),
            OccupancyData(
                "1A2",
                UnitStatus.OCCUPIED,
                move_in_date=date(2025, 6, 20),
                lease_end_date=date(2025, 8, 1),
            ),
            OccupancyData("1B1", UnitStatus.OCCUPIED),
            OccupancyData("2B1", UnitStatus.VACANT),
            OccupancyData("2B2", UnitStatus.MAINTENANCE),
        ]

    def test_counts(self, occupancy_service, units):
        """Test unit counts by status."""
        metrics = occupancy_service.calculate_occupancy_metrics(units, now=NOW)

        assert metrics.occupied_units == 3
        assert metrics.vacant_units == 1
        assert metrics.maintenance_units == 1

    def test_rates(self, occupancy_service, units):
        """Test occupancy and vacancy rates in metrics."""
        metrics = occupancy_service.calculate_occupancy_metrics(units, now=NOW)

        assert metrics.occupancy_rate == pytest.approx(3 / 22 * 100)
        assert metrics.vacancy_rate == pytest.approx(1 / 22 * 100)

    def test_average_tenure(self, occupancy_service, units):
        """Test average tenure in whole months."""
        metrics = occupancy_service.calculate_occupancy_metrics(units, now=NOW)

        # 12 months + 0 months, averaged over all 3 occupied units
        assert metrics.average_tenure == pytest.approx(4.0)

    def test_future_move_in_floors_at_zero(self, occupancy_service):
        """Test future move-in counts as zero months."""
        units = [OccupancyData("1A1", UnitStatus.OCCUPIED, move_in_date=date(2025, 9, 1))]

        metrics = occupancy_service.calculate_occupancy_metrics(units, now=NOW)

        assert metrics.average_tenure == 0

    def test_upcoming_vacancies_within_window(self, occupancy_service, units):
        """Test leases ending within the window count as upcoming."""
        metrics = occupancy_service.calculate_occupancy_metrics(units, now=NOW)

        # 1A1 ends 2025-07-01 (16 days); 1A2 ends 2025-08-01 (47 days)
        assert metrics.upcoming_vacancies == 1

    def test_expired_lease_not_upcoming(self, occupancy_service):
        """Test expired lease is not upcoming."""
        units = [OccupancyData("1A1", UnitStatus.OCCUPIED, lease_end_date=date(2025, 6, 1))]

        metrics = occupancy_service.calculate_occupancy_metrics(units, now=NOW)

        assert metrics.upcoming_vacancies == 0

    def test_lease_ending_today_not_upcoming(self, occupancy_service):
        """Test lease ending today has lapsed and is not upcoming."""
        units = [OccupancyData("1A1", UnitStatus.OCCUPIED, lease_end_date=NOW)]

        metrics = occupancy_service.calculate_occupancy_metrics(units, now=NOW)

        assert metrics.upcoming_vacancies == 0

    def test_lease_ending_at_window_edge_is_upcoming(self, occupancy_service):
        """Test lease ending on the last day of the window is upcoming."""
        units = [
            OccupancyData("1A1", UnitStatus.OCCUPIED, lease_end_date=NOW + timedelta(days=30))
        ]

        metrics = occupancy_service.calculate_occupancy_metrics(units, now=NOW)

        assert metrics.upcoming_vacancies == 1

    def test_vacant_lease_end_ignored(self, occupancy_service):
        """Test vacant units never count as upcoming."""
        units = [OccupancyData("1A1", UnitStatus.VACANT, lease_end_date=date(2025, 6, 20))]

        metrics = occupancy_service.calculate_occupancy_metrics(units, now=NOW)

        assert metrics.upcoming_vacancies == 0

    def test_no_units(self, occupancy_service):
        """Test metrics for no units."""
        metrics = occupancy_service.calculate_occupancy_metrics([], now=NOW)

        assert metrics.occupied_units == 0
        assert metrics.occupancy_rate == 0
        assert metrics.average_tenure == 0


class TestFloorOccupancy:
    """Per-floor breakdown of the roster."""

    def test_one_entry_per_floor(self, occupancy_service):
        """Test one entry per roster floor, ascending."""
        result = occupancy_service.calculate_floor_occupancy([])

        assert [floor.floor for floor in result] == [1, 2, 3, 4, 5, 6]
        assert [floor.total_units for floor in result] == [4, 4, 4, 4, 4, 2]
        assert all(floor.occupancy_rate == 0 for floor in result)

    def test_counts_occupied_units_per_floor(self, occupancy_service):
        """Test occupied units counted per floor."""
        units = [
            OccupancyData("1A1", UnitStatus.OCCUPIED),
            OccupancyData("1A2", UnitStatus.OCCUPIED),
            OccupancyData("1B1", UnitStatus.VACANT),
            OccupancyData("6A1", UnitStatus.OCCUPIED),
            OccupancyData("6A2", UnitStatus.OCCUPIED),
        ]

        result = {floor.floor: floor for floor in occupancy_service.calculate_floor_occupancy(units)}

        assert result[1].occupied_units == 2
        assert result[1].occupancy_rate == pytest.approx(50.0)
        assert result[6].occupied_units == 2
        assert result[6].occupancy_rate == pytest.approx(100.0)
        assert result[3].occupied_units == 0

    def test_unknown_apartment_ignored(self, occupancy_service):
        """Test apartments missing from the roster are skipped."""
        units = [OccupancyData("9Z9", UnitStatus.OCCUPIED)]

        result = occupancy_service.calculate_floor_occupancy(units)

        assert sum(floor.occupied_units for floor in result) == 0


class TestOccupancyTrend:
    """Least-squares occupancy prediction."""

    def test_single_point_repeats_last_value(self, occupancy_service):
        """Test single history point is repeated."""
        assert occupancy_service.predict_occupancy_trend(history(80), 3) == [80, 80, 80]

    def test_two_points_repeat_last_value(self, occupancy_service):
        """Test two history points repeat the last rate."""
        assert occupancy_service.predict_occupancy_trend(history(70, 85), 2) == [85, 85]

    def test_no_history_predicts_zero(self, occupancy_service):
        """Test empty history predicts zero."""
        assert occupancy_service.predict_occupancy_trend([], 3) == [0, 0, 0]

    def test_linear_extrapolation(self, occupancy_service):
        """Test least-squares extrapolation."""
        result = occupancy_service.predict_occupancy_trend(history(70, 75, 80), 3)
        assert result == pytest.approx([85.0, 90.0, 95.0])

    def test_clamped_at_hundred(self, occupancy_service):
        """Test predictions capped at 100."""
        assert occupancy_service.predict_occupancy_trend(history(80, 90, 100), 2) == [100.0, 100.0]

    def test_clamped_at_zero(self, occupancy_service):
        """Test predictions floored at 0."""
        assert occupancy_service.predict_occupancy_trend(history(20, 10, 0), 2) == [0.0, 0.0]

    def test_flat_history(self, occupancy_service):
        """Test flat history predicts the same rate."""
        result = occupancy_service.predict_occupancy_trend(history(90, 90, 90, 90))
        assert result == pytest.approx([90.0, 90.0, 90.0])

    def test_predictions_stay_in_range(self, occupancy_service):
        """Test predictions stay within 0 to 100."""
        result = occupancy_service.predict_occupancy_trend(history(5, 60, 30, 99, 12, 77), 12)
        assert all(0 <= value <= 100 for value in result)


class TestOccupancyHelpers:
    def test_unit_type_occupancy(self, occupancy_service):
        """Test occupied units counted by bedroom type."""
        result = occupancy_service.calculate_unit_type_occupancy(["1A1", "1B1", "1B2", "ZZZ"])

        assert result[UnitType.TWO_BEDROOM] == 1
        assert result[UnitType.ONE_BEDROOM] == 2

    def test_average_tenancy_duration(self, occupancy_service):
        """Test mean months since move-in."""
        result = occupancy_service.calculate_average_tenancy_duration(
            [date(2024, 6, 1), "2025-03-10"], now=NOW
        )
        assert result == pytest.approx(7.5)

    def test_average_tenancy_duration_empty(self, occupancy_service):
        """Test mean tenancy of no tenants is zero."""
        assert occupancy_service.calculate_average_tenancy_duration([]) == 0

    def test_revenue_per_unit(self, occupancy_service):
        """Test revenue divided by occupied units."""
        assert occupancy_service.calculate_revenue_per_unit(33000, 2) == Decimal("16500")
        assert occupancy_service.calculate_revenue_per_unit(33000, 0) == 0
