"""Occupancy snapshots and aggregates."""

from datetime import date
from enum import Enum
from typing import NamedTuple, Optional


class UnitStatus(str, Enum):
    OCCUPIED = "OCCUPIED"
    VACANT = "VACANT"
    MAINTENANCE = "MAINTENANCE"


class OccupancyData(NamedTuple):
    """Current state of one unit."""

    apartment: str
    status: UnitStatus
    tenant_name: Optional[str] = None
    move_in_date: Optional[date] = None
    lease_end_date: Optional[date] = None


class OccupancyMetrics(NamedTuple):
    occupied_units: int
    vacant_units: int
    maintenance_units: int
    occupancy_rate: float
    vacancy_rate: float
    average_tenure: float  # months
    upcoming_vacancies: int


class FloorOccupancy(NamedTuple):
    floor: int
    total_units: int
    occupied_units: int
    occupancy_rate: float


class OccupancyHistoryPoint(NamedTuple):
    """Historical occupancy rate (%) for a month label."""

    month: str
    occupancy_rate: float
