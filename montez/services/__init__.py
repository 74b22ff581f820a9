"""Calculation services.

Each service takes its BillingSettings (and roster, where it needs one)
explicitly; none of them touch I/O or shared mutable state.
"""

from montez.services.balance_service import BalanceService
from montez.services.occupancy_service import OccupancyService
from montez.services.projection_service import ProjectionService
from montez.services.rent_service import RentService
from montez.services.water_service import WaterBillingService

__all__ = [
    "BalanceService",
    "OccupancyService",
    "ProjectionService",
    "RentService",
    "WaterBillingService",
]
