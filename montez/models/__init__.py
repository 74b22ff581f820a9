"""Immutable value records passed into and returned by the services."""

from montez.models.apartment import Apartment, UnitType
from montez.models.balance import (
    BalanceSummary,
    OutstandingBalances,
    PaymentAllocation,
    PaymentStatus,
    TenantBalance,
)
from montez.models.occupancy import (
    FloorOccupancy,
    OccupancyData,
    OccupancyHistoryPoint,
    OccupancyMetrics,
    UnitStatus,
)
from montez.models.projection import (
    BreakEvenAnalysis,
    CashFlowProjection,
    FinancialProjection,
    GrowthProjection,
    MonthlyFinancials,
    ROIResult,
)
from montez.models.rent import MonthlyRentSummary, RentCalculation, RentPayment, RentStatus
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

__all__ = [
    "Apartment",
    "ApartmentWaterUsage",
    "BalanceSummary",
    "BreakEvenAnalysis",
    "CashFlowProjection",
    "ConsumptionTrend",
    "FinancialProjection",
    "FloorOccupancy",
    "GrowthProjection",
    "MonthlyConsumption",
    "MonthlyFinancials",
    "MonthlyRentSummary",
    "OccupancyData",
    "OccupancyHistoryPoint",
    "OccupancyMetrics",
    "OutstandingBalances",
    "PaymentAllocation",
    "PaymentStatus",
    "ROIResult",
    "RentCalculation",
    "RentPayment",
    "RentStatus",
    "Season",
    "TenantBalance",
    "UnitStatus",
    "UnitType",
    "WaterBill",
    "WaterBillSummary",
    "WaterConsumptionTrend",
    "WaterReading",
]
