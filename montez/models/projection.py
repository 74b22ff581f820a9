"""Financial projection records."""

from decimal import Decimal
from typing import NamedTuple, Optional


class MonthlyFinancials(NamedTuple):
    """Observed figures for a past month ("YYYY-MM")."""

    month: str
    revenue: Decimal
    expenses: Decimal
    occupancy_rate: float
    collection_rate: float


class FinancialProjection(NamedTuple):
    month: str
    projected_revenue: Decimal
    projected_expenses: Decimal
    projected_profit: Decimal
    occupancy_rate: float
    collection_rate: float


class CashFlowProjection(NamedTuple):
    month: str
    inflows: Decimal
    outflows: Decimal
    net_cash_flow: Decimal
    cumulative_balance: Decimal


class GrowthProjection(NamedTuple):
    year: int
    revenue: Decimal
    expenses: Decimal
    profit: Decimal
    occupancy_rate: float
    unit_count: int


class BreakEvenAnalysis(NamedTuple):
    monthly_fixed_costs: Decimal
    variable_cost_per_unit: Decimal
    price_per_unit: Decimal
    break_even_units: Decimal
    break_even_revenue: Decimal
    margin_of_safety: float  # percent of current units


class ROIResult(NamedTuple):
    total_return: Decimal
    annualized_roi: float  # percent
    payback_period: Optional[float]  # years; None when the investment never pays back
