"""Financial projections for the building.

Growth is compounded monthly for short-range projections and yearly for the
long-range one. All money figures are rounded to cents.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional, Sequence

from montez.config.roster import ApartmentRoster
from montez.config.settings import BillingSettings, get_billing_settings
from montez.errors import ValidationError
from montez.models.projection import (
    BreakEvenAnalysis,
    CashFlowProjection,
    FinancialProjection,
    GrowthProjection,
    MonthlyFinancials,
    ROIResult,
)
from montez.services.date_utils import DateLike, format_month, parse_month, shift_month, to_date
from montez.services.money import quantize_money, to_decimal
from montez.services.rent_service import RentService

logger = logging.getLogger(__name__)

# Baseline assumptions used when there is no history to project from
BASELINE_EXPENSE_RATIO = Decimal("0.3")
BASELINE_OCCUPANCY_RATE = 95.0
BASELINE_COLLECTION_RATE = 98.0

# Monthly improvement applied to the last observed rates
OCCUPANCY_GAIN_PER_MONTH = 0.5
COLLECTION_GAIN_PER_MONTH = 0.3

UNITS_ADDED_PER_YEAR = 2


class ProjectionService:
    """Revenue, cash flow and investment projections."""

    def __init__(
        self,
        roster: Optional[ApartmentRoster] = None,
        settings: Optional[BillingSettings] = None,
        rent_service: Optional[RentService] = None,
    ):
        self.settings = settings or get_billing_settings()
        self.roster = roster if roster is not None else ApartmentRoster.load(settings=self.settings)
        self.rent_service = rent_service or RentService(self.roster, self.settings)

    def project_monthly_financials(
        self,
        history: Sequence[MonthlyFinancials],
        months: int = 12,
        growth_rate=0.02,
        today: Optional[DateLike] = None,
    ) -> List[FinancialProjection]:
        """Project revenue, expenses and rates month by month.

        With no history the projection starts next month from the roster's
        expected rent, a 30% expense ratio, 95% occupancy and 98% collection.
        Otherwise the last observed month is compounded at growth_rate, with
        occupancy and collection creeping up (capped at 100).
        """
        growth = 1 + to_decimal(growth_rate, "Growth rate")
        projections = []

        if not history:
            today = to_date(today) if today is not None else date.today()
            base_revenue = self.rent_service.calculate_expected_monthly_rent()
            logger.debug("No history, projecting from expected rent %s", base_revenue)

            for i in range(months):
                year, month = shift_month(today.year, today.month, i + 1)
                revenue = quantize_money(base_revenue * growth**i)
                expenses = quantize_money(revenue * BASELINE_EXPENSE_RATIO)
                projections.append(
                    FinancialProjection(
                        month=format_month(year, month),
                        projected_revenue=revenue,
                        projected_expenses=expenses,
                        projected_profit=revenue - expenses,
                        occupancy_rate=BASELINE_OCCUPANCY_RATE,
                        collection_rate=BASELINE_COLLECTION_RATE,
                    )
                )
            return projections

        last = history[-1]
        last_year, last_month = parse_month(last.month)
        last_revenue = to_decimal(last.revenue, "Revenue")
        last_expenses = to_decimal(last.expenses, "Expenses")

        for i in range(1, months + 1):
            year, month = shift_month(last_year, last_month, i)
            multiplier = growth**i
            revenue = quantize_money(last_revenue * multiplier)
            expenses = quantize_money(last_expenses * multiplier)
            projections.append(
                FinancialProjection(
                    month=format_month(year, month),
                    projected_revenue=revenue,
                    projected_expenses=expenses,
                    projected_profit=revenue - expenses,
                    occupancy_rate=min(100.0, last.occupancy_rate + i * OCCUPANCY_GAIN_PER_MONTH),
                    collection_rate=min(100.0, last.collection_rate + i * COLLECTION_GAIN_PER_MONTH),
                )
            )
        return projections

    def project_cash_flow(
        self,
        starting_balance,
        regular_inflows,
        regular_outflows,
        months: int = 12,
        inflow_growth=0.02,
        outflow_growth=0.015,
        today: Optional[DateLike] = None,
    ) -> List[CashFlowProjection]:
        """Monthly inflows/outflows with independent growth and a running balance."""
        today = to_date(today) if today is not None else date.today()
        cumulative = to_decimal(starting_balance, "Starting balance")
        inflows_base = to_decimal(regular_inflows, "Inflows")
        outflows_base = to_decimal(regular_outflows, "Outflows")
        inflow_factor = 1 + to_decimal(inflow_growth, "Inflow growth")
        outflow_factor = 1 + to_decimal(outflow_growth, "Outflow growth")

        projections = []
        for i in range(months):
            year, month = shift_month(today.year, today.month, i)
            inflows = quantize_money(inflows_base * inflow_factor**i)
            outflows = quantize_money(outflows_base * outflow_factor**i)
            net = inflows - outflows
            cumulative += net
            projections.append(
                CashFlowProjection(
                    month=format_month(year, month),
                    inflows=inflows,
                    outflows=outflows,
                    net_cash_flow=net,
                    cumulative_balance=cumulative,
                )
            )
        return projections

    def project_long_term_growth(
        self,
        current_revenue,
        current_expenses,
        current_occupancy: float,
        years: int = 5,
        revenue_growth_rate=0.15,
        expense_growth_rate=0.12,
        occupancy_growth_rate: float = 0.02,
        today: Optional[DateLike] = None,
    ) -> List[GrowthProjection]:
        """Yearly compounding projection; the building gains two units a year."""
        this_year = (to_date(today) if today is not None else date.today()).year
        revenue_base = to_decimal(current_revenue, "Revenue")
        expense_base = to_decimal(current_expenses, "Expenses")
        revenue_factor = 1 + to_decimal(revenue_growth_rate, "Revenue growth")
        expense_factor = 1 + to_decimal(expense_growth_rate, "Expense growth")

        projections = []
        for i in range(years):
            revenue = quantize_money(revenue_base * revenue_factor ** (i + 1))
            expenses = quantize_money(expense_base * expense_factor ** (i + 1))
            occupancy = current_occupancy * (1 + occupancy_growth_rate) ** (i + 1)
            projections.append(
                GrowthProjection(
                    year=this_year + i,
                    revenue=revenue,
                    expenses=expenses,
                    profit=revenue - expenses,
                    occupancy_rate=min(100.0, occupancy),
                    unit_count=len(self.roster) + i * UNITS_ADDED_PER_YEAR,
                )
            )
        return projections

    def calculate_break_even(
        self, fixed_costs, variable_cost_per_unit, price_per_unit, current_units: int
    ) -> BreakEvenAnalysis:
        """Units (and revenue) needed to cover fixed costs.

        Raises:
            ValidationError: If price does not exceed the variable cost
        """
        fixed = to_decimal(fixed_costs, "Fixed costs")
        variable = to_decimal(variable_cost_per_unit, "Variable cost per unit")
        price = to_decimal(price_per_unit, "Price per unit")

        if price <= variable:
            raise ValidationError(
                "Price must be greater than variable cost per unit", code="no_contribution_margin"
            )

        break_even_units = fixed / (price - variable)
        margin_of_safety = (
            float((current_units - break_even_units) / current_units * 100)
            if current_units > 0
            else 0.0
        )

        return BreakEvenAnalysis(
            monthly_fixed_costs=fixed,
            variable_cost_per_unit=variable,
            price_per_unit=price,
            break_even_units=break_even_units,
            break_even_revenue=quantize_money(break_even_units * price),
            margin_of_safety=margin_of_safety,
        )

    def calculate_roi(self, initial_investment, annual_net_profit, years: int = 5) -> ROIResult:
        """Simple (undiscounted) return on investment.

        Raises:
            ValidationError: If investment or years is not positive
        """
        investment = to_decimal(initial_investment, "Initial investment")
        profit = to_decimal(annual_net_profit, "Annual net profit")
        if investment <= 0:
            raise ValidationError("Initial investment must be positive")
        if years <= 0:
            raise ValidationError("Years must be positive")

        total_return = profit * years
        return ROIResult(
            total_return=total_return,
            annualized_roi=float(total_return / investment * 100 / years),
            payback_period=float(investment / profit) if profit > 0 else None,
        )

    def calculate_npv(self, initial_investment, cash_flows: Sequence, discount_rate=0.1) -> Decimal:
        """Net present value, cash flows discounted from year 1.

        Raises:
            ValidationError: If discount_rate is -1 or lower
        """
        factor = 1 + to_decimal(discount_rate, "Discount rate")
        if factor <= 0:
            raise ValidationError("Discount rate must be greater than -1")
        npv = -to_decimal(initial_investment, "Initial investment")
        for year, cash_flow in enumerate(cash_flows, start=1):
            npv += to_decimal(cash_flow, "Cash flow") / factor**year
        return quantize_money(npv)

    def calculate_net_operating_income(
        self, gross_income, operating_expenses, vacancy_rate: float
    ) -> Decimal:
        """Gross income less vacancy loss, less operating expenses."""
        effective = to_decimal(gross_income, "Gross income") * (
            1 - to_decimal(vacancy_rate, "Vacancy rate") / 100
        )
        return quantize_money(effective - to_decimal(operating_expenses, "Operating expenses"))
