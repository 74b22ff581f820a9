"""Balance calculation service for tenant arrears, late fees and payments.

Balance formula: (rent due + water due + other due) - (rent paid + water paid + other paid)
- Positive balance: tenant owes money
- Negative balance: tenant has credit

Payments are applied by a fixed waterfall: late fees, then rent, then water,
then other charges. Anything left over is reported as unallocated credit.
"""

import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from montez.config.settings import BillingSettings, get_billing_settings
from montez.models.balance import (
    BalanceSummary,
    OutstandingBalances,
    PaymentAllocation,
    PaymentStatus,
    TenantBalance,
)
from montez.services.date_utils import (
    DateLike,
    days_between,
    now_like,
    parse_date,
    to_date,
)
from montez.services.money import quantize_money, require_non_negative, to_decimal

logger = logging.getLogger(__name__)


class BalanceService:
    """Calculate tenant balances, arrears status and payment allocation."""

    def __init__(self, settings: Optional[BillingSettings] = None):
        """Initialize with billing settings.

        Args:
            settings: Policy constants (default: environment-loaded settings)
        """
        self.settings = settings or get_billing_settings()

    def calculate_tenant_balance(
        self,
        rent_due,
        rent_paid,
        water_due,
        water_paid,
        other_due=0,
        other_paid=0,
    ) -> Decimal:
        """Net amount owed across all categories.

        Returns:
            Balance as Decimal (positive = owed, negative = credit)
        """
        dues = to_decimal(rent_due, "Rent due") + to_decimal(water_due, "Water due")
        dues += to_decimal(other_due, "Other due")
        paid = to_decimal(rent_paid, "Rent paid") + to_decimal(water_paid, "Water paid")
        paid += to_decimal(other_paid, "Other paid")
        return dues - paid

    def calculate_payment_status(
        self,
        balance,
        due_date: DateLike,
        grace_period_days: Optional[int] = None,
        today: Optional[DateLike] = None,
    ) -> PaymentStatus:
        """Classify a balance by how long it has been overdue.

        Rules (both boundaries inclusive):
            balance <= 0                          -> CURRENT
            days overdue <= grace period          -> CURRENT
            days overdue <= delinquency threshold -> OVERDUE
            otherwise                             -> DELINQUENT

        Args:
            balance: Outstanding balance
            due_date: Date the balance fell due
            grace_period_days: Days of grace (default: grace_period_days setting)
            today: Reference date or instant (default: now for datetime due
                dates, date.today() for plain dates)

        Returns:
            PaymentStatus
        """
        if to_decimal(balance, "Balance") <= 0:
            return PaymentStatus.CURRENT

        if grace_period_days is None:
            grace_period_days = self.settings.grace_period_days
        due_date = parse_date(due_date, "Due date")
        if today is None:
            today = now_like(due_date)

        days_overdue = days_between(due_date, today)

        if days_overdue <= grace_period_days:
            return PaymentStatus.CURRENT
        elif days_overdue <= self.settings.delinquency_threshold_days:
            return PaymentStatus.OVERDUE
        else:
            return PaymentStatus.DELINQUENT

    def calculate_late_fees(
        self,
        principal,
        days_overdue: int,
        daily_rate=None,
        max_rate=None,
    ) -> Decimal:
        """Linear late fee capped at a fraction of the principal.

        Formula: min(principal × daily_rate × days_overdue, principal × max_rate)

        Raises:
            ValidationError: If principal or a rate is negative
        """
        principal = require_non_negative(principal, "Principal")
        daily_rate = (
            self.settings.daily_late_fee_rate
            if daily_rate is None
            else require_non_negative(daily_rate, "Daily late fee rate")
        )
        max_rate = (
            self.settings.max_late_fee_rate
            if max_rate is None
            else require_non_negative(max_rate, "Maximum late fee rate")
        )

        if days_overdue <= 0:
            return Decimal("0.00")

        accrued = principal * daily_rate * to_decimal(days_overdue, "Days overdue")
        cap = principal * max_rate
        return quantize_money(min(accrued, cap))

    def allocate_payment(self, amount, balances: OutstandingBalances) -> PaymentAllocation:
        """Apply a payment to outstanding buckets in waterfall order.

        Order: late fees, rent, water, other. Each bucket takes
        min(remaining, bucket); buckets already in credit take nothing.
        Any excess is returned as unallocated credit.

        Raises:
            ValidationError: If amount is negative
        """
        remaining = require_non_negative(amount, "Payment amount")

        parts = []
        for bucket in (
            balances.late_fees,
            balances.rent_balance,
            balances.water_balance,
            balances.other_balance,
        ):
            applied = min(remaining, max(to_decimal(bucket, "Balance"), Decimal(0)))
            parts.append(applied)
            remaining -= applied

        late_fees, rent, water, other = parts
        if remaining > 0:
            logger.debug("Payment exceeds outstanding balances by %s", remaining)

        return PaymentAllocation(
            rent=rent,
            water=water,
            other=other,
            late_fees=late_fees,
            unallocated=remaining,
        )

    def calculate_projected_balance(
        self,
        current_balance,
        payment_amount,
        months: int = 12,
        monthly_increase: float = 0,
    ) -> List[Decimal]:
        """Month-by-month balance under a growing regular payment.

        Month i (0-based) pays payment_amount × (1 + monthly_increase × i);
        the balance never drops below zero.

        Args:
            current_balance: Balance before the first payment
            payment_amount: First month's payment
            months: Number of months to project
            monthly_increase: Fractional increase per month (0.05 = 5%)

        Returns:
            List of balances, one per month
        """
        balance = to_decimal(current_balance, "Current balance")
        payment = to_decimal(payment_amount, "Payment amount")
        increase = to_decimal(monthly_increase, "Monthly increase")

        projections = []
        for i in range(max(months, 0)):
            balance = quantize_money(max(Decimal(0), balance - payment * (1 + increase * i)))
            projections.append(balance)
        return projections

    def build_tenant_balance(
        self,
        tenant_id: str,
        apartment: str,
        rent_balance,
        water_balance,
        other_balance,
        next_payment_due: DateLike,
        last_payment_date: Optional[DateLike] = None,
        today: Optional[DateLike] = None,
    ) -> TenantBalance:
        """Assemble a TenantBalance with its total and status."""
        rent = to_decimal(rent_balance, "Rent balance")
        water = to_decimal(water_balance, "Water balance")
        other = to_decimal(other_balance, "Other balance")
        total = rent + water + other

        return TenantBalance(
            tenant_id=tenant_id,
            apartment=apartment,
            rent_balance=rent,
            water_balance=water,
            other_balance=other,
            total_balance=total,
            next_payment_due=to_date(next_payment_due, "Next payment due"),
            status=self.calculate_payment_status(total, next_payment_due, today=today),
            last_payment_date=(
                to_date(last_payment_date, "Last payment date") if last_payment_date else None
            ),
        )

    def calculate_balance_summary(self, balances: Sequence[TenantBalance]) -> BalanceSummary:
        """Aggregate balances across tenants.

        A tenant is in arrears when total_balance > 0 and status is not CURRENT.
        """
        total_outstanding = sum((b.total_balance for b in balances), Decimal(0))
        total_rent = sum((b.rent_balance for b in balances), Decimal(0))
        total_water = sum((b.water_balance for b in balances), Decimal(0))
        total_other = sum((b.other_balance for b in balances), Decimal(0))

        in_arrears = sum(
            1 for b in balances if b.total_balance > 0 and b.status != PaymentStatus.CURRENT
        )

        average = (
            quantize_money(total_outstanding / len(balances)) if balances else Decimal(0)
        )

        return BalanceSummary(
            total_outstanding=total_outstanding,
            total_rent_due=total_rent,
            total_water_due=total_water,
            total_other_due=total_other,
            average_balance_per_tenant=average,
            tenants_in_arrears=in_arrears,
        )
