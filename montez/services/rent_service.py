"""Service for rent expectations and monthly collection summaries."""

import logging
from decimal import Decimal
from typing import List, Mapping, Optional, Sequence

from montez.config.roster import ApartmentRoster
from montez.config.settings import BillingSettings, get_billing_settings
from montez.errors import ValidationError
from montez.models.rent import MonthlyRentSummary, RentCalculation, RentPayment, RentStatus
from montez.services.money import require_non_negative, to_decimal

logger = logging.getLogger(__name__)


class RentService:
    """Expected rent from the roster and collection against it."""

    def __init__(
        self,
        roster: Optional[ApartmentRoster] = None,
        settings: Optional[BillingSettings] = None,
    ):
        self.settings = settings or get_billing_settings()
        self.roster = roster if roster is not None else ApartmentRoster.load(settings=self.settings)

    def calculate_expected_monthly_rent(self) -> Decimal:
        """Sum of rents across every roster apartment."""
        return sum((apartment.rent for apartment in self.roster), Decimal(0))

    def calculate_rent_for_apartments(
        self,
        apartment_numbers: Sequence[str],
        amounts_paid: Optional[Mapping[str, Decimal]] = None,
    ) -> List[RentCalculation]:
        """Compare expected rent with what each apartment has paid.

        Status: PAID when paid >= expected, PARTIAL when something was paid,
        PENDING when nothing was.

        Args:
            apartment_numbers: Apartments to report on
            amounts_paid: Amount paid per apartment number (missing = 0)

        Raises:
            ValidationError: If an apartment is not in the roster
        """
        amounts_paid = amounts_paid or {}
        result = []

        for number in apartment_numbers:
            apartment = self.roster.get(number)
            if apartment is None:
                raise ValidationError(f"Apartment {number} not found", code="unknown_apartment")

            paid = require_non_negative(amounts_paid.get(number, 0), f"Amount paid for {number}")
            if paid >= apartment.rent:
                status = RentStatus.PAID
            elif paid > 0:
                status = RentStatus.PARTIAL
            else:
                status = RentStatus.PENDING

            result.append(
                RentCalculation(
                    apartment=number,
                    unit_type=apartment.unit_type,
                    expected_rent=apartment.rent,
                    actual_rent=paid,
                    difference=apartment.rent - paid,
                    status=status,
                )
            )

        return result

    def calculate_monthly_rent_summary(
        self, payments: Sequence[RentPayment]
    ) -> MonthlyRentSummary:
        """Collected, pending and overdue totals for the month."""
        totals = {status: Decimal(0) for status in RentStatus}
        for payment in payments:
            totals[RentStatus(payment.status)] += to_decimal(payment.amount, "Payment amount")

        expected = self.calculate_expected_monthly_rent()
        collected = totals[RentStatus.PAID]
        logger.debug("Collected %s of %s expected rent", collected, expected)

        return MonthlyRentSummary(
            total_expected=expected,
            total_collected=collected,
            collection_rate=float(collected / expected * 100) if expected > 0 else 0.0,
            pending_amount=totals[RentStatus.PENDING],
            overdue_amount=totals[RentStatus.OVERDUE],
        )

    def calculate_prorated_rent(
        self, daily_rate, days_occupied: int, grace_period_days: Optional[int] = None
    ) -> Decimal:
        """Rent for a partial month; the first grace_period_days are free."""
        if grace_period_days is None:
            grace_period_days = self.settings.grace_period_days
        daily_rate = require_non_negative(daily_rate, "Daily rate")
        return daily_rate * max(0, days_occupied - grace_period_days)

    def calculate_collection_rate(self, amount_collected, amount_due) -> float:
        """Collected as a percentage of due (100 when nothing is due)."""
        due = to_decimal(amount_due, "Amount due")
        if due == 0:
            return 100.0
        return float(to_decimal(amount_collected, "Amount collected") / due * 100)

    def calculate_total_revenue(self, rent_payments, water_payments, other_payments=0) -> Decimal:
        return (
            to_decimal(rent_payments, "Rent payments")
            + to_decimal(water_payments, "Water payments")
            + to_decimal(other_payments, "Other payments")
        )
