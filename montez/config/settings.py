"""Billing policy configuration from environment variables."""

import logging
from decimal import Decimal
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class BillingSettings(BaseSettings):
    """Rates, multipliers and thresholds used by the calculation services.

    Pydantic loads values from:
    1. OS environment variables prefixed with MONTEZ_ (e.g. MONTEZ_WATER_RATE_PER_UNIT)
    2. .env file in the working directory
    3. The defaults below
    """

    model_config = SettingsConfigDict(
        env_prefix="MONTEZ_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Water
    water_rate_per_unit: Decimal = Field(
        default=Decimal("150"), ge=0, description="Charge per metered water unit"
    )
    water_units_per_person: Decimal = Field(
        default=Decimal("4"), ge=0, description="Estimated monthly units per occupant"
    )
    two_bedroom_water_multiplier: Decimal = Field(
        default=Decimal("1.2"), ge=0, description="Estimate adjustment for two-bedroom units"
    )
    wet_season_water_multiplier: Decimal = Field(
        default=Decimal("0.8"), ge=0, description="Estimate adjustment for the wet season"
    )
    trend_threshold_pct: float = Field(
        default=10.0, ge=0, description="Change (%) beyond which consumption is trending"
    )

    # Rent
    one_bedroom_rent: Decimal = Field(default=Decimal("15000"), ge=0)
    two_bedroom_rent: Decimal = Field(default=Decimal("18000"), ge=0)

    # Arrears
    grace_period_days: int = Field(default=5, ge=0)
    delinquency_threshold_days: int = Field(
        default=30, ge=0, description="Days overdue after which a balance is delinquent"
    )
    daily_late_fee_rate: Decimal = Field(default=Decimal("0.005"), ge=0)
    max_late_fee_rate: Decimal = Field(default=Decimal("0.2"), ge=0)

    # Occupancy
    total_units: Optional[int] = Field(
        default=None, ge=0, description="Override for the building unit count (default: roster size)"
    )
    upcoming_vacancy_window_days: int = Field(default=30, ge=0)

    # Formatting
    locale: str = Field(default="en_KE")
    currency: str = Field(default="KES")


_settings_instance: Optional[BillingSettings] = None


def get_billing_settings() -> BillingSettings:
    """Get or create the shared settings instance.

    Services take settings explicitly; this is only the default they fall
    back to when constructed without one.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = BillingSettings()
        logger.debug("Loaded billing settings: %s", _settings_instance.model_dump())
    return _settings_instance
