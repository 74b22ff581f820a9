"""Configuration: billing policy settings and the apartment roster."""

from montez.config.roster import DEFAULT_ROSTER_PATH, ApartmentRoster
from montez.config.settings import BillingSettings, get_billing_settings

__all__ = [
    "ApartmentRoster",
    "BillingSettings",
    "DEFAULT_ROSTER_PATH",
    "get_billing_settings",
]
