"""Currency and percentage formatting for dashboards and receipts.

Uses babel. Locale and currency come from BillingSettings
(MONTEZ_LOCALE, default en_KE; MONTEZ_CURRENCY, default KES).

Example:
    >>> format_amount(18000, include_symbol=False)
    '18,000'
    >>> format_percentage(95.5)
    '95.5%'
"""

import logging
from decimal import Decimal
from typing import Optional

from babel import Locale, UnknownLocaleError
from babel.numbers import (
    format_currency as babel_format_currency,
)
from babel.numbers import (
    format_decimal as babel_format_decimal,
)
from babel.numbers import (
    get_currency_symbol as babel_get_currency_symbol,
)
from babel.numbers import (
    parse_decimal as babel_parse_decimal,
)

from montez.config.settings import get_billing_settings

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en_KE"

# Rent and water are billed in whole shillings
WHOLE_UNIT_PATTERN = "#,##0"


def resolve_locale(locale: Optional[str] = None) -> str:
    """Validate a locale, falling back to the configured one, then en_KE."""
    locale_str = locale or get_billing_settings().locale
    try:
        Locale.parse(locale_str)
        return locale_str
    except (UnknownLocaleError, ValueError) as e:
        logger.warning("Invalid locale '%s': %s. Falling back to '%s'", locale_str, e, DEFAULT_LOCALE)
        return DEFAULT_LOCALE


def get_currency_symbol(currency: Optional[str] = None, locale: Optional[str] = None) -> str:
    currency = currency or get_billing_settings().currency
    return babel_get_currency_symbol(currency, locale=resolve_locale(locale))


def format_amount(
    amount: float | Decimal,
    include_symbol: bool = True,
    locale: Optional[str] = None,
    currency: Optional[str] = None,
    whole_units: bool = True,
) -> str:
    """Format a monetary amount for display.

    Args:
        amount: Amount to format
        include_symbol: Prefix the currency symbol
        locale: Override the configured locale
        currency: Override the configured currency code
        whole_units: Round to whole currency units (default) instead of cents
    """
    locale = resolve_locale(locale)
    currency = currency or get_billing_settings().currency

    if include_symbol:
        if whole_units:
            return babel_format_currency(
                amount,
                currency,
                format="¤" + WHOLE_UNIT_PATTERN,
                locale=locale,
                currency_digits=False,
            )
        return babel_format_currency(amount, currency, locale=locale)

    pattern = WHOLE_UNIT_PATTERN if whole_units else WHOLE_UNIT_PATTERN + ".00"
    return babel_format_decimal(amount, format=pattern, locale=locale)


def format_percentage(value: float, locale: Optional[str] = None) -> str:
    """Format a percentage value (95.5, not 0.955) to one decimal place."""
    return babel_format_decimal(value, format="#,##0.0", locale=resolve_locale(locale)) + "%"


def parse_amount(value: str, locale: Optional[str] = None) -> Decimal:
    """Parse a locale-formatted amount such as '18,000.50'.

    Raises:
        NumberFormatError: If value cannot be parsed
    """
    return babel_parse_decimal(value.strip(), locale=resolve_locale(locale))


__all__ = [
    "DEFAULT_LOCALE",
    "format_amount",
    "format_percentage",
    "get_currency_symbol",
    "parse_amount",
    "resolve_locale",
]
