"""Decimal helpers for monetary arithmetic."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from montez.errors import ValidationError

CENT = Decimal("0.01")


def to_decimal(value, field: str = "value") -> Decimal:
    """Convert int/float/str/Decimal to Decimal without binary float noise.

    Floats go through str() so 0.1 becomes Decimal('0.1'), not
    Decimal('0.1000000000000000055511151231257827...').

    Raises:
        ValidationError: If value is not a finite number
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise ValidationError(f"{field} must be a number, got {value!r}")
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError) as e:
            raise ValidationError(f"{field} must be a number, got {value!r}") from e
    if not result.is_finite():
        raise ValidationError(f"{field} must be finite, got {value!r}")
    return result


def quantize_money(amount: Decimal) -> Decimal:
    """Round to cents (ROUND_HALF_UP)."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def require_non_negative(value, field: str) -> Decimal:
    """Convert to Decimal and reject negatives."""
    result = to_decimal(value, field)
    if result < 0:
        raise ValidationError(f"{field} cannot be negative", code="negative_value")
    return result
