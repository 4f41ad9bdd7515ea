"""
Money Utilities - Safe Decimal operations for monetary values.

Avoids float precision issues by using Decimal throughout.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Number = Union[str, int, float, Decimal, None]


def to_decimal(value: Number) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid/non-finite
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal("0")

    if isinstance(value, bool):
        return Decimal("0")

    try:
        # Convert via string to avoid float precision issues
        if isinstance(value, float):
            result = Decimal(str(value))
        else:
            result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")
    return result if result.is_finite() else Decimal("0")


def round_money(value: Number, places: int = 2) -> Decimal:
    """
    Round monetary value to the given number of decimal places.

    Args:
        value: Value to round
        places: Decimal places (0 for integer currencies)

    Returns:
        Rounded Decimal value
    """
    precision = Decimal(1).scaleb(-places) if places > 0 else Decimal("1")
    return to_decimal(value).quantize(precision, rounding=ROUND_HALF_UP)


def to_float(value: Number) -> float:
    """
    Convert Decimal to float for JSON serialization or external APIs.

    Use only at API boundaries, not for internal calculations.
    """
    return float(to_decimal(value))


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def money_str(value: Number) -> str:
    """Plain decimal string as WooCommerce expects for line item amounts."""
    return format(round_money(value), "f")


def discount_percent(regular: Number, sale: Number) -> int:
    """Whole percent saved going from regular to sale price (0 if unknown)."""
    regular_d = to_decimal(regular)
    sale_d = to_decimal(sale)
    if regular_d <= 0 or sale_d <= 0 or sale_d >= regular_d:
        return 0
    pct = (regular_d - sale_d) * 100 / regular_d
    return int(pct.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
