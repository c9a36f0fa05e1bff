"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal, localcontext

CENT = Decimal("0.01")
MAX_AMOUNT = Decimal("1000000000000")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from the store or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def is_storable_amount(amount: Decimal) -> bool:
    """Return True when ``amount`` is a positive value that survives storage.

    Amounts are stored as floats, so they must stay finite and non-zero after
    conversion, and never exceed ``MAX_AMOUNT``.
    """
    if not amount.is_finite() or amount <= 0 or amount > MAX_AMOUNT:
        return False
    return float(amount) > 0


def round_currency(value: Decimal) -> Decimal:
    """Round a value to cents using round-half-up."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 4)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


__all__ = [
    "CENT",
    "MAX_AMOUNT",
    "coerce_decimal",
    "is_storable_amount",
    "round_currency",
]
