"""Decimal money utilities.

All amounts are Decimal in a single currency unit; never float.
Quantities are plain non-negative ints.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from config.settings import settings

_CENT = Decimal("0.01")


def to_amount(value: Decimal | int | float | str) -> Decimal:
    """Coerce a wire/user value to Decimal. Floats go through str() to avoid binary noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise ValueError(f"Not a decimal amount: {value!r}") from exc


def line_total(unit_price: Decimal, qty: int) -> Decimal:
    return unit_price * qty


def amount_to_display(amount: Decimal, currency: str | None = None) -> str:
    """Format for display: Decimal('1250.5') -> 'PKR 1,250.50', Decimal('-200') -> '-PKR 200.00'."""
    label = currency if currency is not None else settings.CURRENCY_LABEL
    rounded = amount.quantize(_CENT, rounding=ROUND_HALF_UP)
    if rounded < 0:
        return f"-{label} {-rounded:,.2f}"
    return f"{label} {rounded:,.2f}"
