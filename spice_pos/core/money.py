"""Helpers for converting and displaying rupee amounts."""
from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

_DECIMAL_2_PLACES = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """Convert *value* to an unrounded :class:`~decimal.Decimal`.

    Floats go through ``str`` so ``0.1`` stays ``Decimal("0.1")``.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("boolean is not a monetary value")
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"not a monetary value: {value!r}") from exc


def round_amount(value: Any) -> Decimal:
    """Quantize to two places; presentation only."""
    return to_decimal(value).quantize(_DECIMAL_2_PLACES, rounding=ROUND_HALF_UP)


def fmt_amount(value: Any, currency: str = "₹") -> str:
    amount = round_amount(value)
    if currency:
        return f"{currency}{amount:,.2f}"
    return f"{amount:,.2f}"


def to_json_number(value: Decimal) -> int | float | str:
    """Return the plainest JSON value that preserves *value*.

    Integers and prices a float holds exactly round-trip as numbers; anything
    finer is written as a decimal string.
    """
    if value == value.to_integral_value():
        return int(value)
    as_float = float(value)
    if Decimal(repr(as_float)) == value:
        return as_float
    return str(value)
