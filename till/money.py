# ==========================
# File: till/money.py
# ==========================
# -*- coding: utf-8 -*-
"""
Money Handling Utilities.

Purpose:
- Enforces that all monetary values entering the engine are `Decimal` with
  two fractional digits, never float.
- Converts between `Decimal` amounts and integer minor units (cents). Every
  allocation and comparison inside the engine runs on those integers.
- Formats amounts for display only at the boundary.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN

import till.config as cfg
from .errors import InvalidAmount

_MINOR = Decimal(cfg.MINOR_UNIT)
_MINOR_DIGITS = -_MINOR.as_tuple().exponent


def _as_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidAmount(f"Not a monetary amount: {value!r}")


def as_money(value) -> Decimal:
    """
    Normalize any input to Decimal with 2 fractional digits.

    Why:
    - Guarantees consistent 2dp (e.g., "10.00") across the system.
    - Avoids subtle float inaccuracies (e.g., 0.1 + 0.2 != 0.3).
    """
    return _as_decimal(value).quantize(_MINOR, rounding=ROUND_HALF_EVEN)


def to_minor_units(value) -> int:
    """
    Convert an amount to an exact integer count of minor units.

    Unlike `as_money`, this never rounds: an amount finer than one cent is
    rejected with InvalidAmount, since it cannot be paid out in any
    denomination.
    """
    amt = _as_decimal(value)
    if not amt.is_finite():
        raise InvalidAmount(f"Not a monetary amount: {value!r}")
    try:
        quantized = amt.quantize(_MINOR)
    except InvalidOperation:
        raise InvalidAmount(f"Amount {amt} is too large")
    # Decimal comparison is exact; multiplying first would round to context precision.
    if quantized != amt:
        raise InvalidAmount(f"Amount {amt} is finer than the minor unit {cfg.MINOR_UNIT}")
    return int(quantized.scaleb(_MINOR_DIGITS))


def from_minor_units(units: int) -> Decimal:
    return (Decimal(units) * _MINOR).quantize(_MINOR)


def validate_amount_non_negative(amount) -> Decimal:
    """
    Validate a due or tendered amount and return it normalized.

    Rules:
    - Must be exactly representable in minor units.
    - Must be >= 0.00.
    """
    units = to_minor_units(amount)
    if units < 0:
        raise InvalidAmount(f"Amount must be >= 0.00, got {amount}")
    return from_minor_units(units)


def fmt_money(x) -> str:
    symbol = cfg.CURRENCY_SYMBOLS.get(cfg.CURRENCY, '$')
    return f"{symbol}{as_money(x):,.2f}"
