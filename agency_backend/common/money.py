# common/money.py

"""
MONEY HELPERS

Amounts are Decimal end to end. Every record carries ONE currency code and
amounts of different currencies are never summed together.

Rounding policy:
- Computation keeps full precision.
- money() rounds to 2 places (ROUND_HALF_UP) and is applied only when a value
  is persisted, posted to the ledger, or rendered.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Percentages and remainders are compared with this tolerance (percentage
# points for percentages, major currency units for amounts).
TOLERANCE = Decimal("0.01")


def to_decimal(value) -> Decimal:
    """Full-precision conversion (no rounding). Blank values become zero; NaN and Infinity are refused."""
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        d = value
    else:
        try:
            d = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError) as exc:
            raise ValueError(f"Invalid numeric value: {value!r}") from exc
    if not d.is_finite():
        raise ValueError(f"Invalid numeric value: {value!r}")
    return d


def money(value) -> Decimal:
    return to_decimal(value).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def within_tolerance(a, b, tolerance: Decimal = TOLERANCE) -> bool:
    return abs(to_decimal(a) - to_decimal(b)) <= tolerance


def normalize_currency(code) -> str:
    return (code or "").strip().upper()
