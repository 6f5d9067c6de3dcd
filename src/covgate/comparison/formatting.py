"""Number formatting shared by issue messages and reports."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def fixed(value: float, digits: int = 2) -> str:
    """Format *value* with *digits* decimals, rounding half away from zero.

    Rounding works on the exact binary value of the float, so ``1.005``
    (stored as 1.00499...) becomes ``1.00``.
    """
    if value == 0:
        value = 0.0  # no "-0.00" for negative zero
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def signed(value: float, digits: int = 2) -> str:
    """Like :func:`fixed` but with an explicit ``+`` for non-negative values."""
    text = fixed(value, digits)
    return text if text.startswith("-") else f"+{text}"


def plain(value: float) -> str:
    """Shortest representation of a number: ``40`` rather than ``40.0``."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)
