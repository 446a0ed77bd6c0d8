"""
Formatting helpers (non-core arithmetic).

Core arithmetic uses scale-tagged integers. Decimal here is only for
formatting and convenience (e.g., apps, tests, logs, display).
"""

from decimal import Decimal, getcontext

from .exc import InvalidInputError
from .amounts import _Scaled

# Debug printing control (formatting layer)
DEBUG_FMT = False

def _dbg(msg: str) -> None:
    if DEBUG_FMT:
        print(msg)


# ---------------------------------------------------------------------------
# Global Decimal precision (formatting only)
# ---------------------------------------------------------------------------

#: Default global precision (number of significant digits) for Decimal-based
#: formatting. This does not affect core arithmetic which uses integers.
#: Squared-reserve invariants need more than the usual 28 digits.
DEFAULT_DECIMAL_PRECISION: int = 60
getcontext().prec = DEFAULT_DECIMAL_PRECISION


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def fmt_dec(x: Decimal, places: int = 6) -> str:
    """Format a Decimal with a fixed number of fractional digits.

    The output is stable for logs and tests, e.g.:
      Decimal('1')          -> '1.000000'
      Decimal('-12.3456789') -> '-12.345679'
    """
    return format(x, f".{places}f")


def amount_to_decimal(a: _Scaled) -> Decimal:
    """Convert any scaled amount into a Decimal for logging/printing only."""
    if a is None:
        raise InvalidInputError("amount_to_decimal(): received None")
    if not isinstance(a, _Scaled):
        raise InvalidInputError(f"amount_to_decimal(): unsupported type {type(a).__name__}")
    _dbg(f"amount_to_decimal: {type(a).__name__} value={a.value} scale={a.SCALE}")
    return Decimal(a.value) / Decimal(a.SCALE)


def fmt_amount(a: _Scaled, places: int = 6) -> str:
    """`fmt_dec(amount_to_decimal(a))` shorthand."""
    return fmt_dec(amount_to_decimal(a), places=places)


def fmt_usd(a: _Scaled, places: int = 2) -> str:
    """Dollar-style display, sign before the symbol: '-$12.34'."""
    d = amount_to_decimal(a)
    sign = "-" if d < 0 else ""
    return f"{sign}${fmt_dec(abs(d), places=places)}"


__all__ = [
    "DEFAULT_DECIMAL_PRECISION",
    "fmt_dec",
    "amount_to_decimal",
    "fmt_amount",
    "fmt_usd",
]
