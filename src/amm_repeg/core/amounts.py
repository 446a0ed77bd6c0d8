"""
Amount primitives: scale-tagged integers for every quantity kind on the curve.

- Reserve: AMM reserves, invariant root and base-asset trade sizes (AMM_RESERVE_PRECISION).
- BaseAmount: signed base-asset exposure (net open interest), reserve scale.
- QuoteAmount: signed quote-asset amounts (costs, PnL, position entry value), QUOTE_PRECISION.
- Price: mark/terminal/limit prices, MARK_PRICE_PRECISION, non-negative.
- Peg: peg multiplier (and peg deltas), PEG_PRECISION.
- Invariant: k = sqrt_k ** 2, reserve scale squared, non-negative.

Arithmetic is only defined between values of the same type; crossing scales goes
through one of the explicit converters at the bottom of this module. All
division is floor division (`//`), an accepted source of rounding error.

# Alignment notes:
# - quote_to_reserve multiplies before it divides (reserve-times-peg ratio, then peg)
#   so that the peg division is the only lossy step.
# - Invariant.div_reserve_down is the single place a constant-product output
#   reserve is derived; rounding loss is absorbed there.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar, TypeVar

from .constants import (
    AMM_RESERVE_PRECISION,
    AMM_TIMES_PEG_TO_QUOTE_PRECISION_RATIO,
    MARK_PRICE_PRECISION,
    PEG_PRECISION,
    QUOTE_PRECISION,
)
from .exc import InvalidInputError, InvalidStateError, ScaleMismatchError

# Debug printing control
DEBUG_AMOUNTS = False

def _dbg(msg: str) -> None:
    if DEBUG_AMOUNTS:
        print(msg)


# ----------------------------
# Integer helpers (centralised)
# ----------------------------

def isqrt(n: int) -> int:
    """Integer square root: exact for perfect squares, floor of the true root otherwise."""
    if not isinstance(n, int) or isinstance(n, bool):
        raise InvalidInputError(f"isqrt expects int, got {type(n).__name__}")
    if n < 0:
        raise InvalidInputError(f"isqrt of negative value: {n}")
    return math.isqrt(n)


def _floor_div(a: int, b: int) -> int:
    if b <= 0:
        raise InvalidInputError(f"divisor must be > 0, got {b}")
    return a // b


# ----------------------------
# Scaled integer base
# ----------------------------

S = TypeVar("S", bound="_Scaled")


@dataclass(frozen=True, eq=False)
class _Scaled:
    """Integer carrying an implicit 10^n scale fixed by the concrete subclass."""
    value: int

    SCALE: ClassVar[int] = 1
    NON_NEGATIVE: ClassVar[bool] = False

    def __post_init__(self):
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise InvalidInputError(
                f"{type(self).__name__} requires an int value, got {type(self.value).__name__}"
            )
        if self.NON_NEGATIVE and self.value < 0:
            raise InvalidInputError(f"{type(self).__name__} must be >= 0, got {self.value}")

    # ------------- constructors -------------

    @classmethod
    def zero(cls: type[S]) -> S:
        return cls(0)

    @classmethod
    def from_units(cls: type[S], units: int) -> S:
        """Build from a whole number of display units (e.g. 5 quote -> 5 * QUOTE_PRECISION)."""
        return cls(units * cls.SCALE)

    # ------------- predicates / conversions -------------

    def is_zero(self) -> bool:
        return self.value == 0

    def is_positive(self) -> bool:
        return self.value > 0

    def to_decimal(self) -> Decimal:
        """Decimal view for logs/printing only."""
        return Decimal(self.value) / Decimal(self.SCALE)

    # ------------- scale guard -------------

    def _same(self, other: object, op: str) -> "_Scaled":
        if type(other) is not type(self):
            raise ScaleMismatchError(type(self), type(other), op)
        return other  # type: ignore[return-value]

    # ------------- comparisons -------------

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.value == other.value  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.value))

    def __lt__(self: S, other: S) -> bool:
        return self.value < self._same(other, "<").value

    def __le__(self: S, other: S) -> bool:
        return self.value <= self._same(other, "<=").value

    def __gt__(self: S, other: S) -> bool:
        return self.value > self._same(other, ">").value

    def __ge__(self: S, other: S) -> bool:
        return self.value >= self._same(other, ">=").value

    # ------------- arithmetic (same scale only) -------------

    def __add__(self: S, other: S) -> S:
        return type(self)(self.value + self._same(other, "+").value)

    def __sub__(self: S, other: S) -> S:
        return type(self)(self.value - self._same(other, "-").value)

    def __neg__(self: S) -> S:
        return type(self)(-self.value)

    def __abs__(self: S) -> S:
        return type(self)(abs(self.value))

    def mul_by_scalar(self: S, k: int) -> S:
        """Multiply by a dimensionless integer."""
        if not isinstance(k, int) or isinstance(k, bool):
            raise InvalidInputError(f"scalar must be int, got {type(k).__name__}")
        return type(self)(self.value * k)

    def div_by_scalar_down(self: S, k: int) -> S:
        """Floor-divide by a positive dimensionless integer."""
        if not isinstance(k, int) or isinstance(k, bool):
            raise InvalidInputError(f"scalar must be int, got {type(k).__name__}")
        return type(self)(_floor_div(self.value, k))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value})"


# ----------------------------
# Concrete scales
# ----------------------------

@dataclass(frozen=True, eq=False, repr=False)
class Reserve(_Scaled):
    """Reserve-scale magnitude: base/quote reserves, sqrt_k and base trade sizes."""
    SCALE: ClassVar[int] = AMM_RESERVE_PRECISION

    def squared(self) -> "Invariant":
        if self.value < 0:
            raise InvalidStateError(f"cannot square a negative reserve: {self.value}")
        return Invariant(self.value * self.value)


@dataclass(frozen=True, eq=False, repr=False)
class BaseAmount(_Scaled):
    """Signed base-asset exposure at reserve scale (long > 0, short < 0)."""
    SCALE: ClassVar[int] = AMM_RESERVE_PRECISION

    def magnitude(self) -> Reserve:
        """Absolute size as a reserve-scale swap amount."""
        return Reserve(abs(self.value))

    def is_long(self) -> bool:
        return self.value > 0


@dataclass(frozen=True, eq=False, repr=False)
class QuoteAmount(_Scaled):
    """Signed quote-asset amount (costs, PnL, entry values)."""
    SCALE: ClassVar[int] = QUOTE_PRECISION


@dataclass(frozen=True, eq=False, repr=False)
class Price(_Scaled):
    """Quote-per-base price (non-negative)."""
    SCALE: ClassVar[int] = MARK_PRICE_PRECISION
    NON_NEGATIVE: ClassVar[bool] = True


@dataclass(frozen=True, eq=False, repr=False)
class Peg(_Scaled):
    """Peg multiplier. Deltas may be negative; curve states require a positive peg."""
    SCALE: ClassVar[int] = PEG_PRECISION


@dataclass(frozen=True, eq=False, repr=False)
class Invariant(_Scaled):
    """Constant-product invariant k (reserve scale squared)."""
    SCALE: ClassVar[int] = AMM_RESERVE_PRECISION * AMM_RESERVE_PRECISION
    NON_NEGATIVE: ClassVar[bool] = True

    def div_reserve_down(self, reserve: Reserve) -> Reserve:
        """k // reserve -> the reserve on the other side of the curve."""
        if not isinstance(reserve, Reserve):
            raise ScaleMismatchError(Invariant, type(reserve), "div_reserve_down")
        if reserve.value <= 0:
            raise InvalidStateError(f"constant-product divisor must be > 0, got {reserve.value}")
        return Reserve(self.value // reserve.value)

    def sqrt(self) -> Reserve:
        return Reserve(isqrt(self.value))


# ----------------------------
# Explicit cross-scale converters
# ----------------------------

def _require(x: object, cls: type, op: str) -> None:
    if not isinstance(x, cls):
        raise ScaleMismatchError(cls, type(x), op)


def quote_to_reserve(quote: QuoteAmount, peg: Peg) -> Reserve:
    """Quote amount -> reserve-scale amount at a given peg."""
    _require(quote, QuoteAmount, "quote_to_reserve")
    _require(peg, Peg, "quote_to_reserve")
    if peg.value <= 0:
        raise InvalidInputError(f"peg must be > 0, got {peg.value}")
    r = quote.value * AMM_TIMES_PEG_TO_QUOTE_PRECISION_RATIO // peg.value
    _dbg(f"quote_to_reserve: quote={quote.value}, peg={peg.value} -> {r}")
    return Reserve(r)


def reserve_to_quote(reserve: Reserve, peg: Peg) -> QuoteAmount:
    """Reserve-scale amount -> quote amount at a given peg (floor)."""
    _require(reserve, Reserve, "reserve_to_quote")
    _require(peg, Peg, "reserve_to_quote")
    return QuoteAmount(reserve.value * peg.value // AMM_TIMES_PEG_TO_QUOTE_PRECISION_RATIO)


def offset_reserve(reserve: Reserve, base: BaseAmount) -> Reserve:
    """Reserve shifted by a signed base exposure (x + d)."""
    _require(reserve, Reserve, "offset_reserve")
    _require(base, BaseAmount, "offset_reserve")
    return Reserve(reserve.value + base.value)


def peg_ratio(numerator: int, denominator: int) -> Peg:
    """Dimensionless ratio expressed at peg precision (PEG * n // d)."""
    if denominator <= 0:
        raise InvalidInputError(f"denominator must be > 0, got {denominator}")
    return Peg(PEG_PRECISION * numerator // denominator)


__all__ = [
    "isqrt",
    "Reserve",
    "BaseAmount",
    "QuoteAmount",
    "Price",
    "Peg",
    "Invariant",
    "quote_to_reserve",
    "reserve_to_quote",
    "offset_reserve",
    "peg_ratio",
]
