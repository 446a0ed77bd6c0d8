"""
Core datatypes for curve projection and cost analysis.

These datatypes are intentionally minimal and immutable so that every
projection produces a new value and "before"/"after" states never alias.

Notes:
- Reserves and sqrt_k are `Reserve` (AMM_RESERVE_PRECISION); the invariant
  k = sqrt_k ** 2 is derived on demand, never stored.
- Validation runs in `__post_init__`, so `dataclasses.replace` re-validates
  every projected state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, unique
from fractions import Fraction
from typing import Optional, Union

from .amounts import BaseAmount, Invariant, Peg, Price, QuoteAmount, Reserve
from .constants import BPS_SCALE, DEFAULT_ABS_TOLERANCE_QUOTE, DEFAULT_REL_TOLERANCE_BPS
from .exc import InvalidInputError, InvalidStateError


# ---------------------------------------------------------------------------
# Direction tags
# ---------------------------------------------------------------------------

@unique
class SwapDirection(Enum):
    """Whether the swap increases or decreases the supplied asset's reserve."""
    ADD = "add"
    REMOVE = "remove"


@unique
class AssetType(Enum):
    """Which reserve the caller supplies directly."""
    BASE = "base"
    QUOTE = "quote"


@unique
class PositionDirection(Enum):
    """Directional intent of a trade."""
    LONG = "long"
    SHORT = "short"

    def opposite(self) -> "PositionDirection":
        return PositionDirection.SHORT if self is PositionDirection.LONG else PositionDirection.LONG


# ---------------------------------------------------------------------------
# Curve / market snapshots
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CurveState:
    """Constant-product curve snapshot.

    Fields:
    - base_asset_reserve / quote_asset_reserve: pool reserves (strictly positive).
    - sqrt_k: invariant root (strictly positive).
    - peg_multiplier: converts the reserve ratio into a quoted price (strictly positive).
    """

    base_asset_reserve: Reserve
    quote_asset_reserve: Reserve
    sqrt_k: Reserve
    peg_multiplier: Peg

    def __post_init__(self):
        for name in ("base_asset_reserve", "quote_asset_reserve", "sqrt_k"):
            v = getattr(self, name)
            if not isinstance(v, Reserve):
                raise InvalidInputError(f"{name} must be Reserve, got {type(v).__name__}")
            if v.value <= 0:
                raise InvalidStateError(f"{name} must be > 0, got {v.value}")
        if not isinstance(self.peg_multiplier, Peg):
            raise InvalidInputError(
                f"peg_multiplier must be Peg, got {type(self.peg_multiplier).__name__}"
            )
        if self.peg_multiplier.value <= 0:
            raise InvalidStateError(f"peg_multiplier must be > 0, got {self.peg_multiplier.value}")

    def invariant(self) -> Invariant:
        return self.sqrt_k.squared()


@dataclass(frozen=True)
class MarketState:
    """A curve plus the net base-asset exposure of all participants against it."""

    curve: CurveState
    base_asset_amount: BaseAmount = field(default_factory=BaseAmount.zero)
    cumulative_funding_rate: int = 0
    market_index: int = 0
    symbol: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.curve, CurveState):
            raise InvalidInputError(f"curve must be CurveState, got {type(self.curve).__name__}")
        if not isinstance(self.base_asset_amount, BaseAmount):
            raise InvalidInputError(
                f"base_asset_amount must be BaseAmount, got {type(self.base_asset_amount).__name__}"
            )

    @property
    def label(self) -> str:
        return self.symbol if self.symbol else f"market-{self.market_index}"


@dataclass(frozen=True)
class NetPosition:
    """The whole market's net open interest viewed as a single position."""

    base_asset_amount: BaseAmount
    quote_asset_amount: QuoteAmount = field(default_factory=QuoteAmount.zero)
    last_cumulative_funding_rate: int = 0

    @classmethod
    def of_market(cls, market: MarketState) -> "NetPosition":
        return cls(
            base_asset_amount=market.base_asset_amount,
            quote_asset_amount=QuoteAmount.zero(),
            last_cumulative_funding_rate=market.cumulative_funding_rate,
        )


# ---------------------------------------------------------------------------
# Cross-check tolerance
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CostTolerance:
    """Allowed gap between a valuation-based cost and its closed-form estimate.

    A discrepancy is anomalous when it exceeds max(abs_quote, |cost| * rel_bps / 10_000).
    """

    abs_quote: QuoteAmount = field(default_factory=lambda: QuoteAmount(DEFAULT_ABS_TOLERANCE_QUOTE))
    rel_bps: int = DEFAULT_REL_TOLERANCE_BPS

    def __post_init__(self):
        if self.abs_quote.value < 0 or self.rel_bps < 0:
            raise InvalidInputError("tolerance components must be >= 0")

    def bound_for(self, cost: QuoteAmount) -> QuoteAmount:
        rel = abs(cost.value) * self.rel_bps // BPS_SCALE
        return QuoteAmount(max(self.abs_quote.value, rel))


# ---------------------------------------------------------------------------
# Cost estimates
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CrossCheck:
    """Valuation cost vs closed-form cost, with the tolerance that was applied."""

    formula_cost: QuoteAmount
    discrepancy: QuoteAmount
    tolerance: QuoteAmount

    @property
    def anomalous(self) -> bool:
        return abs(self.discrepancy.value) > self.tolerance.value

    @classmethod
    def compare(cls, cost: QuoteAmount, formula_cost: QuoteAmount, tolerance: CostTolerance) -> "CrossCheck":
        return cls(
            formula_cost=formula_cost,
            discrepancy=cost - formula_cost,
            tolerance=tolerance.bound_for(cost),
        )


@dataclass(frozen=True)
class RepegDiagnostics:
    old_peg: Peg
    new_peg: Peg
    old_mark_price: Price
    new_mark_price: Price
    old_terminal_price: Price
    new_terminal_price: Price
    check: CrossCheck


@dataclass(frozen=True)
class AdjustKDiagnostics:
    old_invariant: Invariant
    new_invariant: Invariant
    depth_ratio: Peg
    check: CrossCheck


@dataclass(frozen=True)
class CostEstimate:
    """Valuation-based cost (authoritative) plus the cross-check bundle."""

    cost: QuoteAmount
    diagnostics: Union[RepegDiagnostics, AdjustKDiagnostics]

    @property
    def anomalous(self) -> bool:
        return self.diagnostics.check.anomalous


# ---------------------------------------------------------------------------
# Inverse / solver results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DepthRatio:
    """Rational K-rescale ratio (numerator / denominator). Approximate by construction."""

    numerator: int
    denominator: int

    def as_fraction(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)


@dataclass(frozen=True)
class PegSolution:
    new_peg: Peg
    peg_delta: Peg
    quote_reserve_delta: Reserve


@dataclass(frozen=True)
class TradeToPrice:
    """Base-asset trade that moves the curve's price to a limit price."""

    amount: Reserve
    direction: PositionDirection

    @property
    def degenerate(self) -> bool:
        """Zero-size trade: the curve already sits at the limit price."""
        return self.amount.is_zero()


__all__ = [
    "SwapDirection",
    "AssetType",
    "PositionDirection",
    "CurveState",
    "MarketState",
    "NetPosition",
    "CostTolerance",
    "CrossCheck",
    "RepegDiagnostics",
    "AdjustKDiagnostics",
    "CostEstimate",
    "DepthRatio",
    "PegSolution",
    "TradeToPrice",
]
