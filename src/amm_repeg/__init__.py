# Top-level API for amm_repeg (integer-domain).
"""
Top-level API for amm_repeg (integer-domain).

What-if economics of a constant-product perpetual AMM:
  - curve math and state projection (swap, peg change, K rescale)
  - terminal price and max trade to a limit price
  - repeg / adjust-K cost, with closed-form cross-checks
  - budgeted peg / budgeted K inverse solvers
  - price-shock repeg scan across markets

Every operation is a pure function over frozen snapshots; nothing here reads
the network or mutates its inputs.
"""

# NOTE:
#   Amount types carry their precision; see `amm_repeg.core.amounts` for the
#   explicit converters between reserve, quote, price and peg scales.

from __future__ import annotations

from .curve import swap_output, swap_direction
from .projection import (
    calculate_price,
    mark_price,
    reserves_after_swap,
    with_peg,
    with_rescaled_depth,
    with_curve,
    market_after_trade,
)
from .valuation import PositionValuation, CurveValuation, DEFAULT_VALUATION
from .terminal import terminal_price
from .costs import repeg_cost, adjust_k_cost
from .budget import budgeted_k, budgeted_peg
from .trade import max_base_trade_to_price
from .scan import scan_market, scan_markets
from .snapshot import market_from_dict, load_markets

from .core import (
    CurveState,
    MarketState,
    NetPosition,
    SwapDirection,
    AssetType,
    PositionDirection,
    CostTolerance,
    CostEstimate,
    Reserve,
    BaseAmount,
    QuoteAmount,
    Price,
    Peg,
    InvalidInputError,
    InvalidStateError,
    ScaleMismatchError,
)

__all__ = [
    # curve / projection
    "swap_output",
    "swap_direction",
    "calculate_price",
    "mark_price",
    "reserves_after_swap",
    "with_peg",
    "with_rescaled_depth",
    "with_curve",
    "market_after_trade",
    # valuation
    "PositionValuation",
    "CurveValuation",
    "DEFAULT_VALUATION",
    # analysis
    "terminal_price",
    "repeg_cost",
    "adjust_k_cost",
    "budgeted_k",
    "budgeted_peg",
    "max_base_trade_to_price",
    "scan_market",
    "scan_markets",
    # input
    "market_from_dict",
    "load_markets",
    # core types
    "CurveState",
    "MarketState",
    "NetPosition",
    "SwapDirection",
    "AssetType",
    "PositionDirection",
    "CostTolerance",
    "CostEstimate",
    "Reserve",
    "BaseAmount",
    "QuoteAmount",
    "Price",
    "Peg",
    "InvalidInputError",
    "InvalidStateError",
    "ScaleMismatchError",
]
