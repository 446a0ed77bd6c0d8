"""
AMM Repeg Core
==============

Unified exports for integer-domain primitives used by the curve and cost modules.
All arithmetic is integer floor arithmetic on scale-tagged amounts.
Decimal helpers are provided *only* for I/O formatting.
"""

# NOTE:
#   The `core` package defines the scale-tagged amounts, snapshots and result
#   types. Every amount carries its precision in its type; crossing scales goes
#   through the converters in `amounts.py`.

# Integer-domain constants
from .constants import (
    MARK_PRICE_PRECISION,
    PEG_PRECISION,
    QUOTE_PRECISION,
    AMM_RESERVE_PRECISION,
    BASE_PRECISION,
    AMM_TO_QUOTE_PRECISION_RATIO,
    AMM_TIMES_PEG_TO_QUOTE_PRECISION_RATIO,
    PRICE_TO_QUOTE_PRECISION,
    BPS_SCALE,
)

# Amount primitives and bridges
from .amounts import (
    isqrt,
    Reserve,
    BaseAmount,
    QuoteAmount,
    Price,
    Peg,
    Invariant,
    quote_to_reserve,
    reserve_to_quote,
    offset_reserve,
    peg_ratio,
)

# Decimal formatting helpers (non-core arithmetic)
from .fmt import fmt_dec, amount_to_decimal, fmt_amount, fmt_usd

# Snapshots, tags and results
from .datatypes import (
    SwapDirection,
    AssetType,
    PositionDirection,
    CurveState,
    MarketState,
    NetPosition,
    CostTolerance,
    CrossCheck,
    RepegDiagnostics,
    AdjustKDiagnostics,
    CostEstimate,
    DepthRatio,
    PegSolution,
    TradeToPrice,
)

# Core exceptions
from .exc import InvalidInputError, ScaleMismatchError, InvalidStateError

__all__ = [
    # constants
    "MARK_PRICE_PRECISION",
    "PEG_PRECISION",
    "QUOTE_PRECISION",
    "AMM_RESERVE_PRECISION",
    "BASE_PRECISION",
    "AMM_TO_QUOTE_PRECISION_RATIO",
    "AMM_TIMES_PEG_TO_QUOTE_PRECISION_RATIO",
    "PRICE_TO_QUOTE_PRECISION",
    "BPS_SCALE",
    # amounts
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
    # fmt
    "fmt_dec",
    "amount_to_decimal",
    "fmt_amount",
    "fmt_usd",
    # datatypes
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
    # exceptions
    "InvalidInputError",
    "ScaleMismatchError",
    "InvalidStateError",
]
