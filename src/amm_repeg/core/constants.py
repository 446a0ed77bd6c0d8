"""
AMM Repeg Core Constants (integer domain)
=========================================

Precision constants for every scaled quantity. Each amount type in
`amounts.py` carries one of these as its scale; the ratios below are the only
sanctioned bridges between reserve-scale and quote-scale values.
"""

# NOTE: All values are powers of ten; Decimal is only used in `fmt.py` for display.

# ---------------------------------------------------------------------------
# Base precisions
# ---------------------------------------------------------------------------

#: Mark/terminal/limit prices (quote per base).
MARK_PRICE_PRECISION: int = 10 ** 10

#: Peg multiplier.
PEG_PRECISION: int = 10 ** 3

#: Quote asset amounts (USDC-like, 6 decimals).
QUOTE_PRECISION: int = 10 ** 6

#: AMM reserves, invariant root and base-asset sizes.
AMM_RESERVE_PRECISION: int = 10 ** 13
BASE_PRECISION: int = AMM_RESERVE_PRECISION


# ---------------------------------------------------------------------------
# Derived conversion ratios
# ---------------------------------------------------------------------------

#: Reserve-scale -> quote-scale (no peg involved).
AMM_TO_QUOTE_PRECISION_RATIO: int = AMM_RESERVE_PRECISION // QUOTE_PRECISION  # 1e7

#: (reserve * peg) -> quote. Used whenever a peg multiplier converts reserves into quote.
AMM_TIMES_PEG_TO_QUOTE_PRECISION_RATIO: int = (
    AMM_RESERVE_PRECISION * PEG_PRECISION // QUOTE_PRECISION
)  # 1e10

#: Price-scale -> quote-scale.
PRICE_TO_QUOTE_PRECISION: int = MARK_PRICE_PRECISION // QUOTE_PRECISION  # 1e4

#: Basis-point denominator for relative tolerances.
BPS_SCALE: int = 10_000


# ---------------------------------------------------------------------------
# Cross-check tolerances (valuation cost vs closed-form cost)
# ---------------------------------------------------------------------------

#: Absolute slack in quote units (1e-6 USD each). Covers the handful of floor
#: divisions on each side of the comparison.
DEFAULT_ABS_TOLERANCE_QUOTE: int = 10

#: Relative slack in basis points of the valuation-based cost.
DEFAULT_REL_TOLERANCE_BPS: int = 10


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------

__all__ = [
    "MARK_PRICE_PRECISION",
    "PEG_PRECISION",
    "QUOTE_PRECISION",
    "AMM_RESERVE_PRECISION",
    "BASE_PRECISION",
    "AMM_TO_QUOTE_PRECISION_RATIO",
    "AMM_TIMES_PEG_TO_QUOTE_PRECISION_RATIO",
    "PRICE_TO_QUOTE_PRECISION",
    "BPS_SCALE",
    "DEFAULT_ABS_TOLERANCE_QUOTE",
    "DEFAULT_REL_TOLERANCE_BPS",
]
