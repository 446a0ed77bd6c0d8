"""
Forward cost problems: what would a peg change or a K rescale cost the protocol?

The authoritative cost is a valuation delta. The market's whole net open
interest is treated as one position whose entry value is its value against
the current curve; its PnL against the projected curve is the cost (positive
means participants gain, i.e. the protocol pays).

Each estimate also carries a closed-form cost derived from the reserves alone.
The two are compared against a `CostTolerance`; a gap beyond it is reported
as `anomalous` on the result, never raised and never substituted for the
valuation figure.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Optional

from .core import (
    AdjustKDiagnostics,
    CostEstimate,
    CostTolerance,
    CrossCheck,
    CurveState,
    InvalidInputError,
    MarketState,
    NetPosition,
    Peg,
    QuoteAmount,
    RepegDiagnostics,
    fmt_amount,
    fmt_usd,
    offset_reserve,
    peg_ratio,
    reserve_to_quote,
)
from .projection import mark_price, with_curve, with_peg, with_rescaled_depth
from .terminal import terminal_price
from .valuation import DEFAULT_VALUATION, PositionValuation

# --- Debug utilities (toggleable) ---
DEBUG_COSTS = False

def _dbg(msg: str) -> None:
    if DEBUG_COSTS:
        print(f"[COST] {msg}")


def _valuation_delta(market: MarketState,
                     new_curve: CurveState,
                     valuation: PositionValuation) -> QuoteAmount:
    """PnL of the net position (entered at today's value) against `new_curve`."""
    position = NetPosition.of_market(market)
    entry_value = valuation.base_asset_value(market.curve, position)
    position = replace(position, quote_asset_amount=entry_value)
    return valuation.position_pnl(new_curve, position)


# ---------------------------------------------------------------------------
# Closed-form costs
# ---------------------------------------------------------------------------

def repeg_formula_cost(market: MarketState, new_peg: Peg) -> QuoteAmount:
    """(k // (x + d) - y) * (old_peg - new_peg), moved onto the quote grid."""
    curve = market.curve
    k = curve.invariant()
    quote_after_close = k.div_reserve_down(offset_reserve(curve.base_asset_reserve, market.base_asset_amount))
    delta_quote = quote_after_close - curve.quote_asset_reserve
    return reserve_to_quote(delta_quote, curve.peg_multiplier - new_peg)


def adjust_k_formula_cost(market: MarketState, numerator: int, denominator: int) -> QuoteAmount:
    """Closed-form K-rescale cost with p = numerator / denominator.

    cost = (k/(x+d) - k*p^2/(x*p+d) - (1-p)*y) * peg, on the quote grid.
    """
    if denominator <= 0 or numerator <= 0:
        raise InvalidInputError(f"depth ratio terms must be > 0, got {numerator}/{denominator}")
    curve = market.curve
    d = market.base_asset_amount
    k = curve.invariant()

    y_release = (
        curve.quote_asset_reserve
        .mul_by_scalar(denominator - numerator)
        .div_by_scalar_down(denominator)
    )
    scaled_x = curve.base_asset_reserve.mul_by_scalar(numerator).div_by_scalar_down(denominator)
    quote_new = (
        k.mul_by_scalar(numerator * numerator)
        .div_by_scalar_down(denominator * denominator)
        .div_reserve_down(offset_reserve(scaled_x, d))
    )
    quote_old = k.div_reserve_down(offset_reserve(curve.base_asset_reserve, d))
    return reserve_to_quote(quote_old - quote_new - y_release, curve.peg_multiplier)


# ---------------------------------------------------------------------------
# Forward problems
# ---------------------------------------------------------------------------

def repeg_cost(market: MarketState,
               new_peg: Peg,
               *,
               valuation: PositionValuation = DEFAULT_VALUATION,
               tolerance: Optional[CostTolerance] = None) -> CostEstimate:
    """Cost of moving the peg multiplier to `new_peg` with reserves unchanged."""
    tolerance = tolerance or CostTolerance()
    new_curve = with_peg(market.curve, new_peg)
    cost = _valuation_delta(market, new_curve, valuation)

    check = CrossCheck.compare(cost, repeg_formula_cost(market, new_peg), tolerance)
    diagnostics = RepegDiagnostics(
        old_peg=market.curve.peg_multiplier,
        new_peg=new_peg,
        old_mark_price=mark_price(market.curve),
        new_mark_price=mark_price(new_curve),
        old_terminal_price=terminal_price(market),
        new_terminal_price=terminal_price(with_curve(market, new_curve)),
        check=check,
    )
    _dbg(
        f"{market.label}: peg {fmt_amount(diagnostics.old_peg, 3)} -> {fmt_amount(new_peg, 3)}, "
        f"cost={fmt_usd(cost)}, formula={fmt_usd(check.formula_cost)}, anomalous={check.anomalous}"
    )
    return CostEstimate(cost=cost, diagnostics=diagnostics)


def adjust_k_cost(market: MarketState,
                  numerator: int,
                  denominator: int,
                  *,
                  valuation: PositionValuation = DEFAULT_VALUATION,
                  tolerance: Optional[CostTolerance] = None) -> CostEstimate:
    """Cost of rescaling the curve depth by numerator / denominator."""
    tolerance = tolerance or CostTolerance()
    new_curve = with_rescaled_depth(market.curve, numerator, denominator)
    cost = _valuation_delta(market, new_curve, valuation)

    check = CrossCheck.compare(cost, adjust_k_formula_cost(market, numerator, denominator), tolerance)
    diagnostics = AdjustKDiagnostics(
        old_invariant=market.curve.invariant(),
        new_invariant=new_curve.invariant(),
        depth_ratio=peg_ratio(numerator, denominator),
        check=check,
    )
    _dbg(
        f"{market.label}: k x{numerator}/{denominator}, cost={fmt_usd(cost)}, "
        f"formula={fmt_usd(check.formula_cost)}, anomalous={check.anomalous}"
    )
    return CostEstimate(cost=cost, diagnostics=diagnostics)


__all__ = [
    "repeg_cost",
    "adjust_k_cost",
    "repeg_formula_cost",
    "adjust_k_formula_cost",
]
