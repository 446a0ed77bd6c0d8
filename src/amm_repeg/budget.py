"""
Inverse problems: which peg, or which K-rescale ratio, costs a given budget?

Both solvers are closed form and both are approximations. Re-verify the
achieved cost with `repeg_cost` / `adjust_k_cost` before acting on a result.

Sign convention follows `costs.py`: a positive target is paid by the protocol
to participants, a negative target is collected from them.
"""
from __future__ import annotations

from .core import (
    AMM_RESERVE_PRECISION,
    AMM_TIMES_PEG_TO_QUOTE_PRECISION_RATIO,
    AMM_TO_QUOTE_PRECISION_RATIO,
    DepthRatio,
    InvalidInputError,
    InvalidStateError,
    MarketState,
    Peg,
    PEG_PRECISION,
    PegSolution,
    QUOTE_PRECISION,
    QuoteAmount,
    offset_reserve,
)

# --- Debug utilities (toggleable) ---
DEBUG_BUDGET = False

def _dbg(msg: str) -> None:
    if DEBUG_BUDGET:
        print(f"[BUDGET] {msg}")


def budgeted_k(market: MarketState, target_cost: QuoteAmount) -> DepthRatio:
    """Depth ratio p = numerator / denominator whose K rescale costs about `target_cost`.

    Solves (1/(x+d) - p/(x*p+d)) * y*d*Q = C for p, which holds only when the
    invariant equals x*y exactly:

        p = d * (y*d*Q - C*(x+d)) / (C*x*(x+d) + y*d^2*Q),   C = -target_cost

    Every term is carried at reserve precision and both sides are brought to
    the same grid, so numerator/denominator is the ratio (not either term alone).
    At C == 0 the ratio is 1 up to rounding. The cost of a rescale is bounded
    (for a long it tends to y*d^2*Q / (x*(x+d)) as p grows); targets past that
    bound have no positive solution and raise InvalidStateError.
    """
    if not isinstance(target_cost, QuoteAmount):
        raise InvalidInputError(f"target cost must be QuoteAmount, got {type(target_cost).__name__}")
    d = market.base_asset_amount.value
    if d == 0:
        raise InvalidInputError("net open interest is zero; every K rescale costs nothing")

    x = market.curve.base_asset_reserve.value
    y = market.curve.quote_asset_reserve.value
    q = market.curve.peg_multiplier.value
    c = -target_cost.value
    res = AMM_RESERVE_PRECISION

    numer1 = y * d * q // res // PEG_PRECISION
    numer2 = c * (x + d) // QUOTE_PRECISION
    denom1 = c * x * (x + d) // res // QUOTE_PRECISION
    denom2 = y * d * d * q // res // res // PEG_PRECISION

    numerator = d * (numer1 - numer2) // res // res // AMM_TO_QUOTE_PRECISION_RATIO
    denominator = (denom1 + denom2) // res // AMM_TO_QUOTE_PRECISION_RATIO
    _dbg(f"{market.label}: budget={target_cost.value} -> {numerator}/{denominator}")

    if numerator <= 0 or denominator <= 0:
        raise InvalidStateError(
            f"no positive depth ratio meets target {target_cost.value} under k = x*y "
            f"(solved {numerator}/{denominator})"
        )
    return DepthRatio(numerator=numerator, denominator=denominator)


def budgeted_peg(market: MarketState, target_cost: QuoteAmount) -> PegSolution:
    """Peg whose repeg costs about `target_cost` under the closed-form repeg cost.

    The closed form prices a repeg as dY * (old_peg - new_peg), where dY is the
    quote reserve the net position would pull out on close. Inverting it:

        peg_delta = -target * AMM_TIMES_PEG_TO_QUOTE_PRECISION_RATIO // dY
        new_peg   = peg - peg_delta
    """
    if not isinstance(target_cost, QuoteAmount):
        raise InvalidInputError(f"target cost must be QuoteAmount, got {type(target_cost).__name__}")
    curve = market.curve
    k = curve.invariant()
    quote_after_close = k.div_reserve_down(offset_reserve(curve.base_asset_reserve, market.base_asset_amount))
    quote_reserve_delta = curve.quote_asset_reserve - quote_after_close
    if quote_reserve_delta.is_zero():
        raise InvalidInputError("net position moves no quote reserve; peg cannot be budgeted")

    peg_delta = Peg(-target_cost.value * AMM_TIMES_PEG_TO_QUOTE_PRECISION_RATIO // quote_reserve_delta.value)
    new_peg = curve.peg_multiplier - peg_delta
    _dbg(f"{market.label}: peg {curve.peg_multiplier.value} change by {-peg_delta.value} -> {new_peg.value}")
    if new_peg.value <= 0:
        raise InvalidStateError(f"target {target_cost.value} needs a non-positive peg ({new_peg.value})")
    return PegSolution(new_peg=new_peg, peg_delta=peg_delta, quote_reserve_delta=quote_reserve_delta)


__all__ = ["budgeted_k", "budgeted_peg"]
