"""
Price-shock repeg scan.

For each market, the gap between mark price and terminal price is split into
`steps` equal deviations. For every step the curve is traded to the shocked
price, the peg that restores the pre-shock mark price is chosen, and the cost
of that repeg is estimated on the shocked market.

Markets are independent: they are evaluated on a thread pool and returned in
input order. A market whose projection fails carries the error text instead
of steps; other markets are unaffected.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .core import (
    BPS_SCALE,
    CostEstimate,
    CostTolerance,
    InvalidInputError,
    InvalidStateError,
    MarketState,
    Peg,
    Price,
    TradeToPrice,
)
from .costs import repeg_cost
from .projection import mark_price, market_after_trade
from .terminal import terminal_price
from .trade import max_base_trade_to_price
from .valuation import DEFAULT_VALUATION, PositionValuation

# --- Debug utilities (toggleable) ---
DEBUG_SCAN = False

def _dbg(msg: str) -> None:
    if DEBUG_SCAN:
        print(f"[SCAN] {msg}")


DEFAULT_STEPS = 9


@dataclass(frozen=True)
class ShockStep:
    step: int
    deviation_bps: int
    target_price: Price
    trade: TradeToPrice
    shocked_mark_price: Price
    new_peg: Peg
    estimate: CostEstimate


@dataclass(frozen=True)
class MarketScan:
    market: MarketState
    mark_price: Optional[Price] = None
    terminal_price: Optional[Price] = None
    steps: List[ShockStep] = field(default_factory=list)
    error: Optional[str] = None


def restoring_peg(peg: Peg, target_mark: Price, current_mark: Price) -> Peg:
    """Peg that moves `current_mark` back to `target_mark` with reserves unchanged."""
    if current_mark.value <= 0:
        raise InvalidStateError("shocked mark price is zero; no peg restores it")
    return Peg(peg.value * target_mark.value // current_mark.value)


def shock_steps(market: MarketState,
                steps: int = DEFAULT_STEPS,
                *,
                valuation: PositionValuation = DEFAULT_VALUATION,
                tolerance: Optional[CostTolerance] = None) -> List[ShockStep]:
    """Repeg costs along the mark -> terminal price path of one market."""
    if steps <= 0:
        raise InvalidInputError(f"steps must be > 0, got {steps}")
    mark = mark_price(market.curve)
    if mark.is_zero():
        raise InvalidStateError(f"{market.label}: mark price floors to zero; deviations are undefined")
    terminal = terminal_price(market)
    gap = terminal.value - mark.value

    out: List[ShockStep] = []
    for step in range(1, steps + 1):
        target = Price(mark.value + gap * step // steps)
        deviation_bps = gap * step * BPS_SCALE // (steps * mark.value)
        trade = max_base_trade_to_price(market.curve, target)
        shocked = market_after_trade(market, trade.amount, trade.direction)
        shocked_mark = mark_price(shocked.curve)
        new_peg = restoring_peg(shocked.curve.peg_multiplier, mark, shocked_mark)
        estimate = repeg_cost(shocked, new_peg, valuation=valuation, tolerance=tolerance)
        _dbg(
            f"{market.label} step={step} dev={deviation_bps}bps trade={trade.direction.value} "
            f"{trade.amount.value} peg={new_peg.value} cost={estimate.cost.value}"
        )
        out.append(ShockStep(
            step=step,
            deviation_bps=deviation_bps,
            target_price=target,
            trade=trade,
            shocked_mark_price=shocked_mark,
            new_peg=new_peg,
            estimate=estimate,
        ))
    return out


def scan_market(market: MarketState,
                steps: int = DEFAULT_STEPS,
                *,
                valuation: PositionValuation = DEFAULT_VALUATION,
                tolerance: Optional[CostTolerance] = None) -> MarketScan:
    try:
        return MarketScan(
            market=market,
            mark_price=mark_price(market.curve),
            terminal_price=terminal_price(market),
            steps=shock_steps(market, steps, valuation=valuation, tolerance=tolerance),
        )
    except (InvalidInputError, InvalidStateError) as exc:
        return MarketScan(market=market, error=f"{type(exc).__name__}: {exc}")


def scan_markets(markets: Iterable[MarketState],
                 steps: int = DEFAULT_STEPS,
                 *,
                 max_workers: int = 4,
                 valuation: PositionValuation = DEFAULT_VALUATION,
                 tolerance: Optional[CostTolerance] = None) -> List[MarketScan]:
    """Scan every market concurrently; results keep the input order."""
    if steps <= 0:
        raise InvalidInputError(f"steps must be > 0, got {steps}")
    markets = list(markets)
    with ThreadPoolExecutor(max_workers=max(1, int(max_workers))) as ex:
        futures = [
            ex.submit(scan_market, m, steps, valuation=valuation, tolerance=tolerance)
            for m in markets
        ]
        return [f.result() for f in futures]


__all__ = [
    "DEFAULT_STEPS",
    "ShockStep",
    "MarketScan",
    "restoring_peg",
    "shock_steps",
    "scan_market",
    "scan_markets",
]
