"""Trade size needed to move the curve's implied price to a limit price."""
from __future__ import annotations

from .core import (
    CurveState,
    InvalidInputError,
    Invariant,
    MARK_PRICE_PRECISION,
    PEG_PRECISION,
    PositionDirection,
    Price,
    Reserve,
    TradeToPrice,
)


def max_base_trade_to_price(curve: CurveState, limit_price: Price) -> TradeToPrice:
    """Solve k * MARK * peg / (limit * PEG) = x'^2 for the base reserve x'.

    More base in the pool lowers the price: x' > x is reached by a SHORT of
    x' - x, x' < x by a LONG of x - x'. x' == x is a zero-size LONG
    (`degenerate`), not an error. A limit taken from a floored mark price sits
    just below the exact curve price, so it leaves a residual SHORT that is
    dust next to the reserves rather than a degenerate trade.
    """
    if not isinstance(limit_price, Price):
        raise InvalidInputError(f"limit price must be Price, got {type(limit_price).__name__}")
    if limit_price.value <= 0:
        raise InvalidInputError(f"limit price must be > 0, got {limit_price.value}")

    k = curve.invariant()
    solved_sq = Invariant(
        k.value * MARK_PRICE_PRECISION * curve.peg_multiplier.value
        // (limit_price.value * PEG_PRECISION)
    )
    solved = solved_sq.sqrt()
    current = curve.base_asset_reserve

    if solved > current:
        return TradeToPrice(amount=solved - current, direction=PositionDirection.SHORT)
    if solved < current:
        return TradeToPrice(amount=current - solved, direction=PositionDirection.LONG)
    return TradeToPrice(amount=Reserve.zero(), direction=PositionDirection.LONG)


__all__ = ["max_base_trade_to_price"]
