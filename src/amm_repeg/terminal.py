"""Terminal price: where the curve would sit if all net open interest closed now."""
from __future__ import annotations

from .core import AssetType, MarketState, PositionDirection, Price
from .curve import swap_direction
from .projection import calculate_price, mark_price, reserves_after_swap


def terminal_price(market: MarketState) -> Price:
    """Price after closing the whole net position against the curve, at the unchanged peg.

    A net long closes SHORT (sells base into the pool); a net short or a flat
    book closes LONG. A flat book swaps nothing and returns the mark price.
    """
    if market.base_asset_amount.is_zero():
        return mark_price(market.curve)
    close = PositionDirection.SHORT if market.base_asset_amount.is_long() else PositionDirection.LONG
    new_quote, new_base = reserves_after_swap(
        market.curve,
        AssetType.BASE,
        market.base_asset_amount.magnitude(),
        swap_direction(AssetType.BASE, close),
    )
    return calculate_price(new_base, new_quote, market.curve.peg_multiplier)


__all__ = ["terminal_price"]
