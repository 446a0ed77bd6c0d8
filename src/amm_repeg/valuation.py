"""
Position valuation against a curve state.

The cost model only needs one contract: given a curve and a net position,
return its quote-denominated value and PnL. `PositionValuation` is that
contract; `CurveValuation` is the close-against-the-curve implementation used
by default. Funding PnL is not modelled.
"""
from __future__ import annotations

from typing import Protocol

from .core import (
    AssetType,
    CurveState,
    NetPosition,
    PositionDirection,
    QuoteAmount,
    reserve_to_quote,
)
from .curve import swap_direction
from .projection import reserves_after_swap


class PositionValuation(Protocol):
    def base_asset_value(self, curve: CurveState, position: NetPosition) -> QuoteAmount: ...

    def position_pnl(self, curve: CurveState, position: NetPosition) -> QuoteAmount: ...


def direction_to_close(position: NetPosition) -> PositionDirection:
    return PositionDirection.SHORT if position.base_asset_amount.is_long() else PositionDirection.LONG


class CurveValuation:
    """Value a position by the quote it would release (or cost) to close on the curve."""

    def base_asset_value(self, curve: CurveState, position: NetPosition) -> QuoteAmount:
        if position.base_asset_amount.is_zero():
            return QuoteAmount.zero()
        close = direction_to_close(position)
        new_quote, _ = reserves_after_swap(
            curve,
            AssetType.BASE,
            position.base_asset_amount.magnitude(),
            swap_direction(AssetType.BASE, close),
        )
        if close is PositionDirection.SHORT:
            return reserve_to_quote(curve.quote_asset_reserve - new_quote, curve.peg_multiplier)
        # buying back a short rounds against the trader by one quote unit
        return reserve_to_quote(new_quote - curve.quote_asset_reserve, curve.peg_multiplier) + QuoteAmount(1)

    def position_pnl(self, curve: CurveState, position: NetPosition) -> QuoteAmount:
        if position.base_asset_amount.is_zero():
            return QuoteAmount.zero()
        value = self.base_asset_value(curve, position)
        if position.base_asset_amount.is_long():
            return value - position.quote_asset_amount
        return position.quote_asset_amount - value


DEFAULT_VALUATION: PositionValuation = CurveValuation()


__all__ = [
    "PositionValuation",
    "CurveValuation",
    "DEFAULT_VALUATION",
    "direction_to_close",
]
