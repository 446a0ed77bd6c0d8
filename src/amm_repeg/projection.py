"""
Hypothetical curve states: after a swap, after a peg change, after a K rescale.

Every helper returns a new frozen value; inputs are never touched. Curve
validation (strictly positive reserves, sqrt_k and peg) runs on construction,
so an impossible projection raises InvalidStateError instead of producing a
nonsense state.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Tuple, Union

from .core import (
    AssetType,
    BaseAmount,
    CurveState,
    InvalidInputError,
    MarketState,
    MARK_PRICE_PRECISION,
    PEG_PRECISION,
    Peg,
    PositionDirection,
    Price,
    QuoteAmount,
    Reserve,
    ScaleMismatchError,
    SwapDirection,
    quote_to_reserve,
)
from .curve import swap_direction, swap_output


def calculate_price(base_asset_reserve: Reserve, quote_asset_reserve: Reserve, peg: Peg) -> Price:
    """Price implied by a (base, quote) reserve pair at a peg.

    `quote * MARK * peg // PEG // base`; a non-positive base gives Price(0).
    """
    if base_asset_reserve.value <= 0:
        return Price.zero()
    return Price(
        quote_asset_reserve.value * MARK_PRICE_PRECISION * peg.value
        // PEG_PRECISION
        // base_asset_reserve.value
    )


def mark_price(curve: CurveState) -> Price:
    return calculate_price(curve.base_asset_reserve, curve.quote_asset_reserve, curve.peg_multiplier)


def reserves_after_swap(curve: CurveState,
                        asset_type: AssetType,
                        swap_amount: Union[Reserve, QuoteAmount],
                        direction: SwapDirection) -> Tuple[Reserve, Reserve]:
    """Return (new_quote_reserve, new_base_reserve) after swapping `swap_amount`.

    QUOTE inputs are QuoteAmount and are moved onto the reserve grid at the
    curve's peg first; BASE inputs are reserve-scale amounts. The invariant
    sqrt_k ** 2 is held fixed, so `new_quote * new_base <= k` by construction.
    """
    invariant = curve.invariant()
    if asset_type is AssetType.QUOTE:
        if not isinstance(swap_amount, QuoteAmount):
            raise ScaleMismatchError(QuoteAmount, type(swap_amount), "quote swap")
        if swap_amount.value < 0:
            raise InvalidInputError(f"swap amount must be >= 0, got {swap_amount.value}")
        amount_on_grid = quote_to_reserve(swap_amount, curve.peg_multiplier)
        new_quote, new_base = swap_output(curve.quote_asset_reserve, amount_on_grid, direction, invariant)
    else:
        if not isinstance(swap_amount, Reserve):
            raise ScaleMismatchError(Reserve, type(swap_amount), "base swap")
        new_base, new_quote = swap_output(curve.base_asset_reserve, swap_amount, direction, invariant)
    return new_quote, new_base


def with_peg(curve: CurveState, new_peg: Peg) -> CurveState:
    """Same reserves, different peg multiplier."""
    if not isinstance(new_peg, Peg):
        raise ScaleMismatchError(Peg, type(new_peg), "with_peg")
    return replace(curve, peg_multiplier=new_peg)


def with_rescaled_depth(curve: CurveState, numerator: int, denominator: int) -> CurveState:
    """Scale base, quote and sqrt_k by numerator/denominator, each independently.

    Price depends only on the reserve ratio, so it is preserved up to rounding
    while the invariant moves by (numerator/denominator) ** 2.
    """
    if denominator <= 0:
        raise InvalidInputError(f"denominator must be > 0, got {denominator}")
    if numerator <= 0:
        raise InvalidInputError(f"numerator must be > 0, got {numerator}")

    def _scale(r: Reserve) -> Reserve:
        return r.mul_by_scalar(numerator).div_by_scalar_down(denominator)

    return replace(
        curve,
        base_asset_reserve=_scale(curve.base_asset_reserve),
        quote_asset_reserve=_scale(curve.quote_asset_reserve),
        sqrt_k=_scale(curve.sqrt_k),
    )


def with_curve(market: MarketState, curve: CurveState) -> MarketState:
    return replace(market, curve=curve)


def market_after_trade(market: MarketState,
                       base_asset_amount: Reserve,
                       direction: PositionDirection) -> MarketState:
    """Market after a base-asset trade of size `base_asset_amount` in `direction`.

    The curve moves along the invariant; net open interest grows by the size
    for a LONG and shrinks by it for a SHORT.
    """
    new_quote, new_base = reserves_after_swap(
        market.curve,
        AssetType.BASE,
        base_asset_amount,
        swap_direction(AssetType.BASE, direction),
    )
    curve = replace(market.curve, base_asset_reserve=new_base, quote_asset_reserve=new_quote)
    signed = base_asset_amount.value if direction is PositionDirection.LONG else -base_asset_amount.value
    return replace(
        market,
        curve=curve,
        base_asset_amount=market.base_asset_amount + BaseAmount(signed),
    )


__all__ = [
    "calculate_price",
    "mark_price",
    "reserves_after_swap",
    "with_peg",
    "with_rescaled_depth",
    "with_curve",
    "market_after_trade",
]
