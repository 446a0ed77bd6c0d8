import pytest

from amm_repeg.projection import mark_price, market_after_trade
from amm_repeg.trade import max_base_trade_to_price
from amm_repeg.core import CurveState, InvalidInputError, PositionDirection, Price, QuoteAmount, Reserve, isqrt


def test_limit_at_mark_is_degenerate_long(curve_default):
    t = max_base_trade_to_price(curve_default, mark_price(curve_default))
    assert t.amount == Reserve.zero()
    assert t.direction is PositionDirection.LONG
    assert t.degenerate


def test_limit_above_mark_needs_long(market_flat):
    limit = Price(2_000_000_000_000)
    t = max_base_trade_to_price(market_flat.curve, limit)
    after = mark_price(market_after_trade(market_flat, t.amount, t.direction).curve)
    print(f"[trade-to-price] $200 -> {t.direction.value} {t.amount.to_decimal()} base, mark after={after.to_decimal()}")
    assert t.direction is PositionDirection.LONG
    assert t.amount == Reserve(2_928_932_188_134_524_756)
    assert abs(after.value - limit.value) <= 10_000


def test_limit_below_mark_needs_short(market_flat):
    limit = Price(500_000_000_000)
    t = max_base_trade_to_price(market_flat.curve, limit)
    after = mark_price(market_after_trade(market_flat, t.amount, t.direction).curve)
    print(f"[trade-to-price] $50 -> {t.direction.value} {t.amount.to_decimal()} base, mark after={after.to_decimal()}")
    assert t.direction is PositionDirection.SHORT
    assert not t.degenerate
    assert abs(after.value - limit.value) <= 10_000


@pytest.mark.parametrize("limit", [Price(0), QuoteAmount(10)])
def test_invalid_limit_rejected(curve_default, limit):
    with pytest.raises(InvalidInputError):
        max_base_trade_to_price(curve_default, limit)


def test_limit_at_floored_mark_leaves_small_residual(curve_factory):
    # 3:1 reserves at peg 123.457: the mark price is not exact on the price grid
    x_units, y_units = 3_000_000, 1_000_000
    curve = curve_factory(x_units, y_units, 123_457)
    curve = CurveState(
        base_asset_reserve=curve.base_asset_reserve,
        quote_asset_reserve=curve.quote_asset_reserve,
        sqrt_k=Reserve(isqrt(curve.base_asset_reserve.value * curve.quote_asset_reserve.value)),
        peg_multiplier=curve.peg_multiplier,
    )
    t = max_base_trade_to_price(curve, mark_price(curve))
    print(f"[trade-to-price] floored mark -> {t.direction.value} {t.amount.value} raw base")
    assert t.direction is PositionDirection.SHORT
    assert not t.degenerate
    # residual is dust: well under a millionth of the base reserve
    assert 0 < t.amount.value < curve.base_asset_reserve.value // 10 ** 6
