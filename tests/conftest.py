from __future__ import annotations

from typing import List

import pytest

# Import project primitives
from amm_repeg.core import (
    AMM_RESERVE_PRECISION,
    PEG_PRECISION,
    BaseAmount,
    CurveState,
    MarketState,
    NetPosition,
    Peg,
    QuoteAmount,
    Reserve,
)
from amm_repeg.valuation import CurveValuation


# -----------------------------
# Test helpers (pure functions)
# -----------------------------

RES = AMM_RESERVE_PRECISION


def make_curve(base_units: int, quote_units: int, peg: int, sqrt_k_units: int | None = None) -> CurveState:
    """Curve with reserves given in whole base/quote units and a raw peg."""
    sqrt_k_units = base_units if sqrt_k_units is None else sqrt_k_units
    return CurveState(
        base_asset_reserve=Reserve(base_units * RES),
        quote_asset_reserve=Reserve(quote_units * RES),
        sqrt_k=Reserve(sqrt_k_units * RES),
        peg_multiplier=Peg(peg),
    )


def make_market(curve: CurveState, net_base_units: int, symbol: str = "SOL") -> MarketState:
    return MarketState(curve=curve, base_asset_amount=BaseAmount(net_base_units * RES), symbol=symbol)


class SkewedValuation(CurveValuation):
    """CurveValuation whose PnL is inflated by a fixed quote amount (forces a cross-check gap)."""

    def __init__(self, skew: QuoteAmount) -> None:
        self.skew = skew

    def position_pnl(self, curve: CurveState, position: NetPosition) -> QuoteAmount:
        return super().position_pnl(curve, position) + self.skew


# -----------------------------
# Pytest fixtures
# -----------------------------

@pytest.fixture()
def curve_default() -> CurveState:
    # 1M base / 1M quote reserves, k = x*y exactly, peg 100.000 -> mark $100
    return make_curve(1_000_000, 1_000_000, 100 * PEG_PRECISION)


@pytest.fixture()
def market_flat(curve_default) -> MarketState:
    return make_market(curve_default, 0, symbol="FLAT")


@pytest.fixture()
def market_long(curve_default) -> MarketState:
    return make_market(curve_default, 1_000, symbol="LONG")


@pytest.fixture()
def market_short(curve_default) -> MarketState:
    return make_market(curve_default, -1_000, symbol="SHORT")


@pytest.fixture()
def markets_all(market_long, market_short, market_flat) -> List[MarketState]:
    return [market_long, market_short, market_flat]


@pytest.fixture()
def curve_factory():
    return make_curve


@pytest.fixture()
def market_factory():
    return make_market


@pytest.fixture()
def skewed_valuation():
    return SkewedValuation
