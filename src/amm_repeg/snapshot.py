"""
Snapshot input: MarketState values from JSON objects.

Integer fields may be given as JSON numbers or as integer strings (large
reserves do not survive a float round-trip). Values are raw on-chain
integers at their native precision; nothing is rescaled here.

Example object:

    {"symbol": "SOL", "market_index": 0,
     "base_asset_reserve": "...", "quote_asset_reserve": "...",
     "sqrt_k": "...", "peg_multiplier": 200000,
     "base_asset_amount": "-1234", "cumulative_funding_rate": 0}
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

from .core import (
    BaseAmount,
    CurveState,
    InvalidInputError,
    MarketState,
    Peg,
    Reserve,
)


def _int_field(d: Mapping[str, Any], key: str, *, required: bool = True, default: int = 0) -> int:
    if key not in d or d[key] is None:
        if required:
            raise InvalidInputError(f"snapshot missing field '{key}'")
        return default
    raw = d[key]
    if isinstance(raw, bool):
        raise InvalidInputError(f"snapshot field '{key}' must be an integer, got bool")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            raise InvalidInputError(f"snapshot field '{key}' is not an integer: {raw!r}") from None
    raise InvalidInputError(f"snapshot field '{key}' must be an integer, got {type(raw).__name__}")


def curve_from_dict(d: Mapping[str, Any]) -> CurveState:
    return CurveState(
        base_asset_reserve=Reserve(_int_field(d, "base_asset_reserve")),
        quote_asset_reserve=Reserve(_int_field(d, "quote_asset_reserve")),
        sqrt_k=Reserve(_int_field(d, "sqrt_k")),
        peg_multiplier=Peg(_int_field(d, "peg_multiplier")),
    )


def market_from_dict(d: Mapping[str, Any]) -> MarketState:
    """Build a MarketState; curve fields may sit at top level or under "amm"."""
    if not isinstance(d, Mapping):
        raise InvalidInputError(f"snapshot entry must be an object, got {type(d).__name__}")
    amm = d.get("amm", d)
    symbol = d.get("symbol")
    return MarketState(
        curve=curve_from_dict(amm),
        base_asset_amount=BaseAmount(_int_field(d, "base_asset_amount", required=False)),
        cumulative_funding_rate=_int_field(amm, "cumulative_funding_rate", required=False),
        market_index=_int_field(d, "market_index", required=False),
        symbol=str(symbol) if symbol is not None else None,
    )


def market_to_dict(market: MarketState) -> Dict[str, Any]:
    c = market.curve
    return {
        "symbol": market.symbol,
        "market_index": market.market_index,
        "base_asset_reserve": str(c.base_asset_reserve.value),
        "quote_asset_reserve": str(c.quote_asset_reserve.value),
        "sqrt_k": str(c.sqrt_k.value),
        "peg_multiplier": c.peg_multiplier.value,
        "base_asset_amount": str(market.base_asset_amount.value),
        "cumulative_funding_rate": market.cumulative_funding_rate,
    }


def load_markets(path: Union[str, Path]) -> List[MarketState]:
    """Read a JSON file holding one market object, a list of them, or {"markets": [...]}."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, Mapping) and "markets" in data:
        data = data["markets"]
    if isinstance(data, Mapping):
        data = [data]
    if not isinstance(data, list):
        raise InvalidInputError(f"{path}: expected a market object or a list of them")
    return [market_from_dict(entry) for entry in data]


__all__ = [
    "curve_from_dict",
    "market_from_dict",
    "market_to_dict",
    "load_markets",
]
