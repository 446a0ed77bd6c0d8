"""
Constant-product curve math (**pool math only**).

A swap moves one reserve by the supplied amount and re-derives the other from
the invariant: `new_output = k // new_input`. The floor division absorbs all
rounding, so `new_input * new_output <= k` with a loss below `new_input`.
"""
from __future__ import annotations

from typing import Tuple

from .core import (
    AssetType,
    Invariant,
    InvalidInputError,
    InvalidStateError,
    PositionDirection,
    Reserve,
    SwapDirection,
)

# --- Debug utilities (toggleable) ---
DEBUG_CURVE = False

def _dbg(msg: str) -> None:
    if DEBUG_CURVE:
        print(f"[CURVE] {msg}")


def swap_output(input_reserve: Reserve,
                swap_amount: Reserve,
                direction: SwapDirection,
                invariant: Invariant) -> Tuple[Reserve, Reserve]:
    """Return (new_input_reserve, new_output_reserve) for a one-sided swap.

    Agnostic to whether the input side is base or quote. A REMOVE at least as
    large as the input reserve has no curve meaning and raises InvalidStateError.
    """
    if swap_amount.value < 0:
        raise InvalidInputError(f"swap amount must be >= 0, got {swap_amount.value}")
    if direction is SwapDirection.ADD:
        new_input = input_reserve + swap_amount
    else:
        new_input = input_reserve - swap_amount
    if new_input.value <= 0:
        raise InvalidStateError(
            f"swap would leave input reserve at {new_input.value} "
            f"(reserve={input_reserve.value}, remove={swap_amount.value})"
        )
    new_output = invariant.div_reserve_down(new_input)
    _dbg(f"swap {direction.value}: in {input_reserve.value}->{new_input.value}, out={new_output.value}")
    return new_input, new_output


def swap_direction(asset_type: AssetType, direction: PositionDirection) -> SwapDirection:
    """Translate long/short on base/quote into a curve operation.

    Going long on base (or short on quote) takes that asset out of the pool.
    """
    if direction is PositionDirection.LONG and asset_type is AssetType.BASE:
        return SwapDirection.REMOVE
    if direction is PositionDirection.SHORT and asset_type is AssetType.QUOTE:
        return SwapDirection.REMOVE
    return SwapDirection.ADD


__all__ = ["swap_output", "swap_direction"]
