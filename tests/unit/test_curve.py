import pytest

from amm_repeg.curve import swap_direction, swap_output
from amm_repeg.core import (
    AssetType,
    Invariant,
    InvalidInputError,
    InvalidStateError,
    PositionDirection,
    Reserve,
    SwapDirection,
)


@pytest.mark.parametrize(
    "asset,direction,expected",
    [
        (AssetType.BASE, PositionDirection.LONG, SwapDirection.REMOVE),
        (AssetType.BASE, PositionDirection.SHORT, SwapDirection.ADD),
        (AssetType.QUOTE, PositionDirection.LONG, SwapDirection.ADD),
        (AssetType.QUOTE, PositionDirection.SHORT, SwapDirection.REMOVE),
    ],
)
def test_swap_direction_table(asset, direction, expected):
    print(f"[swap_direction] {asset.value}/{direction.value} -> {expected.value}")
    assert swap_direction(asset, direction) is expected


def test_swap_output_add_floors_output():
    new_in, new_out = swap_output(Reserve(1000), Reserve(100), SwapDirection.ADD, Invariant(1_000_000))
    print(f"[swap_output-add] in={new_in.value}, out={new_out.value}, product={new_in.value * new_out.value}")
    assert new_in == Reserve(1100)
    assert new_out == Reserve(909)
    assert 1_000_000 - new_in.value < new_in.value * new_out.value <= 1_000_000


def test_swap_output_remove():
    new_in, new_out = swap_output(Reserve(1000), Reserve(200), SwapDirection.REMOVE, Invariant(1_000_000))
    assert new_in == Reserve(800)
    assert new_out == Reserve(1250)


def test_swap_output_zero_amount_is_identity_on_input():
    new_in, new_out = swap_output(Reserve(1000), Reserve(0), SwapDirection.REMOVE, Invariant(1_000_000))
    assert new_in == Reserve(1000)
    assert new_out == Reserve(1000)


def test_swap_output_negative_amount_rejected():
    print("[swap_output-negative] expect InvalidInputError (no clamping)")
    with pytest.raises(InvalidInputError):
        swap_output(Reserve(1000), Reserve(-1), SwapDirection.ADD, Invariant(1_000_000))


@pytest.mark.parametrize("amount", [1000, 1001, 5000])
def test_swap_output_remove_past_reserve_is_invalid_state(amount):
    print(f"[swap_output-drain] remove {amount} of 1000 -> expect InvalidStateError")
    with pytest.raises(InvalidStateError):
        swap_output(Reserve(1000), Reserve(amount), SwapDirection.REMOVE, Invariant(1_000_000))


@pytest.mark.parametrize("a", [1, 7, 333, 10 ** 6])
def test_add_then_reverse_returns_within_one_floor(a):
    x, y = Reserve(10 ** 9 + 7), Reserve(10 ** 9 + 3)
    k = Invariant(x.value * y.value)
    x1, y1 = swap_output(x, Reserve(a), SwapDirection.ADD, k)
    # push the released quote back in on the other side
    y2, x2 = swap_output(y1, y - y1, SwapDirection.ADD, k)
    print(f"[reverse] a={a}: x={x.value} -> {x1.value} -> {x2.value}")
    assert y2 == y
    assert abs(x2.value - x.value) <= 1
    # the direct REMOVE undoes the ADD exactly on the input side
    x3, _ = swap_output(x1, Reserve(a), SwapDirection.REMOVE, k)
    assert x3 == x
