import pytest

from amm_repeg.core.amounts import (
    BaseAmount,
    Invariant,
    Peg,
    Price,
    QuoteAmount,
    Reserve,
    isqrt,
    offset_reserve,
    peg_ratio,
    quote_to_reserve,
    reserve_to_quote,
)
from amm_repeg.core.constants import (
    AMM_RESERVE_PRECISION,
    AMM_TIMES_PEG_TO_QUOTE_PRECISION_RATIO,
    PEG_PRECISION,
    QUOTE_PRECISION,
)
from amm_repeg.core.exc import InvalidInputError, InvalidStateError, ScaleMismatchError


# -----------------------------
# isqrt
# -----------------------------

@pytest.mark.parametrize("root", [0, 1, 2, 999, 10 ** 19, 10 ** 19 + 12345])
def test_isqrt_exact_for_perfect_squares(root):
    print(f"[isqrt-perfect] root={root}")
    assert isqrt(root * root) == root


@pytest.mark.parametrize("n,expected", [(2, 1), (8, 2), (99, 9), (10 ** 38 - 1, 10 ** 19 - 1)])
def test_isqrt_floors_otherwise(n, expected):
    print(f"[isqrt-floor] n={n} -> expect {expected}")
    assert isqrt(n) == expected


def test_isqrt_rejects_negative_and_non_int():
    print("[isqrt-invalid] -1 and 4.0 -> expect InvalidInputError")
    with pytest.raises(InvalidInputError):
        isqrt(-1)
    with pytest.raises(InvalidInputError):
        isqrt(4.0)  # type: ignore[arg-type]


# -----------------------------
# Scale tagging
# -----------------------------

@pytest.mark.parametrize(
    "left,right",
    [
        (Reserve(10), QuoteAmount(10)),
        (Reserve(10), BaseAmount(10)),
        (QuoteAmount(1), Price(1)),
        (Peg(1000), Reserve(1000)),
    ],
)
def test_mixed_scale_arithmetic_raises(left, right):
    print(f"[scale-mismatch] {left!r} + {right!r} -> expect ScaleMismatchError")
    with pytest.raises(ScaleMismatchError):
        left + right
    with pytest.raises(ScaleMismatchError):
        left - right
    with pytest.raises(ScaleMismatchError):
        left < right


def test_mixed_scale_equality_is_false_not_error():
    # Same raw integer, different meaning.
    assert Reserve(5) != QuoteAmount(5)
    assert Reserve(5) == Reserve(5)


def test_same_scale_arithmetic_and_floor_division():
    a = QuoteAmount(7)
    b = QuoteAmount(3)
    assert a + b == QuoteAmount(10)
    assert b - a == QuoteAmount(-4)
    assert -a == QuoteAmount(-7)
    assert a.mul_by_scalar(3) == QuoteAmount(21)
    assert a.div_by_scalar_down(2) == QuoteAmount(3)
    # floor, not truncation
    assert QuoteAmount(-7).div_by_scalar_down(2) == QuoteAmount(-4)


def test_div_by_non_positive_scalar_raises():
    with pytest.raises(InvalidInputError):
        Reserve(10).div_by_scalar_down(0)
    with pytest.raises(InvalidInputError):
        Reserve(10).div_by_scalar_down(-2)


def test_constructor_validation():
    print("[ctor] Price(-1), Invariant(-1), Reserve(1.5), Peg(True) -> expect InvalidInputError")
    with pytest.raises(InvalidInputError):
        Price(-1)
    with pytest.raises(InvalidInputError):
        Invariant(-1)
    with pytest.raises(InvalidInputError):
        Reserve(1.5)  # type: ignore[arg-type]
    with pytest.raises(InvalidInputError):
        Peg(True)  # type: ignore[arg-type]


def test_from_units_and_to_decimal():
    q = QuoteAmount.from_units(5)
    assert q.value == 5 * QUOTE_PRECISION
    assert str(q.to_decimal()) == "5"
    assert Reserve.from_units(2).value == 2 * AMM_RESERVE_PRECISION


# -----------------------------
# Invariant helpers
# -----------------------------

def test_invariant_div_reserve_floors():
    k = Reserve(1000).squared()
    assert k == Invariant(1_000_000)
    assert k.div_reserve_down(Reserve(1100)) == Reserve(909)
    assert k.sqrt() == Reserve(1000)


def test_invariant_div_by_non_positive_reserve_is_invalid_state():
    k = Invariant(100)
    with pytest.raises(InvalidStateError):
        k.div_reserve_down(Reserve(0))
    with pytest.raises(ScaleMismatchError):
        k.div_reserve_down(QuoteAmount(10))  # type: ignore[arg-type]


# -----------------------------
# Converters
# -----------------------------

def test_quote_to_reserve_at_peg():
    # $1000 at peg 100 -> 10 base-equivalent units of quote reserve
    r = quote_to_reserve(QuoteAmount.from_units(1000), Peg(100 * PEG_PRECISION))
    print(f"[quote_to_reserve] $1000 @ peg 100 -> {r.value}")
    assert r == Reserve(10 * AMM_RESERVE_PRECISION)


def test_reserve_to_quote_inverts_quote_to_reserve():
    peg = Peg(123_456)
    q = QuoteAmount(987_654_321)
    back = reserve_to_quote(quote_to_reserve(q, peg), peg)
    # two floor divisions: at most one quote unit lost
    assert q.value - back.value in (0, 1)


def test_converters_reject_wrong_types_and_zero_peg():
    with pytest.raises(ScaleMismatchError):
        quote_to_reserve(Reserve(10), Peg(1000))  # type: ignore[arg-type]
    with pytest.raises(ScaleMismatchError):
        reserve_to_quote(QuoteAmount(10), Peg(1000))  # type: ignore[arg-type]
    with pytest.raises(InvalidInputError):
        quote_to_reserve(QuoteAmount(10), Peg(0))


def test_offset_reserve_and_magnitude():
    x = Reserve(1000)
    assert offset_reserve(x, BaseAmount(-300)) == Reserve(700)
    assert BaseAmount(-300).magnitude() == Reserve(300)
    assert not BaseAmount(-300).is_long()


def test_peg_ratio():
    assert peg_ratio(3, 2) == Peg(1500)
    assert peg_ratio(1, 1) == Peg(PEG_PRECISION)
    with pytest.raises(InvalidInputError):
        peg_ratio(1, 0)


def test_reserve_to_quote_ratio_constant():
    assert AMM_TIMES_PEG_TO_QUOTE_PRECISION_RATIO == AMM_RESERVE_PRECISION * PEG_PRECISION // QUOTE_PRECISION
