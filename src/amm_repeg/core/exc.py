"""
Core exception types for amm_repeg.core.

These are dependency-free and may be imported by all core modules.
Degenerate outcomes (zero-size trades, zero prices) are *not* exceptions;
they are reported on the result objects.
"""

__all__ = [
    "InvalidInputError",
    "ScaleMismatchError",
    "InvalidStateError",
]


class InvalidInputError(Exception):
    """Raised when caller-supplied inputs violate basic preconditions
    (negative swap amount, non-positive divisor/denominator/limit)."""
    pass


class ScaleMismatchError(InvalidInputError):
    """Raised when two differently scaled amounts are combined without an explicit converter.

    Attributes
    ----------
    left : type
        Type of the left operand.
    right : type
        Type of the right operand.
    """

    def __init__(self, left, right, op: str = "arithmetic"):
        super().__init__(
            f"{op} requires matching scales: {getattr(left, '__name__', left)} "
            f"vs {getattr(right, '__name__', right)}"
        )
        self.left = left
        self.right = right


class InvalidStateError(Exception):
    """Raised when a projection would produce a non-positive reserve, invariant root or peg."""
    pass
