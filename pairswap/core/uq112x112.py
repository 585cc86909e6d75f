"""
UQ112x112 fixed-point numbers.

Unsigned values with 112 integer bits and 112 fractional bits, stored as the
raw integer `value * 2**112` in a uint224. Accumulators built from these
values live in uint256 and wrap on overflow; only differences of two reads are
meaningful.
"""

from __future__ import annotations

from dataclasses import dataclass


RESOLUTION = 112
Q112 = 1 << RESOLUTION

UINT112_MAX = (1 << 112) - 1
UINT224_MASK = (1 << 224) - 1
UINT256_MASK = (1 << 256) - 1


def _require_uint(name: str, value: int, bits: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if not (0 <= value < (1 << bits)):
        raise ValueError(f"{name} must fit in uint{bits}: {value}")


@dataclass(frozen=True)
class UQ112x112:
    """A UQ112x112 number; `raw` is the scaled uint224 representation."""

    raw: int

    def __post_init__(self) -> None:
        _require_uint("raw", self.raw, 224)

    @classmethod
    def encode(cls, y: int) -> "UQ112x112":
        """Encode a uint112 as UQ112x112 (never overflows)."""
        _require_uint("y", y, 112)
        return cls(y * Q112)

    def uqdiv(self, x: int) -> "UQ112x112":
        """Divide by a non-zero uint112, truncating toward zero."""
        _require_uint("x", x, 112)
        if x == 0:
            raise ZeroDivisionError("UQ112x112 division by zero")
        return UQ112x112(self.raw // x)

    def mul_decode(self, amount: int) -> int:
        """
        Multiply by an integer amount and drop the fractional bits.

        Used to convert an amount of one asset into the other at this price.
        """
        _require_uint("amount", amount, 256)
        return (self.raw * amount) >> RESOLUTION

    def __int__(self) -> int:
        return self.raw >> RESOLUTION

    def __repr__(self) -> str:
        return f"UQ112x112({self.raw / Q112!r})"


def accumulate(cumulative: int, price: UQ112x112, elapsed: int) -> int:
    """Add `price * elapsed` to a uint256 accumulator, wrapping at 2**256."""
    _require_uint("cumulative", cumulative, 256)
    _require_uint("elapsed", elapsed, 32)
    return (cumulative + price.raw * elapsed) & UINT256_MASK


def wrapping_sub(end: int, start: int) -> int:
    """uint256 difference `end - start`, correct across one wraparound."""
    _require_uint("end", end, 256)
    _require_uint("start", start, 256)
    return (end - start) & UINT256_MASK
