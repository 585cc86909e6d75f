"""
Pair state for a two-asset constant-product pool.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .balances import Address, Amount


UINT32_MOD = 2**32
UINT112_MAX = 2**112 - 1
UINT256_MOD = 2**256


class PairStatus(Enum):
    """Pair lifecycle status."""
    UNINITIALIZED = "UNINITIALIZED"
    ACTIVE = "ACTIVE"


@dataclass
class PairState:
    """
    Reserve and oracle bookkeeping of a pair.

    Attributes:
        token0: Address of the first pooled asset
        token1: Address of the second pooled asset (must differ from token0)
        reserve0: Last synced reserve of token0 (fits in 112 bits)
        reserve1: Last synced reserve of token1 (fits in 112 bits)
        block_timestamp_last: Timestamp of the last reserve update, mod 2^32
        price0_cumulative_last: UQ112x112 accumulator of reserve1/reserve0, mod 2^256
        price1_cumulative_last: UQ112x112 accumulator of reserve0/reserve1, mod 2^256
    """
    token0: Address
    token1: Address
    reserve0: Amount = 0
    reserve1: Amount = 0
    block_timestamp_last: int = 0
    price0_cumulative_last: int = 0
    price1_cumulative_last: int = 0

    def __post_init__(self):
        """Validate pair state invariants."""
        if self.token0 == self.token1:
            raise ValueError(f"Pair assets must differ: {self.token0}")

        for name, value, bound in (
            ("reserve0", self.reserve0, UINT112_MAX + 1),
            ("reserve1", self.reserve1, UINT112_MAX + 1),
            ("block_timestamp_last", self.block_timestamp_last, UINT32_MOD),
            ("price0_cumulative_last", self.price0_cumulative_last, UINT256_MOD),
            ("price1_cumulative_last", self.price1_cumulative_last, UINT256_MOD),
        ):
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{name} must be an int")
            if not (0 <= value < bound):
                raise ValueError(f"{name} out of range: {value}")

    def get_reserves(self) -> Tuple[Amount, Amount, int]:
        """Return (reserve0, reserve1, block_timestamp_last)."""
        return self.reserve0, self.reserve1, self.block_timestamp_last

    def get_constant_product(self) -> int:
        """Compute k = reserve0 * reserve1."""
        return self.reserve0 * self.reserve1

    def __repr__(self) -> str:
        return (
            f"PairState(assets=({self.token0[:8]}..., {self.token1[:8]}...), "
            f"reserves=({self.reserve0}, {self.reserve1}), "
            f"t={self.block_timestamp_last})"
        )
