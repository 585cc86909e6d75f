"""Event records appended to ``Pair.events`` by committed operations.

Events of an aborted operation are rolled back with the rest of its effects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..state.balances import Address, Amount


@dataclass(frozen=True)
class Sync:
    reserve0: Amount
    reserve1: Amount


@dataclass(frozen=True)
class Mint:
    recipient: Address
    amount0: Amount
    amount1: Amount
    liquidity: Amount


@dataclass(frozen=True)
class Burn:
    recipient: Address
    amount0: Amount
    amount1: Amount
    liquidity: Amount


@dataclass(frozen=True)
class Swap:
    recipient: Address
    amount0_in: Amount
    amount1_in: Amount
    amount0_out: Amount
    amount1_out: Amount


PairEvent = Union[Sync, Mint, Burn, Swap]
