"""
TWAP price oracle kernel.

This module is intentionally small and pure:
- `update_cumulative_prices` is the accumulator step every reserve-mutating
  pair operation runs before overwriting reserves.
- The consumer helpers compute counterfactual accumulators and time-weighted
  averages from two observations. Averages are always derived from
  *differences* of accumulator reads, so wraparound is harmless.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from ..state.pair import UINT32_MOD
from .uq112x112 import UINT224_MASK, UQ112x112, accumulate, wrapping_sub

if TYPE_CHECKING:
    from .pair import Pair


@dataclass(frozen=True)
class OracleUpdate:
    """Post-update oracle fields of a pair."""

    price0_cumulative: int
    price1_cumulative: int
    block_timestamp: int


@dataclass(frozen=True)
class Observation:
    """Accumulator values read at `timestamp` (mod 2^32)."""

    timestamp: int
    price0_cumulative: int
    price1_cumulative: int


def current_block_timestamp(now: int) -> int:
    """Truncate a clock reading to the uint32 timestamp domain."""
    if not isinstance(now, int) or isinstance(now, bool):
        raise TypeError("now must be an int")
    if now < 0:
        raise ValueError(f"now must be non-negative: {now}")
    return now % UINT32_MOD


def update_cumulative_prices(
    *,
    reserve0: int,
    reserve1: int,
    block_timestamp_last: int,
    price0_cumulative_last: int,
    price1_cumulative_last: int,
    now: int,
) -> OracleUpdate:
    """
    Advance both price accumulators by the time elapsed since the last update.

    Accumulation happens only when time has passed and both reserves are
    non-zero:
        price0_cumulative += (reserve1 / reserve0) * elapsed   (UQ112x112)
        price1_cumulative += (reserve0 / reserve1) * elapsed   (UQ112x112)

    Elapsed time is computed modulo 2^32, so a timestamp wrap between two
    updates still yields the true interval.
    """
    block_timestamp = current_block_timestamp(now)
    elapsed = (block_timestamp - block_timestamp_last) % UINT32_MOD

    price0_cumulative = price0_cumulative_last
    price1_cumulative = price1_cumulative_last
    if elapsed > 0 and reserve0 != 0 and reserve1 != 0:
        price0 = UQ112x112.encode(reserve1).uqdiv(reserve0)
        price1 = UQ112x112.encode(reserve0).uqdiv(reserve1)
        price0_cumulative = accumulate(price0_cumulative, price0, elapsed)
        price1_cumulative = accumulate(price1_cumulative, price1, elapsed)

    return OracleUpdate(
        price0_cumulative=price0_cumulative,
        price1_cumulative=price1_cumulative,
        block_timestamp=block_timestamp,
    )


def current_cumulative_prices(pair: "Pair", now: Optional[int] = None) -> Tuple[int, int, int]:
    """
    Return (price0_cumulative, price1_cumulative, block_timestamp) as of `now`.

    If the pair has not been touched since `now`, the accumulators are
    advanced counterfactually from the stored reserves. The pair itself is
    not mutated.
    """
    if now is None:
        now = pair.now()
    reserve0, reserve1, block_timestamp_last = pair.get_reserves()
    update = update_cumulative_prices(
        reserve0=reserve0,
        reserve1=reserve1,
        block_timestamp_last=block_timestamp_last,
        price0_cumulative_last=pair.price0_cumulative_last,
        price1_cumulative_last=pair.price1_cumulative_last,
        now=now,
    )
    return update.price0_cumulative, update.price1_cumulative, update.block_timestamp


def observe(pair: "Pair", now: Optional[int] = None) -> Observation:
    """Take an observation of a pair's accumulators as of `now`."""
    price0_cumulative, price1_cumulative, timestamp = current_cumulative_prices(pair, now)
    return Observation(
        timestamp=timestamp,
        price0_cumulative=price0_cumulative,
        price1_cumulative=price1_cumulative,
    )


def average_price(cumulative_start: int, cumulative_end: int, elapsed: int) -> UQ112x112:
    """Time-weighted average price over `elapsed` seconds between two accumulator reads."""
    if not isinstance(elapsed, int) or isinstance(elapsed, bool):
        raise TypeError("elapsed must be an int")
    if elapsed <= 0:
        raise ValueError(f"elapsed must be positive: {elapsed}")
    return UQ112x112((wrapping_sub(cumulative_end, cumulative_start) // elapsed) & UINT224_MASK)


def average_prices(start: Observation, end: Observation) -> Tuple[UQ112x112, UQ112x112]:
    """
    Average (price0, price1) between two observations.

    Raises:
        ValueError: If no time elapsed between the observations
    """
    elapsed = (end.timestamp - start.timestamp) % UINT32_MOD
    return (
        average_price(start.price0_cumulative, end.price0_cumulative, elapsed),
        average_price(start.price1_cumulative, end.price1_cumulative, elapsed),
    )
