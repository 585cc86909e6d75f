"""
Constant Product Market Maker (CPMM) invariant checks and quotes.

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic / Deterministic Rounding
- Time Complexity: O(1) per swap
- Invariant: after each swap,
      (balance0*1000 - amount0_in*3) * (balance1*1000 - amount1_in*3)
          >= reserve0 * reserve1 * 1000**2
  i.e. the product of reserves net of a 0.3% input fee never decreases.

The pair executes swaps optimistically (outputs first, verification second);
this module holds the verification half and the single-pair quote helpers
callers use to size their inputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..state.balances import Amount
from .errors import (
    InsufficientInputAmount,
    InsufficientLiquidity,
    InsufficientOutputAmount,
    InvalidK,
)


# 0.3% fee on inputs, expressed per mille
FEE_NUMERATOR = 3
FEE_DENOMINATOR = 1000


def _require_amount(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")


@dataclass(frozen=True)
class SwapVerification:
    amount0_in: Amount
    amount1_in: Amount
    k_before: int
    k_after: int


def validate_swap_request(
    *,
    amount0_out: Amount,
    amount1_out: Amount,
    reserve0: Amount,
    reserve1: Amount,
) -> None:
    """
    Check requested outputs before anything is transferred.

    Raises:
        InsufficientOutputAmount: If neither output is positive
        InsufficientLiquidity: If an output is not strictly below its reserve
    """
    _require_amount("amount0_out", amount0_out)
    _require_amount("amount1_out", amount1_out)
    if amount0_out == 0 and amount1_out == 0:
        raise InsufficientOutputAmount()
    if amount0_out >= reserve0 or amount1_out >= reserve1:
        raise InsufficientLiquidity(
            f"requested ({amount0_out}, {amount1_out}) against reserves ({reserve0}, {reserve1})"
        )


def compute_amounts_in(
    *,
    balance0: Amount,
    balance1: Amount,
    reserve0: Amount,
    reserve1: Amount,
    amount0_out: Amount,
    amount1_out: Amount,
) -> Tuple[Amount, Amount]:
    """
    Derive net inputs from post-transfer balances.

        amount_in = balance - (reserve - amount_out)   if positive, else 0
    """
    expected0 = reserve0 - amount0_out
    expected1 = reserve1 - amount1_out
    amount0_in = balance0 - expected0 if balance0 > expected0 else 0
    amount1_in = balance1 - expected1 if balance1 > expected1 else 0
    return amount0_in, amount1_in


def verify_swap(
    *,
    balance0: Amount,
    balance1: Amount,
    reserve0: Amount,
    reserve1: Amount,
    amount0_out: Amount,
    amount1_out: Amount,
) -> SwapVerification:
    """
    Verify a swap against the fee-adjusted constant product.

    Args:
        balance0: Pair's balance of token0 after outputs were sent
        balance1: Pair's balance of token1 after outputs were sent
        reserve0: Reserve of token0 before the swap
        reserve1: Reserve of token1 before the swap
        amount0_out: token0 sent out
        amount1_out: token1 sent out

    Returns:
        SwapVerification with the derived inputs and raw k before/after

    Raises:
        InsufficientInputAmount: If no net input arrived
        InvalidK: If the fee-adjusted product would decrease
    """
    amount0_in, amount1_in = compute_amounts_in(
        balance0=balance0,
        balance1=balance1,
        reserve0=reserve0,
        reserve1=reserve1,
        amount0_out=amount0_out,
        amount1_out=amount1_out,
    )
    if amount0_in == 0 and amount1_in == 0:
        raise InsufficientInputAmount()

    balance0_adjusted = balance0 * FEE_DENOMINATOR - amount0_in * FEE_NUMERATOR
    balance1_adjusted = balance1 * FEE_DENOMINATOR - amount1_in * FEE_NUMERATOR
    if balance0_adjusted * balance1_adjusted < reserve0 * reserve1 * FEE_DENOMINATOR**2:
        raise InvalidK(
            f"adjusted product {balance0_adjusted * balance1_adjusted} "
            f"< {reserve0 * reserve1 * FEE_DENOMINATOR**2}"
        )

    return SwapVerification(
        amount0_in=amount0_in,
        amount1_in=amount1_in,
        k_before=reserve0 * reserve1,
        k_after=balance0 * balance1,
    )


def quote(amount_a: Amount, reserve_a: Amount, reserve_b: Amount) -> Amount:
    """Equivalent amount of asset B for `amount_a` at the current reserve ratio (no fee)."""
    _require_amount("amount_a", amount_a)
    if amount_a == 0:
        raise InsufficientInputAmount("amount_a must be positive")
    if reserve_a <= 0 or reserve_b <= 0:
        raise InsufficientLiquidity()
    return (amount_a * reserve_b) // reserve_a


def get_amount_out(amount_in: Amount, reserve_in: Amount, reserve_out: Amount) -> Amount:
    """
    Maximum output for an exact input, net of the 0.3% fee (floor rounding).

        amount_out = floor(amount_in*997*reserve_out / (reserve_in*1000 + amount_in*997))
    """
    _require_amount("amount_in", amount_in)
    if amount_in == 0:
        raise InsufficientInputAmount()
    if reserve_in <= 0 or reserve_out <= 0:
        raise InsufficientLiquidity()
    amount_in_with_fee = amount_in * (FEE_DENOMINATOR - FEE_NUMERATOR)
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * FEE_DENOMINATOR + amount_in_with_fee
    return numerator // denominator


def get_amount_in(amount_out: Amount, reserve_in: Amount, reserve_out: Amount) -> Amount:
    """
    Minimum input for an exact output, including the 0.3% fee (rounded up).

        amount_in = floor(reserve_in*amount_out*1000 / ((reserve_out - amount_out)*997)) + 1
    """
    _require_amount("amount_out", amount_out)
    if amount_out == 0:
        raise InsufficientOutputAmount()
    if reserve_in <= 0 or reserve_out <= 0 or amount_out >= reserve_out:
        raise InsufficientLiquidity()
    numerator = reserve_in * amount_out * FEE_DENOMINATOR
    denominator = (reserve_out - amount_out) * (FEE_DENOMINATOR - FEE_NUMERATOR)
    return numerator // denominator + 1
