"""
LP share accounting: mint and burn amounts.

Pure integer math. The pair derives the deposited amounts from its real
balances and hands them here; nothing in this module touches a ledger.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from ..state.balances import Amount
from .errors import InsufficientLiquidityBurned, InsufficientLiquidityMinted


# LP units locked forever on the first deposit
MINIMUM_LIQUIDITY = 1000


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


@dataclass(frozen=True)
class MintResult:
    liquidity: Amount
    locked: Amount
    new_total_supply: Amount


def compute_mint_liquidity(
    *,
    amount0_in: Amount,
    amount1_in: Amount,
    reserve0: Amount,
    reserve1: Amount,
    total_supply: Amount,
    minimum_liquidity: Amount = MINIMUM_LIQUIDITY,
) -> MintResult:
    """
    Compute LP shares for a deposit of (amount0_in, amount1_in).

    For the first deposit (total_supply == 0):
        liquidity = isqrt(amount0_in * amount1_in) - minimum_liquidity
        locked = minimum_liquidity

    For subsequent deposits:
        liquidity = min(amount0_in * total_supply // reserve0,
                        amount1_in * total_supply // reserve1)

    The minimum only credits the scarcer side of an unbalanced deposit; the
    surplus accrues to existing holders.

    Raises:
        ValueError: If a deposited amount is negative
        InsufficientLiquidityMinted: If no shares would be minted
    """
    for name, v in (
        ("amount0_in", amount0_in),
        ("amount1_in", amount1_in),
        ("reserve0", reserve0),
        ("reserve1", reserve1),
        ("total_supply", total_supply),
        ("minimum_liquidity", minimum_liquidity),
    ):
        _require_int(name, v)

    if amount0_in < 0 or amount1_in < 0:
        raise ValueError(f"balances are below reserves: ({amount0_in}, {amount1_in})")
    if reserve0 < 0 or reserve1 < 0 or total_supply < 0:
        raise ValueError("reserves and total_supply must be non-negative")

    if total_supply == 0:
        # Integer sqrt: float sqrt loses precision above 2**53.
        liquidity = math.isqrt(amount0_in * amount1_in) - minimum_liquidity
        locked = minimum_liquidity
    else:
        if reserve0 == 0 or reserve1 == 0:
            raise InsufficientLiquidityMinted("cannot price a deposit against an empty reserve")
        liquidity = min(
            (amount0_in * total_supply) // reserve0,
            (amount1_in * total_supply) // reserve1,
        )
        locked = 0

    if liquidity <= 0:
        raise InsufficientLiquidityMinted()

    return MintResult(
        liquidity=liquidity,
        locked=locked,
        new_total_supply=total_supply + locked + liquidity,
    )


def compute_burn_amounts(
    *,
    liquidity: Amount,
    balance0: Amount,
    balance1: Amount,
    total_supply: Amount,
) -> Tuple[Amount, Amount]:
    """
    Compute the assets paid out for burning `liquidity` shares.

    Formula (floor rounding):
        amount0 = liquidity * balance0 // total_supply
        amount1 = liquidity * balance1 // total_supply

    Balances, not reserves, are used so any un-synced surplus is shared.

    Raises:
        ValueError: If liquidity exceeds total_supply
        InsufficientLiquidityBurned: If either payout would be zero
    """
    for name, v in (
        ("liquidity", liquidity),
        ("balance0", balance0),
        ("balance1", balance1),
        ("total_supply", total_supply),
    ):
        _require_int(name, v)
        if v < 0:
            raise ValueError(f"{name} must be non-negative: {v}")

    if total_supply == 0:
        raise InsufficientLiquidityBurned("pair has no LP supply")
    if liquidity > total_supply:
        raise ValueError(f"Cannot burn more LP than supply: {liquidity} > {total_supply}")

    amount0 = (liquidity * balance0) // total_supply
    amount1 = (liquidity * balance1) // total_supply
    if amount0 == 0 or amount1 == 0:
        raise InsufficientLiquidityBurned()
    return amount0, amount1
