# [TESTER] v1

from __future__ import annotations

import pytest

from pairswap.core.errors import InsufficientLiquidityBurned, InsufficientLiquidityMinted
from pairswap.core.liquidity import MINIMUM_LIQUIDITY, compute_burn_amounts, compute_mint_liquidity


def test_first_mint_uses_integer_isqrt() -> None:
    # Pick values where float sqrt would be wrong due to precision loss.
    n = (1 << 70) + 12345
    res = compute_mint_liquidity(amount0_in=n, amount1_in=n, reserve0=0, reserve1=0, total_supply=0)
    assert res.liquidity == n - MINIMUM_LIQUIDITY
    assert res.locked == MINIMUM_LIQUIDITY
    assert res.new_total_supply == n


def test_first_mint_must_exceed_lock() -> None:
    with pytest.raises(InsufficientLiquidityMinted):
        compute_mint_liquidity(amount0_in=1000, amount1_in=1000, reserve0=0, reserve1=0, total_supply=0)
    res = compute_mint_liquidity(amount0_in=1001, amount1_in=1001, reserve0=0, reserve1=0, total_supply=0)
    assert res.liquidity == 1


def test_subsequent_mint_takes_minimum_ratio() -> None:
    res = compute_mint_liquidity(
        amount0_in=50, amount1_in=400, reserve0=1000, reserve1=2000, total_supply=3000
    )
    assert res.liquidity == min(50 * 3000 // 1000, 400 * 3000 // 2000)
    assert res.locked == 0


def test_subsequent_mint_rounding_to_zero_is_rejected() -> None:
    with pytest.raises(InsufficientLiquidityMinted):
        compute_mint_liquidity(amount0_in=1, amount1_in=0, reserve0=10**6, reserve1=10**6, total_supply=10**3)


def test_mint_rejects_negative_deposit() -> None:
    with pytest.raises(ValueError, match="below reserves"):
        compute_mint_liquidity(amount0_in=-1, amount1_in=10, reserve0=5, reserve1=5, total_supply=5)


def test_mint_rejects_bool_amounts() -> None:
    with pytest.raises(TypeError):
        compute_mint_liquidity(amount0_in=True, amount1_in=10, reserve0=0, reserve1=0, total_supply=0)


def test_burn_is_proportional_and_floored() -> None:
    assert compute_burn_amounts(liquidity=1, balance0=10, balance1=21, total_supply=3) == (3, 7)


def test_burn_rejects_zero_payout() -> None:
    with pytest.raises(InsufficientLiquidityBurned):
        compute_burn_amounts(liquidity=1, balance0=1, balance1=10**6, total_supply=10**3)
    with pytest.raises(InsufficientLiquidityBurned):
        compute_burn_amounts(liquidity=0, balance0=10, balance1=10, total_supply=10)


def test_burn_rejects_more_than_supply() -> None:
    with pytest.raises(ValueError, match="supply"):
        compute_burn_amounts(liquidity=11, balance0=10, balance1=10, total_supply=10)
