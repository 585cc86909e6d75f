# [TESTER] v1

from __future__ import annotations

import pytest

from pairswap.core.cpmm import (
    compute_amounts_in,
    get_amount_in,
    get_amount_out,
    quote,
    validate_swap_request,
    verify_swap,
)
from pairswap.core.errors import (
    InsufficientInputAmount,
    InsufficientLiquidity,
    InsufficientOutputAmount,
    InvalidK,
)


E18 = 10**18


def test_verify_swap_accepts_exact_quote() -> None:
    reserve0, reserve1 = 5 * E18, 10 * E18
    amount_in = E18
    amount_out = get_amount_out(amount_in, reserve0, reserve1)

    res = verify_swap(
        balance0=reserve0 + amount_in,
        balance1=reserve1 - amount_out,
        reserve0=reserve0,
        reserve1=reserve1,
        amount0_out=0,
        amount1_out=amount_out,
    )

    assert (res.amount0_in, res.amount1_in) == (amount_in, 0)
    assert res.k_after > res.k_before


def test_verify_swap_rejects_one_unit_over_quote() -> None:
    reserve0, reserve1 = 5 * E18, 10 * E18
    amount_in = E18
    amount_out = get_amount_out(amount_in, reserve0, reserve1) + 1

    with pytest.raises(InvalidK):
        verify_swap(
            balance0=reserve0 + amount_in,
            balance1=reserve1 - amount_out,
            reserve0=reserve0,
            reserve1=reserve1,
            amount0_out=0,
            amount1_out=amount_out,
        )


def test_verify_swap_requires_input() -> None:
    with pytest.raises(InsufficientInputAmount):
        verify_swap(balance0=100, balance1=90, reserve0=100, reserve1=100, amount0_out=0, amount1_out=10)


def test_amounts_in_net_out_requested_outputs() -> None:
    # Flash-style: take 10 of asset0 out, return 12 of asset0 and nothing else.
    assert compute_amounts_in(
        balance0=102, balance1=100, reserve0=100, reserve1=100, amount0_out=10, amount1_out=0
    ) == (12, 0)
    # Balance below the expected post-output level counts as zero input.
    assert compute_amounts_in(
        balance0=80, balance1=105, reserve0=100, reserve1=100, amount0_out=10, amount1_out=0
    ) == (0, 5)


def test_same_asset_repayment_pays_fee() -> None:
    reserve0, reserve1 = 1000 * E18, 1000 * E18
    amount_out = E18
    # Returning exactly what was taken leaves no room for the fee.
    with pytest.raises(InvalidK):
        verify_swap(
            balance0=reserve0,
            balance1=reserve1,
            reserve0=reserve0,
            reserve1=reserve1,
            amount0_out=amount_out,
            amount1_out=0,
        )
    # Repaying out + ~0.3% succeeds.
    repay = amount_out * 1000 // 997 + 1
    res = verify_swap(
        balance0=reserve0 - amount_out + repay,
        balance1=reserve1,
        reserve0=reserve0,
        reserve1=reserve1,
        amount0_out=amount_out,
        amount1_out=0,
    )
    assert res.amount0_in == repay


@pytest.mark.parametrize(
    ("amount0_out", "amount1_out", "error"),
    [
        (0, 0, InsufficientOutputAmount),
        (100, 0, InsufficientLiquidity),
        (0, 101, InsufficientLiquidity),
    ],
)
def test_validate_swap_request(amount0_out: int, amount1_out: int, error: type) -> None:
    with pytest.raises(error):
        validate_swap_request(amount0_out=amount0_out, amount1_out=amount1_out, reserve0=100, reserve1=100)


def test_validate_swap_request_rejects_negative() -> None:
    with pytest.raises(ValueError):
        validate_swap_request(amount0_out=-1, amount1_out=5, reserve0=100, reserve1=100)


def test_get_amount_out_known_value() -> None:
    assert get_amount_out(E18, 10 * E18, 5 * E18) == 453_305_446_940_074_565


def test_get_amount_in_round_trips_through_amount_out() -> None:
    reserve_in, reserve_out = 7 * E18, 3 * E18
    amount_out = 12345 * 10**12
    amount_in = get_amount_in(amount_out, reserve_in, reserve_out)
    assert get_amount_out(amount_in, reserve_in, reserve_out) >= amount_out
    assert get_amount_out(amount_in - 1, reserve_in, reserve_out) <= amount_out


def test_quote_helpers_reject_degenerate_inputs() -> None:
    with pytest.raises(InsufficientInputAmount):
        get_amount_out(0, 1, 1)
    with pytest.raises(InsufficientLiquidity):
        get_amount_out(1, 0, 1)
    with pytest.raises(InsufficientOutputAmount):
        get_amount_in(0, 1, 1)
    with pytest.raises(InsufficientLiquidity):
        get_amount_in(10, 100, 10)
    with pytest.raises(InsufficientInputAmount):
        quote(0, 1, 1)
    assert quote(10, 100, 300) == 30
