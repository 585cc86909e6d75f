"""Property tests for the pair: fuzz random operation sequences with Hypothesis.

After every accepted or rejected step the pair must keep reserves equal to its
balances (no donations are left pending here), LP supply equal to the sum of
LP balances, and a product of reserves that never falls across a swap.
"""

from __future__ import annotations

import hypothesis.strategies as st
from hypothesis import given, settings

from conftest import ALICE, BOB, PAIR, ManualClock, push

from pairswap.core.cpmm import get_amount_out
from pairswap.core.errors import PairError
from pairswap.core.pair import Pair
from pairswap.state.balances import ZERO_ADDRESS, Token


amounts = st.integers(min_value=1, max_value=10**24)

steps = st.lists(
    st.one_of(
        st.tuples(st.just("mint"), amounts, amounts),
        st.tuples(st.just("swap0"), amounts, st.just(0)),
        st.tuples(st.just("swap1"), amounts, st.just(0)),
        st.tuples(st.just("burn"), st.integers(min_value=1, max_value=100), st.just(0)),
        st.tuples(st.just("sync"), st.integers(min_value=0, max_value=3600), st.just(0)),
    ),
    max_size=25,
)


def _fresh_pair(clock: ManualClock) -> Pair:
    return Pair(Token("0x" + "01" * 20), Token("0x" + "02" * 20), address=PAIR, clock=clock)


def _assert_consistent(pair: Pair) -> None:
    reserve0, reserve1, _ = pair.get_reserves()
    assert (reserve0, reserve1) == (pair.token0.balance_of(PAIR), pair.token1.balance_of(PAIR))
    assert pair.lp.verify_supply()
    if pair.total_supply:
        assert pair.lp.balance_of(ZERO_ADDRESS) == pair.config.minimum_liquidity


def _apply(pair: Pair, clock: ManualClock, op: str, a: int, b: int) -> None:
    reserve0, reserve1, _ = pair.get_reserves()
    if op == "mint":
        push(pair.token0, ALICE, a)
        push(pair.token1, ALICE, b)
        try:
            pair.mint(ALICE)
        except PairError:
            # Rejected deposits stay on the pair as surplus; hand them back.
            pair.skim(ALICE)
    elif op in ("swap0", "swap1"):
        if reserve0 == 0 or reserve1 == 0:
            return
        token_in = pair.token0 if op == "swap0" else pair.token1
        reserve_in, reserve_out = (reserve0, reserve1) if op == "swap0" else (reserve1, reserve0)
        out = get_amount_out(a, reserve_in, reserve_out)
        push(token_in, BOB, a)
        k_before = reserve0 * reserve1
        try:
            if op == "swap0":
                pair.swap(0, out, BOB)
            else:
                pair.swap(out, 0, BOB)
        except PairError:
            pair.skim(BOB)
        else:
            new0, new1, _ = pair.get_reserves()
            assert new0 * new1 > k_before
    elif op == "burn":
        held = pair.lp.balance_of(ALICE)
        share = held * a // 100
        if share == 0:
            return
        assert pair.lp.transfer(ALICE, PAIR, share)
        try:
            pair.burn(ALICE)
        except PairError:
            assert pair.lp.transfer(PAIR, ALICE, share)
    elif op == "sync":
        supply = pair.total_supply
        clock.advance(a)
        pair.sync()
        assert pair.total_supply == supply


@settings(max_examples=200, deadline=None)
@given(steps=steps)
def test_random_operation_sequences_keep_pair_consistent(steps) -> None:
    clock = ManualClock()
    pair = _fresh_pair(clock)
    for op, a, b in steps:
        _apply(pair, clock, op, a, b)
        _assert_consistent(pair)


@settings(max_examples=200, deadline=None)
@given(amount0=amounts, amount1=amounts, other0=amounts, other1=amounts)
def test_deposit_then_withdraw_never_returns_more(amount0: int, amount1: int, other0: int, other1: int) -> None:
    clock = ManualClock()
    pair = _fresh_pair(clock)
    push(pair.token0, BOB, other0)
    push(pair.token1, BOB, other1)
    try:
        pair.mint(BOB)
    except PairError:
        return

    push(pair.token0, ALICE, amount0)
    push(pair.token1, ALICE, amount1)
    try:
        liquidity = pair.mint(ALICE)
    except PairError:
        return

    assert pair.lp.transfer(ALICE, PAIR, liquidity)
    try:
        out0, out1 = pair.burn(ALICE)
    except PairError:
        return

    assert out0 <= amount0
    assert out1 <= amount1
    _assert_consistent(pair)
