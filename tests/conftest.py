from __future__ import annotations

import pytest

from pairswap.core.pair import Pair
from pairswap.state.balances import Token


PAIR = "0x" + "cc" * 20
ALICE = "0x" + "a1" * 20
BOB = "0x" + "b0" * 20
CAROL = "0x" + "c4" * 20

E18 = 10**18


class ManualClock:
    def __init__(self, now: int = 1_700_000_000) -> None:
        self.value = now

    def __call__(self) -> int:
        return self.value

    def advance(self, seconds: int) -> None:
        self.value += seconds


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def token0() -> Token:
    return Token("0x" + "01" * 20, "TK0")


@pytest.fixture
def token1() -> Token:
    return Token("0x" + "02" * 20, "TK1")


@pytest.fixture
def pair(token0: Token, token1: Token, clock: ManualClock) -> Pair:
    return Pair(token0, token1, address=PAIR, clock=clock)


def push(token: Token, holder: str, amount: int) -> None:
    """Fund `holder` and have them transfer `amount` into the pair."""
    token.mint(holder, amount)
    assert token.transfer(holder, PAIR, amount)


def add_liquidity(pair: Pair, amount0: int, amount1: int, recipient: str = ALICE) -> int:
    push(pair.token0, recipient, amount0)
    push(pair.token1, recipient, amount1)
    return pair.mint(recipient)
