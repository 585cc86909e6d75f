"""
Two-asset constant-product pair (imperative shell).

Callers push asset transfers to `pair.address` through the asset ledgers,
then call `mint` / `burn` / `swap`. Each operation reads the pair's real
balances, diffs them against the stored reserves, and commits reserves, LP
supply, oracle accumulators and events together, or not at all.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import replace
from typing import Callable, Iterator, List, Mapping, Optional, Tuple

from ..state.balances import Address, Amount, FungibleLedger
from ..state.lp import LPToken
from ..state.pair import UINT112_MAX, PairState, PairStatus
from .config import PairConfig
from .cpmm import validate_swap_request, verify_swap
from .errors import InvalidRecipient, ReserveOverflow, TransferFailed
from .events import Burn, Mint, PairEvent, Swap, Sync
from .guard import ReentrancyGuard
from .liquidity import compute_burn_amounts, compute_mint_liquidity
from .oracle import update_cumulative_prices


logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def _wall_clock() -> int:
    return int(time.time())


class Pair:
    """
    Settlement core of one constant-product pool.

    The pair is also the LP share ledger: `pair.lp` is an `LPToken` whose
    address is `pair.address`.
    """

    def __init__(
        self,
        token0: FungibleLedger,
        token1: FungibleLedger,
        *,
        address: Address,
        config: Optional[PairConfig] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        if token0.address == token1.address:
            raise ValueError(f"Pair assets must differ: {token0.address}")
        if address in (token0.address, token1.address):
            raise ValueError("Pair address must differ from both asset addresses")
        config = config or PairConfig()
        if config.lock_address in (address, token0.address, token1.address):
            raise ValueError(f"lock_address must not be the pair or an asset: {config.lock_address}")

        self.address = address
        self.token0 = token0
        self.token1 = token1
        self.config = config
        self._clock = clock or _wall_clock
        self.state = PairState(token0=token0.address, token1=token1.address)
        self.lp = LPToken(
            address,
            name=self.config.lp_name,
            symbol=self.config.lp_symbol,
            locked_holders=(self.config.lock_address,),
        )
        self.events: List[PairEvent] = []
        self._guard = ReentrancyGuard()
        # Outgoing transfers of the running operation: (ledger, recipient, amount)
        self._sent: List[Tuple[FungibleLedger, Address, Amount]] = []

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def now(self) -> int:
        return self._clock()

    def get_reserves(self) -> Tuple[Amount, Amount, int]:
        """Return (reserve0, reserve1, block_timestamp_last)."""
        return self.state.get_reserves()

    @property
    def price0_cumulative_last(self) -> int:
        return self.state.price0_cumulative_last

    @property
    def price1_cumulative_last(self) -> int:
        return self.state.price1_cumulative_last

    @property
    def total_supply(self) -> Amount:
        return self.lp.total_supply

    @property
    def status(self) -> PairStatus:
        if self.lp.total_supply == 0:
            return PairStatus.UNINITIALIZED
        return PairStatus.ACTIVE

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @contextmanager
    def _atomic(self, op: str) -> Iterator[None]:
        """
        Hold the guard and undo the pair's own effects if the body raises.

        Pair state, LP shares and events are restored from an entry snapshot.
        Asset ledgers are shared, so only the pair's outgoing transfers are
        reversed; anything pushed to the pair meanwhile stays as surplus.
        """
        with self._guard.hold():
            saved_state = self.state
            saved_lp = self.lp.snapshot()
            saved_events = len(self.events)
            self._sent = []
            try:
                yield
            except Exception as exc:
                self.state = saved_state
                self.lp.restore(saved_lp)
                del self.events[saved_events:]
                self._reverse_sent()
                logger.warning("%s rejected on pair %s: %s", op, self.address, exc)
                raise
            finally:
                self._sent = []

    def _reverse_sent(self) -> None:
        for token, recipient, amount in reversed(self._sent):
            if not token.transfer(recipient, self.address, amount):
                logger.error(
                    "pair %s could not recover %d of %s from %s",
                    self.address, amount, token.address, recipient,
                )

    def _balances(self) -> Tuple[Amount, Amount]:
        return self.token0.balance_of(self.address), self.token1.balance_of(self.address)

    def _safe_transfer(self, token: FungibleLedger, to: Address, amount: Amount) -> None:
        # Journaled before the call: a ledger that raises has already moved the funds.
        self._sent.append((token, to, amount))
        if not token.transfer(self.address, to, amount):
            self._sent.pop()
            raise TransferFailed(f"{token.address}: transfer of {amount} to {to} refused")

    def _update(self, balance0: Amount, balance1: Amount) -> None:
        """Advance the oracle from the stored reserves, then store the new ones."""
        if balance0 > UINT112_MAX or balance1 > UINT112_MAX:
            raise ReserveOverflow(f"balances ({balance0}, {balance1}) exceed uint112")

        now = self.now()
        oracle = update_cumulative_prices(
            reserve0=self.state.reserve0,
            reserve1=self.state.reserve1,
            block_timestamp_last=self.state.block_timestamp_last,
            price0_cumulative_last=self.state.price0_cumulative_last,
            price1_cumulative_last=self.state.price1_cumulative_last,
            now=now,
        )
        self.state = replace(
            self.state,
            reserve0=balance0,
            reserve1=balance1,
            block_timestamp_last=oracle.block_timestamp,
            price0_cumulative_last=oracle.price0_cumulative,
            price1_cumulative_last=oracle.price1_cumulative,
        )
        self.events.append(Sync(reserve0=balance0, reserve1=balance1))

    # ------------------------------------------------------------------
    # Mutating operations
    # ------------------------------------------------------------------

    def mint(self, recipient: Address) -> Amount:
        """
        Mint LP shares for assets pushed to the pair since the last update.

        Returns:
            Liquidity minted to `recipient`

        Raises:
            InsufficientLiquidityMinted: If the deposit is worth zero shares
            ReserveOverflow: If a new reserve would exceed 112 bits
            Locked: If another operation holds the pair
        """
        with self._atomic("mint"):
            reserve0, reserve1, _ = self.get_reserves()
            balance0, balance1 = self._balances()
            amount0 = balance0 - reserve0
            amount1 = balance1 - reserve1

            result = compute_mint_liquidity(
                amount0_in=amount0,
                amount1_in=amount1,
                reserve0=reserve0,
                reserve1=reserve1,
                total_supply=self.lp.total_supply,
                minimum_liquidity=self.config.minimum_liquidity,
            )
            if result.locked:
                self.lp.mint(self.config.lock_address, result.locked)
            self.lp.mint(recipient, result.liquidity)

            self._update(balance0, balance1)
            self.events.append(Mint(recipient=recipient, amount0=amount0, amount1=amount1, liquidity=result.liquidity))

        logger.debug(
            "mint on %s: in=(%d, %d) liquidity=%d supply=%d",
            self.address, amount0, amount1, result.liquidity, self.lp.total_supply,
        )
        return result.liquidity

    def burn(self, recipient: Address) -> Tuple[Amount, Amount]:
        """
        Redeem the LP shares held by the pair itself for both assets.

        Callers first transfer shares to `pair.address` via `pair.lp.transfer`.

        Returns:
            (amount0, amount1) sent to `recipient`

        Raises:
            InsufficientLiquidityBurned: If either payout would be zero
            TransferFailed: If an asset ledger refuses a payout
            Locked: If another operation holds the pair
        """
        with self._atomic("burn"):
            balance0, balance1 = self._balances()
            liquidity = self.lp.balance_of(self.address)

            amount0, amount1 = compute_burn_amounts(
                liquidity=liquidity,
                balance0=balance0,
                balance1=balance1,
                total_supply=self.lp.total_supply,
            )
            self.lp.burn(self.address, liquidity)
            self._safe_transfer(self.token0, recipient, amount0)
            self._safe_transfer(self.token1, recipient, amount1)

            balance0, balance1 = self._balances()
            self._update(balance0, balance1)
            self.events.append(Burn(recipient=recipient, amount0=amount0, amount1=amount1, liquidity=liquidity))

        logger.debug(
            "burn on %s: liquidity=%d out=(%d, %d) supply=%d",
            self.address, liquidity, amount0, amount1, self.lp.total_supply,
        )
        return amount0, amount1

    def swap(self, amount0_out: Amount, amount1_out: Amount, recipient: Address) -> None:
        """
        Send the requested outputs, then verify enough input arrived.

        Inputs may be pushed to the pair before the call or during it (by a
        ledger acting on the outgoing transfer); only the post-transfer
        balances matter.

        Raises:
            InsufficientOutputAmount: If both outputs are zero
            InsufficientLiquidity: If an output is not below its reserve
            InvalidRecipient: If `recipient` is one of the pooled assets
            InsufficientInputAmount: If no net input arrived
            InvalidK: If the fee-adjusted product would decrease
            Locked: If another operation holds the pair
        """
        with self._atomic("swap"):
            reserve0, reserve1, _ = self.get_reserves()
            validate_swap_request(
                amount0_out=amount0_out,
                amount1_out=amount1_out,
                reserve0=reserve0,
                reserve1=reserve1,
            )
            if recipient in (self.token0.address, self.token1.address):
                raise InvalidRecipient(f"recipient {recipient} is a pooled asset")

            if amount0_out > 0:
                self._safe_transfer(self.token0, recipient, amount0_out)
            if amount1_out > 0:
                self._safe_transfer(self.token1, recipient, amount1_out)

            balance0, balance1 = self._balances()
            verification = verify_swap(
                balance0=balance0,
                balance1=balance1,
                reserve0=reserve0,
                reserve1=reserve1,
                amount0_out=amount0_out,
                amount1_out=amount1_out,
            )

            self._update(balance0, balance1)
            self.events.append(
                Swap(
                    recipient=recipient,
                    amount0_in=verification.amount0_in,
                    amount1_in=verification.amount1_in,
                    amount0_out=amount0_out,
                    amount1_out=amount1_out,
                )
            )

        logger.debug(
            "swap on %s: in=(%d, %d) out=(%d, %d) k %d -> %d",
            self.address,
            verification.amount0_in, verification.amount1_in,
            amount0_out, amount1_out,
            verification.k_before, verification.k_after,
        )

    def sync(self) -> None:
        """Force reserves to match the pair's balances. LP shares are untouched."""
        with self._atomic("sync"):
            balance0, balance1 = self._balances()
            self._update(balance0, balance1)
        logger.debug("sync on %s: reserves=(%d, %d)", self.address, balance0, balance1)

    def skim(self, recipient: Address) -> None:
        """Send any balance above the reserves to `recipient`. Reserves are untouched."""
        with self._atomic("skim"):
            reserve0, reserve1, _ = self.get_reserves()
            balance0, balance1 = self._balances()
            excess0 = balance0 - reserve0
            excess1 = balance1 - reserve1
            if excess0 < 0 or excess1 < 0:
                raise ValueError(f"balances ({balance0}, {balance1}) below reserves ({reserve0}, {reserve1})")
            self._safe_transfer(self.token0, recipient, excess0)
            self._safe_transfer(self.token1, recipient, excess1)
        logger.debug("skim on %s: sent (%d, %d) to %s", self.address, excess0, excess1, recipient)

    def load(self, state: PairState, lp_balances: Mapping[Address, Amount]) -> None:
        """Replace pair state and LP balances, e.g. from a persisted snapshot."""
        if (state.token0, state.token1) != (self.token0.address, self.token1.address):
            raise ValueError("snapshot assets do not match this pair")
        with self._atomic("load"):
            self.state = replace(state)
            self.lp.load(lp_balances)

    def __repr__(self) -> str:
        return (
            f"Pair({self.address[:10]}..., reserves=({self.state.reserve0}, {self.state.reserve1}), "
            f"supply={self.lp.total_supply}, status={self.status.value})"
        )
