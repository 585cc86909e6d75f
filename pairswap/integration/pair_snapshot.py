"""
Pair state snapshot encoding.

Goals:
- Deterministic JSON serialization of the persisted pair state (reserves,
  timestamp, price accumulators, LP supply and balances).
- Round-trippable into `PairState` + LP balances.
- Explicit versioning.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

from ..core.pair import Pair
from ..state.canonical import domain_prefix, encode_canonical, sha256_hex
from ..state.pair import PairState


PAIR_SNAPSHOT_VERSION = 1


def _require_str(value: Any, *, name: str, max_len: int = 256) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    if not value:
        raise ValueError(f"{name} must be non-empty")
    if len(value) > max_len:
        raise ValueError(f"{name} too large")
    return value


def _require_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
    return int(value)


@dataclass(frozen=True)
class PairSnapshot:
    """
    Deterministic, versioned snapshot of a pair.

    The commitment is *not* included inside `data` to avoid self-reference.
    """

    version: int
    data: Dict[str, Any]

    def canonical_bytes(self) -> bytes:
        return encode_canonical(self.data)

    def _commitment_payload(self) -> bytes:
        return domain_prefix("pair_snapshot", version=self.version) + self.canonical_bytes()

    def commitment_bytes(self) -> bytes:
        return hashlib.sha256(self._commitment_payload()).digest()

    def commitment_hex(self) -> str:
        return sha256_hex(self._commitment_payload())


def snapshot_from_pair(pair: Pair, *, version: int = PAIR_SNAPSHOT_VERSION) -> PairSnapshot:
    if version != PAIR_SNAPSHOT_VERSION:
        raise ValueError(f"unsupported snapshot version: {version}")

    state = pair.state
    lp_entries = [
        {"holder": holder, "amount": int(amount)}
        for holder, amount in pair.lp.get_all_balances().items()
    ]
    lp_entries.sort(key=lambda e: e["holder"])

    data: Dict[str, Any] = {
        "version": int(version),
        "address": pair.address,
        "token0": state.token0,
        "token1": state.token1,
        "reserve0": int(state.reserve0),
        "reserve1": int(state.reserve1),
        "block_timestamp_last": int(state.block_timestamp_last),
        "price0_cumulative_last": int(state.price0_cumulative_last),
        "price1_cumulative_last": int(state.price1_cumulative_last),
        "lp_total_supply": int(pair.lp.total_supply),
        "lp_balances": lp_entries,
    }
    return PairSnapshot(version=version, data=data)


def state_from_snapshot(
    snapshot: Mapping[str, Any],
    *,
    max_lp_balances: int = 200_000,
) -> Tuple[PairState, Dict[str, int]]:
    """
    Decode and validate a snapshot.

    Returns:
        (PairState, lp_balances)

    Raises:
        TypeError/ValueError: On malformed entries, duplicate holders, or an LP
            supply that differs from the sum of balances
    """
    if not isinstance(snapshot, Mapping):
        raise TypeError("snapshot must be a mapping")

    version = snapshot.get("version", PAIR_SNAPSHOT_VERSION)
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("snapshot.version must be a positive int")
    if version != PAIR_SNAPSHOT_VERSION:
        raise ValueError(f"unsupported snapshot version: {version}")

    state = PairState(
        token0=_require_str(snapshot.get("token0"), name="token0"),
        token1=_require_str(snapshot.get("token1"), name="token1"),
        reserve0=_require_int(snapshot.get("reserve0", 0), name="reserve0"),
        reserve1=_require_int(snapshot.get("reserve1", 0), name="reserve1"),
        block_timestamp_last=_require_int(snapshot.get("block_timestamp_last", 0), name="block_timestamp_last"),
        price0_cumulative_last=_require_int(snapshot.get("price0_cumulative_last", 0), name="price0_cumulative_last"),
        price1_cumulative_last=_require_int(snapshot.get("price1_cumulative_last", 0), name="price1_cumulative_last"),
    )

    lp_entries = snapshot.get("lp_balances")
    if lp_entries is None:
        lp_entries = []
    if not isinstance(lp_entries, list):
        raise TypeError("snapshot.lp_balances must be a list")
    if len(lp_entries) > max_lp_balances:
        raise ValueError(f"too many lp_balances entries: {len(lp_entries)} > {max_lp_balances}")

    lp_balances: Dict[str, int] = {}
    for entry in lp_entries:
        if not isinstance(entry, Mapping):
            raise TypeError("snapshot.lp_balances entries must be objects")
        holder = _require_str(entry.get("holder"), name="lp.holder")
        if holder in lp_balances:
            raise ValueError(f"duplicate lp entry: {holder}")
        lp_balances[holder] = _require_int(entry.get("amount"), name="lp.amount")

    total_supply = _require_int(snapshot.get("lp_total_supply", 0), name="lp_total_supply")
    if total_supply != sum(lp_balances.values()):
        raise ValueError(f"lp_total_supply {total_supply} != sum of lp_balances {sum(lp_balances.values())}")

    return state, lp_balances


def restore_pair(pair: Pair, snapshot: Mapping[str, Any]) -> None:
    """Load a snapshot into an existing pair wired to the same asset ledgers."""
    address = snapshot.get("address") if isinstance(snapshot, Mapping) else None
    if address is not None and address != pair.address:
        raise ValueError(f"snapshot belongs to pair {address}, not {pair.address}")
    state, lp_balances = state_from_snapshot(snapshot)
    pair.load(state, lp_balances)
