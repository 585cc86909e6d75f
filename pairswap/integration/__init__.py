"""
Integration helpers (persistence) for pairswap pairs
"""

from .pair_snapshot import PairSnapshot, restore_pair, snapshot_from_pair, state_from_snapshot

__all__ = [
    "PairSnapshot",
    "restore_pair",
    "snapshot_from_pair",
    "state_from_snapshot",
]
