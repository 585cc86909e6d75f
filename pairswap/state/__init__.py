"""
State management for pairswap pairs
"""

from .balances import ZERO_ADDRESS, FungibleLedger, Token
from .lp import LPToken
from .pair import PairState, PairStatus

__all__ = [
    "ZERO_ADDRESS",
    "FungibleLedger",
    "Token",
    "LPToken",
    "PairState",
    "PairStatus",
]
