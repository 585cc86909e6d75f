"""
pairswap: settlement core of a two-asset constant-product liquidity pool.
"""

from .core import Pair, PairConfig
from .state import LPToken, PairState, PairStatus, Token

__version__ = "0.1.0"

__all__ = [
    "Pair",
    "PairConfig",
    "LPToken",
    "PairState",
    "PairStatus",
    "Token",
]
