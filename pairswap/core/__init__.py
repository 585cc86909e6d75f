"""
Core pair algorithms
"""

from .config import PairConfig, load_config
from .cpmm import get_amount_in, get_amount_out, quote, verify_swap
from .errors import (
    InsufficientInputAmount,
    InsufficientLiquidity,
    InsufficientLiquidityBurned,
    InsufficientLiquidityMinted,
    InsufficientOutputAmount,
    InvalidK,
    InvalidRecipient,
    Locked,
    PairError,
    ReserveOverflow,
    TransferFailed,
)
from .liquidity import MINIMUM_LIQUIDITY, compute_burn_amounts, compute_mint_liquidity
from .oracle import Observation, average_price, average_prices, current_cumulative_prices, observe
from .pair import Pair
from .uq112x112 import Q112, UQ112x112

__all__ = [
    "PairConfig",
    "load_config",
    "get_amount_in",
    "get_amount_out",
    "quote",
    "verify_swap",
    "InsufficientInputAmount",
    "InsufficientLiquidity",
    "InsufficientLiquidityBurned",
    "InsufficientLiquidityMinted",
    "InsufficientOutputAmount",
    "InvalidK",
    "InvalidRecipient",
    "Locked",
    "PairError",
    "ReserveOverflow",
    "TransferFailed",
    "MINIMUM_LIQUIDITY",
    "compute_burn_amounts",
    "compute_mint_liquidity",
    "Observation",
    "average_price",
    "average_prices",
    "current_cumulative_prices",
    "observe",
    "Pair",
    "Q112",
    "UQ112x112",
]
