"""Exception types for pair operations.

Every failed precondition aborts the whole operation; the pair restores its
entry state before the exception reaches the caller. ``code`` is stable and
safe to match on.
"""

from __future__ import annotations


class PairError(Exception):
    """Base class for rejected pair operations."""

    code = "PAIR_ERROR"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.code)


class InsufficientLiquidityMinted(PairError):
    """Deposit too small to mint any LP shares."""

    code = "INSUFFICIENT_LIQUIDITY_MINTED"


class InsufficientLiquidityBurned(PairError):
    """Burn would pay out zero of at least one asset."""

    code = "INSUFFICIENT_LIQUIDITY_BURNED"


class InsufficientOutputAmount(PairError):
    code = "INSUFFICIENT_OUTPUT_AMOUNT"


class InsufficientLiquidity(PairError):
    """Requested output is not strictly below the reserve."""

    code = "INSUFFICIENT_LIQUIDITY"


class InsufficientInputAmount(PairError):
    code = "INSUFFICIENT_INPUT_AMOUNT"


class InvalidK(PairError):
    """Fee-adjusted constant product would decrease."""

    code = "K"


class InvalidRecipient(PairError):
    """Swap recipient is one of the pooled assets."""

    code = "INVALID_TO"


class ReserveOverflow(PairError):
    """A reserve would not fit in 112 bits."""

    code = "OVERFLOW"


class Locked(PairError):
    """A mutating operation is already in progress on this pair."""

    code = "LOCKED"


class TransferFailed(PairError):
    """The asset ledger refused an outgoing transfer."""

    code = "TRANSFER_FAILED"
