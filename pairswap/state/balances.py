"""
Fungible asset ledger used by the pair as its external collaborator.

Implements Token[holder] -> Amount for a single asset. The pair only relies on
the `FungibleLedger` contract; `Token` is the in-memory reference ledger.
"""

from __future__ import annotations

from typing import Dict, Protocol, runtime_checkable


# Type aliases
Address = str  # 0x-prefixed 20-byte hex string
Amount = int  # Non-negative integer (arbitrary precision)

ZERO_ADDRESS = "0x" + "00" * 20


@runtime_checkable
class FungibleLedger(Protocol):
    """
    Transfer contract shared by both pooled assets and the LP share.

    A ledger may back many pairs and holders at once, so the pair never
    restores it wholesale; an aborted operation sends back what the pair paid out.
    """

    address: Address

    def balance_of(self, holder: Address) -> Amount:
        ...

    def transfer(self, sender: Address, to: Address, amount: Amount) -> bool:
        ...


def _require_amount(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")


class Token:
    """
    Deterministic single-asset balance table mapping holder -> amount.

    Notes:
    - Balances are always non-negative.
    - Zero balances are omitted to keep the table sparse.
    - `transfer` reports an insufficient balance by returning False, the way
      the ledger contract expects; malformed amounts raise.
    """

    def __init__(self, address: Address, symbol: str = "") -> None:
        if not isinstance(address, str) or not address:
            raise ValueError("token address must be a non-empty string")
        self.address = address
        self.symbol = symbol
        self.total_supply: Amount = 0
        self._balances: Dict[Address, Amount] = {}

    def balance_of(self, holder: Address) -> Amount:
        """Get balance for holder. Returns 0 if not found."""
        return self._balances.get(holder, 0)

    def _set(self, holder: Address, amount: Amount) -> None:
        if amount == 0:
            self._balances.pop(holder, None)
        else:
            self._balances[holder] = amount

    def mint(self, to: Address, amount: Amount) -> None:
        """Credit newly issued units to `to` (used to fund holders)."""
        _require_amount("amount", amount)
        self._set(to, self.balance_of(to) + amount)
        self.total_supply += amount

    def transfer(self, sender: Address, to: Address, amount: Amount) -> bool:
        """
        Move `amount` from `sender` to `to`.

        Returns:
            True on success, False if `sender` holds less than `amount`

        Raises:
            TypeError/ValueError: If amount is not a non-negative int
        """
        _require_amount("amount", amount)
        current = self.balance_of(sender)
        if current < amount:
            return False
        self._set(sender, current - amount)
        self._set(to, self.balance_of(to) + amount)
        return True

    def get_all_balances(self) -> Dict[Address, Amount]:
        """Return all non-zero balances."""
        return dict(self._balances)

    def __repr__(self) -> str:
        label = self.symbol or self.address[:10]
        return f"Token({label}, {len(self._balances)} holders)"
