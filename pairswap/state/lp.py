"""
LP share ledger for a single pair.

LP shares are a fungible asset with the same transfer contract as the pooled
assets. Supply only changes through `mint` / `burn`, which the pair calls.
"""

from __future__ import annotations

from typing import Dict, Iterable, Mapping

from .balances import Address, Amount


class LPToken:
    """
    Deterministic LP balance table mapping holder -> lp_amount.

    Notes:
    - LP balances are always non-negative.
    - Zero balances are omitted to keep the table sparse.
    - `total_supply` always equals the sum of all balances.
    - Holders listed in `locked_holders` can receive shares but never send or
      burn them.
    """

    def __init__(
        self,
        address: Address,
        *,
        name: str = "",
        symbol: str = "",
        locked_holders: Iterable[Address] = (),
    ) -> None:
        self.address = address
        self.name = name
        self.symbol = symbol
        self.locked_holders = frozenset(locked_holders)
        self.total_supply: Amount = 0
        self._balances: Dict[Address, Amount] = {}

    def balance_of(self, holder: Address) -> Amount:
        """Get LP balance for holder. Returns 0 if not found."""
        return self._balances.get(holder, 0)

    def _set(self, holder: Address, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"LP balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop(holder, None)
        else:
            self._balances[holder] = amount

    def mint(self, to: Address, amount: Amount) -> None:
        """Issue `amount` new shares to `to`."""
        if amount < 0:
            raise ValueError(f"Mint amount must be non-negative: {amount}")
        self._set(to, self.balance_of(to) + amount)
        self.total_supply += amount

    def burn(self, holder: Address, amount: Amount) -> None:
        """Destroy `amount` shares held by `holder`."""
        if amount < 0:
            raise ValueError(f"Burn amount must be non-negative: {amount}")
        if holder in self.locked_holders:
            raise ValueError(f"LP shares of locked holder {holder} cannot be burned")
        current = self.balance_of(holder)
        if current < amount:
            raise ValueError(f"Insufficient LP balance: {current} < {amount}")
        self._set(holder, current - amount)
        self.total_supply -= amount

    def transfer(self, sender: Address, to: Address, amount: Amount) -> bool:
        """Move shares between holders. Returns False if the move is not allowed."""
        if not isinstance(amount, int) or isinstance(amount, bool):
            raise TypeError("amount must be an int")
        if amount < 0:
            raise ValueError(f"Transfer amount must be non-negative: {amount}")
        if sender in self.locked_holders:
            return False
        current = self.balance_of(sender)
        if current < amount:
            return False
        self._set(sender, current - amount)
        self._set(to, self.balance_of(to) + amount)
        return True

    def get_all_balances(self) -> Dict[Address, Amount]:
        """Return all LP balances."""
        return dict(self._balances)

    def load(self, balances: Mapping[Address, Amount]) -> None:
        """Replace every balance; total supply is recomputed from the entries."""
        table: Dict[Address, Amount] = {}
        for holder, amount in balances.items():
            if not isinstance(amount, int) or isinstance(amount, bool) or amount < 0:
                raise ValueError(f"invalid LP balance for {holder}: {amount!r}")
            if amount:
                table[holder] = amount
        self._balances = table
        self.total_supply = sum(table.values())

    def verify_supply(self) -> bool:
        """Verify all balances are non-negative and sum to total supply."""
        if not all(amount >= 0 for amount in self._balances.values()):
            return False
        return sum(self._balances.values()) == self.total_supply

    def snapshot(self) -> Mapping[str, object]:
        return {"balances": dict(self._balances), "total_supply": self.total_supply}

    def restore(self, snapshot: object) -> None:
        if not isinstance(snapshot, Mapping):
            raise TypeError("LP snapshot must be a mapping")
        self._balances = dict(snapshot["balances"])
        self.total_supply = int(snapshot["total_supply"])

    def __repr__(self) -> str:
        return f"LPToken({self.symbol or self.address[:10]}, supply={self.total_supply}, {len(self._balances)} holders)"
