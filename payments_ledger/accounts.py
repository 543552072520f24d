"""
Account Module

Per-client balance state. Funds are split into available and held
subunits; the total is always derived from the two so it cannot drift.
Every mutation validates before changing state, so a failed call leaves
the account untouched and no balance ever goes negative.
"""

from dataclasses import dataclass


@dataclass
class Account:
    """
    Client account with available and held funds

    Held funds are set aside by an open dispute. They still count toward
    the total but cannot be withdrawn.
    """
    client: int
    available: int = 0
    held: int = 0
    locked: bool = False

    def __post_init__(self):
        if self.available < 0 or self.held < 0:
            raise ValueError("Account balances must not be negative")

    @property
    def total(self) -> int:
        """Total funds: available plus held"""
        return self.available + self.held

    def can_debit(self, amount: int) -> bool:
        """Check if amount can be taken from available funds"""
        return amount <= self.available

    def can_release(self, amount: int) -> bool:
        """Check if amount can be taken from held funds"""
        return amount <= self.held

    def credit(self, amount: int) -> None:
        """Add funds to the available balance"""
        self._check_amount(amount)
        self.available += amount

    def debit(self, amount: int) -> None:
        """Remove funds from the available balance"""
        self._check_amount(amount)
        if not self.can_debit(amount):
            raise ValueError(
                f"Insufficient available funds: {self.available} < {amount}"
            )
        self.available -= amount

    def hold(self, amount: int) -> None:
        """Move funds from available to held"""
        self._check_amount(amount)
        if not self.can_debit(amount):
            raise ValueError(
                f"Insufficient available funds to hold: {self.available} < {amount}"
            )
        self.available -= amount
        self.held += amount

    def release(self, amount: int) -> None:
        """Move funds from held back to available"""
        self._check_amount(amount)
        if not self.can_release(amount):
            raise ValueError(f"Insufficient held funds: {self.held} < {amount}")
        self.held -= amount
        self.available += amount

    def charge_back(self, amount: int) -> None:
        """Remove held funds permanently and lock the account"""
        self._check_amount(amount)
        if not self.can_release(amount):
            raise ValueError(f"Insufficient held funds: {self.held} < {amount}")
        self.held -= amount
        self.locked = True

    @staticmethod
    def _check_amount(amount: int) -> None:
        if amount < 0:
            raise ValueError("Amount must not be negative")
