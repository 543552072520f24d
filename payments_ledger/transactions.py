"""
Transaction Types Module

Defines the closed set of transaction kinds, the immutable message each
input record is normalized into, and the record the ledger keeps for
deposits and withdrawals so later disputes can reference them.
"""

from dataclasses import dataclass
from enum import Enum


class UnknownTransactionType(ValueError):
    """Raised when a record's type string is not a known transaction kind"""


class TransactionType(Enum):
    """Kinds of transaction records, valued by their input spelling"""
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdraw"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @classmethod
    def parse(cls, value: str) -> 'TransactionType':
        """
        Parse an input type string (exact, case-sensitive match)

        Raises:
            UnknownTransactionType: If the string names no known type
        """
        for member in cls:
            if member.value == value:
                return member
        raise UnknownTransactionType(f"'{value}' is not a valid transaction type")

    @property
    def is_stored(self) -> bool:
        """Check if records of this type are kept for later dispute"""
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)

    @property
    def requires_amount(self) -> bool:
        """Check if records of this type must carry an amount"""
        return self.is_stored


@dataclass(frozen=True)
class TransactionMessage:
    """
    Canonical form of one input record

    Created once per record in arrival order and never mutated.
    """
    sequence: int  # 1-based arrival order
    tx: int
    transaction_type: TransactionType
    client: int
    amount: int = 0  # Subunits, zero for dispute/resolve/chargeback


@dataclass
class StoredTransaction:
    """
    Deposit or withdrawal retained by the ledger

    Only the disputed flag changes after creation.
    """
    tx: int
    transaction_type: TransactionType
    client: int
    amount: int
    disputed: bool = False

    def __post_init__(self):
        if not self.transaction_type.is_stored:
            raise ValueError(
                f"Only deposits and withdrawals are stored, got {self.transaction_type.name}"
            )
        if self.amount < 0:
            raise ValueError("Transaction amount must not be negative")

    @classmethod
    def from_message(cls, message: TransactionMessage) -> 'StoredTransaction':
        """Create the stored record for a deposit or withdrawal message"""
        return cls(
            tx=message.tx,
            transaction_type=message.transaction_type,
            client=message.client,
            amount=message.amount,
        )
