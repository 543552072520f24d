"""
Ledger Engine

Applies transaction messages strictly in arrival order. The ledger owns
every account (keyed by client) and every stored deposit or withdrawal
(keyed by transaction id). Disputes, resolves and chargebacks reference a
stored transaction by id and move its amount between the available and
held balances of the client named on the record.

A record that breaks a policy rule is rejected with a diagnostic and
skipped; ``apply`` never raises for it.
"""

from typing import Dict, Iterable, List, Optional

from .accounts import Account
from .transactions import StoredTransaction, TransactionMessage, TransactionType
from .logging_config import get_logger, log_action


class Ledger:
    """
    Account and transaction state for one run
    """

    def __init__(self):
        self.accounts: Dict[int, Account] = {}
        self.transactions: Dict[int, StoredTransaction] = {}
        self.messages: Dict[int, TransactionMessage] = {}  # By sequence
        self.applied = 0
        self.rejected = 0
        self.logger = get_logger("payments_ledger.ledger")

        self._handlers = {
            TransactionType.DEPOSIT: self._deposit,
            TransactionType.WITHDRAWAL: self._withdrawal,
            TransactionType.DISPUTE: self._dispute,
            TransactionType.RESOLVE: self._resolve,
            TransactionType.CHARGEBACK: self._chargeback,
        }

    def apply(self, message: TransactionMessage) -> None:
        """Apply one transaction message"""
        self.messages[message.sequence] = message
        self.applied += 1
        self._handlers[message.transaction_type](message)

    def apply_all(self, messages: Iterable[TransactionMessage]) -> None:
        """Apply messages in iteration order"""
        for message in messages:
            self.apply(message)

    def get_account(self, client: int) -> Optional[Account]:
        """Get account by client id"""
        return self.accounts.get(client)

    def get_transaction(self, tx: int) -> Optional[StoredTransaction]:
        """Get stored deposit or withdrawal by transaction id"""
        return self.transactions.get(tx)

    def accounts_by_client(self) -> List[Account]:
        """All accounts in ascending client id order"""
        return [self.accounts[client] for client in sorted(self.accounts)]

    def _store(self, message: TransactionMessage) -> StoredTransaction:
        # A repeated tx id replaces the earlier record
        stored = StoredTransaction.from_message(message)
        self.transactions[message.tx] = stored
        return stored

    def _open_account(self, client: int, available: int = 0) -> Account:
        account = Account(client=client, available=available)
        self.accounts[client] = account
        return account

    def _reject(self, message: TransactionMessage, reason: str) -> None:
        self.rejected += 1
        log_action(
            self.logger, "warning", reason,
            action=message.transaction_type.value,
            client=message.client,
            tx=message.tx,
            sequence=message.sequence
        )

    def _reject_unknown_client(self, message: TransactionMessage) -> None:
        self._open_account(message.client)
        self._reject(
            message,
            f"Ignored {message.transaction_type.value} on non-existent client, "
            f"{message.client}. New client account created with 0.0000 total balance."
        )

    def _deposit(self, message: TransactionMessage) -> None:
        self._store(message)
        account = self.accounts.get(message.client)
        if account is None:
            self._open_account(message.client, available=message.amount)
        else:
            account.credit(message.amount)

    def _withdrawal(self, message: TransactionMessage) -> None:
        # Stored even when the withdrawal itself is rejected
        self._store(message)
        account = self.accounts.get(message.client)
        if account is None:
            self._reject_unknown_client(message)
            return

        if not account.can_debit(message.amount):
            self._reject(
                message,
                f"Insufficient funds for withdrawal. Ignored transaction. "
                f"Client: {message.client}, Transaction ID: {message.tx}."
            )
            return

        account.debit(message.amount)

    def _dispute(self, message: TransactionMessage) -> None:
        account = self.accounts.get(message.client)
        if account is None:
            self._reject_unknown_client(message)
            return

        stored = self.transactions.get(message.tx)
        if stored is None:
            self._reject(
                message,
                f"Failed to locate transaction, {message.tx}. Ignoring dispute."
            )
            return

        # Compares against current available funds only; ownership of the
        # referenced transaction is not checked.
        if not account.can_debit(stored.amount):
            self._reject(
                message,
                f"Unable to hold funds for dispute of transaction, {message.tx}, "
                f"from client, {message.client}. Ignoring dispute."
            )
            return

        account.hold(stored.amount)
        stored.disputed = True

    def _resolve(self, message: TransactionMessage) -> None:
        account = self.accounts.get(message.client)
        if account is None:
            self._reject_unknown_client(message)
            return

        stored = self.transactions.get(message.tx)
        if stored is None:
            self._reject(
                message,
                f"Failed to locate transaction, {message.tx}. Ignoring resolve."
            )
            return

        if not (stored.disputed and account.can_release(stored.amount)):
            self._reject(
                message,
                f"Unable to resolve held funds for disputed transaction, {message.tx}, "
                f"from client, {message.client}. Ignoring resolve. "
                f"Held: {account.held}, Amount: {stored.amount}, Disputed: {stored.disputed}."
            )
            return

        account.release(stored.amount)
        stored.disputed = False

    def _chargeback(self, message: TransactionMessage) -> None:
        account = self.accounts.get(message.client)
        if account is None:
            self._reject_unknown_client(message)
            return

        stored = self.transactions.get(message.tx)
        if stored is None:
            self._reject(
                message,
                f"Failed to locate transaction, {message.tx}. Ignoring chargeback."
            )
            return

        if not (stored.disputed and account.can_release(stored.amount)):
            self._reject(
                message,
                f"Failed to complete chargeback. Held: {account.held}, "
                f"Amount: {stored.amount}, Disputed: {stored.disputed}, "
                f"transaction: {message.tx}."
            )
            return

        account.charge_back(stored.amount)
        stored.disputed = False
