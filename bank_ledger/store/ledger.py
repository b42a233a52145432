"""Account store and transaction log with referential integrity."""

from dataclasses import dataclass, field
from typing import Iterable

from bank_ledger.exceptions import (
    AccountNotFoundError,
    DuplicateAccountError,
    ReferentialIntegrityError,
)
from bank_ledger.models import Account, Transaction


@dataclass
class LedgerStore:
    """In-memory store owning the account map and the transaction log.

    The log is append-only. Removing an account keeps its transactions and
    their index entries, so history stays reachable by account number.
    """

    accounts: dict[str, Account] = field(default_factory=dict)
    transactions: list[Transaction] = field(default_factory=list)

    # Indexes
    _account_transactions: dict[str, list[int]] = field(default_factory=dict)
    _transaction_ids: set[str] = field(default_factory=set)

    def add_account(self, account: Account) -> None:
        """Add an account to the store."""
        if account.account_number in self.accounts:
            raise DuplicateAccountError(f"Account {account.account_number} already exists")
        self.accounts[account.account_number] = account
        self._account_transactions.setdefault(account.account_number, [])

    def remove_account(self, account_number: str) -> Account:
        """Remove an account, leaving its transactions in the log."""
        try:
            return self.accounts.pop(account_number)
        except KeyError:
            raise AccountNotFoundError(f"Account {account_number} not found") from None

    def add_transaction(self, transaction: Transaction) -> None:
        """Append a transaction to the log."""
        if transaction.account_number not in self.accounts:
            raise ReferentialIntegrityError(f"Account {transaction.account_number} not found")
        self._append(transaction)

    def restore(
        self,
        accounts: Iterable[Account],
        transactions: Iterable[Transaction],
    ) -> None:
        """Replace both collections with previously persisted state.

        Transactions are not checked against the account map because the log
        legitimately references closed accounts.
        """
        self.accounts.clear()
        self.transactions.clear()
        self._account_transactions.clear()
        self._transaction_ids.clear()

        for account in accounts:
            self.add_account(account)
        for transaction in transactions:
            self._append(transaction)

    def _append(self, transaction: Transaction) -> None:
        idx = len(self.transactions)
        self.transactions.append(transaction)
        self._account_transactions.setdefault(transaction.account_number, []).append(idx)
        self._transaction_ids.add(transaction.transaction_id)

    # Query methods
    def get_account(self, account_number: str) -> Account:
        """Get an account by number."""
        try:
            return self.accounts[account_number]
        except KeyError:
            raise AccountNotFoundError(f"Account {account_number} not found") from None

    def has_account(self, account_number: str) -> bool:
        """Whether an open account uses this number."""
        return account_number in self.accounts

    def account_number_in_use(self, account_number: str) -> bool:
        """Whether a number belongs to an open account or appears in the log."""
        return account_number in self.accounts or account_number in self._account_transactions

    def has_transaction_id(self, transaction_id: str) -> bool:
        """Whether a transaction in the log uses this ID."""
        return transaction_id in self._transaction_ids

    def get_account_transactions(self, account_number: str) -> list[Transaction]:
        """Get all transactions for an account number, in log order."""
        indices = self._account_transactions.get(account_number, [])
        return [self.transactions[i] for i in indices]

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "accounts": len(self.accounts),
            "transactions": len(self.transactions),
        }
