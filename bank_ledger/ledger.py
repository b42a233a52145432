"""Ledger operations over the account store and transaction log."""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable, NoReturn

from bank_ledger.config import PolicyConfig
from bank_ledger.exceptions import (
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidTransferError,
    MinimumDepositError,
    NonZeroBalanceError,
    WithdrawalLimitError,
)
from bank_ledger.ids import IdGenerator
from bank_ledger.models import (
    ZERO,
    Account,
    AccountType,
    Transaction,
    TransactionType,
    format_money,
    to_money,
)
from bank_ledger.store import LedgerStore

logger = logging.getLogger(__name__)


class Ledger:
    """Ledger operations: create, deposit, withdraw, transfer and close.

    Every operation validates first and mutates second, so a rejected
    operation leaves balances and the log untouched. Rejections raise a
    ``LedgerError`` subclass carrying a message fit for the end user.

    Parameters
    ----------
    store : LedgerStore | None
        State to operate on (a fresh, empty store by default).
    policy : PolicyConfig | None
        Minimum deposits and the savings withdrawal limit.
    ids : IdGenerator | None
        Source of account numbers and transaction IDs.
    clock : Callable[[], datetime] | None
        Current time, used for timestamps and the monthly withdrawal window.
    """

    def __init__(
        self,
        store: LedgerStore | None = None,
        policy: PolicyConfig | None = None,
        ids: IdGenerator | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.store = store if store is not None else LedgerStore()
        self.policy = policy or PolicyConfig()
        self.ids = ids or IdGenerator()
        self.clock = clock or datetime.now

    def create_account(
        self,
        name: str,
        address: str,
        phone_number: str,
        initial_deposit: Decimal | int | str,
        account_type: AccountType,
    ) -> str:
        """Open an account and record its initial deposit.

        Returns
        -------
        str
            The new account number.
        """
        amount = self._amount(initial_deposit, allow_zero=True)
        minimum = self.policy.minimum_deposit(account_type)
        if amount < minimum:
            self._reject(
                MinimumDepositError(
                    f"Initial deposit must be at least {format_money(minimum)} "
                    f"for a {account_type.value} account."
                )
            )

        now = self.clock()
        account = Account(
            account_number=self.ids.new_id(self.store.account_number_in_use),
            name=name,
            address=address,
            phone_number=phone_number,
            balance=amount,
            account_type=account_type,
            created_at=now,
        )
        self.store.add_account(account)
        self._record(account.account_number, TransactionType.DEPOSIT, amount, "Initial deposit", now)

        logger.info(
            "Created %s account %s with %s",
            account_type.value, account.account_number, format_money(amount),
            extra=_fields(account.account_number, amount),
        )
        return account.account_number

    def deposit(self, account_number: str, amount: Decimal | int | str) -> Account:
        """Add funds to an account."""
        value = self._amount(amount)
        account = self.get_account(account_number)

        account.balance += value
        self._record(account_number, TransactionType.DEPOSIT, value, "Deposit")

        logger.info(
            "Deposited %s into %s", format_money(value), account_number,
            extra=_fields(account_number, value),
        )
        return account

    def withdraw(self, account_number: str, amount: Decimal | int | str) -> Account:
        """Take funds out of an account.

        Savings accounts are limited to ``policy.savings_withdrawal_limit``
        withdrawals per calendar month.
        """
        value = self._amount(amount)
        account = self.get_account(account_number)

        if account.balance < value:
            self._reject(InsufficientFundsError("Insufficient funds."))

        if account.account_type == AccountType.SAVINGS:
            limit = self.policy.savings_withdrawal_limit
            if self.withdrawals_this_month(account_number) >= limit:
                self._reject(
                    WithdrawalLimitError(
                        "Savings account withdrawal limit reached. "
                        f"You can only make {limit} withdrawals per month."
                    )
                )

        account.balance -= value
        self._record(account_number, TransactionType.WITHDRAWAL, value, "Withdrawal")

        logger.info(
            "Withdrew %s from %s", format_money(value), account_number,
            extra=_fields(account_number, value),
        )
        return account

    def transfer(
        self,
        source_number: str,
        destination_number: str,
        amount: Decimal | int | str,
    ) -> tuple[Account, Account]:
        """Move funds between two accounts.

        Returns
        -------
        tuple[Account, Account]
            Source and destination accounts after the transfer.
        """
        value = self._amount(amount)

        if source_number not in self.store.accounts:
            self._reject(AccountNotFoundError("Source account not found."))
        if destination_number not in self.store.accounts:
            self._reject(AccountNotFoundError("Destination account not found."))
        if source_number == destination_number:
            self._reject(InvalidTransferError("Cannot transfer to the same account."))

        source = self.store.accounts[source_number]
        destination = self.store.accounts[destination_number]
        if source.balance < value:
            self._reject(InsufficientFundsError("Insufficient funds in source account."))

        now = self.clock()
        source.balance -= value
        destination.balance += value
        self._record(
            source_number, TransactionType.TRANSFER_OUT, value,
            f"Transfer to {destination_number}", now,
        )
        self._record(
            destination_number, TransactionType.TRANSFER_IN, value,
            f"Transfer from {source_number}", now,
        )

        logger.info(
            "Transferred %s from %s to %s",
            format_money(value), source_number, destination_number,
            extra=_fields(source_number, value, destination=destination_number),
        )
        return source, destination

    def close_account(self, account_number: str) -> Account:
        """Remove a zero-balance account. Its history stays in the log."""
        account = self.get_account(account_number)
        if account.balance > ZERO:
            self._reject(
                NonZeroBalanceError(
                    "Please withdraw the remaining balance before closing the account."
                )
            )

        self.store.remove_account(account_number)
        logger.info("Closed account %s", account_number, extra=_fields(account_number))
        return account

    # Reads
    def get_account(self, account_number: str) -> Account:
        """Look up an open account."""
        if not self.store.has_account(account_number):
            self._reject(AccountNotFoundError("Account not found."))
        return self.store.accounts[account_number]

    def check_balance(self, account_number: str) -> Decimal:
        """Current balance of an open account."""
        return self.get_account(account_number).balance

    def get_history(self, account_number: str) -> list[Transaction]:
        """All transactions recorded for an account number, in log order.

        Closed accounts keep their history; unknown numbers yield ``[]``.
        """
        return self.store.get_account_transactions(account_number)

    def accounts(self) -> list[Account]:
        """Open accounts in creation order."""
        return list(self.store.accounts.values())

    def withdrawals_this_month(self, account_number: str) -> int:
        """Count withdrawals recorded for an account in the current calendar month."""
        now = self.clock()
        return sum(
            1
            for tx in self.store.get_account_transactions(account_number)
            if tx.transaction_type == TransactionType.WITHDRAWAL
            and (tx.timestamp.year, tx.timestamp.month) == (now.year, now.month)
        )

    # Internals
    def _amount(self, raw: Decimal | int | str, allow_zero: bool = False) -> Decimal:
        try:
            value = to_money(raw)
        except ValueError:
            self._reject(InvalidAmountError(f"Invalid amount: {raw!r}."))
        if value < ZERO:
            self._reject(InvalidAmountError("Invalid amount. Amount must not be negative."))
        if value == ZERO and not allow_zero:
            self._reject(InvalidAmountError("Invalid amount. Amount must be positive."))
        return value

    def _record(
        self,
        account_number: str,
        transaction_type: TransactionType,
        amount: Decimal,
        description: str,
        timestamp: datetime | None = None,
    ) -> Transaction:
        transaction = Transaction(
            transaction_id=self.ids.new_id(self.store.has_transaction_id),
            account_number=account_number,
            transaction_type=transaction_type,
            amount=amount,
            description=description,
            timestamp=timestamp or self.clock(),
        )
        self.store.add_transaction(transaction)
        return transaction

    @staticmethod
    def _reject(error: Exception) -> NoReturn:
        logger.warning("Rejected: %s", error)
        raise error


def _fields(account_number: str, amount: Decimal | None = None, **more: str) -> dict:
    """Structured fields for ``JsonFormatter``, passed as ``extra``."""
    fields: dict[str, str] = {"account_number": account_number}
    if amount is not None:
        fields["amount"] = str(amount)
    fields.update(more)
    return {"extra": fields}
