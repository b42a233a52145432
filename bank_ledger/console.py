"""Menu-driven console for the ledger."""

from __future__ import annotations

import logging
import sys
from decimal import Decimal
from typing import Callable, TextIO

from bank_ledger.exceptions import LedgerError
from bank_ledger.ledger import Ledger
from bank_ledger.models import ZERO, AccountType, Transaction, format_money, to_money
from bank_ledger.persistence import JsonFileRepository

logger = logging.getLogger(__name__)

MENU = """
--- Banking Console ---
1. Create Account
2. Deposit
3. Withdraw
4. Transfer Funds
5. Check Balance
6. View Transaction History
7. Close Account
8. Exit"""

EXIT_CHOICE = 8


def format_transaction(tx: Transaction) -> str:
    """One-line rendering of a transaction for the history view."""
    return (
        f"{tx.timestamp:%Y-%m-%d %H:%M:%S}  {tx.transaction_id}  "
        f"{tx.transaction_type.value:<12} {format_money(tx.amount):>12}  {tx.description}"
    )


class ConsoleApp:
    """Numbered-menu front end over a ``Ledger``.

    Failed operations print their message and return to the menu. Choosing
    Exit, or reaching end of input, saves the ledger and leaves ``run``.

    Parameters
    ----------
    ledger : Ledger
        Ledger to operate on.
    repository : JsonFileRepository | None
        Where to save on exit. ``None`` disables saving.
    stdin : TextIO | None
        Input stream (default: ``sys.stdin``).
    stdout : TextIO | None
        Output stream (default: ``sys.stdout``).
    """

    def __init__(
        self,
        ledger: Ledger,
        repository: JsonFileRepository | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self.ledger = ledger
        self.repository = repository
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

        self._workflows: dict[int, Callable[[], None]] = {
            1: self.create_account,
            2: self.deposit,
            3: self.withdraw,
            4: self.transfer,
            5: self.check_balance,
            6: self.view_history,
            7: self.close_account,
        }

    def run(self) -> None:
        """Show the menu until the user exits."""
        try:
            while True:
                self._print(MENU)
                choice = self._read_int("Enter your choice: ")
                if choice == EXIT_CHOICE:
                    break
                workflow = self._workflows.get(choice)
                if workflow is None:
                    self._print("Invalid choice. Please try again.")
                    continue
                try:
                    workflow()
                except LedgerError as e:
                    self._print(f"Error: {e}")
        except EOFError:
            logger.info("End of input, exiting")

        self._print("Exiting...")
        self.save()

    def save(self) -> None:
        """Persist the ledger, reporting any failures."""
        if self.repository is None:
            return
        errors = self.repository.save(self.ledger.store)
        for error in errors:
            self._print(error)
        if not errors:
            self._print(f"Data saved to {self.repository.data_dir}")

    # Workflows
    def create_account(self) -> None:
        self._print("\n--- Create Account ---")
        name = self._read_line("Enter name: ")
        address = self._read_line("Enter address: ")
        phone_number = self._read_line("Enter phone number: ")
        initial_deposit = self._read_amount("Enter initial deposit amount: ")

        self._print("Select Account Type:")
        self._print("1. Savings")
        self._print("2. Checking")
        type_choice = self._read_int("Enter your choice (1 or 2): ", low=1, high=2)
        account_type = AccountType.SAVINGS if type_choice == 1 else AccountType.CHECKING

        account_number = self.ledger.create_account(
            name, address, phone_number, initial_deposit, account_type
        )
        self._print("Account created successfully!")
        self._print(f"Account Number: {account_number}")

    def deposit(self) -> None:
        self._print("\n--- Deposit ---")
        account_number = self._read_account("Enter account number: ")
        if account_number is None:
            return
        amount = self._read_amount("Enter deposit amount: ")
        account = self.ledger.deposit(account_number, amount)
        self._print(f"Deposit successful. New balance: {format_money(account.balance)}")

    def withdraw(self) -> None:
        self._print("\n--- Withdraw ---")
        account_number = self._read_account("Enter account number: ")
        if account_number is None:
            return
        amount = self._read_amount("Enter withdrawal amount: ")
        account = self.ledger.withdraw(account_number, amount)
        self._print(f"Withdrawal successful. New balance: {format_money(account.balance)}")

    def transfer(self) -> None:
        self._print("\n--- Transfer Funds ---")
        source_number = self._read_account("Enter source account number: ", "Source account")
        if source_number is None:
            return
        destination_number = self._read_account(
            "Enter destination account number: ", "Destination account"
        )
        if destination_number is None:
            return
        amount = self._read_amount("Enter transfer amount: ")
        source, destination = self.ledger.transfer(source_number, destination_number, amount)
        self._print("Transfer successful.")
        self._print(f"Source account new balance: {format_money(source.balance)}")
        self._print(f"Destination account new balance: {format_money(destination.balance)}")

    def check_balance(self) -> None:
        self._print("\n--- Check Balance ---")
        account_number = self._read_line("Enter account number: ")
        balance = self.ledger.check_balance(account_number)
        self._print(f"Account balance: {format_money(balance)}")

    def view_history(self) -> None:
        """Print the history of an account, open or closed."""
        self._print("\n--- Transaction History ---")
        account_number = self._read_line("Enter account number: ")
        history = self.ledger.get_history(account_number)
        is_open = self.ledger.store.has_account(account_number)

        if not history and not is_open:
            self._print("Account not found.")
            return
        if not is_open:
            self._print(f"Account {account_number} is closed.")
        if not history:
            self._print(f"No transactions found for account number: {account_number}")
            return
        for tx in history:
            self._print(format_transaction(tx))

    def close_account(self) -> None:
        self._print("\n--- Close Account ---")
        account_number = self._read_line("Enter account number: ")
        self.ledger.close_account(account_number)
        self._print("Account closed successfully.")

    # Input helpers
    def _print(self, text: str = "") -> None:
        print(text, file=self.stdout)

    def _read_line(self, prompt: str) -> str:
        print(prompt, end="", file=self.stdout, flush=True)
        line = self.stdin.readline()
        if not line:
            raise EOFError
        return line.strip()

    def _read_account(self, prompt: str, label: str = "Account") -> str | None:
        """Ask for an account number, returning None if it is not open."""
        account_number = self._read_line(prompt)
        if not self.ledger.store.has_account(account_number):
            self._print(f"{label} not found.")
            return None
        return account_number

    def _read_int(self, prompt: str, low: int | None = None, high: int | None = None) -> int:
        while True:
            raw = self._read_line(prompt)
            try:
                value = int(raw)
            except ValueError:
                self._print("Invalid input. Please enter an integer.")
                continue
            if low is not None and high is not None and not low <= value <= high:
                self._print(f"Invalid input. Please enter an integer between {low} and {high}.")
                continue
            return value

    def _read_amount(self, prompt: str) -> Decimal:
        while True:
            raw = self._read_line(prompt)
            try:
                value = to_money(raw)
            except ValueError:
                self._print("Invalid input. Please enter a number.")
                continue
            if value < ZERO:
                self._print("Please enter a non-negative amount.")
                continue
            return value
