"""Domain models for the ledger."""

from bank_ledger.models.account import Account
from bank_ledger.models.enums import AccountType, TransactionType
from bank_ledger.models.money import CENTS, ZERO, format_money, to_money
from bank_ledger.models.transaction import Transaction

__all__ = [
    "CENTS",
    "ZERO",
    "Account",
    "AccountType",
    "Transaction",
    "TransactionType",
    "format_money",
    "to_money",
]
