"""Account model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from bank_ledger.models.enums import AccountType


@dataclass
class Account:
    """Bank account entity.

    Owner metadata and ``account_type`` never change after creation.
    ``balance`` is only mutated by ledger operations.
    """

    account_number: str
    name: str
    address: str
    phone_number: str
    balance: Decimal
    account_type: AccountType
    created_at: datetime = field(default_factory=datetime.now)
