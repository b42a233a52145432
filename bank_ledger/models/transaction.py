"""Transaction model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from bank_ledger.models.enums import TransactionType


@dataclass(frozen=True)
class Transaction:
    """Entry in the transaction log."""

    transaction_id: str
    account_number: str  # weak reference, survives account closure
    transaction_type: TransactionType
    amount: Decimal
    description: str
    timestamp: datetime = field(default_factory=datetime.now)
