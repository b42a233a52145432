"""Serialization between ledger models and JSON-ready dicts."""

from dataclasses import fields
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from bank_ledger.exceptions import PersistenceError
from bank_ledger.models import Account, AccountType, Transaction, TransactionType, to_money


def dataclass_to_dict(obj: Any) -> dict:
    """Convert a flat dataclass to a dict of JSON-ready values.

    Uses ``dataclasses.fields()`` + ``getattr`` rather than ``asdict()``,
    which would deep-copy every value first.
    """
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output.

    Decimals become strings so that amounts round-trip exactly.
    """
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def account_from_dict(data: dict[str, Any]) -> Account:
    """Rebuild an Account from its serialized form."""
    try:
        return Account(
            account_number=_text(data, "account_number"),
            name=_text(data, "name"),
            address=_text(data, "address"),
            phone_number=_text(data, "phone_number"),
            balance=to_money(data["balance"]),
            account_type=AccountType(data["account_type"]),
            created_at=datetime.fromisoformat(data["created_at"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise PersistenceError(f"Malformed account record: {e}") from e


def transaction_from_dict(data: dict[str, Any]) -> Transaction:
    """Rebuild a Transaction from its serialized form."""
    try:
        return Transaction(
            transaction_id=_text(data, "transaction_id"),
            account_number=_text(data, "account_number"),
            transaction_type=TransactionType(data["transaction_type"]),
            amount=to_money(data["amount"]),
            description=_text(data, "description"),
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise PersistenceError(f"Malformed transaction record: {e}") from e


def _text(data: dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {type(value).__name__}")
    return value
