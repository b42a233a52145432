"""Tests for serialization utilities."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

import pytest

from bank_ledger.exceptions import PersistenceError
from bank_ledger.models import Account, AccountType, Transaction, TransactionType
from bank_ledger.persistence.serialization import (
    account_from_dict,
    dataclass_to_dict,
    serialize_value,
    transaction_from_dict,
)


class _SampleEnum(str, Enum):
    VALUE_A = "VALUE_A"


@pytest.fixture
def account() -> Account:
    return Account(
        account_number="ABCD1234",
        name="Jane Doe",
        address="1 Main St, Springfield",
        phone_number="555-0100",
        balance=Decimal("1234.56"),
        account_type=AccountType.SAVINGS,
        created_at=datetime(2024, 3, 1, 12, 0, 0),
    )


@pytest.fixture
def transaction() -> Transaction:
    return Transaction(
        transaction_id="T0000001",
        account_number="ABCD1234",
        transaction_type=TransactionType.TRANSFER_OUT,
        amount=Decimal("50.00"),
        description="Transfer to EFGH5678",
        timestamp=datetime(2024, 3, 2, 8, 15, 30),
    )


class TestSerializeValue:
    """Tests for serialize_value function."""

    def test_decimal_keeps_precision(self) -> None:
        assert serialize_value(Decimal("0.10")) == "0.10"

    def test_enum(self) -> None:
        assert serialize_value(_SampleEnum.VALUE_A) == "VALUE_A"

    def test_date(self) -> None:
        assert serialize_value(date(2024, 6, 15)) == "2024-06-15"

    def test_nested(self) -> None:
        data = {"amounts": [Decimal("1.00")], "when": {"at": datetime(2024, 1, 1)}}
        assert serialize_value(data) == {
            "amounts": ["1.00"],
            "when": {"at": "2024-01-01T00:00:00"},
        }

    def test_passthrough(self) -> None:
        assert serialize_value("hello") == "hello"
        assert serialize_value(None) is None


class TestAccountRecords:
    """Tests for account (de)serialization."""

    def test_account_to_dict(self, account: Account) -> None:
        data = dataclass_to_dict(account)
        assert data["balance"] == "1234.56"
        assert data["account_type"] == "SAVINGS"
        assert data["created_at"] == "2024-03-01T12:00:00"

    def test_account_from_dict(self, account: Account) -> None:
        assert account_from_dict(dataclass_to_dict(account)) == account

    def test_missing_field(self, account: Account) -> None:
        data = dataclass_to_dict(account)
        del data["balance"]
        with pytest.raises(PersistenceError, match="Malformed account"):
            account_from_dict(data)

    def test_bad_account_type(self, account: Account) -> None:
        data = dataclass_to_dict(account)
        data["account_type"] = "PLATINUM"
        with pytest.raises(PersistenceError):
            account_from_dict(data)

    @pytest.mark.parametrize("key", ["name", "address", "phone_number", "account_number"])
    def test_non_string_text_field(self, account: Account, key: str) -> None:
        data = dataclass_to_dict(account)
        data[key] = 5
        with pytest.raises(PersistenceError, match=f"{key} must be a string"):
            account_from_dict(data)

    def test_balance_too_large(self, account: Account) -> None:
        data = dataclass_to_dict(account)
        data["balance"] = "1e30"
        with pytest.raises(PersistenceError, match="Malformed account"):
            account_from_dict(data)


class TestTransactionRecords:
    """Tests for transaction (de)serialization."""

    def test_transaction_from_dict(self, transaction: Transaction) -> None:
        assert transaction_from_dict(dataclass_to_dict(transaction)) == transaction

    def test_bad_amount(self, transaction: Transaction) -> None:
        data = dataclass_to_dict(transaction)
        data["amount"] = "lots"
        with pytest.raises(PersistenceError, match="Malformed transaction"):
            transaction_from_dict(data)

    def test_not_a_mapping(self) -> None:
        with pytest.raises(PersistenceError):
            transaction_from_dict("oops")  # type: ignore[arg-type]

    def test_non_string_description(self, transaction: Transaction) -> None:
        data = dataclass_to_dict(transaction)
        data["description"] = ["Deposit"]
        with pytest.raises(PersistenceError, match="description must be a string"):
            transaction_from_dict(data)
