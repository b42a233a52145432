"""Tests for JsonFileRepository."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from bank_ledger.config import StorageConfig
from bank_ledger.exceptions import PersistenceError
from bank_ledger.ledger import Ledger
from bank_ledger.models import AccountType
from bank_ledger.persistence import JsonFileRepository
from bank_ledger.store import LedgerStore


@pytest.fixture
def repository(tmp_path: Path) -> JsonFileRepository:
    return JsonFileRepository(tmp_path / "data")


@pytest.fixture
def populated(ledger: Ledger) -> Ledger:
    """Ledger with a few accounts, a transfer and one closed account."""
    a = ledger.create_account("Ann", "1 A St", "555-0001", "500", AccountType.SAVINGS)
    b = ledger.create_account("Bob", "2 B St", "555-0002", "20.25", AccountType.CHECKING)
    c = ledger.create_account("Cy", "3 C St", "555-0003", "0", AccountType.CHECKING)
    ledger.transfer(a, b, "99.99")
    ledger.withdraw(a, "0.01")
    ledger.close_account(c)
    return ledger


class TestRoundTrip:
    """Saving then loading reproduces the ledger."""

    def test_round_trip(self, repository: JsonFileRepository, populated: Ledger) -> None:
        assert repository.save(populated.store) == []

        restored = LedgerStore()
        assert repository.load_into(restored) == []

        assert restored.accounts == populated.store.accounts
        assert restored.transactions == populated.store.transactions
        for number in populated.store.accounts:
            assert restored.get_account_transactions(number) == (
                populated.store.get_account_transactions(number)
            )

    def test_closed_account_history_survives(
        self, repository: JsonFileRepository, populated: Ledger
    ) -> None:
        repository.save(populated.store)
        restored = LedgerStore()
        repository.load_into(restored)

        closed = [tx.account_number for tx in restored.transactions
                  if tx.account_number not in restored.accounts]
        assert closed
        assert restored.get_account_transactions(closed[0])

    def test_file_layout(self, repository: JsonFileRepository, populated: Ledger) -> None:
        repository.save(populated.store)

        accounts = json.loads(repository.accounts_path.read_text(encoding="utf-8"))
        transactions = json.loads(repository.transactions_path.read_text(encoding="utf-8"))

        assert isinstance(accounts, dict)
        assert set(accounts) == set(populated.store.accounts)
        assert isinstance(transactions, list)
        assert len(transactions) == len(populated.store.transactions)

    def test_no_temp_files_left(self, repository: JsonFileRepository, populated: Ledger) -> None:
        repository.save(populated.store)
        repository.save(populated.store)

        names = sorted(p.name for p in repository.data_dir.iterdir())
        assert names == ["accounts.json", "transactions.json"]

    def test_pretty_output(self, tmp_path: Path, populated: Ledger) -> None:
        repository = JsonFileRepository(tmp_path, pretty=True)
        repository.save(populated.store)
        assert "\n  " in repository.accounts_path.read_text(encoding="utf-8")


class TestLoad:
    """Loading from missing or damaged files."""

    def test_missing_files_start_empty(self, repository: JsonFileRepository) -> None:
        result = repository.load()

        assert result.accounts == []
        assert result.transactions == []
        assert result.errors == []

    def test_corrupt_accounts_file(
        self, repository: JsonFileRepository, populated: Ledger
    ) -> None:
        repository.save(populated.store)
        repository.accounts_path.write_text("{not json", encoding="utf-8")

        result = repository.load()

        assert result.accounts == []
        assert result.transactions == populated.store.transactions
        assert len(result.errors) == 1
        assert result.errors[0].startswith("Error loading accounts")

    def test_corrupt_transactions_file(
        self, repository: JsonFileRepository, populated: Ledger
    ) -> None:
        repository.save(populated.store)
        repository.transactions_path.write_text('{"not": "a list"}', encoding="utf-8")

        result = repository.load()

        assert len(result.accounts) == len(populated.store.accounts)
        assert result.transactions == []
        assert result.errors[0].startswith("Error loading transactions")

    def test_malformed_record(self, repository: JsonFileRepository, populated: Ledger) -> None:
        repository.save(populated.store)
        data = json.loads(repository.transactions_path.read_text(encoding="utf-8"))
        data[0]["transaction_type"] = "REFUND"
        repository.transactions_path.write_text(json.dumps(data), encoding="utf-8")

        with pytest.raises(PersistenceError, match="Error loading transactions"):
            repository.load_transactions()

    def test_mismatched_account_key(
        self, repository: JsonFileRepository, populated: Ledger
    ) -> None:
        repository.save(populated.store)
        data = json.loads(repository.accounts_path.read_text(encoding="utf-8"))
        key = next(iter(data))
        data["WRONGKEY"] = data.pop(key)
        repository.accounts_path.write_text(json.dumps(data), encoding="utf-8")

        with pytest.raises(PersistenceError, match="does not match"):
            repository.load_accounts()

    def test_oversized_balance_falls_back_to_empty(
        self, repository: JsonFileRepository, populated: Ledger
    ) -> None:
        repository.save(populated.store)
        data = json.loads(repository.accounts_path.read_text(encoding="utf-8"))
        next(iter(data.values()))["balance"] = "1e30"
        repository.accounts_path.write_text(json.dumps(data), encoding="utf-8")

        result = repository.load()

        assert result.accounts == []
        assert result.transactions == populated.store.transactions
        assert result.errors[0].startswith("Error loading accounts")

    def test_non_string_name_falls_back_to_empty(
        self, repository: JsonFileRepository, populated: Ledger
    ) -> None:
        repository.save(populated.store)
        data = json.loads(repository.accounts_path.read_text(encoding="utf-8"))
        next(iter(data.values()))["name"] = 5
        repository.accounts_path.write_text(json.dumps(data), encoding="utf-8")

        result = repository.load()

        assert result.accounts == []
        assert "name must be a string" in result.errors[0]

    def test_deeply_nested_file_falls_back_to_empty(
        self, repository: JsonFileRepository, populated: Ledger
    ) -> None:
        repository.save(populated.store)
        depth = 1_000_000
        repository.transactions_path.write_text("[" * depth + "]" * depth, encoding="utf-8")

        result = repository.load()

        assert len(result.accounts) == len(populated.store.accounts)
        assert result.transactions == []
        assert result.errors[0].startswith("Error loading transactions")

    def test_load_into_replaces_store(
        self, repository: JsonFileRepository, populated: Ledger
    ) -> None:
        repository.save(LedgerStore())

        errors = repository.load_into(populated.store)

        assert errors == []
        assert populated.store.accounts == {}
        assert populated.store.transactions == []


class TestSave:
    """Write failures are reported per file."""

    def test_save_error_is_collected(
        self, repository: JsonFileRepository, populated: Ledger
    ) -> None:
        real_replace = os.replace

        def failing_replace(src, dst):
            if str(dst).endswith("accounts.json"):
                raise OSError("disk full")
            return real_replace(src, dst)

        with patch("bank_ledger.persistence.json_file.os.replace", side_effect=failing_replace):
            errors = repository.save(populated.store)

        assert len(errors) == 1
        assert "Error saving accounts" in errors[0]
        assert "disk full" in errors[0]
        assert not repository.accounts_path.exists()
        assert repository.transactions_path.exists()
        assert sorted(p.name for p in repository.data_dir.iterdir()) == ["transactions.json"]

    def test_save_accounts_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        repository = JsonFileRepository(blocker / "data")

        with pytest.raises(PersistenceError, match="Error saving accounts"):
            repository.save_accounts(LedgerStore())


class TestFromConfig:
    """Tests for building a repository from configuration."""

    def test_from_config(self, tmp_path: Path) -> None:
        config = StorageConfig(
            data_dir=tmp_path,
            accounts_file="a.json",
            transactions_file="t.json",
            pretty_json=True,
        )
        repository = JsonFileRepository.from_config(config)

        assert repository.accounts_path == tmp_path / "a.json"
        assert repository.transactions_path == tmp_path / "t.json"
        assert repository.pretty is True
