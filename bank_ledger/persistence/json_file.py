"""JSON file persistence for the account store and transaction log."""

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from bank_ledger.config import StorageConfig
from bank_ledger.exceptions import PersistenceError
from bank_ledger.models import Account, Transaction
from bank_ledger.persistence.serialization import (
    account_from_dict,
    dataclass_to_dict,
    transaction_from_dict,
)
from bank_ledger.store import LedgerStore

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Collections read from disk plus any per-file error messages."""

    accounts: list[Account] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


class JsonFileRepository:
    """Persist ledger state as two JSON files.

    ``accounts.json`` holds an object keyed by account number and
    ``transactions.json`` holds the log as an array. Each file is replaced
    atomically on save, but the pair is not written as a unit.
    """

    def __init__(
        self,
        data_dir: str | Path,
        accounts_file: str = "accounts.json",
        transactions_file: str = "transactions.json",
        pretty: bool = False,
    ) -> None:
        """Initialize the repository.

        Parameters
        ----------
        data_dir : str | Path
            Directory holding both files. Created on first save.
        accounts_file : str
            File name of the account store.
        transactions_file : str
            File name of the transaction log.
        pretty : bool
            Pretty-print JSON output.
        """
        self.data_dir = Path(data_dir)
        self.accounts_path = self.data_dir / accounts_file
        self.transactions_path = self.data_dir / transactions_file
        self.pretty = pretty

    @classmethod
    def from_config(cls, config: StorageConfig) -> "JsonFileRepository":
        """Build a repository from storage configuration."""
        return cls(
            data_dir=config.data_dir,
            accounts_file=config.accounts_file,
            transactions_file=config.transactions_file,
            pretty=config.pretty_json,
        )

    # Loading
    def load(self) -> LoadResult:
        """Read both collections.

        A missing file yields an empty collection. A corrupt or unreadable
        file also yields an empty collection and adds a message to
        ``errors``; the other file is still read.
        """
        result = LoadResult()

        try:
            result.accounts = self.load_accounts()
        except PersistenceError as e:
            logger.error("%s", e)
            result.errors.append(str(e))

        try:
            result.transactions = self.load_transactions()
        except PersistenceError as e:
            logger.error("%s", e)
            result.errors.append(str(e))

        return result

    def load_into(self, store: LedgerStore) -> list[str]:
        """Load both collections into ``store`` and return error messages."""
        result = self.load()
        store.restore(result.accounts, result.transactions)
        counts = store.summary()
        logger.info(
            "Loaded %d accounts and %d transactions from %s",
            counts["accounts"], counts["transactions"], self.data_dir,
        )
        return result.errors

    def load_accounts(self) -> list[Account]:
        """Read the account store file."""
        data = self._read(self.accounts_path, "accounts")
        if data is None:
            return []
        if not isinstance(data, dict):
            raise PersistenceError(f"Error loading accounts: {self.accounts_path} is not a JSON object")

        accounts = []
        for number, record in data.items():
            try:
                account = account_from_dict(record)
            except PersistenceError as e:
                raise PersistenceError(f"Error loading accounts: {e}") from e
            if account.account_number != number:
                raise PersistenceError(
                    f"Error loading accounts: key {number} does not match "
                    f"account number {account.account_number}"
                )
            accounts.append(account)
        return accounts

    def load_transactions(self) -> list[Transaction]:
        """Read the transaction log file."""
        data = self._read(self.transactions_path, "transactions")
        if data is None:
            return []
        if not isinstance(data, list):
            raise PersistenceError(
                f"Error loading transactions: {self.transactions_path} is not a JSON array"
            )

        try:
            return [transaction_from_dict(record) for record in data]
        except PersistenceError as e:
            raise PersistenceError(f"Error loading transactions: {e}") from e

    def _read(self, path: Path, label: str) -> Any:
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            logger.info("%s not found, starting with no %s", path, label)
            return None
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
            raise PersistenceError(f"Error loading {label}: {e}") from e

    # Saving
    def save(self, store: LedgerStore) -> list[str]:
        """Write both collections and return error messages.

        The transaction log is written even if the account store fails.
        """
        errors = []
        for save in (self.save_accounts, self.save_transactions):
            try:
                save(store)
            except PersistenceError as e:
                logger.error("%s", e)
                errors.append(str(e))
        return errors

    def save_accounts(self, store: LedgerStore) -> None:
        """Write the account store file."""
        data = {number: dataclass_to_dict(acct) for number, acct in store.accounts.items()}
        self._write(self.accounts_path, data, "accounts")
        logger.info("Saved %d accounts to %s", len(data), self.accounts_path)

    def save_transactions(self, store: LedgerStore) -> None:
        """Write the transaction log file."""
        data = [dataclass_to_dict(tx) for tx in store.transactions]
        self._write(self.transactions_path, data, "transactions")
        logger.info("Saved %d transactions to %s", len(data), self.transactions_path)

    def _write(self, path: Path, data: Any, label: str) -> None:
        """Write ``data`` to a temp file beside ``path`` and rename it into place."""
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                else:
                    json.dump(data, f, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(f"Error saving {label}: {e}") from e
