"""Configuration management for bank-ledger."""

import os
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path

from bank_ledger.exceptions import ConfigurationError
from bank_ledger.models.enums import AccountType

LOG_FORMATS = ("standard", "json")


def _default_minimum_deposits() -> dict[AccountType, Decimal]:
    return {
        AccountType.SAVINGS: Decimal("50.00"),
        AccountType.CHECKING: Decimal("0.00"),
    }


@dataclass
class StorageConfig:
    """Where ledger state is persisted."""

    data_dir: Path = field(default_factory=lambda: Path("."))
    accounts_file: str = "accounts.json"
    transactions_file: str = "transactions.json"
    pretty_json: bool = False

    @property
    def accounts_path(self) -> Path:
        """Full path of the account store file."""
        return self.data_dir / self.accounts_file

    @property
    def transactions_path(self) -> Path:
        """Full path of the transaction log file."""
        return self.data_dir / self.transactions_file


@dataclass
class PolicyConfig:
    """Account policies enforced by the ledger."""

    minimum_deposits: dict[AccountType, Decimal] = field(
        default_factory=_default_minimum_deposits
    )
    savings_withdrawal_limit: int = 6

    def minimum_deposit(self, account_type: AccountType) -> Decimal:
        """Return the minimum initial deposit for an account type."""
        return self.minimum_deposits.get(account_type, Decimal("0.00"))


@dataclass
class DemoConfig:
    """Demo data generation settings."""

    accounts: int = 0
    seed: int | None = None
    locale: str = "en_US"


@dataclass
class AppConfig:
    """Main configuration for bank-ledger."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    demo: DemoConfig = field(default_factory=DemoConfig)
    log_level: str = "WARNING"
    log_format: str = "standard"

    def __post_init__(self) -> None:
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"Unknown log format {self.log_format!r}, expected one of {LOG_FORMATS}"
            )
        if self.policy.savings_withdrawal_limit < 0:
            raise ConfigurationError("Savings withdrawal limit must not be negative")

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create config from environment variables."""
        storage = StorageConfig(
            data_dir=Path(os.getenv("BANK_DATA_DIR", ".")),
            accounts_file=os.getenv("BANK_ACCOUNTS_FILE", "accounts.json"),
            transactions_file=os.getenv("BANK_TRANSACTIONS_FILE", "transactions.json"),
            pretty_json=os.getenv("BANK_PRETTY_JSON", "false").lower() == "true",
        )

        policy = PolicyConfig(
            savings_withdrawal_limit=_int_env("BANK_SAVINGS_WITHDRAWAL_LIMIT", 6),
        )

        demo = DemoConfig(
            accounts=_int_env("BANK_DEMO_ACCOUNTS", 0),
            seed=_int_env("BANK_SEED", None),
            locale=os.getenv("BANK_LOCALE", "en_US"),
        )

        return cls(
            storage=storage,
            policy=policy,
            demo=demo,
            log_level=os.getenv("BANK_LOG_LEVEL", "WARNING"),
            log_format=os.getenv("BANK_LOG_FORMAT", "standard"),
        )


def _int_env(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
