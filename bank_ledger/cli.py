"""Command-line entry point for the banking console."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from bank_ledger.config import LOG_FORMATS, AppConfig
from bank_ledger.console import ConsoleApp
from bank_ledger.exceptions import ConfigurationError
from bank_ledger.generators import populate_demo_accounts
from bank_ledger.ledger import Ledger
from bank_ledger.logging import setup_logging
from bank_ledger.persistence import JsonFileRepository
from bank_ledger.store import LedgerStore

logger = logging.getLogger(__name__)


def build_parser(defaults: AppConfig) -> argparse.ArgumentParser:
    """Argument parser whose defaults come from ``defaults``."""
    parser = argparse.ArgumentParser(
        prog="bank-ledger",
        description="Console application for bank accounts and transactions",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=defaults.storage.data_dir,
        help=f"Directory holding the ledger files (default: {defaults.storage.data_dir})",
    )
    parser.add_argument(
        "--log-level",
        default=defaults.log_level,
        help=f"Log level (default: {defaults.log_level})",
    )
    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default=defaults.log_format,
        help=f"Log format (default: {defaults.log_format})",
    )
    parser.add_argument(
        "--demo-accounts",
        type=int,
        default=defaults.demo.accounts,
        help="Open this many generated accounts when the ledger starts empty",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=defaults.demo.seed,
        help="Random seed for demo data",
    )
    parser.add_argument(
        "--locale",
        default=defaults.demo.locale,
        help=f"Faker locale for demo data (default: {defaults.demo.locale})",
    )
    return parser


def configure(argv: list[str] | None = None) -> AppConfig:
    """Merge environment configuration with command-line overrides."""
    config = AppConfig.from_env()
    args = build_parser(config).parse_args(argv)

    config.storage.data_dir = args.data_dir
    config.log_level = args.log_level
    config.log_format = args.log_format
    config.demo.accounts = args.demo_accounts
    config.demo.seed = args.seed
    config.demo.locale = args.locale
    return config


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    try:
        config = configure(argv)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    setup_logging(config.log_level, config.log_format)

    store = LedgerStore()
    repository = JsonFileRepository.from_config(config.storage)
    for error in repository.load_into(store):
        print(error)

    ledger = Ledger(store=store, policy=config.policy)

    if config.demo.accounts > 0 and not store.accounts:
        numbers = populate_demo_accounts(
            ledger, config.demo.accounts, seed=config.demo.seed, locale=config.demo.locale
        )
        print(f"Created {len(numbers)} demo accounts: {', '.join(numbers)}")

    app = ConsoleApp(ledger, repository)
    try:
        app.run()
    except KeyboardInterrupt:
        print()
        logger.info("Interrupted, saving before exit")
        app.save()
    return 0


if __name__ == "__main__":
    sys.exit(main())
