"""Demo data generators."""

from bank_ledger.generators.account import (
    AccountRequest,
    AccountRequestGenerator,
    populate_demo_accounts,
)

__all__ = ["AccountRequest", "AccountRequestGenerator", "populate_demo_accounts"]
