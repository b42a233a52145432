"""In-memory ledger state."""

from bank_ledger.store.ledger import LedgerStore

__all__ = ["LedgerStore"]
