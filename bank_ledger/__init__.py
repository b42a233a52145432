"""Single-user console ledger for bank accounts and transactions."""

from bank_ledger.ledger import Ledger
from bank_ledger.store import LedgerStore

__version__ = "0.1.0"

__all__ = ["Ledger", "LedgerStore", "__version__"]
