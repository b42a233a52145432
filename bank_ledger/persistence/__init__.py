"""Loading and saving ledger state."""

from bank_ledger.persistence.json_file import JsonFileRepository, LoadResult

__all__ = ["JsonFileRepository", "LoadResult"]
