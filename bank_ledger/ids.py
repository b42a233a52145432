"""Identifier generation for accounts and transactions."""

from __future__ import annotations

import uuid
from typing import Callable

DEFAULT_LENGTH = 8
MAX_ATTEMPTS = 100


class IdGenerator:
    """Short upper-case hex identifiers drawn from ``uuid4``.

    Callers pass an ``is_taken`` predicate so that a collision with an
    existing identifier is retried instead of silently overwriting.

    Parameters
    ----------
    length : int
        Number of hex characters per identifier (default 8).
    source : Callable[[], str] | None
        Hex string factory, ``uuid.uuid4().hex`` by default. Tests inject a
        deterministic source here.
    """

    def __init__(
        self,
        length: int = DEFAULT_LENGTH,
        source: Callable[[], str] | None = None,
    ) -> None:
        if not 1 <= length <= 32:
            raise ValueError("length must be between 1 and 32")
        self.length = length
        self._source = source or (lambda: uuid.uuid4().hex)

    def new_id(self, is_taken: Callable[[str], bool] = lambda _: False) -> str:
        """Return an identifier for which ``is_taken`` is false."""
        for _ in range(MAX_ATTEMPTS):
            candidate = self._source()[: self.length].upper()
            if not is_taken(candidate):
                return candidate
        raise RuntimeError(f"No free identifier after {MAX_ATTEMPTS} attempts")
