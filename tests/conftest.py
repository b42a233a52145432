"""Pytest configuration and fixtures."""

from datetime import datetime
from itertools import count

import pytest

from bank_ledger.ids import IdGenerator
from bank_ledger.ledger import Ledger
from bank_ledger.store import LedgerStore


class FixedClock:
    """Settable stand-in for ``datetime.now``."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def clock() -> FixedClock:
    """Clock pinned to mid-June 2024."""
    return FixedClock(datetime(2024, 6, 15, 10, 30, 0))


@pytest.fixture
def sequential_ids() -> IdGenerator:
    """ID generator yielding 00000001, 00000002, ..."""
    counter = count(1)
    return IdGenerator(source=lambda: f"{next(counter):032x}"[-8:])


@pytest.fixture
def store() -> LedgerStore:
    """Create a fresh store for each test."""
    return LedgerStore()


@pytest.fixture
def ledger(store: LedgerStore, sequential_ids: IdGenerator, clock: FixedClock) -> Ledger:
    """Ledger over an empty store with deterministic IDs and time."""
    return Ledger(store=store, ids=sequential_ids, clock=clock)
