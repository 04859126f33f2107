"""Pytest configuration and shared fixtures."""

import json
from typing import Any, Dict, Optional

import pytest

from config import ROSTER_KEY, LedgerStore
from errors import PersistenceError
from service import LedgerService
from storage import MemoryStore


class FailingStore(MemoryStore):
    """MemoryStore whose writes can be switched to fail, like a full quota."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        super().__init__(initial)
        self.fail_writes = False

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise PersistenceError("quota exceeded", operation="write", target=key)
        super().set(key, value)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def persistence(store) -> LedgerStore:
    return LedgerStore(store)


@pytest.fixture
def roster_store() -> FailingStore:
    """Store holding roster Alice, Bob and no sessions."""
    return FailingStore({ROSTER_KEY: json.dumps(["Alice", "Bob"])})


@pytest.fixture
def service(roster_store) -> LedgerService:
    return LedgerService.open(roster_store)


@pytest.fixture
def sample_session_record() -> Dict[str, Any]:
    """A stored session as written by save()."""
    return {
        "id": "s_1710460800000_abc",
        "date": "2024-03-15",
        "monthKey": "2024-03",
        "courtCost": 20.0,
        "shuttleCost": 3.5,
        "shuttlesUsed": 4.0,
        "total": 34.0,
        "perPlayer": 17.0,
        "participants": ["Alice", "Bob"],
    }
