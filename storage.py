"""
Key-value storage backends for ShuttleLedger.

The ledger only needs what browser local storage offers: string values
addressed by string keys. Any backend implementing KeyValueStore can hold
the roster and session records.
"""
from __future__ import annotations
import json
import os
import tempfile
from abc import ABC, abstractmethod
from typing import Dict, Optional

from errors import PersistenceError
from logging_config import get_logger

logger = get_logger(__name__)


class KeyValueStore(ABC):
    """Abstract string-to-string store"""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read a record.

        Returns:
            The stored string, or None if the key was never written

        Raises:
            PersistenceError: If the backend cannot be read
        """

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Write a record, replacing any previous value.

        Raises:
            PersistenceError: If the backend rejects the write
        """

    def set_many(self, items: Dict[str, str]) -> None:
        """Write several records. Backends that can should do it in one write."""
        for key, value in items.items():
            self.set(key, value)


class MemoryStore(KeyValueStore):
    """Dict-backed store, lives as long as the process"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def snapshot(self) -> Dict[str, str]:
        """Copy of everything stored"""
        return dict(self._data)


class JsonFileStore(KeyValueStore):
    """
    Store backed by a single JSON object file: {key: value, ...}.
    Every write rewrites the whole file through a temp file and os.replace.
    """

    def __init__(self, path: str):
        self.path = path

    def _read_all(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as ex:
            raise PersistenceError(
                f"Cannot read ledger file: {ex}", operation="read", target=self.path
            ) from ex
        if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
            raise PersistenceError(
                "Ledger file is not a mapping of record names to strings",
                operation="read", target=self.path,
            )
        return data

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        self.set_many({key: value})

    def set_many(self, items: Dict[str, str]) -> None:
        data = self._read_all()
        data.update(items)
        self._write_all(data)

    def _write_all(self, data: Dict[str, str]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=".ledger-", suffix=".json", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False, indent=2)
                os.replace(tmp, self.path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except OSError as ex:
            logger.error("store_write_failed", path=self.path, keys=sorted(data), error=str(ex))
            raise PersistenceError(
                f"Cannot write ledger file: {ex}", operation="write", target=self.path
            ) from ex
