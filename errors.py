"""
Error types for ShuttleLedger
"""
from __future__ import annotations
from typing import Any, Dict, Optional


class LedgerError(Exception):
    """Base class for all ledger errors"""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class ValidationError(LedgerError):
    """Malformed or incomplete user input. Nothing was mutated."""

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field


class NotFoundError(LedgerError):
    """An edit or lookup referenced a session id absent from the ledger"""

    def __init__(self, message: str, session_id: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.session_id = session_id


class PersistenceError(LedgerError):
    """The key-value store rejected a read or write, or holds corrupt data"""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target
