"""
Process-wide ledger state and the actions exposed to the GUI
"""
from __future__ import annotations
from typing import Dict, List, Optional

from computations import list_months, month_summary, monthly_totals
from config import LedgerStore
from models import Ledger
from roster import RosterManager
from sessions import SessionLedger
from storage import KeyValueStore


class LedgerService:
    """
    Loaded once at start. The roster and session history are reachable only
    through `roster` and `sessions`; reports are recomputed on every query.
    """

    def __init__(self, ledger: Ledger, persistence: LedgerStore):
        self.ledger = ledger
        self.persistence = persistence
        self.roster = RosterManager(ledger, persistence)
        self.sessions = SessionLedger(ledger, persistence)

    @classmethod
    def open(cls, store: KeyValueStore) -> "LedgerService":
        """Load state from store. PersistenceError here is fatal for start-up."""
        persistence = LedgerStore(store)
        return cls(persistence.load(), persistence)

    def list_months(self) -> List[str]:
        return list_months(self.ledger.sessions)

    def monthly_totals(self, month_key: Optional[str]) -> Dict[str, float]:
        return monthly_totals(self.ledger.sessions, month_key)

    def month_summary(self, month_key: Optional[str]) -> Dict[str, float]:
        return month_summary(self.ledger.sessions, month_key)
