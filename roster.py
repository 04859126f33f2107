"""
Roster management: the list of players eligible for new sessions
"""
from __future__ import annotations
from typing import List, Optional

from config import LedgerStore
from errors import ValidationError
from logging_config import get_logger
from models import Ledger

logger = get_logger(__name__)


class RosterManager:
    """Adds and removes player names. Past sessions keep their own snapshot."""

    def __init__(self, ledger: Ledger, persistence: LedgerStore):
        self.ledger = ledger
        self.persistence = persistence

    @property
    def names(self) -> List[str]:
        return list(self.ledger.roster)

    def contains(self, name: str) -> bool:
        """Case-insensitive membership test"""
        key = name.strip().lower()
        return any(p.lower() == key for p in self.ledger.roster)

    def add_participant(self, name: str) -> str:
        """
        Append a player to the roster and persist.

        Raises:
            ValidationError: Empty name or case-insensitive duplicate
            PersistenceError: Store rejected the write; roster unchanged
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Player name is required.", field="name")
        if self.contains(name):
            raise ValidationError(f"'{name}' is already on the roster.", field="name",
                                  context={"name": name})

        roster = self.ledger.roster + [name]
        self.persistence.save(roster, self.ledger.sessions)
        self.ledger.roster = roster
        logger.info("participant_added", name=name, roster_size=len(roster))
        return name

    def remove_participant(self, index: int) -> Optional[str]:
        """
        Remove the player at index and persist. Out-of-range index is a no-op.
        Returns the removed name, or None if nothing was removed.
        """
        if not 0 <= index < len(self.ledger.roster):
            logger.debug("participant_remove_ignored", index=index)
            return None

        roster = list(self.ledger.roster)
        name = roster.pop(index)
        self.persistence.save(roster, self.ledger.sessions)
        self.ledger.roster = roster
        logger.info("participant_removed", name=name, roster_size=len(roster))
        return name
