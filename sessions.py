"""
Session ledger: record, edit and delete badminton sessions.

Every mutation validates its input first, builds the new session list as a
copy, persists the full snapshot and only then swaps it into memory. A
rejected write therefore leaves the in-memory ledger identical to what was
last stored.
"""
from __future__ import annotations
import math
from dataclasses import replace
from decimal import Decimal
from typing import Any, List, NamedTuple, Sequence

from computations import month_key_for, per_player_share, session_total
from config import LedgerStore
from errors import NotFoundError, ValidationError
from logging_config import get_logger
from models import Ledger, Session
from utils import make_session_id, parse_date

logger = get_logger(__name__)

SESSION_ERROR = "Please fill date, costs, shuttles and select at least one player."


class SessionInput(NamedTuple):
    date: str
    court_cost: float
    shuttle_cost: float
    shuttles_used: float
    participants: List[str]


def _amount(value: Any, field: str) -> float:
    if isinstance(value, bool) or value is None:
        raise ValidationError(SESSION_ERROR, field=field)
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise ValidationError(SESSION_ERROR, field=field, context={field: value})
    else:
        raise ValidationError(SESSION_ERROR, field=field)
    if not math.isfinite(number):
        raise ValidationError(SESSION_ERROR, field=field, context={field: value})
    if number < 0:
        raise ValidationError(f"{field} cannot be negative.", field=field, context={field: value})
    return number


def validate_session_input(
    date: Any,
    court_cost: Any,
    shuttle_cost: Any,
    shuttles_used: Any,
    participants: Any,
) -> SessionInput:
    """
    Check and normalize the fields shared by create and update.

    Raises:
        ValidationError: On the first field that fails
    """
    if not isinstance(date, str) or not date.strip():
        raise ValidationError(SESSION_ERROR, field="date")
    date = date.strip()
    try:
        parse_date(date)
    except ValueError:
        raise ValidationError("Date must be YYYY-MM-DD.", field="date", context={"date": date})

    court = _amount(court_cost, "court_cost")
    shuttle = _amount(shuttle_cost, "shuttle_cost")
    used = _amount(shuttles_used, "shuttles_used")

    if isinstance(participants, str) or not participants:
        raise ValidationError(SESSION_ERROR, field="participants")
    names: List[str] = []
    seen = set()
    for p in participants:
        name = p.strip() if isinstance(p, str) else ""
        if not name:
            raise ValidationError("Player names cannot be blank.", field="participants")
        if name.lower() in seen:
            raise ValidationError(f"'{name}' is selected twice.", field="participants",
                                  context={"name": name})
        seen.add(name.lower())
        names.append(name)

    return SessionInput(date, court, shuttle, used, names)


def _build(session_id: str, data: SessionInput) -> Session:
    total = session_total(data.court_cost, data.shuttle_cost, data.shuttles_used)
    return Session(
        id=session_id,
        date=data.date,
        month_key=month_key_for(data.date),
        court_cost=data.court_cost,
        shuttle_cost=data.shuttle_cost,
        shuttles_used=data.shuttles_used,
        total=total,
        per_player=per_player_share(total, len(data.participants)),
        participants=list(data.participants),
    )


def _detached(session: Session) -> Session:
    """Copy handed to callers; its participant list is not the stored one"""
    return replace(session, participants=list(session.participants))


class SessionLedger:
    """Owns the session history"""

    def __init__(self, ledger: Ledger, persistence: LedgerStore):
        self.ledger = ledger
        self.persistence = persistence

    @property
    def sessions(self) -> List[Session]:
        return [_detached(s) for s in self.ledger.sessions]

    def _index_of(self, session_id: str) -> int:
        for i, s in enumerate(self.ledger.sessions):
            if s.id == session_id:
                return i
        return -1

    def _commit(self, sessions: List[Session]) -> None:
        self.persistence.save(self.ledger.roster, sessions)
        self.ledger.sessions = sessions

    def get_session(self, session_id: str) -> Session:
        """
        Look up a session by id.

        Raises:
            NotFoundError: Unknown id
        """
        idx = self._index_of(session_id)
        if idx < 0:
            raise NotFoundError(f"No session with id {session_id!r}", session_id=session_id)
        return _detached(self.ledger.sessions[idx])

    def create_session(
        self,
        date: Any,
        court_cost: Any,
        shuttle_cost: Any,
        shuttles_used: Any,
        participants: Sequence[str],
    ) -> Session:
        """
        Record a new session, persist, and return it for the summary display.

        Raises:
            ValidationError: Bad input; nothing created or persisted
            PersistenceError: Store rejected the write; ledger unchanged
        """
        data = validate_session_input(date, court_cost, shuttle_cost, shuttles_used, participants)
        session = _build(make_session_id({s.id for s in self.ledger.sessions}), data)
        self._commit(self.ledger.sessions + [session])
        logger.info(
            "session_created",
            session_id=session.id,
            month_key=session.month_key,
            total=session.total,
            per_player=session.per_player,
            participants=session.participants,
        )
        return _detached(session)

    def update_session(
        self,
        session_id: str,
        date: Any,
        court_cost: Any,
        shuttle_cost: Any,
        shuttles_used: Any,
        participants: Sequence[str],
    ) -> Session:
        """
        Replace every field of an existing session, keeping its id and position.

        Raises:
            ValidationError: Bad input; session unchanged
            NotFoundError: Unknown id
            PersistenceError: Store rejected the write; ledger unchanged
        """
        data = validate_session_input(date, court_cost, shuttle_cost, shuttles_used, participants)
        idx = self._index_of(session_id)
        if idx < 0:
            logger.info("session_update_missing", session_id=session_id)
            raise NotFoundError(f"No session with id {session_id!r}", session_id=session_id)

        updated = _build(session_id, data)
        sessions = list(self.ledger.sessions)
        sessions[idx] = updated
        self._commit(sessions)
        logger.info(
            "session_updated",
            session_id=session_id,
            month_key=updated.month_key,
            total=updated.total,
            per_player=updated.per_player,
            participants=updated.participants,
        )
        return _detached(updated)

    def delete_session(self, session_id: str) -> bool:
        """Delete a session and persist. Returns False (no-op) for an unknown id."""
        idx = self._index_of(session_id)
        if idx < 0:
            logger.info("session_delete_missing", session_id=session_id)
            return False
        sessions = [s for s in self.ledger.sessions if s.id != session_id]
        self._commit(sessions)
        logger.info("session_deleted", session_id=session_id)
        return True
