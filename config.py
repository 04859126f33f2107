"""
Configuration and data loading/saving for ShuttleLedger
"""
from __future__ import annotations
import json
import math
import os
from typing import Any, List, Optional, Sequence, Set

from computations import month_key_for, per_player_share, session_total
from errors import PersistenceError
from logging_config import get_logger
from models import Ledger, Session
from storage import KeyValueStore
from utils import app_dir, make_session_id, parse_date

logger = get_logger(__name__)

ROSTER_KEY = "roster"
SESSIONS_KEY = "sessions"
DEFAULT_ROSTER = ["Player 1", "Player 2"]
CURRENCY = "S$"
DATA_FILENAME = "ledger.json"


def default_data_path() -> str:
    """Location of the JSON file store in the application directory"""
    return os.path.join(app_dir(), DATA_FILENAME)


def session_to_dict(s: Session) -> dict:
    """Convert Session to the flat record stored on disk"""
    return {
        "id": s.id,
        "date": s.date,
        "monthKey": s.month_key,
        "courtCost": s.court_cost,
        "shuttleCost": s.shuttle_cost,
        "shuttlesUsed": s.shuttles_used,
        "total": s.total,
        "perPlayer": s.per_player,
        "participants": list(s.participants),
    }


def _number(d: dict, key: str) -> float:
    v = d.get(key)
    if isinstance(v, bool) or not isinstance(v, (int, float)) or not math.isfinite(v):
        raise PersistenceError(f"Stored session field '{key}' is not a number: {v!r}",
                               operation="load", target=SESSIONS_KEY)
    return float(v)


def dict_to_session(d: Any, session_id: Optional[str] = None) -> Session:
    """
    Convert a stored record to a Session.
    Derived fields are recomputed from the date and cost fields. Older records keep the
    participant snapshot under "players".
    """
    if not isinstance(d, dict):
        raise PersistenceError("Stored session is not an object", operation="load", target=SESSIONS_KEY)
    date = d.get("date")
    if isinstance(date, str):
        date = date.strip()
    if not isinstance(date, str) or not date:
        raise PersistenceError("Stored session has no date", operation="load", target=SESSIONS_KEY)
    try:
        parse_date(date)
    except ValueError as ex:
        raise PersistenceError(f"Stored session date is not YYYY-MM-DD: {date!r}",
                               operation="load", target=SESSIONS_KEY) from ex
    participants = d.get("participants", d.get("players"))
    if (not isinstance(participants, list) or not participants
            or not all(isinstance(p, str) for p in participants)):
        raise PersistenceError("Stored session has no participants", operation="load", target=SESSIONS_KEY)

    court_cost = _number(d, "courtCost")
    shuttle_cost = _number(d, "shuttleCost")
    shuttles_used = _number(d, "shuttlesUsed")
    total = session_total(court_cost, shuttle_cost, shuttles_used)
    return Session(
        id=session_id if session_id is not None else d["id"],
        date=date,
        month_key=month_key_for(date),
        court_cost=court_cost,
        shuttle_cost=shuttle_cost,
        shuttles_used=shuttles_used,
        total=total,
        per_player=per_player_share(total, len(participants)),
        participants=list(participants),
    )


class LedgerStore:
    """Persistence adapter: reads and writes the roster and session records"""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def _read_json(self, key: str) -> Any:
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as ex:
            raise PersistenceError(f"Record '{key}' is not valid JSON: {ex}",
                                   operation="load", target=key) from ex

    @staticmethod
    def _unique_names(names: List[str]) -> List[str]:
        """Drop later case-insensitive repeats of a roster name"""
        kept: List[str] = []
        seen: Set[str] = set()
        for name in names:
            if name.lower() in seen:
                logger.warning("roster_duplicate_dropped", name=name)
                continue
            seen.add(name.lower())
            kept.append(name)
        return kept

    def load(self) -> Ledger:
        """
        Load roster and sessions.
        Missing records give the default roster and an empty history.
        Sessions without an id (or reusing an earlier id) get a fresh one.

        Raises:
            PersistenceError: If either record is corrupt
        """
        roster = self._read_json(ROSTER_KEY)
        if roster is None:
            roster = []
        if not isinstance(roster, list) or not all(isinstance(p, str) for p in roster):
            raise PersistenceError("Roster record is not a list of names",
                                   operation="load", target=ROSTER_KEY)
        if not roster:
            roster = list(DEFAULT_ROSTER)
        roster = self._unique_names(roster)

        records = self._read_json(SESSIONS_KEY)
        if records is None:
            records = []
        if not isinstance(records, list):
            raise PersistenceError("Sessions record is not a list",
                                   operation="load", target=SESSIONS_KEY)

        known: Set[str] = {r["id"] for r in records
                           if isinstance(r, dict) and isinstance(r.get("id"), str) and r["id"]}
        seen: Set[str] = set()
        sessions: List[Session] = []
        for r in records:
            sid = r.get("id") if isinstance(r, dict) else None
            if not isinstance(sid, str) or not sid or sid in seen:
                sid = make_session_id(known)
                known.add(sid)
                logger.warning("session_id_backfilled", session_id=sid,
                               date=r.get("date") if isinstance(r, dict) else None)
            seen.add(sid)
            sessions.append(dict_to_session(r, session_id=sid))

        logger.info("ledger_loaded", roster=len(roster), sessions=len(sessions))
        return Ledger(roster=roster, sessions=sessions)

    def save(self, roster: Sequence[str], sessions: Sequence[Session]) -> None:
        """
        Write a full snapshot of both records.

        Raises:
            PersistenceError: If the store rejects the write
        """
        try:
            self.store.set_many({
                ROSTER_KEY: json.dumps(list(roster), ensure_ascii=False),
                SESSIONS_KEY: json.dumps([session_to_dict(s) for s in sessions], ensure_ascii=False),
            })
        except PersistenceError:
            logger.error("ledger_save_failed", roster=len(roster), sessions=len(sessions))
            raise
        logger.debug("ledger_saved", roster=len(roster), sessions=len(sessions))
