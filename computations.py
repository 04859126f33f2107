"""
Business logic and computations for ShuttleLedger
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Sequence

from models import Session


def session_total(court_cost: float, shuttle_cost: float, shuttles_used: float) -> float:
    """Court fee plus shuttles consumed"""
    return court_cost + shuttle_cost * shuttles_used


def per_player_share(total: float, participant_count: int) -> float:
    """Equal share of a session total"""
    if participant_count < 1:
        raise ValueError("a session needs at least one participant")
    return total / participant_count


def month_key_for(date_str: str) -> str:
    """YYYY-MM grouping key of a YYYY-MM-DD date"""
    return date_str[:7]


def list_months(sessions: Iterable[Session]) -> List[str]:
    """Distinct month keys, ascending (lexicographic == chronological for YYYY-MM)"""
    return sorted({s.month_key for s in sessions if s.month_key})


def filter_sessions_by_month(sessions: Iterable[Session], month_key: Optional[str]) -> List[Session]:
    """Sessions whose month key equals month_key"""
    if not month_key:
        return []
    return [s for s in sessions if s.month_key == month_key]


def monthly_totals(sessions: Sequence[Session], month_key: Optional[str]) -> Dict[str, float]:
    """
    Per-participant totals for one month.
    Every participant named in a session of the month is charged that session's per_player share.
    Returns a dict ordered by participant name; empty if the month is unset or has no sessions.
    """
    totals: Dict[str, float] = {}
    for s in filter_sessions_by_month(sessions, month_key):
        for p in s.participants:
            totals[p] = totals.get(p, 0.0) + s.per_player
    return {name: totals[name] for name in sorted(totals)}


def month_summary(sessions: Sequence[Session], month_key: Optional[str]) -> Dict[str, float]:
    """
    Footer figures for the monthly report.
    Returns dict with session count and the sum of session totals.
    """
    in_month = filter_sessions_by_month(sessions, month_key)
    return {
        "sessions": len(in_month),
        "total": sum(s.total for s in in_month),
    }
