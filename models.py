"""
Data models for ShuttleLedger application
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Session:
    """One recorded badminton session and its cost split. Edits build a new instance."""
    id: str
    date: str  # YYYY-MM-DD
    month_key: str  # YYYY-MM, derived from date
    court_cost: float  # flat fee
    shuttle_cost: float  # per shuttle
    shuttles_used: float  # fractional allowed
    total: float  # court_cost + shuttle_cost * shuttles_used
    per_player: float  # total / len(participants)
    participants: List[str] = field(default_factory=list)  # snapshot, not tied to the roster


@dataclass
class Ledger:
    """Process-wide state: current roster plus session history"""
    roster: List[str] = field(default_factory=list)
    sessions: List[Session] = field(default_factory=list)
