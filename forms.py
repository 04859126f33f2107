"""
Form state for the session entry and edit screens.
Kept free of tkinter so it can be used and tested without a display.
"""
from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from config import CURRENCY
from models import Session
from utils import safe_float

EMPTY_SUMMARY = {"total": f"{CURRENCY}0.00", "per_player": f"{CURRENCY}0.00", "players": "–"}


def format_money(value: float) -> str:
    return f"{CURRENCY}{value:.2f}"


def format_number(value: float) -> str:
    """Show 4.0 as '4' and 4.5 as '4.5' in form fields"""
    return f"{value:g}" if value == int(value) else repr(value)


def parse_amount(text: str) -> float:
    """Form text to float; NaN when blank or not a number, so validation rejects it"""
    return safe_float((text or "").strip(), math.nan)


@dataclass
class SessionForm:
    """Raw values of the record/edit session form"""
    date: str = ""
    court_cost: str = ""
    shuttle_cost: str = ""
    shuttles_used: str = ""
    selected: List[str] = field(default_factory=list)

    @classmethod
    def blank(cls) -> "SessionForm":
        """Cleared form"""
        return cls()

    def values(self) -> Tuple[str, float, float, float, List[str]]:
        """Arguments for create_session/update_session"""
        return (
            self.date.strip(),
            parse_amount(self.court_cost),
            parse_amount(self.shuttle_cost),
            parse_amount(self.shuttles_used),
            list(self.selected),
        )


def edit_form_for(session: Session) -> SessionForm:
    """Form pre-filled from an existing session"""
    return SessionForm(
        date=session.date,
        court_cost=format_number(session.court_cost),
        shuttle_cost=format_number(session.shuttle_cost),
        shuttles_used=format_number(session.shuttles_used),
        selected=list(session.participants),
    )


def edit_checklist(roster: Sequence[str], session: Session) -> List[Tuple[str, bool]]:
    """
    Names offered when editing: current roster first, then past participants
    no longer on the roster. Each paired with whether it was in the session.
    """
    names = list(dict.fromkeys(list(roster) + list(session.participants)))
    chosen = set(session.participants)
    return [(name, name in chosen) for name in names]


def session_summary(session: Session) -> Dict[str, str]:
    """Summary panel text after recording a session"""
    return {
        "total": format_money(session.total),
        "per_player": format_money(session.per_player),
        "players": f"{len(session.participants)} player(s)",
    }


def history_row(session: Session) -> Tuple[str, ...]:
    """One row of the session history table"""
    return (
        session.date,
        format_money(session.court_cost),
        f"{format_number(session.shuttles_used)} × {format_money(session.shuttle_cost)}",
        format_money(session.total),
        ", ".join(session.participants),
        format_money(session.per_player),
    )
