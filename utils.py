"""
Utility functions for ShuttleLedger application
"""
from __future__ import annotations
import os
import sys
import time
import uuid
from datetime import date, datetime
from typing import Container


def today_str() -> str:
    """Get today's date as ISO string"""
    return date.today().isoformat()


def parse_date(s: str) -> date:
    """Parse YYYY-MM-DD date string"""
    return datetime.strptime(s.strip(), "%Y-%m-%d").date()


def safe_float(x: str, default: float = 0.0) -> float:
    """Convert string to float safely, returning default on error"""
    try:
        return float(x)
    except (TypeError, ValueError):
        return default


def make_session_id(existing: Container[str] = ()) -> str:
    """
    Generate a session id: epoch milliseconds plus a random component.
    Regenerates if the result is already present in `existing`.
    """
    while True:
        sid = f"s_{int(time.time() * 1000)}_{uuid.uuid4().hex[:12]}"
        if sid not in existing:
            return sid


def app_dir() -> str:
    """
    Get application data directory.
    macOS: ~/Library/Application Support/ShuttleLedger, elsewhere ~/.local/share/ShuttleLedger.
    Creates directory if it doesn't exist.
    """
    if sys.platform == "darwin":
        base = os.path.expanduser("~/Library/Application Support")
    else:
        base = os.path.expanduser("~/.local/share")
    path = os.path.join(base, "ShuttleLedger")
    os.makedirs(path, exist_ok=True)
    return path
