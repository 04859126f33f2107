"""
ShuttleLedger GUI
- Keep a roster of badminton players and record each session's court and shuttle costs.
- Split every session equally among the players who came, and total each player's share per month.

Run:
  python shuttle_ledger_gui.py

Dependencies:
  pip install structlog
(Tkinter ships with most Python distributions; on some Linux you may need: sudo apt-get install python3-tk)
"""
from __future__ import annotations
import sys
from typing import Optional

try:
    import tkinter as tk
    from tkinter import messagebox
except ModuleNotFoundError:
    tk = None
    messagebox = None

from config import default_data_path
from errors import PersistenceError
from logging_config import configure_logging, get_logger
from main_app import ShuttleLedgerApp
from service import LedgerService
from storage import JsonFileStore

logger = get_logger(__name__)


def main(data_path: Optional[str] = None):
    """Main entry point for the application"""
    if tk is None:
        raise RuntimeError(
            'tkinter is not available. Install it (e.g., on Ubuntu: sudo apt-get install python3-tk) '
            'and re-run to use the GUI.'
        )

    configure_logging()
    path = data_path or default_data_path()
    logger.info("starting", data_path=path)
    try:
        service = LedgerService.open(JsonFileStore(path))
    except PersistenceError as ex:
        logger.error("ledger_open_failed", data_path=path, operation=ex.operation, error=ex.message)
        root = tk.Tk()
        root.withdraw()
        messagebox.showerror("Cannot open ledger", f"{ex.message}\n\nData file: {path}")
        root.destroy()
        sys.exit(1)

    root = tk.Tk()
    ShuttleLedgerApp(root, service)
    root.mainloop()


if __name__ == "__main__":
    main()
