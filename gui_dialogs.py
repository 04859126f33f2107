"""
Dialog windows for ShuttleLedger GUI
"""
from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Tuple

try:
    import tkinter as tk
    from tkinter import ttk, messagebox
except ModuleNotFoundError:
    tk = None
    ttk = None
    messagebox = None

from errors import NotFoundError, PersistenceError, ValidationError
from forms import SessionForm, edit_checklist, edit_form_for
from logging_config import get_logger
from models import Session
from sessions import SessionLedger

logger = get_logger(__name__)


class PlayerChecklist(ttk.Frame):
    """Checkbox per name. Selection is keyed by name, never by position."""

    def __init__(self, master, items: Sequence[Tuple[str, bool]] = ()):
        super().__init__(master)
        self.vars: Dict[str, tk.BooleanVar] = {}
        self.set_items(items)

    def set_items(self, items: Sequence[Tuple[str, bool]]):
        """Rebuild the checkboxes from (name, checked) pairs"""
        for child in self.winfo_children():
            child.destroy()
        self.vars = {}
        for r, (name, checked) in enumerate(items):
            v = tk.BooleanVar(value=checked)
            self.vars[name] = v
            ttk.Checkbutton(self, text=name, variable=v).grid(row=r, column=0, sticky="w")

    def selected(self) -> List[str]:
        return [name for name, v in self.vars.items() if v.get()]

    def clear(self):
        for v in self.vars.values():
            v.set(False)


class EditSessionDialog(tk.Toplevel):
    """Modal dialog for editing a recorded session"""

    def __init__(self, master, ledger: SessionLedger, roster: Sequence[str], session: Session):
        super().__init__(master)
        self.title("Edit Session")
        self.resizable(False, False)
        self.ledger = ledger
        self.session_id = session.id
        self.result: Optional[Session] = None

        self._bind_enter_to_ok()

        form = edit_form_for(session)
        self.v_date = tk.StringVar(value=form.date)
        self.v_court = tk.StringVar(value=form.court_cost)
        self.v_shuttle = tk.StringVar(value=form.shuttle_cost)
        self.v_used = tk.StringVar(value=form.shuttles_used)

        frm = ttk.Frame(self, padding=10)
        frm.grid(row=0, column=0, sticky="nsew")

        r = 0
        for label, var in (
            ("Date (YYYY-MM-DD)", self.v_date),
            ("Court cost", self.v_court),
            ("Shuttle cost (each)", self.v_shuttle),
            ("Shuttles used", self.v_used),
        ):
            ttk.Label(frm, text=label).grid(row=r, column=0, sticky="w", pady=2)
            ttk.Entry(frm, textvariable=var, width=18).grid(row=r, column=1, sticky="w")
            r += 1

        ttk.Label(frm, text="Players").grid(row=r, column=0, sticky="nw", pady=(8, 0))
        self.checklist = PlayerChecklist(frm, edit_checklist(roster, session))
        self.checklist.grid(row=r, column=1, sticky="w", pady=(8, 0))
        r += 1

        self.error_var = tk.StringVar(value="")
        ttk.Label(frm, textvariable=self.error_var, foreground="red").grid(
            row=r, column=0, columnspan=2, sticky="w", pady=(8, 0)
        )
        r += 1

        btns = ttk.Frame(frm)
        btns.grid(row=r, column=0, columnspan=2, sticky="e", pady=(10, 0))
        ttk.Button(btns, text="Save", command=self._ok).grid(row=0, column=0, padx=4)
        ttk.Button(btns, text="Cancel", command=self._cancel).grid(row=0, column=1, padx=4)

        self.grab_set()
        self.transient(master)

    def _bind_enter_to_ok(self):
        """Bind Enter/Return to Save"""

        def on_enter(event=None):
            self._ok()
            return "break"

        self.bind("<Return>", on_enter)
        self.bind("<KP_Enter>", on_enter)

    def _ok(self):
        """Validate and save changes"""
        self.error_var.set("")
        form = SessionForm(
            date=self.v_date.get(),
            court_cost=self.v_court.get(),
            shuttle_cost=self.v_shuttle.get(),
            shuttles_used=self.v_used.get(),
            selected=self.checklist.selected(),
        )
        try:
            self.result = self.ledger.update_session(self.session_id, *form.values())
        except ValidationError as ex:
            self.error_var.set(ex.message)
            return
        except NotFoundError:
            logger.info("edit_target_gone", session_id=self.session_id)
        except PersistenceError as ex:
            messagebox.showerror("Save failed", ex.message, parent=self)
            return
        self.destroy()

    def _cancel(self):
        """Cancel and close"""
        self.result = None
        self.destroy()
