"""
Main application window for ShuttleLedger GUI
"""
from __future__ import annotations

try:
    import tkinter as tk
    from tkinter import ttk, messagebox
except ModuleNotFoundError:
    tk = None
    ttk = None
    messagebox = None

from errors import NotFoundError, PersistenceError, ValidationError
from forms import EMPTY_SUMMARY, SessionForm, format_money, history_row, session_summary
from gui_dialogs import EditSessionDialog, PlayerChecklist
from logging_config import get_logger
from service import LedgerService
from utils import today_str

logger = get_logger(__name__)


class ShuttleLedgerApp(ttk.Frame):
    """Main application window"""

    def __init__(self, master: tk.Tk, service: LedgerService):
        super().__init__(master, padding=8)
        self.master = master
        self.master.title("ShuttleLedger")
        self.master.geometry("1000x650")
        self.grid(row=0, column=0, sticky="nsew")
        self.master.rowconfigure(0, weight=1)
        self.master.columnconfigure(0, weight=1)

        self.service = service

        self._build_ui()
        self.refresh_all()

    # ---------- UI ----------
    def _build_ui(self):
        """Build main UI with tabs"""
        nb = ttk.Notebook(self)
        nb.grid(row=0, column=0, sticky="nsew")
        self.rowconfigure(0, weight=1)
        self.columnconfigure(0, weight=1)

        self.tab_players = ttk.Frame(nb, padding=8)
        self.tab_sessions = ttk.Frame(nb, padding=8)
        self.tab_monthly = ttk.Frame(nb, padding=8)

        nb.add(self.tab_sessions, text="Sessions")
        nb.add(self.tab_players, text="Players")
        nb.add(self.tab_monthly, text="Monthly")

        self._build_players_tab()
        self._build_sessions_tab()
        self._build_monthly_tab()

    def _build_players_tab(self):
        """Build roster management tab"""
        self.tab_players.columnconfigure(0, weight=1)
        frm = ttk.Frame(self.tab_players)
        frm.grid(row=0, column=0, sticky="nsew")

        ttk.Label(frm, text="Players:").grid(row=0, column=0, sticky="w")
        self.players_list = tk.Listbox(frm, height=18)
        self.players_list.grid(row=1, column=0, sticky="nsew", pady=6)
        frm.rowconfigure(1, weight=1)
        frm.columnconfigure(0, weight=1)

        controls = ttk.Frame(frm)
        controls.grid(row=2, column=0, sticky="ew")
        self.new_player_var = tk.StringVar()
        entry = ttk.Entry(controls, textvariable=self.new_player_var, width=18)
        entry.pack(side="left")
        entry.bind("<Return>", lambda _e: self.add_player())
        ttk.Button(controls, text="Add", command=self.add_player).pack(side="left", padx=4)
        ttk.Button(controls, text="Remove Selected", command=self.remove_selected_player).pack(side="left", padx=4)

        self.player_error = tk.StringVar(value="")
        ttk.Label(frm, textvariable=self.player_error, foreground="red").grid(row=3, column=0, sticky="w")

        ttk.Label(frm, text="Note: removing a player only affects new sessions; recorded sessions keep their players.").grid(
            row=4, column=0, sticky="w", pady=(8, 0))

    def _build_sessions_tab(self):
        """Build record form, summary and history"""
        self.tab_sessions.columnconfigure(1, weight=1)

        form = ttk.LabelFrame(self.tab_sessions, text="Record session", padding=8)
        form.grid(row=0, column=0, sticky="nw")

        self.v_date = tk.StringVar(value=today_str())
        self.v_court = tk.StringVar()
        self.v_shuttle = tk.StringVar()
        self.v_used = tk.StringVar()

        r = 0
        for label, var in (
            ("Date (YYYY-MM-DD)", self.v_date),
            ("Court cost", self.v_court),
            ("Shuttle cost (each)", self.v_shuttle),
            ("Shuttles used", self.v_used),
        ):
            ttk.Label(form, text=label).grid(row=r, column=0, sticky="w", pady=2)
            ttk.Entry(form, textvariable=var, width=16).grid(row=r, column=1, sticky="w")
            r += 1

        ttk.Label(form, text="Players").grid(row=r, column=0, sticky="nw", pady=(8, 0))
        self.checklist = PlayerChecklist(form)
        self.checklist.grid(row=r, column=1, sticky="w", pady=(8, 0))
        r += 1

        self.session_error = tk.StringVar(value="")
        ttk.Label(form, textvariable=self.session_error, foreground="red", wraplength=260).grid(
            row=r, column=0, columnspan=2, sticky="w", pady=(6, 0))
        r += 1

        btns = ttk.Frame(form)
        btns.grid(row=r, column=0, columnspan=2, sticky="w", pady=(8, 0))
        ttk.Button(btns, text="Save Session", command=self.record_session).pack(side="left", padx=3)
        ttk.Button(btns, text="Clear", command=self.clear_session_form).pack(side="left", padx=3)
        r += 1

        self.summary_vars = {k: tk.StringVar(value=v) for k, v in EMPTY_SUMMARY.items()}
        summ = ttk.Frame(form)
        summ.grid(row=r, column=0, columnspan=2, sticky="w", pady=(10, 0))
        for i, (label, key) in enumerate((("Total", "total"), ("Per player", "per_player"), ("Players", "players"))):
            ttk.Label(summ, text=f"{label}:").grid(row=i, column=0, sticky="w")
            ttk.Label(summ, textvariable=self.summary_vars[key]).grid(row=i, column=1, sticky="w", padx=6)

        hist = ttk.Frame(self.tab_sessions)
        hist.grid(row=0, column=1, sticky="nsew", padx=(10, 0))
        self.tab_sessions.rowconfigure(0, weight=1)
        hist.columnconfigure(0, weight=1)
        hist.rowconfigure(1, weight=1)

        top = ttk.Frame(hist)
        top.grid(row=0, column=0, sticky="ew")
        ttk.Button(top, text="Edit", command=self.edit_selected_session).pack(side="left", padx=3)
        ttk.Button(top, text="Delete", command=self.delete_selected_session).pack(side="left", padx=3)

        cols = ("date", "court", "shuttles", "total", "players", "per_player")
        self.history_tree = ttk.Treeview(hist, columns=cols, show="headings", height=18)
        for c, w in zip(cols, [95, 80, 120, 80, 260, 90]):
            self.history_tree.heading(c, text=c)
            self.history_tree.column(c, width=w, anchor="w")
        self.history_tree.grid(row=1, column=0, sticky="nsew", pady=6)

        yscroll = ttk.Scrollbar(hist, orient="vertical", command=self.history_tree.yview)
        self.history_tree.configure(yscroll=yscroll.set)
        yscroll.grid(row=1, column=1, sticky="ns")

    def _build_monthly_tab(self):
        """Build monthly totals tab"""
        self.tab_monthly.columnconfigure(0, weight=1)

        filt = ttk.Frame(self.tab_monthly)
        filt.grid(row=0, column=0, sticky="ew")
        ttk.Label(filt, text="Month").pack(side="left")
        self.month_var = tk.StringVar(value="")
        self.month_select = ttk.Combobox(filt, textvariable=self.month_var, width=12, state="readonly")
        self.month_select.pack(side="left", padx=4)
        self.month_select.bind("<<ComboboxSelected>>", lambda _e: self.refresh_monthly())

        self.monthly_note = tk.StringVar(value="")
        ttk.Label(self.tab_monthly, textvariable=self.monthly_note).grid(row=1, column=0, sticky="w", pady=(6, 0))

        cols = ("player", "total")
        self.monthly_tree = ttk.Treeview(self.tab_monthly, columns=cols, show="headings", height=14)
        for c, w in zip(cols, [200, 120]):
            self.monthly_tree.heading(c, text=c)
            self.monthly_tree.column(c, width=w, anchor="w")
        self.monthly_tree.grid(row=2, column=0, sticky="nsew", pady=6)
        self.tab_monthly.rowconfigure(2, weight=1)

    # ---------- Players ----------
    def add_player(self):
        """Add new player"""
        self.player_error.set("")
        try:
            self.service.roster.add_participant(self.new_player_var.get())
        except ValidationError as ex:
            self.player_error.set(ex.message)
            return
        except PersistenceError as ex:
            messagebox.showerror("Save failed", ex.message)
            return
        self.new_player_var.set("")
        self.refresh_players()

    def remove_selected_player(self):
        """Remove selected player"""
        sel = self.players_list.curselection()
        if not sel:
            return
        idx = sel[0]
        name = self.players_list.get(idx)
        if not messagebox.askyesno("Remove player", f"Remove '{name}' from new sessions?"):
            return
        try:
            self.service.roster.remove_participant(idx)
        except PersistenceError as ex:
            messagebox.showerror("Save failed", ex.message)
            return
        self.refresh_players()

    # ---------- Sessions ----------
    def _read_form(self) -> SessionForm:
        return SessionForm(
            date=self.v_date.get(),
            court_cost=self.v_court.get(),
            shuttle_cost=self.v_shuttle.get(),
            shuttles_used=self.v_used.get(),
            selected=self.checklist.selected(),
        )

    def record_session(self):
        """Validate the form and record a session"""
        self.session_error.set("")
        try:
            session = self.service.sessions.create_session(*self._read_form().values())
        except ValidationError as ex:
            self.session_error.set(ex.message)
            return
        except PersistenceError as ex:
            messagebox.showerror("Save failed", ex.message)
            return
        for key, text in session_summary(session).items():
            self.summary_vars[key].set(text)
        self.refresh_sessions()

    def clear_session_form(self):
        """Reset the record form and summary"""
        blank = SessionForm.blank()
        self.v_date.set(blank.date)
        self.v_court.set(blank.court_cost)
        self.v_shuttle.set(blank.shuttle_cost)
        self.v_used.set(blank.shuttles_used)
        self.checklist.clear()
        self.session_error.set("")
        for key, text in EMPTY_SUMMARY.items():
            self.summary_vars[key].set(text)

    def edit_selected_session(self):
        """Edit selected session"""
        sel = self.history_tree.selection()
        if not sel:
            messagebox.showinfo("Edit", "Select a session row first.")
            return
        try:
            session = self.service.sessions.get_session(sel[0])
        except NotFoundError:
            self.refresh_sessions()
            return
        dlg = EditSessionDialog(self.master, self.service.sessions, self.service.roster.names, session)
        self.master.wait_window(dlg)
        self.refresh_sessions()

    def delete_selected_session(self):
        """Delete selected session"""
        sel = self.history_tree.selection()
        if not sel:
            messagebox.showinfo("Delete", "Select a session row first.")
            return
        if not messagebox.askyesno("Delete", "Delete this session?"):
            return
        try:
            self.service.sessions.delete_session(sel[0])
        except PersistenceError as ex:
            messagebox.showerror("Save failed", ex.message)
            return
        self.refresh_sessions()

    # ---------- Refresh ----------
    def refresh_all(self):
        """Refresh all UI elements"""
        self.refresh_players()
        self.refresh_sessions()

    def refresh_players(self):
        """Refresh roster list and the record form checklist"""
        self.players_list.delete(0, tk.END)
        names = self.service.roster.names
        for p in names:
            self.players_list.insert(tk.END, p)
        kept = set(self.checklist.selected())
        self.checklist.set_items([(p, p in kept) for p in names])

    def refresh_sessions(self):
        """Refresh history, month options and monthly totals"""
        for iid in self.history_tree.get_children():
            self.history_tree.delete(iid)
        for s in self.service.sessions.sessions:
            self.history_tree.insert("", "end", iid=s.id, values=history_row(s))

        months = self.service.list_months()
        self.month_select["values"] = months
        if self.month_var.get() not in months:
            self.month_var.set(months[-1] if months else "")
        self.refresh_monthly()

    def refresh_monthly(self):
        """Refresh the per-player totals of the selected month"""
        for iid in self.monthly_tree.get_children():
            self.monthly_tree.delete(iid)
        month = self.month_var.get()
        if not month:
            self.monthly_note.set("No sessions yet")
            return

        totals = self.service.monthly_totals(month)
        if not totals:
            self.monthly_note.set("No data for this month.")
            return
        for name, amount in totals.items():
            self.monthly_tree.insert("", "end", values=(name, format_money(amount)))
        summary = self.service.month_summary(month)
        self.monthly_note.set(
            f"{month}: {summary['sessions']} session(s), {format_money(summary['total'])} in total"
        )
