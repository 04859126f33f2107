"""
Tests for form helpers used by the GUI.
"""

import math

import pytest

from errors import ValidationError
from forms import (
    EMPTY_SUMMARY,
    SessionForm,
    edit_checklist,
    edit_form_for,
    format_money,
    history_row,
    parse_amount,
    session_summary,
)


class TestParseAmount:

    @pytest.mark.parametrize("text,expected", [("20", 20.0), (" 3.5 ", 3.5), ("0", 0.0)])
    def test_numbers(self, text, expected):
        assert parse_amount(text) == expected

    @pytest.mark.parametrize("text", ["", "  ", "abc", None])
    def test_not_numbers_are_nan(self, text):
        assert math.isnan(parse_amount(text))


class TestSessionForm:

    def test_blank(self):
        form = SessionForm.blank()
        assert form.values()[0] == ""
        assert form.selected == []

    def test_blank_form_is_rejected(self, service):
        with pytest.raises(ValidationError):
            service.sessions.create_session(*SessionForm.blank().values())

    def test_form_values_create_session(self, service):
        form = SessionForm("2024-03-15", "20", "3.5", "4", ["Alice", "Bob"])
        s = service.sessions.create_session(*form.values())
        assert s.total == 34.0

    def test_non_numeric_text_is_rejected(self, service):
        form = SessionForm("2024-03-15", "twenty", "3.5", "4", ["Alice"])
        with pytest.raises(ValidationError) as exc:
            service.sessions.create_session(*form.values())
        assert exc.value.field == "court_cost"


class TestEditForm:

    def test_prefilled(self, service):
        s = service.sessions.create_session("2024-03-15", 20, 3.5, 4.5, ["Bob"])
        form = edit_form_for(s)
        assert form == SessionForm("2024-03-15", "20", "3.5", "4.5", ["Bob"])

    def test_checklist_includes_removed_players(self, service):
        s = service.sessions.create_session("2024-03-15", 20, 3.5, 4, ["Bob", "Zed"])
        assert edit_checklist(["Alice", "Bob"], s) == [
            ("Alice", False), ("Bob", True), ("Zed", True),
        ]


class TestSummaries:

    def test_format_money(self):
        assert format_money(17) == "S$17.00"
        assert format_money(16 / 3) == "S$5.33"

    def test_session_summary(self, service):
        s = service.sessions.create_session("2024-03-15", 20, 3.5, 4, ["Alice", "Bob"])
        assert session_summary(s) == {"total": "S$34.00", "per_player": "S$17.00", "players": "2 player(s)"}

    def test_empty_summary(self):
        assert EMPTY_SUMMARY["total"] == "S$0.00"

    def test_history_row(self, service):
        s = service.sessions.create_session("2024-03-15", 20, 3.5, 4, ["Alice", "Bob"])
        assert history_row(s) == (
            "2024-03-15", "S$20.00", "4 × S$3.50", "S$34.00", "Alice, Bob", "S$17.00",
        )
