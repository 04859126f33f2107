"""
Tests for roster management.
"""

import json

import pytest

from config import ROSTER_KEY
from errors import PersistenceError, ValidationError


class TestAddParticipant:

    def test_add_appends_and_persists(self, service, roster_store):
        name = service.roster.add_participant("  Carol ")
        assert name == "Carol"
        assert service.roster.names == ["Alice", "Bob", "Carol"]
        assert json.loads(roster_store.get(ROSTER_KEY)) == ["Alice", "Bob", "Carol"]

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_empty_name_rejected(self, service, name):
        with pytest.raises(ValidationError) as exc:
            service.roster.add_participant(name)
        assert exc.value.field == "name"
        assert service.roster.names == ["Alice", "Bob"]

    @pytest.mark.parametrize("name", ["Alice", "alice", " ALICE ", "bOb"])
    def test_case_insensitive_duplicate_rejected(self, service, roster_store, name):
        before = roster_store.snapshot()
        with pytest.raises(ValidationError):
            service.roster.add_participant(name)
        assert len(service.roster.names) == 2
        assert roster_store.snapshot() == before

    def test_failed_write_leaves_roster_unchanged(self, service, roster_store):
        roster_store.fail_writes = True
        with pytest.raises(PersistenceError):
            service.roster.add_participant("Carol")
        assert service.roster.names == ["Alice", "Bob"]


class TestRemoveParticipant:

    def test_remove_by_index(self, service, roster_store):
        assert service.roster.remove_participant(0) == "Alice"
        assert service.roster.names == ["Bob"]
        assert json.loads(roster_store.get(ROSTER_KEY)) == ["Bob"]

    @pytest.mark.parametrize("index", [2, 10, -1])
    def test_out_of_range_is_noop(self, service, roster_store, index):
        before = roster_store.snapshot()
        assert service.roster.remove_participant(index) is None
        assert service.roster.names == ["Alice", "Bob"]
        assert roster_store.snapshot() == before

    def test_removal_keeps_past_sessions(self, service):
        service.sessions.create_session("2024-03-15", 20, 3.5, 4, ["Alice", "Bob"])
        service.roster.remove_participant(1)
        assert service.sessions.sessions[0].participants == ["Alice", "Bob"]
        assert service.monthly_totals("2024-03") == {"Alice": 17.0, "Bob": 17.0}

    def test_name_can_be_readded_after_removal(self, service):
        service.roster.remove_participant(0)
        service.roster.add_participant("alice")
        assert service.roster.names == ["Bob", "alice"]
