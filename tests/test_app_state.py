"""
tests/test_app_state.py — Apostas em Grupo
===========================================
Unit tests for core/app_state.py.

The store client is replaced by a recorder; nothing touches the network.
Run: pytest tests/test_app_state.py -v
"""

import pytest
import sys
import os
from unittest.mock import MagicMock

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from core.app_state import AppState
from core.ledger_client import LedgerClient, LedgerData
from core.models import (
    ACTIVE,
    INACTIVE,
    LOSS,
    PENDING,
    ROLE_ADMIN,
    WIN,
    Bet,
    Bettor,
    Selection,
    User,
    ValidationError,
)
from core.session import InvalidCredentialsError
from core.valuation import build_bet


URL = "https://script.example.com/exec"


class RecordingClient:
    def __init__(self):
        self.calls = []

    def notify(self, action, payload=None, **fields):
        self.calls.append((action, payload, fields))


@pytest.fixture
def state():
    data = LedgerData(
        bets=[
            Bet(2, "2026-10-02", "A", 100.0, 3.0, 200.0),
            Bet(1, "2026-10-01", "B", 50.0, 2.0, 50.0, status=WIN),
        ],
        bettors=[Bettor(1, "A"), Bettor(2, "B")],
        users=[User(1, "ramon", "123", name="Ramon", role=ROLE_ADMIN)],
    )
    return AppState.from_data(RecordingClient(), data)


class TestSession:
    def test_login_logout(self, state):
        assert state.login("ramon", "123").is_admin
        assert state.user is not None
        state.logout()
        assert state.user is None

    def test_bad_login_leaves_user_unset(self, state):
        with pytest.raises(InvalidCredentialsError):
            state.login("ramon", "wrong")
        assert state.user is None


class TestBets:
    def test_add_bet_prepends_and_notifies(self, state):
        bet = build_bet("A", 10, [Selection("1", odds=1.5)], bet_id=99, bet_date="2026-10-03")
        state.save_bet(bet)
        assert state.bets[0].id == 99
        action, payload, _ = state.client.calls[-1]
        assert action == "addBet"
        assert payload["totalOdds"] == pytest.approx(1.5)

    def test_edit_replaces_in_place(self, state):
        edited = build_bet("B", 20, [Selection("1", odds=2.0)], existing=state.get_bet(2))
        state.save_bet(edited)
        assert [b.id for b in state.bets] == [2, 1]
        assert state.get_bet(2).bettor == "B"
        assert state.client.calls[-1][0] == "editBet"

    def test_delete_bet(self, state):
        state.delete_bet(1)
        assert [b.id for b in state.bets] == [2]
        assert state.client.calls[-1] == ("deleteBet", {"id": 1}, {})

    def test_delete_unknown_bet(self, state):
        with pytest.raises(ValidationError):
            state.delete_bet(404)
        assert state.client.calls == []

    def test_collections_replaced_not_mutated(self, state):
        before = state.bets
        state.toggle_bet_status(2)
        assert state.bets is not before
        assert before[0].status == PENDING


class TestStatusChanges:
    def test_toggle_pushes_flat_update(self, state):
        updated = state.toggle_bet_status(2)
        assert updated.status == WIN
        action, payload, fields = state.client.calls[-1]
        assert action == "updateBetStatus"
        assert payload is None
        assert fields == {"id": 2, "status": WIN, "profit": 200.0, "isCashout": False}

    def test_set_status(self, state):
        assert state.set_bet_status(1, LOSS).status == LOSS
        assert state.get_bet(1).status == LOSS

    def test_cashout(self, state):
        updated = state.cashout_bet(2, "20")
        assert updated.status == WIN
        assert updated.is_cashout
        assert state.client.calls[-1][2]["profit"] == 20.0
        assert state.client.calls[-1][2]["isCashout"] is True

    def test_invalid_cashout_changes_nothing(self, state):
        with pytest.raises(ValidationError):
            state.cashout_bet(2, "abc")
        assert state.get_bet(2).status == PENDING
        assert state.client.calls == []


class TestBettors:
    def test_add_bettor(self, state):
        bettor = state.add_bettor("  C ", "https://img.example.com/c.png")
        assert bettor.name == "C"
        assert state.bettor_names() == ["A", "B", "C"]
        assert state.client.calls[-1][0] == "addBettor"

    def test_add_bettor_requires_name(self, state):
        with pytest.raises(ValidationError):
            state.add_bettor("   ")

    def test_toggle_bettor_status(self, state):
        assert state.toggle_bettor_status(1).status == INACTIVE
        assert state.client.calls[-1] == ("updateBettorStatus", {"id": 1, "status": INACTIVE}, {})
        assert state.toggle_bettor_status(1).status == ACTIVE

    def test_delete_bettor_keeps_bets(self, state):
        state.delete_bettor(2)
        assert state.bettor_names() == ["A"]
        assert any(b.bettor == "B" for b in state.bets)


class TestUsers:
    def test_add_user(self, state):
        user = state.add_user("maria", "pw", "Maria", email="m@x.com")
        assert user.role == "viewer"
        assert len(state.users) == 2
        assert state.client.calls[-1][1]["username"] == "maria"

    def test_duplicate_username_rejected(self, state):
        with pytest.raises(ValidationError):
            state.add_user("RAMON", "pw", "Other")

    def test_missing_fields_rejected(self, state):
        with pytest.raises(ValidationError):
            state.add_user("x", "", "X")

    def test_invalid_role_rejected(self, state):
        with pytest.raises(ValidationError):
            state.add_user("x", "pw", "X", role="owner")

    def test_delete_user(self, state):
        state.delete_user(1)
        assert state.users == []
        assert state.client.calls[-1] == ("deleteUser", {"id": 1}, {})


class TestIdLessRows:
    def test_toggle_one_id_less_bet_leaves_the_other(self):
        client = LedgerClient(base_url=URL, session=MagicMock())
        client.load_raw = lambda: {
            "bets": [
                {"date": "2026-10-02", "bettor": "A", "stake": 10, "totalOdds": 2, "status": "WIN"},
                {"date": "2026-10-01", "bettor": "B", "stake": 20, "totalOdds": 3, "status": "LOSS"},
            ],
            "bettors": [],
            "users": [],
        }
        state = AppState.from_data(RecordingClient(), client.load_all())
        ids = [b.id for b in state.bets]
        assert len(set(ids)) == 2

        state.toggle_bet_status(ids[0])
        assert [b.bettor for b in state.bets] == ["A", "B"]
        assert state.bets[1].status == LOSS
        assert state.bets[1].stake == 20.0
        assert state.client.calls[-1][2]["id"] == ids[0]
