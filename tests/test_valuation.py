"""
tests/test_valuation.py — Apostas em Grupo
===========================================
Unit tests for core/valuation.py.

Run: pytest tests/test_valuation.py -v
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from core.models import (
    BET_TYPE_MULTIPLE,
    BET_TYPE_SINGLE,
    LOSS,
    PENDING,
    WIN,
    Bet,
    Selection,
    ValidationError,
)
from core.valuation import build_bet, standard_profit, total_odds, valuate


def _bet(status=PENDING, stake=100.0, odds=2.0, profit=None, **kw) -> Bet:
    if profit is None:
        profit = stake * odds - stake
    return Bet(1, "2026-10-01", "Ramon", stake, odds, profit, status=status, **kw)


# ---------------------------------------------------------------------------
# Odds helpers
# ---------------------------------------------------------------------------

class TestTotalOdds:
    def test_product_of_selection_odds(self):
        sels = [Selection("1", odds=2.0), Selection("2", odds=1.5), Selection("3", odds=1.2)]
        assert total_odds(sels) == pytest.approx(3.6)

    def test_single_selection(self):
        assert total_odds([Selection("1", odds=1.85)]) == pytest.approx(1.85)

    def test_odds_of_one_has_no_effect(self):
        sels = [Selection("1", odds=2.5), Selection("2", odds=1.0)]
        assert total_odds(sels) == pytest.approx(2.5)

    def test_zero_odds_counts_as_one(self):
        sels = [Selection("1", odds=2.0), Selection("2", odds=0)]
        assert total_odds(sels) == pytest.approx(2.0)

    def test_total_at_least_each_leg_when_legs_above_one(self):
        sels = [Selection("1", odds=1.4), Selection("2", odds=3.1)]
        total = total_odds(sels)
        assert all(total >= s.odds for s in sels)


class TestStandardProfit:
    def test_even_money(self):
        assert standard_profit(100, 2.0) == pytest.approx(100.0)

    def test_triple_odds(self):
        assert standard_profit(100, 3.0) == pytest.approx(200.0)

    def test_odds_one_is_zero_profit(self):
        assert standard_profit(50, 1.0) == 0.0


# ---------------------------------------------------------------------------
# valuate
# ---------------------------------------------------------------------------

class TestValuate:
    def test_win_money_equals_stake_times_odds_minus_stake(self):
        bet = _bet(status=WIN, stake=80, odds=2.75)
        assert valuate(bet).money_profit == pytest.approx(80 * 2.75 - 80)

    def test_win_units_scale_with_profit(self):
        bet = _bet(status=WIN, stake=100, odds=3.0)
        assert valuate(bet).unit_profit == pytest.approx(2.0)

    def test_win_uses_stored_cashout_value(self):
        bet = _bet(status=WIN, stake=100, odds=3.0, profit=20.0, is_cashout=True)
        value = valuate(bet)
        assert value.money_profit == pytest.approx(20.0)
        assert value.unit_profit == pytest.approx(0.2)

    def test_win_zero_stake_returns_zero_units(self):
        bet = _bet(status=WIN, stake=0.0, odds=2.0, profit=10.0)
        assert valuate(bet).unit_profit == 0.0

    @pytest.mark.parametrize("stake,odds", [(10, 1.5), (100, 10.0), (3.33, 1.01)])
    def test_loss_is_exactly_minus_one_unit(self, stake, odds):
        value = valuate(_bet(status=LOSS, stake=stake, odds=odds))
        assert value.unit_profit == -1.0
        assert value.money_profit == -stake

    def test_pending_shows_potential_but_zero_units(self):
        value = valuate(_bet(status=PENDING, stake=50, odds=2.0))
        assert value.money_profit == pytest.approx(50.0)
        assert value.unit_profit == 0.0


# ---------------------------------------------------------------------------
# build_bet
# ---------------------------------------------------------------------------

class TestBuildBet:
    def test_new_bet_is_pending_with_computed_fields(self):
        sels = [Selection("1", "A x B", "A", 2.0), Selection("2", "C x D", "Over", 1.5)]
        bet = build_bet("Ramon", 100, sels, bet_id=7, bet_date="2026-10-18")
        assert bet.id == 7
        assert bet.date == "2026-10-18"
        assert bet.status == PENDING
        assert bet.total_odds == pytest.approx(3.0)
        assert bet.potential_profit == pytest.approx(200.0)
        assert bet.type == BET_TYPE_MULTIPLE
        assert bet.is_cashout is False

    def test_single_selection_type(self):
        bet = build_bet("Ramon", 10, [Selection("1", odds=1.9)], bet_id=1)
        assert bet.type == BET_TYPE_SINGLE

    def test_total_odds_is_product_of_selections(self):
        sels = [Selection("1", odds=1.3), Selection("2", odds=1.7), Selection("3", odds=2.2)]
        bet = build_bet("Ramon", 10, sels, bet_id=1)
        assert bet.total_odds == pytest.approx(1.3 * 1.7 * 2.2)

    def test_defaults_id_and_date(self):
        bet = build_bet("Ramon", 10, [Selection("1", odds=2.0)])
        assert bet.id > 0
        assert len(bet.date) == 10

    def test_missing_bettor_rejected(self):
        with pytest.raises(ValidationError):
            build_bet("", 10, [Selection("1", odds=2.0)])

    @pytest.mark.parametrize("stake", [0, -5, "abc", float("nan")])
    def test_non_positive_or_invalid_stake_rejected(self, stake):
        with pytest.raises(ValidationError):
            build_bet("Ramon", stake, [Selection("1", odds=2.0)])

    def test_no_selections_rejected(self):
        with pytest.raises(ValidationError):
            build_bet("Ramon", 10, [])

    def test_edit_keeps_id_date_status(self):
        original = Bet(42, "2026-01-05", "Ramon", 10.0, 2.0, 10.0, status=WIN)
        edited = build_bet("João", 20, [Selection("1", odds=3.0)], existing=original)
        assert edited.id == 42
        assert edited.date == "2026-01-05"
        assert edited.status == WIN
        assert edited.bettor == "João"
        assert edited.potential_profit == pytest.approx(40.0)
