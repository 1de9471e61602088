"""
tests/test_presentation.py — Apostas em Grupo
==============================================
Unit tests for core/presentation.py.

Run: pytest tests/test_presentation.py -v
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from core.aggregation import RankingRow, ReportBar
from core.models import LOSS, MODE_MONEY, MODE_UNITS, PENDING, WIN, Bet
from core.presentation import (
    CASHOUT_LABEL,
    NEGATIVE_COLOR,
    NEUTRAL_COLOR,
    POSITIVE_COLOR,
    avatar_initials,
    bar_color,
    chart_records,
    format_currency,
    format_percent,
    format_units,
    format_value,
    has_avatar,
    podium,
    profit_color,
    ranking_value,
    status_label,
)


def _row(name, profit=0.0, units=0.0) -> RankingRow:
    return RankingRow(name, None, 0, 0, 0, profit, units, 0.0, 0.0, 0)


class TestFormatting:
    @pytest.mark.parametrize("value,expected", [
        (1234.5, "R$ 1.234,50"),
        (-50, "-R$ 50,00"),
        (0, "R$ 0,00"),
        (1234567.891, "R$ 1.234.567,89"),
        (None, "R$ 0,00"),
    ])
    def test_currency(self, value, expected):
        assert format_currency(value) == expected

    def test_tiny_negative_rounds_to_unsigned_zero(self):
        assert format_currency(-0.001) == "R$ 0,00"

    @pytest.mark.parametrize("value,expected", [(1.5, "+1.50u"), (-1, "-1.00u"), (0, "+0.00u")])
    def test_units(self, value, expected):
        assert format_units(value) == expected

    def test_units_tiny_negative_rounds_to_unsigned_zero(self):
        assert format_units(-0.001) == "+0.00u"
        assert format_value(-0.001, MODE_UNITS) == "+0.00u"

    def test_format_value_by_mode(self):
        assert format_value(10, MODE_MONEY) == "R$ 10,00"
        assert format_value(10, MODE_UNITS) == "+10.00u"

    def test_percent(self):
        assert format_percent(66.666) == "66.7%"


class TestColors:
    def test_zero_is_positive(self):
        assert bar_color(0) == POSITIVE_COLOR

    def test_negative(self):
        assert bar_color(-0.01) == NEGATIVE_COLOR

    def test_profit_color_pending_is_neutral(self):
        bet = Bet(1, "2026-10-01", "A", 10.0, 2.0, 10.0, status=PENDING)
        assert profit_color(bet, 10.0) == NEUTRAL_COLOR

    def test_profit_color_loss_is_negative(self):
        bet = Bet(1, "2026-10-01", "A", 10.0, 2.0, 10.0, status=LOSS)
        assert profit_color(bet, -10.0) == NEGATIVE_COLOR


class TestLabels:
    def test_status_label(self):
        assert status_label(Bet(1, "", "A", 1.0, 2.0, 1.0, status=WIN)) == "Vitória"
        assert status_label(Bet(1, "", "A", 1.0, 2.0, 1.0, status=PENDING)) == "Pendente"

    def test_cashout_label(self):
        bet = Bet(1, "", "A", 1.0, 2.0, 0.5, status=WIN, is_cashout=True)
        assert status_label(bet) == CASHOUT_LABEL

    def test_initials(self):
        assert avatar_initials("maria") == "MA"
        assert avatar_initials("J") == "J"
        assert avatar_initials("") == "?"

    @pytest.mark.parametrize("url,expected", [
        (None, False), ("", False), ("x.png", False), ("https://i.pravatar.cc/150", True),
    ])
    def test_has_avatar(self, url, expected):
        assert has_avatar(url) is expected


class TestChartRecords:
    def test_report_bars(self):
        records = chart_records([ReportBar("A", 120.0), ReportBar("B", -30.0)])
        assert records[0] == {"name": "A", "value": 120.0, "color": POSITIVE_COLOR, "label": "R$ 120,00"}
        assert records[1]["color"] == NEGATIVE_COLOR
        assert records[1]["label"] == "-R$ 30,00"

    def test_ranking_rows_units(self):
        records = chart_records([_row("A", units=-1.0)], MODE_UNITS, value_attr="units")
        assert records[0]["label"] == "-1.00u"
        assert records[0]["color"] == NEGATIVE_COLOR


class TestPodium:
    def test_visual_order_second_first_third(self):
        rows = [_row("1st"), _row("2nd"), _row("3rd"), _row("4th"), _row("5th")]
        slots, rest = podium(rows)
        assert [(rank, r.name) for rank, r in slots] == [(2, "2nd"), (1, "1st"), (3, "3rd")]
        assert [r.name for r in rest] == ["4th", "5th"]

    def test_two_rows(self):
        slots, rest = podium([_row("1st"), _row("2nd")])
        assert [rank for rank, _ in slots] == [2, 1]
        assert rest == []

    def test_empty(self):
        assert podium([]) == ([], [])

    def test_ranking_value(self):
        row = _row("A", profit=150.0, units=1.5)
        assert ranking_value(row, MODE_MONEY) == 150.0
        assert ranking_value(row, MODE_UNITS) == 1.5
