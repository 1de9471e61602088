"""
core/presentation.py — Apostas em Grupo
========================================
Formatting and chart shaping shared by every page. No Streamlit imports.

Cross-view rules:
- Money: pt-BR BRL, "R$ 1.234,56" / "-R$ 50,00"
- Units: always signed, "+1.50u" / "-1.00u"
- Bar colour: value >= 0 → POSITIVE_COLOR, value < 0 → NEGATIVE_COLOR
  (dashboard, ranking and reports all use bar_color())
- Podium: top three shown in visual order [2nd, 1st, 3rd]; the table
  below lists everyone from 4th place down.
"""

from typing import Iterable, Optional

from core.models import LOSS, MODE_MONEY, MODE_UNITS, PENDING, WIN, Bet

POSITIVE_COLOR = "#8b5cf6"
NEGATIVE_COLOR = "#ef4444"
NEUTRAL_COLOR = "#6b7280"

STATUS_LABELS = {
    "ALL":   "Todos",
    PENDING: "Pendente",
    WIN:     "Vitória",
    LOSS:    "Derrota",
}
CASHOUT_LABEL = "Vitória (Cashout)"

STATUS_COLORS = {
    PENDING: "#f59e0b",
    WIN:     "#22c55e",
    LOSS:    NEGATIVE_COLOR,
}

MODE_LABELS = {MODE_MONEY: "R$", MODE_UNITS: "Unidades"}

# Visual slot → rank index (0-based) for the podium
PODIUM_ORDER = (1, 0, 2)


# ---------------------------------------------------------------------------
# Number formatting
# ---------------------------------------------------------------------------

def format_currency(value: float) -> str:
    """
    pt-BR Real formatting.

    >>> format_currency(1234.5)
    'R$ 1.234,50'
    >>> format_currency(-50)
    '-R$ 50,00'
    """
    value = round(float(value or 0.0), 2)
    body = f"{abs(value):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    sign = "-" if value < 0 else ""
    return f"{sign}R$ {body}"


def format_units(value: float) -> str:
    """
    >>> format_units(1.5)
    '+1.50u'
    >>> format_units(-1)
    '-1.00u'
    """
    # + 0.0 turns -0.0 into 0.0, same sign rule as format_currency
    return f"{round(float(value or 0.0), 2) + 0.0:+.2f}u"


def format_value(value: float, mode: str) -> str:
    return format_units(value) if mode == MODE_UNITS else format_currency(value)


def format_percent(value: float) -> str:
    return f"{float(value or 0.0):.1f}%"


def bar_color(value: float) -> str:
    return POSITIVE_COLOR if value >= 0 else NEGATIVE_COLOR


def profit_color(bet: Bet, money_profit: float) -> str:
    """Ledger row colour: grey while pending, else sign colour."""
    if bet.status == PENDING:
        return NEUTRAL_COLOR
    return STATUS_COLORS[WIN] if money_profit >= 0 else NEGATIVE_COLOR


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------

def status_label(bet: Bet) -> str:
    if bet.is_cashout:
        return CASHOUT_LABEL
    return STATUS_LABELS.get(bet.status, bet.status)


def avatar_initials(name: str) -> str:
    """
    Two-letter fallback when there is no usable avatar URL.

    >>> avatar_initials("joão")
    'JO'
    """
    return (name or "?")[:2].upper()


def has_avatar(url: Optional[str]) -> bool:
    return bool(url) and len(url) > 5


# ---------------------------------------------------------------------------
# Chart / table shaping
# ---------------------------------------------------------------------------

def chart_records(items: Iterable, mode: str = MODE_MONEY, value_attr: str = "value",
                  name_attr: str = "name") -> list[dict]:
    """
    Bar-chart rows: {name, value, color, label}.

    Works on any objects exposing `name_attr` / `value_attr`
    (ReportBar, RankingRow with value_attr="profit", ...).
    """
    records = []
    for item in items:
        value = getattr(item, value_attr)
        records.append({
            "name":  getattr(item, name_attr),
            "value": value,
            "color": bar_color(value),
            "label": format_value(value, mode),
        })
    return records


def podium(rows: list) -> tuple[list[tuple[int, object]], list]:
    """
    Split a sorted ranking into podium and remainder.

    Returns:
        (podium, rest) where podium is [(rank, row), ...] in visual order
        2nd, 1st, 3rd (missing places skipped) and rest is rows[3:].
    """
    top = rows[:3]
    slots = [(idx + 1, top[idx]) for idx in PODIUM_ORDER if idx < len(top)]
    return slots, list(rows[3:])


def ranking_value(row, mode: str) -> float:
    return row.units if mode == MODE_UNITS else row.profit


# ---------------------------------------------------------------------------
# Plotly layout (plain dict, no plotly import here)
# ---------------------------------------------------------------------------
PLOTLY_BASE = dict(
    paper_bgcolor="#0b1120",
    plot_bgcolor="#111827",
    font=dict(color="#d1d5db", size=11),
    margin=dict(l=50, r=20, t=40, b=50),
    xaxis=dict(gridcolor="#334155", linecolor="#334155", tickfont=dict(size=10)),
    yaxis=dict(gridcolor="#334155", linecolor="#334155", tickfont=dict(size=10)),
    hoverlabel=dict(bgcolor="#1e293b", bordercolor="#334155", font_color="#f3f4f6"),
    showlegend=False,
)
LINE_COLOR = "#06b6d4"
