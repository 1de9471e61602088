"""
pages/01_dashboard.py — Dashboard (Visão Geral)

Panels:
1. Summary cards — invested (all bets), profit, units, active (pending) bets
2. Cumulative profit curve — money or units, resolved bets only
3. Profit by bettor — bar chart, shared positive/negative colour rule

Graceful: with no resolved bets the curve shows a flat 4-point baseline.
"""

import sys
from pathlib import Path

import plotly.graph_objects as go
import streamlit as st

ROOT = Path(__file__).parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.aggregation import dashboard_summary, report_by_bettor, time_series
from core.models import MODE_MONEY, MODE_UNITS
from core.presentation import (
    LINE_COLOR,
    MODE_LABELS,
    PLOTLY_BASE,
    chart_records,
    format_currency,
    format_percent,
    format_units,
    format_value,
)

state = st.session_state["app_state"]


# ---------------------------------------------------------------------------
# Chart builders
# ---------------------------------------------------------------------------
def _build_curve(points, mode: str):
    ys = [p.cumulative_units if mode == MODE_UNITS else p.cumulative_profit for p in points]
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=[p.label for p in points], y=ys,
        mode="lines+markers",
        line=dict(color=LINE_COLOR, width=3),
        marker=dict(size=5, color=LINE_COLOR),
        fill="tozeroy",
        fillcolor="rgba(6,182,212,0.12)",
        text=[format_value(y, mode) for y in ys],
        hovertemplate="%{x}<br>%{text}<extra></extra>",
    ))
    fig.add_hline(y=0, line_color="#334155", line_width=1)
    layout = dict(PLOTLY_BASE)
    layout["title"] = dict(text="Evolução de Ganhos", font=dict(size=13, color="#9ca3af"), x=0)
    layout["height"] = 300
    fig.update_layout(**layout)
    return fig


def _build_bettor_bars(records: list[dict]):
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=[r["name"] for r in records],
        y=[r["value"] for r in records],
        marker_color=[r["color"] for r in records],
        text=[r["label"] for r in records],
        textposition="outside",
        textfont=dict(size=10, color="#94a3b8"),
        hovertemplate="%{x}<br>%{text}<extra></extra>",
    ))
    fig.add_hline(y=0, line_color="#334155", line_width=1)
    layout = dict(PLOTLY_BASE)
    layout["title"] = dict(text="Resultado por Apostador", font=dict(size=13, color="#9ca3af"), x=0)
    layout["height"] = 280
    layout["bargap"] = 0.35
    fig.update_layout(**layout)
    return fig


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------
head_col, mode_col = st.columns([3, 1])
with head_col:
    st.title("Visão Geral")
    st.caption("Resumo de desempenho.")
with mode_col:
    mode = st.radio(
        "Modo", [MODE_MONEY, MODE_UNITS],
        format_func=lambda m: MODE_LABELS[m],
        horizontal=True, key="dash_mode",
    )

summary = dashboard_summary(state.bets)

c1, c2, c3, c4 = st.columns(4)
with c1:
    st.metric("Valor Investido", format_currency(summary.invested))
with c2:
    st.metric("Lucro/Prejuízo", format_currency(summary.profit))
with c3:
    st.metric("Unidades", format_units(summary.units))
with c4:
    st.metric("Apostas Ativas", summary.active)

r1, r2, r3 = st.columns(3)
with r1:
    st.metric("Record", f"{summary.wins}V – {summary.losses}D")
with r2:
    st.metric("Taxa de Acerto", format_percent(summary.win_rate))
with r3:
    st.metric("ROI", f"{summary.roi:+.1f}%")

st.markdown("---")

st.plotly_chart(
    _build_curve(time_series(state.bets), mode),
    use_container_width=True, config={"displayModeBar": False},
)

bars = report_by_bettor(state.bets, state.bettors, mode)
if bars:
    st.plotly_chart(
        _build_bettor_bars(chart_records(bars, mode)),
        use_container_width=True, config={"displayModeBar": False},
    )
