"""
pages/06_reports.py — Relatórios

Two bar charts over the selected period, money or units:
1. Result per bucket — month ("2026-10") or day for Hoje/Semana/Mês/Periodo
2. Result per bettor — highest first

Bars use the shared colour rule: >= 0 purple, < 0 red.
"""

import sys
from datetime import date
from pathlib import Path

import plotly.graph_objects as go
import streamlit as st

ROOT = Path(__file__).parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.aggregation import report_by_bettor, report_by_period
from core.models import MODE_MONEY, MODE_UNITS
from core.period_filter import (
    ALL_BETTORS,
    PERIOD_ALL,
    PERIOD_MONTH,
    PERIOD_OPTIONS,
    PERIOD_RANGE,
    PERIOD_YEAR,
    filter_by_bettor,
    filter_by_period,
)
from core.presentation import MODE_LABELS, PLOTLY_BASE, chart_records

state = st.session_state["app_state"]


def _bar_chart(records: list[dict], title: str):
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=[r["name"] for r in records],
        y=[r["value"] for r in records],
        marker_color=[r["color"] for r in records],
        text=[r["label"] for r in records],
        textposition="outside",
        textfont=dict(size=11, color="#94a3b8"),
        hovertemplate="%{x}<br>%{text}<extra></extra>",
    ))
    fig.add_hline(y=0, line_color="#334155", line_width=1)
    layout = dict(PLOTLY_BASE)
    layout["title"] = dict(text=title, font=dict(size=13, color="#9ca3af"), x=0)
    layout["height"] = 380
    layout["bargap"] = 0.3
    fig.update_layout(**layout)
    return fig


st.title("Relatórios")

p_col, b_col, m_col = st.columns([3, 1, 1])
with p_col:
    period = st.radio(
        "Período", PERIOD_OPTIONS,
        index=PERIOD_OPTIONS.index(PERIOD_ALL), horizontal=True, key="rep_period",
    )
with b_col:
    bettor = st.selectbox("Apostador", [ALL_BETTORS] + state.bettor_names(), key="rep_bettor")
with m_col:
    mode = st.radio(
        "Modo", [MODE_MONEY, MODE_UNITS],
        format_func=lambda m: MODE_LABELS[m], horizontal=True, key="rep_mode",
    )

reference = None
start = end = None
if period in (PERIOD_MONTH, PERIOD_YEAR):
    reference = st.date_input("Referência", value=date.today(), key="rep_ref")
elif period == PERIOD_RANGE:
    s_col, e_col = st.columns(2)
    with s_col:
        start = st.date_input("De", value=None, key="rep_start")
    with e_col:
        end = st.date_input("Até", value=None, key="rep_end")

filtered = filter_by_period(state.bets, period, reference_date=reference, range_start=start, range_end=end)
filtered = filter_by_bettor(filtered, bettor)

left, right = st.columns(2)
with left:
    buckets = report_by_period(filtered, period, mode)
    if buckets:
        st.plotly_chart(
            _bar_chart(chart_records(buckets, mode), "Resultado por Período"),
            use_container_width=True, config={"displayModeBar": False},
        )
    else:
        st.info("Sem apostas resolvidas no período.")
with right:
    players = report_by_bettor(filtered, state.bettors, mode)
    if players:
        st.plotly_chart(
            _bar_chart(chart_records(players, mode), "Resultado por Apostador"),
            use_container_width=True, config={"displayModeBar": False},
        )
