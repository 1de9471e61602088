"""
pages/05_ranking.py — Ranking

1. Period + mode selectors (R$ / Unidades)
2. Podium — top three, shown 2nd · 1st · 3rd
3. Table — 4th place down: bets, wins, win rate, ROI, streak, value

ROI is always money profit / stake wagered, even in units mode.
"""

import sys
from datetime import date
from pathlib import Path

import pandas as pd
import streamlit as st

ROOT = Path(__file__).parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.aggregation import rank_bettors
from core.models import MODE_MONEY, MODE_UNITS
from core.period_filter import (
    PERIOD_ALL,
    PERIOD_MONTH,
    PERIOD_OPTIONS,
    PERIOD_RANGE,
    PERIOD_YEAR,
    filter_by_period,
)
from core.presentation import (
    MODE_LABELS,
    avatar_initials,
    bar_color,
    format_percent,
    format_value,
    has_avatar,
    podium,
    ranking_value,
)

state = st.session_state["app_state"]

# Medal per podium rank
_MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}

st.title("Ranking")

p_col, m_col = st.columns([3, 1])
with p_col:
    period = st.radio(
        "Período", PERIOD_OPTIONS,
        index=PERIOD_OPTIONS.index(PERIOD_ALL), horizontal=True, key="rank_period",
    )
with m_col:
    mode = st.radio(
        "Modo", [MODE_MONEY, MODE_UNITS],
        format_func=lambda m: MODE_LABELS[m], horizontal=True, key="rank_mode",
    )

reference = None
start = end = None
if period in (PERIOD_MONTH, PERIOD_YEAR):
    reference = st.date_input("Referência", value=date.today(), key="rank_ref")
elif period == PERIOD_RANGE:
    s_col, e_col = st.columns(2)
    with s_col:
        start = st.date_input("De", value=None, key="rank_start")
    with e_col:
        end = st.date_input("Até", value=None, key="rank_end")

filtered = filter_by_period(state.bets, period, reference_date=reference, range_start=start, range_end=end)
rows = rank_bettors(filtered, state.bettors, mode)

if not rows:
    st.info("Nenhum apostador cadastrado.")
    st.stop()

slots, rest = podium(rows)

# ---------------------------------------------------------------------------
# Podium
# ---------------------------------------------------------------------------
cols = st.columns(3)
for col, (rank, row) in zip(cols, slots):
    value = ranking_value(row, mode)
    with col:
        if has_avatar(row.avatar):
            st.image(row.avatar, width=96 if rank == 1 else 72)
        st.html(
            f"""
            <div style="
                text-align:center; background:#111827;
                border:1px solid {'#8b5cf6' if rank == 1 else '#334155'};
                border-radius:10px; padding:{'22px' if rank == 1 else '14px'} 10px;
                margin-top:{'0' if rank == 1 else '24px'};
            ">
                <div style="font-size:1.6rem;">{_MEDALS[rank]}</div>
                <div style="font-size:1.05rem; font-weight:800; color:#f3f4f6;">
                    {row.name if has_avatar(row.avatar) else avatar_initials(row.name) + ' · ' + row.name}
                </div>
                <div style="font-size:1.1rem; font-weight:700; color:{bar_color(value)};">
                    {format_value(value, mode)}
                </div>
                <div style="font-size:0.7rem; color:#9ca3af;">
                    {row.wins}/{row.bets} · {format_percent(row.win_rate)} · 🔥 {row.streak}
                </div>
            </div>
            """
        )

st.markdown("---")

# ---------------------------------------------------------------------------
# Remainder table
# ---------------------------------------------------------------------------
if rest:
    table = [{
        "Pos.":      i,
        "Apostador": r.name,
        "Apostas":   r.bets,
        "Vitórias":  r.wins,
        "Acerto":    format_percent(r.win_rate),
        "ROI":       f"{r.roi:+.1f}%",
        "Sequência": r.streak,
        "Resultado": format_value(ranking_value(r, mode), mode),
    } for i, r in enumerate(rest, start=4)]
    st.dataframe(pd.DataFrame(table), use_container_width=True, hide_index=True)
