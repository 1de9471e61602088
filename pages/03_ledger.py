"""
pages/03_ledger.py — Histórico (bet ledger)

- Status filter: Todos / Pendente / Vitória / Derrota
- Full table (pandas + st.dataframe column_config)
- Admin actions per bet: cycle status (PENDING → WIN → LOSS → PENDING),
  cashout at an operator value, edit, delete

Profit column: LOSS shows -stake, WIN and PENDING show potential_profit
(grey while pending).
"""

import sys
from pathlib import Path

import pandas as pd
import streamlit as st

ROOT = Path(__file__).parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.models import BET_STATUSES, ValidationError
from core.presentation import STATUS_LABELS, format_currency, status_label
from core.session import can_edit
from core.status_machine import cashout_default, next_status
from core.valuation import valuate

state = st.session_state["app_state"]
is_admin = can_edit(state.user)

head_col, btn_col = st.columns([4, 1])
with head_col:
    st.title("Histórico")
with btn_col:
    if is_admin and st.button("+ Nova Aposta", type="primary", use_container_width=True):
        st.session_state.pop("editing_bet_id", None)
        st.switch_page("pages/02_new_bet.py")

status_filter = st.radio(
    "Status", ["ALL"] + list(BET_STATUSES),
    format_func=lambda s: STATUS_LABELS[s],
    horizontal=True, key="ledger_filter",
)

bets = [b for b in state.bets if status_filter == "ALL" or b.status == status_filter]

if not bets:
    st.info("Nenhuma aposta encontrada.")
    st.stop()

rows = []
for b in bets:
    rows.append({
        "#":         b.id,
        "Data":      b.date,
        "Apostador": b.bettor,
        "Tipo":      b.type,
        "Jogos":     " | ".join(f"{s.event} — {s.pick} @{s.odds:.2f}" for s in b.selections),
        "Odd":       f"{b.total_odds:.2f}",
        "Valor":     format_currency(b.stake),
        "Lucro":     format_currency(valuate(b).money_profit),
        "Status":    status_label(b),
    })

st.dataframe(
    pd.DataFrame(rows),
    use_container_width=True,
    hide_index=True,
    column_config={
        "#":         st.column_config.NumberColumn("#", width=60, format="%d"),
        "Data":      st.column_config.TextColumn("Data", width=90),
        "Apostador": st.column_config.TextColumn("Apostador", width=110),
        "Tipo":      st.column_config.TextColumn("Tipo", width=80),
        "Jogos":     st.column_config.TextColumn("Jogos", width=320),
        "Odd":       st.column_config.TextColumn("Odd", width=60),
        "Valor":     st.column_config.TextColumn("Valor", width=90),
        "Lucro":     st.column_config.TextColumn("Lucro", width=100),
        "Status":    st.column_config.TextColumn("Status", width=120),
    },
)

if not is_admin:
    st.stop()

# ---------------------------------------------------------------------------
# Admin actions
# ---------------------------------------------------------------------------
st.markdown("---")
st.subheader("Ações")

labels = {b.id: f"#{b.id} · {b.date} · {b.bettor} · {status_label(b)}" for b in bets}
bet_id = st.selectbox("Aposta", list(labels), format_func=lambda i: labels[i], key="ledger_pick")
bet = state.get_bet(bet_id)

a1, a2, a3 = st.columns(3)
with a1:
    nxt = STATUS_LABELS[next_status(bet.status)]
    if st.button(f"Marcar como {nxt}", use_container_width=True):
        state.toggle_bet_status(bet_id)
        st.rerun()
with a2:
    if st.button("Editar", use_container_width=True):
        st.session_state["editing_bet_id"] = bet_id
        st.switch_page("pages/02_new_bet.py")
with a3:
    if st.button("Excluir", use_container_width=True):
        state.delete_bet(bet_id)
        st.rerun()

with st.form(f"cashout_{bet_id}"):
    value = st.text_input("Cashout — lucro final (R$)", value=f"{cashout_default(bet):.2f}")
    if st.form_submit_button("Salvar Cashout"):
        try:
            state.cashout_bet(bet_id, value)
        except ValidationError as exc:
            st.error(str(exc))
        else:
            st.rerun()
