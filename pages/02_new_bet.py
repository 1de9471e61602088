"""
pages/02_new_bet.py — Nova Aposta / Editar Aposta (admin only)

Form:
- Bettor (from the bettor list — name is the stored reference)
- 1..N selections: event, pick, decimal odds (odds multiply)
- Stake
- Live total odds and potential profit

Editing: the ledger page sets st.session_state["editing_bet_id"] and
switches here. Edits keep the bet's id, date and status.
"""

import sys
import time
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.models import Selection, ValidationError
from core.presentation import format_currency
from core.valuation import build_bet, standard_profit, total_odds

state = st.session_state["app_state"]

editing_id = st.session_state.get("editing_bet_id")
editing = next((b for b in state.bets if b.id == editing_id), None)

# Number of selection rows shown; seeded from the bet being edited
if st.session_state.get("nb_loaded_for") != editing_id:
    st.session_state["nb_loaded_for"] = editing_id
    st.session_state["nb_legs"] = len(editing.selections) if editing else 1

st.title("Editar Aposta" if editing else "Nova Aposta")

names = state.bettor_names()
if not names:
    st.warning("Cadastre um apostador antes de lançar apostas.")
    st.stop()

default_idx = names.index(editing.bettor) + 1 if editing and editing.bettor in names else 0
bettor = st.selectbox("Apostador", ["Selecione..."] + names, index=default_idx, key=f"nb_bettor_{editing_id}")

selections = []
for i in range(st.session_state["nb_legs"]):
    prev = editing.selections[i] if editing and i < len(editing.selections) else None
    c1, c2, c3 = st.columns([5, 5, 2])
    with c1:
        event = st.text_input("Evento", value=prev.event if prev else "", key=f"nb_event_{editing_id}_{i}")
    with c2:
        pick = st.text_input("Aposta", value=prev.pick if prev else "", key=f"nb_pick_{editing_id}_{i}")
    with c3:
        odds = st.number_input(
            "Odd", value=float(prev.odds) if prev else 1.0,
            min_value=1.0, step=0.01, format="%.2f", key=f"nb_odds_{editing_id}_{i}",
        )
    selections.append(Selection(
        id=prev.id if prev else f"{int(time.time() * 1000)}-{i}",
        event=event, pick=pick, odds=odds,
    ))

add_col, remove_col, _ = st.columns([1, 1, 4])
with add_col:
    if st.button("+ Adicionar Jogo"):
        st.session_state["nb_legs"] += 1
        st.rerun()
with remove_col:
    if st.session_state["nb_legs"] > 1 and st.button("− Remover Jogo"):
        st.session_state["nb_legs"] -= 1
        st.rerun()

st.markdown("---")

odds_total = total_odds(selections)
o_col, s_col, p_col = st.columns(3)
with o_col:
    st.metric("Odd Total", f"{odds_total:.2f}")
with s_col:
    stake = st.number_input(
        "Valor (R$)", value=float(editing.stake) if editing else 50.0,
        min_value=0.0, step=10.0, key=f"nb_stake_{editing_id}",
    )
with p_col:
    st.metric("Lucro Potencial", format_currency(standard_profit(stake, odds_total)))

cancel_col, save_col, _ = st.columns([1, 1, 4])
with cancel_col:
    if st.button("Cancelar"):
        st.session_state.pop("editing_bet_id", None)
        st.switch_page("pages/01_dashboard.py")
with save_col:
    if st.button("Salvar Aposta", type="primary"):
        try:
            bet = build_bet(
                bettor="" if bettor == "Selecione..." else bettor,
                stake=stake,
                selections=selections,
                existing=editing,
            )
        except ValidationError as exc:
            st.error(str(exc))
        else:
            state.save_bet(bet)
            st.session_state.pop("editing_bet_id", None)
            st.switch_page("pages/03_ledger.py")
