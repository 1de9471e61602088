"""
pages/04_bettors.py — Apostadores

Admin: add (name + avatar URL), toggle Ativo/Inativo, delete.
Deleting or renaming never touches existing bets — they keep the old name.
"""

import sys
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.models import ACTIVE, ValidationError
from core.presentation import avatar_initials, has_avatar
from core.session import can_edit

state = st.session_state["app_state"]
is_admin = can_edit(state.user)

st.title("Apostadores")

if is_admin:
    with st.form("add_bettor", clear_on_submit=True):
        n_col, a_col = st.columns(2)
        with n_col:
            name = st.text_input("Nome do Jogador")
        with a_col:
            avatar = st.text_input("Link da Foto (URL)")
        if st.form_submit_button("Adicionar", type="primary"):
            try:
                state.add_bettor(name, avatar)
            except ValidationError as exc:
                st.error(str(exc))
            else:
                st.rerun()

if not state.bettors:
    st.info("Nenhum apostador cadastrado.")

for bettor in state.bettors:
    pic_col, info_col, act_col = st.columns([1, 5, 3])
    with pic_col:
        if has_avatar(bettor.avatar):
            st.image(bettor.avatar, width=40)
        else:
            st.markdown(f"**{avatar_initials(bettor.name)}**")
    with info_col:
        color = "#22c55e" if bettor.status == ACTIVE else "#6b7280"
        st.html(
            f"""
            <div style="line-height:1.4;">
                <div style="font-weight:700; color:#f3f4f6;">{bettor.name}</div>
                <div style="font-size:0.72rem; color:#9ca3af;">
                    Desde {bettor.date or "—"} ·
                    <span style="color:{color}; font-weight:600;">{bettor.status}</span>
                </div>
            </div>
            """
        )
    if is_admin:
        with act_col:
            t_col, d_col = st.columns(2)
            with t_col:
                if st.button("Ativar/Inativar", key=f"toggle_{bettor.id}"):
                    state.toggle_bettor_status(bettor.id)
                    st.rerun()
            with d_col:
                if st.button("Excluir", key=f"del_{bettor.id}"):
                    state.delete_bettor(bettor.id)
                    st.rerun()
