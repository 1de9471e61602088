"""
pages/07_access.py — Acessos (admin only)

User accounts: add (name, email, username, password, role, avatar) and
delete. Roles: admin (edits everything), editor, viewer (read only).
"""

import sys
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.models import ACTIVE, INACTIVE, ROLES, ValidationError
from core.session import can_edit

state = st.session_state["app_state"]

st.title("Acessos")

if not can_edit(state.user):
    st.warning("Acesso restrito a administradores.")
    st.stop()

with st.form("add_user", clear_on_submit=True):
    c1, c2 = st.columns(2)
    with c1:
        name = st.text_input("Nome")
        username = st.text_input("Usuário")
        role = st.selectbox("Perfil", list(ROLES), index=len(ROLES) - 1)
    with c2:
        email = st.text_input("Email")
        password = st.text_input("Senha", type="password")
        status = st.selectbox("Status", [ACTIVE, INACTIVE])
    avatar = st.text_input("Link da Foto (URL)")
    if st.form_submit_button("Criar Usuário", type="primary"):
        try:
            state.add_user(username, password, name, email=email, role=role, status=status, avatar=avatar)
        except ValidationError as exc:
            st.error(str(exc))
        else:
            st.success("Usuário criado.")

st.markdown("---")

for user in state.users:
    info_col, act_col = st.columns([5, 1])
    with info_col:
        st.markdown(f"**{user.name}** · `{user.username}` · {user.role} · {user.status}  \n{user.email}")
    with act_col:
        if user.username != state.user.username and st.button("Excluir", key=f"del_user_{user.id}"):
            state.delete_user(user.id)
            st.rerun()
