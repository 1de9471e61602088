"""
app.py — Apostas em Grupo Streamlit Entry Point

Multi-page navigation via st.navigation() (Streamlit 1.36+).
Ledger loaded once per browser session into st.session_state["app_state"];
every page reads that AppState and re-derives its numbers on each rerun.

Flow:
1. Load bets/bettors/users (concurrent, 15s bound). Failure → blocking error,
   user must reload the page.
2. Login form until a UserSession exists.
3. Sidebar + role-filtered pages (admin-only: Nova Aposta, Acessos).

Run: streamlit run app.py
"""

import logging
import sys
from pathlib import Path

import streamlit as st

# ---------------------------------------------------------------------------
# Path setup — allow 'from core.xxx import' regardless of cwd
# ---------------------------------------------------------------------------
ROOT = Path(__file__).parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.app_state import AppState
from core.ledger_client import LedgerClient, LedgerLoadError
from core.presentation import avatar_initials, has_avatar
from core.session import AuthError, can_edit

# ---------------------------------------------------------------------------
# Logging setup — write to logs/error.log
# ---------------------------------------------------------------------------
LOG_DIR = ROOT / "logs"
LOG_DIR.mkdir(exist_ok=True)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    handlers=[
        logging.FileHandler(LOG_DIR / "error.log"),
        logging.StreamHandler(),
    ],
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Page config — must be first Streamlit call
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="Gestão de Apostas em Grupo",
    page_icon="❄️",
    layout="wide",
    initial_sidebar_state="expanded",
    menu_items={
        "Get Help": None,
        "Report a bug": None,
        "About": "Gestão de Apostas em Grupo",
    },
)

st.markdown(
    """
    <style>
    [data-testid="stSidebar"] { background-color: #0f172a; }
    .block-container { padding-top: 1.5rem; padding-bottom: 2rem; }
    [data-testid="stMetricValue"] { font-size: 1.6rem !important; font-weight: 700 !important; }
    footer { visibility: hidden; }
    </style>
    """,
    unsafe_allow_html=True,
)


# ---------------------------------------------------------------------------
# Ledger load — once per browser session
# ---------------------------------------------------------------------------
def _init_state() -> AppState:
    """
    Build the session AppState. Load failure stops the script: there is no
    partial-data mode, the user must reload.
    """
    state = st.session_state.get("app_state")
    if state is not None:
        return state

    client = LedgerClient()
    try:
        with st.spinner("Carregando dados da banca..."):
            data = client.load_all()
    except LedgerLoadError as exc:
        logger.error("Ledger load failed: %s", exc)
        st.error("Falha ao carregar dados da planilha. Recarregue a página.")
        st.stop()

    state = AppState.from_data(client, data)
    st.session_state["app_state"] = state
    return state


def _login_page(state: AppState) -> None:
    _, center, _ = st.columns([1, 1.2, 1])
    with center:
        st.html(
            """
            <div style="text-align:center; padding:24px 0 12px 0;">
                <div style="font-size:2.6rem;">❄️</div>
                <div style="font-size:1.1rem; font-weight:900; color:#f3f4f6;
                            text-transform:uppercase; letter-spacing:0.05em;">
                    Gestão de Apostas<br>em Grupo
                </div>
                <div style="font-size:0.75rem; color:#9ca3af; margin-top:6px;">Acesse sua conta</div>
            </div>
            """
        )
        with st.form("login_form"):
            username = st.text_input("Usuário", placeholder="Ex: Ramon")
            password = st.text_input("Senha", type="password")
            submitted = st.form_submit_button("Entrar", use_container_width=True, type="primary")
        if submitted:
            try:
                state.login(username, password)
                st.rerun()
            except AuthError as exc:
                st.error(str(exc))
        if state.client.demo:
            st.caption("Modo Demo: use **Ramon** / **123**")


state = _init_state()

if state.user is None:
    _login_page(state)
    st.stop()

# ---------------------------------------------------------------------------
# Sidebar — user card + logout
# ---------------------------------------------------------------------------
with st.sidebar:
    user = state.user
    if has_avatar(user.avatar):
        st.image(user.avatar, width=48)
    else:
        st.markdown(f"**{avatar_initials(user.name)}**")
    st.markdown(f"**{user.name}**  \n{user.role}")
    if st.button("Sair", use_container_width=True):
        state.logout()
        st.rerun()
    st.markdown("---")
    if state.client.demo:
        st.caption("Modo Demo — alterações não são salvas na planilha.")

# ---------------------------------------------------------------------------
# Multi-page navigation — admin-only pages filtered out for other roles
# ---------------------------------------------------------------------------
is_admin = can_edit(state.user)
pages = [st.Page("pages/01_dashboard.py", title="Dashboard", icon="📊", default=True)]
if is_admin:
    pages.append(st.Page("pages/02_new_bet.py", title="Nova Aposta", icon="➕"))
pages += [
    st.Page("pages/03_ledger.py",  title="Histórico",   icon="🧾"),
    st.Page("pages/04_bettors.py", title="Apostadores", icon="👥"),
    st.Page("pages/05_ranking.py", title="Ranking",     icon="🏆"),
    st.Page("pages/06_reports.py", title="Relatórios",  icon="📈"),
]
if is_admin:
    pages.append(st.Page("pages/07_access.py", title="Acessos", icon="🔐"))

pg = st.navigation(pages)
pg.run()
