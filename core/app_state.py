"""
core/app_state.py — Apostas em Grupo
=====================================
Session state: the three loaded collections plus the logged-in user.

Local state is authoritative for the session. Every mutation:
1. validates input (ValidationError → nothing changes)
2. replaces the affected collection with an updated copy (optimistic)
3. hands the write to client.notify() — fire-and-forget, never awaited,
   never reconciled. A failed write means local and remote diverge until
   the next full reload.

Held in st.session_state by app.py; pages receive it explicitly.
"""

import logging
import time
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional

from core.ledger_client import LedgerData
from core.models import (
    ACTIVE,
    INACTIVE,
    ROLE_VIEWER,
    ROLES,
    Bet,
    Bettor,
    User,
    UserSession,
    ValidationError,
)
from core.session import authenticate
from core.status_machine import cashout, toggle, transition

logger = logging.getLogger(__name__)


def _new_id() -> int:
    return int(time.time() * 1000)


@dataclass
class AppState:
    client: object                  # anything with notify(action, payload=None, **fields)
    bets: list[Bet] = field(default_factory=list)
    bettors: list[Bettor] = field(default_factory=list)
    users: list[User] = field(default_factory=list)
    user: Optional[UserSession] = None

    @classmethod
    def from_data(cls, client, data: LedgerData) -> "AppState":
        return cls(client=client, bets=list(data.bets), bettors=list(data.bettors), users=list(data.users))

    # -- session -----------------------------------------------------------

    def login(self, username: str, password: str) -> UserSession:
        self.user = authenticate(self.users, username, password)
        return self.user

    def logout(self) -> None:
        self.user = None

    # -- lookups -----------------------------------------------------------

    def get_bet(self, bet_id: int) -> Bet:
        for bet in self.bets:
            if bet.id == bet_id:
                return bet
        raise ValidationError(f"Aposta {bet_id} não encontrada.")

    def bettor_names(self) -> list[str]:
        return [b.name for b in self.bettors]

    # -- bets --------------------------------------------------------------

    def _replace_bet(self, updated: Bet) -> None:
        self.bets = [updated if b.id == updated.id else b for b in self.bets]

    def save_bet(self, bet: Bet) -> Bet:
        """Insert a new bet (newest first) or replace an edited one."""
        if any(b.id == bet.id for b in self.bets):
            self._replace_bet(bet)
            self.client.notify("editBet", bet.to_payload())
            logger.info("Bet %d edited", bet.id)
        else:
            self.bets = [bet] + self.bets
            self.client.notify("addBet", bet.to_payload())
            logger.info("Bet %d added for %s", bet.id, bet.bettor)
        return bet

    def delete_bet(self, bet_id: int) -> None:
        self.get_bet(bet_id)
        self.bets = [b for b in self.bets if b.id != bet_id]
        self.client.notify("deleteBet", {"id": bet_id})
        logger.info("Bet %d deleted", bet_id)

    def _push_status(self, bet: Bet) -> None:
        self.client.notify(
            "updateBetStatus",
            id=bet.id,
            status=bet.status,
            profit=bet.potential_profit,
            isCashout=bet.is_cashout,
        )

    def set_bet_status(self, bet_id: int, status: str) -> Bet:
        updated = transition(self.get_bet(bet_id), status)
        self._replace_bet(updated)
        self._push_status(updated)
        return updated

    def toggle_bet_status(self, bet_id: int) -> Bet:
        updated = toggle(self.get_bet(bet_id))
        self._replace_bet(updated)
        self._push_status(updated)
        return updated

    def cashout_bet(self, bet_id: int, value) -> Bet:
        updated = cashout(self.get_bet(bet_id), value)
        self._replace_bet(updated)
        self._push_status(updated)
        logger.info("Bet %d cashed out at %.2f", bet_id, updated.potential_profit)
        return updated

    # -- bettors -----------------------------------------------------------

    def add_bettor(self, name: str, avatar: str = "") -> Bettor:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Informe o nome do apostador.")
        bettor = Bettor(
            id=_new_id(),
            name=name,
            date=date.today().isoformat(),
            status=ACTIVE,
            avatar=(avatar or "").strip() or None,
        )
        self.bettors = self.bettors + [bettor]
        self.client.notify("addBettor", bettor.to_payload())
        return bettor

    def delete_bettor(self, bettor_id: int) -> None:
        # Bets keep their name reference; no cascade.
        self.bettors = [b for b in self.bettors if b.id != bettor_id]
        self.client.notify("deleteBettor", {"id": bettor_id})

    def toggle_bettor_status(self, bettor_id: int) -> Optional[Bettor]:
        updated = None
        bettors = []
        for b in self.bettors:
            if b.id == bettor_id:
                b = replace(b, status=INACTIVE if b.status == ACTIVE else ACTIVE)
                updated = b
            bettors.append(b)
        self.bettors = bettors
        if updated is not None:
            self.client.notify("updateBettorStatus", {"id": updated.id, "status": updated.status})
        return updated

    # -- users -------------------------------------------------------------

    def add_user(
        self,
        username: str,
        password: str,
        name: str,
        email: str = "",
        role: str = ROLE_VIEWER,
        status: str = ACTIVE,
        avatar: str = "",
    ) -> User:
        username = (username or "").strip()
        if not username or not password or not (name or "").strip():
            raise ValidationError("Preencha nome, usuário e senha.")
        if any(u.username.lower() == username.lower() for u in self.users):
            raise ValidationError("Usuário já existe.")
        if role not in ROLES:
            raise ValidationError(f"Perfil inválido: {role}")
        user = User(
            id=_new_id(),
            username=username,
            password=password,
            name=name.strip(),
            email=(email or "").strip(),
            role=role,
            status=status,
            avatar=(avatar or "").strip() or None,
        )
        self.users = self.users + [user]
        self.client.notify("addUser", user.to_payload())
        return user

    def delete_user(self, user_id: int) -> None:
        self.users = [u for u in self.users if u.id != user_id]
        self.client.notify("deleteUser", {"id": user_id})
