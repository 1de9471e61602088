"""
core/models.py — Apostas em Grupo
==================================
Ledger record types. No API calls, no UI, no math beyond payload shaping.

Records:
- Selection:    one leg of a bet (event + pick + decimal odds)
- Bet:          one wagering transaction (1..N selections)
- Bettor:       a group member referenced by bets (joined by NAME, not id)
- User:         application account for login and role gating
- UserSession:  what survives login — the only state that gates mutations

Bets are treated as values: status changes produce a new Bet via
dataclasses.replace() (see core/status_machine.py). Nothing here mutates.

Payload dicts use the remote store's lowerCamel field names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

PENDING = "PENDING"
WIN = "WIN"
LOSS = "LOSS"
BET_STATUSES: tuple = (PENDING, WIN, LOSS)

BET_TYPE_SINGLE = "Simples"
BET_TYPE_MULTIPLE = "Múltipla"

ACTIVE = "Ativo"
INACTIVE = "Inativo"

ROLE_ADMIN = "admin"
ROLE_EDITOR = "editor"
ROLE_VIEWER = "viewer"
ROLES: tuple = (ROLE_ADMIN, ROLE_EDITOR, ROLE_VIEWER)

# Aggregation modes
MODE_MONEY = "money"
MODE_UNITS = "units"


class ValidationError(ValueError):
    """Operator input rejected before any state change."""


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Selection:
    """One leg of a bet."""
    id: str
    event: str = ""
    pick: str = ""
    odds: float = 1.0

    def to_payload(self) -> dict:
        return {"id": self.id, "event": self.event, "pick": self.pick, "odds": self.odds}


@dataclass(frozen=True)
class Bet:
    """
    One wagering transaction.

    potential_profit semantics depend on status:
      PENDING → what the bet pays if it wins (informational)
      WIN     → realised profit (odds-based, or operator value if is_cashout)
      LOSS    → ignored on read; realised loss is always -stake
    """
    id: int
    date: str                       # "YYYY-MM-DD"
    bettor: str                     # Bettor.name, string join, no FK
    stake: float
    total_odds: float
    potential_profit: float
    status: str = PENDING
    selections: tuple = field(default_factory=tuple)
    type: str = BET_TYPE_SINGLE
    is_cashout: bool = False

    def to_payload(self) -> dict:
        return {
            "id":              self.id,
            "date":            self.date,
            "bettor":          self.bettor,
            "type":            self.type,
            "selections":      [s.to_payload() for s in self.selections],
            "stake":           self.stake,
            "totalOdds":       self.total_odds,
            "potentialProfit": self.potential_profit,
            "status":          self.status,
            "isCashout":       self.is_cashout,
        }


@dataclass(frozen=True)
class Bettor:
    id: int
    name: str
    date: str = ""
    status: str = ACTIVE
    avatar: Optional[str] = None

    def to_payload(self) -> dict:
        return {
            "id":     self.id,
            "name":   self.name,
            "date":   self.date,
            "status": self.status,
            "avatar": self.avatar or "",
        }


@dataclass(frozen=True)
class User:
    id: int
    username: str
    password: str                   # plaintext, as stored in the sheet
    name: str = ""
    email: str = ""
    role: str = ROLE_VIEWER
    status: str = ACTIVE
    avatar: Optional[str] = None

    def to_payload(self) -> dict:
        return {
            "id":       self.id,
            "username": self.username,
            "password": self.password,
            "name":     self.name,
            "email":    self.email,
            "role":     self.role,
            "status":   self.status,
            "avatar":   self.avatar or "",
        }


@dataclass(frozen=True)
class UserSession:
    username: str
    role: str
    name: str
    avatar: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
