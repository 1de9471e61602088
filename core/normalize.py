"""
core/normalize.py — Apostas em Grupo
=====================================
Inbound record adapter for the spreadsheet store. One function per entity.

The sheet returns field names in either lowerCamel ("totalOdds") or
UpperCamel ("TotalOdds") depending on how the header row was typed, and
numbers may arrive as strings ("50", "2,5"). Everything is coerced here so
the rest of the code only ever sees models.Bet / Bettor / User.

A malformed record is coerced to safe defaults (0 amounts, PENDING, "")
and kept — never dropped, never raised.
"""

import json
import logging
import math
from dataclasses import replace
from typing import Any, Optional

from core.models import (
    ACTIVE,
    BET_TYPE_MULTIPLE,
    BET_TYPE_SINGLE,
    LOSS,
    PENDING,
    ROLE_VIEWER,
    ROLES,
    WIN,
    Bet,
    Bettor,
    Selection,
    User,
)
from core.period_filter import day_string
from core.valuation import standard_profit, total_odds

logger = logging.getLogger(__name__)

_WIN_WORDS = frozenset({
    "win", "won", "green", "vitoria", "vitória", "ganhou", "ganha", "g", "w",
})
_LOSS_WORDS = frozenset({
    "loss", "lose", "lost", "red", "derrota", "perdeu", "perdida", "l",
})


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def read_field(record: dict, name: str, default: Any = None) -> Any:
    """
    Read `name` in lowerCamel or UpperCamel form.

    >>> read_field({"TotalOdds": 2.0}, "totalOdds")
    2.0
    >>> read_field({}, "stake", 0)
    0
    """
    upper = name[:1].upper() + name[1:]
    for key in (name, upper):
        value = record.get(key)
        if value is not None and value != "":
            return value
    return default


def to_float(value: Any, default: float = 0.0) -> float:
    """
    Coerce number-or-string to float. Accepts comma decimals ("2,5").

    >>> to_float("2,5")
    2.5
    >>> to_float("abc")
    0.0
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        result = float(value)
    else:
        text = str(value or "").strip().replace("R$", "").strip()
        if "," in text and "." in text:
            text = text.replace(".", "").replace(",", ".")
        else:
            text = text.replace(",", ".")
        try:
            result = float(text)
        except ValueError:
            return default
    return result if math.isfinite(result) else default


def to_int(value: Any, default: int = 0) -> int:
    try:
        return int(to_float(value, float(default)))
    except (OverflowError, ValueError):
        return default


def to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "sim", "yes", "verdadeiro")
    return bool(value)


def normalize_status(raw: Any) -> str:
    """
    Map any spelling onto PENDING / WIN / LOSS.

    >>> normalize_status("Green")
    'WIN'
    >>> normalize_status("derrota")
    'LOSS'
    >>> normalize_status("???")
    'PENDING'
    """
    text = str(raw or "").strip().lower()
    if text in _WIN_WORDS:
        return WIN
    if text in _LOSS_WORDS:
        return LOSS
    return PENDING


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------

def normalize_selections(raw: Any) -> list[Selection]:
    """Selections may arrive as a list or as a JSON-encoded string."""
    if isinstance(raw, str):
        try:
            raw = json.loads(raw) if raw.strip() else []
        except json.JSONDecodeError:
            logger.warning("Unparseable selections field: %.60s", raw)
            raw = []
    if not isinstance(raw, list):
        return []

    selections = []
    for idx, item in enumerate(raw):
        if not isinstance(item, dict):
            continue
        selections.append(Selection(
            id=str(read_field(item, "id", idx + 1)),
            event=str(read_field(item, "event", "")),
            pick=str(read_field(item, "pick", "")),
            odds=to_float(read_field(item, "odds"), 1.0),
        ))
    return selections


def normalize_bet(record: dict) -> Bet:
    """
    Build a Bet from a raw sheet row.

    total_odds falls back to the product of selection odds; a missing
    potentialProfit is recomputed from stake and total_odds.
    """
    selections = normalize_selections(read_field(record, "selections", []))
    stake = to_float(read_field(record, "stake"))

    odds_raw = read_field(record, "totalOdds")
    odds = to_float(odds_raw, 0.0) if odds_raw is not None else 0.0
    if odds <= 0:
        odds = total_odds(selections)

    profit_raw = read_field(record, "potentialProfit")
    profit = to_float(profit_raw, math.nan) if profit_raw is not None else math.nan
    if math.isnan(profit):
        profit = standard_profit(stake, odds)

    bet_type = read_field(record, "type")
    if bet_type not in (BET_TYPE_SINGLE, BET_TYPE_MULTIPLE):
        bet_type = BET_TYPE_MULTIPLE if len(selections) > 1 else BET_TYPE_SINGLE

    return Bet(
        id=to_int(read_field(record, "id")),
        date=day_string(str(read_field(record, "date", ""))),
        bettor=str(read_field(record, "bettor", "")).strip(),
        stake=stake,
        total_odds=odds,
        potential_profit=profit,
        status=normalize_status(read_field(record, "status")),
        selections=tuple(selections),
        type=bet_type,
        is_cashout=to_bool(read_field(record, "isCashout", False)),
    )


def normalize_bettor(record: dict) -> Bettor:
    status = str(read_field(record, "status", ACTIVE)).strip()
    return Bettor(
        id=to_int(read_field(record, "id")),
        name=str(read_field(record, "name", "")).strip(),
        date=str(read_field(record, "date", "")),
        status=status if status else ACTIVE,
        avatar=_optional_str(read_field(record, "avatar")),
    )


def normalize_user(record: dict) -> User:
    role = str(read_field(record, "role", ROLE_VIEWER)).strip().lower()
    return User(
        id=to_int(read_field(record, "id")),
        username=str(read_field(record, "username", "")).strip(),
        password=str(read_field(record, "password", "")),
        name=str(read_field(record, "name", "")),
        email=str(read_field(record, "email", "")),
        role=role if role in ROLES else ROLE_VIEWER,
        status=str(read_field(record, "status", ACTIVE)).strip() or ACTIVE,
        avatar=_optional_str(read_field(record, "avatar")),
    )


def _optional_str(value: Any) -> Optional[str]:
    text = str(value).strip() if value is not None else ""
    return text or None


def normalize_records(records: Any, adapter) -> list:
    """Apply `adapter` to every dict in `records`; non-lists yield []."""
    if not isinstance(records, list):
        logger.warning("Expected a list of records, got %s", type(records).__name__)
        return []
    return [adapter(r) for r in records if isinstance(r, dict)]


def assign_surrogate_ids(bets: list[Bet]) -> list[Bet]:
    """
    Give every bet a unique id. Rows with a missing (0) or repeated id get
    the next unused negative id, so lookups by id never hit two bets.

    >>> [b.id for b in assign_surrogate_ids([Bet(0, "", "A", 1.0, 2.0, 1.0), Bet(0, "", "B", 1.0, 2.0, 1.0)])]
    [-1, -2]
    """
    taken = {b.id for b in bets if b.id}
    seen: set[int] = set()
    next_id = min(taken | {0}) - 1
    result = []
    for bet in bets:
        if not bet.id or bet.id in seen:
            while next_id in taken:
                next_id -= 1
            logger.warning("Bet row with id %r (%s, %s) given surrogate id %d",
                           bet.id, bet.bettor, bet.date, next_id)
            bet = replace(bet, id=next_id)
            taken.add(next_id)
            next_id -= 1
        seen.add(bet.id)
        result.append(bet)
    return result
