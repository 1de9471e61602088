"""
core/valuation.py — Apostas em Grupo
=====================================
Per-bet money and unit math. No API calls, no UI, no file I/O.

Responsibilities:
- total_odds():      product of selection odds (falsy odd counts as 1.0)
- standard_profit(): stake × odds − stake
- valuate():         BetValue(money_profit, unit_profit) for one bet
- build_bet():       validated Bet construction (new bet or edit)

Unit accounting is risk-normalized:
    WIN  → potential_profit / stake   (scales with odds, or cashout value)
    LOSS → -1.0 exactly               (never odds-dependent)
    PENDING → 0.0                     (excluded from unit aggregates)
"""

import math
import time
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from core.models import (
    BET_TYPE_MULTIPLE,
    BET_TYPE_SINGLE,
    LOSS,
    PENDING,
    WIN,
    Bet,
    Selection,
    ValidationError,
)


@dataclass(frozen=True)
class BetValue:
    money_profit: float
    unit_profit: float


# ---------------------------------------------------------------------------
# Odds helpers
# ---------------------------------------------------------------------------

def total_odds(selections: Iterable[Selection]) -> float:
    """
    Multiply selection odds together. Zero/empty odds count as 1.0 (no effect).

    >>> total_odds([Selection("1", odds=2.0), Selection("2", odds=1.5)])
    3.0
    >>> total_odds([])
    1.0
    """
    result = 1.0
    for sel in selections:
        result *= sel.odds or 1.0
    return result


def standard_profit(stake: float, odds: float) -> float:
    """
    Odds-based profit if the bet wins.

    >>> standard_profit(100, 3.0)
    200.0
    >>> standard_profit(50, 1.0)
    0.0
    """
    return stake * odds - stake


# ---------------------------------------------------------------------------
# Valuation
# ---------------------------------------------------------------------------

def valuate(bet: Bet) -> BetValue:
    """
    Money and unit profit for one bet.

    >>> b = Bet(1, "2026-01-01", "Ramon", 100.0, 2.0, 100.0, status="LOSS")
    >>> valuate(b)
    BetValue(money_profit=-100.0, unit_profit=-1.0)
    """
    if bet.status == WIN:
        units = bet.potential_profit / bet.stake if bet.stake else 0.0
        return BetValue(money_profit=bet.potential_profit, unit_profit=units)
    if bet.status == LOSS:
        return BetValue(money_profit=-bet.stake, unit_profit=-1.0)
    return BetValue(money_profit=bet.potential_profit, unit_profit=0.0)


def is_resolved(bet: Bet) -> bool:
    return bet.status != PENDING


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def _new_bet_id() -> int:
    # Millisecond clock, same id scheme as the rows already in the sheet
    return int(time.time() * 1000)


def build_bet(
    bettor: str,
    stake: float,
    selections: list[Selection],
    bet_id: Optional[int] = None,
    bet_date: Optional[str] = None,
    status: str = PENDING,
    existing: Optional[Bet] = None,
) -> Bet:
    """
    Build a validated Bet from form input.

    When `existing` is given (edit), its id, date and status are kept and
    potential_profit is recomputed from the new odds.

    Args:
        bettor:     Bettor name (join key).
        stake:      Amount risked; must be > 0.
        selections: 1..N legs. Odds multiply into total_odds.
        bet_id:     Explicit id (defaults to millisecond clock).
        bet_date:   ISO date (defaults to today).
        status:     Initial status for new bets.
        existing:   Bet being edited.

    Raises:
        ValidationError: missing bettor, non-positive stake, no selections.
    """
    if not bettor or not str(bettor).strip():
        raise ValidationError("Selecione o apostador.")
    try:
        stake = float(stake)
    except (TypeError, ValueError):
        raise ValidationError("Valor da aposta inválido.")
    if not math.isfinite(stake) or stake <= 0:
        raise ValidationError("O valor da aposta deve ser maior que zero.")
    if not selections:
        raise ValidationError("Adicione pelo menos um jogo.")

    odds = total_odds(selections)

    if existing is not None:
        bet_id = existing.id
        bet_date = existing.date
        status = existing.status

    return Bet(
        id=bet_id if bet_id is not None else _new_bet_id(),
        date=bet_date or date.today().isoformat(),
        bettor=str(bettor).strip(),
        stake=stake,
        total_odds=odds,
        potential_profit=standard_profit(stake, odds),
        status=status,
        selections=tuple(selections),
        type=BET_TYPE_MULTIPLE if len(selections) > 1 else BET_TYPE_SINGLE,
        is_cashout=False,
    )
