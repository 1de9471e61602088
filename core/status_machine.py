"""
core/status_machine.py — Apostas em Grupo
==========================================
Bet status transitions. Pure functions: every call returns a NEW Bet.

States: PENDING, WIN, LOSS. Any state may move to any other (the ledger
toggle cycles PENDING → WIN → LOSS → PENDING).

Rules:
- Every non-cashout transition recomputes potential_profit from odds and
  clears is_cashout. A stale cashout value can never survive a status change.
- cashout() enters WIN with an operator-supplied profit and is_cashout=True.
"""

import math
from dataclasses import replace

from core.models import BET_STATUSES, LOSS, PENDING, WIN, Bet, ValidationError
from core.valuation import standard_profit

# Ledger badge click order
_CYCLE = {PENDING: WIN, WIN: LOSS, LOSS: PENDING}


def next_status(current: str) -> str:
    """
    Status reached by one click on the ledger badge.

    >>> next_status("PENDING")
    'WIN'
    >>> next_status("LOSS")
    'PENDING'
    """
    return _CYCLE.get(current, PENDING)


def transition(bet: Bet, target: str) -> Bet:
    """Move `bet` to `target`, recomputing the odds-based profit."""
    if target not in BET_STATUSES:
        raise ValidationError(f"Status inválido: {target}")
    return replace(
        bet,
        status=target,
        potential_profit=standard_profit(bet.stake, bet.total_odds),
        is_cashout=False,
    )


def toggle(bet: Bet) -> Bet:
    return transition(bet, next_status(bet.status))


def parse_cashout_value(raw) -> float:
    """
    Parse an operator-entered cashout amount ("20", "20,50", 20.5).

    Raises:
        ValidationError: empty, non-numeric or non-finite input.
    """
    if isinstance(raw, str):
        raw = raw.strip().replace(",", ".")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ValidationError("Valor inválido")
    if not math.isfinite(value):
        raise ValidationError("Valor inválido")
    return value


def cashout(bet: Bet, value) -> Bet:
    """
    Settle early at an operator value. Status becomes WIN regardless of
    the current state; odds are not consulted.
    """
    profit = parse_cashout_value(value)
    return replace(bet, status=WIN, potential_profit=profit, is_cashout=True)


def cashout_default(bet: Bet) -> float:
    """Pre-filled value for the cashout editor."""
    if bet.status == LOSS:
        return -bet.stake
    if bet.status == WIN:
        return bet.potential_profit
    return 0.0
