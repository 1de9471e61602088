"""
core/period_filter.py — Apostas em Grupo
=========================================
Time-period and bettor filters over a list of bets. Order preserving.

Periods (Portuguese labels, as shown in the UI):
    Hoje     — bet date == today
    Semana   — bet date >= most recent Monday
    Mês      — same month+year as the reference date (default today)
    Ano      — same year as the reference date
    Periodo  — range_start <= date <= range_end (ISO string compare, inclusive)
    Geral / Total — everything

Unknown period values fail OPEN (everything passes).
Dates are compared at day granularity; anything after "T" is ignored.
"""

from datetime import date, timedelta
from typing import Optional

from core.models import Bet

PERIOD_TODAY = "Hoje"
PERIOD_WEEK = "Semana"
PERIOD_MONTH = "Mês"
PERIOD_YEAR = "Ano"
PERIOD_RANGE = "Periodo"
PERIOD_ALL = "Geral"
PERIOD_TOTAL = "Total"

PERIOD_OPTIONS = [PERIOD_TODAY, PERIOD_WEEK, PERIOD_MONTH, PERIOD_YEAR, PERIOD_ALL, PERIOD_RANGE]

ALL_BETTORS = "Todos"


def day_string(raw: str) -> str:
    """
    Calendar-day part of a stored date.

    >>> day_string("2026-03-04T12:30:00.000Z")
    '2026-03-04'
    """
    return (raw or "").split("T")[0].strip()


def parse_day(raw: str) -> Optional[date]:
    try:
        return date.fromisoformat(day_string(raw))
    except ValueError:
        return None


def week_start(today: date) -> date:
    """
    Most recent Monday (today if today is Monday).

    >>> week_start(date(2026, 10, 18))
    datetime.date(2026, 10, 12)
    """
    return today - timedelta(days=today.weekday())


def _matches(
    bet: Bet,
    period: str,
    reference: date,
    today: date,
    range_start: Optional[str],
    range_end: Optional[str],
) -> bool:
    if period == PERIOD_RANGE:
        if not range_start or not range_end:
            return True
        day = day_string(bet.date)
        return range_start <= day <= range_end

    if period not in (PERIOD_TODAY, PERIOD_WEEK, PERIOD_MONTH, PERIOD_YEAR):
        return True

    bet_day = parse_day(bet.date)
    if bet_day is None:
        return False

    if period == PERIOD_TODAY:
        return bet_day == today
    if period == PERIOD_WEEK:
        return bet_day >= week_start(today)
    if period == PERIOD_MONTH:
        return (bet_day.year, bet_day.month) == (reference.year, reference.month)
    return bet_day.year == reference.year


def filter_by_period(
    bets: list[Bet],
    period: str,
    reference_date: Optional[date] = None,
    range_start: Optional[str] = None,
    range_end: Optional[str] = None,
    today: Optional[date] = None,
) -> list[Bet]:
    """
    Subset of `bets` inside the selected period.

    Args:
        bets:           Input bets (not modified).
        period:         One of PERIOD_OPTIONS (or anything — unknown → all).
        reference_date: Month/year being browsed for Mês/Ano. Defaults to today.
        range_start:    ISO date, inclusive, for Periodo.
        range_end:      ISO date, inclusive, for Periodo.
        today:          Clock override (defaults to date.today()).

    Returns:
        New list, same relative order as the input.
    """
    today = today or date.today()
    reference = reference_date or today
    if isinstance(range_start, date):
        range_start = range_start.isoformat()
    if isinstance(range_end, date):
        range_end = range_end.isoformat()
    return [
        b for b in bets
        if _matches(b, period, reference, today, range_start, range_end)
    ]


def filter_by_bettor(bets: list[Bet], bettor: Optional[str]) -> list[Bet]:
    """Bets placed by `bettor` (name equality). None / "Todos" → all bets."""
    if not bettor or bettor == ALL_BETTORS:
        return list(bets)
    return [b for b in bets if b.bettor == bettor]
