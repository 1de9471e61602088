"""
core/aggregation.py — Apostas em Grupo
=======================================
Ledger analytics. Pure functions over a (pre-filtered) list of bets.
No API calls, no UI, no file I/O, no cached state.

Responsibilities:
- rank_bettors():      one RankingRow per known bettor, sorted by mode
- compute_streak():    consecutive WINs from the most recent resolved bet
- time_series():       per-day totals + running cumulative curves
- dashboard_summary(): invested / profit / units / active counts
- report_by_period():  bucketed bar-chart data (month or day)
- report_by_bettor():  per-bettor bar-chart data

Accounting rules:
- PENDING bets never count toward profit, units, win rate or ROI.
- ROI is always money profit / stake wagered on resolved bets, even when
  the ranking is sorted by units.
- Dashboard "invested" sums stake over ALL bets, PENDING included.
- Currency sums are rounded to 2 decimals once, at the output boundary.
"""

from dataclasses import dataclass
from typing import Optional

from core.models import LOSS, MODE_MONEY, MODE_UNITS, PENDING, WIN, Bet, Bettor
from core.period_filter import (
    PERIOD_MONTH,
    PERIOD_RANGE,
    PERIOD_TODAY,
    PERIOD_WEEK,
    day_string,
)
from core.valuation import is_resolved, valuate

# Placeholder x-axis when there is nothing to plot
BASELINE_LABELS = ["Semana 1", "Semana 2", "Semana 3", "Semana 4"]

# Periods whose report bars are per day instead of per month
_DAILY_PERIODS = frozenset({PERIOD_TODAY, PERIOD_WEEK, PERIOD_MONTH, PERIOD_RANGE})


# ---------------------------------------------------------------------------
# Result dataclasses
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RankingRow:
    name: str
    avatar: Optional[str]
    bets: int           # resolved bets only
    wins: int
    losses: int
    profit: float       # money
    units: float
    win_rate: float     # 0-100
    roi: float          # 0-100, money profit / resolved stake
    streak: int


@dataclass(frozen=True)
class SeriesPoint:
    label: str
    profit: float
    units: float
    cumulative_profit: float
    cumulative_units: float


@dataclass(frozen=True)
class DashboardSummary:
    invested: float
    profit: float
    units: float
    active: int
    wins: int
    losses: int
    win_rate: float
    roi: float


@dataclass(frozen=True)
class ReportBar:
    name: str
    value: float


# ---------------------------------------------------------------------------
# Streak
# ---------------------------------------------------------------------------

def compute_streak(bets: list[Bet]) -> int:
    """
    Consecutive WINs counting back from the most recent bet.

    Ordered by date descending, ties by id descending (later insert first).
    PENDING is skipped; LOSS stops the count.
    """
    ordered = sorted(bets, key=lambda b: (day_string(b.date), b.id), reverse=True)
    streak = 0
    for bet in ordered:
        if bet.status == PENDING:
            continue
        if bet.status != WIN:
            break
        streak += 1
    return streak


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------

def _bettor_row(bettor: Bettor, bets: list[Bet]) -> RankingRow:
    own = [b for b in bets if b.bettor == bettor.name]
    resolved = [b for b in own if is_resolved(b)]

    wins = sum(1 for b in resolved if b.status == WIN)
    losses = sum(1 for b in resolved if b.status == LOSS)
    profit = sum(valuate(b).money_profit for b in resolved)
    units = sum(valuate(b).unit_profit for b in resolved)
    staked = sum(b.stake for b in resolved)

    n = len(resolved)
    return RankingRow(
        name=bettor.name,
        avatar=bettor.avatar,
        bets=n,
        wins=wins,
        losses=losses,
        profit=round(profit, 2),
        units=round(units, 2),
        win_rate=round(wins / n * 100, 2) if n else 0.0,
        roi=round(profit / staked * 100, 2) if staked > 0 else 0.0,
        streak=compute_streak(own),
    )


def rank_bettors(bets: list[Bet], bettors: list[Bettor], mode: str = MODE_MONEY) -> list[RankingRow]:
    """
    Ranking table for every known bettor.

    Bettors with no bets in `bets` appear with zero stats. Bets whose
    bettor name matches no Bettor are ignored here (dangling references).

    Args:
        bets:    Already period-filtered bets.
        bettors: Known bettors, in display order (tie-break order).
        mode:    "money" sorts by profit, "units" by units.

    Returns:
        RankingRows sorted descending; equal keys keep bettor-list order.
    """
    rows = [_bettor_row(b, bets) for b in bettors]
    key = (lambda r: r.units) if mode == MODE_UNITS else (lambda r: r.profit)
    return sorted(rows, key=key, reverse=True)


# ---------------------------------------------------------------------------
# Time series
# ---------------------------------------------------------------------------

def _baseline() -> list[SeriesPoint]:
    return [SeriesPoint(label, 0.0, 0.0, 0.0, 0.0) for label in BASELINE_LABELS]


def time_series(bets: list[Bet]) -> list[SeriesPoint]:
    """
    Daily profit/unit totals with running cumulative curves, dates ascending.

    Only resolved bets contribute. With nothing to plot a fixed 4-point
    zero baseline is returned so charts always have an axis.
    """
    by_day: dict[str, list[float]] = {}
    for bet in bets:
        if bet.status == PENDING:
            continue
        value = valuate(bet)
        totals = by_day.setdefault(day_string(bet.date), [0.0, 0.0])
        totals[0] += value.money_profit
        totals[1] += value.unit_profit

    if not by_day:
        return _baseline()

    points = []
    running_profit = 0.0
    running_units = 0.0
    for day in sorted(by_day):
        profit, units = by_day[day]
        running_profit += profit
        running_units += units
        points.append(SeriesPoint(
            label=day,
            profit=round(profit, 2),
            units=round(units, 2),
            cumulative_profit=round(running_profit, 2),
            cumulative_units=round(running_units, 2),
        ))
    return points


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

def dashboard_summary(bets: list[Bet]) -> DashboardSummary:
    """
    Headline numbers for the dashboard cards.

    >>> dashboard_summary([]).active
    0
    """
    resolved = [b for b in bets if is_resolved(b)]
    wins = sum(1 for b in resolved if b.status == WIN)
    losses = sum(1 for b in resolved if b.status == LOSS)
    profit = sum(valuate(b).money_profit for b in resolved)
    units = sum(valuate(b).unit_profit for b in resolved)
    staked = sum(b.stake for b in resolved)

    return DashboardSummary(
        invested=round(sum(b.stake for b in bets), 2),
        profit=round(profit, 2),
        units=round(units, 2),
        active=sum(1 for b in bets if b.status == PENDING),
        wins=wins,
        losses=losses,
        win_rate=round(wins / len(resolved) * 100, 2) if resolved else 0.0,
        roi=round(profit / staked * 100, 2) if staked > 0 else 0.0,
    )


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------

def _mode_value(bet: Bet, mode: str) -> float:
    value = valuate(bet)
    return value.unit_profit if mode == MODE_UNITS else value.money_profit


def report_bucket(bet: Bet, period: str) -> str:
    """Month key ("2026-10") unless the period is short enough for days."""
    day = day_string(bet.date)
    if period in _DAILY_PERIODS:
        return day
    return day[:7]


def report_by_period(bets: list[Bet], period: str, mode: str = MODE_MONEY) -> list[ReportBar]:
    """Resolved profit per bucket, buckets ascending."""
    buckets: dict[str, float] = {}
    for bet in bets:
        if bet.status == PENDING:
            continue
        key = report_bucket(bet, period)
        buckets[key] = buckets.get(key, 0.0) + _mode_value(bet, mode)
    return [ReportBar(name=k, value=round(buckets[k], 2)) for k in sorted(buckets)]


def report_by_bettor(bets: list[Bet], bettors: list[Bettor], mode: str = MODE_MONEY) -> list[ReportBar]:
    """Resolved profit per known bettor, highest first (stable on ties)."""
    bars = []
    for bettor in bettors:
        total = sum(
            _mode_value(b, mode) for b in bets
            if b.bettor == bettor.name and is_resolved(b)
        )
        bars.append(ReportBar(name=bettor.name, value=round(total, 2)))
    return sorted(bars, key=lambda r: r.value, reverse=True)
