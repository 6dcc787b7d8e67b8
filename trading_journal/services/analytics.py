"""Trade analytics engine.

Pure reducers over a collection of journal trades: aggregate statistics,
streaks, drawdown, period and category rollups, calendar day rollups,
the R-distribution histogram and the equity curve.
Every function is pure: no I/O, no database access, and the input
collection is never mutated.
"""

import math
import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Callable, Iterable

import numpy as np

from trading_journal.utils.constants import (
    BREAK_EVEN_EPSILON,
    DAY_NAMES,
    HEAT_MAP_DEFAULT_HOUR,
    MONTH_ABBREVIATIONS,
    R_DISTRIBUTION_RANGES,
    TRADING_DAYS_PER_YEAR,
    UNKNOWN_LABEL,
)
from trading_journal.utils.formatting import format_r

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


# ---------------------------------------------------------------------------
# Input coercion and outcome classification
# ---------------------------------------------------------------------------

class Outcome(str, Enum):
    WIN = "win"
    LOSS = "loss"
    BREAK_EVEN = "break_even"


def classify_outcome(r: float) -> Outcome:
    """Win above +epsilon, loss below -epsilon, break-even in between."""
    if r > BREAK_EVEN_EPSILON:
        return Outcome.WIN
    if r < -BREAK_EVEN_EPSILON:
        return Outcome.LOSS
    return Outcome.BREAK_EVEN


def realised_r(trade: Any) -> float:
    """The trade's R outcome; missing, non-numeric or non-finite values count as 0."""
    value = getattr(trade, "realised_r", None)
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        r = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(r) or math.isinf(r):
        return 0.0
    return r


def parse_trade_date(value: Any) -> date | None:
    """Parse a fixed-width YYYY-MM-DD string; anything else is no date."""
    if not isinstance(value, str) or not _DATE_RE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def trade_date(trade: Any) -> str | None:
    """The trade's date string if it is a valid calendar date, else None."""
    value = getattr(trade, "date", None)
    if parse_trade_date(value) is None:
        return None
    return value


def _profit_factor(win_sum: float, loss_sum: float, wins: int) -> float:
    """Gross win / gross loss. inf when there are wins but no losses, 0 with neither."""
    if loss_sum != 0:
        return win_sum / abs(loss_sum)
    return math.inf if wins > 0 else 0.0


def _expectancy(n: int, wins: int, losses: int, avg_win: float, avg_loss: float) -> float:
    if n == 0:
        return 0.0
    return (wins / n) * avg_win + (losses / n) * avg_loss


# ---------------------------------------------------------------------------
# Streak state machine
# ---------------------------------------------------------------------------

@dataclass
class CurrentStreak:
    type: str = "none"  # "win", "loss" or "none"
    count: int = 0


class StreakTracker:
    """Tracks consecutive win/loss runs. A break-even clears both counters."""

    def __init__(self):
        self.win_streak = 0
        self.loss_streak = 0
        self.best_win_streak = 0
        self.worst_loss_streak = 0

    def process(self, outcome: Outcome):
        if outcome is Outcome.WIN:
            self.win_streak += 1
            self.loss_streak = 0
            self.best_win_streak = max(self.best_win_streak, self.win_streak)
        elif outcome is Outcome.LOSS:
            self.loss_streak += 1
            self.win_streak = 0
            self.worst_loss_streak = max(self.worst_loss_streak, self.loss_streak)
        else:
            self.win_streak = 0
            self.loss_streak = 0

    @property
    def current(self) -> CurrentStreak:
        if self.win_streak > 0:
            return CurrentStreak("win", self.win_streak)
        if self.loss_streak > 0:
            return CurrentStreak("loss", self.loss_streak)
        return CurrentStreak()


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class TradeStats:
    """Aggregate snapshot over a trade collection."""
    n: int = 0
    total_r: float = 0.0
    wins: int = 0
    losses: int = 0
    break_evens: int = 0
    winrate: float = 0.0
    avg_r: float = 0.0
    best_r: float = 0.0
    worst_r: float = 0.0
    max_drawdown: float = 0.0
    best_day: float = 0.0
    worst_day: float = 0.0
    avg_per_day: float = 0.0
    profit_factor: float = 0.0  # math.inf when there are wins and no losses
    exp_r: float = 0.0
    avg_win: float = 0.0
    avg_loss: float = 0.0
    win_loss_ratio: float = 0.0
    best_win_streak: int = 0
    worst_loss_streak: int = 0
    active_days: int = 0
    sharpe_ratio: float = 0.0
    current_streak: CurrentStreak = field(default_factory=CurrentStreak)


@dataclass
class DayStats:
    date: str
    total_r: float = 0.0
    trades: int = 0
    wins: int = 0
    losses: int = 0


@dataclass
class PerformanceByPeriod:
    label: str
    total_r: float
    trades: int
    win_rate: float
    avg_r: float


@dataclass
class StrategyPerformance:
    name: str
    trades: int
    total_r: float
    win_rate: float
    avg_r: float
    profit_factor: float
    expectancy: float


@dataclass
class DistributionData:
    range: str
    count: int
    percentage: float


@dataclass
class EquityPoint:
    index: int  # 1-based position in chronological order
    cumulative_r: float
    label: str


@dataclass
class HeatMapCell:
    day: int  # 0 = Sunday
    hour: int
    value: float
    trades: int


@dataclass
class MonthSummary:
    year: int
    month: int
    total_r: float
    active_days: int
    best_day: tuple[str, float] | None
    worst_day: tuple[str, float] | None


# ---------------------------------------------------------------------------
# Aggregate statistics
# ---------------------------------------------------------------------------

def sharpe_ratio(daily_returns: list[float]) -> float:
    """Annualised mean/std of daily R sums. 0 with fewer than 2 days or no dispersion."""
    if len(daily_returns) < 2:
        return 0.0
    values = np.asarray(daily_returns, dtype=float)
    mean = float(np.mean(values))
    std = float(np.std(values))  # population std
    if std == 0 or np.isnan(std):
        return 0.0
    return (mean / std) * math.sqrt(TRADING_DAYS_PER_YEAR)


def compute_stats(trades: Iterable[Any]) -> TradeStats:
    """Compute TradeStats in one forward pass over trades in the given order."""
    n = 0
    total_r = 0.0
    wins = losses = break_evens = 0
    win_sum = loss_sum = 0.0
    best_r = -math.inf
    worst_r = math.inf

    equity = 0.0
    peak = 0.0
    max_drawdown = 0.0
    streaks = StreakTracker()
    day_totals: dict[str, float] = {}

    for t in trades:
        r = realised_r(t)
        n += 1
        total_r += r
        best_r = max(best_r, r)
        worst_r = min(worst_r, r)

        equity += r
        peak = max(peak, equity)
        max_drawdown = max(max_drawdown, peak - equity)

        outcome = classify_outcome(r)
        if outcome is Outcome.WIN:
            wins += 1
            win_sum += r
        elif outcome is Outcome.LOSS:
            losses += 1
            loss_sum += r
        else:
            break_evens += 1
        streaks.process(outcome)

        d = trade_date(t)
        if d is not None:
            day_totals[d] = day_totals.get(d, 0.0) + r

    if n == 0:
        return TradeStats()

    day_values = list(day_totals.values())
    active_days = len(day_values)
    avg_win = win_sum / wins if wins else 0.0
    avg_loss = loss_sum / losses if losses else 0.0

    return TradeStats(
        n=n,
        total_r=total_r,
        wins=wins,
        losses=losses,
        break_evens=break_evens,
        winrate=wins / n * 100,
        avg_r=total_r / n,
        best_r=best_r,
        worst_r=worst_r,
        max_drawdown=max_drawdown,
        best_day=max(day_values) if day_values else 0.0,
        worst_day=min(day_values) if day_values else 0.0,
        avg_per_day=total_r / active_days if active_days else 0.0,
        profit_factor=_profit_factor(win_sum, loss_sum, wins),
        exp_r=_expectancy(n, wins, losses, avg_win, avg_loss),
        avg_win=avg_win,
        avg_loss=avg_loss,
        win_loss_ratio=avg_win / abs(avg_loss) if avg_loss < 0 else 0.0,
        best_win_streak=streaks.best_win_streak,
        worst_loss_streak=streaks.worst_loss_streak,
        active_days=active_days,
        sharpe_ratio=sharpe_ratio(day_values),
        current_streak=streaks.current,
    )


# ---------------------------------------------------------------------------
# Period / category bucketing
# ---------------------------------------------------------------------------

def _period_row(label: str, bucket: list[Any]) -> PerformanceByPeriod:
    n = len(bucket)
    rs = [realised_r(t) for t in bucket]
    total_r = sum(rs)
    wins = sum(1 for r in rs if classify_outcome(r) is Outcome.WIN)
    return PerformanceByPeriod(
        label=label,
        total_r=total_r,
        trades=n,
        win_rate=wins / n * 100 if n else 0.0,
        avg_r=total_r / n if n else 0.0,
    )


def _group_by_label(trades: Iterable[Any], key: Callable[[Any], str]) -> dict[str, list[Any]]:
    """Group by a label in first-seen order; empty labels go to "Unknown"."""
    buckets: dict[str, list[Any]] = {}
    for t in trades:
        label = key(t) or UNKNOWN_LABEL
        buckets.setdefault(label, []).append(t)
    return buckets


def day_of_week_index(d: date) -> int:
    """Sunday = 0 ... Saturday = 6."""
    return (d.weekday() + 1) % 7


def get_performance_by_day_of_week(trades: Iterable[Any]) -> list[PerformanceByPeriod]:
    """Seven Sunday-first rows, present even when empty. Undated trades are skipped."""
    buckets: list[list[Any]] = [[] for _ in DAY_NAMES]
    for t in trades:
        d = parse_trade_date(trade_date(t))
        if d is not None:
            buckets[day_of_week_index(d)].append(t)
    return [_period_row(label, bucket) for label, bucket in zip(DAY_NAMES, buckets)]


def get_performance_by_month(trades: Iterable[Any]) -> list[PerformanceByPeriod]:
    """One row per calendar month with trades, ascending, labelled "Mon YYYY"."""
    buckets: dict[tuple[int, int], list[Any]] = {}
    for t in trades:
        d = parse_trade_date(trade_date(t))
        if d is not None:
            buckets.setdefault((d.year, d.month), []).append(t)
    return [
        _period_row(f"{MONTH_ABBREVIATIONS[month - 1]} {year}", buckets[(year, month)])
        for year, month in sorted(buckets)
    ]


def get_performance_by_session(trades: Iterable[Any]) -> list[PerformanceByPeriod]:
    buckets = _group_by_label(trades, lambda t: getattr(t, "session", ""))
    return [_period_row(label, bucket) for label, bucket in buckets.items()]


def get_strategy_performance(trades: Iterable[Any]) -> list[StrategyPerformance]:
    """Per-model rollup with profit factor and expectancy, first-seen order."""
    rows = []
    for name, bucket in _group_by_label(trades, lambda t: getattr(t, "model", "")).items():
        base = _period_row(name, bucket)
        rs = [realised_r(t) for t in bucket]
        win_rs = [r for r in rs if classify_outcome(r) is Outcome.WIN]
        loss_rs = [r for r in rs if classify_outcome(r) is Outcome.LOSS]
        avg_win = sum(win_rs) / len(win_rs) if win_rs else 0.0
        avg_loss = sum(loss_rs) / len(loss_rs) if loss_rs else 0.0
        rows.append(StrategyPerformance(
            name=name,
            trades=base.trades,
            total_r=base.total_r,
            win_rate=base.win_rate,
            avg_r=base.avg_r,
            profit_factor=_profit_factor(sum(win_rs), sum(loss_rs), len(win_rs)),
            expectancy=_expectancy(base.trades, len(win_rs), len(loss_rs), avg_win, avg_loss),
        ))
    return rows


# ---------------------------------------------------------------------------
# Calendar aggregation
# ---------------------------------------------------------------------------

def get_day_stats(trades: Iterable[Any]) -> dict[str, DayStats]:
    """Rollup keyed by exact date string; undated trades are skipped entirely."""
    days: dict[str, DayStats] = {}
    for t in trades:
        d = trade_date(t)
        if d is None:
            continue
        r = realised_r(t)
        stats = days.setdefault(d, DayStats(date=d))
        stats.total_r += r
        stats.trades += 1
        outcome = classify_outcome(r)
        if outcome is Outcome.WIN:
            stats.wins += 1
        elif outcome is Outcome.LOSS:
            stats.losses += 1
    return days


def get_month_summary(trades: Iterable[Any], year: int, month: int) -> MonthSummary:
    """Totals and best/worst day for one calendar month."""
    prefix = f"{year:04d}-{month:02d}-"
    days = {
        d: stats for d, stats in get_day_stats(trades).items() if d.startswith(prefix)
    }
    best_day = worst_day = None
    for d, stats in days.items():
        if best_day is None or stats.total_r > best_day[1]:
            best_day = (d, stats.total_r)
        if worst_day is None or stats.total_r < worst_day[1]:
            worst_day = (d, stats.total_r)
    return MonthSummary(
        year=year,
        month=month,
        total_r=sum(stats.total_r for stats in days.values()),
        active_days=len(days),
        best_day=best_day,
        worst_day=worst_day,
    )


def get_heat_map_data(trades: Iterable[Any]) -> list[HeatMapCell]:
    """7x24 weekday/hour grid; every cell is present, trades land at midday."""
    grid = {(day, hour): [0.0, 0] for day in range(7) for hour in range(24)}
    for t in trades:
        d = parse_trade_date(trade_date(t))
        if d is None:
            continue
        cell = grid[(day_of_week_index(d), HEAT_MAP_DEFAULT_HOUR)]
        cell[0] += realised_r(t)
        cell[1] += 1
    return [
        HeatMapCell(day=day, hour=hour, value=value, trades=count)
        for (day, hour), (value, count) in grid.items()
    ]


# ---------------------------------------------------------------------------
# Distribution and equity curve
# ---------------------------------------------------------------------------

def get_r_distribution(trades: Iterable[Any]) -> list[DistributionData]:
    """Histogram over the fixed R ranges (lower < r <= upper)."""
    counts = [0] * len(R_DISTRIBUTION_RANGES)
    total = 0
    for t in trades:
        r = realised_r(t)
        total += 1
        for i, (lower, upper, _) in enumerate(R_DISTRIBUTION_RANGES):
            if lower < r <= upper:
                counts[i] += 1
                break
    return [
        DistributionData(
            range=label,
            count=count,
            percentage=count / total * 100 if total else 0.0,
        )
        for (_, _, label), count in zip(R_DISTRIBUTION_RANGES, counts)
    ]


def chronological_key(trade: Any) -> tuple[str, int]:
    """(date, created_at) ordering used by the equity curve and trade listings."""
    return (getattr(trade, "date", None) or "", getattr(trade, "created_at", None) or 0)


def get_equity_curve(trades: Iterable[Any]) -> list[EquityPoint]:
    """Cumulative R per trade, in (date, created_at) order."""
    points = []
    cumulative = 0.0
    for idx, t in enumerate(sorted(trades, key=chronological_key), start=1):
        r = realised_r(t)
        cumulative += r
        points.append(EquityPoint(
            index=idx,
            cumulative_r=cumulative,
            label=f"Trade {idx}: {format_r(r)}",
        ))
    return points
