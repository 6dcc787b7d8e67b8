"""Analytics API — stats, rollups and curves over the (filtered) journal."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from trading_journal.api.trades import load_trades
from trading_journal.database import get_session
from trading_journal.models.trade import Trade
from trading_journal.schemas.analytics import (
    DayStatsRead,
    DayTotal,
    DistributionRead,
    EquityPointRead,
    HeatMapCellRead,
    MistakeStatsRead,
    MonthSummaryRead,
    PerformanceByPeriodRead,
    StrategyPerformanceRead,
    TradeStatsRead,
)
from trading_journal.services import analytics
from trading_journal.services.date_filter import filter_by_year, get_filtered_trades
from trading_journal.services.mistakes import calculate_mistake_stats
from trading_journal.utils.constants import FILTER_MODES

router = APIRouter(prefix="/api/analytics", tags=["analytics"])

_PERIOD_ROLLUPS = {
    "day-of-week": analytics.get_performance_by_day_of_week,
    "month": analytics.get_performance_by_month,
    "session": analytics.get_performance_by_session,
}


def filtered_trades(
    mode: str = Query(default="all", alias="filter"),
    date_from: str | None = Query(default=None, alias="from"),
    date_to: str | None = Query(default=None, alias="to"),
    year_filter: str = Query(default="all", alias="year"),
    session: Session = Depends(get_session),
) -> list[Trade]:
    """Journal trades in chronological order, narrowed by year and date range."""
    if mode not in FILTER_MODES:
        raise HTTPException(
            status_code=400,
            detail=f"filter must be one of: {', '.join(FILTER_MODES)}",
        )
    if year_filter != "all" and not year_filter.isdigit():
        raise HTTPException(status_code=400, detail="year must be a number or 'all'")
    trades = filter_by_year(load_trades(session), year_filter)
    return get_filtered_trades(trades, mode, date_from, date_to)


@router.get("/summary", response_model=TradeStatsRead)
def summary(trades: list[Trade] = Depends(filtered_trades)):
    return TradeStatsRead.model_validate(analytics.compute_stats(trades))


@router.get("/performance/strategy", response_model=list[StrategyPerformanceRead])
def strategy_performance(trades: list[Trade] = Depends(filtered_trades)):
    return [
        StrategyPerformanceRead.model_validate(row)
        for row in analytics.get_strategy_performance(trades)
    ]


@router.get("/performance/{period}", response_model=list[PerformanceByPeriodRead])
def performance_by_period(period: str, trades: list[Trade] = Depends(filtered_trades)):
    rollup = _PERIOD_ROLLUPS.get(period)
    if rollup is None:
        raise HTTPException(status_code=404, detail=f"Unknown period: {period}")
    return rollup(trades)


@router.get("/day-stats", response_model=dict[str, DayStatsRead])
def day_stats(trades: list[Trade] = Depends(filtered_trades)):
    return analytics.get_day_stats(trades)


@router.get("/distribution", response_model=list[DistributionRead])
def distribution(trades: list[Trade] = Depends(filtered_trades)):
    return analytics.get_r_distribution(trades)


@router.get("/equity-curve", response_model=list[EquityPointRead])
def equity_curve(trades: list[Trade] = Depends(filtered_trades)):
    return analytics.get_equity_curve(trades)


@router.get("/mistakes", response_model=list[MistakeStatsRead])
def mistakes(trades: list[Trade] = Depends(filtered_trades)):
    return calculate_mistake_stats(trades)


@router.get("/heat-map", response_model=list[HeatMapCellRead])
def heat_map(trades: list[Trade] = Depends(filtered_trades)):
    return analytics.get_heat_map_data(trades)


@router.get("/calendar/{year}/{month}", response_model=MonthSummaryRead)
def calendar_month(
    year: int,
    month: int,
    trades: list[Trade] = Depends(filtered_trades),
):
    if not 1 <= month <= 12:
        raise HTTPException(status_code=400, detail="month must be between 1 and 12")
    month_summary = analytics.get_month_summary(trades, year, month)
    prefix = f"{year:04d}-{month:02d}-"
    days = [
        stats for date, stats in sorted(analytics.get_day_stats(trades).items())
        if date.startswith(prefix)
    ]
    return MonthSummaryRead(
        year=month_summary.year,
        month=month_summary.month,
        total_r=month_summary.total_r,
        active_days=month_summary.active_days,
        best_day=DayTotal(date=month_summary.best_day[0], total_r=month_summary.best_day[1]) if month_summary.best_day else None,
        worst_day=DayTotal(date=month_summary.worst_day[0], total_r=month_summary.worst_day[1]) if month_summary.worst_day else None,
        days=[DayStatsRead.model_validate(s) for s in days],
    )
