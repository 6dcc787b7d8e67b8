"""Response schemas for the analytics API.

JSON has no infinity, so an unbounded profit factor is sent as null together
with profit_factor_unbounded=true.
"""

import dataclasses
import math

from pydantic import BaseModel, model_validator


class _ProfitFactorMixin(BaseModel):
    profit_factor: float | None
    profit_factor_unbounded: bool = False

    @model_validator(mode="before")
    @classmethod
    def _split_infinite_profit_factor(cls, data):
        if dataclasses.is_dataclass(data) and not isinstance(data, type):
            data = dataclasses.asdict(data)
        if not isinstance(data, dict):
            return data
        pf = data.get("profit_factor")
        if isinstance(pf, float) and math.isinf(pf):
            data = {**data, "profit_factor": None, "profit_factor_unbounded": True}
        return data


class CurrentStreakRead(BaseModel):
    type: str
    count: int

    model_config = {"from_attributes": True}


class TradeStatsRead(_ProfitFactorMixin):
    n: int
    total_r: float
    wins: int
    losses: int
    break_evens: int
    winrate: float
    avg_r: float
    best_r: float
    worst_r: float
    max_drawdown: float
    best_day: float
    worst_day: float
    avg_per_day: float
    exp_r: float
    avg_win: float
    avg_loss: float
    win_loss_ratio: float
    best_win_streak: int
    worst_loss_streak: int
    active_days: int
    sharpe_ratio: float
    current_streak: CurrentStreakRead


class StrategyPerformanceRead(_ProfitFactorMixin):
    name: str
    trades: int
    total_r: float
    win_rate: float
    avg_r: float
    expectancy: float


class PerformanceByPeriodRead(BaseModel):
    label: str
    total_r: float
    trades: int
    win_rate: float
    avg_r: float

    model_config = {"from_attributes": True}


class DayStatsRead(BaseModel):
    date: str
    total_r: float
    trades: int
    wins: int
    losses: int

    model_config = {"from_attributes": True}


class DistributionRead(BaseModel):
    range: str
    count: int
    percentage: float

    model_config = {"from_attributes": True}


class EquityPointRead(BaseModel):
    index: int
    cumulative_r: float
    label: str

    model_config = {"from_attributes": True}


class MistakeStatsRead(BaseModel):
    mistake: str
    trades: int
    wins: int
    losses: int
    total_r: float
    expectancy: float

    model_config = {"from_attributes": True}


class HeatMapCellRead(BaseModel):
    day: int
    hour: int
    value: float
    trades: int

    model_config = {"from_attributes": True}


class DayTotal(BaseModel):
    date: str
    total_r: float


class MonthSummaryRead(BaseModel):
    year: int
    month: int
    total_r: float
    active_days: int
    best_day: DayTotal | None
    worst_day: DayTotal | None
    days: list[DayStatsRead]
