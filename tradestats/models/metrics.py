"""Pydantic models for calculator results."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Result(BaseModel):
    model_config = ConfigDict(frozen=True)


class BasicMetrics(_Result):
    """Win/loss summary over closed trades."""

    total_trades: int = Field(0, description="Number of closed trades")
    open_trades: int = Field(0, description="Open trades seen and excluded")
    winning_trades: int = Field(0, description="Closed trades with net P&L > 0")
    losing_trades: int = Field(0, description="Closed trades with net P&L < 0")
    breakeven_trades: int = Field(0, description="Closed trades with net P&L == 0")
    win_rate: float = Field(0.0, description="Win rate percentage")
    loss_rate: float = Field(0.0, description="Loss rate percentage")
    breakeven_rate: float = Field(0.0, description="Breakeven rate percentage")
    total_pnl: float = Field(0.0, description="Sum of net P&L")
    average_pnl: float = Field(0.0, description="Mean net P&L per closed trade")
    average_win: float = Field(0.0, description="Mean net P&L of winners")
    average_loss: float = Field(0.0, description="Mean net P&L of losers (negative)")
    largest_win: float = Field(0.0, description="Best winner")
    largest_loss: float = Field(0.0, description="Worst loser (negative)")
    gross_profit: float = Field(0.0, description="Sum of winning net P&L")
    gross_loss: float = Field(0.0, description="Absolute sum of losing net P&L")
    profit_factor: float = Field(0.0, description="Gross profit / gross loss")
    profit_factor_infinite: bool = Field(
        False, description="True when there are wins but no losses (profit_factor holds the sentinel)"
    )


class ExpectancyMetrics(_Result):
    """Expected value of a trade."""

    expectancy: float = Field(0.0, description="Average expected net P&L per trade")
    expectancy_percent: float = Field(0.0, description="Average net P&L percent per trade")


class SharpeRatioMetrics(_Result):
    """Per-trade return distribution statistics."""

    sharpe_ratio: float = Field(0.0, description="average_return / standard_deviation")
    average_return: float = Field(0.0, description="Mean pnl_percent")
    standard_deviation: float = Field(0.0, description="Sample standard deviation of pnl_percent")


class DrawdownPeriod(_Result):
    """One peak-to-recovery episode of the equity curve."""

    start_date: datetime
    end_date: Optional[datetime] = Field(None, description="None while still in drawdown")
    peak: float
    trough: float
    drawdown: float
    drawdown_percent: float
    duration_days: float


class DrawdownMetrics(_Result):
    """Running-peak drawdown of cumulative net P&L."""

    max_drawdown: float = 0.0
    max_drawdown_percent: float = 0.0
    current_drawdown: float = 0.0
    current_drawdown_percent: float = 0.0
    average_drawdown: float = 0.0
    drawdown_periods: List[DrawdownPeriod] = Field(default_factory=list)


class EquityCurvePoint(_Result):
    """Cumulative net P&L after a trade."""

    date: datetime
    equity: float
    trade_number: int
    pnl: float
    symbol: str


class StreakMetrics(_Result):
    """Consecutive win/loss runs in chronological order."""

    current_streak: int = Field(0, description="+n win streak, -n loss streak, 0 otherwise")
    current_streak_outcome: Optional[str] = Field(None, description="'win', 'loss' or None")
    longest_win_streak: int = 0
    longest_loss_streak: int = 0
    average_win_streak: float = 0.0
    average_loss_streak: float = 0.0
    win_streak_count: int = 0
    loss_streak_count: int = 0


class DimensionPerformance(_Result):
    """Summary metrics for one value of a dimension."""

    dimension: str
    value: str
    trade_count: int = 0
    total_pnl: float = 0.0
    average_pnl: float = 0.0
    winning_trades: int = 0
    losing_trades: int = 0
    win_rate: float = 0.0
    profit_factor: float = 0.0
    profit_factor_infinite: bool = False


class OutcomeDistribution(_Result):
    """Counts and rates of wins, losses and breakevens."""

    wins: int = 0
    losses: int = 0
    breakeven: int = 0
    win_rate: float = 0.0
    loss_rate: float = 0.0
    breakeven_rate: float = 0.0


class PnlBucket(_Result):
    """One histogram bucket of net P&L."""

    range: str
    count: int = 0
    pnl: float = 0.0


class TimeBasedMetrics(_Result):
    """Performance grouped by calendar buckets (UTC)."""

    day_of_week: List[DimensionPerformance] = Field(default_factory=list)
    month: List[DimensionPerformance] = Field(default_factory=list)
    hour: List[DimensionPerformance] = Field(default_factory=list)


class DateRange(_Result):
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    filtered: bool = False


class DashboardMetrics(_Result):
    """Everything the dashboard needs in one response."""

    total_trades: int
    date_range: DateRange
    basic: BasicMetrics
    expectancy: ExpectancyMetrics
    sharpe: SharpeRatioMetrics
    drawdown: DrawdownMetrics
    streaks: StreakMetrics


class ChartData(_Result):
    """Chart-ready series. Sections not requested stay None."""

    equity_curve: Optional[List[EquityCurvePoint]] = None
    distribution: Optional[OutcomeDistribution] = None
    pnl_distribution: Optional[List[PnlBucket]] = None
    breakdowns: Optional[Dict[str, List[DimensionPerformance]]] = None


class PerformanceReport(_Result):
    """Dimension breakdowns plus calendar metrics."""

    breakdowns: Dict[str, List[DimensionPerformance]] = Field(default_factory=dict)
    time_based: TimeBasedMetrics = Field(default_factory=TimeBasedMetrics)
