"""Performance calculators over enriched trades."""

from .metrics import calculate_basic_metrics, calculate_expectancy, calculate_sharpe_ratio
from .drawdown import calculate_drawdown, calculate_equity_curve
from .streaks import calculate_streaks
from .dimensions import aggregate, performance_by_dimension, performance_by_day_of_week
from .distribution import calculate_outcome_distribution, calculate_pnl_distribution

__all__ = [
    "calculate_basic_metrics",
    "calculate_expectancy",
    "calculate_sharpe_ratio",
    "calculate_drawdown",
    "calculate_equity_curve",
    "calculate_streaks",
    "aggregate",
    "performance_by_dimension",
    "performance_by_day_of_week",
    "calculate_outcome_distribution",
    "calculate_pnl_distribution",
]
