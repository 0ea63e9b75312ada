"""Summary performance metrics over closed trades."""
from typing import Sequence

import numpy as np

from tradestats.core.constants import MetricConstants
from tradestats.core.logger import get_logger
from tradestats.models.metrics import BasicMetrics, ExpectancyMetrics, SharpeRatioMetrics
from tradestats.models.trade import EnrichedTrade, Outcome
from tradestats.trading.enrich import closed_trades


logger = get_logger(__name__)


def _rate(count: int, total: int) -> float:
    return count / total * 100 if total > 0 else 0.0


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def profit_factor(gross_profit: float, gross_loss: float) -> tuple[float, bool]:
    """
    Gross profit over gross loss.

    Args:
        gross_profit: Sum of winning net P&L (>= 0)
        gross_loss: Absolute sum of losing net P&L (>= 0)

    Returns:
        (profit_factor, infinite) where ``infinite`` is True when there are
        profits but no losses; the factor is then the finite sentinel
        MetricConstants.PROFIT_FACTOR_NO_LOSSES. No wins and no losses gives 0.
    """
    if gross_loss > 0:
        return gross_profit / gross_loss, False
    if gross_profit > 0:
        return MetricConstants.PROFIT_FACTOR_NO_LOSSES, True
    return 0.0, False


def calculate_basic_metrics(trades: Sequence[EnrichedTrade]) -> BasicMetrics:
    """
    Compute win/loss statistics for the given trades.

    Open trades are counted in ``open_trades`` and otherwise ignored. Input
    order does not matter.

    Args:
        trades: Enriched trades (open and closed)

    Returns:
        BasicMetrics; every field is 0 when there are no closed trades
    """
    closed = closed_trades(trades)
    open_count = len(trades) - len(closed)
    total = len(closed)

    if total == 0:
        return BasicMetrics(open_trades=open_count)

    wins = [t.net_pnl for t in closed if t.outcome == Outcome.WIN]
    losses = [t.net_pnl for t in closed if t.outcome == Outcome.LOSS]
    breakeven = total - len(wins) - len(losses)

    total_pnl = sum(t.net_pnl for t in closed)
    gross_profit = sum(wins)
    gross_loss = abs(sum(losses))
    factor, infinite = profit_factor(gross_profit, gross_loss)

    metrics = BasicMetrics(
        total_trades=total,
        open_trades=open_count,
        winning_trades=len(wins),
        losing_trades=len(losses),
        breakeven_trades=breakeven,
        win_rate=_rate(len(wins), total),
        loss_rate=_rate(len(losses), total),
        breakeven_rate=_rate(breakeven, total),
        total_pnl=total_pnl,
        average_pnl=total_pnl / total,
        average_win=_mean(wins),
        average_loss=_mean(losses),
        largest_win=max(wins) if wins else 0.0,
        largest_loss=min(losses) if losses else 0.0,
        gross_profit=gross_profit,
        gross_loss=gross_loss,
        profit_factor=factor,
        profit_factor_infinite=infinite,
    )

    logger.debug(f"Basic metrics: {total} closed, {open_count} open, win_rate={metrics.win_rate:.2f}")
    return metrics


def calculate_expectancy(trades: Sequence[EnrichedTrade]) -> ExpectancyMetrics:
    """
    Expected value of a trade.

    - expectancy = mean net P&L over closed trades, which equals
      win_rate * average_win + loss_rate * average_loss
    - expectancy_percent = mean pnl_percent over closed trades that have one
    """
    closed = closed_trades(trades)
    if not closed:
        return ExpectancyMetrics()

    percents = [t.pnl_percent for t in closed if t.pnl_percent is not None]

    return ExpectancyMetrics(
        expectancy=sum(t.net_pnl for t in closed) / len(closed),
        expectancy_percent=_mean(percents),
    )


def calculate_sharpe_ratio(trades: Sequence[EnrichedTrade]) -> SharpeRatioMetrics:
    """
    Sharpe-like ratio of per-trade percent returns.

    Order does not matter: this is a distributional statistic.

    Formulas:
        - average_return = mean(pnl_percent)
        - standard_deviation = sample std (ddof=1); 0 for fewer than 2 trades
        - sharpe_ratio = average_return / standard_deviation, 0 if std == 0

    Notes:
        - No risk-free rate is subtracted
        - Never returns NaN or infinity
    """
    returns = np.array(
        [t.pnl_percent for t in closed_trades(trades) if t.pnl_percent is not None],
        dtype=float,
    )

    if len(returns) == 0:
        return SharpeRatioMetrics()

    average_return = float(returns.mean())
    standard_deviation = float(returns.std(ddof=1)) if len(returns) > 1 else 0.0

    sharpe = average_return / standard_deviation if standard_deviation > 0 else 0.0

    return SharpeRatioMetrics(
        sharpe_ratio=sharpe,
        average_return=average_return,
        standard_deviation=standard_deviation,
    )
