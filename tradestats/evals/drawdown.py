"""Equity curve and drawdown over chronologically ordered trades."""
from typing import List, Sequence

import numpy as np

from tradestats.core.constants import MetricConstants
from tradestats.core.logger import get_logger
from tradestats.models.metrics import DrawdownMetrics, DrawdownPeriod, EquityCurvePoint
from tradestats.models.trade import EnrichedTrade
from tradestats.trading.enrich import closed_trades, to_utc


logger = get_logger(__name__)


def calculate_equity_curve(trades: Sequence[EnrichedTrade]) -> List[EquityCurvePoint]:
    """
    Cumulative net P&L after each closed trade.

    Args:
        trades: Enriched trades sorted ascending by entry_date (not re-sorted)

    Returns:
        One point per closed trade, in input order; empty for no trades
    """
    closed = closed_trades(trades)
    if not closed:
        return []

    equity = np.cumsum([t.net_pnl for t in closed])

    return [
        EquityCurvePoint(
            date=to_utc(trade.entry_date),
            equity=float(value),
            trade_number=i + 1,
            pnl=trade.net_pnl,
            symbol=trade.symbol,
        )
        for i, (trade, value) in enumerate(zip(closed, equity))
    ]


def calculate_drawdown(trades: Sequence[EnrichedTrade]) -> DrawdownMetrics:
    """
    Running-peak drawdown of cumulative net P&L.

    Precondition: trades are sorted ascending by entry_date. Trades sharing an
    entry_date are processed in input order. Open trades are skipped.

    Process:
        1. equity E = cumsum(net_pnl), starting from 0
        2. peak P = running max of E, floored at the starting equity of 0
        3. per-step drawdown D = P - E
        4. percent = D / P * 100 where P > 0, else 0

    Returns:
        DrawdownMetrics with:
            - max_drawdown / max_drawdown_percent: largest D and the percent at
              the first step where it occurred
            - current_drawdown / current_drawdown_percent: D after the last trade
            - average_drawdown: mean of every per-step D (zeros included)
            - drawdown_periods: maximal runs of steps with D > 0

    Example:
        >>> # net P&L [100, -50, 100] -> E = [100, 50, 150], P = [100, 100, 150]
        >>> # D = [0, 50, 0] -> max_drawdown = 50 (50%), current = 0, average = 16.67
    """
    closed = closed_trades(trades)
    if not closed:
        return DrawdownMetrics()

    equity = np.cumsum([t.net_pnl for t in closed])
    peak = np.maximum(np.maximum.accumulate(equity), 0.0)
    drawdown = peak - equity

    percent = np.zeros_like(drawdown)
    positive = peak > 0
    percent[positive] = drawdown[positive] / peak[positive] * 100

    worst = int(np.argmax(drawdown))

    result = DrawdownMetrics(
        max_drawdown=float(drawdown[worst]),
        max_drawdown_percent=float(percent[worst]),
        current_drawdown=float(drawdown[-1]),
        current_drawdown_percent=float(percent[-1]),
        average_drawdown=float(drawdown.mean()),
        drawdown_periods=_drawdown_periods(closed, equity, peak, drawdown),
    )

    logger.debug(
        f"Drawdown over {len(closed)} trades: max={result.max_drawdown:.2f}, "
        f"current={result.current_drawdown:.2f}, periods={len(result.drawdown_periods)}"
    )
    return result


def _drawdown_periods(
    trades: Sequence[EnrichedTrade],
    equity: np.ndarray,
    peak: np.ndarray,
    drawdown: np.ndarray,
) -> List[DrawdownPeriod]:
    """Split the curve into underwater episodes; the last one may still be open."""
    periods = []
    start = None

    for i in range(len(trades) + 1):
        underwater = i < len(trades) and drawdown[i] > 0

        if underwater and start is None:
            start = i
        elif not underwater and start is not None:
            recovered = i < len(trades)
            last = i if recovered else i - 1
            periods.append(_period(trades, equity, peak, start, i, last, recovered))
            start = None

    return periods


def _period(trades, equity, peak, start, stop, last, recovered) -> DrawdownPeriod:
    start_date = to_utc(trades[start].entry_date)
    last_date = to_utc(trades[last].entry_date)
    top = float(peak[start])
    trough = float(equity[start:stop].min())
    depth = top - trough
    duration_ms = (last_date - start_date).total_seconds() * 1000

    return DrawdownPeriod(
        start_date=start_date,
        end_date=last_date if recovered else None,
        peak=top,
        trough=trough,
        drawdown=depth,
        drawdown_percent=depth / top * 100 if top > 0 else 0.0,
        duration_days=duration_ms / MetricConstants.MS_PER_DAY,
    )
