"""Consecutive win/loss streaks over chronologically ordered trades."""
from typing import List, Optional, Sequence

from tradestats.core.logger import get_logger
from tradestats.models.metrics import StreakMetrics
from tradestats.models.trade import EnrichedTrade, Outcome
from tradestats.trading.enrich import closed_trades


logger = get_logger(__name__)


def _mean(values: List[int]) -> float:
    return sum(values) / len(values) if values else 0.0


def calculate_streaks(trades: Sequence[EnrichedTrade]) -> StreakMetrics:
    """
    Scan trades in order and measure runs of wins and losses.

    Precondition: trades are sorted ascending by entry_date. Open trades are
    skipped and do not break a streak.

    Rules:
        - a streak is a maximal run of consecutive wins or of consecutive losses
        - a breakeven trade closes the open streak and does not start a new one
        - the streak still open after the last trade counts towards the
          longest/average figures and is reported as ``current_streak``
          (+n for wins, -n for losses, 0 if the last trade was breakeven)
    """
    win_streaks: List[int] = []
    loss_streaks: List[int] = []

    current: Optional[Outcome] = None
    length = 0

    def close_streak():
        if current == Outcome.WIN:
            win_streaks.append(length)
        elif current == Outcome.LOSS:
            loss_streaks.append(length)

    for trade in closed_trades(trades):
        if current is not None and trade.outcome == current:
            length += 1
            continue

        close_streak()
        if trade.outcome == Outcome.BREAKEVEN:
            current, length = None, 0
        else:
            current, length = trade.outcome, 1

    close_streak()

    if current == Outcome.WIN:
        current_streak = length
    elif current == Outcome.LOSS:
        current_streak = -length
    else:
        current_streak = 0

    logger.debug(f"Streaks: {len(win_streaks)} win, {len(loss_streaks)} loss, current={current_streak}")

    return StreakMetrics(
        current_streak=current_streak,
        current_streak_outcome=current.value if current is not None else None,
        longest_win_streak=max(win_streaks, default=0),
        longest_loss_streak=max(loss_streaks, default=0),
        average_win_streak=_mean(win_streaks),
        average_loss_streak=_mean(loss_streaks),
        win_streak_count=len(win_streaks),
        loss_streak_count=len(loss_streaks),
    )
