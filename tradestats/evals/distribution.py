"""Win/loss distribution and P&L histogram for charts."""
from typing import List, Sequence, Tuple

from tradestats.core.constants import MetricConstants
from tradestats.evals.metrics import calculate_basic_metrics
from tradestats.models.metrics import OutcomeDistribution, PnlBucket
from tradestats.models.trade import EnrichedTrade
from tradestats.trading.enrich import closed_trades


def calculate_outcome_distribution(trades: Sequence[EnrichedTrade]) -> OutcomeDistribution:
    """Counts and rates of wins, losses and breakevens over closed trades."""
    metrics = calculate_basic_metrics(trades)
    return OutcomeDistribution(
        wins=metrics.winning_trades,
        losses=metrics.losing_trades,
        breakeven=metrics.breakeven_trades,
        win_rate=metrics.win_rate,
        loss_rate=metrics.loss_rate,
        breakeven_rate=metrics.breakeven_rate,
    )


def _fmt(edge: float) -> str:
    return f"{edge:g}"


def calculate_pnl_distribution(
    trades: Sequence[EnrichedTrade],
    edges: Tuple[float, float] = MetricConstants.DEFAULT_DISTRIBUTION_EDGES,
) -> List[PnlBucket]:
    """
    Histogram of net P&L in seven fixed buckets.

    With edges (small, large) = (100, 500) the buckets are, in order:
    "Loss > 500", "Loss 100-500", "Loss 0-100", "Breakeven", "Win 0-100",
    "Win 100-500", "Win > 500". A P&L equal to an edge falls in the
    inner-to-middle bucket (100 -> "Win 100-500", -100 -> "Loss 100-500").
    All seven buckets are always returned.
    """
    small, large = edges
    labels = [
        f"Loss > {_fmt(large)}",
        f"Loss {_fmt(small)}-{_fmt(large)}",
        f"Loss 0-{_fmt(small)}",
        "Breakeven",
        f"Win 0-{_fmt(small)}",
        f"Win {_fmt(small)}-{_fmt(large)}",
        f"Win > {_fmt(large)}",
    ]
    counts = [0] * len(labels)
    sums = [0.0] * len(labels)

    for trade in closed_trades(trades):
        pnl = trade.net_pnl
        size = abs(pnl)
        if pnl == 0:
            index = 3
        elif size > large:
            index = 6 if pnl > 0 else 0
        elif size >= small:
            index = 5 if pnl > 0 else 1
        else:
            index = 4 if pnl > 0 else 2
        counts[index] += 1
        sums[index] += pnl

    return [PnlBucket(range=label, count=count, pnl=total) for label, count, total in zip(labels, counts, sums)]
