"""Performance grouped by a categorical trade attribute."""
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

from tradestats.core.constants import Calendar
from tradestats.core.logger import get_logger
from tradestats.evals.metrics import calculate_basic_metrics
from tradestats.models.metrics import DimensionPerformance, TimeBasedMetrics
from tradestats.models.trade import EnrichedTrade
from tradestats.trading.enrich import closed_trades, to_utc


logger = get_logger(__name__)

# A selector returns one key, several keys (e.g. tags) or None to skip the trade
Key = Union[str, Iterable[str], None]
Selector = Callable[[EnrichedTrade], Key]

HOUR_LABELS = tuple(f"{hour:02d}:00" for hour in range(24))


def _text(value) -> Optional[str]:
    if isinstance(value, Enum):
        return value.value
    return value


def _field(name: str) -> Selector:
    return lambda trade: _text(getattr(trade, name))


DIMENSIONS: Dict[str, Selector] = {
    'symbol': _field('symbol'),
    'asset_type': _field('asset_type'),
    'direction': _field('direction'),
    'strategy_name': _field('strategy_name'),
    'setup_type': _field('setup_type'),
    'time_of_day': _field('time_of_day'),
    'market_conditions': _field('market_conditions'),
    'emotional_state_entry': _field('emotional_state_entry'),
    'emotional_state_exit': _field('emotional_state_exit'),
    'day_of_week': _field('day_of_week'),
    'tags': lambda trade: trade.tags,
}


def _keys(raw: Key) -> List[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = [raw]
    # Each key counts once per trade, blanks are treated as missing
    keys = []
    for key in raw:
        if key is not None and str(key).strip() and str(key) not in keys:
            keys.append(str(key))
    return keys


def _summarize(dimension: str, value: str, trades: Sequence[EnrichedTrade]) -> DimensionPerformance:
    metrics = calculate_basic_metrics(trades)
    return DimensionPerformance(
        dimension=dimension,
        value=value,
        trade_count=metrics.total_trades,
        total_pnl=metrics.total_pnl,
        average_pnl=metrics.average_pnl,
        winning_trades=metrics.winning_trades,
        losing_trades=metrics.losing_trades,
        win_rate=metrics.win_rate,
        profit_factor=metrics.profit_factor,
        profit_factor_infinite=metrics.profit_factor_infinite,
    )


def aggregate(
    trades: Sequence[EnrichedTrade],
    selector: Selector,
    dimension: str = 'custom',
    order: Optional[Sequence[str]] = None,
    include_empty: bool = False,
) -> List[DimensionPerformance]:
    """
    Group closed trades by ``selector`` and summarize each group.

    Args:
        trades: Enriched trades; open trades are ignored
        selector: Maps a trade to its key(s). None or blank keys exclude the
            trade from every group (there is no "null" group)
        dimension: Label copied into each result
        order: Canonical key order. When given, output follows it and keys
            outside it are appended after in first-seen order
        include_empty: With ``order``, also emit zero-filled rows for keys
            that have no trades

    Returns:
        One DimensionPerformance per group. Without ``order`` the list is
        sorted by total_pnl descending, ties kept in first-seen order.
    """
    groups: Dict[str, List[EnrichedTrade]] = {}
    for trade in closed_trades(trades):
        for key in _keys(selector(trade)):
            groups.setdefault(key, []).append(trade)

    if order is None:
        results = [_summarize(dimension, key, members) for key, members in groups.items()]
        results.sort(key=lambda r: r.total_pnl, reverse=True)
    else:
        keys = [k for k in order if include_empty or k in groups]
        keys += [k for k in groups if k not in order]
        results = [_summarize(dimension, key, groups.get(key, [])) for key in keys]

    logger.debug(f"Aggregated {len(trades)} trades into {len(results)} '{dimension}' groups")
    return results


def performance_by_dimension(trades: Sequence[EnrichedTrade], dimension: str) -> List[DimensionPerformance]:
    """
    Summarize trades by a named attribute (see DIMENSIONS).

    ``day_of_week`` is always returned in Sunday..Saturday order with all
    seven days present.
    """
    if dimension == 'day_of_week':
        return performance_by_day_of_week(trades)
    if dimension not in DIMENSIONS:
        raise ValueError(f"Unknown dimension '{dimension}', expected one of {sorted(DIMENSIONS)}")
    return aggregate(trades, DIMENSIONS[dimension], dimension=dimension)


def performance_by_day_of_week(trades: Sequence[EnrichedTrade]) -> List[DimensionPerformance]:
    """All seven weekdays (UTC) in Sunday..Saturday order, zero-filled."""
    return aggregate(
        trades,
        DIMENSIONS['day_of_week'],
        dimension='day_of_week',
        order=Calendar.DAY_NAMES,
        include_empty=True,
    )


def performance_by_month(trades: Sequence[EnrichedTrade]) -> List[DimensionPerformance]:
    """Calendar months (UTC) with trades, January..December."""
    return aggregate(
        trades,
        lambda t: Calendar.MONTH_NAMES[to_utc(t.entry_date).month - 1],
        dimension='month',
        order=Calendar.MONTH_NAMES,
    )


def performance_by_hour(trades: Sequence[EnrichedTrade]) -> List[DimensionPerformance]:
    """Entry hours (UTC, "HH:00") with trades, ascending."""
    return aggregate(
        trades,
        lambda t: HOUR_LABELS[to_utc(t.entry_date).hour],
        dimension='hour',
        order=HOUR_LABELS,
    )


def calculate_time_based_metrics(trades: Sequence[EnrichedTrade]) -> TimeBasedMetrics:
    """Day-of-week, month and hour breakdowns in one record."""
    return TimeBasedMetrics(
        day_of_week=performance_by_day_of_week(trades),
        month=performance_by_month(trades),
        hour=performance_by_hour(trades),
    )
