"""Per-trade derived fields (P&L, percent return, duration, outcome)."""
import math
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from tradestats.core.constants import Calendar
from tradestats.core.exceptions import InvalidTradeError
from tradestats.core.logger import get_logger
from tradestats.models.trade import Direction, EnrichedTrade, Outcome, Trade


logger = get_logger(__name__)


def to_utc(value: datetime) -> datetime:
    """Return ``value`` in UTC. Naive datetimes are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def day_name(value: datetime) -> str:
    """English weekday name of ``value`` in UTC (Sunday..Saturday)."""
    # datetime.weekday(): Monday == 0; Calendar.DAY_NAMES starts on Sunday
    return Calendar.DAY_NAMES[(to_utc(value).weekday() + 1) % 7]


def determine_outcome(net_pnl: float) -> Outcome:
    """Classify by sign. Only an exact zero is breakeven."""
    if net_pnl > 0:
        return Outcome.WIN
    if net_pnl < 0:
        return Outcome.LOSS
    return Outcome.BREAKEVEN


def calculate_actual_rr(trade: Trade) -> Optional[float]:
    """
    Realized reward over planned risk.

    Returns None when the trade is open, has no stop loss, or the stop sits at
    the entry price (zero planned risk).
    """
    if trade.exit_price is None or trade.stop_loss is None:
        return None

    risk = abs(trade.entry_price - trade.stop_loss)
    if risk == 0:
        return None

    reward = abs(trade.exit_price - trade.entry_price)
    return reward / risk


def _validate(trade: Trade) -> None:
    for name in ('quantity', 'entry_price', 'exit_price', 'fees'):
        value = getattr(trade, name)
        if value is not None and not math.isfinite(value):
            raise InvalidTradeError(f"{name} must be finite, got {value}", trade.id)

    if trade.quantity <= 0:
        raise InvalidTradeError(f"quantity must be positive, got {trade.quantity}", trade.id)

    if trade.entry_price <= 0:
        raise InvalidTradeError(f"entry_price must be positive, got {trade.entry_price}", trade.id)

    if (trade.exit_price is None) != (trade.exit_date is None):
        raise InvalidTradeError("exit_price and exit_date must be set together", trade.id)


def _check_finite(trade: Trade, **values) -> None:
    # Finite inputs can still overflow once multiplied together
    for name, value in values.items():
        if value is not None and not math.isfinite(value):
            raise InvalidTradeError(f"{name} overflows to {value}", trade.id)


def enrich(trade: Trade) -> EnrichedTrade:
    """
    Compute derived fields for a single trade.

    Args:
        trade: Trade record

    Returns:
        EnrichedTrade with P&L fields set for closed trades and None for open ones

    Raises:
        InvalidTradeError: quantity or entry_price is not positive, an input or
            derived value is not finite, or only one of exit_price/exit_date is set

    Formulas:
        - gross_pnl = (exit - entry) * quantity, sign flipped for shorts
        - net_pnl = gross_pnl - fees
        - pnl_percent = net_pnl / (entry_price * quantity) * 100
        - duration_ms = exit_date - entry_date
    """
    _validate(trade)

    entry_value = trade.entry_price * trade.quantity
    _check_finite(trade, entry_value=entry_value)
    derived = {
        'day_of_week': day_name(trade.entry_date),
        'entry_value': entry_value,
    }

    if trade.is_closed:
        side = 1.0 if trade.direction == Direction.LONG else -1.0
        gross_pnl = (trade.exit_price - trade.entry_price) * trade.quantity * side
        net_pnl = gross_pnl - trade.fees
        duration = to_utc(trade.exit_date) - to_utc(trade.entry_date)
        pnl_percent = net_pnl / entry_value * 100 if entry_value != 0 else None
        exit_value = trade.exit_price * trade.quantity
        _check_finite(
            trade, gross_pnl=gross_pnl, net_pnl=net_pnl, pnl_percent=pnl_percent, exit_value=exit_value,
        )

        derived.update({
            'gross_pnl': gross_pnl,
            'net_pnl': net_pnl,
            'pnl_percent': pnl_percent,
            'duration_ms': duration // timedelta(milliseconds=1),
            'outcome': determine_outcome(net_pnl),
            'exit_value': exit_value,
            'actual_rr': calculate_actual_rr(trade),
        })

    base = trade.model_dump(include=set(Trade.model_fields))
    return EnrichedTrade(**base, **derived)


def enrich_all(trades: Iterable[Trade]) -> List[EnrichedTrade]:
    """
    Enrich every trade, preserving order.

    The first invalid trade aborts the whole call; its InvalidTradeError is
    propagated unchanged.
    """
    enriched = [enrich(trade) for trade in trades]
    logger.debug(f"Enriched {len(enriched)} trades")
    return enriched


def closed_trades(trades: Iterable[EnrichedTrade]) -> List[EnrichedTrade]:
    """Closed trades only, in input order."""
    return [t for t in trades if t.outcome is not None]
