"""Exception types raised by the analytics engine."""


class TradeStatsError(Exception):
    """Base class for all errors raised by tradestats."""


class InvalidTradeError(TradeStatsError, ValueError):
    """A trade record cannot be enriched (non-positive price/quantity, half-closed, ...)."""

    def __init__(self, message: str, trade_id: str | None = None):
        self.trade_id = trade_id
        if trade_id is not None:
            message = f"Trade {trade_id}: {message}"
        super().__init__(message)


class ConfigError(TradeStatsError, ValueError):
    """Configuration file is present but invalid."""
