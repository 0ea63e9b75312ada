"""Pydantic models for trade records."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tradestats.core.constants import MetricConstants


class AssetType(str, Enum):
    """Instrument class of a trade."""

    STOCK = "stock"
    OPTION = "option"
    FOREX = "forex"
    CRYPTO = "crypto"
    FUTURES = "futures"
    OTHER = "other"


class Direction(str, Enum):
    """Position side."""

    LONG = "long"
    SHORT = "short"


class Outcome(str, Enum):
    """Classification of a closed trade by the sign of its net P&L."""

    WIN = "win"
    LOSS = "loss"
    BREAKEVEN = "breakeven"


# Spellings used by journal exports ("OPTIONS", "FUTURE", ...)
_ASSET_TYPE_ALIASES = {
    "options": "option",
    "future": "futures",
    "stocks": "stock",
    "equity": "stock",
}


class Trade(BaseModel):
    """A journal trade as supplied by the data layer.

    Prices and quantity are not range-checked here: persisted rows are
    trusted to deserialize, and the enricher rejects values it cannot
    compute with.
    """

    model_config = ConfigDict(
        frozen=True,
        use_enum_values=False,
        json_schema_extra={
            "example": {
                "id": "clx1",
                "user_id": "u1",
                "symbol": "AAPL",
                "asset_type": "stock",
                "currency": "USD",
                "direction": "long",
                "quantity": 50,
                "entry_price": 195.50,
                "entry_date": "2025-12-10T14:30:00Z",
                "exit_price": 198.75,
                "exit_date": "2025-12-15T15:00:00Z",
                "fees": 2.0,
                "strategy_name": "Breakout",
                "tags": ["earnings", "a-setup"],
            }
        },
    )

    id: Optional[str] = Field(None, description="Opaque trade identifier")
    user_id: Optional[str] = Field(None, description="Owning user identifier")

    symbol: str = Field(..., description="Instrument ticker symbol")
    asset_type: AssetType = Field(AssetType.STOCK, description="Instrument class")
    currency: str = Field("USD", description="ISO currency code")

    direction: Direction = Field(..., description="Position side (long/short)")
    quantity: float = Field(..., description="Position size")
    entry_price: float = Field(..., description="Entry price")
    entry_date: datetime = Field(..., description="Entry timestamp")

    exit_price: Optional[float] = Field(None, description="Exit price, None while open")
    exit_date: Optional[datetime] = Field(None, description="Exit timestamp, None while open")

    fees: float = Field(0.0, description="Total commissions and fees")

    stop_loss: Optional[float] = Field(None, description="Planned stop-loss price")
    take_profit: Optional[float] = Field(None, description="Planned take-profit price")
    risk_reward_ratio: Optional[float] = Field(None, description="Planned R:R")
    actual_risk_reward: Optional[float] = Field(None, description="Recorded realized R:R")

    setup_type: Optional[str] = Field(None, description="Setup name")
    strategy_name: Optional[str] = Field(None, description="Strategy name")
    time_of_day: Optional[str] = Field(None, description="Session bucket (e.g. MARKET_OPEN)")
    market_conditions: Optional[str] = Field(None, description="Market regime (e.g. TRENDING)")
    emotional_state_entry: Optional[str] = Field(None, description="Emotional state at entry")
    emotional_state_exit: Optional[str] = Field(None, description="Emotional state at exit")
    notes: Optional[str] = Field(None, description="Free-form notes")
    tags: List[str] = Field(default_factory=list, description="Tag names")
    screenshots: List[str] = Field(default_factory=list, description="Screenshot references")

    @field_validator("asset_type", "direction", mode="before")
    @classmethod
    def _normalize_enum_text(cls, value):
        if isinstance(value, str):
            value = value.strip().lower()
            return _ASSET_TYPE_ALIASES.get(value, value)
        return value

    @field_validator("fees", mode="before")
    @classmethod
    def _fees_default(cls, value):
        return 0.0 if value is None else value

    @field_validator("tags", "screenshots", mode="before")
    @classmethod
    def _none_is_empty(cls, value):
        return [] if value is None else value

    @property
    def is_closed(self) -> bool:
        """True once the trade has an exit date."""
        return self.exit_date is not None


class EnrichedTrade(Trade):
    """Trade plus per-trade derived fields.

    Every P&L-derived field is ``None`` for an open trade. ``None`` means
    "excluded from statistics", which is not the same as zero.
    """

    gross_pnl: Optional[float] = Field(None, description="P&L before fees")
    net_pnl: Optional[float] = Field(None, description="P&L after fees")
    pnl_percent: Optional[float] = Field(None, description="Net P&L as % of entry value")
    duration_ms: Optional[int] = Field(None, description="Holding time in milliseconds")
    outcome: Optional[Outcome] = Field(None, description="win/loss/breakeven")
    day_of_week: str = Field(..., description="UTC weekday name of the entry")

    entry_value: float = Field(..., description="entry_price * quantity")
    exit_value: Optional[float] = Field(None, description="exit_price * quantity")
    actual_rr: Optional[float] = Field(None, description="Realized reward / planned risk")

    @property
    def holding_period_hours(self) -> Optional[float]:
        if self.duration_ms is None:
            return None
        return self.duration_ms / MetricConstants.MS_PER_HOUR

    @property
    def holding_period_days(self) -> Optional[float]:
        if self.duration_ms is None:
            return None
        return self.duration_ms / MetricConstants.MS_PER_DAY
