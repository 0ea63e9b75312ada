"""Pydantic models for trades and analytics results."""

from .trade import AssetType, Direction, EnrichedTrade, Outcome, Trade
from .metrics import (
    BasicMetrics,
    ChartData,
    DashboardMetrics,
    DateRange,
    DimensionPerformance,
    DrawdownMetrics,
    DrawdownPeriod,
    EquityCurvePoint,
    ExpectancyMetrics,
    OutcomeDistribution,
    PerformanceReport,
    PnlBucket,
    SharpeRatioMetrics,
    StreakMetrics,
    TimeBasedMetrics,
)

__all__ = [
    "AssetType",
    "Direction",
    "EnrichedTrade",
    "Outcome",
    "Trade",
    "BasicMetrics",
    "ChartData",
    "DashboardMetrics",
    "DateRange",
    "DimensionPerformance",
    "DrawdownMetrics",
    "DrawdownPeriod",
    "EquityCurvePoint",
    "ExpectancyMetrics",
    "OutcomeDistribution",
    "PerformanceReport",
    "PnlBucket",
    "SharpeRatioMetrics",
    "StreakMetrics",
    "TimeBasedMetrics",
]
