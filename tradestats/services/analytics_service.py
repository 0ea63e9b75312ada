"""Service that builds analytics responses from raw trade records."""

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from tradestats.core.config import get_param
from tradestats.core.constants import ExportConstants, MetricConstants
from tradestats.core.logger import get_logger
from tradestats.dataio.export import generate_csv_filename, trades_to_csv
from tradestats.evals.dimensions import calculate_time_based_metrics, performance_by_dimension
from tradestats.evals.distribution import calculate_outcome_distribution, calculate_pnl_distribution
from tradestats.evals.drawdown import calculate_drawdown, calculate_equity_curve
from tradestats.evals.metrics import calculate_basic_metrics, calculate_expectancy, calculate_sharpe_ratio
from tradestats.evals.streaks import calculate_streaks
from tradestats.models.metrics import ChartData, DashboardMetrics, DateRange, DimensionPerformance, PerformanceReport
from tradestats.models.trade import EnrichedTrade, Trade
from tradestats.trading.enrich import closed_trades, enrich_all, to_utc

logger = get_logger(__name__)

CHART_TYPES = ("equity", "distribution", "breakdown")

# Dimensions shown on the charts page; symbol is cut to the top N by P&L
CHART_BREAKDOWNS = (
    "asset_type",
    "strategy_name",
    "setup_type",
    "time_of_day",
    "day_of_week",
    "symbol",
    "market_conditions",
    "emotional_state_entry",
)

PERFORMANCE_BREAKDOWNS = CHART_BREAKDOWNS + ("direction", "emotional_state_exit", "tags")


class AnalyticsService:
    """Stateless analytics over a caller-supplied list of trades.

    Build one per request. The service enriches the trades, applies the
    optional entry-date window, orders closed trades by entry date and feeds
    them to the calculators.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}

    def _window(
        self,
        trades: Sequence[Trade],
        start_date: Optional[datetime],
        end_date: Optional[datetime],
    ) -> List[EnrichedTrade]:
        enriched = enrich_all(trades)

        if start_date is not None:
            start = to_utc(start_date)
            enriched = [t for t in enriched if to_utc(t.entry_date) >= start]
        if end_date is not None:
            end = to_utc(end_date)
            enriched = [t for t in enriched if to_utc(t.entry_date) <= end]

        return enriched

    @staticmethod
    def _chronological(trades: Sequence[EnrichedTrade]) -> List[EnrichedTrade]:
        # sorted() is stable: equal entry dates keep their input order
        return sorted(closed_trades(trades), key=lambda t: to_utc(t.entry_date))

    def dashboard(
        self,
        trades: Sequence[Trade],
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> DashboardMetrics:
        """
        Compute every dashboard metric.

        Args:
            trades: Raw trades for one user (any order)
            start_date: Keep trades entered at or after this time
            end_date: Keep trades entered at or before this time

        Returns:
            DashboardMetrics combining basic, expectancy, Sharpe, drawdown and
            streak results

        Raises:
            InvalidTradeError: a trade cannot be enriched
        """
        in_window = self._window(trades, start_date, end_date)
        ordered = self._chronological(in_window)

        basic = calculate_basic_metrics(in_window)
        logger.info(
            f"Dashboard: {basic.total_trades} closed trades, {basic.open_trades} open, "
            f"total_pnl={basic.total_pnl:.2f}"
        )

        return DashboardMetrics(
            total_trades=basic.total_trades,
            date_range=DateRange(
                start=start_date,
                end=end_date,
                filtered=start_date is not None or end_date is not None,
            ),
            basic=basic,
            expectancy=calculate_expectancy(ordered),
            sharpe=calculate_sharpe_ratio(ordered),
            drawdown=calculate_drawdown(ordered),
            streaks=calculate_streaks(ordered),
        )

    def charts(
        self,
        trades: Sequence[Trade],
        chart_type: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> ChartData:
        """
        Chart-ready series.

        Args:
            trades: Raw trades
            chart_type: One of CHART_TYPES, or None for all of them

        Raises:
            ValueError: Unknown chart_type
        """
        if chart_type is not None and chart_type not in CHART_TYPES:
            raise ValueError(f"Unknown chart type '{chart_type}', expected one of {list(CHART_TYPES)}")

        ordered = self._chronological(self._window(trades, start_date, end_date))
        wanted = CHART_TYPES if chart_type is None else (chart_type,)
        data: Dict[str, Any] = {}

        if "equity" in wanted:
            data["equity_curve"] = calculate_equity_curve(ordered)

        if "distribution" in wanted:
            edges = get_param(
                self.config, "analytics", "distribution_edges",
                default=MetricConstants.DEFAULT_DISTRIBUTION_EDGES,
            )
            data["distribution"] = calculate_outcome_distribution(ordered)
            data["pnl_distribution"] = calculate_pnl_distribution(ordered, edges=tuple(edges))

        if "breakdown" in wanted:
            top_symbols = get_param(
                self.config, "analytics", "top_symbols",
                default=MetricConstants.DEFAULT_TOP_SYMBOLS,
            )
            breakdowns = {name: performance_by_dimension(ordered, name) for name in CHART_BREAKDOWNS}
            breakdowns["symbol"] = breakdowns["symbol"][:top_symbols]
            data["breakdowns"] = breakdowns

        logger.info(f"Charts {list(wanted)} over {len(ordered)} closed trades")
        return ChartData(**data)

    def performance(
        self,
        trades: Sequence[Trade],
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> PerformanceReport:
        """Every dimension breakdown plus day/month/hour metrics."""
        ordered = self._chronological(self._window(trades, start_date, end_date))

        return PerformanceReport(
            breakdowns={name: performance_by_dimension(ordered, name) for name in PERFORMANCE_BREAKDOWNS},
            time_based=calculate_time_based_metrics(ordered),
        )

    def breakdown(
        self,
        trades: Sequence[Trade],
        dimension: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[DimensionPerformance]:
        """
        Performance by one named dimension over the date window.

        Raises:
            ValueError: Unknown dimension
        """
        ordered = self._chronological(self._window(trades, start_date, end_date))
        rows = performance_by_dimension(ordered, dimension)
        logger.info(f"Breakdown by '{dimension}': {len(rows)} groups over {len(ordered)} closed trades")
        return rows

    def export_csv(
        self,
        trades: Sequence[Trade],
        include_bom: Optional[bool] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> str:
        """CSV text of every trade in the window (open trades included), input order kept."""
        if include_bom is None:
            include_bom = bool(get_param(self.config, "export", "include_bom", default=False))

        return trades_to_csv(self._window(trades, start_date, end_date), include_bom=include_bom)

    def csv_filename(self, now: Optional[datetime] = None) -> str:
        prefix = get_param(
            self.config, "export", "filename_prefix",
            default=ExportConstants.DEFAULT_FILENAME_PREFIX,
        )
        return generate_csv_filename(prefix, now=now)
