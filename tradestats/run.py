#!/usr/bin/env python3
"""
Unified CLI Runner for the trade analytics engine.

Usage:
    python -m tradestats.run dashboard --trades FILE [--config CONFIG] [--start-date DATE] [--end-date DATE]
    python -m tradestats.run charts --trades FILE [--chart-type {equity,distribution,breakdown}]
    python -m tradestats.run performance --trades FILE
    python -m tradestats.run breakdown --trades FILE --dimension NAME
    python -m tradestats.run export --trades FILE [--output PATH] [--bom]
"""

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path

from tradestats.core.config import get_param, load_config
from tradestats.core.constants import LoggingConstants, Paths
from tradestats.core.error_decorator import log_errors_to_file
from tradestats.core.logger import get_logger, setup_logger
from tradestats.dataio.loader import load_trades
from tradestats.evals.dimensions import DIMENSIONS
from tradestats.services.analytics_service import CHART_TYPES, AnalyticsService

logger = get_logger(__name__)


def _parse_date(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}' (expected ISO format, e.g. 2025-01-31)")


def _emit(model) -> None:
    print(model.model_dump_json(indent=2))


@log_errors_to_file()
def run_dashboard(args, config):
    """Print dashboard metrics as JSON."""
    trades = load_trades(args.trades)
    service = AnalyticsService(config)
    _emit(service.dashboard(trades, start_date=args.start_date, end_date=args.end_date))


@log_errors_to_file()
def run_charts(args, config):
    """Print chart series as JSON."""
    trades = load_trades(args.trades)
    service = AnalyticsService(config)
    _emit(service.charts(trades, chart_type=args.chart_type, start_date=args.start_date, end_date=args.end_date))


@log_errors_to_file()
def run_performance(args, config):
    """Print every dimension breakdown plus time-based metrics as JSON."""
    trades = load_trades(args.trades)
    service = AnalyticsService(config)
    _emit(service.performance(trades, start_date=args.start_date, end_date=args.end_date))


@log_errors_to_file()
def run_breakdown(args, config):
    """Print one dimension breakdown as JSON."""
    trades = load_trades(args.trades)
    service = AnalyticsService(config)
    rows = service.breakdown(trades, args.dimension, start_date=args.start_date, end_date=args.end_date)
    print(json.dumps([row.model_dump(mode="json") for row in rows], indent=2))


@log_errors_to_file()
def run_export(args, config):
    """Write trades as CSV to --output (or a generated file name) or stdout with '-'."""
    trades = load_trades(args.trades)
    service = AnalyticsService(config)
    include_bom = True if args.bom else None
    csv_text = service.export_csv(trades, include_bom=include_bom, start_date=args.start_date, end_date=args.end_date)

    if args.output == "-":
        sys.stdout.write(csv_text)
        return

    output_path = Path(args.output) if args.output else Path(service.csv_filename())
    output_path.parent.mkdir(parents=True, exist_ok=True)
    # newline='' keeps the exporter's line endings on every platform
    with open(output_path, "w", encoding="utf-8", newline="") as f:
        f.write(csv_text)
    logger.info(f"Wrote {output_path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Trade performance analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    def add_common(sub):
        sub.add_argument("--trades", type=str, required=True, help="Trades file (.csv or .json)")
        sub.add_argument("--config", type=str, default=None, help=f"Config file path (e.g. {Paths.DEFAULT_CONFIG.name})")
        sub.add_argument("--start-date", type=_parse_date, default=None, help="Keep trades entered on/after (ISO)")
        sub.add_argument("--end-date", type=_parse_date, default=None, help="Keep trades entered on/before (ISO)")
        sub.add_argument("--log-level", type=str.upper, default=None,
                         choices=LoggingConstants.VALID_LEVELS, help="Override config log level")

    add_common(subparsers.add_parser("dashboard", help="Summary metrics"))

    charts_parser = subparsers.add_parser("charts", help="Chart series")
    add_common(charts_parser)
    charts_parser.add_argument("--chart-type", choices=CHART_TYPES, default=None, help="Single chart to compute")

    add_common(subparsers.add_parser("performance", help="All dimension breakdowns"))

    breakdown_parser = subparsers.add_parser("breakdown", help="Performance by one dimension")
    add_common(breakdown_parser)
    breakdown_parser.add_argument("--dimension", choices=sorted(DIMENSIONS), required=True, help="Dimension to group by")

    export_parser = subparsers.add_parser("export", help="Export trades to CSV")
    add_common(export_parser)
    export_parser.add_argument("--output", type=str, default=None, help="Output path, '-' for stdout")
    export_parser.add_argument("--bom", action="store_true", help="Prefix a UTF-8 byte-order mark")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = load_config(args.config) if args.config else {}
    setup_logger(
        level=args.log_level or str(get_param(config, "logging", "level", default=LoggingConstants.LEVEL_INFO)).upper(),
        log_file=get_param(config, "logging", "file"),
    )

    commands = {
        "dashboard": run_dashboard,
        "charts": run_charts,
        "performance": run_performance,
        "breakdown": run_breakdown,
        "export": run_export,
    }

    try:
        commands[args.command](args, config)
    except KeyboardInterrupt:
        sys.exit(0)
    except Exception as e:
        logger.error(f"Error running {args.command}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
