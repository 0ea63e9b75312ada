"""Centralized constants and paths for the tradestats project.

This module contains all hardcoded values, paths, and configuration constants
used throughout the engine. All modules should import from here rather
than embedding magic values directly in code.
"""
from pathlib import Path
from typing import Final


class Paths:
    """Centralized file system paths."""

    # Project root
    ROOT: Final[Path] = Path(__file__).parent.parent.parent

    CONFIG_DIR: Final[Path] = ROOT / 'configs'
    DEFAULT_CONFIG: Final[Path] = CONFIG_DIR / 'default.yaml'

    LOGS_ROOT: Final[Path] = ROOT / 'logs'
    ERROR_LOG: Final[Path] = LOGS_ROOT / 'errors.log'


class MetricConstants:
    """Numeric policies shared by the calculators."""

    # Reported as profit factor when there are wins but no losses
    PROFIT_FACTOR_NO_LOSSES: Final[float] = 1_000_000.0

    MS_PER_HOUR: Final[int] = 60 * 60 * 1000
    MS_PER_DAY: Final[int] = 24 * MS_PER_HOUR

    # Histogram edges for the P&L distribution chart
    DEFAULT_DISTRIBUTION_EDGES: Final[tuple[float, float]] = (100.0, 500.0)

    DEFAULT_TOP_SYMBOLS: Final[int] = 10


class Calendar:
    """Canonical orderings for calendar dimensions (UTC)."""

    DAY_NAMES: Final[tuple[str, ...]] = (
        'Sunday', 'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday',
    )
    MONTH_NAMES: Final[tuple[str, ...]] = (
        'January', 'February', 'March', 'April', 'May', 'June',
        'July', 'August', 'September', 'October', 'November', 'December',
    )


class ExportConstants:
    """CSV export layout."""

    CSV_COLUMNS: Final[tuple[str, ...]] = (
        'symbol',
        'assetType',
        'currency',
        'direction',
        'entryDate',
        'entryPrice',
        'exitDate',
        'exitPrice',
        'quantity',
        'fees',
        'netPnl',
        'pnlPercent',
        'outcome',
        'strategyName',
        'tags',
        'notes',
    )
    TAG_SEPARATOR: Final[str] = ';'
    BOM: Final[str] = '\ufeff'
    DEFAULT_FILENAME_PREFIX: Final[str] = 'trades'


class FileFormats:
    """File format constants and templates."""

    TIMESTAMP_FORMAT: Final[str] = '%Y%m%d_%H%M%S'
    DATE_FORMAT: Final[str] = '%Y-%m-%d'
    ISO_FORMAT: Final[str] = '%Y-%m-%dT%H:%M:%S.%fZ'

    CSV_FILE_TEMPLATE: Final[str] = '{prefix}-{timestamp}.csv'


class LoggingConstants:
    """Logging configuration constants."""

    LEVEL_DEBUG: Final[str] = 'DEBUG'
    LEVEL_INFO: Final[str] = 'INFO'
    LEVEL_WARNING: Final[str] = 'WARNING'
    LEVEL_ERROR: Final[str] = 'ERROR'

    VALID_LEVELS: Final[tuple[str, ...]] = (LEVEL_DEBUG, LEVEL_INFO, LEVEL_WARNING, LEVEL_ERROR)


# Convenience exports for common use cases
PROFIT_FACTOR_NO_LOSSES = MetricConstants.PROFIT_FACTOR_NO_LOSSES
DAY_NAMES = Calendar.DAY_NAMES
