"""CSV export of enriched trades."""
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from tradestats.core.constants import ExportConstants, FileFormats
from tradestats.core.logger import get_logger
from tradestats.models.trade import EnrichedTrade
from tradestats.trading.enrich import to_utc


logger = get_logger(__name__)


def _iso(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return to_utc(value).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def trade_to_csv_row(trade: EnrichedTrade) -> Dict[str, Any]:
    """
    Flatten one trade into the export columns.

    Absent values (open-trade P&L, missing strategy/notes) stay None so that
    they are written as empty cells.
    """
    return {
        'symbol': trade.symbol,
        'assetType': trade.asset_type.value,
        'currency': trade.currency,
        'direction': trade.direction.value,
        'entryDate': _iso(trade.entry_date),
        'entryPrice': trade.entry_price,
        'exitDate': _iso(trade.exit_date),
        'exitPrice': trade.exit_price,
        'quantity': trade.quantity,
        'fees': trade.fees,
        'netPnl': trade.net_pnl,
        'pnlPercent': trade.pnl_percent,
        'outcome': trade.outcome.value if trade.outcome is not None else None,
        'strategyName': trade.strategy_name,
        'tags': ExportConstants.TAG_SEPARATOR.join(trade.tags),
        'notes': trade.notes,
    }


def trades_to_csv_rows(trades: Sequence[EnrichedTrade]) -> List[Dict[str, Any]]:
    """Rows in input order, keys in ExportConstants.CSV_COLUMNS order."""
    return [trade_to_csv_row(trade) for trade in trades]


def trades_to_csv(trades: Sequence[EnrichedTrade], include_bom: bool = False) -> str:
    """
    Serialize trades to CSV text.

    Args:
        trades: Enriched trades (open trades allowed)
        include_bom: Prefix a UTF-8 byte-order mark for spreadsheet tools

    Returns:
        Header row plus one record per trade, comma separated, ``\\n`` line
        endings. Fields containing a comma, quote or newline are quoted and
        embedded quotes doubled.
    """
    df = pd.DataFrame(trades_to_csv_rows(trades), columns=list(ExportConstants.CSV_COLUMNS))

    body = df.to_csv(index=False, na_rep='', lineterminator='\n')

    logger.info(f"Exported {len(df)} trades to CSV")

    return ExportConstants.BOM + body if include_bom else body


def generate_csv_filename(prefix: str = ExportConstants.DEFAULT_FILENAME_PREFIX, now: Optional[datetime] = None) -> str:
    """File name like ``trades-20250101_120000.csv`` for downloads."""
    timestamp = (now or datetime.now()).strftime(FileFormats.TIMESTAMP_FORMAT)
    return FileFormats.CSV_FILE_TEMPLATE.format(prefix=prefix, timestamp=timestamp)
