"""Load trade records from CSV/JSON files or plain dicts."""
import json
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List

import pandas as pd

from tradestats.core.logger import get_logger
from tradestats.models.trade import Trade


logger = get_logger(__name__)

# Columns produced by trades_to_csv that are derived, not trade input
_DERIVED_COLUMNS = {'net_pnl', 'pnl_percent', 'outcome', 'gross_pnl', 'duration_ms'}


def _snake(name: str) -> str:
    return re.sub(r'(?<=[a-z0-9])([A-Z])', r'_\1', name.strip()).lower()


def _clean(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, float) and pd.isna(value):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _split_tags(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        parts = re.split(r'[;|]', value)
        return [p.strip() for p in parts if p.strip()]
    return list(value)


def trades_from_records(records: Iterable[Dict[str, Any]]) -> List[Trade]:
    """
    Build Trade models from row dicts.

    Keys may be snake_case or camelCase (the CSV export header). Derived
    columns such as netPnl are ignored; blank cells become None and tags may
    be a list or a ``;``/``|`` separated string.
    """
    trades = []
    for record in records:
        row = {_snake(k): _clean(v) for k, v in record.items()}
        row = {k: v for k, v in row.items() if k not in _DERIVED_COLUMNS}
        row['tags'] = _split_tags(row.get('tags'))
        if row.get('id') is not None:
            row['id'] = str(row['id'])
        if row.get('user_id') is not None:
            row['user_id'] = str(row['user_id'])
        trades.append(Trade(**{k: v for k, v in row.items() if k in Trade.model_fields}))
    return trades


def load_trades(path: str | Path) -> List[Trade]:
    """
    Load trades from a ``.csv`` or ``.json`` file.

    JSON files hold a list of trade objects, or ``{"trades": [...]}``.

    Raises:
        FileNotFoundError: path does not exist
        ValueError: unsupported extension
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Trades file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == '.csv':
        df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding='utf-8-sig')
        records = df.to_dict('records')
    elif suffix == '.json':
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
        records = data.get('trades', []) if isinstance(data, dict) else data
    else:
        raise ValueError(f"Unsupported trades file type '{suffix}' (expected .csv or .json)")

    trades = trades_from_records(records)
    logger.info(f"Loaded {len(trades)} trades from {path}")
    return trades
