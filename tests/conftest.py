"""Shared trade factories for the test suite."""
from datetime import datetime, timedelta, timezone

import pytest

from tradestats.models.trade import Trade
from tradestats.trading.enrich import enrich_all


BASE_DATE = datetime(2024, 1, 1, 14, 30, tzinfo=timezone.utc)  # a Monday


def build_trade(pnl=None, day=0, **overrides) -> Trade:
    """
    Long trade on 1 unit at 1000 whose net P&L equals ``pnl`` exactly.

    pnl=None gives an open trade. ``day`` offsets the entry date from
    BASE_DATE; the exit is one hour after entry.
    """
    entry_date = overrides.pop('entry_date', BASE_DATE + timedelta(days=day))
    fields = {
        'id': f"t{day}",
        'symbol': 'AAPL',
        'direction': 'long',
        'quantity': 1,
        'entry_price': 1000.0,
        'entry_date': entry_date,
    }
    if pnl is not None:
        fields['exit_price'] = 1000.0 + pnl
        fields['exit_date'] = entry_date + timedelta(hours=1)
    fields.update(overrides)
    return Trade(**fields)


@pytest.fixture
def make_trade():
    """Factory fixture around build_trade."""
    return build_trade


@pytest.fixture
def enrich_pnls():
    """Enriched chronological trades from a list of net P&L values (None = open)."""
    def _make(pnls, **overrides):
        return enrich_all([build_trade(pnl, day=i, **overrides) for i, pnl in enumerate(pnls)])
    return _make


@pytest.fixture
def scenario_trades(enrich_pnls):
    """+100 (+10%), -50 (-5%), +100 (+10%) in chronological order."""
    return enrich_pnls([100, -50, 100])
