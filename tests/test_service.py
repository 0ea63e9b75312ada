"""Tests for AnalyticsService and the CLI."""
import json
from datetime import datetime, timezone

import pytest
import yaml

import tradestats.run as cli
from tradestats.core.exceptions import InvalidTradeError
from tradestats.run import main
from tradestats.services.analytics_service import CHART_BREAKDOWNS, PERFORMANCE_BREAKDOWNS, AnalyticsService


@pytest.fixture
def service():
    """Create a service with no config."""
    return AnalyticsService()


@pytest.fixture
def raw_trades(make_trade):
    """Scenario trades (+100, -50, +100) given out of order, plus one open trade."""
    return [
        make_trade(100, day=2, symbol='MSFT'),
        make_trade(100, day=0, symbol='AAPL'),
        make_trade(None, day=3, symbol='NVDA'),
        make_trade(-50, day=1, symbol='TSLA'),
    ]


@pytest.fixture
def trades_file(tmp_path, raw_trades):
    """Write raw_trades to a JSON file."""
    path = tmp_path / 'trades.json'
    path.write_text(json.dumps([t.model_dump(mode='json') for t in raw_trades]))
    return path


class TestDashboard:
    """Tests for the dashboard response."""

    def test_scenario(self, service, raw_trades):
        """Test +100/-50/+100 gives the expected summary."""
        result = service.dashboard(raw_trades)

        assert result.total_trades == 3
        assert result.basic.open_trades == 1
        assert result.basic.total_pnl == 150.0
        assert result.basic.profit_factor == 4.0
        assert result.expectancy.expectancy == 50.0
        assert result.expectancy.expectancy_percent == pytest.approx(5.0)
        assert result.drawdown.max_drawdown == 50.0
        assert result.drawdown.max_drawdown_percent == 50.0
        assert result.streaks.current_streak == 1
        assert result.date_range.filtered is False

    def test_input_order_does_not_matter(self, service, raw_trades):
        """Test trades are ordered by entry date before the calculators run."""
        forward = service.dashboard(raw_trades)
        backward = service.dashboard(list(reversed(raw_trades)))

        assert forward == backward

    def test_empty(self, service):
        """Test empty input gives zero results."""
        result = service.dashboard([])

        assert result.total_trades == 0
        assert result.basic.win_rate == 0.0
        assert result.sharpe.sharpe_ratio == 0.0
        assert result.drawdown.drawdown_periods == []

    def test_date_window(self, service, raw_trades):
        """Test start_date drops earlier trades."""
        result = service.dashboard(raw_trades, start_date=datetime(2024, 1, 2))

        # Jan 2 (-50) and Jan 3 (+100) remain; the Jan 4 trade is open
        assert result.total_trades == 2
        assert result.basic.total_pnl == 50.0
        assert result.basic.open_trades == 1
        assert result.date_range.filtered is True

    def test_window_is_inclusive(self, service, raw_trades):
        """Test a trade entered exactly at end_date is kept."""
        end = datetime(2024, 1, 2, 14, 30, tzinfo=timezone.utc)
        result = service.dashboard(raw_trades, end_date=end)

        assert result.total_trades == 2

    def test_invalid_trade_propagates(self, service, make_trade):
        """Test InvalidTradeError reaches the caller unchanged."""
        with pytest.raises(InvalidTradeError, match="quantity"):
            service.dashboard([make_trade(10), make_trade(10, day=1, quantity=0)])


class TestCharts:
    """Tests for chart series."""

    def test_all_sections(self, service, raw_trades):
        """Test no chart_type returns every section."""
        result = service.charts(raw_trades)

        assert [p.equity for p in result.equity_curve] == [100.0, 50.0, 150.0]
        assert result.distribution.wins == 2
        assert len(result.pnl_distribution) == 7
        assert set(result.breakdowns) == set(CHART_BREAKDOWNS)

    def test_single_type(self, service, raw_trades):
        """Test sections that were not requested stay None."""
        result = service.charts(raw_trades, chart_type='equity')

        assert result.equity_curve is not None
        assert result.distribution is None
        assert result.breakdowns is None

    def test_unknown_type(self, service, raw_trades):
        """Test an unknown chart type raises ValueError."""
        with pytest.raises(ValueError, match="Unknown chart type"):
            service.charts(raw_trades, chart_type='candles')

    def test_top_symbols_from_config(self, raw_trades):
        """Test the symbol breakdown is cut to analytics.top_symbols."""
        service = AnalyticsService({'analytics': {'top_symbols': 1}})

        symbols = service.charts(raw_trades, chart_type='breakdown').breakdowns['symbol']

        assert [row.value for row in symbols] == ['AAPL']

    def test_distribution_edges_from_config(self, raw_trades):
        """Test histogram edges come from analytics.distribution_edges."""
        service = AnalyticsService({'analytics': {'distribution_edges': [10, 60]}})

        buckets = service.charts(raw_trades, chart_type='distribution').pnl_distribution

        assert buckets[-1].range == 'Win > 60'
        assert buckets[-1].count == 2


class TestPerformance:
    """Tests for the performance report."""

    def test_breakdowns(self, service, raw_trades):
        """Test every dimension and the calendar metrics are present."""
        result = service.performance(raw_trades)

        assert set(result.breakdowns) == set(PERFORMANCE_BREAKDOWNS)
        assert len(result.breakdowns['day_of_week']) == 7
        assert len(result.time_based.day_of_week) == 7
        assert [r.value for r in result.time_based.month] == ['January']


class TestBreakdown:
    """Tests for a single-dimension breakdown."""

    def test_by_symbol(self, service, raw_trades):
        """Test groups are sorted by P&L with ties in entry-date order."""
        rows = service.breakdown(raw_trades, 'symbol')

        assert [row.value for row in rows] == ['AAPL', 'MSFT', 'TSLA']

    def test_date_window(self, service, raw_trades):
        """Test the window is applied before grouping."""
        rows = service.breakdown(raw_trades, 'symbol', start_date=datetime(2024, 1, 2))

        assert [row.value for row in rows] == ['MSFT', 'TSLA']

    def test_unknown_dimension(self, service, raw_trades):
        """Test an unknown dimension raises ValueError."""
        with pytest.raises(ValueError, match="Unknown dimension"):
            service.breakdown(raw_trades, 'mood')


class TestExport:
    """Tests for CSV export through the service."""

    def test_includes_open_trades_in_input_order(self, service, raw_trades):
        """Test export keeps input order and open trades."""
        lines = service.export_csv(raw_trades).splitlines()

        assert len(lines) == 5
        assert [line.split(',')[0] for line in lines[1:]] == ['MSFT', 'AAPL', 'NVDA', 'TSLA']

    def test_bom_default_from_config(self, raw_trades):
        """Test export.include_bom sets the default, an explicit flag wins."""
        service = AnalyticsService({'export': {'include_bom': True}})

        assert service.export_csv(raw_trades).startswith('\ufeff')
        assert not service.export_csv(raw_trades, include_bom=False).startswith('\ufeff')

    def test_filename_prefix_from_config(self):
        """Test export.filename_prefix is used for the file name."""
        service = AnalyticsService({'export': {'filename_prefix': 'journal'}})

        assert service.csv_filename(datetime(2024, 5, 6, 7, 8, 9)) == 'journal-20240506_070809.csv'


class TestCli:
    """Tests for the command-line entry point."""

    def test_dashboard(self, trades_file, capsys):
        """Test dashboard prints JSON metrics."""
        main(['dashboard', '--trades', str(trades_file)])

        data = json.loads(capsys.readouterr().out)
        assert data['total_trades'] == 3
        assert data['basic']['total_pnl'] == 150.0

    def test_breakdown(self, trades_file, capsys):
        """Test breakdown prints one row per group."""
        main(['breakdown', '--trades', str(trades_file), '--dimension', 'symbol'])

        rows = json.loads(capsys.readouterr().out)
        assert [row['value'] for row in rows] == ['AAPL', 'MSFT', 'TSLA']

    def test_breakdown_date_window(self, make_trade, tmp_path, capsys):
        """Test breakdown honours --start-date."""
        path = tmp_path / 'window.json'
        trades = [
            make_trade(10, symbol='A', entry_date=datetime(2024, 1, 1, tzinfo=timezone.utc)),
            make_trade(10, symbol='B', entry_date=datetime(2024, 6, 1, tzinfo=timezone.utc)),
        ]
        path.write_text(json.dumps([t.model_dump(mode='json') for t in trades]))

        main(['breakdown', '--trades', str(path), '--dimension', 'symbol', '--start-date', '2024-03-01'])

        rows = json.loads(capsys.readouterr().out)
        assert [row['value'] for row in rows] == ['B']

    def test_charts_single_type(self, trades_file, capsys):
        """Test --chart-type limits the output."""
        main(['charts', '--trades', str(trades_file), '--chart-type', 'distribution'])

        data = json.loads(capsys.readouterr().out)
        assert data['equity_curve'] is None
        assert data['distribution']['wins'] == 2

    def test_config_loaded_once(self, trades_file, tmp_path, capsys, monkeypatch):
        """Test --config is read once and reaches the command."""
        config_path = tmp_path / 'config.yaml'
        config_path.write_text(yaml.safe_dump({'analytics': {'top_symbols': 1}}))

        calls = []
        real_load_config = cli.load_config

        def counting_load_config(path):
            calls.append(path)
            return real_load_config(path)

        monkeypatch.setattr(cli, 'load_config', counting_load_config)

        main(['charts', '--trades', str(trades_file), '--chart-type', 'breakdown', '--config', str(config_path)])

        data = json.loads(capsys.readouterr().out)
        assert len(calls) == 1
        assert [row['value'] for row in data['breakdowns']['symbol']] == ['AAPL']

    def test_export_to_file(self, trades_file, tmp_path):
        """Test export writes the CSV to --output."""
        output = tmp_path / 'out' / 'trades.csv'

        main(['export', '--trades', str(trades_file), '--output', str(output), '--bom'])

        text = output.read_text(encoding='utf-8')
        assert text.startswith('\ufeff')
        assert len(text.splitlines()) == 5

    def test_export_to_stdout(self, trades_file, capsys):
        """Test --output - writes the CSV to stdout."""
        main(['export', '--trades', str(trades_file), '--output', '-'])

        assert capsys.readouterr().out.startswith('symbol,assetType')

    def test_no_command(self):
        """Test running without a command exits."""
        with pytest.raises(SystemExit):
            main([])
