"""Tests for configuration, logging and the error-log decorator."""
import pytest
import yaml
from loguru import logger

from tradestats.core.config import get_param, load_config, validate_config
from tradestats.core.constants import Paths
from tradestats.core.error_decorator import log_errors_to_file
from tradestats.core.exceptions import ConfigError, InvalidTradeError, TradeStatsError
from tradestats.core.logger import get_logger, setup_logger


@pytest.fixture
def config_file(tmp_path):
    def _write(data):
        path = tmp_path / 'config.yaml'
        path.write_text(yaml.safe_dump(data))
        return path
    return _write


class TestLoadConfig:
    """Tests for loading YAML config files."""

    def test_default_config(self):
        """Test the shipped default config values."""
        config = load_config(Paths.DEFAULT_CONFIG)

        assert get_param(config, 'analytics', 'distribution_edges') == [100, 500]
        assert get_param(config, 'analytics', 'top_symbols') == 10
        assert get_param(config, 'export', 'include_bom') is False
        assert get_param(config, 'logging', 'level') == 'INFO'

    def test_custom_file(self, config_file):
        """Test a custom file is loaded as written."""
        path = config_file({'analytics': {'top_symbols': 3}})

        assert load_config(path) == {'analytics': {'top_symbols': 3}}

    def test_empty_file_is_empty_config(self, tmp_path):
        """Test an empty file gives an empty dict."""
        path = tmp_path / 'empty.yaml'
        path.write_text('')

        assert load_config(path) == {}

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / 'missing.yaml')

    def test_invalid_file_is_rejected(self, config_file):
        """Test invalid values are caught on load."""
        path = config_file({'analytics': {'top_symbols': 0}})

        with pytest.raises(ConfigError, match="top_symbols"):
            load_config(path)


class TestValidateConfig:
    """Tests for config validation."""

    @pytest.mark.parametrize("config, match", [
        ({'analytics': {'distribution_edges': [100]}}, "distribution_edges"),
        ({'analytics': {'distribution_edges': [500, 100]}}, "low < high"),
        ({'analytics': {'distribution_edges': [0, 100]}}, "low < high"),
        ({'analytics': {'top_symbols': 'ten'}}, "top_symbols"),
        ({'export': {'include_bom': 'yes'}}, "include_bom"),
        ({'export': {'filename_prefix': '  '}}, "filename_prefix"),
        ({'logging': {'level': 'LOUD'}}, "logging.level"),
    ])
    def test_rejects(self, config, match):
        """Test each invalid value raises ConfigError."""
        with pytest.raises(ConfigError, match=match):
            validate_config(config)

    def test_non_mapping_root(self):
        """Test a non-mapping root is rejected."""
        with pytest.raises(ConfigError):
            validate_config(['analytics'])

    def test_accepts_partial_config(self):
        """Test missing sections are allowed."""
        validate_config({})
        validate_config({'logging': {'level': 'debug'}})

    def test_config_error_is_value_error(self):
        """Test ConfigError can be caught as ValueError."""
        assert issubclass(ConfigError, ValueError)
        assert issubclass(ConfigError, TradeStatsError)


class TestGetParam:
    """Tests for nested config lookup."""

    def test_nested(self):
        """Test lookup through nested sections."""
        assert get_param({'a': {'b': {'c': 1}}}, 'a', 'b', 'c') == 1

    def test_default(self):
        """Test missing keys return the default."""
        assert get_param({'a': {}}, 'a', 'b', default=5) == 5
        assert get_param(None, 'a', default='x') == 'x'

    def test_non_dict_intermediate(self):
        """Test a scalar on the path returns the default."""
        assert get_param({'a': 3}, 'a', 'b') is None


class TestExceptions:
    """Tests for exception types."""

    def test_invalid_trade_message(self):
        """Test the message is prefixed with the trade id."""
        error = InvalidTradeError("quantity must be positive", trade_id='t9')

        assert error.trade_id == 't9'
        assert str(error).startswith("Trade t9: ")
        assert isinstance(error, ValueError)


class TestLogger:
    """Tests for loguru setup."""

    def test_bound_name(self):
        """Test get_logger binds the module name."""
        messages = []
        sink_id = logger.add(lambda m: messages.append(m.record), level='INFO')
        try:
            get_logger('tradestats.test').info("hello")
        finally:
            logger.remove(sink_id)

        assert messages[0]['extra']['name'] == 'tradestats.test'
        assert messages[0]['message'] == 'hello'

    def test_file_sink(self, tmp_path):
        """Test the rotating file sink receives messages."""
        log_file = tmp_path / 'logs' / 'run.log'

        setup_logger(level='DEBUG', log_file=str(log_file))
        get_logger('tradestats.test').debug("written to file")
        setup_logger()  # removes the file sink and closes it

        assert "written to file" in log_file.read_text()
        assert "tradestats.test" in log_file.read_text()


class TestLogErrorsToFile:
    """Tests for the error-log decorator."""

    def test_writes_and_reraises(self, tmp_path):
        """Test a failure is logged with its arguments and re-raised."""
        log_file = tmp_path / 'errors.log'

        @log_errors_to_file(log_file)
        def failing(trades, label='x'):
            raise InvalidTradeError("entry_price must be positive", trade_id='t1')

        with pytest.raises(InvalidTradeError):
            failing(list(range(20)), label='dashboard')

        content = log_file.read_text()
        assert "ERROR TYPE: InvalidTradeError" in content
        assert "failing" in content
        assert "list with 20 items" in content
        assert "label: 'dashboard'" in content

    def test_success_passes_through(self, tmp_path):
        """Test a successful call writes nothing."""
        log_file = tmp_path / 'errors.log'

        @log_errors_to_file(log_file)
        def ok(value):
            return value * 2

        assert ok(21) == 42
        assert not log_file.exists()
