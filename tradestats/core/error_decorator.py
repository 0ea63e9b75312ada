"""Error logging decorator for entry points with detailed stack traces."""

import functools
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from tradestats.core.constants import Paths
from tradestats.core.logger import get_logger


logger = get_logger(__name__)


def log_errors_to_file(log_file: str | Path = Paths.ERROR_LOG):
    """
    Decorator that logs detailed error information to a file when a function fails.

    Logs include:
    - Timestamp of error
    - Function name and module
    - Full stack trace
    - Error type and message
    - Function arguments (trade lists summarized, not dumped)

    The exception is always re-raised.

    Args:
        log_file: Path to the log file (default: logs/errors.log)

    Usage:
        @log_errors_to_file()
        def cmd_dashboard(args):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                _log_error_details(func, e, args, kwargs, log_file)
                raise

        return wrapper

    return decorator


def _log_error_details(func: Callable, error: Exception, args: tuple, kwargs: dict, log_file: str | Path):
    """Internal function to format and write error details to log file."""
    log_path = Path(log_file)

    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
    func_name = func.__name__
    func_module = func.__module__
    stack_trace = traceback.format_exc()
    formatted_args = _format_args(args, kwargs)

    log_entry = f"""
{'='*100}
TIMESTAMP: {timestamp}
FUNCTION:  {func_module}.{func_name}
ERROR TYPE: {type(error).__name__}
ERROR MSG:  {str(error)}

ARGUMENTS:
{formatted_args}

FULL STACK TRACE:
{stack_trace}
{'='*100}

"""

    logger.error(f"{func_module}.{func_name} failed: {type(error).__name__}: {error}")

    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        with open(log_path, 'a', encoding='utf-8') as f:
            f.write(log_entry)
    except OSError as log_error:
        logger.warning(f"Failed to write to error log {log_path}: {log_error}")


def _format_args(args: tuple, kwargs: dict) -> str:
    """Format function arguments for logging."""
    formatted = []

    for i, arg in enumerate(args):
        formatted.append(f"  arg[{i}]: {_sanitize_value(arg)}")

    for key, value in kwargs.items():
        formatted.append(f"  {key}: {_sanitize_value(value)}")

    return '\n'.join(formatted) if formatted else "  (no arguments)"


def _sanitize_value(value: Any) -> str:
    """Convert a value to a safe string representation."""
    max_length = 200

    if isinstance(value, str):
        if len(value) > max_length:
            return f"{value[:max_length]}... (truncated, total length: {len(value)})"
        return repr(value)

    if isinstance(value, (list, tuple, set)):
        if len(value) > 10:
            return f"{type(value).__name__} with {len(value)} items"
        return repr(value)

    if isinstance(value, dict):
        if len(value) > 10:
            keys = list(value.keys())[:3]
            return f"dict with {len(value)} keys (first 3: {keys}...)"
        return repr(value)

    value_str = str(value)
    if len(value_str) > max_length:
        return f"{value_str[:max_length]}... (truncated)"
    return value_str
