"""Logging utility using loguru."""
import sys
from pathlib import Path

from loguru import logger


_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> | <level>{message}</level>"
)
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]} | {message}"

# Messages logged before setup_logger() still need the "name" extra
logger.configure(extra={"name": "tradestats"})


def setup_logger(level: str = "INFO", log_file: str | None = None) -> None:
    """
    Configure loguru sinks for the whole process.

    Replaces any previously added handlers, so calling it twice (e.g. once
    from the CLI and once from a test) leaves exactly one console sink.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path to a rotating log file
    """
    logger.remove()

    # stderr so that JSON written to stdout by the CLI stays parseable
    logger.add(
        sys.stderr,
        format=_CONSOLE_FORMAT,
        level=level,
        colorize=True
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_file,
            format=_FILE_FORMAT,
            level=level,
            rotation="10 MB",  # Rotate when file reaches 10 MB
            retention="7 days",  # Keep logs for 7 days
            compression="zip"  # Compress rotated logs
        )


def get_logger(name: str = "tradestats"):
    """
    Get a logger bound to a module name.

    Args:
        name: Logger name (used as context)

    Returns:
        loguru logger with ``extra["name"]`` set

    Usage:
        logger = get_logger(__name__)
        logger.info("Processing data...")
        logger.debug("Debug details: {}", some_value)
    """
    return logger.bind(name=name)
