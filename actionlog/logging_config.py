"""
Structured logging configuration for actionlog.

Provides JSON-formatted logs with a run_id field so diagnostics about dropped
events can be correlated with the run they belong to.

Usage:
    from actionlog.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, run_id="r1")
    logger.warning("Dropping inconsistent event", extra={"action": "counter.add"})
"""

import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

from .config import EngineConfig

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class RunIdFilter(logging.Filter):
    """
    Logging filter that adds run_id to all log records.

    Ensures all records have a run_id field, even if not set via LoggerAdapter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "run_id"):
            record.run_id = "N/A"  # type: ignore
        return True


def setup_logging(config: Optional[EngineConfig] = None, stream=None) -> None:
    """
    Configure root logger with structured logging.

    Args:
        config: Engine config (defaults to EngineConfig.from_env())
        stream: Output stream (defaults to stderr, keeping stdout for CLI output)
    """
    config = config or EngineConfig.from_env()
    level = _LEVELS.get(config.log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.addFilter(RunIdFilter())

    if config.log_format == "json":
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(run_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [run_id=%(run_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str, run_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger with optional run_id for correlation.

    Args:
        name: Logger name (typically __name__)
        run_id: Run the log records are about

    Returns:
        LoggerAdapter with run_id in extra fields
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"run_id": run_id or "N/A"})
