"""Logging configuration for STENCIL."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional


TRACE_LOGGER_NAME = 'helpers.trace'

DEFAULT_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def set_trace_enabled(enabled: bool) -> None:
    """Turn the helper call trace on or off.

    Args:
        enabled: Emit a DEBUG record for every traced helper call.
    """
    trace_logger = logging.getLogger(TRACE_LOGGER_NAME)
    trace_logger.setLevel(logging.DEBUG if enabled else logging.INFO)


def setup_logging(
    logging_config: Optional[Dict[str, Any]] = None,
    trace_calls: bool = False,
) -> None:
    """Set up logging configuration.

    Console output goes to stderr so helper results on stdout stay clean.

    Args:
        logging_config: The ``logging`` section of the configuration.
        trace_calls: Whether helper calls are traced.
    """
    logging_config = logging_config or {}

    log_file = logging_config.get('file')
    log_level = logging_config.get('level', 'INFO')
    max_bytes = logging_config.get('max_bytes', 10485760)
    backup_count = logging_config.get('backup_count', 5)
    log_format = logging_config.get('format', DEFAULT_FORMAT)
    date_format = logging_config.get('date_format', DEFAULT_DATE_FORMAT)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, str(log_level).upper(), logging.INFO))

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if log_file:
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        file_handler.setFormatter(logging.Formatter(log_format, date_format))
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(log_format, date_format))
    root_logger.addHandler(console_handler)

    set_trace_enabled(trace_calls)
