"""Utility modules for STENCIL."""

from utils.string_utils import (
    truncate,
    format_call,
)
from utils.logging_setup import (
    setup_logging,
    set_trace_enabled,
    TRACE_LOGGER_NAME,
)

__all__ = [
    'truncate',
    'format_call',
    'setup_logging',
    'set_trace_enabled',
    'TRACE_LOGGER_NAME',
]
