"""Shared fixtures for STENCIL tests."""

import logging
import textwrap

import pytest

from utils.logging_setup import TRACE_LOGGER_NAME


def _is_pytest_handler(handler: logging.Handler) -> bool:
    return type(handler).__module__.startswith('_pytest')


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo logging changes made by setup_logging and set_trace_enabled."""
    root_logger = logging.getLogger()
    trace_logger = logging.getLogger(TRACE_LOGGER_NAME)
    saved_handlers = root_logger.handlers[:]
    saved_root_level = root_logger.level
    saved_trace_level = trace_logger.level

    yield

    for handler in root_logger.handlers[:]:
        if handler not in saved_handlers and not _is_pytest_handler(handler):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(saved_root_level)
    trace_logger.setLevel(saved_trace_level)


@pytest.fixture
def write_helper_file(tmp_path):
    """Write a Python helper file and return its path."""
    def _write(source: str, name: str = 'my_helpers.py'):
        path = tmp_path / name
        path.write_text(textwrap.dedent(source), encoding='utf-8')
        return path
    return _write
