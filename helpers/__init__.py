"""Template helper functions for STENCIL.

Helpers are pure string functions meant to be registered with a host
templating engine, e.g. ``{{upper text}}`` or ``{{repeat text times}}``.
"""

from helpers.coercion import (
    to_text,
    to_count,
)
from helpers.builtin import (
    upper,
    repeat,
    wrap,
    replace_regex,
    table_regex,
)
from helpers.registry import (
    HelperRegistry,
    HelperError,
    HelperNotFoundError,
    HelperRegistrationError,
    HelperLoadError,
    HelperCallError,
    BUILTIN_HELPERS,
    discover_helpers,
    render_result,
)

__all__ = [
    'to_text',
    'to_count',
    'upper',
    'repeat',
    'wrap',
    'replace_regex',
    'table_regex',
    'HelperRegistry',
    'HelperError',
    'HelperNotFoundError',
    'HelperRegistrationError',
    'HelperLoadError',
    'HelperCallError',
    'BUILTIN_HELPERS',
    'discover_helpers',
    'render_result',
]
