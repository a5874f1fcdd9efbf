"""Input coercion for template helpers.

Template data is untrusted: values may be missing, of the wrong type, or
partially filled in. The functions here turn any value into the canonical
string or count a helper works with, and never raise.
"""

import logging
import math
import re
from typing import Any


logger = logging.getLogger(__name__)

DEFAULT_COUNT = 1

# CPython's default int string-conversion limit
MAX_COUNT_DIGITS = 4300

_INT_PATTERN = re.compile(r'[+-]?\d+')
_DECIMAL_PATTERN = re.compile(r'[+-]?(\d+\.\d*|\.\d+)')


def to_text(value: Any) -> str:
    """Coerce a value to a string, mapping falsy values to the empty string.

    None, empty strings, numeric zero, False and empty containers all give
    ``""``. Bytes are decoded as UTF-8, the same way ``to_count`` reads
    them. Anything else gives ``str(value)``.

    Args:
        value: Any value passed by a template.

    Returns:
        The canonical string form of the value.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode('utf-8', errors='replace')
    try:
        if not value:
            return ''
        return str(value)
    except Exception as e:
        logger.warning(f"Could not convert {type(value).__name__} to text: {e}")
        return ''


def _parse_count_text(text: str, default: int) -> int:
    text = text.strip()
    if len(text) > MAX_COUNT_DIGITS:
        logger.debug(f"Count has more than {MAX_COUNT_DIGITS} characters, using default {default}")
        return default
    try:
        if _INT_PATTERN.fullmatch(text):
            return int(text)
        if _DECIMAL_PATTERN.fullmatch(text):
            return int(float(text))
    except (ValueError, OverflowError) as e:
        logger.debug(f"Count out of range, using default {default}: {e}")
    return default


def to_count(value: Any, default: int = DEFAULT_COUNT) -> int:
    """Parse a value as an integer count.

    Integer and decimal strings are accepted in full; decimals truncate
    toward zero. There is no partial parsing, so ``"3abc"`` is invalid.
    Negative results are returned as-is.

    Args:
        value: Value expected to represent a count.
        default: Count returned when the value is missing or invalid.

    Returns:
        The parsed count, or ``default``.
    """
    # bool is an int subclass but never a count
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value):
            return int(value)
        return default
    if isinstance(value, bytes):
        try:
            value = value.decode('utf-8')
        except UnicodeDecodeError:
            return default
    if isinstance(value, str):
        return _parse_count_text(value, default)
    return default
