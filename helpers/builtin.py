"""Built-in template helpers.

Every helper here is a pure function of its arguments: it accepts any value,
coerces it, and always returns a string. Template contexts should never fail
to render because a value is missing.

Usage in a template::

    {{upper text}}          -> "HELLO WORLD"
    {{repeat text times}}   -> "abcabcabc"
    {{wrap text}}           -> "[hello world]"
"""

import logging
import re
from typing import Any

from helpers.coercion import to_count, to_text
from utils.logging_setup import TRACE_LOGGER_NAME
from utils.string_utils import format_call


logger = logging.getLogger(__name__)
trace_logger = logging.getLogger(TRACE_LOGGER_NAME)

# $1 or ${1}, as written in template replacement strings
_GROUP_REF = re.compile(r'\$(?:\{(\d+)\}|(\d+))')


def _trace(name: str, *args: Any) -> None:
    if trace_logger.isEnabledFor(logging.DEBUG):
        trace_logger.debug(f"call {format_call(name, args)}")


def upper(text: Any = None) -> str:
    """Uppercase text.

    Args:
        text: Any value; falsy values give an empty string.

    Returns:
        The coerced text in upper case.
    """
    _trace('upper', text)
    return to_text(text).upper()


def repeat(text: Any = None, times: Any = None) -> str:
    """Repeat text a number of times.

    Invalid or missing counts default to 1. Negative counts give an empty
    string.

    Args:
        text: Any value; falsy values give an empty string.
        times: Any value representing a count.

    Returns:
        The coerced text concatenated with itself ``times`` times.
    """
    _trace('repeat', text, times)
    count = max(0, to_count(times))
    try:
        return to_text(text) * count
    except (OverflowError, MemoryError) as e:
        logger.warning(f"Repeat count {count} too large: {e}")
        return ''


def wrap(text: Any = None) -> str:
    """Trim text and enclose it in square brackets.

    Not idempotent: wrapping twice adds a second pair of brackets.
    """
    return "[" + to_text(text).strip() + "]"


def _fill_groups(replacement: str, match: 're.Match[str]') -> str:
    # $0 is the whole match; missing or unmatched groups are empty
    def substitute(ref: 're.Match[str]') -> str:
        index = int(ref.group(1) or ref.group(2))
        if index > match.re.groups:
            return ''
        return match.group(index) or ''

    return _GROUP_REF.sub(substitute, replacement)


def replace_regex(text: Any = None, pattern: Any = None, replacement: Any = None) -> str:
    """Replace every match of a regular expression.

    Group references in the replacement use ``$1`` or ``${1}``; references
    to groups the pattern does not have are replaced by nothing. Other
    characters, backslashes included, are literal. An invalid pattern
    leaves the text unchanged.

    Args:
        text: Text to search.
        pattern: Regular expression.
        replacement: Replacement string.

    Returns:
        Text with all matches replaced.
    """
    source = to_text(text)
    if pattern is None or replacement is None:
        return source

    try:
        compiled = re.compile(to_text(pattern))
    except re.error as e:
        logger.warning(f"Invalid regex '{to_text(pattern)}': {e}")
        return source

    template = to_text(replacement)
    return compiled.sub(lambda match: _fill_groups(template, match), source)


def _expand_groups(replacement: str, match: 're.Match[str]') -> str:
    def substitute(ref: 're.Match[str]') -> str:
        index = int(ref.group(1) or ref.group(2))
        if index == 0 or index > (match.re.groups or 0):
            return ref.group(0)
        value = match.group(index)
        return ref.group(0) if value is None else value

    return _GROUP_REF.sub(substitute, replacement)


def table_regex(text: Any = None, *pairs: Any) -> str:
    """Map text through the first matching pattern of a lookup table.

    ``pairs`` is ``pattern1, replacement1, pattern2, replacement2, ...``.
    Each pattern must match the whole text. The replacement of the first
    match is returned with ``$1``, ``$2`` ... filled from its groups. A
    trailing unpaired argument is ignored.

    Args:
        text: Text to look up.
        *pairs: Alternating patterns and replacements.

    Returns:
        The expanded replacement, or the text unchanged when nothing matches.
    """
    source = to_text(text)
    for i in range(0, len(pairs) - 1, 2):
        pattern = to_text(pairs[i])
        replacement = to_text(pairs[i + 1])
        try:
            match = re.fullmatch(pattern, source)
        except re.error as e:
            logger.debug(f"Skipping invalid regex '{pattern}': {e}")
            continue
        if match:
            return _expand_groups(replacement, match)
    return source
