"""String utility functions for STENCIL.

This module provides helpers for rendering helper calls in log output.
"""

from typing import Any, Sequence


def truncate(text: str, max_length: int, suffix: str = "...") -> str:
    """Truncate a string to a maximum length.

    Args:
        text: The string to truncate.
        max_length: Maximum length including suffix.
        suffix: String to append when truncated.

    Returns:
        Truncated string with suffix if needed.
    """
    if len(text) <= max_length:
        return text
    if max_length <= len(suffix):
        return suffix[:max_length]
    return text[:max_length - len(suffix)] + suffix


def format_call(name: str, args: Sequence[Any], max_arg_length: int = 60) -> str:
    """Render a helper call as ``name(arg1, arg2)`` for log records.

    Args:
        name: Helper name.
        args: Positional arguments of the call.
        max_arg_length: Longest repr kept per argument.

    Returns:
        Single-line description of the call.
    """
    rendered = ", ".join(truncate(repr(arg), max_arg_length) for arg in args)
    return f"{name}({rendered})"
