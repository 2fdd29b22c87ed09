"""Escaping rules for building Lucene query fragments."""

from __future__ import annotations

import re

# Characters significant in a bare term position (field names, unquoted values).
_TERM_SPECIAL_RE = re.compile(r"""[+\-!(){}\[\]^"?:\\&|'/\s*~]""")

# Full Lucene reserved set, used for template variable values.
_LUCENE_SPECIAL_RE = re.compile(r"""[!*+\-=<>\s&|()\[\]{}^~?:\\/"]""")

_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


def escape_filter(value: str) -> str:
    """Escape a filter key so it can be used in a bare term position.

    Keys can contain reserved characters such as colons, which are part of
    the Lucene syntax.
    """
    return _TERM_SPECIAL_RE.sub(r"\\\g<0>", value)


def escape_filter_value(value: str) -> str:
    """Escape a filter value for use inside a quoted phrase.

    Backslashes are doubled first so existing ones survive, then quotes are
    escaped.
    """
    value = value.replace("\\", "\\\\")
    return value.replace('"', '\\"')


def _is_number(value: str) -> bool:
    try:
        float(value)
    except ValueError:
        return False
    return True


def lucene_escape(value: str) -> str:
    """Escape a template variable value.

    Numbers are returned as-is; anything else gets every Lucene special
    character prefixed with a backslash.

    Args:
        value: Raw variable value.

    Returns:
        The value, safe to splice into a query string.
    """
    if _is_number(value):
        return value
    return _LUCENE_SPECIAL_RE.sub(r"\\\g<0>", value)


def unescape(value: str) -> str:
    """Drop backslash escapes, the inverse of the escaping functions above."""
    return _ESCAPE_RE.sub(r"\1", value)
