"""Query modifications driven by dashboard actions and template variables.

These helpers build on the filter operations of ``QueryTree``:

- ``modify_query`` handles the "filter for value" / "filter out value"
  actions offered next to log lines.
- ``add_adhoc_filter`` applies dashboard ad-hoc filters (``key``,
  ``operator``, ``value``) to a query string.
- ``format_variable`` and ``interpolate`` expand template variables into
  escaped Lucene fragments.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from lucene_query.exceptions import ValidationError
from lucene_query.search.escaping import escape_filter, escape_filter_value, lucene_escape
from lucene_query.search.query import OperatorType, concatenate, parse

log = logging.getLogger(__name__)

ADD_FILTER = "ADD_FILTER"
ADD_FILTER_OUT = "ADD_FILTER_OUT"

DEFAULT_EMPTY_VALUE = "__empty__"

# Operators that cannot be expressed as key:"value" and are appended as text
_TEXT_FILTER_TEMPLATES: dict[str, str] = {
    "=~": "{key}:/{value}/",
    "!~": "-{key}:/{value}/",
    ">": "{key}:>{value}",
    "<": "{key}:<{value}",
}

ADHOC_OPERATORS: tuple[str, ...] = ("=", "!=", *_TEXT_FILTER_TEMPLATES)

_VARIABLE_RE = re.compile(r"\$\{(\w+)\}|\$(\w+)")


@dataclass
class AdHocFilter:
    """A dashboard ad-hoc filter such as ``host = web1``."""

    key: str
    operator: str
    value: Any


def modify_query(query: str, action: str, key: str | None, value: str) -> str:
    """Apply a "filter for" or "filter out" action to query text.

    Args:
        query: Current query text.
        action: ``ADD_FILTER`` or ``ADD_FILTER_OUT``.
        key: Field to filter on. Nothing happens when empty.
        value: Field value.

    Returns:
        The modified query text.
    """
    if not key:
        return query

    tree = parse(query)
    if action == ADD_FILTER:
        tree = tree.add_filter(key, value)
    elif action == ADD_FILTER_OUT:
        tree = tree.add_filter(key, value, "-")
    else:
        log.debug("Ignoring unknown query action %r", action)
    return tree.to_string()


def add_adhoc_filter(
    query: str, adhoc: AdHocFilter, operator: OperatorType | None = None
) -> str:
    """Add an ad-hoc filter to query text.

    Equality filters go through ``QueryTree.add_filter`` so they are not
    duplicated; the other operators are appended as text.

    Raises:
        ValidationError: If the filter operator is not supported.
    """
    if not adhoc.key or adhoc.value is None or adhoc.value == "":
        return query

    # Values may arrive as numbers or booleans
    value = str(adhoc.value)

    if adhoc.operator == "=":
        return parse(query).add_filter(adhoc.key, value, operator=operator).to_string()
    if adhoc.operator == "!=":
        return parse(query).add_filter(adhoc.key, value, "-", operator=operator).to_string()

    template = _TEXT_FILTER_TEMPLATES.get(adhoc.operator)
    if template is None:
        raise ValidationError(
            "ad-hoc filter operator",
            adhoc.operator,
            f"must be one of {', '.join(ADHOC_OPERATORS)}",
        )
    clause = template.format(key=escape_filter(adhoc.key), value=escape_filter_value(value))
    return concatenate(query, clause, operator)


def add_adhoc_filters(
    query: str,
    filters: Iterable[AdHocFilter] | None,
    operator: OperatorType | None = None,
) -> str:
    """Apply each ad-hoc filter in order."""
    if not filters:
        return query
    for adhoc in filters:
        query = add_adhoc_filter(query, adhoc, operator)
    return query


def _variable_field(variable_query: str | None) -> str | None:
    """Extract the ``field`` of a terms variable definition, if any."""
    if not isinstance(variable_query, str) or not variable_query:
        return None
    try:
        definition = json.loads(variable_query)
    except json.JSONDecodeError:
        return None
    if not isinstance(definition, dict):
        return None
    field = definition.get("field")
    return field if isinstance(field, str) else None


def format_variable(
    value: Any,
    variable_query: str | None = None,
    empty_value: str = DEFAULT_EMPTY_VALUE,
) -> str:
    """Format a template variable value as a Lucene fragment.

    Multi-value variables become ``"a" OR field:"b"`` when the variable
    definition names its field, ``IN ["a" "b"]`` otherwise.

    Args:
        value: A string, a list of strings or any other scalar.
        variable_query: JSON definition of the variable (``{"field": ...}``).
        empty_value: Placeholder returned for an empty selection.

    Returns:
        The escaped fragment.
    """
    if isinstance(value, str):
        return lucene_escape(value)

    if isinstance(value, (list, tuple)):
        if not value:
            return empty_value
        quoted = [f'"{lucene_escape(str(item))}"' for item in value]
        field = _variable_field(variable_query)
        if field is None:
            return "IN [" + " ".join(quoted) + "]"
        return f" OR {field}:".join(quoted)

    if isinstance(value, bool):
        return lucene_escape(str(value).lower())
    return lucene_escape(str(value))


def interpolate(
    query: str,
    variables: Mapping[str, Any],
    variable_queries: Mapping[str, str] | None = None,
    empty_value: str = DEFAULT_EMPTY_VALUE,
) -> str:
    """Replace ``$name`` and ``${name}`` references with formatted values.

    References to unknown variables are left as they are.
    """
    variable_queries = variable_queries or {}

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1) or match.group(2)
        if name not in variables:
            return match.group(0)
        return format_variable(variables[name], variable_queries.get(name), empty_value)

    return _VARIABLE_RE.sub(_replace, query)
