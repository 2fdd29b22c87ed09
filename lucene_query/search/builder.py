"""Keep query text and its parsed tree in sync."""

from __future__ import annotations

from lucene_query.search.ast_nodes import ModifierType
from lucene_query.search.query import QueryTree, parse, toggle_filter


class QueryBuilder:
    """Query state shared by a text editor and a facet sidebar.

    Editing the text re-parses it; changing the tree (e.g. toggling a
    facet) re-serializes it.
    """

    def __init__(self, query: str = "") -> None:
        self.query = query
        self.parsed_query = parse(query)

    def set_query(self, query: str) -> None:
        self.query = query
        self.parsed_query = parse(query)

    def set_parsed_query(self, parsed_query: QueryTree) -> None:
        self.parsed_query = parsed_query
        self.query = parsed_query.to_string()

    def toggle_filter(self, field: str, value: str, modifier: ModifierType = "") -> None:
        """Switch a ``field:"value"`` facet on or off."""
        self.set_parsed_query(toggle_filter(self.parsed_query, field, value, modifier))

    @property
    def can_run(self) -> bool:
        """Whether the current text is a valid query."""
        return self.parsed_query.is_valid
