"""lucene-query: parse and edit Lucene-style search queries."""

__version__ = "0.1.0"
