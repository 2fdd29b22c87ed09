"""Exception hierarchy for lucene-query.

Malformed query text is never reported through these exceptions: the
search core returns parse failures as values on ``QueryTree.parse_error``.
"""

from pathlib import Path


class LuceneQueryError(Exception):
    """Base exception for all lucene-query errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all lucene-query errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(LuceneQueryError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Validation Errors
class ValidationError(LuceneQueryError):
    """Invalid input value."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")
