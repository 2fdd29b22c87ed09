"""Configuration management for lucene-query."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from lucene_query.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)
from lucene_query.search.adhoc import DEFAULT_EMPTY_VALUE

OPERATORS: tuple[str, ...] = ("", "AND", "OR")
MODIFIERS: tuple[str, ...] = ("", "-")


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "lucene-query" / "config.toml"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        colored_output: Whether to use colored terminal output.
        default_operator: Operator used when appending clauses
            ("" joins with a space, i.e. implicit AND).
        default_modifier: Modifier used by filter commands ("" or "-").
        empty_value: Placeholder for an empty multi-value variable.
        config_path: Path where config was loaded from (None if defaults).
    """

    colored_output: bool = True
    default_operator: str = ""
    default_modifier: str = ""
    empty_value: str = DEFAULT_EMPTY_VALUE
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.

        Raises:
            ConfigValidationError: If a critical validation fails.
        """
        warnings: list[str] = []

        if self.default_operator not in OPERATORS:
            raise ConfigValidationError(
                "query.default_operator", self.default_operator, "must be '', 'AND' or 'OR'"
            )
        if self.default_modifier not in MODIFIERS:
            raise ConfigValidationError(
                "query.default_modifier", self.default_modifier, "must be '' or '-'"
            )

        if not self.empty_value:
            warnings.append(
                "variables.empty_value is empty; empty multi-value variables "
                "will leave dangling field names in queries"
            )

        return warnings


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        # Use defaults
        config = Config()
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create config with: lucene-query init-config"
        )
        config_warnings = config.validate()
        return config, warnings + config_warnings

    # Load from file
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    config_warnings = config.validate()

    return config, warnings + config_warnings


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    # Parse [query] section
    query = data.get("query", {})
    if "default_operator" in query:
        value = query["default_operator"]
        if not isinstance(value, str):
            raise ConfigValidationError("query.default_operator", value, "must be a string")
        config.default_operator = value.upper()

    if "default_modifier" in query:
        value = query["default_modifier"]
        if not isinstance(value, str):
            raise ConfigValidationError("query.default_modifier", value, "must be a string")
        config.default_modifier = value

    # Parse [variables] section
    variables = data.get("variables", {})
    if "empty_value" in variables:
        value = variables["empty_value"]
        if not isinstance(value, str):
            raise ConfigValidationError("variables.empty_value", value, "must be a string")
        config.empty_value = value

    return config


# Dotted keys accepted by set_config_value(), with their attribute names
CONFIG_KEYS: dict[str, str] = {
    "display.colored_output": "colored_output",
    "query.default_operator": "default_operator",
    "query.default_modifier": "default_modifier",
    "variables.empty_value": "empty_value",
}


def set_config_value(config: Config, key: str, raw_value: str) -> None:
    """Set a config value from its dotted key and command-line text.

    Raises:
        ConfigValidationError: If the key is unknown or the value invalid.
    """
    attr = CONFIG_KEYS.get(key)
    if attr is None:
        raise ConfigValidationError(key, raw_value, f"unknown key (known: {', '.join(CONFIG_KEYS)})")

    if attr == "colored_output":
        lowered = raw_value.lower()
        if lowered not in ("true", "false"):
            raise ConfigValidationError(key, raw_value, "must be true or false")
        config.colored_output = lowered == "true"
    elif attr == "default_operator":
        config.default_operator = raw_value.upper()
    else:
        setattr(config, attr, raw_value)

    config.validate()


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Only values that differ from the defaults are written.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()

    # Ensure directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # Build TOML structure
    data: dict[str, Any] = {
        "display": {
            "colored_output": config.colored_output,
        },
    }

    query_data: dict[str, Any] = {}
    if config.default_operator:
        query_data["default_operator"] = config.default_operator
    if config.default_modifier:
        query_data["default_modifier"] = config.default_modifier
    if query_data:
        data["query"] = query_data

    if config.empty_value != DEFAULT_EMPTY_VALUE:
        data["variables"] = {"empty_value": config.empty_value}

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
