"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""[display]
colored_output = false

[query]
default_operator = "and"
default_modifier = "-"

[variables]
empty_value = "__none__"
""")
    return config_path


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def missing_config(temp_dir: Path) -> Path:
    """Path of a config file that does not exist, so defaults are used."""
    return temp_dir / "missing.toml"
