"""Unit tests for the init-config command."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from lucene_query.commands.init_config import _load_example_config, cli
from lucene_query.config import Config, load_config


class TestLoadExampleConfig:
    def test_loads_non_empty_content(self) -> None:
        content = _load_example_config()
        assert len(content) > 0

    def test_contains_all_sections(self) -> None:
        content = _load_example_config()
        for section in ("[display]", "[query]", "[variables]"):
            assert section in content, f"Missing section {section}"

    def test_example_matches_defaults(self, temp_dir: Path) -> None:
        config_path = temp_dir / "config.toml"
        config_path.write_text(_load_example_config())
        config, warnings = load_config(config_path)
        assert config == Config(config_path=config_path.resolve())
        assert warnings == []


class TestInitConfigCommand:
    def test_creates_config_file(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["--output", "test-config.toml"], standalone_mode=False)
            assert result.exception is None
            assert Path("test-config.toml").exists()
            content = Path("test-config.toml").read_text()
            assert "[query]" in content

    def test_created_file_matches_example(self) -> None:
        example = _load_example_config()
        runner = CliRunner()
        with runner.isolated_filesystem():
            runner.invoke(cli, ["--output", "test-config.toml"], standalone_mode=False)
            content = Path("test-config.toml").read_text()
            assert content == example

    def test_fails_if_exists_without_force(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("test-config.toml").write_text("existing")
            result = runner.invoke(cli, ["--output", "test-config.toml"], standalone_mode=False)
            # Should fail with SystemExit(1)
            assert isinstance(result.exception, SystemExit)
            assert result.exception.code == 1
            # Original content should be preserved
            assert Path("test-config.toml").read_text() == "existing"

    def test_force_overwrites_existing(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("test-config.toml").write_text("old content")
            result = runner.invoke(
                cli, ["--output", "test-config.toml", "--force"], standalone_mode=False
            )
            assert result.exception is None
            content = Path("test-config.toml").read_text()
            assert "[display]" in content
            assert "old content" not in content

    def test_creates_parent_directories(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(
                cli, ["--output", "deep/nested/dir/config.toml"], standalone_mode=False
            )
            assert result.exception is None
            assert Path("deep/nested/dir/config.toml").exists()

    def test_default_path_used_when_no_output(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            mock_path = MagicMock(return_value=Path("default-config.toml"))
            with patch("lucene_query.commands.init_config.get_default_config_path", mock_path):
                result = runner.invoke(cli, [], standalone_mode=False)
                assert result.exception is None
                assert Path("default-config.toml").exists()

    def test_written_file_is_owner_only(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["--output", "test-config.toml"], standalone_mode=False)
            assert result.exception is None
            assert Path("test-config.toml").stat().st_mode & 0o777 == 0o600

    def test_stdout_prints_example_without_writing(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(
                cli, ["--stdout", "--output", "test-config.toml"], standalone_mode=False
            )
            assert result.exception is None
            assert result.output == _load_example_config()
            assert not Path("test-config.toml").exists()
