"""Unit tests for config CLI commands."""

from pathlib import Path

from backpick.cli.main import app
from backpick.core.config import load_config
from typer.testing import CliRunner

runner = CliRunner()


class TestConfigShow:
    """Tests for backpick config show."""

    def test_defaults(self) -> None:
        """Without a config file the defaults are shown."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0, result.output
        assert ".backupignore" in result.output
        assert "ask" in result.output
        assert "node_modules" in result.output

    def test_values_from_file(self, isolated_config: Path) -> None:
        """Values from the config file are shown."""
        isolated_config.mkdir(parents=True)
        (isolated_config / "config.toml").write_text(
            'include_hidden = true\nextra_ignored_dirs = ["vendor"]\n'
        )

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0, result.output
        assert "true" in result.output
        assert "vendor" in result.output

    def test_invalid_file(self, isolated_config: Path) -> None:
        """An invalid config file exits with an error."""
        isolated_config.mkdir(parents=True)
        (isolated_config / "config.toml").write_text("unknown_key = 1\n")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 1
        assert "Fix or remove" in result.output


class TestConfigInit:
    """Tests for backpick config init."""

    def test_writes_default_config(self, isolated_config: Path) -> None:
        """init creates a loadable config file."""
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0, result.output
        assert "Config written to" in result.output
        assert load_config(isolated_config / "config.toml").ignore_file == ".backupignore"

    def test_keeps_existing_file(self, isolated_config: Path) -> None:
        """init does not overwrite without --force."""
        isolated_config.mkdir(parents=True)
        path = isolated_config / "config.toml"
        path.write_text('ignore_file = ".rohitignore"\n')

        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert "Config already exists" in result.output
        assert load_config(path).ignore_file == ".rohitignore"

    def test_force_overwrites(self, isolated_config: Path) -> None:
        """--force replaces an existing file."""
        isolated_config.mkdir(parents=True)
        path = isolated_config / "config.toml"
        path.write_text('ignore_file = ".rohitignore"\n')

        result = runner.invoke(app, ["config", "init", "--force"])

        assert result.exit_code == 0, result.output
        assert load_config(path).ignore_file == ".backupignore"


class TestVersion:
    """Tests for the global --version option."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "backpick version" in result.output
