"""Unit tests for XDG path management.

Tests for the paths module that provides XDG-compliant directory paths.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from backpick.core.paths import (
    APP_NAME,
    ensure_config_dir,
    get_config_dir,
    get_config_path,
    get_user_theme_path,
)


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            os.environ.pop("XDG_CONFIG_HOME", None)

            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME


class TestFilePaths:
    """Tests for config file locations."""

    def test_config_path(self, tmp_path: Path) -> None:
        """config.toml lives in the config directory."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_config_path() == tmp_path / APP_NAME / "config.toml"

    def test_user_theme_path(self, tmp_path: Path) -> None:
        """theme.toml lives in the config directory."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_user_theme_path() == tmp_path / APP_NAME / "theme.toml"


class TestEnsureConfigDir:
    """Tests for ensure_config_dir."""

    def test_creates_directory(self, tmp_path: Path) -> None:
        """The directory is created with missing parents."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path / "a" / "b")}):
            result = ensure_config_dir()

        assert result.is_dir()
        assert result == tmp_path / "a" / "b" / APP_NAME

    def test_raises_runtime_error(self, tmp_path: Path) -> None:
        """Failure to create the directory raises RuntimeError."""
        blocker = tmp_path / "file"
        blocker.write_text("x")

        with (
            patch.dict(os.environ, {"XDG_CONFIG_HOME": str(blocker)}),
            pytest.raises(RuntimeError, match="Cannot create config directory"),
        ):
            ensure_config_dir()
