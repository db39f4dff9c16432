"""User configuration for backpick.

Configuration is stored in ~/.config/backpick/config.toml and provides
default answers for the backup option prompts, the name of the
project ignore file, and extra names for the built-in exclusion lists.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from backpick.core.paths import get_config_path

DEFAULT_IGNORE_FILE = ".backupignore"


class BackpickConfig(BaseModel):
    """Persistent backpick settings.

    Attributes:
        ignore_file: Name of the ignore file read from the project root.
        preserve_structure: Default for "preserve directory structure" (None = ask).
        include_hidden: Default for "include hidden entries" (None = ask).
        timestamp_folder: Default for "create timestamped folder" (None = ask).
        extra_ignored_dirs: Directory names added to the built-in exclusions.
        extra_ignored_files: File names added to the built-in exclusions.
    """

    model_config = ConfigDict(extra="forbid")

    ignore_file: Annotated[
        str,
        Field(min_length=1, description="Ignore file name in the project root"),
    ] = DEFAULT_IGNORE_FILE
    preserve_structure: bool | None = None
    include_hidden: bool | None = None
    timestamp_folder: bool | None = None
    extra_ignored_dirs: list[str] = Field(default_factory=list)
    extra_ignored_files: list[str] = Field(default_factory=list)

    @field_validator("ignore_file")
    @classmethod
    def validate_ignore_file(cls, v: str) -> str:
        """Ignore file must be a bare file name, not a path."""
        if "/" in v or "\\" in v:
            msg = f"ignore_file must be a file name, got '{v}'"
            raise ValueError(msg)
        return v


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> BackpickConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated BackpickConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return BackpickConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> BackpickConfig:
    """Load configuration, falling back to defaults when no file exists.

    Parse and validation errors still propagate.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        return BackpickConfig()


def save_config(config: BackpickConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The BackpickConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(_config_to_dict(config), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: BackpickConfig) -> dict[str, object]:
    """Convert BackpickConfig to a dictionary for TOML serialization.

    TOML has no null, so unset prompt defaults are omitted.
    """
    result: dict[str, object] = {"ignore_file": config.ignore_file}

    for key in ("preserve_structure", "include_hidden", "timestamp_folder"):
        value = getattr(config, key)
        if value is not None:
            result[key] = value

    if config.extra_ignored_dirs:
        result["extra_ignored_dirs"] = list(config.extra_ignored_dirs)
    if config.extra_ignored_files:
        result["extra_ignored_files"] = list(config.extra_ignored_files)

    return result
