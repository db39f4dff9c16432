"""Configuration commands.

Shows the effective configuration and writes a starter config file.
"""

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from backpick.backup.defaults import DEFAULT_EXCLUSIONS
from backpick.core.config import (
    BackpickConfig,
    ConfigError,
    load_config_or_default,
    save_config,
)
from backpick.core.paths import get_config_path
from backpick.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize the backpick configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


def load_config_or_exit() -> BackpickConfig:
    """Load the user config or exit with an error message.

    Returns:
        Loaded configuration, or defaults when no config file exists.

    Raises:
        typer.Exit: If the config file exists but is invalid.
    """
    try:
        return load_config_or_default()
    except ConfigError as e:
        print_error(escape(str(e)))
        print_info(f"Fix or remove {escape(str(get_config_path()))}")
        raise typer.Exit(code=1) from e


def first_set(*values: bool | None) -> bool | None:
    """Return the first value that is not None.

    Used to let a command-line flag override a config default.
    """
    for value in values:
        if value is not None:
            return value
    return None


@app.command()
def show() -> None:
    """Show the effective configuration."""
    config = load_config_or_exit()
    config_path = get_config_path()

    table = Table(
        title="backpick Configuration",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    table.add_row("ignore_file", escape(config.ignore_file))
    for key in ("preserve_structure", "include_hidden", "timestamp_folder"):
        value = getattr(config, key)
        table.add_row(key, "[muted]ask[/]" if value is None else str(value).lower())

    ignored_dirs = sorted(DEFAULT_EXCLUSIONS.directories | set(config.extra_ignored_dirs))
    ignored_files = sorted(DEFAULT_EXCLUSIONS.files | set(config.extra_ignored_files))
    table.add_row("ignored directories", escape(", ".join(ignored_dirs)))
    table.add_row("ignored files", escape(", ".join(ignored_files)))

    console.print(table)
    source = str(config_path) if config_path.exists() else f"{config_path} (not created, defaults)"
    console.print(f"\n[dim]Config file: {escape(source)}[/dim]")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a default configuration file."""
    config_path = get_config_path()

    if config_path.exists() and not force:
        print_info(f"Config already exists: {escape(str(config_path))} (use --force to overwrite)")
        return

    try:
        saved = save_config(BackpickConfig(), config_path)
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {escape(str(saved))}")
