"""Scan command implementation.

Lists every file an interactive backup would offer, applying the same
built-in exclusions, hidden-entry policy, and ignore file rules.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from backpick.backup.defaults import DEFAULT_EXCLUSIONS
from backpick.backup.ignore import load_ignore_rules
from backpick.backup.scanner import DirectoryScanner
from backpick.cli.commands.config import first_set, load_config_or_exit
from backpick.utils.formatting import (
    console,
    create_file_table,
    format_size,
    print_error,
    print_info,
)

app = typer.Typer(
    help="List the files eligible for backup.",
    invoke_without_command=True,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


@app.callback(invoke_without_command=True)
def scan_files(
    root: Annotated[
        Path,
        typer.Option(
            "--root",
            "-r",
            help="Project root directory.",
            file_okay=False,
        ),
    ] = Path("."),
    include_hidden: Annotated[
        bool | None,
        typer.Option(
            "--include-hidden/--skip-hidden",
            help="Include entries whose name starts with a dot (default from config, else skip).",
            show_default=False,
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-l",
            help="Limit number of results.",
        ),
    ] = None,
) -> None:
    """List eligible files under the project root."""
    if not root.is_dir():
        print_error(f"Project folder not found: {escape(str(root))}")
        raise typer.Exit(code=1)

    root = root.resolve()
    config = load_config_or_exit()
    scanner = DirectoryScanner(
        root,
        include_hidden=bool(first_set(include_hidden, config.include_hidden)),
        rules=load_ignore_rules(root, config.ignore_file),
        exclusions=DEFAULT_EXCLUSIONS.extended(
            config.extra_ignored_dirs, config.extra_ignored_files
        ),
    )
    files = scanner.list_files(root)

    if not files:
        print_info("No eligible files found.")
        return

    display_files = files[:limit] if limit else files
    sizes = {path: _file_size(path) for path in files}

    if output_format == OutputFormat.JSON:
        data = [
            {"path": path.relative_to(root).as_posix(), "size_bytes": sizes[path]}
            for path in display_files
        ]
        console.print_json(json.dumps(data))
        return

    table = create_file_table(f"Eligible Files in {escape(root.name or str(root))}")
    for path in display_files:
        table.add_row(escape(path.relative_to(root).as_posix()), format_size(sizes[path]))
    console.print(table)

    total_size = sum(size or 0 for size in sizes.values())
    console.print(f"\n[dim]Found {len(files)} eligible files ({format_size(total_size)} total)[/dim]")
    if limit and len(display_files) < len(files):
        console.print(
            f"[dim](showing {len(display_files)} of {len(files)}, limited to {limit})[/dim]"
        )


def _file_size(path: Path) -> int | None:
    """Size in bytes, or None if the file cannot be stat'ed."""
    try:
        return path.stat().st_size
    except OSError:
        return None
