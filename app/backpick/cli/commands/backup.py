"""Backup command implementation.

Runs an interactive session: answer the backup options, browse the
project tree to pick files and folders, choose a destination, and copy.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from backpick.backup.errors import BackupAborted, CopyError
from backpick.backup.workflow import BackupReport, run_backup
from backpick.cli.commands.config import first_set, load_config_or_exit
from backpick.cli.picker import ConsolePicker, RichProgressReporter
from backpick.utils.formatting import console, print_error, print_info, print_success

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Interactively select project files and back them up.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def backup(
    ctx: typer.Context,
    root: Annotated[
        Path,
        typer.Option(
            "--root",
            "-r",
            help="Project root directory.",
            file_okay=False,
        ),
    ] = Path("."),
    dest: Annotated[
        Path | None,
        typer.Option(
            "--dest",
            "-d",
            help="Destination folder (asked for after selection if omitted).",
            file_okay=False,
        ),
    ] = None,
    preserve_structure: Annotated[
        bool | None,
        typer.Option(
            "--preserve-structure/--flatten",
            help="Mirror project paths at the destination, or copy flat.",
            show_default=False,
        ),
    ] = None,
    include_hidden: Annotated[
        bool | None,
        typer.Option(
            "--include-hidden/--skip-hidden",
            help="Include entries whose name starts with a dot.",
            show_default=False,
        ),
    ] = None,
    timestamp: Annotated[
        bool | None,
        typer.Option(
            "--timestamp/--no-timestamp",
            help="Copy into a new backup-<timestamp> folder.",
            show_default=False,
        ),
    ] = None,
    ignore_file: Annotated[
        str | None,
        typer.Option(
            "--ignore-file",
            help="Ignore file name in the project root.",
        ),
    ] = None,
    open_destination: Annotated[
        bool | None,
        typer.Option(
            "--open/--no-open",
            help="Open the backup folder when done (asked if omitted).",
            show_default=False,
        ),
    ] = None,
) -> None:
    """Select files interactively and copy them to a destination."""
    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    config = load_config_or_exit()
    overrides: dict[str, object] = {
        "preserve_structure": first_set(preserve_structure, config.preserve_structure),
        "include_hidden": first_set(include_hidden, config.include_hidden),
        "timestamp_folder": first_set(timestamp, config.timestamp_folder),
    }
    if ignore_file is not None:
        overrides["ignore_file"] = ignore_file
    config = config.model_copy(update=overrides)

    picker = ConsolePicker(quiet=quiet)

    try:
        with RichProgressReporter() as progress:
            report = run_backup(
                root,
                picker,
                progress,
                destination=dest,
                config=config,
            )
    except BackupAborted as e:
        print_info(escape(str(e)))
        raise typer.Exit(code=0) from None
    except CopyError as e:
        logger.debug("Backup failed", exc_info=True)
        print_error(f"Backup failed: {escape(str(e))}")
        if e.copied:
            print_info(f"{e.copied} file(s) were copied before the failure.")
        raise typer.Exit(code=1) from None

    _print_report(report, quiet)
    _offer_open(report.destination, open_destination, quiet)


def _print_report(report: BackupReport, quiet: bool) -> None:
    """Display the copied files and a summary line."""
    if not quiet:
        table = Table(
            title="Backed Up Files",
            show_header=True,
            header_style="bold_header",
            border_style="border",
        )
        table.add_column("Source", style="file", no_wrap=True)
        table.add_column("Destination", style="muted")

        for result in report.copied:
            name = escape(str(result.destination.relative_to(report.destination)))
            if result.renamed:
                name = f"[warning]{name}[/]"
            table.add_row(escape(result.source.name), name)

        console.print(table)

    print_success(
        f"Successfully backed up {len(report.copied)} file(s) to {escape(str(report.destination))}"
    )
    if report.renamed_count:
        print_info(f"{report.renamed_count} file(s) renamed to avoid overwriting.")


def _offer_open(destination: Path, open_destination: bool | None, quiet: bool) -> None:
    """Open the backup folder in the system file manager if wanted.

    Without an explicit flag the user is asked, unless output is quiet.
    """
    if open_destination is None:
        if quiet:
            return
        try:
            open_destination = typer.confirm("Open destination folder?", default=False)
        except typer.Abort:
            return

    if open_destination:
        typer.launch(str(destination))
