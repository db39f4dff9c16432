"""Terminal implementations of the picker and progress capabilities.

``ConsolePicker`` renders choices as numbered Rich tables and reads the
answer with ``typer.prompt``. Typing ``q`` or pressing Ctrl-C/Ctrl-D
cancels the current question. ``RichProgressReporter`` shows copy
progress with a Rich progress bar.
"""

from collections.abc import Sequence
from pathlib import Path
from types import TracebackType

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, TaskID, TaskProgressColumn, TextColumn
from rich.table import Table

from backpick.backup.navigator import ItemKind, PickItem
from backpick.utils.formatting import console as default_console
from backpick.utils.formatting import print_warning

CANCEL_WORDS = frozenset({"q", "quit", "cancel"})
YES_WORDS = frozenset({"y", "yes"})
NO_WORDS = frozenset({"n", "no"})

_KIND_STYLES: dict[ItemKind, str] = {
    ItemKind.PARENT: "muted",
    ItemKind.DIRECTORY: "directory",
    ItemKind.FILE: "file",
    ItemKind.FINISH: "success",
    ItemKind.ENTER: "directory",
    ItemKind.TOGGLE: "selected",
}


class ConsolePicker:
    """Interactive picker for a terminal session.

    Args:
        console: Console used for rendering. Defaults to the shared console.
        quiet: If True, suppress notifications.
    """

    def __init__(self, console: Console | None = None, quiet: bool = False) -> None:
        self._console = console or default_console
        self._quiet = quiet

    def pick_one(self, items: Sequence[PickItem], prompt: str) -> PickItem | None:
        """Show a numbered list and return the chosen item, or None if cancelled."""
        self._console.print(self._build_table(items, prompt))

        while True:
            raw = self._prompt("Choose a number (q to cancel)")
            if raw is None or raw in CANCEL_WORDS:
                return None
            if raw.isdigit() and 1 <= int(raw) <= len(items):
                return items[int(raw) - 1]
            print_warning(f"Enter a number between 1 and {len(items)}, or q to cancel.")

    def ask_yes_no(self, question: str, default: bool) -> bool | None:
        """Ask a yes/no question; returns None if cancelled."""
        while True:
            raw = self._prompt(f"{question} [y/n, q to cancel]", "y" if default else "n")
            if raw is None or raw in CANCEL_WORDS:
                return None
            if raw in YES_WORDS:
                return True
            if raw in NO_WORDS:
                return False
            print_warning("Please answer y or n.")

    def choose_folder(self, prompt: str) -> Path | None:
        """Ask for a directory path; an empty answer cancels."""
        while True:
            raw = self._prompt(f"{prompt} (empty to cancel)", "", lower=False)
            if not raw:
                return None
            path = Path(raw).expanduser()
            if path.exists() and not path.is_dir():
                print_warning(f"Not a directory: {escape(str(path))}")
                continue
            return path

    def notify(self, message: str) -> None:
        """Print a short informational message."""
        if not self._quiet:
            self._console.print(f"[info]{escape(message)}[/]")

    def _build_table(self, items: Sequence[PickItem], prompt: str) -> Table:
        table = Table(
            title=escape(prompt),
            show_header=True,
            header_style="bold_header",
            border_style="border",
        )
        table.add_column("#", style="muted", justify="right", width=4)
        table.add_column("Item", no_wrap=True)
        table.add_column("Details", style="muted")

        for index, item in enumerate(items, start=1):
            style = "selected" if item.selected else _KIND_STYLES[item.kind]
            table.add_row(
                str(index),
                f"[{style}]{escape(item.label)}[/]",
                escape(item.description),
            )
        return table

    @staticmethod
    def _prompt(text: str, default: str | None = None, *, lower: bool = True) -> str | None:
        """Read one answer; returns None on Ctrl-C or end of input."""
        try:
            if default is None:
                raw = typer.prompt(text)
            else:
                raw = typer.prompt(text, default=default, show_default=bool(default))
        except typer.Abort:
            return None
        answer = str(raw).strip()
        return answer.lower() if lower else answer


class RichProgressReporter:
    """Progress bar for the copy phase.

    Use as a context manager; the bar appears on the first ``report`` so
    that prompts shown before copying starts are not disturbed.

    Args:
        title: Text shown before the first report.
        console: Console used for rendering. Defaults to the shared console.
    """

    def __init__(self, title: str = "Backing up files", console: Console | None = None) -> None:
        self._progress = Progress(
            TextColumn("[info]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console or default_console,
            transient=False,
        )
        self._title = title
        self._task: TaskID | None = None

    def __enter__(self) -> "RichProgressReporter":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._task is not None:
            self._progress.stop()

    def report(self, increment: float, message: str) -> None:
        """Advance the bar and update its description."""
        if self._task is None:
            self._progress.start()
            self._task = self._progress.add_task(escape(self._title), total=100)
        self._progress.update(self._task, advance=increment, description=escape(message))
