"""Interactive tree navigation for building a selection.

The navigator is a small state machine. While browsing it lists the
current directory, asks the picker for one choice, and applies it:
moving up or into a folder, toggling a file or a whole folder, finishing,
or cancelling. Every iteration lists the directory afresh so the shown
checkboxes always reflect the current selection.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol

from backpick.backup.scanner import DirectoryScanner
from backpick.backup.selection import SelectionModel

logger = logging.getLogger(__name__)

CHECKED = "[x]"
UNCHECKED = "[ ]"


class ItemKind(str, Enum):
    """Kind of an item offered to the picker.

    Attributes:
        PARENT: Move to the parent directory.
        DIRECTORY: A directory entry of the current listing.
        FILE: A file entry of the current listing.
        FINISH: End the selection.
        ENTER: Folder sub-action, navigate into the folder.
        TOGGLE: Folder sub-action, select or deselect all of its files.
    """

    PARENT = "parent"
    DIRECTORY = "directory"
    FILE = "file"
    FINISH = "finish"
    ENTER = "enter"
    TOGGLE = "toggle"


@dataclass(frozen=True, slots=True)
class PickItem:
    """One labeled choice shown by the picker.

    Attributes:
        label: Text shown for the item.
        kind: What choosing the item does.
        path: Filesystem path the item refers to, if any.
        description: Secondary text (relative path or hint).
        selected: Selection state at the time the list was built.
    """

    label: str
    kind: ItemKind
    path: Path | None = None
    description: str = ""
    selected: bool = False


class Picker(Protocol):
    """Interactive capability the backup workflow calls into.

    Every method returns None when the user cancels.
    """

    def pick_one(self, items: Sequence[PickItem], prompt: str) -> PickItem | None:
        """Let the user choose exactly one item."""
        ...

    def ask_yes_no(self, question: str, default: bool) -> bool | None:
        """Ask a yes/no question."""
        ...

    def choose_folder(self, prompt: str) -> Path | None:
        """Ask for a directory path."""
        ...

    def notify(self, message: str) -> None:
        """Show a short informational message."""
        ...


class NavigationStatus(str, Enum):
    """Terminal state of a navigation session."""

    FINISHED = "finished"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class NavigationResult:
    """Outcome of a navigation session.

    A cancelled session never carries files.

    Attributes:
        status: How the session ended.
        files: Selected file paths in selection order.
    """

    status: NavigationStatus
    files: tuple[Path, ...] = field(default_factory=tuple)

    @property
    def cancelled(self) -> bool:
        """True if the user cancelled the session."""
        return self.status == NavigationStatus.CANCELLED


class Navigator:
    """Drives the interactive browse-and-select loop.

    Args:
        scanner: Scanner bound to the project root.
        selection: Selection model mutated by user actions.
        picker: Interactive picker capability.
    """

    def __init__(
        self,
        scanner: DirectoryScanner,
        selection: SelectionModel,
        picker: Picker,
    ) -> None:
        self._scanner = scanner
        self._selection = selection
        self._picker = picker
        self._root = scanner.root
        self._current = scanner.root

    @property
    def root(self) -> Path:
        """Directory the session started in; never changes."""
        return self._root

    @property
    def current_directory(self) -> Path:
        """Directory currently being browsed."""
        return self._current

    def run(self) -> NavigationResult:
        """Browse until the user finishes or cancels.

        Returns:
            NavigationResult with the selected files, or a cancelled result
            with no files.
        """
        while True:
            result = self.step()
            if result is not None:
                return result

    def step(self) -> NavigationResult | None:
        """Run one browse iteration.

        Returns:
            A terminal NavigationResult, or None to keep browsing.
        """
        items = self.build_items()
        choice = self._picker.pick_one(items, self._browse_prompt())

        if choice is None:
            logger.debug("Navigation cancelled in %s", self._current)
            self._selection.clear()
            return NavigationResult(status=NavigationStatus.CANCELLED)

        if choice.kind == ItemKind.FINISH:
            return NavigationResult(
                status=NavigationStatus.FINISHED,
                files=tuple(self._selection.paths),
            )

        if choice.kind == ItemKind.PARENT:
            self._current = self._current.parent
        elif choice.kind == ItemKind.DIRECTORY and choice.path is not None:
            self._handle_directory(choice.path)
        elif choice.kind == ItemKind.FILE and choice.path is not None:
            self._handle_file(choice.path)

        return None

    def build_items(self) -> list[PickItem]:
        """Build the picker list for the current directory.

        The parent item comes first unless browsing the root, then the
        directory listing with live checkboxes, then the finish item.
        """
        items: list[PickItem] = []

        if self._current != self._root:
            items.append(
                PickItem(
                    label=".. (Parent Directory)",
                    kind=ItemKind.PARENT,
                    path=self._current.parent,
                    description="Go back to parent directory",
                )
            )

        for entry in self._scanner.list_immediate(self._current):
            if entry.is_directory:
                selected = self._selection.is_directory_selected(entry.path)
                kind = ItemKind.DIRECTORY
                name = f"{entry.name}/"
            else:
                selected = self._selection.is_file_selected(entry.path)
                kind = ItemKind.FILE
                name = entry.name
            checkbox = CHECKED if selected else UNCHECKED
            items.append(
                PickItem(
                    label=f"{checkbox} {name}",
                    kind=kind,
                    path=entry.path,
                    description=self._relative(entry.path),
                    selected=selected,
                )
            )

        items.append(
            PickItem(
                label="Done (Finish Selection)",
                kind=ItemKind.FINISH,
                description=f"{len(self._selection)} file(s) selected",
            )
        )
        return items

    def _handle_directory(self, directory: Path) -> None:
        """Ask whether to enter or toggle a directory and apply the answer.

        Cancelling this question only returns to the current listing.
        """
        actions = [
            PickItem(
                label="Enter Folder",
                kind=ItemKind.ENTER,
                path=directory,
                description="Navigate into this folder",
            ),
            PickItem(
                label="Toggle Selection",
                kind=ItemKind.TOGGLE,
                path=directory,
                description="Select/deselect all files in this folder",
            ),
        ]
        action = self._picker.pick_one(
            actions, f'What would you like to do with "{directory.name}"?'
        )

        if action is None:
            return

        if action.kind == ItemKind.ENTER:
            self._current = directory
            return

        selected, count = self._selection.toggle_directory(directory)
        if count == 0:
            self._picker.notify(f"No eligible files in folder: {directory.name}")
        elif selected:
            self._picker.notify(f"Selected folder: {directory.name} ({count} files)")
        else:
            self._picker.notify(f"Deselected folder: {directory.name} ({count} files)")

    def _handle_file(self, path: Path) -> None:
        if self._selection.toggle_file(path):
            self._picker.notify(f"Added: {path.name}")
        else:
            self._picker.notify(f"Removed: {path.name}")

    def _browse_prompt(self) -> str:
        location = self._relative(self._current) or "Root"
        return f"Navigate: {location} | Selected: {len(self._selection)} files"

    def _relative(self, path: Path) -> str:
        if path == self._root:
            return ""
        try:
            return path.relative_to(self._root).as_posix()
        except ValueError:
            return path.as_posix()
