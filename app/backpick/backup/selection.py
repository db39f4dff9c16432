"""In-memory file selection with derived folder state.

Only files are ever stored. Whether a folder counts as selected is
recomputed from the stored files on every query and never cached.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

from backpick.backup.models import SelectedFile
from backpick.backup.scanner import DirectoryScanner

logger = logging.getLogger(__name__)


class SelectionModel:
    """Set of chosen files keyed by absolute path.

    Insertion order is kept so that summaries and the copy order follow
    the order in which the user picked files.

    Args:
        scanner: Scanner used to enumerate the eligible files of a folder.
    """

    def __init__(self, scanner: DirectoryScanner) -> None:
        self._scanner = scanner
        self._files: dict[Path, SelectedFile] = {}

    def __len__(self) -> int:
        return len(self._files)

    def __contains__(self, path: object) -> bool:
        return path in self._files

    def __iter__(self) -> Iterator[Path]:
        return iter(self._files)

    @property
    def paths(self) -> list[Path]:
        """Selected file paths in insertion order."""
        return list(self._files)

    def items(self) -> list[tuple[Path, SelectedFile]]:
        """Selected files with their descriptors, in insertion order."""
        return list(self._files.items())

    def describe(self, path: Path) -> SelectedFile:
        """Build the descriptor stored for a file."""
        try:
            relative = path.relative_to(self._scanner.root).as_posix()
        except ValueError:
            relative = path.as_posix()
        return SelectedFile(display_name=path.name, relative_path=relative)

    def is_file_selected(self, path: Path) -> bool:
        """Check if a file is in the selection."""
        return path in self._files

    def is_directory_selected(self, directory: Path) -> bool:
        """Check if every eligible file beneath a directory is selected.

        A directory without eligible files is never selected.
        """
        return self._all_selected(self._scanner.list_files(directory))

    def toggle_file(self, path: Path, descriptor: SelectedFile | None = None) -> bool:
        """Add a file if absent, remove it if present.

        Args:
            path: Absolute file path.
            descriptor: Stored descriptor; built from the path if omitted.

        Returns:
            True if the file is selected after the call.
        """
        if path in self._files:
            del self._files[path]
            return False

        self._files[path] = descriptor or self.describe(path)
        return True

    def toggle_directory(self, directory: Path) -> tuple[bool, int]:
        """Select or deselect every eligible file beneath a directory.

        The directory is scanned once; the current state and the update
        both use that single listing. If all files are selected they are
        all removed, otherwise the missing ones are added.

        Args:
            directory: Directory whose files are toggled.

        Returns:
            Tuple of (selected after the call, number of files in the directory).
        """
        files = self._scanner.list_files(directory)

        if self._all_selected(files):
            for path in files:
                self._files.pop(path, None)
            logger.debug("Deselected %d file(s) under %s", len(files), directory)
            return False, len(files)

        for path in files:
            if path not in self._files:
                self._files[path] = self.describe(path)
        logger.debug("Selected %d file(s) under %s", len(files), directory)
        return bool(files), len(files)

    def clear(self) -> None:
        """Remove every file from the selection."""
        self._files.clear()

    def _all_selected(self, files: list[Path]) -> bool:
        return bool(files) and all(path in self._files for path in files)
