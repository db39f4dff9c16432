"""Directory scanning with exclusion rules.

Lists the visible contents of a project directory, one level at a time
for browsing, or every eligible file beneath a directory for aggregate
folder selection and non-interactive listings.
"""

import logging
import os
from collections.abc import Sequence
from pathlib import Path

from backpick.backup.defaults import DEFAULT_EXCLUSIONS, ExclusionDefaults
from backpick.backup.ignore import is_ignored
from backpick.backup.models import FileSystemEntry, IgnoreRule

logger = logging.getLogger(__name__)


class DirectoryScanner:
    """Lists project entries that are eligible for backup.

    An entry is skipped when its name is on the built-in exclusion list
    for its type, when it is hidden and hidden entries are not included,
    or when an ignore rule matches it. Unreadable directories are logged
    and treated as empty; scanning always continues with their siblings.

    Args:
        root: Project root; ignore rules are matched relative to it.
        include_hidden: If True, keep entries whose name starts with ".".
        rules: Parsed ignore file rules.
        exclusions: Built-in exclusion lists. Defaults to DEFAULT_EXCLUSIONS.
    """

    def __init__(
        self,
        root: Path,
        *,
        include_hidden: bool = False,
        rules: Sequence[IgnoreRule] = (),
        exclusions: ExclusionDefaults = DEFAULT_EXCLUSIONS,
    ) -> None:
        self._root = root
        self._include_hidden = include_hidden
        self._rules = tuple(rules)
        self._exclusions = exclusions

    @property
    def root(self) -> Path:
        """Project root the scanner was created for."""
        return self._root

    def list_immediate(self, directory: Path) -> list[FileSystemEntry]:
        """List the eligible direct children of a directory.

        Args:
            directory: Directory to list.

        Returns:
            Entries with all directories before all files, each group
            ordered by name.
        """
        entries = self._read_entries(directory)
        entries.sort(key=lambda e: (not e.is_directory, e.name.casefold(), e.name))
        return entries

    def list_files(self, directory: Path) -> list[Path]:
        """Collect every eligible file beneath a directory.

        Traversal uses an explicit stack, so tree depth is not limited by
        the interpreter's recursion limit. Excluded directories are not
        descended into.

        Args:
            directory: Directory to collect files from.

        Returns:
            Absolute file paths in a deterministic pre-order.
        """
        files: list[Path] = []
        stack: list[Path] = [directory]

        while stack:
            current = stack.pop()
            subdirectories: list[Path] = []
            for entry in self.list_immediate(current):
                if entry.is_directory:
                    subdirectories.append(entry.path)
                else:
                    files.append(entry.path)
            # Reversed so the first subdirectory is visited first
            stack.extend(reversed(subdirectories))

        return files

    def _read_entries(self, directory: Path) -> list[FileSystemEntry]:
        """Read a directory and apply the exclusion policy.

        Args:
            directory: Directory to read.

        Returns:
            Unsorted eligible entries; empty if the directory cannot be read.
        """
        entries: list[FileSystemEntry] = []

        try:
            with os.scandir(directory) as it:
                children = list(it)
        except OSError as e:
            logger.warning("Cannot read directory %s: %s", directory, e)
            return entries

        for child in children:
            try:
                # Symlinks are not followed; a link to a directory is listed as a file
                is_directory = child.is_dir(follow_symlinks=False)
            except OSError as e:
                logger.warning("Cannot determine type of %s: %s", child.path, e)
                continue

            if self._is_excluded(Path(child.path), child.name, is_directory):
                continue

            entries.append(FileSystemEntry(path=Path(child.path), is_directory=is_directory))

        return entries

    def _is_excluded(self, path: Path, name: str, is_directory: bool) -> bool:
        """Check the three exclusion rules for one entry."""
        if not self._include_hidden and self._exclusions.is_hidden(name):
            return True

        if self._exclusions.excludes(name, is_directory):
            return True

        return is_ignored(path, self._root, is_directory, self._rules)
