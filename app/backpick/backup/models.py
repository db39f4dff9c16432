"""Backup domain models.

This module defines the immutable data structures shared by the
ignore matcher, directory scanner, selection model, and copy engine.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class IgnoreRule:
    """A single parsed line of an ignore file.

    Attributes:
        pattern: Pattern text with any trailing separator stripped.
        directories_only: True if the line ended with "/" and only matches directories.
        is_wildcard: True if the pattern contains "*" or "?".
    """

    pattern: str
    directories_only: bool = False
    is_wildcard: bool = False

    def __post_init__(self) -> None:
        """Validate rule data after initialization."""
        if not self.pattern:
            msg = "Ignore pattern cannot be empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class FileSystemEntry:
    """One entry discovered while listing a directory.

    Attributes:
        path: Absolute path of the entry.
        is_directory: True for directories, False for everything else.
    """

    path: Path
    is_directory: bool

    @property
    def name(self) -> str:
        """Base name of the entry."""
        return self.path.name


@dataclass(frozen=True, slots=True)
class BackupOptions:
    """Options fixed once per backup session, before selection begins.

    Attributes:
        preserve_structure: Mirror paths relative to the project root at the destination.
        include_hidden: Show and collect entries whose name starts with ".".
        timestamp_folder: Copy into a new ``backup-<timestamp>`` folder.
    """

    preserve_structure: bool = True
    include_hidden: bool = False
    timestamp_folder: bool = True


@dataclass(frozen=True, slots=True)
class SelectedFile:
    """Descriptor stored for each selected file.

    Attributes:
        display_name: Base name shown to the user.
        relative_path: POSIX path relative to the project root.
    """

    display_name: str
    relative_path: str


@dataclass(frozen=True, slots=True)
class CopyResult:
    """Outcome of copying one file.

    Attributes:
        source: Source file that was copied.
        destination: Path the file was actually written to.
    """

    source: Path
    destination: Path

    @property
    def renamed(self) -> bool:
        """True if the destination name was disambiguated."""
        return self.source.name != self.destination.name
