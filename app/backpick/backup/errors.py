"""Exceptions raised by the backup workflow.

``BackupAborted`` subclasses describe a clean, user-initiated or
nothing-to-do termination. ``CopyError`` is the single terminal failure
of the copy phase.
"""

from pathlib import Path


class BackupError(Exception):
    """Base exception for backup errors."""


class BackupAborted(BackupError):
    """Raised when the backup ends early without side effects."""


class ConfigurationAbsentError(BackupAborted):
    """Raised when no project root, options, or destination are available."""


class EmptySelectionError(BackupAborted):
    """Raised when the selection finishes with no files."""


class CopyError(BackupError):
    """Raised when a file cannot be copied; the remaining batch is abandoned.

    Attributes:
        source: File that failed to copy.
        destination: Target path that was being written, if computed.
        copied: Number of files copied before the failure.
    """

    def __init__(
        self,
        message: str,
        *,
        source: Path,
        destination: Path | None = None,
        copied: int = 0,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.destination = destination
        self.copied = copied
