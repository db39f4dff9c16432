"""Collision-safe file copying into a backup destination.

Files are copied one at a time in the order given. An existing file at
the target path is never overwritten; a ``(n)`` counter is inserted
before the extension instead. The first failure aborts the batch and
files copied before it stay on disk.
"""

import logging
import shutil
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from pathlib import Path

from backpick.backup.errors import CopyError
from backpick.backup.models import BackupOptions, CopyResult

logger = logging.getLogger(__name__)

CONTAINER_PREFIX = "backup-"

# Upper bound for "(n)" suffixes tried before giving up on a name
MAX_DISAMBIGUATION = 10_000

ProgressCallback = Callable[[int, int, str], None]


def format_timestamp(moment: datetime) -> str:
    """Format a moment as an ISO 8601 UTC string safe for file names.

    Colons and the fractional-second dot are replaced by dashes, e.g.
    ``2024-05-01T09-30-15-123Z``.
    """
    utc = moment.astimezone(UTC)
    millis = utc.microsecond // 1000
    return f"{utc.strftime('%Y-%m-%dT%H-%M-%S')}-{millis:03d}Z"


def disambiguate(target: Path) -> Path:
    """Return the first path at or after ``target`` that does not exist.

    ``report.pdf`` becomes ``report(1).pdf``, ``report(2).pdf`` and so on.

    Raises:
        FileExistsError: If no free name is found within MAX_DISAMBIGUATION tries.
    """
    if not target.exists() and not target.is_symlink():
        return target

    stem, suffix = target.stem, target.suffix
    for counter in range(1, MAX_DISAMBIGUATION + 1):
        candidate = target.with_name(f"{stem}({counter}){suffix}")
        if not candidate.exists() and not candidate.is_symlink():
            return candidate

    msg = f"No free file name for {target.name} after {MAX_DISAMBIGUATION} attempts"
    raise FileExistsError(msg)


class CopyEngine:
    """Copies selected files from a project into a destination folder.

    Args:
        workspace_root: Project root; structure-preserving copies mirror
            paths relative to it.
        options: Backup options for this session.
        clock: Returns the current time; used for the container name.
    """

    def __init__(
        self,
        workspace_root: Path,
        options: BackupOptions,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._workspace_root = workspace_root
        self._options = options
        self._clock = clock or (lambda: datetime.now(UTC))

    def prepare_destination(self, destination_root: Path) -> Path:
        """Create the effective destination directory.

        With ``timestamp_folder`` set, a new ``backup-<timestamp>`` folder
        is created inside ``destination_root``; otherwise the root itself
        is used. Missing ancestors are created either way.

        Args:
            destination_root: Folder chosen by the user.

        Returns:
            Directory files will be copied into.

        Raises:
            CopyError: If the directory cannot be created.
        """
        try:
            if not self._options.timestamp_folder:
                destination_root.mkdir(parents=True, exist_ok=True)
                return destination_root

            name = f"{CONTAINER_PREFIX}{format_timestamp(self._clock())}"
            container = disambiguate(destination_root / name)
            container.mkdir(parents=True)
        except OSError as e:
            raise CopyError(
                f"Cannot create destination folder in {destination_root}: {e}",
                source=destination_root,
                destination=destination_root,
            ) from e

        logger.info("Created backup folder %s", container)
        return container

    def target_path(self, source: Path, effective_root: Path) -> Path:
        """Compute where a file goes before collision handling.

        Args:
            source: Absolute source file path.
            effective_root: Directory returned by prepare_destination.

        Returns:
            Mirrored relative path when preserving structure, else the base name.
        """
        if self._options.preserve_structure:
            try:
                return effective_root / source.relative_to(self._workspace_root)
            except ValueError:
                logger.warning(
                    "%s is outside %s; copying by name only", source, self._workspace_root
                )
        return effective_root / source.name

    def copy_one(self, source: Path, effective_root: Path) -> CopyResult:
        """Copy a single file without overwriting anything.

        Args:
            source: Absolute source file path.
            effective_root: Directory returned by prepare_destination.

        Returns:
            CopyResult with the path actually written.

        Raises:
            CopyError: If the file cannot be read, the target cannot be
                written, or no free name exists.
        """
        target = self.target_path(source, effective_root)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            destination = disambiguate(target)
            shutil.copyfile(source, destination)
        except OSError as e:
            reason = e.strerror or str(e)
            raise CopyError(
                f"Cannot copy {source.name}: {reason}",
                source=source,
                destination=target,
            ) from e

        if destination != target:
            logger.debug("Renamed %s to %s to avoid overwriting", target.name, destination.name)
        return CopyResult(source=source, destination=destination)

    def copy_all(
        self,
        files: Sequence[Path],
        effective_root: Path,
        on_progress: ProgressCallback | None = None,
    ) -> list[CopyResult]:
        """Copy files sequentially, stopping at the first failure.

        Args:
            files: Source files in copy order.
            effective_root: Directory returned by prepare_destination.
            on_progress: Called as ``(completed, total, file_name)`` after
                each successful copy.

        Returns:
            One CopyResult per file.

        Raises:
            CopyError: On the first failed file; ``copied`` holds how many
                files were written before it.
        """
        results: list[CopyResult] = []
        total = len(files)

        for source in files:
            try:
                result = self.copy_one(source, effective_root)
            except CopyError as e:
                e.copied = len(results)
                raise
            results.append(result)
            if on_progress is not None:
                on_progress(len(results), total, source.name)

        logger.info("Copied %d file(s) to %s", len(results), effective_root)
        return results
