"""End-to-end backup session.

Ties the pieces together in the order a user experiences them: backup
options, ignore rules, interactive selection, destination, and copying.
Clean early exits raise ``BackupAborted`` subclasses; a failed copy
raises ``CopyError``.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from backpick.backup.copier import CopyEngine
from backpick.backup.defaults import DEFAULT_EXCLUSIONS
from backpick.backup.errors import ConfigurationAbsentError, EmptySelectionError
from backpick.backup.ignore import load_ignore_rules
from backpick.backup.models import BackupOptions, CopyResult
from backpick.backup.navigator import Navigator, Picker
from backpick.backup.scanner import DirectoryScanner
from backpick.backup.selection import SelectionModel
from backpick.core.config import BackpickConfig

logger = logging.getLogger(__name__)


class ProgressReporter(Protocol):
    """Observer for copy progress; purely informational."""

    def report(self, increment: float, message: str) -> None:
        """Advance by ``increment`` percent and show ``message``."""
        ...


@dataclass(frozen=True, slots=True)
class BackupReport:
    """Summary of a completed backup.

    Attributes:
        destination: Effective destination directory.
        copied: One result per copied file, in copy order.
    """

    destination: Path
    copied: tuple[CopyResult, ...]

    @property
    def renamed_count(self) -> int:
        """Number of files written under a disambiguated name."""
        return sum(1 for r in self.copied if r.renamed)


def request_options(
    picker: Picker,
    *,
    preserve_structure: bool | None = None,
    include_hidden: bool | None = None,
    timestamp_folder: bool | None = None,
) -> BackupOptions:
    """Build backup options, asking only for values not already given.

    Args:
        picker: Picker used for yes/no questions.
        preserve_structure: Preset answer, or None to ask (default yes).
        include_hidden: Preset answer, or None to ask (default no).
        timestamp_folder: Preset answer, or None to ask (default yes).

    Returns:
        Fully populated BackupOptions.

    Raises:
        ConfigurationAbsentError: If the user cancels any question.
    """
    questions = (
        ("Preserve directory structure in backup?", preserve_structure, True),
        ("Include hidden files and folders?", include_hidden, False),
        ("Create timestamped backup folder?", timestamp_folder, True),
    )

    answers: list[bool] = []
    for question, preset, default in questions:
        if preset is not None:
            answers.append(preset)
            continue
        answer = picker.ask_yes_no(question, default)
        if answer is None:
            raise ConfigurationAbsentError("Backup cancelled.")
        answers.append(answer)

    return BackupOptions(
        preserve_structure=answers[0],
        include_hidden=answers[1],
        timestamp_folder=answers[2],
    )


def run_backup(
    root: Path,
    picker: Picker,
    progress: ProgressReporter | None = None,
    *,
    options: BackupOptions | None = None,
    destination: Path | None = None,
    config: BackpickConfig | None = None,
) -> BackupReport:
    """Run one interactive backup session.

    Args:
        root: Project root directory.
        picker: Interactive picker capability.
        progress: Optional progress observer for the copy phase.
        options: Backup options; asked for through the picker when None,
            honouring any defaults in ``config``.
        destination: Destination folder; asked for after selection when None.
        config: User configuration. Defaults to BackpickConfig().

    Returns:
        BackupReport describing what was copied.

    Raises:
        ConfigurationAbsentError: No valid root, or options/destination cancelled.
        EmptySelectionError: Selection cancelled or finished with no files.
        CopyError: A file could not be copied.
    """
    config = config or BackpickConfig()

    if not root.is_dir():
        raise ConfigurationAbsentError(f"Project folder not found: {root}")
    root = root.resolve()

    if options is None:
        options = request_options(
            picker,
            preserve_structure=config.preserve_structure,
            include_hidden=config.include_hidden,
            timestamp_folder=config.timestamp_folder,
        )

    rules = load_ignore_rules(root, config.ignore_file)
    exclusions = DEFAULT_EXCLUSIONS.extended(config.extra_ignored_dirs, config.extra_ignored_files)
    scanner = DirectoryScanner(
        root,
        include_hidden=options.include_hidden,
        rules=rules,
        exclusions=exclusions,
    )
    selection = SelectionModel(scanner)

    result = Navigator(scanner, selection, picker).run()
    if result.cancelled or not result.files:
        raise EmptySelectionError("No files selected for backup.")

    if destination is None:
        destination = picker.choose_folder("Select destination folder")
        if destination is None:
            raise ConfigurationAbsentError("No destination folder selected.")

    engine = CopyEngine(root, options)
    effective_root = engine.prepare_destination(destination.expanduser())

    total = len(result.files)

    def _on_progress(completed: int, count: int, name: str) -> None:
        if progress is not None:
            progress.report(100 / count, f"Copying {name} ({completed}/{count})")

    logger.info("Backing up %d file(s) from %s to %s", total, root, effective_root)
    copied = engine.copy_all(result.files, effective_root, _on_progress)
    return BackupReport(destination=effective_root, copied=tuple(copied))
