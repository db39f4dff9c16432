"""Selective backup engine.

This package provides ignore file parsing, eligible-file scanning,
the file selection model, the interactive navigator, and the
collision-safe copy engine.
"""

from backpick.backup.copier import CopyEngine, disambiguate, format_timestamp
from backpick.backup.defaults import DEFAULT_EXCLUSIONS, ExclusionDefaults
from backpick.backup.errors import (
    BackupAborted,
    BackupError,
    ConfigurationAbsentError,
    CopyError,
    EmptySelectionError,
)
from backpick.backup.ignore import is_ignored, load_ignore_rules, parse_ignore_rules
from backpick.backup.models import (
    BackupOptions,
    CopyResult,
    FileSystemEntry,
    IgnoreRule,
    SelectedFile,
)
from backpick.backup.navigator import (
    ItemKind,
    NavigationResult,
    NavigationStatus,
    Navigator,
    Picker,
    PickItem,
)
from backpick.backup.scanner import DirectoryScanner
from backpick.backup.selection import SelectionModel
from backpick.backup.workflow import BackupReport, ProgressReporter, request_options, run_backup

__all__ = [
    "DEFAULT_EXCLUSIONS",
    "BackupAborted",
    "BackupError",
    "BackupOptions",
    "BackupReport",
    "ConfigurationAbsentError",
    "CopyEngine",
    "CopyError",
    "CopyResult",
    "DirectoryScanner",
    "EmptySelectionError",
    "ExclusionDefaults",
    "FileSystemEntry",
    "IgnoreRule",
    "ItemKind",
    "NavigationResult",
    "NavigationStatus",
    "Navigator",
    "PickItem",
    "Picker",
    "ProgressReporter",
    "SelectedFile",
    "SelectionModel",
    "disambiguate",
    "format_timestamp",
    "is_ignored",
    "load_ignore_rules",
    "parse_ignore_rules",
    "request_options",
    "run_backup",
]
