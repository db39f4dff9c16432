"""Built-in exclusions applied to every directory scan.

Directory names only exclude directories and file names only exclude
files. The lists are held in an ``ExclusionDefaults`` instance so that
scanners can be handed a different set.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

# VCS, editor, dependency, and build-output directories
DEFAULT_IGNORED_DIRECTORIES: frozenset[str] = frozenset(
    {
        ".git",
        "node_modules",
        ".vscode",
        "dist",
        "build",
        "out",
        ".next",
        ".nuxt",
        "coverage",
        "target",
        "bin",
        "obj",
    }
)

# OS artifacts, tool configs, and lockfiles
DEFAULT_IGNORED_FILES: frozenset[str] = frozenset(
    {
        ".DS_Store",
        "Thumbs.db",
        ".gitignore",
        ".eslintrc",
        ".prettierrc",
        "package-lock.json",
        "yarn.lock",
    }
)

HIDDEN_PREFIX = "."


@dataclass(frozen=True, slots=True)
class ExclusionDefaults:
    """Static exclusion configuration for directory scans.

    Attributes:
        directories: Directory base names that are always skipped.
        files: File base names that are always skipped.
        hidden_prefix: Leading character that marks a hidden entry.
    """

    directories: frozenset[str] = field(default=DEFAULT_IGNORED_DIRECTORIES)
    files: frozenset[str] = field(default=DEFAULT_IGNORED_FILES)
    hidden_prefix: str = HIDDEN_PREFIX

    def excludes(self, name: str, is_directory: bool) -> bool:
        """Check if a base name is on the built-in list for its entry type."""
        if is_directory:
            return name in self.directories
        return name in self.files

    def is_hidden(self, name: str) -> bool:
        """Check if a base name marks a hidden entry."""
        return name.startswith(self.hidden_prefix)

    def extended(
        self,
        directories: Iterable[str] = (),
        files: Iterable[str] = (),
    ) -> "ExclusionDefaults":
        """Return a copy with extra directory and file names added."""
        return ExclusionDefaults(
            directories=self.directories | frozenset(directories),
            files=self.files | frozenset(files),
            hidden_prefix=self.hidden_prefix,
        )


DEFAULT_EXCLUSIONS = ExclusionDefaults()
