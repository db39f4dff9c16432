"""Ignore file parsing and matching.

An ignore file holds one pattern per line. Blank lines and lines
starting with ``#`` are skipped. A trailing ``/`` restricts a pattern to
directories. Patterns containing ``*`` or ``?`` are wildcard patterns,
where ``*`` matches any run of characters and every other character,
``?`` included, matches itself. Non-wildcard patterns must equal the
entry's base name or its path relative to the scan root.
"""

import logging
import re
from collections.abc import Sequence
from functools import lru_cache
from pathlib import Path

from backpick.backup.models import IgnoreRule

logger = logging.getLogger(__name__)

_WILDCARD_CHARS = ("*", "?")


def parse_ignore_rules(source: str) -> list[IgnoreRule]:
    """Parse ignore file text into rules, in file order.

    Args:
        source: Full text of an ignore file.

    Returns:
        List of IgnoreRule, one per pattern line.
    """
    rules: list[IgnoreRule] = []

    for line in source.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue

        directories_only = trimmed.endswith("/")
        pattern = trimmed[:-1] if directories_only else trimmed
        if not pattern:
            # A bare "/" names nothing
            continue

        rules.append(
            IgnoreRule(
                pattern=pattern,
                directories_only=directories_only,
                is_wildcard=any(ch in pattern for ch in _WILDCARD_CHARS),
            )
        )

    return rules


def load_ignore_rules(root: Path, file_name: str) -> list[IgnoreRule]:
    """Read and parse the ignore file in a project root.

    A missing file yields no rules. An unreadable file is logged and
    also yields no rules; it never aborts the backup.

    Args:
        root: Project root directory.
        file_name: Ignore file name (e.g., ".backupignore").

    Returns:
        Parsed rules, possibly empty.
    """
    spec_path = root / file_name
    if not spec_path.is_file():
        return []

    try:
        source = spec_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read ignore file %s: %s", spec_path, e)
        return []

    rules = parse_ignore_rules(source)
    logger.debug("Loaded %d ignore rule(s) from %s", len(rules), spec_path)
    return rules


@lru_cache(maxsize=256)
def _compile_wildcard(pattern: str) -> re.Pattern[str]:
    """Translate a wildcard pattern into an anchored regex.

    Only ``*`` is expanded; everything else is escaped and literal.
    """
    return re.compile(re.escape(pattern).replace(r"\*", ".*"))


def rule_matches(rule: IgnoreRule, name: str, relative_path: str, is_directory: bool) -> bool:
    """Check a single rule against an entry.

    Args:
        rule: Rule to test.
        name: Entry base name.
        relative_path: Entry path relative to the scan root, POSIX separators.
        is_directory: Whether the entry is a directory.

    Returns:
        True if the rule matches the base name or the relative path.
    """
    if rule.directories_only and not is_directory:
        return False

    if rule.is_wildcard:
        regex = _compile_wildcard(rule.pattern)
        return regex.fullmatch(name) is not None or regex.fullmatch(relative_path) is not None

    return name == rule.pattern or relative_path == rule.pattern


def is_ignored(
    path: Path,
    root: Path,
    is_directory: bool,
    rules: Sequence[IgnoreRule],
) -> bool:
    """Check if any rule excludes a path.

    Args:
        path: Absolute path of the entry.
        root: Scan root the relative path is computed against.
        is_directory: Whether the entry is a directory.
        rules: Parsed ignore rules.

    Returns:
        True on the first matching rule, False if none match.
    """
    if not rules:
        return False

    try:
        relative_path = path.relative_to(root).as_posix()
    except ValueError:
        relative_path = path.as_posix()

    name = path.name
    return any(rule_matches(rule, name, relative_path, is_directory) for rule in rules)
