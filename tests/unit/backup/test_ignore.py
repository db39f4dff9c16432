"""Tests for ignore file parsing and matching."""

import logging
from pathlib import Path

import pytest
from backpick.backup.ignore import is_ignored, load_ignore_rules, parse_ignore_rules, rule_matches
from backpick.backup.models import IgnoreRule


class TestParseIgnoreRules:
    """Tests for parse_ignore_rules."""

    def test_skips_blank_and_comment_lines(self) -> None:
        """Empty lines and # comments never produce rules."""
        rules = parse_ignore_rules("\n   \n# comment\n   # indented comment\n\t\n")
        assert rules == []

    def test_parses_in_file_order(self) -> None:
        """Rules keep the order of their lines."""
        rules = parse_ignore_rules("b.txt\na.txt\n")
        assert [r.pattern for r in rules] == ["b.txt", "a.txt"]

    def test_trailing_slash_marks_directory_rule(self) -> None:
        """A trailing slash is stripped and marks a directory-only rule."""
        (rule,) = parse_ignore_rules("temp/\n")
        assert rule == IgnoreRule(pattern="temp", directories_only=True, is_wildcard=False)

    def test_only_one_trailing_slash_is_stripped(self) -> None:
        """Only the final separator is removed."""
        (rule,) = parse_ignore_rules("temp//\n")
        assert rule.pattern == "temp/"
        assert rule.directories_only is True

    def test_star_marks_wildcard(self) -> None:
        """Patterns containing * are wildcard rules."""
        (rule,) = parse_ignore_rules("*.log")
        assert rule.is_wildcard is True
        assert rule.directories_only is False

    def test_question_mark_marks_wildcard(self) -> None:
        """Patterns containing ? are flagged as wildcard rules."""
        (rule,) = parse_ignore_rules("file?.txt")
        assert rule.is_wildcard is True

    def test_strips_surrounding_whitespace(self) -> None:
        """Leading and trailing whitespace is removed from patterns."""
        (rule,) = parse_ignore_rules("   notes.txt   \r\n")
        assert rule.pattern == "notes.txt"

    def test_lone_slash_is_skipped(self) -> None:
        """A line consisting only of a separator yields no rule."""
        assert parse_ignore_rules("/\n") == []

    def test_reparse_is_deterministic(self) -> None:
        """Parsing the same text twice gives equal rules."""
        source = "*.log\ntemp/\nbuild.txt\n# comment\n"
        assert parse_ignore_rules(source) == parse_ignore_rules(source)


class TestRuleMatches:
    """Tests for rule_matches."""

    def test_directory_rule_skips_files(self) -> None:
        """Directory-only rules never match files."""
        rule = IgnoreRule(pattern="temp", directories_only=True)
        assert rule_matches(rule, "temp", "temp", is_directory=False) is False
        assert rule_matches(rule, "temp", "temp", is_directory=True) is True

    def test_exact_rule_matches_base_name(self) -> None:
        """Non-wildcard rules match the base name exactly."""
        rule = IgnoreRule(pattern="secret.txt")
        assert rule_matches(rule, "secret.txt", "a/b/secret.txt", is_directory=False) is True
        assert rule_matches(rule, "secret.txt.bak", "secret.txt.bak", is_directory=False) is False

    def test_exact_rule_matches_relative_path(self) -> None:
        """Non-wildcard rules also match the full relative path."""
        rule = IgnoreRule(pattern="src/generated")
        assert rule_matches(rule, "generated", "src/generated", is_directory=True) is True
        assert rule_matches(rule, "generated", "lib/generated", is_directory=True) is False

    def test_star_matches_any_run(self) -> None:
        """* matches any run of characters, including none."""
        rule = IgnoreRule(pattern="*.log", is_wildcard=True)
        assert rule_matches(rule, "a.log", "a.log", is_directory=False) is True
        assert rule_matches(rule, ".log", ".log", is_directory=False) is True
        assert rule_matches(rule, "a.log.txt", "a.log.txt", is_directory=False) is False

    def test_wildcard_matches_relative_path(self) -> None:
        """Wildcard rules are tested against the relative path too."""
        rule = IgnoreRule(pattern="src/*.py", is_wildcard=True)
        assert rule_matches(rule, "app.py", "src/app.py", is_directory=False) is True
        assert rule_matches(rule, "app.py", "lib/app.py", is_directory=False) is False

    def test_wildcard_is_anchored(self) -> None:
        """Wildcard rules must match the whole name."""
        rule = IgnoreRule(pattern="tmp*", is_wildcard=True)
        assert rule_matches(rule, "tmpfile", "tmpfile", is_directory=False) is True
        assert rule_matches(rule, "mytmpfile", "mytmpfile", is_directory=False) is False

    def test_dot_is_literal(self) -> None:
        """A dot in a wildcard pattern only matches a dot."""
        rule = IgnoreRule(pattern="*.log", is_wildcard=True)
        assert rule_matches(rule, "xlog", "xlog", is_directory=False) is False

    def test_question_mark_is_literal(self) -> None:
        """? is matched literally, not as a single-character wildcard."""
        rule = IgnoreRule(pattern="file?.txt", is_wildcard=True)
        assert rule_matches(rule, "file1.txt", "file1.txt", is_directory=False) is False
        assert rule_matches(rule, "file?.txt", "file?.txt", is_directory=False) is True

    @pytest.mark.parametrize("name", ["a+b.txt", "(x).txt", "[1].txt"])
    def test_regex_characters_are_literal(self, name: str) -> None:
        """Regex metacharacters in a pattern have no special meaning."""
        rule = IgnoreRule(pattern=f"*{name}", is_wildcard=True)
        assert rule_matches(rule, name, name, is_directory=False) is True


class TestIsIgnored:
    """Tests for is_ignored."""

    def test_no_rules_never_ignores(self, tmp_path: Path) -> None:
        """With no rules nothing is ignored."""
        assert is_ignored(tmp_path / "a.log", tmp_path, False, []) is False

    def test_example_ignore_file(self, tmp_path: Path) -> None:
        """Log files and the temp directory are ignored, notes are kept."""
        rules = parse_ignore_rules("*.log\ntemp/\n# comment\n")

        assert is_ignored(tmp_path / "a.log", tmp_path, False, rules) is True
        assert is_ignored(tmp_path / "temp", tmp_path, True, rules) is True
        assert is_ignored(tmp_path / "notes.txt", tmp_path, False, rules) is False

    def test_relative_path_uses_posix_separators(self, tmp_path: Path) -> None:
        """Nested entries are matched with forward slashes."""
        rules = parse_ignore_rules("docs/draft.md\n")
        assert is_ignored(tmp_path / "docs" / "draft.md", tmp_path, False, rules) is True

    def test_any_rule_matching_is_enough(self, tmp_path: Path) -> None:
        """Matching is an OR across rules."""
        rules = parse_ignore_rules("nothing.txt\n*.tmp\n")
        assert is_ignored(tmp_path / "x.tmp", tmp_path, False, rules) is True

    def test_path_outside_root(self, tmp_path: Path) -> None:
        """Paths outside the root still match by base name."""
        rules = parse_ignore_rules("a.log\n")
        outside = tmp_path.parent / "elsewhere" / "a.log"
        assert is_ignored(outside, tmp_path / "root", False, rules) is True


class TestLoadIgnoreRules:
    """Tests for load_ignore_rules."""

    def test_missing_file_gives_no_rules(self, tmp_path: Path) -> None:
        """A project without an ignore file has no rules."""
        assert load_ignore_rules(tmp_path, ".backupignore") == []

    def test_reads_rules(self, tmp_path: Path) -> None:
        """Rules are parsed from the ignore file in the root."""
        (tmp_path / ".backupignore").write_text("*.log\ntemp/\n")

        rules = load_ignore_rules(tmp_path, ".backupignore")

        assert [r.pattern for r in rules] == ["*.log", "temp"]

    def test_unreadable_file_gives_no_rules(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A file that cannot be decoded is logged and treated as empty."""
        (tmp_path / ".backupignore").write_bytes(b"\xff\xfe\xfa not utf-8")

        with caplog.at_level(logging.WARNING, logger="backpick.backup.ignore"):
            rules = load_ignore_rules(tmp_path, ".backupignore")

        assert rules == []
        assert "Cannot read ignore file" in caplog.text

    def test_directory_named_like_ignore_file(self, tmp_path: Path) -> None:
        """A directory with the ignore file's name is not read."""
        (tmp_path / ".backupignore").mkdir()
        assert load_ignore_rules(tmp_path, ".backupignore") == []
