"""Unit tests for console formatting helpers."""

import pytest
from backpick.utils.formatting import create_file_table, format_size


class TestFormatSize:
    """Tests for format_size."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (None, "0 B"),
            (0, "0 B"),
            (512, "512 B"),
            (2048, "2.0 KB"),
            (5 * 1024 * 1024, "5.0 MB"),
            (3 * 1024**4, "3.0 TB"),
        ],
    )
    def test_format(self, size: int | None, expected: str) -> None:
        """Byte counts are scaled to the largest fitting unit."""
        assert format_size(size) == expected


class TestCreateFileTable:
    """Tests for create_file_table."""

    def test_columns(self) -> None:
        """The table has Path and Size columns."""
        table = create_file_table("Eligible Files")

        assert table.title == "Eligible Files"
        assert [str(c.header) for c in table.columns] == ["Path", "Size"]
