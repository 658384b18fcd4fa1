"""Tests for the dotenv loader and list normalizer."""

from __future__ import annotations

from pathlib import Path

import pytest

from proctrack.config import ConfigurationError
from proctrack.config.runtime_helpers import DotenvLoader, ListNormalizer


class TestDotenvLoader:
    """Tests for DotenvLoader."""

    def test_missing_file_returns_empty(self, tmp_path: Path) -> None:
        """A missing file yields no values."""
        assert DotenvLoader.load_from_file(tmp_path / "absent.env") == {}

    def test_parses_assignments(self, tmp_path: Path) -> None:
        """Comments, blanks, export prefixes and quotes are handled."""
        path = tmp_path / ".env"
        path.write_text(
            "# comment\n"
            "\n"
            "PLAIN=value\n"
            "export EXPORTED=yes\n"
            "QUOTED=\"with spaces\"\n"
            "SINGLE='single'\n"
            "PLAIN=ignored-duplicate\n"
            "not an assignment\n"
        )

        assert DotenvLoader.load_from_file(path) == {
            "PLAIN": "value",
            "EXPORTED": "yes",
            "QUOTED": "with spaces",
            "SINGLE": "single",
        }

    def test_unreadable_file_raises(self, tmp_path: Path, monkeypatch) -> None:
        """Read errors become ConfigurationError."""
        path = tmp_path / ".env"
        path.write_text("A=1\n")

        def _fail(*_args, **_kwargs):
            raise PermissionError("denied")

        monkeypatch.setattr(Path, "read_text", _fail)

        with pytest.raises(ConfigurationError, match="Failed to load"):
            DotenvLoader.load_from_file(path)

    def test_parse_line_rejects_blank_key(self) -> None:
        """Lines with an empty key are ignored."""
        assert DotenvLoader.parse_line("=value") is None
        assert DotenvLoader.parse_line("KEY = value ") == ("KEY", "value")


class TestListNormalizer:
    """Tests for ListNormalizer."""

    def test_split_and_normalize_strips_and_drops_blanks(self) -> None:
        """Whitespace is trimmed and empty entries removed."""
        assert ListNormalizer.split_and_normalize(" a, ,b ,", ",", strip_items=True) == ["a", "b"]

    def test_split_without_strip_keeps_raw_items(self) -> None:
        """Without stripping, items are returned as-is."""
        assert ListNormalizer.split_and_normalize("a, b", ",", strip_items=False) == ["a", " b"]

    def test_deduplicate_preserves_first_occurrence(self) -> None:
        """Duplicates are removed in order."""
        assert ListNormalizer.deduplicate_preserving_order(["b", "a", "b"]) == ("b", "a")

    def test_deduplicate_casefold(self) -> None:
        """Case-insensitive de-duplication keeps the first spelling."""
        assert ListNormalizer.deduplicate_preserving_order(["Bash", "bash", "SH"], casefold=True) == ("Bash", "SH")
