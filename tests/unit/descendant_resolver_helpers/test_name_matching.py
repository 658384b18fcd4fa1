"""Tests for name matching helpers."""

from __future__ import annotations

import pytest

from proctrack.descendant_resolver_helpers import (
    expected_name_for,
    is_excluded,
    matches_expected,
    normalize_expected_name,
)


class TestIsExcluded:
    """Tests for is_excluded."""

    def test_case_insensitive_containment(self) -> None:
        """Entries match anywhere in the name, ignoring case."""
        assert is_excluded("PowerShell.exe", ["powershell"])
        assert is_excluded("bash", ["BASH"])
        assert is_excluded("npm-cli", ["npm"])

    def test_no_match(self) -> None:
        """Unrelated names are not excluded."""
        assert not is_excluded("python3", ["bash", "npm"])

    def test_empty_entries_ignored(self) -> None:
        """An empty exclusion entry does not match everything."""
        assert not is_excluded("worker", ["", "bash"])


class TestNormalizeExpectedName:
    """Tests for normalize_expected_name."""

    @pytest.mark.parametrize(
        ("hint", "expected"),
        [
            ("C:\\Tools\\Worker.EXE", "Worker"),
            ("/opt/bin/worker", "worker"),
            ("run.cmd", "run"),
            ("node", "node"),
        ],
    )
    def test_reduces_to_stem(self, hint: str, expected: str) -> None:
        """Paths and executable suffixes are stripped."""
        assert normalize_expected_name(hint) == expected

    def test_empty_hint(self) -> None:
        """Empty hints normalize to None."""
        assert normalize_expected_name(None) is None
        assert normalize_expected_name("") is None
        assert normalize_expected_name("/opt/bin/") is None


class TestMatchesExpected:
    """Tests for matches_expected."""

    def test_substring_ignoring_case(self) -> None:
        """The expected stem may be part of the reported name."""
        assert matches_expected("Worker.exe", "worker")
        assert not matches_expected("python", "worker")


class TestExpectedNameFor:
    """Tests for expected_name_for."""

    def test_prefers_executable_argument(self) -> None:
        """An .exe or path argument wins over the command."""
        assert expected_name_for("cmd", ["C:\\apps\\server.exe"]) == "C:\\apps\\server.exe"
        assert expected_name_for("sh", ["./bin/server", "--port", "80"]) == "./bin/server"

    def test_falls_back_to_command(self) -> None:
        """Plain arguments leave the command as the hint."""
        assert expected_name_for("npm", ["run", "dev"]) == "npm"
        assert expected_name_for("python", []) == "python"
