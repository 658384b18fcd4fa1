"""Tests for descendant discovery and worker selection."""

from __future__ import annotations

from proctrack.descendant_resolver_helpers import (
    collect_descendants,
    find_by_expected_name,
    root_candidates,
    select_worker,
)
from proctrack.process_table import ProcessSnapshot
from tests.helpers.process_fakes import record


def _snapshot(*records):
    return ProcessSnapshot(records)


class TestCollectDescendants:
    """Tests for collect_descendants."""

    def test_walks_through_excluded_wrappers(self) -> None:
        """Wrappers are traversed but not returned."""
        snapshot = _snapshot(
            record(100, 1, "cmd.exe"),
            record(101, 100, "powershell.exe", 1.0),
            record(102, 101, "npm", 2.0),
            record(103, 102, "node.exe", 3.0),
        )

        found = collect_descendants(snapshot, 100, ["cmd", "powershell", "npm"])

        assert [rec.pid for rec in found] == [103]

    def test_breadth_first_order(self) -> None:
        """Shallower descendants come first."""
        snapshot = _snapshot(
            record(10, 1, "parent"),
            record(11, 10, "a", 1.0),
            record(12, 10, "b", 2.0),
            record(13, 11, "a-child", 3.0),
        )

        assert [rec.pid for rec in collect_descendants(snapshot, 10)] == [11, 12, 13]

    def test_parent_not_in_snapshot(self) -> None:
        """A dead parent still yields children that kept the link."""
        snapshot = _snapshot(record(21, 20, "orphan"))

        assert [rec.pid for rec in collect_descendants(snapshot, 20)] == [21]

    def test_no_children(self) -> None:
        """A leaf has no descendants."""
        assert collect_descendants(_snapshot(record(5, 1, "leaf")), 5) == []

    def test_parent_itself_never_returned(self) -> None:
        """Cycles back to the parent are ignored."""
        snapshot = _snapshot(record(5, 6, "a"), record(6, 5, "b"))

        assert [rec.pid for rec in collect_descendants(snapshot, 5)] == [6]


class TestSelection:
    """Tests for worker selection precedence."""

    def test_expected_name_wins(self) -> None:
        """A descendant matching the expected name is chosen first."""
        descendants = [record(11, 10, "helper", 1.0), record(12, 10, "server", 5.0)]

        assert select_worker(descendants, "server").pid == 12

    def test_root_candidate_when_name_missing(self) -> None:
        """Without a match, the earliest root candidate wins."""
        descendants = [
            record(11, 10, "worker", 2.0),
            record(12, 11, "helper", 1.0),
            record(13, 10, "other", 3.0),
        ]

        assert select_worker(descendants, "absent").pid == 11

    def test_root_candidates_sorted(self) -> None:
        """Root candidates are those whose parent was not discovered."""
        descendants = [
            record(13, 10, "late", 3.0),
            record(11, 10, "early", 1.0),
            record(12, 11, "nested", 0.5),
        ]

        assert [rec.pid for rec in root_candidates(descendants)] == [11, 13]

    def test_earliest_descendant_fallback(self) -> None:
        """When every candidate has a discovered parent, the earliest one wins."""
        descendants = [record(21, 22, "a", 4.0), record(22, 21, "b", 2.0)]

        assert root_candidates(descendants) == []
        assert select_worker(descendants).pid == 22

    def test_empty(self) -> None:
        """No descendants selects nothing."""
        assert select_worker([], "anything") is None
        assert find_by_expected_name([], "anything") is None
