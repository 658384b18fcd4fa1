"""Breadth-first descendant discovery and worker-candidate selection."""

from __future__ import annotations

from collections import deque
from typing import List, Optional, Sequence

from ..process_models import ProcessRecord
from ..process_table import ProcessSnapshot
from .name_matching import is_excluded, matches_expected


def collect_descendants(
    snapshot: ProcessSnapshot,
    parent_pid: int,
    exclude_names: Sequence[str] = (),
) -> List[ProcessRecord]:
    """Return live transitive descendants of ``parent_pid`` in BFS order.

    Excluded processes are walked through but not returned, so a worker
    sitting below a chain of shells is still found. ``parent_pid`` need not
    be alive: its orphaned children are only reachable if the OS kept their
    parent link.
    """
    found: List[ProcessRecord] = []
    visited = {parent_pid}
    queue = deque([parent_pid])
    while queue:
        current = queue.popleft()
        for child in snapshot.children_of(current):
            if child.pid in visited:
                continue
            visited.add(child.pid)
            queue.append(child.pid)
            if not is_excluded(child.name, exclude_names):
                found.append(child)
    return found


def find_by_expected_name(descendants: Sequence[ProcessRecord], expected: str) -> Optional[ProcessRecord]:
    for record in descendants:
        if matches_expected(record.name, expected):
            return record
    return None


def root_candidates(descendants: Sequence[ProcessRecord]) -> List[ProcessRecord]:
    """Descendants whose parent is outside the discovered set, earliest first.

    Wrapper chains tend to fork one real worker near the top and park helper
    processes below it; the helpers have a discovered parent and drop out.
    """
    discovered = {record.pid for record in descendants}
    roots = [record for record in descendants if record.parent_pid not in discovered]
    return sorted(roots, key=_start_order)


def select_worker(descendants: Sequence[ProcessRecord], expected_name: Optional[str] = None) -> Optional[ProcessRecord]:
    """Pick the worker: expected name, then earliest root candidate, then earliest descendant."""
    if not descendants:
        return None
    if expected_name:
        match = find_by_expected_name(descendants, expected_name)
        if match is not None:
            return match
    roots = root_candidates(descendants)
    if roots:
        return roots[0]
    return min(descendants, key=_start_order)


def _start_order(record: ProcessRecord) -> tuple[float, int]:
    return record.start_time, record.pid


__all__ = ["collect_descendants", "find_by_expected_name", "root_candidates", "select_worker"]
