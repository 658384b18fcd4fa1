"""Transitive process-tree closure with depth, for leaves-first ordering."""

from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List

from ..process_table import ProcessSnapshot


def tree_closure(snapshot: ProcessSnapshot, root_pid: int) -> Dict[int, int]:
    """Map every live member of the tree rooted at ``root_pid`` to its depth.

    The root has depth 0 and is only included when it is alive. Children of
    a dead root are still collected while the OS keeps their parent link.
    """
    depths: Dict[int, int] = {}
    if root_pid in snapshot:
        depths[root_pid] = 0
    queue = deque([(root_pid, 0)])
    seen = {root_pid}
    while queue:
        pid, depth = queue.popleft()
        for child in snapshot.children_of(pid):
            if child.pid in seen:
                continue
            seen.add(child.pid)
            depths[child.pid] = depth + 1
            queue.append((child.pid, depth + 1))
    return depths


def merge_closures(snapshot: ProcessSnapshot, roots: Dict[int, int]) -> Dict[int, int]:
    """Union of the closures below each of ``roots`` (pid -> base depth).

    Used on escalation, where earlier members may have been reparented away
    from the original root. The deepest depth seen for a PID wins.
    """
    merged: Dict[int, int] = {}
    for pid, base_depth in roots.items():
        for member, depth in tree_closure(snapshot, pid).items():
            merged[member] = max(merged.get(member, -1), base_depth + depth)
    return merged


def leaves_first(depths: Dict[int, int]) -> List[int]:
    """Deepest members first so no descendant outlives its ancestor unsignalled."""
    return [pid for pid, _ in sorted(depths.items(), key=lambda item: (-item[1], item[0]))]


def still_alive(snapshot: ProcessSnapshot, pids: Iterable[int]) -> List[int]:
    return [pid for pid in pids if pid in snapshot]


__all__ = ["leaves_first", "merge_closures", "still_alive", "tree_closure"]
