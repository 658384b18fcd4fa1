"""Helper modules for descendant resolution."""

from .name_matching import expected_name_for, is_excluded, matches_expected, normalize_expected_name
from .tree_walk import collect_descendants, find_by_expected_name, root_candidates, select_worker

__all__ = [
    "collect_descendants",
    "expected_name_for",
    "find_by_expected_name",
    "is_excluded",
    "matches_expected",
    "normalize_expected_name",
    "root_candidates",
    "select_worker",
]
