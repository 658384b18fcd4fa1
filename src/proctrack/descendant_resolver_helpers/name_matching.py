"""Case-insensitive name matching for wrapper exclusion and expected-name hints."""

from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

_EXECUTABLE_SUFFIXES = (".exe", ".cmd", ".bat", ".com")
_PATH_SEPARATORS = re.compile(r"[\\/]")


def is_excluded(name: str, exclude_names: Iterable[str]) -> bool:
    """Return True when ``name`` contains any exclusion entry, ignoring case."""
    lowered = name.casefold()
    return any(entry and entry.casefold() in lowered for entry in exclude_names)


def normalize_expected_name(hint: Optional[str]) -> Optional[str]:
    """Reduce an executable hint to the bare program name a process table reports.

    ``C:\\Tools\\worker.exe`` and ``/opt/bin/worker`` both become ``worker``.
    """
    if not hint:
        return None
    base = _PATH_SEPARATORS.split(hint.strip())[-1]
    lowered = base.casefold()
    for suffix in _EXECUTABLE_SUFFIXES:
        if lowered.endswith(suffix):
            base = base[: -len(suffix)]
            break
    return base or None


def matches_expected(name: str, expected: str) -> bool:
    return expected.casefold() in name.casefold()


def expected_name_for(command: str, args: Sequence[str]) -> Optional[str]:
    """Derive the expected worker name for a tracked launch.

    When the first argument names an executable (a path, or a ``.exe`` file)
    the command is most likely a launcher for it, so the argument wins;
    otherwise the command itself is the best hint.
    """
    if args:
        first = args[0]
        if first.casefold().endswith(".exe") or "/" in first or "\\" in first:
            return first
    return command or None


__all__ = ["expected_name_for", "is_excluded", "matches_expected", "normalize_expected_name"]
