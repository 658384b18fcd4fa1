"""Per-platform process-creation flags for hidden and detached launches."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from typing import Any, Dict

# Windows process-creation flags; defined here so the values exist on every
# platform and can be asserted in tests.
CREATE_NO_WINDOW = getattr(subprocess, "CREATE_NO_WINDOW", 0x08000000)
DETACHED_PROCESS = getattr(subprocess, "DETACHED_PROCESS", 0x00000008)
CREATE_BREAKAWAY_FROM_JOB = getattr(subprocess, "CREATE_BREAKAWAY_FROM_JOB", 0x01000000)


@dataclass(frozen=True)
class PlatformCapabilities:
    """What the current OS can do, resolved once instead of branching per call."""

    is_windows: bool
    supports_hidden_window: bool
    supports_group_detach: bool
    supports_native_tree_kill: bool

    @classmethod
    def detect(cls) -> "PlatformCapabilities":
        return cls.for_os_name(os.name)

    @classmethod
    def for_os_name(cls, os_name: str) -> "PlatformCapabilities":
        if os_name == "nt":
            return cls(
                is_windows=True,
                supports_hidden_window=True,
                supports_group_detach=True,
                supports_native_tree_kill=True,
            )
        return cls(
            is_windows=False,
            supports_hidden_window=False,
            supports_group_detach=os_name == "posix",
            supports_native_tree_kill=False,
        )


def creation_kwargs(capabilities: PlatformCapabilities, *, hidden: bool, detached: bool) -> Dict[str, Any]:
    """Keyword arguments for ``asyncio.create_subprocess_exec``.

    Unsupported requests are silently dropped: hiding a console window means
    nothing without a console, and detaching is a no-op where the OS has no
    group or job to break away from.
    """
    kwargs: Dict[str, Any] = {}
    if capabilities.is_windows:
        flags = 0
        if hidden and capabilities.supports_hidden_window:
            flags |= CREATE_NO_WINDOW
        if detached and capabilities.supports_group_detach:
            flags |= DETACHED_PROCESS | CREATE_BREAKAWAY_FROM_JOB
        if flags:
            kwargs["creationflags"] = flags
    elif detached and capabilities.supports_group_detach:
        kwargs["start_new_session"] = True
    return kwargs


__all__ = [
    "CREATE_BREAKAWAY_FROM_JOB",
    "CREATE_NO_WINDOW",
    "DETACHED_PROCESS",
    "PlatformCapabilities",
    "creation_kwargs",
]
