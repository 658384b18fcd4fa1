"""Tests for platform capability detection and creation flags."""

from __future__ import annotations

from unittest.mock import patch

from proctrack.spawn_coordinator_helpers import PlatformCapabilities, creation_kwargs
from proctrack.spawn_coordinator_helpers.platform_flags import (
    CREATE_BREAKAWAY_FROM_JOB,
    CREATE_NO_WINDOW,
    DETACHED_PROCESS,
)

WINDOWS = PlatformCapabilities.for_os_name("nt")
POSIX = PlatformCapabilities.for_os_name("posix")


class TestPlatformCapabilities:
    """Tests for capability resolution."""

    def test_windows(self) -> None:
        """Windows supports every capability."""
        assert WINDOWS.is_windows
        assert WINDOWS.supports_hidden_window
        assert WINDOWS.supports_group_detach
        assert WINDOWS.supports_native_tree_kill

    def test_posix(self) -> None:
        """POSIX detaches via sessions but has no window or native tree kill."""
        assert not POSIX.is_windows
        assert not POSIX.supports_hidden_window
        assert POSIX.supports_group_detach
        assert not POSIX.supports_native_tree_kill

    def test_detect_uses_os_name(self) -> None:
        """detect() follows os.name."""
        with patch("proctrack.spawn_coordinator_helpers.platform_flags.os.name", "nt"):
            assert PlatformCapabilities.detect() == WINDOWS

    def test_flag_values(self) -> None:
        """Windows flag values match the Win32 constants."""
        assert CREATE_NO_WINDOW == 0x08000000
        assert DETACHED_PROCESS == 0x00000008
        assert CREATE_BREAKAWAY_FROM_JOB == 0x01000000


class TestCreationKwargs:
    """Tests for creation_kwargs."""

    def test_windows_hidden_and_detached(self) -> None:
        """Hidden and detached combine their flags."""
        kwargs = creation_kwargs(WINDOWS, hidden=True, detached=True)

        assert kwargs == {"creationflags": CREATE_NO_WINDOW | DETACHED_PROCESS | CREATE_BREAKAWAY_FROM_JOB}

    def test_windows_plain_launch_has_no_flags(self) -> None:
        """No flags are passed for a plain launch."""
        assert creation_kwargs(WINDOWS, hidden=False, detached=False) == {}

    def test_posix_detached_starts_new_session(self) -> None:
        """POSIX detaches by starting a new session."""
        assert creation_kwargs(POSIX, hidden=False, detached=True) == {"start_new_session": True}

    def test_posix_hidden_is_ignored(self) -> None:
        """Hiding a window is a no-op without a console."""
        assert creation_kwargs(POSIX, hidden=True, detached=False) == {}
