"""Send termination signals and classify what happened."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

import psutil

from ..spawn_coordinator_helpers.platform_flags import CREATE_NO_WINDOW, PlatformCapabilities

logger = logging.getLogger(__name__)


class SignalStatus(str, Enum):
    SENT = "sent"
    GONE = "gone"
    DENIED = "denied"
    FAILED = "failed"


@dataclass(frozen=True)
class SignalResult:
    pid: int
    status: SignalStatus
    detail: str = ""


class ProcessSignaller(Protocol):
    def terminate(self, pid: int) -> SignalResult: ...

    def kill(self, pid: int) -> SignalResult: ...

    async def terminate_tree_native(self, pid: int) -> SignalResult: ...


class PsutilSignaller:
    """Signals through psutil (SIGTERM/SIGKILL, or TerminateProcess on Windows)."""

    def __init__(self, capabilities: PlatformCapabilities | None = None):
        self.capabilities = capabilities if capabilities is not None else PlatformCapabilities.detect()

    def terminate(self, pid: int) -> SignalResult:
        return self._send(pid, graceful=True)

    def kill(self, pid: int) -> SignalResult:
        return self._send(pid, graceful=False)

    async def terminate_tree_native(self, pid: int) -> SignalResult:
        """Ask ``taskkill /T`` to close the whole tree cooperatively (Windows only)."""
        if not self.capabilities.supports_native_tree_kill:
            return SignalResult(pid, SignalStatus.FAILED, "native tree termination not supported")
        try:
            proc = await asyncio.create_subprocess_exec(
                "taskkill",
                "/PID",
                str(pid),
                "/T",
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                creationflags=CREATE_NO_WINDOW,
            )
            _, stderr = await proc.communicate()
        except OSError as exc:  # policy_guard: allow-silent-handler
            return SignalResult(pid, SignalStatus.FAILED, f"taskkill unavailable: {exc}")
        if proc.returncode == 0:
            return SignalResult(pid, SignalStatus.SENT)
        detail = stderr.decode(errors="replace").strip()
        if "access is denied" in detail.lower():
            return SignalResult(pid, SignalStatus.DENIED, detail)
        return SignalResult(pid, SignalStatus.FAILED, detail or f"taskkill exited with {proc.returncode}")

    def _send(self, pid: int, *, graceful: bool) -> SignalResult:
        try:
            proc = psutil.Process(pid)
            if graceful:
                proc.terminate()
            else:
                proc.kill()
        except (psutil.NoSuchProcess, psutil.ZombieProcess):  # policy_guard: allow-silent-handler
            return SignalResult(pid, SignalStatus.GONE)
        except psutil.AccessDenied as exc:  # policy_guard: allow-silent-handler
            return SignalResult(pid, SignalStatus.DENIED, str(exc))
        except (psutil.Error, OSError) as exc:  # policy_guard: allow-silent-handler
            return SignalResult(pid, SignalStatus.FAILED, str(exc))
        logger.debug("Sent %s to PID %s", "terminate" if graceful else "kill", pid)
        return SignalResult(pid, SignalStatus.SENT)


__all__ = ["ProcessSignaller", "PsutilSignaller", "SignalResult", "SignalStatus"]
