"""Value types shared by the spawn, relay, resolver and terminator components."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Sequence

from .config.settings import DEFAULT_RESOLVE_MAX_WAIT_MS, DEFAULT_WRAPPER_EXCLUDES


@dataclass(frozen=True)
class ProcessRecord:
    """One row of a live process-table snapshot.

    Owned by the OS; this package only ever reads it.
    """

    pid: int
    parent_pid: Optional[int]
    name: str
    start_time: float


@dataclass
class LaunchSpec:
    """What to launch and how."""

    command: str
    args: Sequence[str] = ()
    working_directory: Optional[str] = None
    hidden: bool = False
    detached: bool = False
    track: bool = False
    env: Optional[Mapping[str, str]] = None
    expected_name: Optional[str] = None
    exclude_names: Optional[Sequence[str]] = None

    @property
    def argv(self) -> List[str]:
        return [self.command, *self.args]


class StreamTag(str, Enum):
    STDOUT = "stdout"
    STDERR = "stderr"

    @property
    def level(self) -> str:
        return "info" if self is StreamTag.STDOUT else "error"


@dataclass(frozen=True)
class LogLine:
    """A single line of child output, tagged with its stream."""

    stream: StreamTag
    text: str
    context: Mapping[str, Any] = field(default_factory=dict)
    pid: Optional[int] = None

    @property
    def level(self) -> str:
        return self.stream.level

    def to_dict(self) -> dict[str, Any]:
        return {
            "stream": self.stream.value,
            "level": self.level,
            "message": self.text,
            "pid": self.pid,
            "context": dict(self.context),
        }


@dataclass(frozen=True)
class DescendantQuery:
    """Parameters for locating the real worker below a wrapper process."""

    parent_pid: int
    expected_name: Optional[str] = None
    exclude_names: Sequence[str] = DEFAULT_WRAPPER_EXCLUDES
    max_wait_ms: int = DEFAULT_RESOLVE_MAX_WAIT_MS


@dataclass
class SpawnedProcess:
    """A freshly spawned child and the tasks relaying its output."""

    pid: int
    process: Optional[asyncio.subprocess.Process] = None
    relay_tasks: List["asyncio.Task[None]"] = field(default_factory=list)

    async def wait_for_output(self) -> None:
        """Wait until every relay has reached end of stream."""
        if self.relay_tasks:
            await asyncio.gather(*self.relay_tasks, return_exceptions=True)


@dataclass
class LaunchResult:
    """Outcome of a supervised launch."""

    initial_pid: int
    pid: int
    resolved: bool
    spawned: SpawnedProcess

    @property
    def is_wrapper(self) -> bool:
        return self.resolved and self.pid != self.initial_pid


class TerminationStatus(str, Enum):
    ALREADY_TERMINATED = "already_terminated"
    TERMINATED = "terminated"


@dataclass
class TerminationOutcome:
    """Result of a whole-tree termination request."""

    root_pid: int
    status: TerminationStatus
    graceful_pids: List[int] = field(default_factory=list)
    forced_pids: List[int] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)

    @property
    def terminated_pids(self) -> List[int]:
        return sorted(set(self.graceful_pids) | set(self.forced_pids))

    @property
    def message(self) -> str:
        if self.status is TerminationStatus.ALREADY_TERMINATED:
            return f"Process {self.root_pid} already terminated"
        summary = f"Process tree {self.root_pid} terminated ({len(self.terminated_pids)} processes"
        if self.forced_pids:
            summary += f", {len(self.forced_pids)} force killed"
        return summary + ")"


__all__ = [
    "DescendantQuery",
    "LaunchResult",
    "LaunchSpec",
    "LogLine",
    "ProcessRecord",
    "SpawnedProcess",
    "StreamTag",
    "TerminationOutcome",
    "TerminationStatus",
]
