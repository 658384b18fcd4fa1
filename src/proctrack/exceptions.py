"""Exception classes for process supervision.

All supervision errors inherit from ``ProcessSupervisionError`` so callers can
catch the whole family. Like the configuration errors, every class supports:
1. No-argument raise: raise SpawnError()
2. Contextual attributes: err = SpawnError("boom", command="npm"); err.command
"""

from typing import Any, Optional


class ApplicationError(Exception):
    """Base exception for all application errors.

    Supports keyword arguments that are stored as attributes for debugging.
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = self.__class__.__doc__ or "Application error occurred"
        super().__init__(message)
        for key, value in kwargs.items():
            setattr(self, key, value)


class ProcessSupervisionError(ApplicationError):
    """Process supervision failed."""


class SpawnError(ProcessSupervisionError):
    """Child process could not be started."""

    command: Optional[str] = None


class ExecutableNotFoundError(SpawnError):
    """Executable could not be found."""

    @classmethod
    def for_command(cls, command: str) -> "ExecutableNotFoundError":
        return cls(f"Executable not found: {command}", command=command)


class SpawnPermissionError(SpawnError):
    """Permission denied while starting the child process."""

    @classmethod
    def for_command(cls, command: str) -> "SpawnPermissionError":
        return cls(f"Permission denied launching {command}", command=command)


class OsSpawnFailureError(SpawnError):
    """Operating system refused to start the child process."""

    detail: str = ""

    @classmethod
    def for_command(cls, command: str, detail: str) -> "OsSpawnFailureError":
        return cls(f"Failed to spawn {command}: {detail}", command=command, detail=detail)


class TerminationError(ProcessSupervisionError):
    """Process tree could not be terminated."""

    pid: Optional[int] = None


PERMISSION_HINT = "Try running with elevated privileges or close the process from the application that owns it."


class TerminationPermissionError(TerminationError):
    """Permission denied while terminating the process tree."""

    hint: str = PERMISSION_HINT

    @classmethod
    def for_pid(cls, pid: int, hint: str = PERMISSION_HINT) -> "TerminationPermissionError":
        return cls(f"Permission denied terminating process {pid}. {hint}", pid=pid, hint=hint)


class TerminationFailedError(TerminationError):
    """Process tree survived termination."""

    detail: str = ""

    @classmethod
    def for_pid(cls, pid: int, detail: str) -> "TerminationFailedError":
        return cls(f"Failed to terminate process {pid}: {detail}", pid=pid, detail=detail)


__all__ = [
    "ApplicationError",
    "ExecutableNotFoundError",
    "OsSpawnFailureError",
    "PERMISSION_HINT",
    "ProcessSupervisionError",
    "SpawnError",
    "SpawnPermissionError",
    "TerminationError",
    "TerminationFailedError",
    "TerminationPermissionError",
]
