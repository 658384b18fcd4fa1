"""Translate OS spawn failures into the ``SpawnError`` family."""

from __future__ import annotations

from typing import Optional

from ..exceptions import (
    ExecutableNotFoundError,
    OsSpawnFailureError,
    SpawnError,
    SpawnPermissionError,
)


def map_spawn_error(exc: OSError, command: str, working_directory: Optional[str] = None) -> SpawnError:
    """Classify ``exc`` raised while starting ``command``.

    A missing working directory also surfaces as ``FileNotFoundError``; it is
    reported as an OS failure rather than a missing executable.
    """
    if working_directory is not None and exc.filename is not None and str(exc.filename) == str(working_directory):
        return OsSpawnFailureError.for_command(command, f"working directory not usable: {working_directory}")
    if isinstance(exc, FileNotFoundError):
        return ExecutableNotFoundError.for_command(command)
    if isinstance(exc, PermissionError):
        return SpawnPermissionError.for_command(command)
    detail = exc.strerror or str(exc) or exc.__class__.__name__
    return OsSpawnFailureError.for_command(command, detail)


__all__ = ["map_spawn_error"]
