"""Create child processes from a ``LaunchSpec``."""

from __future__ import annotations

import asyncio
import logging
import os
import shlex
from typing import Any, Dict, Mapping, Optional

from .output_relay import OutputRelay
from .process_models import LaunchSpec, SpawnedProcess
from .spawn_coordinator_helpers import PlatformCapabilities, creation_kwargs, map_spawn_error

logger = logging.getLogger(__name__)

# Large enough that ordinary long log lines stay under the StreamReader limit.
STREAM_LIMIT_BYTES = 1024 * 1024


class SpawnCoordinator:
    """
    Starts child processes with the platform flags a ``LaunchSpec`` asks for.

    The returned PID is whatever the OS assigned to the executed command; for
    wrapper commands that is the wrapper, not the eventual worker. Failures are
    raised as ``SpawnError`` subclasses and never retried here.
    """

    def __init__(
        self,
        relay: Optional[OutputRelay] = None,
        *,
        capabilities: Optional[PlatformCapabilities] = None,
        base_env: Optional[Mapping[str, str]] = None,
    ):
        self.relay = relay if relay is not None else OutputRelay()
        self.capabilities = capabilities if capabilities is not None else PlatformCapabilities.detect()
        self.base_env = dict(base_env) if base_env is not None else None

    async def spawn(self, spec: LaunchSpec, context: Optional[Mapping[str, Any]] = None) -> SpawnedProcess:
        """Start ``spec`` with piped stdout/stderr and begin relaying its output.

        Raises:
            ExecutableNotFoundError: The executable does not exist
            SpawnPermissionError: The OS refused to execute it
            OsSpawnFailureError: Any other OS-level failure
        """
        kwargs = creation_kwargs(self.capabilities, hidden=spec.hidden, detached=spec.detached)
        if spec.detached:
            kwargs["stdin"] = asyncio.subprocess.DEVNULL
        process = await self._create(
            spec,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            limit=STREAM_LIMIT_BYTES,
            **kwargs,
        )
        logger.debug(
            "Spawned PID %s (detached=%s hidden=%s track=%s)",
            process.pid,
            spec.detached,
            spec.hidden,
            spec.track,
        )
        tasks = self.relay.attach(process, context)
        return SpawnedProcess(pid=process.pid, process=process, relay_tasks=tasks)

    async def spawn_hidden(self, spec: LaunchSpec) -> int:
        """Fire-and-forget launch: no window, all three standard streams nulled."""
        kwargs = creation_kwargs(self.capabilities, hidden=True, detached=spec.detached)
        process = await self._create(
            spec,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
            **kwargs,
        )
        logger.debug("Spawned hidden PID %s", process.pid)
        return process.pid

    async def _create(self, spec: LaunchSpec, **kwargs: Any) -> asyncio.subprocess.Process:
        logger.debug("Launching %s", shlex.join(spec.argv))
        try:
            return await asyncio.create_subprocess_exec(
                *spec.argv,
                cwd=spec.working_directory,
                env=self._build_env(spec.env),
                **kwargs,
            )
        except OSError as exc:
            error = map_spawn_error(exc, spec.command, spec.working_directory)
            logger.debug("Spawn of %s failed: %s", spec.command, error)
            raise error from exc

    def _build_env(self, overrides: Optional[Mapping[str, str]]) -> Optional[Dict[str, str]]:
        if overrides is None and self.base_env is None:
            return None
        env: Dict[str, str] = dict(self.base_env if self.base_env is not None else os.environ)
        if overrides:
            env.update({key: str(value) for key, value in overrides.items()})
        return env


__all__ = ["STREAM_LIMIT_BYTES", "SpawnCoordinator"]
