"""
High-level process supervision API.

Usage:
    from proctrack import LaunchSpec, ProcessSupervisor

    supervisor = ProcessSupervisor.from_settings(SupervisorSettings.from_env())
    result = await supervisor.launch(
        LaunchSpec(command="npm", args=["run", "dev"], detached=True, track=True),
        context={"action_id": 7, "run_id": 1712},
    )
    ...
    await supervisor.terminate(result.pid)
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from .config.settings import SupervisorSettings
from .descendant_resolver import DescendantResolver
from .descendant_resolver_helpers import expected_name_for
from .liveness import LivenessChecker
from .log_sinks import SinkLike
from .output_relay import OutputRelay
from .process_models import DescendantQuery, LaunchResult, LaunchSpec, TerminationOutcome
from .process_table import ProcessTable, PsutilProcessTable
from .spawn_coordinator import SpawnCoordinator
from .spawn_coordinator_helpers import PlatformCapabilities
from .tree_terminator import TreeTerminator

logger = logging.getLogger(__name__)


class ProcessSupervisor:
    """Spawns, tracks, checks and terminates child processes for an orchestrator."""

    def __init__(
        self,
        *,
        settings: Optional[SupervisorSettings] = None,
        coordinator: Optional[SpawnCoordinator] = None,
        resolver: Optional[DescendantResolver] = None,
        liveness: Optional[LivenessChecker] = None,
        terminator: Optional[TreeTerminator] = None,
        process_table: Optional[ProcessTable] = None,
    ):
        self.settings = settings if settings is not None else SupervisorSettings()
        table = process_table if process_table is not None else PsutilProcessTable()
        self.coordinator = coordinator if coordinator is not None else SpawnCoordinator()
        self.resolver = (
            resolver
            if resolver is not None
            else DescendantResolver(table, poll_interval_ms=self.settings.resolve_poll_interval_ms)
        )
        self.liveness = liveness if liveness is not None else LivenessChecker(table)
        self.terminator = (
            terminator
            if terminator is not None
            else TreeTerminator(
                table,
                capabilities=self.coordinator.capabilities,
                graceful_timeout=self.settings.graceful_timeout_seconds,
                force_timeout=self.settings.force_timeout_seconds,
            )
        )

    @classmethod
    def from_settings(
        cls,
        settings: SupervisorSettings,
        *,
        sink: Optional[SinkLike] = None,
        capabilities: Optional[PlatformCapabilities] = None,
    ) -> "ProcessSupervisor":
        coordinator = SpawnCoordinator(OutputRelay(sink), capabilities=capabilities)
        return cls(settings=settings, coordinator=coordinator)

    async def launch(self, spec: LaunchSpec, context: Optional[Mapping[str, Any]] = None) -> LaunchResult:
        """
        Spawn ``spec``, relay its output, and resolve the real worker when tracking.

        An unresolved tracked launch falls back to the initial PID; it is not
        an error.

        Raises:
            SpawnError: The process could not be started
        """
        spawned = await self.coordinator.spawn(spec, context)
        if not spec.track:
            return LaunchResult(initial_pid=spawned.pid, pid=spawned.pid, resolved=False, spawned=spawned)

        resolved_pid = await self.resolver.resolve(self.query_for(spec, spawned.pid))
        if resolved_pid is None:
            logger.info("Could not resolve worker below PID %s; tracking the launched process", spawned.pid)
            return LaunchResult(initial_pid=spawned.pid, pid=spawned.pid, resolved=False, spawned=spawned)

        logger.info("Tracking PID %s for launched PID %s (%s)", resolved_pid, spawned.pid, spec.command)
        return LaunchResult(initial_pid=spawned.pid, pid=resolved_pid, resolved=True, spawned=spawned)

    async def launch_hidden(self, spec: LaunchSpec) -> int:
        return await self.coordinator.spawn_hidden(spec)

    def query_for(self, spec: LaunchSpec, parent_pid: int) -> DescendantQuery:
        expected = spec.expected_name or expected_name_for(spec.command, spec.args)
        excludes = spec.exclude_names if spec.exclude_names is not None else self.settings.wrapper_excludes
        return DescendantQuery(
            parent_pid=parent_pid,
            expected_name=expected,
            exclude_names=tuple(excludes),
            max_wait_ms=self.settings.resolve_max_wait_ms,
        )

    async def resolve(self, query: DescendantQuery) -> Optional[int]:
        return await self.resolver.resolve(query)

    def is_alive(self, pid: int) -> bool:
        return self.liveness.is_alive(pid)

    async def terminate(self, pid: int) -> TerminationOutcome:
        return await self.terminator.terminate(pid)


__all__ = ["ProcessSupervisor"]
