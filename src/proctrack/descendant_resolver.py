"""
Resolve the real worker process behind a wrapper PID.

A launched command is often a wrapper (shell, script runner, package-manager
shim) that forks or execs the long-running worker. Process creation is not
visible in the process table immediately, and multi-hop chains add latency,
so the resolver polls fresh snapshots until a candidate appears or the wait
budget runs out.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

from .config.settings import DEFAULT_RESOLVE_POLL_INTERVAL_MS
from .descendant_resolver_helpers import collect_descendants, normalize_expected_name, select_worker
from .process_models import DescendantQuery
from .process_table import ProcessSnapshot, ProcessTable, PsutilProcessTable

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class DescendantResolver:
    """Polls the process table for the worker spawned below ``query.parent_pid``."""

    def __init__(
        self,
        process_table: Optional[ProcessTable] = None,
        *,
        poll_interval_ms: int = DEFAULT_RESOLVE_POLL_INTERVAL_MS,
        sleep: SleepFunc = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        if poll_interval_ms <= 0:
            raise ValueError("poll_interval_ms must be positive")
        self._table = process_table if process_table is not None else PsutilProcessTable()
        self.poll_interval_ms = poll_interval_ms
        self._sleep = sleep
        self._clock = clock

    async def resolve(self, query: DescendantQuery) -> Optional[int]:
        """
        Return the PID of the worker below ``query.parent_pid``, or ``None``.

        At least one snapshot is always taken. After that the resolver keeps
        polling every ``poll_interval_ms`` until ``query.max_wait_ms`` has
        elapsed; ``None`` is only returned once the whole budget is spent.
        """
        expected = normalize_expected_name(query.expected_name)
        deadline = self._clock() + max(query.max_wait_ms, 0) / 1000.0
        attempt = 0

        while True:
            attempt += 1
            pid = self._attempt(query, expected)
            if pid is not None:
                logger.debug(
                    "Resolved PID %s below parent %s on attempt %d",
                    pid,
                    query.parent_pid,
                    attempt,
                )
                return pid

            remaining = deadline - self._clock()
            if remaining <= 0:
                break
            await self._sleep(min(self.poll_interval_ms / 1000.0, remaining))

        logger.debug(
            "No descendant found below parent %s after %d attempts (%sms budget)",
            query.parent_pid,
            attempt,
            query.max_wait_ms,
        )
        return None

    def _attempt(self, query: DescendantQuery, expected: Optional[str]) -> Optional[int]:
        snapshot = ProcessSnapshot.take(self._table)
        descendants = collect_descendants(snapshot, query.parent_pid, query.exclude_names)
        worker = select_worker(descendants, expected)
        return worker.pid if worker is not None else None
