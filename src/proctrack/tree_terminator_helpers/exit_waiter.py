"""Wait for a set of PIDs to leave the process table."""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable, Iterable, Set

from ..process_table import ProcessSnapshot, ProcessTable

SleepFunc = Callable[[float], Awaitable[None]]

EXIT_POLL_INTERVAL_SECONDS = 0.05


class ExitWaiter:
    """Polls fresh snapshots until every PID is gone or the timeout expires."""

    def __init__(
        self,
        process_table: ProcessTable,
        *,
        sleep: SleepFunc = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
        poll_interval: float = EXIT_POLL_INTERVAL_SECONDS,
    ):
        self._table = process_table
        self._sleep = sleep
        self._clock = clock
        self.poll_interval = poll_interval

    async def wait(self, pids: Iterable[int], timeout: float) -> Set[int]:
        """Return the PIDs still alive when waiting stopped."""
        pending = set(pids)
        deadline = self._clock() + max(timeout, 0.0)
        while pending:
            snapshot = ProcessSnapshot.take(self._table)
            pending = {pid for pid in pending if pid in snapshot}
            if not pending:
                break
            remaining = deadline - self._clock()
            if remaining <= 0:
                break
            await self._sleep(min(self.poll_interval, remaining))
        return pending


__all__ = ["EXIT_POLL_INTERVAL_SECONDS", "ExitWaiter"]
