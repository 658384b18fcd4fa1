"""
Whole-tree termination with graceful-then-forceful escalation.

1. Graceful: native tree termination where the OS has it, otherwise the
   tree's transitive closure is computed and each member asked to terminate.
2. Escalate: the closure is recomputed from a fresh snapshot and surviving
   members are force killed, deepest descendants first.
3. Classify: access-denied failures carry an actionable hint; members that
   exited on their own meanwhile are not failures.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Dict, List, Optional

from .config.settings import FORCE_KILL_TIMEOUT_SECONDS, GRACEFUL_SHUTDOWN_TIMEOUT_SECONDS
from .exceptions import TerminationFailedError, TerminationPermissionError
from .process_models import TerminationOutcome, TerminationStatus
from .process_table import ProcessSnapshot, ProcessTable, PsutilProcessTable
from .spawn_coordinator_helpers import PlatformCapabilities
from .tree_terminator_helpers import (
    ExitWaiter,
    ProcessSignaller,
    PsutilSignaller,
    SignalResult,
    SignalStatus,
    leaves_first,
    merge_closures,
    tree_closure,
)

logger = logging.getLogger(__name__)


class TreeTerminator:
    """Terminates a root PID together with all of its live descendants."""

    def __init__(
        self,
        process_table: Optional[ProcessTable] = None,
        *,
        signaller: Optional[ProcessSignaller] = None,
        capabilities: Optional[PlatformCapabilities] = None,
        graceful_timeout: float = GRACEFUL_SHUTDOWN_TIMEOUT_SECONDS,
        force_timeout: float = FORCE_KILL_TIMEOUT_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._table = process_table if process_table is not None else PsutilProcessTable()
        self.capabilities = capabilities if capabilities is not None else PlatformCapabilities.detect()
        self._signaller = signaller if signaller is not None else PsutilSignaller(self.capabilities)
        self.graceful_timeout = graceful_timeout
        self.force_timeout = force_timeout
        self._waiter = ExitWaiter(self._table, sleep=sleep, clock=clock)

    async def terminate(self, root_pid: int) -> TerminationOutcome:
        """
        Terminate the tree rooted at ``root_pid``.

        Returns:
            TerminationOutcome; ``ALREADY_TERMINATED`` when the root was not
            alive, in which case no signal is sent

        Raises:
            TerminationPermissionError: Nothing could be terminated and access was denied
            TerminationFailedError: Nothing could be terminated for any other reason
        """
        snapshot = ProcessSnapshot.take(self._table)
        if root_pid not in snapshot:
            logger.debug("PID %s already terminated", root_pid)
            return TerminationOutcome(root_pid=root_pid, status=TerminationStatus.ALREADY_TERMINATED)

        members = tree_closure(snapshot, root_pid)
        outcome = TerminationOutcome(root_pid=root_pid, status=TerminationStatus.TERMINATED)
        results: List[SignalResult] = []

        results.extend(await self._request_graceful(root_pid, members))
        survivors = await self._waiter.wait(members, self.graceful_timeout)
        outcome.graceful_pids = sorted(pid for pid in members if pid not in survivors)

        if survivors:
            logger.warning(
                "Process tree %s: %d of %d members survived graceful termination; force killing",
                root_pid,
                len(survivors),
                len(members),
            )
            escalation = self._escalation_targets(members, survivors)
            # Members that exited between the grace wait and the fresh snapshot.
            outcome.graceful_pids = sorted(set(outcome.graceful_pids) | {pid for pid in survivors if pid not in escalation})
            forced_results = [self._signaller.kill(pid) for pid in leaves_first(escalation)]
            results.extend(forced_results)
            remaining = await self._waiter.wait(escalation, self.force_timeout)
            outcome.forced_pids = sorted(pid for pid in escalation if pid not in remaining and pid not in outcome.graceful_pids)
            survivors = remaining

        outcome.failures = [self._describe(result) for result in results if result.status in (SignalStatus.DENIED, SignalStatus.FAILED)]
        return self._classify(outcome, results, survivors)

    async def _request_graceful(self, root_pid: int, members: Dict[int, int]) -> List[SignalResult]:
        if self.capabilities.supports_native_tree_kill:
            result = await self._signaller.terminate_tree_native(root_pid)
            if result.status in (SignalStatus.SENT, SignalStatus.GONE):
                return [result]
            logger.debug("Native tree termination of %s failed: %s", root_pid, result.detail)
        return [self._signaller.terminate(pid) for pid in leaves_first(members)]

    def _escalation_targets(self, members: Dict[int, int], survivors: set) -> Dict[int, int]:
        snapshot = ProcessSnapshot.take(self._table)
        roots = {pid: members[pid] for pid in survivors if pid in snapshot}
        return merge_closures(snapshot, roots)

    @staticmethod
    def _describe(result: SignalResult) -> str:
        detail = f": {result.detail}" if result.detail else ""
        return f"PID {result.pid} {result.status.value}{detail}"

    def _classify(self, outcome: TerminationOutcome, results: List[SignalResult], survivors: set) -> TerminationOutcome:
        if outcome.terminated_pids:
            if survivors:
                logger.warning(
                    "Process tree %s partially terminated; still running: %s",
                    outcome.root_pid,
                    sorted(survivors),
                )
            logger.info(outcome.message)
            return outcome

        if any(result.status is SignalStatus.DENIED for result in results):
            raise TerminationPermissionError.for_pid(outcome.root_pid)
        detail = "; ".join(outcome.failures) or "process tree still running after force kill"
        raise TerminationFailedError.for_pid(outcome.root_pid, detail)


__all__ = ["TreeTerminator"]
