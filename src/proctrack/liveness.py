"""
Liveness checks with a single responsibility: "is this PID running right now?"

A PID that is not in a fresh snapshot is reported as not alive; absence is an
ordinary answer, never an error.
"""

import logging
from typing import Optional

from .process_table import ProcessSnapshot, ProcessTable, PsutilProcessTable

logger = logging.getLogger(__name__)


class LivenessChecker:
    """Answers membership questions against a fresh process-table snapshot."""

    def __init__(self, process_table: Optional[ProcessTable] = None):
        self._table = process_table if process_table is not None else PsutilProcessTable()

    def is_alive(self, pid: int) -> bool:
        if pid <= 0:
            return False
        alive = pid in ProcessSnapshot.take(self._table)
        logger.debug("Liveness check for PID %s: %s", pid, alive)
        return alive
