"""
Live process-table snapshots.

Every higher-level component (resolver, liveness checker, tree terminator)
reads the OS process table only through the ``ProcessTable`` protocol, so a
fake table can stand in for the OS in tests. Snapshots are never cached:
each call walks the table again.
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict
from typing import Dict, Iterable, Iterator, List, Optional, Protocol, runtime_checkable

import psutil

from .process_models import ProcessRecord

logger = logging.getLogger(__name__)

_SNAPSHOT_ATTRS = ["pid", "ppid", "name", "create_time", "status"]


@runtime_checkable
class ProcessTable(Protocol):
    """Minimal contract for reading the live process table."""

    def enumerate_live_processes(self) -> List[ProcessRecord]: ...


class PsutilProcessTable:
    """``ProcessTable`` backed by ``psutil.process_iter``.

    Zombie entries (exited but not yet reaped) are left out: they hold a PID
    but no longer run anything.
    """

    def enumerate_live_processes(self) -> List[ProcessRecord]:
        start_time = time.monotonic()
        records: List[ProcessRecord] = []

        try:
            for proc in psutil.process_iter(_SNAPSHOT_ATTRS):
                record = self._to_record(proc.info)
                if record is not None:
                    records.append(record)
        except (  # policy_guard: allow-silent-handler
            psutil.Error,
            OSError,
        ):
            logger.exception("Error reading process table")
            return []

        logger.debug(
            "Process table snapshot took %.3fs (%d processes)",
            time.monotonic() - start_time,
            len(records),
        )
        return records

    @staticmethod
    def _to_record(info: Dict[str, object]) -> Optional[ProcessRecord]:
        pid = info.get("pid")
        if not isinstance(pid, int):
            return None
        if info.get("status") == psutil.STATUS_ZOMBIE:
            return None
        ppid = info.get("ppid")
        name = info.get("name")
        create_time = info.get("create_time")
        return ProcessRecord(
            pid=pid,
            parent_pid=ppid if isinstance(ppid, int) else None,
            name=str(name) if name else "",
            start_time=float(create_time) if isinstance(create_time, (int, float)) else 0.0,
        )


class ProcessSnapshot:
    """Indexed view over one snapshot: lookup by PID and by parent PID."""

    def __init__(self, records: Iterable[ProcessRecord]):
        self._by_pid: Dict[int, ProcessRecord] = {}
        self._children: Dict[int, List[ProcessRecord]] = defaultdict(list)
        for record in records:
            self._by_pid[record.pid] = record
        for record in self._by_pid.values():
            if record.parent_pid is not None and record.parent_pid != record.pid:
                self._children[record.parent_pid].append(record)
        for siblings in self._children.values():
            siblings.sort(key=lambda rec: (rec.start_time, rec.pid))

    @classmethod
    def take(cls, table: ProcessTable) -> "ProcessSnapshot":
        return cls(table.enumerate_live_processes())

    def __contains__(self, pid: object) -> bool:
        return pid in self._by_pid

    def __iter__(self) -> Iterator[ProcessRecord]:
        return iter(self._by_pid.values())

    def __len__(self) -> int:
        return len(self._by_pid)

    def get(self, pid: int) -> Optional[ProcessRecord]:
        return self._by_pid.get(pid)

    def children_of(self, pid: int) -> List[ProcessRecord]:
        return list(self._children.get(pid, ()))


__all__ = ["ProcessSnapshot", "ProcessTable", "PsutilProcessTable"]
