"""Spawn, track, check and terminate child processes on behalf of an orchestrator."""

import logging

from .config import ConfigurationError, SupervisorSettings
from .descendant_resolver import DescendantResolver
from .exceptions import (
    ExecutableNotFoundError,
    OsSpawnFailureError,
    ProcessSupervisionError,
    SpawnError,
    SpawnPermissionError,
    TerminationError,
    TerminationFailedError,
    TerminationPermissionError,
)
from .liveness import LivenessChecker
from .log_sinks import CollectingSink, JsonLinesSink, LoggingSink, LogSink
from .logging_config import setup_logging
from .output_relay import OutputRelay
from .process_models import (
    DescendantQuery,
    LaunchResult,
    LaunchSpec,
    LogLine,
    ProcessRecord,
    SpawnedProcess,
    StreamTag,
    TerminationOutcome,
    TerminationStatus,
)
from .process_table import ProcessSnapshot, ProcessTable, PsutilProcessTable
from .spawn_coordinator import SpawnCoordinator
from .supervisor import ProcessSupervisor
from .tree_terminator import TreeTerminator

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "CollectingSink",
    "ConfigurationError",
    "DescendantQuery",
    "DescendantResolver",
    "ExecutableNotFoundError",
    "JsonLinesSink",
    "LaunchResult",
    "LaunchSpec",
    "LivenessChecker",
    "LogLine",
    "LogSink",
    "LoggingSink",
    "OsSpawnFailureError",
    "OutputRelay",
    "ProcessRecord",
    "ProcessSnapshot",
    "ProcessSupervisionError",
    "ProcessSupervisor",
    "ProcessTable",
    "PsutilProcessTable",
    "SpawnCoordinator",
    "SpawnError",
    "SpawnPermissionError",
    "SpawnedProcess",
    "StreamTag",
    "SupervisorSettings",
    "TerminationError",
    "TerminationFailedError",
    "TerminationOutcome",
    "TerminationPermissionError",
    "TerminationStatus",
    "TreeTerminator",
    "setup_logging",
]
