"""Helper modules for whole-tree termination."""

from .closure import leaves_first, merge_closures, still_alive, tree_closure
from .exit_waiter import ExitWaiter
from .signaller import ProcessSignaller, PsutilSignaller, SignalResult, SignalStatus

__all__ = [
    "ExitWaiter",
    "ProcessSignaller",
    "PsutilSignaller",
    "SignalResult",
    "SignalStatus",
    "leaves_first",
    "merge_closures",
    "still_alive",
    "tree_closure",
]
