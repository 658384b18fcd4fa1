"""Destinations for relayed child output.

A sink is anything with ``emit(line)``; plain callables and coroutine
functions are wrapped with :func:`as_sink`. Sinks may be slow or fail: the
relay never lets either reach the child process.
"""

from __future__ import annotations

import inspect
import logging
import threading
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Optional, Protocol, Union, runtime_checkable

import orjson

from .process_models import LogLine, StreamTag

_LEVELS = {"info": logging.INFO, "error": logging.ERROR}

CHILD_LOGGER_NAME = "proctrack.child"


@runtime_checkable
class LogSink(Protocol):
    def emit(self, line: LogLine) -> Optional[Awaitable[None]]: ...


SinkLike = Union[LogSink, Callable[[LogLine], Any]]


class CallableSink:
    """Adapts a function (sync or async) to the ``LogSink`` protocol."""

    def __init__(self, func: Callable[[LogLine], Any]):
        self.func = func

    def emit(self, line: LogLine) -> Optional[Awaitable[None]]:
        return self.func(line)


def as_sink(candidate: SinkLike) -> LogSink:
    if isinstance(candidate, LogSink):
        return candidate
    if callable(candidate):
        return CallableSink(candidate)
    raise TypeError(f"Expected a LogSink or callable, got {type(candidate).__name__}")


def is_async_sink(sink: LogSink) -> bool:
    """True when the sink's emit is a coroutine function and must run on the event loop."""
    target = sink.func if isinstance(sink, CallableSink) else sink.emit
    return inspect.iscoroutinefunction(target)


class LoggingSink:
    """Routes child output into the stdlib logging tree.

    stdout lines log at INFO and stderr lines at ERROR. Nothing reaches a
    terminal unless the application configures handlers for the logger.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger if logger is not None else logging.getLogger(CHILD_LOGGER_NAME)

    def emit(self, line: LogLine) -> None:
        self._logger.log(
            _LEVELS.get(line.level, logging.INFO),
            "[%s %s] %s",
            line.pid,
            line.stream.value,
            line.text,
            extra={"child_stream": line.stream.value, "child_context": dict(line.context)},
        )


class JsonLinesSink:
    """Appends each line as one JSON object per row."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.path.open("ab")
        self._lock = threading.Lock()

    def emit(self, line: LogLine) -> None:
        payload = orjson.dumps(line.to_dict(), default=str) + b"\n"
        with self._lock:
            self._handle.write(payload)
            self._handle.flush()

    def close(self) -> None:
        with self._lock:
            if not self._handle.closed:
                self._handle.close()

    def __enter__(self) -> "JsonLinesSink":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class CollectingSink:
    """Keeps every line in memory, mostly useful for callers that want a transcript."""

    def __init__(self) -> None:
        self.lines: List[LogLine] = []

    def emit(self, line: LogLine) -> None:
        self.lines.append(line)

    def texts(self, stream: Optional[StreamTag] = None) -> List[str]:
        return [line.text for line in self.lines if stream is None or line.stream is stream]


__all__ = [
    "CHILD_LOGGER_NAME",
    "CallableSink",
    "CollectingSink",
    "JsonLinesSink",
    "LogSink",
    "LoggingSink",
    "SinkLike",
    "as_sink",
    "is_async_sink",
]
