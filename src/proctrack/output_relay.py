"""
Relay child stdout/stderr into log sinks.

Each piped stream gets its own task that reads until EOF. Lines are handed to
a per-stream queue drained by a separate delivery coroutine, so a slow or
failing sink never stops the pipe from being drained; a full pipe would
block or kill the child.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, List, Mapping, Optional

from .log_sinks import LoggingSink, SinkLike, as_sink, is_async_sink
from .process_models import LogLine, StreamTag

logger = logging.getLogger(__name__)

_EOF = object()

_NEWLINE = b"\n"


async def read_line(reader: asyncio.StreamReader) -> Optional[bytes]:
    """Return the next line, ``b""`` at EOF, or ``None`` for a line over the reader limit.

    An over-long line is discarded through its newline even when it arrives
    across several chunks.
    """
    discarding = False
    while True:
        try:
            raw = await reader.readuntil(_NEWLINE)
        except asyncio.IncompleteReadError as exc:
            return b"" if discarding else exc.partial
        except asyncio.LimitOverrunError as exc:
            await reader.readexactly(exc.consumed)
            discarding = True
            continue
        return None if discarding else raw


def decode_line(raw: bytes, encoding: str = "utf-8") -> str:
    """Decode one raw line, dropping the trailing newline and any carriage return."""
    text = raw.decode(encoding, errors="replace")
    if text.endswith("\n"):
        text = text[:-1]
        if text.endswith("\r"):
            text = text[:-1]
    return text


class OutputRelay:
    """Starts background relays for a spawned process."""

    def __init__(self, sink: Optional[SinkLike] = None, *, encoding: str = "utf-8"):
        self._sink = as_sink(sink) if sink is not None else LoggingSink()
        self._sink_is_async = is_async_sink(self._sink)
        self.encoding = encoding

    def attach(
        self,
        process: asyncio.subprocess.Process,
        context: Optional[Mapping[str, Any]] = None,
    ) -> List["asyncio.Task[None]"]:
        """Start one relay task per piped stream of ``process``."""
        context = dict(context or {})
        tasks: List["asyncio.Task[None]"] = []
        for reader, tag in ((process.stdout, StreamTag.STDOUT), (process.stderr, StreamTag.STDERR)):
            if reader is None:
                continue
            tasks.append(
                asyncio.create_task(
                    self.relay_stream(reader, tag, context=context, pid=process.pid),
                    name=f"relay-{process.pid}-{tag.value}",
                )
            )
        return tasks

    async def relay_stream(
        self,
        reader: asyncio.StreamReader,
        tag: StreamTag,
        *,
        context: Optional[Mapping[str, Any]] = None,
        pid: Optional[int] = None,
    ) -> None:
        """Read ``reader`` to EOF, emitting one ``LogLine`` per line."""
        context = dict(context or {})
        queue: "asyncio.Queue[Any]" = asyncio.Queue()
        delivery = asyncio.create_task(self._deliver(queue))
        count = 0
        try:
            while True:
                try:
                    raw = await read_line(reader)
                except (ConnectionError, OSError) as exc:  # policy_guard: allow-silent-handler
                    logger.debug("%s relay for PID %s stopped: %s", tag.value, pid, exc)
                    break
                if raw is None:
                    logger.debug("Dropped over-long %s line from PID %s", tag.value, pid)
                    continue
                if not raw:
                    break
                count += 1
                queue.put_nowait(LogLine(stream=tag, text=decode_line(raw, self.encoding), context=context, pid=pid))
        finally:
            queue.put_nowait(_EOF)
            await delivery
        logger.debug("%s relay for PID %s reached EOF after %d lines", tag.value, pid, count)

    async def _deliver(self, queue: "asyncio.Queue[Any]") -> None:
        while True:
            item = await queue.get()
            if item is _EOF:
                return
            await self._emit(item)

    async def _emit(self, line: LogLine) -> None:
        try:
            if self._sink_is_async:
                result = self._sink.emit(line)
            else:
                # Blocking sinks run on a worker thread so readers keep draining.
                result = await asyncio.to_thread(self._sink.emit, line)
            if inspect.isawaitable(result):
                await result
        except Exception as exc:  # Sink failures never reach the child  # policy_guard: allow-silent-handler
            logger.debug("Log sink failed for PID %s: %s", line.pid, exc)


__all__ = ["OutputRelay", "decode_line", "read_line"]
