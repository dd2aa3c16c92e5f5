"""FIFO queue that serializes rendering of output messages."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum

from console_terminal.adapters import OutputSink
from console_terminal.markup import tokenize
from console_terminal.rendering import IncrementalRenderer


class StyleClass(str, Enum):
    """Style applied to a whole output line."""

    SYSTEM = "system"
    ERROR = "error"
    SUCCESS = "success"
    GAME = "game"
    PLAIN = "plain"


@dataclass(frozen=True, slots=True)
class OutputEntry:
    """A message waiting to be rendered."""

    markup: str
    style: StyleClass = StyleClass.PLAIN
    animate: bool | None = None


class OutputQueue:
    """Queue-backed drain loop; at most one render is in flight at a time.

    ``enqueue`` never blocks. Entries queued while no event loop is running
    stay pending until the next ``join``.
    """

    def __init__(
        self,
        sink: OutputSink,
        renderer: IncrementalRenderer | None = None,
        *,
        settle_delay_seconds: float = 0.05,
        animate: bool = True,
        logger: logging.Logger | None = None,
    ) -> None:
        self._sink = sink
        self._renderer = renderer or IncrementalRenderer()
        self._settle_delay_seconds = settle_delay_seconds
        self._animate = animate
        self._logger = logger or logging.getLogger("console_terminal.output_queue")

        self._entries: deque[OutputEntry] = deque()
        self._in_flight = False
        self._drain_task: asyncio.Task[None] | None = None
        self._failure: Exception | None = None
        self._rendered_count = 0

    @property
    def sink(self) -> OutputSink:
        return self._sink

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def pending(self) -> list[OutputEntry]:
        return list(self._entries)

    @property
    def rendered_count(self) -> int:
        return self._rendered_count

    def enqueue(
        self,
        markup: str,
        style: StyleClass = StyleClass.PLAIN,
        *,
        animate: bool | None = None,
    ) -> None:
        """Append a message and start draining if the queue is idle.

        ``animate=False`` reveals the message in one step; ``None`` uses the
        queue default.
        """
        resolved = self._animate if animate is None else animate
        self._entries.append(OutputEntry(markup=markup, style=style, animate=resolved))
        self._logger.debug(
            "output_enqueued",
            extra={"style": style.value, "queue_size": len(self._entries), "in_flight": self._in_flight},
        )
        self._start_drain()

    def clear(self) -> int:
        """Drop pending entries and wipe the sink; returns how many were dropped."""
        dropped = len(self._entries)
        self._entries.clear()
        self._sink.clear()
        self._logger.info("output_cleared", extra={"dropped": dropped})
        return dropped

    async def join(self) -> None:
        """Wait until every queued entry has been rendered.

        A failed drain is re-raised here. The entries it did not reach stay
        pending and resume draining once the error has been raised.
        """
        self._start_drain()
        while self._in_flight:
            task = self._drain_task
            if task is None:
                break
            await task
        if self._failure is not None:
            failure, self._failure = self._failure, None
            raise failure

    def _start_drain(self) -> None:
        if self._in_flight or self._failure is not None or not self._entries:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return

        self._in_flight = True
        self._drain_task = loop.create_task(self._drain(), name="output-queue-drain")

    async def _drain(self) -> None:
        try:
            while self._entries:
                entry = self._entries.popleft()
                line = self._sink.append_child(self._sink.root, "line", entry.style.value)
                await self._renderer.render(
                    tokenize(entry.markup),
                    self._sink,
                    line,
                    on_done=self._mark_rendered,
                    instant=not entry.animate,
                )
                await asyncio.sleep(self._settle_delay_seconds)
        except Exception as exc:
            self._logger.exception("output_drain_failed", extra={"queue_size": len(self._entries)})
            self._failure = exc
        finally:
            self._in_flight = False
            self._drain_task = None

    def _mark_rendered(self) -> None:
        self._rendered_count += 1
