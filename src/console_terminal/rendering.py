"""Incremental renderer that reveals markup tokens into an output sink."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Iterable

from console_terminal.adapters import OutputSink
from console_terminal.markup import LINE_BREAK_TAG, Token, TokenKind


class ScrollThrottle:
    """Coalesces scroll requests to at most one per ``interval`` seconds."""

    def __init__(self, sink: OutputSink, interval: float, clock: Callable[[], float]) -> None:
        self._sink = sink
        self._interval = interval
        self._clock = clock
        self._last: float | None = None

    def request(self) -> None:
        now = self._clock()
        if self._last is None or now - self._last >= self._interval:
            self.force(now)

    def force(self, now: float | None = None) -> None:
        self._sink.scroll_to_end()
        self._last = self._clock() if now is None else now


class IncrementalRenderer:
    """Reveals text one character at a time, tracking a one-level tag scope.

    The insertion target starts at the line container passed as ``root``. An
    opening tag moves it into a new child node; a closing tag or line break
    moves it back to ``root``. Deeper nesting is flattened.
    """

    def __init__(
        self,
        *,
        char_delay_seconds: float = 0.01,
        token_delay_seconds: float = 0.0,
        scroll_interval_seconds: float = 0.05,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        logger: logging.Logger | None = None,
    ) -> None:
        self._char_delay_seconds = char_delay_seconds
        self._token_delay_seconds = token_delay_seconds
        self._scroll_interval_seconds = scroll_interval_seconds
        self._clock = clock
        self._sleep = sleep
        self._logger = logger or logging.getLogger("console_terminal.rendering")

    async def render(
        self,
        tokens: Iterable[Token],
        sink: OutputSink,
        root: Any,
        on_done: Callable[[], None] | None = None,
        *,
        instant: bool = False,
    ) -> None:
        """Render ``tokens`` under ``root`` and call ``on_done`` when finished."""
        throttle = ScrollThrottle(sink, self._scroll_interval_seconds, self._clock)
        target = root
        revealed = 0

        for index, token in enumerate(tokens):
            if index:
                await self._sleep(self._token_delay_seconds)

            if token.kind == TokenKind.TAG_OPEN:
                target = sink.append_child(target, token.tag or "span", token.style_class)
            elif token.kind == TokenKind.TAG_CLOSE:
                target = root
            elif token.kind == TokenKind.LINE_BREAK:
                sink.append_child(root, LINE_BREAK_TAG, None)
                target = root
            elif token.kind == TokenKind.SELF_CLOSING:
                sink.append_child(target, token.tag or "", None)
            elif instant:
                sink.append_text(target, token.text)
                throttle.force()
                revealed += len(token.text)
            else:
                revealed += await self._reveal(token.text, sink, target, throttle)

        self._logger.debug("render_finished", extra={"characters": revealed})
        if on_done is not None:
            on_done()

    async def _reveal(self, text: str, sink: OutputSink, target: Any, throttle: ScrollThrottle) -> int:
        for position, char in enumerate(text):
            if position:
                await self._sleep(self._char_delay_seconds)
            sink.append_text(target, char)
            throttle.request()
        throttle.force()
        return len(text)
