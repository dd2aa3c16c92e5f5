"""Interactive and scripted input loops over the console engine."""

from __future__ import annotations

import asyncio
from typing import Callable, Iterable

from console_terminal.adapters import RichConsoleSink
from console_terminal.engine import ConsoleEngine

EXIT_WORDS = frozenset({"exit", "quit"})


class TerminalRepl:
    """Reads lines, submits them to the engine and waits for output to settle."""

    def __init__(
        self,
        engine: ConsoleEngine,
        sink: RichConsoleSink,
        *,
        read_line: Callable[[str], str] | None = None,
    ) -> None:
        self._engine = engine
        self._sink = sink
        self._read_line = read_line or sink.console.input

    async def run(self) -> int:
        """Run until EOF or an exit word; returns how many lines were submitted."""
        submitted = 0
        self._engine.greet()
        while True:
            await self._settle()
            try:
                line = await asyncio.to_thread(self._read_line, self._engine.prompt)
            except EOFError:
                break
            if line.strip().lower() in EXIT_WORDS:
                break
            self._engine.submit(line)
            submitted += 1

        await self._settle()
        return submitted

    async def run_script(self, lines: Iterable[str]) -> int:
        submitted = 0
        for line in lines:
            if not line.strip() or line.lstrip().startswith("#"):
                continue
            self._engine.submit(line)
            submitted += 1
            await self._settle()
        return submitted

    async def _settle(self) -> None:
        await self._engine.drain()
        self._sink.finish()
