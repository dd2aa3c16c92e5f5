"""Engine wiring session, world, history and output into one object."""

from __future__ import annotations

import logging

from console_terminal.adapters import OutputSink
from console_terminal.commands import CommandDispatcher
from console_terminal.config import Settings
from console_terminal.history import CommandHistory
from console_terminal.output_queue import OutputQueue, StyleClass
from console_terminal.rendering import IncrementalRenderer
from console_terminal.session import SessionManager
from console_terminal.world import LocationGraph, WorldStateMachine, default_location_graph, load_location_graph


class ConsoleEngine:
    """Owns all mutable state of one console session; no state lives in globals."""

    def __init__(
        self,
        sink: OutputSink,
        *,
        config: Settings | None = None,
        graph: LocationGraph | None = None,
        renderer: IncrementalRenderer | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config or Settings()
        self._logger = logger or logging.getLogger("console_terminal.engine")

        self.session = SessionManager()
        self.world = WorldStateMachine(
            graph or self._load_graph(),
            self.session,
            start_location=self.config.start_location,
            entry_room=self.config.entry_room,
        )
        self.history = CommandHistory()
        self.queue = OutputQueue(
            sink,
            renderer
            or IncrementalRenderer(
                char_delay_seconds=self.config.char_delay_seconds,
                token_delay_seconds=self.config.token_delay_seconds,
                scroll_interval_seconds=self.config.scroll_interval_seconds,
            ),
            settle_delay_seconds=self.config.settle_delay_seconds,
            animate=self.config.animate,
        )
        self.dispatcher = CommandDispatcher(
            session=self.session,
            world=self.world,
            queue=self.queue,
            history=self.history,
            host_name=self.config.host_name,
        )
        self._logger.debug("engine_ready", extra={"entry_room": self.config.entry_room})

    @property
    def prompt(self) -> str:
        return self.dispatcher.prompt()

    def greet(self) -> None:
        self.queue.enqueue('Type <span class="command">help</span> for a list of commands.', StyleClass.SYSTEM)
        self.queue.enqueue(
            'To get started type <span class="command">register user_name</span>',
            StyleClass.SYSTEM,
        )

    def submit(self, raw_input: str) -> None:
        self.dispatcher.dispatch(raw_input)

    def grant_item(self, item: str) -> None:
        self.world.add_item(item)
        self.queue.enqueue(f'Received item: <span class="command">{item}</span>', StyleClass.SUCCESS)

    async def drain(self) -> None:
        await self.queue.join()

    def _load_graph(self) -> LocationGraph:
        if self.config.world_file:
            return load_location_graph(self.config.world_file)
        return default_location_graph()
