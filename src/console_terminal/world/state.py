"""World state and the commands that mutate it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from console_terminal.errors import BlockedPathError, NotAuthenticatedError, NotStartedError
from console_terminal.session import SessionManager
from console_terminal.world.graph import Direction, LocationGraph

_NOT_STARTED = 'First start the game with <span class="command">start</span>'


@dataclass(slots=True)
class WorldState:
    location: str
    started: bool = False
    inventory: list[str] = field(default_factory=list)
    health: int = 100
    energy: int = 50
    level: int = 1

    def __post_init__(self) -> None:
        if not 0 <= self.health <= 100 or not 0 <= self.energy <= 100:
            raise ValueError("health and energy must be within 0..100")
        if self.level < 1:
            raise ValueError("level must be at least 1")


class WorldStateMachine:
    """Owns the world state; every mutation goes through a command method."""

    def __init__(
        self,
        graph: LocationGraph,
        session: SessionManager,
        *,
        start_location: str = "beginning",
        entry_room: str = "dark room",
        logger: logging.Logger | None = None,
    ) -> None:
        for location in (start_location, entry_room):
            if location not in graph:
                raise ValueError(f"Location {location!r} is not part of the location graph")

        self._graph = graph
        self._session = session
        self._entry_room = entry_room
        self._state = WorldState(location=start_location)
        self._logger = logger or logging.getLogger("console_terminal.world")

    @property
    def graph(self) -> LocationGraph:
        return self._graph

    @property
    def started(self) -> bool:
        return self._state.started

    @property
    def location(self) -> str:
        return self._state.location

    def start(self) -> WorldState:
        user = self._session.whoami()
        if user is None:
            raise NotAuthenticatedError(
                "Error: you must log in to start the game.",
                hint='Use <span class="command">register user_name</span> or '
                '<span class="command">login user_name</span>',
            )

        self._state.started = True
        self._state.location = self._entry_room
        self._logger.info("world_started", extra={"user": user.name, "location": self._entry_room})
        return self.status()

    def move(self, direction: str | Direction | None) -> str:
        """Move along an exit and return the new location's description."""
        self._require_started()
        heading = direction if isinstance(direction, Direction) else Direction.parse(direction)

        target = self._graph.neighbor(self._state.location, heading)
        if target is None:
            raise BlockedPathError(f"You cannot go {heading.value}.")

        self._logger.info(
            "world_moved",
            extra={"from": self._state.location, "to": target, "direction": heading.value},
        )
        self._state.location = target
        return self.look()

    def look(self) -> str:
        self._require_started()
        return self._graph.describe(self._state.location)

    def status(self) -> WorldState:
        self._require_started()
        return replace(self._state, inventory=list(self._state.inventory))

    def inventory(self) -> list[str]:
        self._require_started()
        return list(self._state.inventory)

    def add_item(self, item: str) -> None:
        self._state.inventory.append(item)
        self._logger.info("item_added", extra={"item": item, "count": len(self._state.inventory)})

    def _require_started(self) -> None:
        if not self._state.started:
            raise NotStartedError(_NOT_STARTED)
