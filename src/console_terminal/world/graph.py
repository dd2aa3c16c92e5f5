"""Static location graph: rooms, exits and room descriptions."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from console_terminal.errors import InvalidDirectionError

UNKNOWN_PLACE = "Unknown place..."


class Direction(str, Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    @classmethod
    def parse(cls, raw: str | None) -> Direction:
        """Map a raw argument to a direction, case-insensitively."""
        value = (raw or "").strip().lower()
        try:
            return cls(value)
        except ValueError:
            choices = "|".join(direction.value for direction in cls)
            raise InvalidDirectionError(f"Usage: move [{choices}]") from None


@dataclass(frozen=True, slots=True)
class LocationGraph:
    """Immutable directed graph of locations.

    Every node has a description; exits may be missing in any direction.
    """

    exits: Mapping[str, Mapping[Direction, str]]
    descriptions: Mapping[str, str]

    @classmethod
    def from_mapping(cls, exits: Mapping[str, Mapping[str, str]], descriptions: Mapping[str, str]) -> LocationGraph:
        nodes = set(descriptions) | set(exits)
        frozen_exits: dict[str, Mapping[Direction, str]] = {}
        for location, edges in exits.items():
            parsed: dict[Direction, str] = {}
            for raw_direction, target in edges.items():
                direction = Direction(raw_direction)
                if target not in nodes:
                    raise ValueError(f"Exit {location!r} -> {direction.value} points at unknown location {target!r}")
                parsed[direction] = target
            frozen_exits[location] = MappingProxyType(parsed)

        for location in nodes:
            frozen_exits.setdefault(location, MappingProxyType({}))

        return cls(exits=MappingProxyType(frozen_exits), descriptions=MappingProxyType(dict(descriptions)))

    def __contains__(self, location: object) -> bool:
        return location in self.exits

    def neighbor(self, location: str, direction: Direction) -> str | None:
        return self.exits.get(location, {}).get(direction)

    def describe(self, location: str) -> str:
        return self.descriptions.get(location, UNKNOWN_PLACE)


DEFAULT_EXITS: dict[str, dict[str, str]] = {
    "dark room": {
        "north": "corridor",
        "south": "storage",
        "east": "laboratory",
        "west": "dead end",
    },
    "corridor": {
        "south": "dark room",
        "north": "exit",
    },
}

DEFAULT_DESCRIPTIONS: dict[str, str] = {
    "beginning": "Nothing here yet. Type start to begin.",
    "dark room": "You are in a dark room. Strange symbols cover the walls. Dust lies on the floor.",
    "corridor": "A long corridor with dim lighting. The air smells of ozone.",
    "storage": "A dusty room full of old crates. There seems to be something here...",
    "laboratory": "A room full of scientific equipment. Some papers lie on the table.",
    "dead end": "A dead end. The wall is covered in moss. There is no way further.",
    "exit": "CONGRATULATIONS! You found the exit! The game is over.",
}


def default_location_graph() -> LocationGraph:
    return LocationGraph.from_mapping(DEFAULT_EXITS, DEFAULT_DESCRIPTIONS)


def load_location_graph(path: str | Path) -> LocationGraph:
    """Load a graph from JSON of the form ``{"exits": {...}, "descriptions": {...}}``."""
    payload: dict[str, Any] = json.loads(Path(path).read_text(encoding="utf-8"))
    return LocationGraph.from_mapping(payload.get("exits", {}), payload.get("descriptions", {}))
