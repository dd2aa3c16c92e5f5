"""Location graph and world state machine."""

from .graph import (
    UNKNOWN_PLACE,
    Direction,
    LocationGraph,
    default_location_graph,
    load_location_graph,
)
from .state import WorldState, WorldStateMachine

__all__ = [
    "UNKNOWN_PLACE",
    "Direction",
    "LocationGraph",
    "WorldState",
    "WorldStateMachine",
    "default_location_graph",
    "load_location_graph",
]
