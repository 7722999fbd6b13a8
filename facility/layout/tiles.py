"""Tile kinds and compass directions shared by every generation phase."""
from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Optional, Tuple

Coord2D = Tuple[int, int]


class TileKind(NamedTuple):
    kind: str
    room_id: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.kind == "empty"

    @property
    def is_room(self) -> bool:
        return self.kind == "room"

    @property
    def is_door(self) -> bool:
        return self.kind == "door"

    @property
    def is_hallway(self) -> bool:
        return self.kind == "hallway"


EMPTY = TileKind("empty")
DOOR = TileKind("door")
HALLWAY = TileKind("hallway")


def room(room_id: int) -> TileKind:
    return TileKind("room", room_id)


class Direction(Enum):
    # Origin is the lower-left tile, so North points toward +y.
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    @property
    def delta(self) -> Coord2D:
        return _DELTAS[self]

    def step(self, x: int, y: int) -> Coord2D:
        dx, dy = _DELTAS[self]
        return x + dx, y + dy


_DELTAS = {
    Direction.NORTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, -1),
    Direction.WEST: (-1, 0),
}

# Fixed expansion order; BFS tie-breaking depends on it.
CARDINALS = (Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST)

__all__ = [
    "Coord2D",
    "TileKind",
    "EMPTY",
    "DOOR",
    "HALLWAY",
    "room",
    "Direction",
    "CARDINALS",
]
