from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Tuple

from .catalog import RoomKind, RoomTemplate
from .errors import ConfigurationError
from .grid import TileGrid
from .tiles import DOOR, EMPTY, HALLWAY, Coord2D, Direction, room

PlacedRoom = Tuple[RoomKind, Coord2D]


@dataclass
class PlacementResult:
    """Outcome of a scatter pass. Skipped ids are consumed, never retried."""

    requested: int = 0
    placed: List[PlacedRoom] = field(default_factory=list)
    skipped_ids: List[int] = field(default_factory=list)
    seeds: List[Coord2D] = field(default_factory=list)


def room_doors(template: RoomTemplate, origin: Coord2D) -> List[Tuple[int, int, Direction]]:
    ox, oy = origin
    return [(ox + dx, oy + dy, direction) for dx, dy, direction in template.door_offsets()]


def room_seeds(template: RoomTemplate, origin: Coord2D) -> List[Coord2D]:
    """One hallway seed per door, one step outside the door along its facing."""
    return [direction.step(x, y) for x, y, direction in room_doors(template, origin)]


def anchor_origin(grid: TileGrid, template: RoomTemplate) -> Coord2D:
    return grid.width // 2 - template.width // 2, grid.height // 2 - template.height // 2


def _stamp(grid: TileGrid, template: RoomTemplate, origin: Coord2D, room_id: int) -> List[Coord2D]:
    for x, y in template.footprint(origin):
        grid.set(x, y, room(room_id))
    for x, y, _ in room_doors(template, origin):
        grid.set(x, y, DOOR)
    seeds = room_seeds(template, origin)
    for x, y in seeds:
        grid.set(x, y, HALLWAY)
    return seeds


def place_anchor(grid: TileGrid, template: RoomTemplate) -> List[Coord2D]:
    """Stamp the anchor room (id 0) at the grid centre and return its hallway seeds.

    Every target tile is checked before anything is written, so a template that
    does not fit leaves the grid untouched.
    """
    if template.width > grid.width or template.height > grid.height:
        raise ConfigurationError(
            f"anchor template {template.width}x{template.height} does not fit grid {grid.width}x{grid.height}"
        )
    origin = anchor_origin(grid, template)
    targets = list(template.footprint(origin)) + room_seeds(template, origin)
    outside = [pos for pos in targets if not grid.in_bounds(*pos)]
    if outside:
        raise ConfigurationError(f"anchor room at {origin} puts tiles outside the grid: {outside}")
    return _stamp(grid, template, origin, 0)


def place_scattered(
    grid: TileGrid,
    template: RoomTemplate,
    count: int,
    rng: random.Random,
    kind: RoomKind,
) -> PlacementResult:
    """Try to place ``count`` rooms (ids 1..count) at uniform random origins.

    An attempt whose footprint or seed tiles hit anything non-empty is dropped;
    there is no rotation, nudging or retry.
    """
    result = PlacementResult(requested=count)
    if count <= 0:
        return result
    if grid.width - template.width <= 1 or grid.height - template.height <= 1:
        raise ConfigurationError(
            f"scattered template {template.width}x{template.height} leaves no room inside "
            f"grid {grid.width}x{grid.height}"
        )
    for room_id in range(1, count + 1):
        origin = (
            rng.randrange(1, grid.width - template.width),
            rng.randrange(1, grid.height - template.height),
        )
        targets = list(template.footprint(origin)) + room_seeds(template, origin)
        if any(not grid.in_bounds(x, y) or grid.get(x, y) != EMPTY for x, y in targets):
            result.skipped_ids.append(room_id)
            continue
        result.seeds.extend(_stamp(grid, template, origin, room_id))
        result.placed.append((kind, origin))
    return result


__all__ = [
    "PlacedRoom",
    "PlacementResult",
    "room_doors",
    "room_seeds",
    "anchor_origin",
    "place_anchor",
    "place_scattered",
]
