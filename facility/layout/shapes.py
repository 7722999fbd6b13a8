"""Hallway shape classification for sprite selection.

Each hallway tile's 4-neighbourhood (Hallway or Door counts as open) is read
North, East, South, West and mapped onto one of 15 shapes. The all-closed
pattern has no shape of its own and shares ``CROSS`` with the all-open one;
a converged layout never contains such a tile (every seed touches its door).
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple

from .grid import TileGrid
from .tiles import CARDINALS

Pattern = Tuple[bool, bool, bool, bool]  # (north, east, south, west)


class HallwayShape(Enum):
    END_NORTH = "end_north"
    END_EAST = "end_east"
    END_SOUTH = "end_south"
    END_WEST = "end_west"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    CORNER_NORTH_EAST = "corner_north_east"
    CORNER_SOUTH_EAST = "corner_south_east"
    CORNER_SOUTH_WEST = "corner_south_west"
    CORNER_NORTH_WEST = "corner_north_west"
    TEE_NORTH = "tee_north"  # open N/E/W, closed S
    TEE_EAST = "tee_east"  # open N/E/S, closed W
    TEE_SOUTH = "tee_south"  # open E/S/W, closed N
    TEE_WEST = "tee_west"  # open N/S/W, closed E
    CROSS = "cross"


_SHAPES: Dict[Pattern, HallwayShape] = {
    (False, False, False, False): HallwayShape.CROSS,
    (True, False, False, False): HallwayShape.END_NORTH,
    (False, True, False, False): HallwayShape.END_EAST,
    (False, False, True, False): HallwayShape.END_SOUTH,
    (False, False, False, True): HallwayShape.END_WEST,
    (True, False, True, False): HallwayShape.VERTICAL,
    (False, True, False, True): HallwayShape.HORIZONTAL,
    (True, True, False, False): HallwayShape.CORNER_NORTH_EAST,
    (False, True, True, False): HallwayShape.CORNER_SOUTH_EAST,
    (False, False, True, True): HallwayShape.CORNER_SOUTH_WEST,
    (True, False, False, True): HallwayShape.CORNER_NORTH_WEST,
    (True, True, False, True): HallwayShape.TEE_NORTH,
    (True, True, True, False): HallwayShape.TEE_EAST,
    (False, True, True, True): HallwayShape.TEE_SOUTH,
    (True, False, True, True): HallwayShape.TEE_WEST,
    (True, True, True, True): HallwayShape.CROSS,
}


def neighbor_pattern(grid: TileGrid, x: int, y: int) -> Pattern:
    """Open/closed flags for (north, east, south, west); off-grid counts as closed."""
    flags = []
    for direction in CARDINALS:
        nx, ny = direction.step(x, y)
        if grid.in_bounds(nx, ny):
            kind = grid.get(nx, ny)
            flags.append(kind.is_hallway or kind.is_door)
        else:
            flags.append(False)
    return tuple(flags)  # type: ignore[return-value]


def shape_for_pattern(pattern: Pattern) -> HallwayShape:
    return _SHAPES[tuple(bool(p) for p in pattern)]  # type: ignore[index]


def classify(grid: TileGrid, x: int, y: int) -> HallwayShape:
    return shape_for_pattern(neighbor_pattern(grid, x, y))


def open_directions(grid: TileGrid, x: int, y: int) -> int:
    return sum(neighbor_pattern(grid, x, y))


__all__ = ["HallwayShape", "Pattern", "neighbor_pattern", "shape_for_pattern", "classify", "open_directions"]
