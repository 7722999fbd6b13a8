"""Text rendering of a layout for the CLI and debugging.

Rows are printed top (highest y) first so North is up. Hallways use
box-drawing glyphs picked from their classified shape.
"""
from __future__ import annotations

from typing import Dict, List

from colorama import Fore, Style

from .pipeline import LayoutMap
from .shapes import HallwayShape, classify

EMPTY_CHAR = "."
ROOM_CHAR = "#"
ANCHOR_CHAR = "@"
DOOR_CHAR = "+"

HALLWAY_GLYPHS: Dict[HallwayShape, str] = {
    HallwayShape.END_NORTH: "╵",
    HallwayShape.END_EAST: "╶",
    HallwayShape.END_SOUTH: "╷",
    HallwayShape.END_WEST: "╴",
    HallwayShape.VERTICAL: "│",
    HallwayShape.HORIZONTAL: "─",
    HallwayShape.CORNER_NORTH_EAST: "└",
    HallwayShape.CORNER_SOUTH_EAST: "┌",
    HallwayShape.CORNER_SOUTH_WEST: "┐",
    HallwayShape.CORNER_NORTH_WEST: "┘",
    HallwayShape.TEE_NORTH: "┴",
    HallwayShape.TEE_EAST: "├",
    HallwayShape.TEE_SOUTH: "┬",
    HallwayShape.TEE_WEST: "┤",
    HallwayShape.CROSS: "┼",
}


def _paint(ch: str, color: str, enabled: bool) -> str:
    return f"{color}{ch}{Style.RESET_ALL}" if enabled else ch


def render_ascii(layout: LayoutMap, color: bool = False) -> str:
    grid = layout.grid
    lines: List[str] = []
    for y in range(grid.height - 1, -1, -1):
        row = []
        for x in range(grid.width):
            kind = grid.get(x, y)
            if kind.is_empty:
                row.append(_paint(EMPTY_CHAR, Style.DIM, color))
            elif kind.is_room:
                ch = ANCHOR_CHAR if kind.room_id == 0 else ROOM_CHAR
                row.append(_paint(ch, Fore.CYAN if kind.room_id == 0 else Fore.BLUE, color))
            elif kind.is_door:
                row.append(_paint(DOOR_CHAR, Fore.YELLOW, color))
            else:
                row.append(_paint(HALLWAY_GLYPHS[classify(grid, x, y)], Fore.GREEN, color))
        lines.append("".join(row))
    return "\n".join(lines)


__all__ = ["render_ascii", "HALLWAY_GLYPHS"]
