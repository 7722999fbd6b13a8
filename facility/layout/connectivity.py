"""Connected-component analysis over occupied tiles.

Two tiles are joined when :func:`connects` holds between them. A room's
interior only touches its own floor and its doors, so rooms are linked to the
rest of the map exclusively through Door -> Hallway transitions.
"""
from __future__ import annotations

from collections import deque
from typing import List, Set

from .grid import TileGrid
from .tiles import Coord2D, TileKind


def connects(a: TileKind, b: TileKind) -> bool:
    if a.is_empty:
        return False
    if a.is_room:
        return b == a or b.is_door
    if a.is_door:
        return not b.is_empty
    # hallway
    return b.is_hallway or b.is_door


def _adjacent(neighbor: TileKind, this: TileKind) -> bool:
    return connects(this, neighbor)


def connected_components(grid: TileGrid) -> List[Set[Coord2D]]:
    """All components of non-empty tiles, seeded in row-major order."""
    seen: Set[Coord2D] = set()
    components: List[Set[Coord2D]] = []
    for x, y, kind in grid.iter_tiles():
        if kind.is_empty or (x, y) in seen:
            continue
        component = {(x, y)}
        seen.add((x, y))
        q = deque([(x, y)])
        while q:
            cx, cy = q.popleft()
            for nx, ny, _ in grid.get_connections(cx, cy, _adjacent):
                if (nx, ny) not in seen:
                    seen.add((nx, ny))
                    component.add((nx, ny))
                    q.append((nx, ny))
        components.append(component)
    return components


def connected_hallways(grid: TileGrid) -> List[List[Coord2D]]:
    """Components reduced to their hallway tiles, in canonical order.

    Each component's tiles are sorted by ``(x, y)`` and the components by
    their smallest tile, so "first tile of component N" is well defined.
    Components without hallway tiles (a room with no doors) are dropped.
    """
    out = []
    for component in connected_components(grid):
        hallways = sorted(pos for pos in component if grid.get(*pos).is_hallway)
        if hallways:
            out.append(hallways)
    out.sort(key=lambda tiles: tiles[0])
    return out


__all__ = ["connects", "connected_components", "connected_hallways"]
