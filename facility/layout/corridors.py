"""Corridor repair: merge hallway components, then carve away dead ends.

Both phases search the grid with a *pathing* adjacency that differs from the
connectivity rule: empty tiles are open ground, hallways can be walked along,
rooms and doors are walls. Paths found by breadth-first search are stamped as
hallway tiles and the analysis is recomputed from scratch after every carve.

Recomputing full components per carve costs O(carves x grid area). Layout
grids are small, so the simple fixed-point loop is kept as is.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set

from ..logging_utils import get_logger
from .connectivity import connected_hallways
from .errors import UnconnectableMapError
from .grid import TileGrid
from .shapes import open_directions
from .tiles import HALLWAY, Coord2D, TileKind

log = get_logger("layout.corridors")


def pathable(neighbor: TileKind, this: TileKind) -> bool:
    if neighbor.is_empty:
        return True
    if neighbor.is_hallway:
        return this.is_hallway or this.is_empty
    return False


def _empty_only(neighbor: TileKind, this: TileKind) -> bool:
    return neighbor.is_empty


@dataclass
class CarveResult:
    paths: int = 0
    tiles_carved: int = 0
    carved: List[List[Coord2D]] = field(default_factory=list)


def bfs_path(
    grid: TileGrid,
    start: Coord2D,
    is_goal: Callable[[Coord2D, TileKind], bool],
    first_step: Callable[[TileKind, TileKind], bool] = pathable,
) -> Optional[List[Coord2D]]:
    """Shortest path from ``start`` to the first tile satisfying ``is_goal``.

    Neighbours are expanded in the grid's fixed North/East/South/West order, so
    among equal-length paths the result depends only on that order.
    ``first_step`` replaces the pathing rule for the start tile's own
    neighbours. Returns ``None`` when nothing reachable satisfies the goal.
    """
    parent: Dict[Coord2D, Optional[Coord2D]] = {start: None}
    q = deque([start])
    goal: Optional[Coord2D] = None
    while q and goal is None:
        x, y = q.popleft()
        rule = first_step if (x, y) == start else pathable
        for nx, ny, kind in grid.get_connections(x, y, rule):
            if (nx, ny) in parent:
                continue
            parent[(nx, ny)] = (x, y)
            if is_goal((nx, ny), kind):
                goal = (nx, ny)
                break
            q.append((nx, ny))
    if goal is None:
        return None
    path: List[Coord2D] = []
    cur: Optional[Coord2D] = goal
    while cur is not None:
        path.append(cur)
        cur = parent[cur]
    path.reverse()
    return path


def carve(grid: TileGrid, path: List[Coord2D], hallways: List[Coord2D]) -> int:
    """Stamp every path tile as hallway; newly stamped tiles are appended to ``hallways``."""
    added = 0
    for x, y in path:
        if grid.get(x, y).is_hallway:
            continue
        grid.set(x, y, HALLWAY)
        hallways.append((x, y))
        added += 1
    return added


def _iteration_cap(grid: TileGrid) -> int:
    # Each carve consumes at least one empty tile.
    return grid.width * grid.height + 1


def merge_components(grid: TileGrid, hallways: List[Coord2D]) -> CarveResult:
    """Phase A: connect hallway components until only one remains."""
    result = CarveResult()
    components = connected_hallways(grid)
    for _ in range(_iteration_cap(grid)):
        if len(components) <= 1:
            return result
        source = components[0][0]
        target = components[1][0]
        first: Set[Coord2D] = set(components[0])

        def is_goal(pos: Coord2D, kind: TileKind) -> bool:
            return pos == target or (kind.is_hallway and pos not in first)

        path = bfs_path(grid, source, is_goal)
        if path is None:
            raise UnconnectableMapError(
                f"no corridor route from component at {source} to component at {target} "
                f"({len(components)} components remain)"
            )
        added = carve(grid, path, hallways)
        result.paths += 1
        result.tiles_carved += added
        result.carved.append(path)
        log.debug(event="component_merged", source=source, target=path[-1], carved=added)
        components = connected_hallways(grid)
    raise UnconnectableMapError("component merge did not converge")


def find_singles(grid: TileGrid, hallways: List[Coord2D]) -> List[Coord2D]:
    """Hallway tiles (in hallway-list order) open in exactly one direction.

    A door counts as an opening, so a seed whose only neighbour is its door is
    a dead end, while a tile between a door and one corridor is not.
    """
    return [(x, y) for x, y in hallways if open_directions(grid, x, y) == 1]


def resolve_dead_ends(grid: TileGrid, hallways: List[Coord2D]) -> CarveResult:
    """Phase B: extend every dead end through empty ground to another hallway."""
    result = CarveResult()
    singles = find_singles(grid, hallways)
    for _ in range(_iteration_cap(grid)):
        if not singles:
            return result
        source = singles[0]

        def is_goal(pos: Coord2D, kind: TileKind) -> bool:
            return kind.is_hallway and pos != source

        # The first step only enters empty tiles so each carve consumes open ground.
        path = bfs_path(grid, source, is_goal, first_step=_empty_only)
        if path is None:
            raise UnconnectableMapError(f"dead end at {source} cannot reach another hallway")
        added = carve(grid, path, hallways)
        result.paths += 1
        result.tiles_carved += added
        result.carved.append(path)
        log.debug(event="dead_end_resolved", source=source, target=path[-1], carved=added)
        singles = find_singles(grid, hallways)
    raise UnconnectableMapError("dead end resolution did not converge")


__all__ = [
    "pathable",
    "CarveResult",
    "bfs_path",
    "carve",
    "merge_components",
    "find_singles",
    "resolve_dead_ends",
]
