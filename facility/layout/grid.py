"""Bounds-checked tile occupancy grid.

Cells are stored row-major (``index = y * width + x``). Every read and write
is bounds checked; touching a cell outside ``[0, width) x [0, height)`` raises
:class:`PreconditionViolation` instead of wrapping or clamping.
"""
from __future__ import annotations

from typing import Callable, Iterator, List, Tuple

from .errors import PreconditionViolation
from .tiles import CARDINALS, EMPTY, Coord2D, TileKind

# predicate(neighbor_kind, this_kind) -> bool
AdjacencyPredicate = Callable[[TileKind, TileKind], bool]


class TileGrid:
    __slots__ = ("width", "height", "_cells", "_frozen")

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise PreconditionViolation(f"grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._cells: List[TileKind] = [EMPTY] * (width * height)
        self._frozen = False

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _index(self, x: int, y: int) -> int:
        if not 0 <= x < self.width:
            raise PreconditionViolation(f"X index {x} out of bounds (width={self.width})")
        if not 0 <= y < self.height:
            raise PreconditionViolation(f"Y index {y} out of bounds (height={self.height})")
        return y * self.width + x

    def get(self, x: int, y: int) -> TileKind:
        return self._cells[self._index(x, y)]

    def set(self, x: int, y: int, kind: TileKind) -> None:
        if self._frozen:
            raise PreconditionViolation("grid is frozen; finished layouts are read-only")
        self._cells[self._index(x, y)] = kind

    def __getitem__(self, pos: Coord2D) -> TileKind:
        return self.get(pos[0], pos[1])

    def __setitem__(self, pos: Coord2D, kind: TileKind) -> None:
        self.set(pos[0], pos[1], kind)

    def neighbors(self, x: int, y: int) -> List[Tuple[int, int, TileKind]]:
        """In-bounds orthogonal neighbours in North, East, South, West order."""
        self._index(x, y)
        out = []
        for direction in CARDINALS:
            nx, ny = direction.step(x, y)
            if self.in_bounds(nx, ny):
                out.append((nx, ny, self._cells[ny * self.width + nx]))
        return out

    def get_connections(self, x: int, y: int, predicate: AdjacencyPredicate) -> List[Tuple[int, int, TileKind]]:
        """Neighbours for which ``predicate(neighbor_kind, this_kind)`` holds."""
        this_kind = self.get(x, y)
        return [(nx, ny, kind) for nx, ny, kind in self.neighbors(x, y) if predicate(kind, this_kind)]

    def iter_tiles(self) -> Iterator[Tuple[int, int, TileKind]]:
        for i, kind in enumerate(self._cells):
            yield i % self.width, i // self.width, kind

    def count(self, kind: TileKind) -> int:
        return sum(1 for cell in self._cells if cell == kind)

    def rows(self) -> List[List[TileKind]]:
        return [self._cells[y * self.width : (y + 1) * self.width] for y in range(self.height)]

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __repr__(self) -> str:
        return f"TileGrid({self.width}x{self.height}, frozen={self._frozen})"


__all__ = ["TileGrid", "AdjacencyPredicate"]
