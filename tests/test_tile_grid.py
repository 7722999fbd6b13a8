import pytest

from facility.layout import DOOR, EMPTY, HALLWAY, PreconditionViolation, room
from facility.layout.grid import TileGrid


def test_new_grid_is_all_empty():
    grid = TileGrid(4, 3)
    assert grid.count(EMPTY) == 12
    assert all(kind == EMPTY for _, _, kind in grid.iter_tiles())


@pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-1, 3)])
def test_non_positive_size_rejected(width, height):
    with pytest.raises(PreconditionViolation):
        TileGrid(width, height)


def test_set_and_get_roundtrip_by_coordinate():
    grid = TileGrid(5, 4)
    grid.set(3, 1, HALLWAY)
    grid[(0, 3)] = DOOR
    assert grid.get(3, 1) == HALLWAY
    assert grid[(0, 3)] == DOOR
    assert grid.get(1, 3) == EMPTY


@pytest.mark.parametrize("pos", [(-1, 0), (0, -1), (5, 0), (0, 4), (10, 10)])
def test_out_of_bounds_access_raises(pos):
    grid = TileGrid(5, 4)
    with pytest.raises(PreconditionViolation):
        grid.get(*pos)
    with pytest.raises(IndexError):
        grid.set(*pos, HALLWAY)


def test_neighbors_follow_north_east_south_west_order():
    grid = TileGrid(3, 3)
    grid.set(1, 2, HALLWAY)
    grid.set(2, 1, DOOR)
    coords = [(x, y) for x, y, _ in grid.neighbors(1, 1)]
    assert coords == [(1, 2), (2, 1), (1, 0), (0, 1)]
    kinds = [kind for _, _, kind in grid.neighbors(1, 1)]
    assert kinds == [HALLWAY, DOOR, EMPTY, EMPTY]


def test_corner_neighbors_drop_off_grid_tiles():
    grid = TileGrid(3, 3)
    assert [(x, y) for x, y, _ in grid.neighbors(0, 0)] == [(0, 1), (1, 0)]
    assert [(x, y) for x, y, _ in grid.neighbors(2, 2)] == [(2, 1), (1, 2)]


def test_get_connections_passes_neighbor_then_this():
    grid = TileGrid(3, 1)
    grid.set(0, 0, room(1))
    grid.set(1, 0, DOOR)
    grid.set(2, 0, HALLWAY)
    seen = []

    def predicate(neighbor, this):
        seen.append((neighbor, this))
        return neighbor.is_hallway

    assert grid.get_connections(1, 0, predicate) == [(2, 0, HALLWAY)]
    assert seen == [(HALLWAY, DOOR), (room(1), DOOR)]


def test_iter_tiles_is_row_major():
    grid = TileGrid(2, 2)
    assert [(x, y) for x, y, _ in grid.iter_tiles()] == [(0, 0), (1, 0), (0, 1), (1, 1)]


def test_rows_index_by_y_then_x():
    grid = TileGrid(3, 2)
    grid.set(2, 1, HALLWAY)
    rows = grid.rows()
    assert len(rows) == 2 and len(rows[0]) == 3
    assert rows[1][2] == HALLWAY


def test_frozen_grid_rejects_writes_but_allows_reads():
    grid = TileGrid(2, 2)
    grid.set(0, 0, HALLWAY)
    grid.freeze()
    assert grid.frozen
    assert grid.get(0, 0) == HALLWAY
    with pytest.raises(PreconditionViolation):
        grid.set(1, 1, HALLWAY)
