import pytest

from facility.layout import DOOR, EMPTY, HALLWAY, UnconnectableMapError, generate, room
from facility.layout.connectivity import connected_hallways
from facility.layout.corridors import bfs_path, carve, find_singles, merge_components, pathable, resolve_dead_ends
from facility.layout.grid import TileGrid
from facility.layout.shapes import open_directions
from tests.layout_test_utils import hallway_tiles, is_dead_end_free


@pytest.mark.parametrize(
    "neighbor,this,expected",
    [
        (EMPTY, EMPTY, True),
        (EMPTY, HALLWAY, True),
        (EMPTY, DOOR, True),
        (HALLWAY, HALLWAY, True),
        (HALLWAY, EMPTY, True),
        (HALLWAY, DOOR, False),
        (HALLWAY, room(0), False),
        (DOOR, EMPTY, False),
        (DOOR, HALLWAY, False),
        (room(1), EMPTY, False),
        (room(1), HALLWAY, False),
    ],
)
def test_pathable_table(neighbor, this, expected):
    assert pathable(neighbor, this) is expected


def test_bfs_returns_none_when_goal_unreachable():
    grid = TileGrid(3, 3)
    assert bfs_path(grid, (0, 0), lambda pos, kind: kind.is_hallway) is None


def test_bfs_path_includes_both_endpoints():
    grid = TileGrid(4, 1)
    grid.set(3, 0, HALLWAY)
    assert bfs_path(grid, (0, 0), lambda pos, kind: kind.is_hallway) == [(0, 0), (1, 0), (2, 0), (3, 0)]


def test_carve_only_counts_new_tiles():
    grid = TileGrid(4, 1)
    grid.set(0, 0, HALLWAY)
    grid.set(3, 0, HALLWAY)
    hallways = [(0, 0), (3, 0)]
    added = carve(grid, [(0, 0), (1, 0), (2, 0), (3, 0)], hallways)
    assert added == 2
    assert hallways == [(0, 0), (3, 0), (1, 0), (2, 0)]
    assert grid.count(HALLWAY) == 4


def test_merge_straight_corridor_between_two_seeds():
    grid = TileGrid(5, 3)
    grid.set(0, 1, HALLWAY)
    grid.set(4, 1, HALLWAY)
    hallways = [(0, 1), (4, 1)]
    result = merge_components(grid, hallways)
    assert result.paths == 1
    assert result.tiles_carved == 3
    assert result.carved == [[(0, 1), (1, 1), (2, 1), (3, 1), (4, 1)]]
    assert len(connected_hallways(grid)) == 1


def test_merge_is_noop_for_single_component():
    grid = TileGrid(3, 1)
    grid.set(0, 0, HALLWAY)
    grid.set(1, 0, HALLWAY)
    result = merge_components(grid, [(0, 0), (1, 0)])
    assert result.paths == 0 and result.tiles_carved == 0


def test_merge_joins_three_components():
    grid = TileGrid(7, 7)
    for pos in [(0, 0), (6, 0), (3, 6)]:
        grid.set(*pos, HALLWAY)
    hallways = [(0, 0), (6, 0), (3, 6)]
    result = merge_components(grid, hallways)
    assert result.paths >= 2
    assert len(connected_hallways(grid)) == 1
    assert len(hallways) == grid.count(HALLWAY)


def test_merge_walks_through_existing_hallways():
    grid = TileGrid(6, 1)
    grid.set(0, 0, HALLWAY)
    grid.set(2, 0, HALLWAY)
    grid.set(3, 0, HALLWAY)
    grid.set(5, 0, HALLWAY)
    result = merge_components(grid, [(0, 0), (2, 0), (3, 0), (5, 0)])
    assert result.tiles_carved == 2
    assert grid.count(HALLWAY) == 6


def test_merge_enclosed_seed_is_unconnectable():
    grid = TileGrid(5, 5)
    grid.set(0, 0, HALLWAY)
    grid.set(1, 0, room(1))
    grid.set(0, 1, room(1))
    grid.set(4, 4, HALLWAY)
    with pytest.raises(UnconnectableMapError):
        merge_components(grid, [(0, 0), (4, 4)])


def test_merge_cannot_cross_a_room_wall():
    grid = TileGrid(3, 3)
    for y in range(3):
        grid.set(1, y, room(1))
    grid.set(0, 1, HALLWAY)
    grid.set(2, 1, HALLWAY)
    with pytest.raises(UnconnectableMapError):
        merge_components(grid, [(0, 1), (2, 1)])


def test_singles_count_a_door_as_an_opening():
    grid = TileGrid(5, 3)
    grid.set(0, 1, room(0))
    grid.set(1, 1, DOOR)
    grid.set(2, 1, HALLWAY)  # door west, corridor east
    grid.set(3, 1, HALLWAY)  # dead end
    assert find_singles(grid, [(2, 1), (3, 1)]) == [(3, 1)]


def test_singles_follow_hallway_list_order():
    grid = TileGrid(5, 1)
    grid.set(0, 0, HALLWAY)
    grid.set(1, 0, HALLWAY)
    grid.set(3, 0, HALLWAY)
    grid.set(4, 0, HALLWAY)
    assert find_singles(grid, [(4, 0), (0, 0), (1, 0), (3, 0)]) == [(4, 0), (0, 0), (1, 0), (3, 0)]


def test_dead_end_with_only_a_door_beside_it_cannot_resolve():
    grid = TileGrid(3, 1)
    grid.set(0, 0, room(0))
    grid.set(1, 0, DOOR)
    grid.set(2, 0, HALLWAY)
    with pytest.raises(UnconnectableMapError):
        resolve_dead_ends(grid, [(2, 0)])


def test_lone_dead_end_with_no_other_hallway_is_unconnectable():
    grid = TileGrid(5, 5)
    grid.set(0, 2, room(0))
    grid.set(1, 2, DOOR)
    grid.set(2, 2, HALLWAY)
    with pytest.raises(UnconnectableMapError):
        resolve_dead_ends(grid, [(2, 2)])


def test_dead_end_repair_loops_a_corridor_back():
    grid = TileGrid(4, 4)
    grid.set(0, 0, HALLWAY)
    grid.set(1, 0, HALLWAY)
    hallways = [(0, 0), (1, 0)]
    result = resolve_dead_ends(grid, hallways)
    assert result.paths >= 1
    assert all(open_directions(grid, x, y) >= 2 for x, y in hallways)
    assert find_singles(grid, hallways) == []


def test_ten_by_ten_anchor_needs_exactly_one_dead_end_path(small_catalog):
    layout = generate(10, 10, small_catalog, scattered_rooms=0, seed=1)
    m = layout.metrics
    assert m["components_initial"] == 1
    assert m["merge_paths"] == 0
    assert m["dead_end_paths"] == 1
    assert m["tiles_carved"] == 7
    assert len(layout.hallways) == 9
    assert layout.hallways[:2] == ((3, 5), (7, 5))
    assert len(layout.connected_hallways()) == 1
    assert is_dead_end_free(layout.grid)
    assert sorted(hallway_tiles(layout.grid)) == sorted(layout.hallways)
