import random

import numpy as np
import pytest

from config import Config
from grid import CellState, Grid


@pytest.mark.parametrize("n", [5, 15, 25, 35])
def test_reset_places_endpoints(n):
    g = Grid(n)
    assert g.start == (1, 1)
    assert g.end == (n - 2, n - 2)
    assert g.state_at(g.start) == CellState.START
    assert g.state_at(g.end) == CellState.END
    assert g.count(CellState.EMPTY) == n * n - 2


def test_smallest_grid_keeps_endpoints_apart():
    g = Grid(3)
    assert g.start == (1, 1)
    assert g.end == (2, 2)


def test_size_is_clamped():
    g = Grid(1)
    assert g.size == 3
    assert g.cells.shape == (3, 3)


def test_neighbors_order_and_bounds():
    g = Grid(5)
    assert g.neighbors((2, 2)) == [(1, 2), (3, 2), (2, 1), (2, 3)]
    # corner: only down and right exist
    assert g.neighbors((0, 0)) == [(1, 0), (0, 1)]


def test_neighbors_skip_walls():
    g = Grid(5)
    g.toggle_wall((1, 2))
    assert (1, 2) not in g.neighbors((2, 2))
    assert not g.is_walkable((1, 2))
    assert not g.is_walkable((-1, 0))


def test_toggle_wall_round_trip():
    g = Grid(5)
    before = g.snapshot()
    g.toggle_wall((0, 3))
    assert g.state_at((0, 3)) == CellState.WALL
    g.toggle_wall((0, 3))
    assert np.array_equal(g.cells, before)


def test_edits_ignore_endpoints_and_out_of_range():
    g = Grid(5)
    before = g.snapshot()
    g.toggle_wall(g.start)
    g.toggle_wall(g.end)
    g.set_cell(g.start, CellState.WALL)
    g.toggle_wall((5, 0))
    g.set_cell((0, -1), CellState.WALL)
    g.relocate_start((9, 9))
    assert np.array_equal(g.cells, before)


def test_relocate_start():
    g = Grid(5)
    g.relocate_start((0, 0))
    assert g.start == (0, 0)
    assert g.state_at((0, 0)) == CellState.START
    assert g.state_at((1, 1)) == CellState.EMPTY
    assert g.count(CellState.START) == 1


def test_relocate_onto_wall_replaces_it():
    g = Grid(5)
    g.toggle_wall((4, 4))
    g.relocate_end((4, 4))
    assert g.end == (4, 4)
    assert g.state_at((4, 4)) == CellState.END
    assert g.count(CellState.WALL) == 0


def test_relocate_onto_other_endpoint_is_ignored():
    g = Grid(5)
    g.relocate_start(g.end)
    g.relocate_end(g.start)
    assert g.start == (1, 1)
    assert g.end == (3, 3)


def test_set_cell_with_endpoint_state_relocates():
    g = Grid(5)
    g.set_cell((0, 4), CellState.END)
    assert g.end == (0, 4)
    assert g.count(CellState.END) == 1
    assert g.state_at((3, 3)) == CellState.EMPTY


def test_clear_search_overlay_keeps_walls_and_endpoints():
    g = Grid(5)
    g.set_cell((0, 0), CellState.WALL)
    g.set_cell((0, 1), CellState.VISITED)
    g.set_cell((2, 1), CellState.PATH)

    g.clear_search_overlay()

    assert g.state_at((0, 0)) == CellState.WALL
    assert g.state_at((0, 1)) == CellState.EMPTY
    assert g.state_at((2, 1)) == CellState.EMPTY
    assert g.state_at(g.start) == CellState.START
    assert g.state_at(g.end) == CellState.END


def test_obstacle_density_extremes():
    g = Grid(9)
    g.generate_obstacles(random.Random(0), density=0.0)
    assert g.count(CellState.WALL) == 0

    g.generate_obstacles(random.Random(0), density=1.0)
    assert g.count(CellState.WALL) == 9 * 9 - 2
    assert g.state_at(g.start) == CellState.START
    assert g.state_at(g.end) == CellState.END


def test_obstacles_are_reproducible():
    a, b = Grid(15), Grid(15)
    a.generate_obstacles(random.Random(42))
    b.generate_obstacles(random.Random(42))
    assert np.array_equal(a.cells, b.cells)


def test_maze_layout():
    g = Grid(25)
    g.generate_maze(random.Random(3))
    n = g.size

    border = np.concatenate([g.cells[0, :], g.cells[n - 1, :], g.cells[:, 0], g.cells[:, n - 1]])
    assert np.all(border == CellState.WALL)

    assert g.state_at(g.start) == CellState.START
    assert g.state_at(g.end) == CellState.END
    for p in [(2, 1), (1, 2), (22, 23), (23, 22)]:
        assert g.state_at(p) == CellState.EMPTY

    # odd/odd cells are rooms and never walled
    assert g.state_at((5, 7)) == CellState.EMPTY


def test_from_config_generators():
    empty = Grid.from_config(Config(grid_size=15, generator="none"))
    assert empty.count(CellState.WALL) == 0

    walled = Grid.from_config(Config(grid_size=15, generator="obstacles", seed=1))
    again = Grid.from_config(Config(grid_size=15, generator="obstacles", seed=1))
    assert walled.count(CellState.WALL) > 0
    assert np.array_equal(walled.cells, again.cells)


def test_from_config_rejects_unknown_generator():
    with pytest.raises(ValueError):
        Grid.from_config(Config(grid_size=15, generator="mazes"))
