import matplotlib

matplotlib.use("Agg")

import pytest

from grid import CellState, Grid


class FakeClock:
    """Manual clock; sleep() moves time forward instead of blocking."""

    def __init__(self, t: float = 0.0) -> None:
        self.t = t
        self.sleeps = []

    def __call__(self) -> float:
        return self.t

    def sleep(self, dt: float) -> None:
        self.sleeps.append(dt)
        self.t += dt


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def open_grid():
    """5x5, no walls, start (1, 1), end (3, 3)."""
    return Grid(5)


@pytest.fixture
def enclosed_grid():
    """7x7 with the start walled into a four-cell pocket."""
    g = Grid(7)
    for p in [(2, 0), (2, 1), (2, 2), (0, 2), (1, 2)]:
        g.set_cell(p, CellState.WALL)
    return g
