# grid.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Tuple
import random

import numpy as np

from config import Config, MIN_GRID_SIZE

Pos = Tuple[int, int]  # (row, col)


class CellState(IntEnum):
    EMPTY = 0
    WALL = 1
    START = 2
    END = 3
    VISITED = 4
    PATH = 5


# Up, Down, Left, Right. Traversal order depends on this.
DIRECTIONS: Tuple[Pos, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))

OVERLAY_STATES = (int(CellState.VISITED), int(CellState.PATH))


@dataclass
class Grid:
    """
    Square grid of cell states with a single start and a single end.

      - cells[row, col] holds a CellState value
      - start / end are (row, col) positions, never equal, never on a wall
      - VISITED / PATH cells are the search overlay painted by a run

    Out-of-range positions are ignored by every editing method, so UI code
    can forward raw mouse positions without checking them first.
    """
    size: int = 25
    cells: np.ndarray = field(init=False, repr=False)
    start: Pos = field(init=False)
    end: Pos = field(init=False)

    def __post_init__(self) -> None:
        self.size = max(int(self.size), MIN_GRID_SIZE)
        self.reset()

    @classmethod
    def from_config(cls, cfg: Config, rng: random.Random | None = None) -> "Grid":
        rng = rng if rng is not None else random.Random(cfg.seed)
        grid = cls(cfg.grid_size)
        if cfg.generator == "maze":
            grid.generate_maze(rng)
        elif cfg.generator == "obstacles":
            grid.generate_obstacles(rng, cfg.obstacle_density)
        elif cfg.generator != "none":
            raise ValueError(f"Unknown grid generator: {cfg.generator}")
        return grid

    # ------------------------------------------------------------------ #
    # Lifecycle                                                          #
    # ------------------------------------------------------------------ #
    def reset(self) -> None:
        """Empty grid with start at (1, 1) and end at (N-2, N-2)."""
        n = self.size
        self.cells = np.full((n, n), CellState.EMPTY, dtype=np.int8)
        self.start = (1, 1)
        self.end = (n - 2, n - 2)
        if self.end == self.start:
            # only happens for the 3x3 grid
            self.end = (n - 1, n - 1)
        self.cells[self.start] = CellState.START
        self.cells[self.end] = CellState.END

    def snapshot(self) -> np.ndarray:
        return self.cells.copy()

    # ------------------------------------------------------------------ #
    # Queries                                                            #
    # ------------------------------------------------------------------ #
    def is_valid(self, p: Pos) -> bool:
        r, c = p
        return 0 <= r < self.size and 0 <= c < self.size

    def is_walkable(self, p: Pos) -> bool:
        return self.is_valid(p) and self.cells[p] != CellState.WALL

    def neighbors(self, p: Pos) -> List[Pos]:
        """Walkable orthogonal neighbors in up, down, left, right order."""
        r, c = p
        candidates = [(r + dr, c + dc) for dr, dc in DIRECTIONS]
        return [q for q in candidates if self.is_walkable(q)]

    def state_at(self, p: Pos) -> CellState:
        return CellState(int(self.cells[p]))

    def count(self, state: CellState) -> int:
        return int(np.count_nonzero(self.cells == state))

    # ------------------------------------------------------------------ #
    # Editing                                                            #
    # ------------------------------------------------------------------ #
    def set_cell(self, p: Pos, state: CellState) -> None:
        if not self.is_valid(p):
            return
        state = CellState(state)
        if state == CellState.START:
            self.relocate_start(p)
            return
        if state == CellState.END:
            self.relocate_end(p)
            return
        if p == self.start or p == self.end:
            return
        self.cells[p] = state

    def toggle_wall(self, p: Pos) -> None:
        if not self.is_valid(p) or p == self.start or p == self.end:
            return
        if self.cells[p] == CellState.WALL:
            self.cells[p] = CellState.EMPTY
        else:
            self.cells[p] = CellState.WALL

    def relocate_start(self, p: Pos) -> None:
        if not self.is_valid(p) or p == self.end:
            return
        self.cells[self.start] = CellState.EMPTY
        self.start = p
        self.cells[p] = CellState.START

    def relocate_end(self, p: Pos) -> None:
        if not self.is_valid(p) or p == self.start:
            return
        self.cells[self.end] = CellState.EMPTY
        self.end = p
        self.cells[p] = CellState.END

    def clear_search_overlay(self) -> None:
        """Turn VISITED / PATH cells back into EMPTY; walls and endpoints stay."""
        mask = np.isin(self.cells, OVERLAY_STATES)
        self.cells[mask] = CellState.EMPTY

    # ------------------------------------------------------------------ #
    # Generators                                                         #
    # ------------------------------------------------------------------ #
    def generate_maze(self, rng: random.Random) -> None:
        """
        Lattice maze: border walls, a wall on every even row and every even
        column, then random passages carved at the even/even junctions.

        The carving is probabilistic and may leave the end unreachable.
        """
        n = self.size
        self.cells[:, :] = CellState.EMPTY

        self.cells[0, :] = CellState.WALL
        self.cells[n - 1, :] = CellState.WALL
        self.cells[:, 0] = CellState.WALL
        self.cells[:, n - 1] = CellState.WALL

        for row in range(2, n - 2, 2):
            self.cells[row, 1:n - 1] = CellState.WALL
        for col in range(2, n - 2, 2):
            self.cells[1:n - 1, col] = CellState.WALL

        for row in range(2, n - 2, 2):
            for col in range(2, n - 2, 2):
                if rng.random() < 0.5:
                    # horizontal passage
                    if col > 2 and rng.random() < 0.5:
                        self.cells[row, col - 1] = CellState.EMPTY
                    # vertical passage
                    if row > 2:
                        self.cells[row - 1, col] = CellState.EMPTY

        self.cells[self.start] = CellState.START
        self.cells[self.end] = CellState.END

        sr, sc = self.start
        er, ec = self.end
        for p in ((sr + 1, sc), (sr, sc + 1), (er - 1, ec), (er, ec - 1)):
            if self.is_valid(p) and p != self.start and p != self.end:
                self.cells[p] = CellState.EMPTY

    def generate_obstacles(self, rng: random.Random, density: float = 0.3) -> None:
        """Reset, then wall off each non-endpoint cell with probability `density`."""
        self.reset()
        for row in range(self.size):
            for col in range(self.size):
                p = (row, col)
                if p == self.start or p == self.end:
                    continue
                if rng.random() < density:
                    self.cells[p] = CellState.WALL
