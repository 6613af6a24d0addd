# viz.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgb
from matplotlib.patches import Patch

from grid import CellState

# --- Color palette, one entry per cell state ---
CELL_COLORS: Dict[CellState, str] = {
    CellState.EMPTY:   "#ffffff",
    CellState.WALL:    "#2c3e50",  # dark slate
    CellState.START:   "#27ae60",  # green
    CellState.END:     "#e74c3c",  # red
    CellState.VISITED: "#3498db",  # blue
    CellState.PATH:    "#f1c40f",  # yellow
}
GRID_LINE = "#e0e0e0"

CELL_LABELS: Dict[CellState, str] = {
    CellState.WALL: "wall",
    CellState.START: "start",
    CellState.END: "end",
    CellState.VISITED: "visited",
    CellState.PATH: "path",
}

# lookup table indexed by cell state value -> RGB in 0-1
_PALETTE = np.array([to_rgb(CELL_COLORS[s]) for s in sorted(CELL_COLORS)], dtype=float)


def cells_to_image(cells: np.ndarray) -> np.ndarray:
    """(N, N) cell-state array -> (N, N, 3) RGB image."""
    return _PALETTE[np.asarray(cells, dtype=int)]


def legend_handles() -> List[Patch]:
    return [
        Patch(facecolor=CELL_COLORS[s], edgecolor="black", label=label)
        for s, label in CELL_LABELS.items()
    ]


def setup_axes(ax, n: int) -> None:
    # Grid lines (subtle)
    ax.set_xticks(np.arange(-0.5, n, 1), minor=True)
    ax.set_yticks(np.arange(-0.5, n, 1), minor=True)
    ax.grid(which="minor", color=GRID_LINE, linestyle="-", linewidth=0.6)
    ax.tick_params(which="both", length=0)

    ax.set_xlim(-0.5, n - 0.5)
    ax.set_ylim(n - 0.5, -0.5)  # row 0 at the top
    ax.set_aspect("equal")
    ax.set_xticks([])
    ax.set_yticks([])


def draw_grid(cells: np.ndarray, out_path: str | Path, title: str = "Pathfinding grid") -> None:
    """
    Draw a snapshot of the grid:
      - empty cells: white
      - walls: dark slate
      - start / end: green / red
      - visited cells: blue
      - path cells: yellow
    """
    n = cells.shape[0]
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(max(4.0, n / 3.0), max(4.0, n / 3.0)))
    ax.imshow(cells_to_image(cells), interpolation="nearest")
    setup_axes(ax, n)

    fig.suptitle(title, fontsize=16, y=0.98)

    handles = legend_handles()
    fig.legend(
        handles=handles,
        loc="upper center",
        bbox_to_anchor=(0.5, 0.94),  # just below the title
        ncol=len(handles),            # single line
        fontsize=9,
        frameon=False,
    )

    # Leave space at top for title + legend
    fig.tight_layout(rect=[0.0, 0.0, 1.0, 0.90])

    fig.savefig(out_path, dpi=150)
    plt.close(fig)


@dataclass
class FrameRecorder:
    """Render sink that keeps every snapshot it receives, for GIF export."""
    frames: List[np.ndarray] = field(default_factory=list)
    max_frames: int | None = None

    def __call__(self, cells: np.ndarray) -> None:
        if self.max_frames is not None and len(self.frames) >= self.max_frames:
            # keep the final frame current
            self.frames[-1] = cells.copy()
            return
        self.frames.append(cells.copy())

    def clear(self) -> None:
        self.frames.clear()
