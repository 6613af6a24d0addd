# animate.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.animation as animation

from grid import CellState
from viz import cells_to_image, legend_handles, setup_axes


def _frame_counts(frame: np.ndarray) -> Dict[str, int]:
    return {
        "visited": int(np.count_nonzero(frame == CellState.VISITED)),
        "path": int(np.count_nonzero(frame == CellState.PATH)),
    }


def animate_frames(
    frames: Sequence[np.ndarray],
    out_path: str | Path,
    fps: int = 10,
    title: str = "Pathfinding (animation)",
    hold_last: int = 10,
) -> Optional[Path]:
    """
    Build a GIF from recorded grid snapshots.

    - frames: cell-state arrays, e.g. FrameRecorder.frames
    - hold_last: repeat the final frame this many times so the path stays
      on screen before the GIF loops
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    if not frames:
        print("No frames to animate; skipping GIF.")
        return None

    seq: List[np.ndarray] = list(frames) + [frames[-1]] * max(0, hold_last)
    n = seq[0].shape[0]

    # ----- Matplotlib setup -----
    fig, ax = plt.subplots(figsize=(max(4.0, n / 3.0), max(4.0, n / 3.0)))
    im = ax.imshow(cells_to_image(seq[0]), interpolation="nearest", animated=True)
    setup_axes(ax, n)
    counter = ax.text(
        0.01, -0.02, "", transform=ax.transAxes, ha="left", va="top", fontsize=9,
    )

    fig.suptitle(title, fontsize=16, y=0.98)
    handles = legend_handles()
    fig.legend(
        handles=handles,
        loc="upper center",
        bbox_to_anchor=(0.5, 0.94),
        ncol=len(handles),
        fontsize=9,
        frameon=False,
    )
    fig.tight_layout(rect=[0.0, 0.03, 1.0, 0.90])

    # ----- init + update functions for FuncAnimation -----
    def init():
        im.set_array(cells_to_image(seq[0]))
        counter.set_text("")
        return (im, counter)

    def update(frame: int):
        cells = seq[frame]
        im.set_array(cells_to_image(cells))
        c = _frame_counts(cells)
        counter.set_text(f"explored: {c['visited']}   path: {c['path']}")
        return (im, counter)

    ani = animation.FuncAnimation(
        fig,
        update,
        frames=len(seq),
        init_func=init,
        interval=1000 / fps,
        blit=True,
    )

    writer = animation.PillowWriter(fps=fps)
    ani.save(out_path, writer=writer)
    plt.close(fig)
    print(f"Saved animation GIF to {out_path}")
    return out_path
