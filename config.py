# config.py
from dataclasses import dataclass
from typing import Dict, Tuple

# Grid sizes offered to users; the core accepts any size >= MIN_GRID_SIZE.
GRID_SIZES: Tuple[int, ...] = (15, 25, 35)
MIN_GRID_SIZE = 3

# Per-step animation delay in milliseconds.
SPEEDS: Dict[str, int] = {
    "slow": 100,
    "medium": 50,
    "fast": 10,
    "instant": 0,
}
DEFAULT_SPEED = "medium"


@dataclass
class Config:
    grid_size: int = 25

    # "bfs" | "dijkstra" | "astar"
    algorithm: str = "astar"
    # only used by A*: "manhattan" | "euclidean"
    heuristic: str = "manhattan"

    speed: str = "fast"

    # how the grid is filled before the run: "obstacles" | "maze" | "none"
    generator: str = "obstacles"
    obstacle_density: float = 0.3  # fraction of non-endpoint cells turned into walls
    seed: int = 0

    log_events: bool = True

    # output animation
    gif_fps: int = 20
