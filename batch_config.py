# batch_config.py
from __future__ import annotations

from typing import Dict, List, Any

# ---------------------------------------------------------------------------
# CPU usage for batch_run.py
# ---------------------------------------------------------------------------
# If CPU_COUNT is None, batch_run.py will use mp.cpu_count().
# Otherwise, it will use at most this many worker processes.
CPU_COUNT: int | None = None

# ---------------------------------------------------------------------------
# Parameter grid for batch_run.py
# ---------------------------------------------------------------------------
# PARAM_GRID runs all permutations (Cartesian product) of the values.
#
# Example:
#   "grid_size": [15, 25]
#   "algorithm": ["bfs", "astar"]
# will run 4 settings per seed.
#
# Be careful: experiment count is prod(len(v) for v in PARAM_GRID.values()).
# "heuristic" only matters for "astar"; other algorithms ignore it, so
# listing two heuristics doubles their identical rows.
PARAM_GRID: Dict[str, List[Any]] = {
    # --- meta ---
    "purpose": ["algorithm_comparison"],  # free-text label for this batch

    # --- grid ---
    "grid_size": [15, 25, 35],             # side length N of the N x N grid
    "generator": ["obstacles"],            # "obstacles" | "maze" | "none"
    "obstacle_density": [0.2, 0.3],        # only used by the "obstacles" generator

    # --- algorithms ---
    # "algorithm": ["bfs", "dijkstra", "astar"],
    "algorithm": ["bfs", "dijkstra", "astar"],
    # "heuristic": ["manhattan", "euclidean"],
    "heuristic": ["manhattan"],

    # --- randomness ---
    "seed": [i for i in range(10)],  # RNG seeds for different random grids
}
