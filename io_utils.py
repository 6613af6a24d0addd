# io_utils.py
from dataclasses import asdict
from pathlib import Path
from datetime import datetime
import json
from typing import Any
from config import Config
from grid import CellState
from pathfinding import get_algorithm
import uuid


def make_run_dir(cfg: Config, base: str = "outputs") -> Path:
    """
    Create (if needed) and return a unique directory for this run.

    Parameters
    ----------
    cfg : Config
        The configuration object for this run (grid size, algorithm, generator, seed, ...).
    base : str, optional
        Base directory under which the run folder will be created, by default "outputs".

    Folder naming
    -------------
    The folder name encodes:
      - grid size
      - algorithm (and heuristic for A*)
      - grid generator
      - random seed
      - a timestamp + short UUID suffix to guarantee uniqueness

    Example:
        outputs/run_N25_astar-manhattan_obstacles_seed0_20251216-213012-ab12cd34/

    Returns
    -------
    Path
        The full path to the newly created run directory.
    """
    base_path = Path(base)
    base_path.mkdir(parents=True, exist_ok=True)

    algo = cfg.algorithm
    if cfg.algorithm == "astar":
        algo = f"{algo}-{cfg.heuristic}"

    parts = [
        f"N{cfg.grid_size}",
        algo,
        cfg.generator,
        f"seed{cfg.seed}",
    ]
    base_name = "run_" + "_".join(parts)

    # Timestamp + short random suffix so repeated runs with the same
    # config do not overwrite each other.
    ts = datetime.now().strftime("%Y%m%d-%H%M%S")
    uid = uuid.uuid4().hex[:8]
    run_dir = base_path / f"{base_name}_{ts}-{uid}"

    run_dir.mkdir(exist_ok=False)
    return run_dir


def save_config(cfg: Config, run_dir: Path, filename: str = "config.json") -> None:
    """
    Serialize the Config object for this run into JSON, so the grid can be
    regenerated from the same seed later.
    """
    data: dict[str, Any] = asdict(cfg)
    out_path = run_dir / filename
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def save_summary(summary: dict[str, Any], run_dir: Path, filename: str = "summary.json") -> None:
    """
    Save the summary metrics for a run as a JSON file.

    The structure is nested (e.g. "run.nodes_explored", "grid.walls") so it
    flattens cleanly into CSV columns in batch_run.py.
    """
    out_path = run_dir / filename
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(summary, f, indent=2)


def build_summary(cfg: Config, ctrl: Any) -> dict[str, Any]:
    """
    Nested metrics dict for one finished run (ctrl is a RunController).
    Used by both main.py and batch_run.py.
    """
    grid = ctrl.grid
    m = ctrl.metrics
    pa = get_algorithm(cfg.algorithm)
    return {
        "pathfinding": {
            "algorithm": pa.name,
            "call_count": pa.call_count,
            "total_runtime": pa.total_runtime,
            "avg_runtime": (pa.total_runtime / pa.call_count) if pa.call_count else 0.0,
        },
        "grid": {
            "size": grid.size,
            "generator": cfg.generator,
            "obstacle_density": cfg.obstacle_density,
            "walls": grid.count(CellState.WALL),
            "start": list(grid.start),
            "end": list(grid.end),
        },
        "run": {
            "algorithm": cfg.algorithm,
            "heuristic": cfg.heuristic if cfg.algorithm == "astar" else None,
            "phase": ctrl.phase.value,
            "path_found": ctrl.phase.value == "complete",
            "path_length": m.path_length,
            "nodes_explored": m.nodes_explored,
            "execution_time_ms": m.execution_time_ms,
            "delay_ms": ctrl.delay_ms,
        },
    }
