#!/usr/bin/env python3
"""
Batch experiment runner.

This script is meant for *offline comparisons* where you want to:

- Sweep over many grid / algorithm configurations.
- Run one search per configuration at instant speed (no PNG / GIF output).
- Collect all metrics into a single CSV file for analysis.

High-level behavior
-------------------

1. Build the parameter grid from batch_config.PARAM_GRID.
2. For each combination in the grid:
   - Build Config + RunController (the grid is generated from the seed).
   - Run the search to completion with delay 0.
   - Build the same summary dict as main.py.
3. Use multiprocessing to parallelize runs across CPU cores.
4. Flatten the summary dict + parameters into a single row.
5. Append rows to `outputs_batch/batch_results.csv`.

If `outputs_batch/batch_results.csv` already exists its header is reused
and new rows are appended with the same columns.

Usage
-----

From the repo root:

    python batch_run.py

Then plot the results:

    python plot_utils.py
"""

import csv
import itertools
import multiprocessing as mp
from pathlib import Path
from typing import Dict, Any, List, Optional
import traceback

from batch_config import CPU_COUNT, PARAM_GRID
from config import Config
from controller import RunController
from io_utils import build_summary
from pathfinding import get_algorithm


def iter_param_combinations(grid: Dict[str, List[Any]]):
    """Yield dicts for each combination in the parameter grid."""
    keys = list(grid.keys())
    value_lists = [grid[k] for k in keys]
    for combo in itertools.product(*value_lists):
        yield dict(zip(keys, combo))


# ---------------------------------------------------------------------
# Helper: flatten nested dicts (for CSV columns)
# ---------------------------------------------------------------------

def flatten_dict(
    d: Dict[str, Any],
    parent_key: str = "",
    sep: str = ".",
) -> Dict[str, Any]:
    """
    Turn nested dicts into a flat dict with dotted keys:

        {"a": {"b": 1}, "c": 2}  ->  {"a.b": 1, "c": 2}
    """
    items: Dict[str, Any] = {}
    for k, v in d.items():
        new_key = f"{parent_key}{sep}{k}" if parent_key else k
        if isinstance(v, dict):
            items.update(flatten_dict(v, new_key, sep=sep))
        else:
            items[new_key] = v
    return items


# ---------------------------------------------------------------------
# One experiment: main() minus the I/O
# ---------------------------------------------------------------------

def run_single_experiment(
    purpose: str,                # meta label, not used in the run, just for CSV
    grid_size: int,
    generator: str,
    obstacle_density: float,
    algorithm: str,
    heuristic: str,
    seed: int,
) -> Dict[str, Any]:
    """Run ONE search with the given parameters and return a flat dict of metrics."""
    cfg = Config(
        grid_size=grid_size,
        algorithm=algorithm,
        heuristic=heuristic,
        speed="instant",
        generator=generator,
        obstacle_density=obstacle_density,
        seed=seed,
        log_events=False,
    )

    ctrl = RunController.from_config(cfg)
    if not ctrl.start(algorithm, heuristic):
        raise ValueError(f"Could not start {algorithm!r} with heuristic {heuristic!r}")
    get_algorithm(algorithm).reset_stats()
    ctrl.run_until_done()

    return flatten_dict(build_summary(cfg, ctrl))


# ---------------------------------------------------------------------
# Worker for multiprocessing
# ---------------------------------------------------------------------

def run_one(params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Worker function for each process.

    - Calls run_single_experiment(**params).
    - Returns merged {params..., flat_summary...} dict.
    - If the run fails, returns None and prints an error.
    """
    params = dict(params)

    try:
        metrics = run_single_experiment(**params)
    except Exception as e:
        print(f"[ERROR] run_single_experiment failed for params={params}: {e}")
        traceback.print_exc()
        # returning None tells the caller to skip this run
        return None

    merged: Dict[str, Any] = {**params, **metrics}
    return merged


# ---------------------------------------------------------------------
# Batch driver: incremental CSV writing in outputs_batch/
# ---------------------------------------------------------------------

def main_batch(out_dir: str | Path = "outputs_batch") -> Optional[Path]:
    combos = list(iter_param_combinations(PARAM_GRID))
    total = len(combos)
    if total == 0:
        print("No parameter combinations to run. Check PARAM_GRID.")
        return None

    print(f"Total experiments to run: {total}")

    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / "batch_results.csv"

    fieldnames: Optional[List[str]] = None
    if out_path.exists():
        print(f"Appending to existing CSV: {out_path}")
        with out_path.open("r", newline="") as f:
            reader = csv.reader(f)
            fieldnames = next(reader, None) or None

    # Without a header yet, run the first job synchronously to infer the columns.
    start_index = 0
    if fieldnames is None:
        print("Running first job synchronously to infer CSV columns...")
        first_row = run_one(combos[0])
        if first_row is None:
            print("First experiment failed; cannot infer CSV columns.")
            return None

        fieldnames = sorted(first_row.keys())
        # Ensure 'purpose' is the first column
        if "purpose" in fieldnames:
            fieldnames.remove("purpose")
            fieldnames = ["purpose"] + fieldnames

        with out_path.open("w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction="ignore")
            writer.writeheader()
            writer.writerow(first_row)
        print(f"Created new CSV and wrote first row to {out_path}")
        start_index = 1
    else:
        print(f"Using existing header with {len(fieldnames)} columns.")

    remaining = combos[start_index:]
    if not remaining:
        print("No remaining experiments to run; done.")
        return out_path

    num_procs = min(CPU_COUNT or mp.cpu_count(), mp.cpu_count())
    print(f"Running remaining {len(remaining)} experiments in parallel using {num_procs} CPUs ...")

    done = start_index
    with out_path.open("a", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction="ignore")
        with mp.Pool(processes=num_procs) as pool:
            for row in pool.imap_unordered(run_one, remaining):
                if row is None:
                    # this run failed; already logged, so just skip it
                    continue

                writer.writerow(row)
                f.flush()
                done += 1
                if done % 10 == 0 or done == total:
                    print(f"Completed {done}/{total} experiments")

    print(f"All done. Results in {out_path}")
    return out_path


if __name__ == "__main__":
    main_batch()
