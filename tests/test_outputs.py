import json

import numpy as np
import pandas as pd
import pytest
from matplotlib.colors import to_rgb

from animate import animate_frames
from batch_run import flatten_dict, iter_param_combinations, run_single_experiment
from config import Config
from controller import RunController
from grid import CellState, Grid
from io_utils import build_summary, make_run_dir, save_config
from plot_utils import load_results, plot_boxplots_from_csv, summary_stats
from viz import CELL_COLORS, FrameRecorder, cells_to_image, draw_grid


def test_cells_to_image_colors():
    g = Grid(5)
    g.toggle_wall((0, 0))
    img = cells_to_image(g.cells)

    assert img.shape == (5, 5, 3)
    assert tuple(img[0, 0]) == pytest.approx(to_rgb(CELL_COLORS[CellState.WALL]))
    assert tuple(img[1, 1]) == pytest.approx(to_rgb(CELL_COLORS[CellState.START]))
    assert tuple(img[4, 4]) == pytest.approx(to_rgb(CELL_COLORS[CellState.EMPTY]))


def test_frame_recorder_copies_and_caps():
    rec = FrameRecorder(max_frames=2)
    cells = np.zeros((3, 3), dtype=np.int8)
    rec(cells)
    cells[0, 0] = CellState.WALL
    rec(cells)
    cells[0, 1] = CellState.WALL
    rec(cells)

    assert len(rec.frames) == 2
    assert rec.frames[0][0, 0] == CellState.EMPTY
    assert rec.frames[-1][0, 1] == CellState.WALL

    rec.clear()
    assert rec.frames == []


def test_draw_grid_and_gif(tmp_path):
    g = Grid(5)
    draw_grid(g.snapshot(), tmp_path / "grid.png")
    assert (tmp_path / "grid.png").stat().st_size > 0

    assert animate_frames([], tmp_path / "empty.gif") is None
    frames = [g.snapshot()]
    g.set_cell((2, 1), CellState.VISITED)
    frames.append(g.snapshot())
    out = animate_frames(frames, tmp_path / "run.gif", fps=5, hold_last=1)
    assert out == tmp_path / "run.gif"
    assert out.exists()


def test_run_dir_and_config(tmp_path):
    cfg = Config(grid_size=15, algorithm="astar", heuristic="euclidean", seed=3)
    run_dir = make_run_dir(cfg, base=str(tmp_path))
    assert run_dir.name.startswith("run_N15_astar-euclidean_obstacles_seed3_")

    save_config(cfg, run_dir)
    data = json.loads((run_dir / "config.json").read_text())
    assert Config(**data) == cfg


def test_build_summary_after_run():
    cfg = Config(grid_size=5, algorithm="bfs", speed="instant", generator="none", log_events=False)
    ctrl = RunController.from_config(cfg)
    ctrl.start(cfg.algorithm, cfg.heuristic)
    ctrl.run_until_done()

    summary = build_summary(cfg, ctrl)
    assert summary["run"]["phase"] == "complete"
    assert summary["run"]["path_found"] is True
    assert summary["run"]["nodes_explored"] == 21
    assert summary["run"]["path_length"] == 5
    assert summary["run"]["heuristic"] is None
    assert summary["grid"]["walls"] == 0
    assert summary["grid"]["end"] == [3, 3]
    assert summary["pathfinding"]["algorithm"] == "Breadth-First Search"
    json.dumps(summary)


def test_flatten_dict():
    assert flatten_dict({"a": {"b": 1, "c": {"d": 2}}, "e": 3}) == {"a.b": 1, "a.c.d": 2, "e": 3}


def test_param_combinations():
    combos = list(iter_param_combinations({"algorithm": ["bfs", "astar"], "seed": [0, 1, 2]}))
    assert len(combos) == 6
    assert combos[0] == {"algorithm": "bfs", "seed": 0}


def test_single_experiment_row():
    row = run_single_experiment(
        purpose="test",
        grid_size=15,
        generator="obstacles",
        obstacle_density=0.2,
        algorithm="dijkstra",
        heuristic="manhattan",
        seed=1,
    )
    assert row["run.algorithm"] == "dijkstra"
    assert row["grid.size"] == 15
    assert row["run.phase"] in ("complete", "failed")
    assert row["run.nodes_explored"] > 0


def test_single_experiment_rejects_unknown_algorithm():
    with pytest.raises(ValueError):
        run_single_experiment("test", 15, "none", 0.0, "dfs", "manhattan", 0)


@pytest.fixture
def results_csv(tmp_path):
    df = pd.DataFrame({
        "run.algorithm": ["bfs", "bfs", "astar", "astar", "dijkstra", "dijkstra"],
        "run.nodes_explored": [100, 120, 30, 40, 90, 110],
        "run.path_length": [20, 22, 20, 22, 20, 22],
    })
    path = tmp_path / "batch_results.csv"
    df.to_csv(path, index=False)
    return path


def test_summary_stats(results_csv):
    df = load_results(results_csv, ["run.algorithm"], ["run.nodes_explored"])
    stats = summary_stats(df, "run.algorithm", "run.nodes_explored")
    assert stats.loc["astar", "median"] == 35
    assert stats.loc["bfs", "n"] == 2


def test_load_results_checks_columns(results_csv, tmp_path):
    with pytest.raises(ValueError):
        load_results(results_csv, ["run.algorithm"], ["run.execution_time_ms"])
    with pytest.raises(FileNotFoundError):
        load_results(tmp_path / "missing.csv", [], [])


def test_boxplots_written(results_csv, tmp_path):
    saved = plot_boxplots_from_csv(
        csv_path=results_csv,
        group_by=["run.algorithm"],
        metrics=["run.nodes_explored", "run.path_length"],
        output_dir=tmp_path / "plots",
        show=False,
    )
    assert [p.name for p in saved] == [
        "box_run_nodes_explored_by_run_algorithm.pdf",
        "box_run_path_length_by_run_algorithm.pdf",
    ]
    assert all(p.exists() for p in saved)


def test_timing_stats_are_per_experiment():
    args = ("repeat", 15, "none", 0.0, "bfs", "manhattan", 0)
    first = run_single_experiment(*args)
    second = run_single_experiment(*args)
    assert first["pathfinding.call_count"] == 1
    assert second["pathfinding.call_count"] == 1
