# main.py
from config import Config
from controller import RunController
from viz import draw_grid, FrameRecorder
from io_utils import build_summary, make_run_dir, save_config, save_summary
from animate import animate_frames
from pathfinding import get_algorithm


def main() -> None:
    """
    Single-run entry point for the pathfinding visualizer.

    Typical usage:
      1. Open config.py and edit the Config defaults
         (grid size, algorithm, heuristic, speed, generator, seed, ...).
      2. Run:
             python main.py
      3. Inspect the output folder under outputs/ (PNGs, GIF, summary.json).
    """

    # ------------------------------------------------------------------
    # 1) Build configuration from config.py
    # ------------------------------------------------------------------
    cfg = Config()

    # ------------------------------------------------------------------
    # 2) Create output directory and save config
    # ------------------------------------------------------------------
    # e.g. outputs/run_N25_astar-manhattan_obstacles_seed0_YYYYMMDD-HHMMSS-<uid>/
    run_dir = make_run_dir(cfg, base="outputs")
    save_config(cfg, run_dir)

    # ------------------------------------------------------------------
    # 3) Build grid + controller
    # ------------------------------------------------------------------
    # The recorder is the render sink: every cell change the controller
    # animates becomes one GIF frame.
    recorder = FrameRecorder()
    ctrl = RunController.from_config(cfg, render=recorder)

    # Draw the grid BEFORE the search paints anything.
    draw_grid(ctrl.grid.snapshot(), run_dir / "grid_initial.png",
              title=f"{cfg.grid_size}x{cfg.grid_size} grid ({cfg.generator})")

    # ------------------------------------------------------------------
    # 4) Run the search until it completes or exhausts the frontier
    # ------------------------------------------------------------------
    recorder.clear()
    if not ctrl.start(cfg.algorithm, cfg.heuristic):
        print(f"Could not start {cfg.algorithm!r}; check config.py.")
        return
    # timing stats cover this run only
    get_algorithm(cfg.algorithm).reset_stats()
    ctrl.run_until_done()

    # Draw the final grid AFTER the run.
    draw_grid(ctrl.grid.snapshot(), run_dir / "grid_final.png",
              title=f"{cfg.algorithm}: {ctrl.phase.value}")

    # ------------------------------------------------------------------
    # 5) Summary + animation
    # ------------------------------------------------------------------
    summary = build_summary(cfg, ctrl)
    save_summary(summary, run_dir)

    gif_path = run_dir / "animation.gif"
    animate_frames(recorder.frames, gif_path, fps=cfg.gif_fps,
                   title=f"{cfg.algorithm} on {cfg.grid_size}x{cfg.grid_size}")

    print(f"Run directory: {run_dir}")
    print(
        f"Status: {ctrl.phase.value} | path length: {ctrl.metrics.path_length} "
        f"| nodes explored: {ctrl.metrics.nodes_explored} "
        f"| time: {ctrl.metrics.execution_time_ms:.1f} ms"
    )


if __name__ == "__main__":
    main()
