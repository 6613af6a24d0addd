# controller.py
from __future__ import annotations

from collections import deque
from dataclasses import asdict, dataclass, field
from enum import Enum
from time import perf_counter, sleep as _sleep
from typing import Any, Callable, Deque, Dict, Iterator, Optional, Tuple
import random
import traceback

import numpy as np

import search
from config import Config, DEFAULT_SPEED, SPEEDS
from grid import CellState, Grid, Pos
from pathfinding.base import EXHAUSTED, FOUND, VISIT, StepEvent


class RunPhase(str, Enum):
    READY = "ready"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETE = "complete"
    FAILED = "failed"


ACTIVE_PHASES = (RunPhase.RUNNING, RunPhase.PAUSED)

# cells a run may paint over; anything else was placed by the user
PAINTABLE = (CellState.EMPTY, CellState.VISITED)


@dataclass
class Metrics:
    path_length: int = 0
    nodes_explored: int = 0
    execution_time_ms: float = 0.0


@dataclass
class RunController:
    """
    Drives one search at a time over a shared grid.

    The controller never blocks on its own: an outside scheduler (a GUI
    timer, an animation frame callback, or run_until_done) calls tick().
    Each tick applies at most one cell change when the configured delay
    has elapsed, so pause() and stop() are only observed between ticks.
    With a delay of 0 a single tick runs the whole search and renders once.
    """
    grid: Grid = field(default_factory=Grid)
    delay_ms: int = SPEEDS[DEFAULT_SPEED]

    # collaborator sinks
    render: Optional[Callable[[np.ndarray], None]] = None
    on_status_change: Optional[Callable[[RunPhase], None]] = None
    on_metrics_change: Optional[Callable[[Dict[str, Any]], None]] = None
    on_step: Optional[Callable[[StepEvent], None]] = None
    on_error: Optional[Callable[[BaseException], None]] = None

    # ambient sources (inject fixed ones for deterministic tests)
    rng: random.Random = field(default_factory=random.Random)
    clock: Callable[[], float] = perf_counter

    # control terminal logging
    log_events: bool = False

    phase: RunPhase = field(default=RunPhase.READY, init=False)
    metrics: Metrics = field(default_factory=Metrics, init=False)
    algorithm: Optional[str] = field(default=None, init=False)
    heuristic: Optional[str] = field(default=None, init=False)

    _events: Optional[Iterator[StepEvent]] = field(default=None, init=False, repr=False)
    _reveal: Optional[Deque[Pos]] = field(default=None, init=False, repr=False)
    _started_at: float = field(default=0.0, init=False, repr=False)
    _next_step_at: float = field(default=0.0, init=False, repr=False)

    @classmethod
    def from_config(cls, cfg: Config, **sinks: Any) -> "RunController":
        rng = random.Random(cfg.seed)
        ctrl = cls(
            grid=Grid.from_config(cfg, rng),
            rng=rng,
            log_events=cfg.log_events,
            **sinks,
        )
        ctrl.set_speed(cfg.speed)
        return ctrl

    # ---------- logging helper ---------- #

    def _log(self, msg: str) -> None:
        if self.log_events:
            print(msg)

    # ---------- read-only state ---------- #

    @property
    def is_active(self) -> bool:
        return self.phase in ACTIVE_PHASES

    def metrics_dict(self) -> Dict[str, Any]:
        return asdict(self.metrics)

    # ---------------- run control ---------------- #

    def start(self, algorithm: str, heuristic: str = "manhattan") -> bool:
        """
        Begin a run. Rejected (returns False, nothing changes) while another
        run is running or paused, or when a name is unknown.
        """
        if self.is_active:
            self._log(f"[REJECT] start({algorithm}) while {self.phase.value}")
            return False
        try:
            events = search.run(self.grid, algorithm, heuristic)
        except ValueError as e:
            self._log(f"[REJECT] {e}")
            return False

        self.grid.clear_search_overlay()
        self.metrics = Metrics()
        self.algorithm = algorithm
        self.heuristic = heuristic
        self._events = events
        self._reveal = None
        self._started_at = self.clock()
        self._next_step_at = self._started_at

        self._log(f"[RUN] {algorithm} (h={heuristic}) on {self.grid.size}x{self.grid.size}, "
                  f"start={self.grid.start}, end={self.grid.end}, delay={self.delay_ms}ms")
        self._set_phase(RunPhase.RUNNING)
        self._emit_metrics()
        if self.delay_ms > 0:
            self._render()
        return True

    def pause(self) -> bool:
        if self.phase is not RunPhase.RUNNING:
            self._log(f"[REJECT] pause() while {self.phase.value}")
            return False
        self._log("[PAUSE]")
        self._set_phase(RunPhase.PAUSED)
        return True

    def resume(self) -> bool:
        if self.phase is not RunPhase.PAUSED:
            self._log(f"[REJECT] resume() while {self.phase.value}")
            return False
        self._log("[RESUME]")
        self._set_phase(RunPhase.RUNNING)
        return True

    def stop(self) -> bool:
        """Abandon the active run. Cells painted so far stay on the grid."""
        if not self.is_active:
            self._log(f"[REJECT] stop() while {self.phase.value}")
            return False
        self._halt()
        self._log("[STOP]")
        self._set_phase(RunPhase.READY)
        return True

    def reset(self) -> None:
        self._halt()
        self.grid.reset()
        self._back_to_ready()

    def clear_path(self) -> None:
        self._halt()
        self.grid.clear_search_overlay()
        self._back_to_ready()

    def change_grid_size(self, n: int) -> None:
        self._halt()
        self.grid = Grid(n)
        self._back_to_ready()

    def set_speed(self, speed: str | int) -> bool:
        """Preset name from SPEEDS or a delay in milliseconds."""
        if isinstance(speed, str):
            if speed not in SPEEDS:
                self._log(f"[REJECT] unknown speed {speed!r}")
                return False
            self.delay_ms = SPEEDS[speed]
        else:
            self.delay_ms = max(0, int(speed))
        return True

    # ---------------- stepping ---------------- #

    def tick(self) -> int:
        """
        One scheduler callback. Returns the number of cell changes applied.

        Faults raised while stepping end the run as FAILED and go to
        on_error instead of propagating to the scheduler.
        """
        if self.phase is not RunPhase.RUNNING:
            return 0
        try:
            if self.delay_ms <= 0:
                applied = 0
                while self.phase is RunPhase.RUNNING:
                    applied += self._advance()[0]
                self._render()
                return applied

            now = self.clock()
            if now < self._next_step_at:
                return 0
            applied, wait_s = self._advance()
            self._next_step_at = now + wait_s
            if applied:
                self._render()
            return applied
        except Exception as e:
            self._crash(e)
            return 0

    def run_until_done(self, sleep: Callable[[float], None] = _sleep) -> RunPhase:
        """
        Blocking event loop: tick, then sleep until the next step is due.
        Returns when the run is no longer RUNNING (finished, paused or stopped
        from a sink callback).
        """
        while self.phase is RunPhase.RUNNING:
            self.tick()
            if self.phase is RunPhase.RUNNING and self.delay_ms > 0:
                sleep(max(0.0, self._next_step_at - self.clock()))
        return self.phase

    def _advance(self) -> Tuple[int, float]:
        """
        Apply the next single change. Returns (cells changed, seconds to
        wait before the next one).
        """
        step_wait = self.delay_ms / 1000.0

        if self._reveal is not None:
            return self._reveal_next(), step_wait / 2

        event = next(self._events)
        if self.on_step is not None:
            self.on_step(event)
            if not self.is_active:
                return 0, 0.0

        if event.kind == VISIT:
            self.metrics.nodes_explored += 1
            self._paint(event.pos, CellState.VISITED)
            self._emit_metrics()
            return 1, step_wait

        if event.kind == FOUND:
            self.metrics.path_length = len(event.path)
            self._emit_metrics()
            # endpoints keep their own markers
            self._reveal = deque(event.path[1:-1])
            return self._reveal_next(), step_wait / 2

        if event.kind == EXHAUSTED:
            self._finish(RunPhase.FAILED)
            return 0, 0.0

        raise ValueError(f"Unknown step event: {event.kind}")

    def _reveal_next(self) -> int:
        applied = 0
        if self._reveal:
            self._paint(self._reveal.popleft(), CellState.PATH)
            applied = 1
        if not self._reveal:
            self._finish(RunPhase.COMPLETE)
        return applied

    def _paint(self, p: Pos, state: CellState) -> None:
        # walls drawn while the search animates are left alone
        if self.grid.state_at(p) in PAINTABLE:
            self.grid.cells[p] = state

    def _finish(self, phase: RunPhase) -> None:
        self.metrics.execution_time_ms = (self.clock() - self._started_at) * 1000.0
        self._close_events()
        self._reveal = None
        if phase is RunPhase.COMPLETE:
            self._log(f"[DONE] {self.algorithm}: path length {self.metrics.path_length}, "
                      f"{self.metrics.nodes_explored} nodes explored, "
                      f"{self.metrics.execution_time_ms:.1f} ms")
        else:
            self._log(f"[FAIL] {self.algorithm}: no path after "
                      f"{self.metrics.nodes_explored} nodes explored")
        self._set_phase(phase)
        self._emit_metrics()

    def _crash(self, exc: BaseException) -> None:
        self._log(f"[ERROR] {self.algorithm} step failed: {exc}\n{traceback.format_exc()}")
        self._halt()
        self.metrics.execution_time_ms = (self.clock() - self._started_at) * 1000.0
        self._set_phase(RunPhase.FAILED)
        self._emit_metrics()
        if self.on_error is not None:
            self.on_error(exc)

    def _halt(self) -> None:
        self._close_events()
        self._reveal = None

    def _close_events(self) -> None:
        if self._events is not None:
            self._events.close()
            self._events = None

    def _back_to_ready(self) -> None:
        self.metrics = Metrics()
        self._set_phase(RunPhase.READY)
        self._emit_metrics()
        self._render()

    # ---------------- editing ---------------- #

    def set_cell(self, p: Pos, state: CellState) -> None:
        self.grid.set_cell(p, state)
        self._render()

    def toggle_wall(self, p: Pos) -> None:
        self.grid.toggle_wall(p)
        self._render()

    def relocate_start(self, p: Pos) -> None:
        self.grid.relocate_start(p)
        self._render()

    def relocate_end(self, p: Pos) -> None:
        self.grid.relocate_end(p)
        self._render()

    def generate_maze(self) -> None:
        self._halt()
        self.grid.generate_maze(self.rng)
        self._back_to_ready()

    def generate_obstacles(self, density: float = 0.3) -> None:
        self._halt()
        self.grid.generate_obstacles(self.rng, density)
        self._back_to_ready()

    # ---------------- sinks ---------------- #

    def _set_phase(self, phase: RunPhase) -> None:
        self.phase = phase
        if phase not in ACTIVE_PHASES:
            self.algorithm = None
            self.heuristic = None
        if self.on_status_change is not None:
            self.on_status_change(phase)

    def _emit_metrics(self) -> None:
        if self.on_metrics_change is not None:
            self.on_metrics_change(self.metrics_dict())

    def _render(self) -> None:
        if self.render is not None:
            self.render(self.grid.snapshot())
