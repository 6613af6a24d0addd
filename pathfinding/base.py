# pathfinding/base.py
from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter
from typing import Dict, Iterator, List, Optional, Protocol, Tuple

from grid import Grid, Pos

Path = Tuple[Pos, ...]

VISIT = "visit"
FOUND = "found"
EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class StepEvent:
    """
    One observable step of a search.

      - "visit":     pos is a newly explored cell (never the start or end)
      - "found":     path runs from start to end inclusive; last event
      - "exhausted": the frontier emptied without reaching the end; last event
    """
    kind: str
    pos: Optional[Pos] = None
    path: Optional[Path] = None

    @classmethod
    def visit(cls, pos: Pos) -> "StepEvent":
        return cls(VISIT, pos=pos)

    @classmethod
    def found(cls, path: List[Pos] | Path) -> "StepEvent":
        return cls(FOUND, path=tuple(path))

    @classmethod
    def exhausted(cls) -> "StepEvent":
        return cls(EXHAUSTED)


class SearchAlgorithm(Protocol):
    key: str
    name: str
    # Optional timing stats (per algorithm implementation)
    total_runtime: float
    call_count: int
    last_runtime: float

    def search(self, grid: Grid, heuristic: str = "manhattan") -> Iterator[StepEvent]:
        ...

    def reset_stats(self) -> None:
        ...


class TimedSearch:
    """
    Shared timing stats for the step-yielding searches.

    Only the time spent inside the search generator is counted, so pauses
    and animation delays between steps do not show up in the runtime.
    """

    def __init__(self) -> None:
        self.total_runtime = 0.0
        self.call_count = 0
        self.last_runtime = 0.0

    def reset_stats(self) -> None:
        self.total_runtime = 0.0
        self.call_count = 0
        self.last_runtime = 0.0

    def _update_stats(self, dt: float) -> None:
        self.last_runtime = dt
        self.total_runtime += dt
        self.call_count += 1

    def _timed(self, events: Iterator[StepEvent]) -> Iterator[StepEvent]:
        busy = 0.0
        try:
            while True:
                t0 = perf_counter()
                try:
                    event = next(events)
                except StopIteration:
                    busy += perf_counter() - t0
                    return
                busy += perf_counter() - t0
                yield event
        finally:
            events.close()
            self._update_stats(busy)


def reconstruct_path(previous: Dict[Pos, Pos], end: Pos) -> List[Pos]:
    """Follow predecessors from end back to the start; returns start..end."""
    path = [end]
    cur = end
    while cur in previous:
        cur = previous[cur]
        path.append(cur)
    path.reverse()
    return path
