# search.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from grid import Grid, Pos
from pathfinding import get_algorithm
from pathfinding.base import FOUND, VISIT, StepEvent
from pathfinding.heuristics import get_heuristic


@dataclass
class SearchResult:
    algorithm: str
    path: Optional[Tuple[Pos, ...]] = None  # None means "no path"
    visited: List[Pos] = field(default_factory=list)  # in exploration order

    @property
    def found(self) -> bool:
        return self.path is not None

    @property
    def nodes_explored(self) -> int:
        return len(self.visited)

    @property
    def path_length(self) -> int:
        return len(self.path) if self.path else 0


def run(grid: Grid, algorithm: str = "bfs", heuristic: str = "manhattan") -> Iterator[StepEvent]:
    """
    Start a search over `grid` and return its step-event generator.

    Nothing is computed until the first event is requested. Unknown
    algorithm or heuristic names raise ValueError right away.
    """
    algo = get_algorithm(algorithm)
    get_heuristic(heuristic)
    return algo.search(grid, heuristic)


def solve(grid: Grid, algorithm: str = "bfs", heuristic: str = "manhattan") -> SearchResult:
    """Drain a search without animation; the grid is not modified."""
    result = SearchResult(algorithm=algorithm)
    for event in run(grid, algorithm, heuristic):
        if event.kind == VISIT:
            result.visited.append(event.pos)
        elif event.kind == FOUND:
            result.path = event.path
    return result
