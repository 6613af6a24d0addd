# pathfinding/bfs.py
from collections import deque
from typing import Deque, Iterator, Set, Tuple

from grid import Grid, Pos
from .base import Path, SearchAlgorithm, StepEvent, TimedSearch


class BFSSearch(TimedSearch, SearchAlgorithm):
    key = "bfs"
    name = "Breadth-First Search"
    description = (
        "Explores all nodes at the current depth before moving to the next "
        "depth level. Guarantees shortest path in unweighted graphs."
    )
    time_complexity = "O(V + E)"
    space_complexity = "O(V)"
    pros = ["Guarantees shortest path", "Simple to implement", "Good for unweighted graphs"]
    cons = ["Can be slow for large spaces", "Uses more memory"]
    applications = ["Social networks", "GPS navigation", "Puzzle solving"]

    def search(self, grid: Grid, heuristic: str = "manhattan") -> Iterator[StepEvent]:
        """
        BFS from grid.start to grid.end; the heuristic is ignored.

        Each queue entry carries its own path so far, so no predecessor map
        is needed. Cells are marked visited when enqueued, which is also when
        they are reported, so a cell is never queued twice.
        """
        return self._timed(self._bfs(grid))

    def _bfs(self, grid: Grid) -> Iterator[StepEvent]:
        start, goal = grid.start, grid.end

        q: Deque[Tuple[Pos, Path]] = deque([(start, (start,))])
        visited: Set[Pos] = {start}

        while q:
            pos, path = q.popleft()
            if pos == goal:
                yield StepEvent.found(path)
                return

            for np in grid.neighbors(pos):
                if np in visited:
                    continue
                visited.add(np)
                if np != goal:
                    yield StepEvent.visit(np)
                q.append((np, path + (np,)))

        yield StepEvent.exhausted()


ALGORITHM = BFSSearch()
