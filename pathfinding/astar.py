# pathfinding/astar.py
from __future__ import annotations

from math import inf
from typing import Dict, Iterator, Set

from grid import Grid, Pos
from .base import SearchAlgorithm, StepEvent, TimedSearch, reconstruct_path
from .heuristics import Heuristic, get_heuristic
from .priority_queue import PriorityQueue


class AStarSearch(TimedSearch, SearchAlgorithm):
    """
    A* search on a 4-connected grid.
    Same bookkeeping as Dijkstra, but the queue is ordered by g + h, so with
    an admissible heuristic paths are still optimal (same length as BFS)
    and usually found with fewer expansions.
    """

    key = "astar"
    name = "A* Search"
    description = (
        "Uses heuristics to guide search toward the goal. Combines actual "
        "distance with estimated remaining distance."
    )
    time_complexity = "O(b^d)"
    space_complexity = "O(b^d)"
    pros = ["Very efficient", "Heuristic-guided", "Optimal with admissible heuristic"]
    cons = ["Requires good heuristic", "More complex"]
    applications = ["Game AI", "Robotics", "Route planning"]

    # ---- main search API ----

    def search(self, grid: Grid, heuristic: str = "manhattan") -> Iterator[StepEvent]:
        # resolve now so a bad name fails before the first step
        h = get_heuristic(heuristic)
        return self._timed(self._astar(grid, h))

    def _astar(self, grid: Grid, h: Heuristic) -> Iterator[StepEvent]:
        start, goal = grid.start, grid.end

        pq: PriorityQueue[Pos] = PriorityQueue()
        g_cost: Dict[Pos, float] = {start: 0}
        parent: Dict[Pos, Pos] = {}
        closed: Set[Pos] = set()

        pq.enqueue(start, h(start, goal))

        while not pq.is_empty():
            cur = pq.dequeue()
            if cur in closed:
                continue
            closed.add(cur)

            if cur == goal:
                yield StepEvent.found(reconstruct_path(parent, goal))
                return

            if cur != start:
                yield StepEvent.visit(cur)

            new_g = g_cost[cur] + 1  # unit-cost grid
            for np in grid.neighbors(cur):
                if new_g < g_cost.get(np, inf):
                    g_cost[np] = new_g
                    parent[np] = cur
                    pq.enqueue(np, new_g + h(np, goal))

        # no path
        yield StepEvent.exhausted()


ALGORITHM = AStarSearch()
