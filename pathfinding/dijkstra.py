# pathfinding/dijkstra.py
from __future__ import annotations

from math import inf
from typing import Dict, Iterator, Set

from grid import Grid, Pos
from .base import SearchAlgorithm, StepEvent, TimedSearch, reconstruct_path
from .priority_queue import PriorityQueue


class DijkstraSearch(TimedSearch, SearchAlgorithm):
    """
    Dijkstra on the 4-connected grid with unit edge costs.

    Improved distances are pushed again instead of decreased in place; the
    older entries stay in the queue and are skipped once their cell has been
    finalized.
    """

    key = "dijkstra"
    name = "Dijkstra's Algorithm"
    description = (
        "Finds shortest paths from source to all other nodes using a priority "
        "queue. Explores nodes in order of distance from start."
    )
    time_complexity = "O((V + E) log V)"
    space_complexity = "O(V)"
    pros = ["Guarantees shortest path", "Works with weighted graphs", "Versatile"]
    cons = ["Slower than A*", "Explores in all directions"]
    applications = ["Network routing", "Flight connections", "Traffic optimization"]

    def search(self, grid: Grid, heuristic: str = "manhattan") -> Iterator[StepEvent]:
        return self._timed(self._dijkstra(grid))

    def _dijkstra(self, grid: Grid) -> Iterator[StepEvent]:
        start, goal = grid.start, grid.end

        pq: PriorityQueue[Pos] = PriorityQueue()
        dist: Dict[Pos, float] = {start: 0}
        previous: Dict[Pos, Pos] = {}
        finalized: Set[Pos] = set()

        pq.enqueue(start, 0)

        while not pq.is_empty():
            cur = pq.dequeue()
            if cur in finalized:
                continue  # stale duplicate
            finalized.add(cur)

            if cur == goal:
                yield StepEvent.found(reconstruct_path(previous, goal))
                return

            if cur != start:
                yield StepEvent.visit(cur)

            new_dist = dist[cur] + 1  # unit-cost grid
            for np in grid.neighbors(cur):
                if new_dist < dist.get(np, inf):
                    dist[np] = new_dist
                    previous[np] = cur
                    pq.enqueue(np, new_dist)

        yield StepEvent.exhausted()


ALGORITHM = DijkstraSearch()
