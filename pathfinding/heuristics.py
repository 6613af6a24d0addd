# pathfinding/heuristics.py
from __future__ import annotations

from math import sqrt
from typing import Callable, Dict

from grid import Pos

Heuristic = Callable[[Pos, Pos], float]


def manhattan(a: Pos, b: Pos) -> int:
    """|r1 - r2| + |c1 - c2|; exact lower bound for 4-connected moves."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def euclidean(a: Pos, b: Pos) -> float:
    """Straight-line distance; admissible here but looser than manhattan."""
    return sqrt((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2)


HEURISTICS: Dict[str, Heuristic] = {
    "manhattan": manhattan,
    "euclidean": euclidean,
}

HEURISTIC_INFO: Dict[str, Dict[str, str]] = {
    "manhattan": {
        "name": "Manhattan Distance",
        "description": "Sum of absolute differences in coordinates. "
                       "Good for grid-based movement (no diagonals).",
        "formula": "|r1-r2| + |c1-c2|",
    },
    "euclidean": {
        "name": "Euclidean Distance",
        "description": "Straight-line distance between two points. "
                       "Good when diagonal movement is allowed.",
        "formula": "sqrt((r1-r2)^2 + (c1-c2)^2)",
    },
}


def get_heuristic(name: str) -> Heuristic:
    if name not in HEURISTICS:
        raise ValueError(f"Unknown heuristic: {name}")
    return HEURISTICS[name]
