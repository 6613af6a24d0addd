# pathfinding/__init__.py
import importlib
import pkgutil
from typing import Any, Dict
from .base import SearchAlgorithm, StepEvent
from .heuristics import HEURISTICS, HEURISTIC_INFO

PATHFINDING_ALGOS: Dict[str, SearchAlgorithm] = {}

_SUPPORT_MODULES = {"base", "heuristics", "priority_queue", "__init__"}


def load_algorithms() -> None:
    global PATHFINDING_ALGOS
    PATHFINDING_ALGOS = {}
    package = __name__
    for info in pkgutil.iter_modules(__path__):
        name = info.name
        if name in _SUPPORT_MODULES:
            continue
        module = importlib.import_module(f"{package}.{name}")
        algo = getattr(module, "ALGORITHM", None)
        if algo is None:
            continue
        if algo.key in PATHFINDING_ALGOS:
            raise ValueError(f"Duplicate pathfinding key: {algo.key}")
        PATHFINDING_ALGOS[algo.key] = algo


def get_algorithm(key: str) -> SearchAlgorithm:
    if key not in PATHFINDING_ALGOS:
        raise ValueError(f"Unknown pathfinding algorithm: {key}")
    return PATHFINDING_ALGOS[key]


def describe(key: str) -> Dict[str, Any]:
    """Info-panel data for one algorithm."""
    algo = get_algorithm(key)
    return {
        "key": algo.key,
        "name": algo.name,
        "description": algo.description,
        "time_complexity": algo.time_complexity,
        "space_complexity": algo.space_complexity,
        "pros": list(algo.pros),
        "cons": list(algo.cons),
        "applications": list(algo.applications),
        "uses_heuristic": algo.key == "astar",
    }


load_algorithms()
