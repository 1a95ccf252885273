"""Builds a ready-to-use pathfinding strategy from its name and a config dict"""

from __future__ import annotations
from typing import Any, Dict, Iterable, Optional
import logging

from .base import PathfindingAlgorithm
from .hamilton_cycle import HamiltonianAlgorithm
from .search import AStarAlgorithm, BFSAlgorithm, DijkstraAlgorithm, GreedyAlgorithm

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "astar"

ALGORITHMS = ("astar", "bfs", "greedy", "dijkstra", "hamiltonian")

DEFAULT_CONFIG = {
    "heuristic_weight": 1.0,   # A* only
    "shortcut_threshold": 33,  # Hamiltonian only, percent of board size
    "min_fill_ratio": 0.0,     # Hamiltonian only
    "seed": None,              # random fallback moves
}


def resolve_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Merge a partial config with the defaults and sanity-check it.

    Unknown keys are ignored. A shortcut threshold outside 0-100 is
    clamped, a negative heuristic weight is a ValueError.
    """
    resolved = dict(DEFAULT_CONFIG)
    for key, value in (config or {}).items():
        if key in resolved and value is not None:
            resolved[key] = value

    if resolved["heuristic_weight"] < 0:
        raise ValueError(f"heuristic_weight must be >= 0, got {resolved['heuristic_weight']}")

    threshold = resolved["shortcut_threshold"]
    clamped = min(100, max(0, threshold))
    if clamped != threshold:
        logger.warning("shortcut_threshold %s out of range, using %s", threshold, clamped,
                       extra={"event": "config_clamped"})
        resolved["shortcut_threshold"] = clamped
    return resolved


def create_algorithm(
    algorithm: str,
    board_size: int,
    snake: Iterable,
    food,
    obstacles: Optional[Iterable] = None,
    config: Optional[Dict[str, Any]] = None,
) -> PathfindingAlgorithm:
    """
    Create and initialize a strategy.

    Args:
        algorithm: one of ALGORITHMS, anything else falls back to A*
        board_size: side length of the square board
        snake: head-first list of (x, y) segments
        food: (x, y) food cell
        obstacles: list of (x, y) obstacle cells
        config: partial config, see DEFAULT_CONFIG

    Returns:
        the initialized strategy
    """
    cfg = resolve_config(config)
    seed = cfg["seed"]

    if algorithm == "hamiltonian":
        pathfinder = HamiltonianAlgorithm(
            shortcut_threshold=cfg["shortcut_threshold"],
            min_fill_ratio=cfg["min_fill_ratio"],
            seed=seed,
        )
    elif algorithm == "bfs":
        pathfinder = BFSAlgorithm(seed=seed)
    elif algorithm == "dijkstra":
        pathfinder = DijkstraAlgorithm(seed=seed)
    elif algorithm == "greedy":
        pathfinder = GreedyAlgorithm(seed=seed)
    else:
        if algorithm != DEFAULT_ALGORITHM:
            logger.warning("Unknown algorithm %r, using A*", algorithm,
                           extra={"event": "unknown_algorithm"})
        pathfinder = AStarAlgorithm(heuristic_weight=cfg["heuristic_weight"], seed=seed)

    pathfinder.initialize(board_size, snake, food, obstacles)
    return pathfinder
