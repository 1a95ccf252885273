"""Common contract implemented by every snake pathfinding strategy"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional
import random

from .grid import Cell, Direction, as_cell, as_cells


class PathfindingAlgorithm(ABC):
    """
    A strategy is initialised with a board snapshot, refreshed with
    update() every tick and then asked for the next direction.

    Snapshots are copied on the way in, so the caller may keep mutating
    its own snake/food/obstacle structures afterwards.
    """

    name = "base"

    def __init__(self, seed: Optional[int] = None):
        self.board_size = 0
        self.snake: List[Cell] = []
        self.food: Optional[Cell] = None
        self.obstacles: set = set()
        self.rng = random.Random(seed)

    def initialize(
        self,
        board_size: int,
        snake: Iterable,
        food,
        obstacles: Optional[Iterable] = None,
    ) -> None:
        if board_size < 1:
            raise ValueError(f"board_size must be positive, got {board_size}")
        self.board_size = board_size
        self._store_snapshot(snake, food, obstacles)

    def update(self, snake: Iterable, food, obstacles: Optional[Iterable] = None) -> None:
        self._store_snapshot(snake, food, obstacles)

    def _store_snapshot(self, snake, food, obstacles) -> None:
        self.snake = as_cells(snake)
        self.food = as_cell(food) if food is not None else None
        self.obstacles = set(as_cells(obstacles))

    @property
    def head(self) -> Optional[Cell]:
        return self.snake[0] if self.snake else None

    @abstractmethod
    def find_path(self, start: Cell, goal: Cell) -> Optional[List[Cell]]:
        """Route from start (excluded) to goal, or None when unreachable."""

    @abstractmethod
    def get_next_direction(self, snake: Iterable, current_direction: Direction) -> Direction:
        """Next move for the given snake. Must always return a direction."""

    @abstractmethod
    def get_path(self) -> List[Cell]:
        """Route currently planned (visualisation only)."""

    def get_visualization_data(self) -> Dict[str, Any]:
        return {}
