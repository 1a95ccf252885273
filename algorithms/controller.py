"""
Snake controller - the piece a game loop talks to
Holds one strategy, feeds it the latest board every tick and asks it for a move.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional

from .factory import DEFAULT_ALGORITHM, create_algorithm
from .grid import Cell, Direction, as_cell, as_cells, direction_between


class SnakeController:
    def __init__(
        self,
        board_size: int,
        snake: Iterable,
        food,
        obstacles: Optional[Iterable] = None,
        algorithm: str = DEFAULT_ALGORITHM,
        config: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the controller.

        Args:
            board_size: side length of the square board
            snake: head-first list of (x, y) segments
            food: (x, y) food cell
            obstacles: list of (x, y) obstacle cells
            algorithm: "astar", "bfs", "greedy", "dijkstra" or "hamiltonian"
            config: heuristic_weight / shortcut_threshold / min_fill_ratio / seed
        """
        self.board_size = board_size
        self.snake = as_cells(snake)
        if not self.snake:
            raise ValueError("snake must have at least one segment")
        self.food = as_cell(food) if food is not None else None
        self.obstacles = as_cells(obstacles)
        self.algorithm = algorithm
        self.config = dict(config or {})
        self.pathfinder = create_algorithm(
            algorithm, board_size, self.snake, self.food, self.obstacles, self.config
        )

    def set_algorithm(self, algorithm: str, config: Optional[Dict[str, Any]] = None) -> None:
        """Throw the current strategy away and build a new one from the last snapshot."""
        self.algorithm = algorithm
        if config is not None:
            self.config = dict(config)
        self.pathfinder = create_algorithm(
            algorithm, self.board_size, self.snake, self.food, self.obstacles, self.config
        )

    def update(self, snake: Iterable, food, obstacles: Optional[Iterable] = None) -> None:
        self.snake = as_cells(snake)
        self.food = as_cell(food) if food is not None else None
        self.obstacles = as_cells(obstacles)
        self.pathfinder.update(self.snake, self.food, self.obstacles)

    @staticmethod
    def current_direction(snake: Iterable) -> Direction:
        """Heading of the snake, read from its first two segments."""
        snake = as_cells(snake)
        if len(snake) < 2:
            return Direction.RIGHT
        return direction_between(snake[1], snake[0])

    def get_next_direction(self, snake: Optional[Iterable] = None) -> Direction:
        snake = self.snake if snake is None else as_cells(snake)
        return self.pathfinder.get_next_direction(snake, self.current_direction(snake))

    def get_path(self) -> List[Cell]:
        return self.pathfinder.get_path()

    def get_visualization_data(self) -> Dict[str, Any]:
        return self.pathfinder.get_visualization_data()

    def get_hamiltonian_cycle(self) -> List[Cell]:
        return self.get_visualization_data().get("cycle", [])
