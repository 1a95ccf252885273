"""
Shortest-path strategies for the snake (BFS, Dijkstra, Greedy, A*)
- One best-first search engine, each strategy only changes the ordering key
- Ties are broken by insertion order, so results are deterministic
- When the food can't be reached the snake moves away from its own body
"""

from __future__ import annotations
from abc import abstractmethod
from heapq import heappush, heappop
from itertools import count
from typing import Dict, Iterable, List, Optional
import logging

from .base import PathfindingAlgorithm
from .grid import (
    Cell,
    Direction,
    as_cell,
    as_cells,
    direction_between,
    manhattan,
    neighbors4,
    random_valid_direction,
)

logger = logging.getLogger(__name__)


class BestFirstSearch(PathfindingAlgorithm):
    """
    Priority-ordered graph search from the snake head to the food.

    Subclasses define _priority(g, h). Every step costs 1, h is the
    Manhattan distance to the goal.
    """

    name = "best-first"

    def __init__(self, seed: Optional[int] = None):
        super().__init__(seed=seed)
        self.path: List[Cell] = []
        self.path_origin: Optional[Cell] = None
        self.path_index = 0
        self.nodes_expanded = 0
        self.explored: List[Cell] = []

    @abstractmethod
    def _priority(self, g: float, h: float) -> float:
        """Ordering key for a node reached with cost g and heuristic h."""

    def _heuristic(self, cell: Cell, goal: Cell) -> float:
        return manhattan(cell, goal)

    def initialize(self, board_size, snake, food, obstacles=None) -> None:
        super().initialize(board_size, snake, food, obstacles)
        self.calculate_path()

    def update(self, snake, food, obstacles=None) -> None:
        super().update(snake, food, obstacles)
        self.calculate_path()

    def find_path(self, start, goal, snake: Optional[Iterable] = None) -> Optional[List[Cell]]:
        """
        Search a route from start to goal.

        Args:
            start: (x, y) cell the route starts from (not part of the result)
            goal: (x, y) target cell
            snake: body to plan against, defaults to the stored snapshot

        Returns:
            list of cells ending at goal, or None if no route exists
        """
        if goal is None:
            return None
        start, goal = as_cell(start), as_cell(goal)
        body = as_cells(snake) if snake is not None else self.snake

        order = count()
        h = self._heuristic(start, goal)
        open_heap = [(self._priority(0, h), next(order), start)]
        best_g: Dict[Cell, int] = {start: 0}
        parents: Dict[Cell, Optional[Cell]] = {start: None}
        rank: Dict[Cell, int] = {start: 0}
        closed = set()
        self.explored = []

        while open_heap:
            _, _, current = heappop(open_heap)
            if current in closed:
                continue  # stale entry left behind by a relaxation
            closed.add(current)
            self.explored.append(current)

            if current == goal:
                self.nodes_expanded = len(self.explored)
                path = []
                while current is not None:
                    path.append(current)
                    current = parents[current]
                path.reverse()
                return path[1:]

            g = best_g[current] + 1
            for neighbor in neighbors4(current, self.board_size, body, self.obstacles):
                if neighbor in closed:
                    continue
                if neighbor not in best_g:
                    best_g[neighbor] = g
                    parents[neighbor] = current
                    rank[neighbor] = next(order)
                elif g < best_g[neighbor]:
                    # Better route to an open node, keep its place in line
                    best_g[neighbor] = g
                    parents[neighbor] = current
                else:
                    continue
                key = self._priority(g, self._heuristic(neighbor, goal))
                heappush(open_heap, (key, rank[neighbor], neighbor))

        self.nodes_expanded = len(self.explored)
        return None

    def calculate_path(self) -> None:
        """Plan a route to the food, or a single safe step when there is none."""
        self.path = []
        self.path_index = 0
        self.path_origin = self.head
        if not self.snake:
            return

        path_to_food = self.find_path(self.head, self.food)
        if path_to_food:
            self.path = path_to_food
            return

        safe_move = self.find_safe_move()
        if safe_move is not None:
            logger.debug("%s: no route to food, stepping away from body to %s", self.name, safe_move)
            self.path = [safe_move]
        else:
            logger.warning("%s: no safe move from %s", self.name, self.head,
                           extra={"event": "no_safe_move"})

    def find_safe_move(self) -> Optional[Cell]:
        """Neighbour of the head furthest (by nearest segment) from the rest of the body."""
        if not self.snake:
            return None
        moves = neighbors4(self.head, self.board_size, self.snake, self.obstacles)
        best, best_distance = None, -1.0
        for move in moves:
            distance = min((manhattan(move, seg) for seg in self.snake[1:]), default=float("inf"))
            if distance > best_distance:
                best, best_distance = move, distance
        return best

    def _next_step(self, head: Cell) -> Optional[Cell]:
        # Position in the plan follows the head, so asking twice never skips a step
        if not self.path:
            return None
        if head == self.path_origin:
            index = 0
        elif head in self.path:
            index = self.path.index(head) + 1
        else:
            return None
        if index >= len(self.path):
            return None
        self.path_index = index
        return self.path[index]

    def get_next_direction(self, snake, current_direction: Direction = Direction.RIGHT) -> Direction:
        snake = as_cells(snake)
        if not snake:
            return Direction.RIGHT
        head = snake[0]
        next_pos = self._next_step(head)
        if next_pos is None:
            return random_valid_direction(head, snake, self.board_size, self.obstacles, self.rng)
        return direction_between(head, next_pos)

    def get_path(self) -> List[Cell]:
        return list(self.path)

    def get_visualization_data(self):
        return {"explored": list(self.explored), "nodes_expanded": self.nodes_expanded}


class BFSAlgorithm(BestFirstSearch):
    """Breadth-first search: plain FIFO expansion."""

    name = "bfs"

    def _priority(self, g, h):
        return 0


class DijkstraAlgorithm(BestFirstSearch):
    name = "dijkstra"

    def _priority(self, g, h):
        return g


class GreedyAlgorithm(BestFirstSearch):
    """Greedy best-first: heads straight for the food, can walk into dead ends."""

    name = "greedy"

    def _priority(self, g, h):
        return h


class AStarAlgorithm(BestFirstSearch):
    name = "astar"

    def __init__(self, heuristic_weight: float = 1.0, seed: Optional[int] = None):
        """
        Args:
            heuristic_weight: multiplier on the Manhattan heuristic (0 behaves like Dijkstra)
            seed: seed for the random fallback move
        """
        if heuristic_weight < 0:
            raise ValueError(f"heuristic_weight must be >= 0, got {heuristic_weight}")
        super().__init__(seed=seed)
        self.heuristic_weight = heuristic_weight

    def _heuristic(self, cell, goal):
        return manhattan(cell, goal, self.heuristic_weight)

    def _priority(self, g, h):
        return g + h
