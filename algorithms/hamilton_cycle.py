"""
Hamiltonian cycle strategy for Snake
- Pre-computes a loop over the board that visits every free cell once
- Snake follows the loop, so it can never trap itself on an empty even board
- Takes a direct shortcut to the food while the board is still roomy
- Falls back to A* / random safe moves when the loop can't be followed
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Optional
import logging

import numpy as np

from .base import PathfindingAlgorithm
from .grid import (
    Cell,
    Direction,
    as_cell,
    as_cells,
    direction_between,
    is_adjacent,
    is_valid_cell,
    manhattan,
    neighbors4,
    step,
)
from .search import AStarAlgorithm, BFSAlgorithm

logger = logging.getLogger(__name__)

# Shortcuts are never taken above this fill ratio
SHORTCUT_MAX_FILL = 0.70
# ...or when fewer than this share of cells would be left free after eating
SHORTCUT_MIN_FREE = 0.20
# How many cycle cells ahead we look for a safe move
CYCLE_LOOKAHEAD = 5
# Length of the cycle preview returned by get_path()
PREVIEW_LENGTH = 10


def create_zigzag_cycle(board_size: int) -> List[Cell]:
    """
    Lawn-mower loop for an even board.

    Row 0 runs left to right across the full width, the remaining rows
    zigzag over columns 1..n-1 and column 0 is kept free as the way back
    up to (0, 0).
    """
    path = [(x, 0) for x in range(board_size)]
    for y in range(1, board_size):
        if y % 2 == 1:
            xs = range(board_size - 1, 0, -1)
        else:
            xs = range(1, board_size)
        path.extend((x, y) for x in xs)
    path.extend((0, y) for y in range(board_size - 1, 0, -1))
    return path


def create_odd_cycle(board_size: int) -> List[Cell]:
    """
    Degraded loop for odd boards (a true cycle doesn't exist there).

    Zigzag over every row but the last, skipping the last column, then
    the last column top to bottom, then the bottom row right to left.
    """
    last = board_size - 1
    path = []
    for y in range(last):
        if y % 2 == 0:
            xs = range(last)
        else:
            xs = range(last - 1, -1, -1)
        path.extend((x, y) for x in xs)
    path.extend((last, y) for y in range(last))
    path.extend((x, last) for x in range(last, -1, -1))
    return path


def generate_hamiltonian_cycle(board_size: int, obstacles: Optional[Iterable] = None) -> List[Cell]:
    """
    Build the loop the snake follows.

    Args:
        board_size: side length of the square board
        obstacles: cells left out of the loop

    Returns:
        ordered list of (x, y) cells. Only guaranteed to be a closed
        cycle for an even board without obstacles, use cycle_breaks()
        to check the rest.
    """
    blocked = set(as_cells(obstacles))
    if board_size % 2 == 0:
        cells = create_zigzag_cycle(board_size)
    else:
        logger.warning("Board size %d is odd, using a degraded cycle", board_size,
                       extra={"event": "odd_board"})
        cells = create_odd_cycle(board_size)

    cycle = [cell for cell in cells if cell not in blocked]
    if not cycle and board_size * board_size - len(blocked) > 0:
        logger.warning("Cycle generation produced no cells despite free space",
                       extra={"event": "empty_cycle"})
    return cycle


def cycle_breaks(cycle: List[Cell]) -> List[int]:
    """Indices i where cycle[i] -> cycle[i + 1] (wrapping) is not a single step."""
    if len(cycle) < 2:
        return []
    return [
        i for i in range(len(cycle))
        if not is_adjacent(cycle[i], cycle[(i + 1) % len(cycle)])
    ]


class HamiltonianAlgorithm(PathfindingAlgorithm):
    name = "hamiltonian"

    def __init__(self, shortcut_threshold: float = 33, min_fill_ratio: float = 0.0,
                 seed: Optional[int] = None):
        """
        Initialize the cycle follower.

        Args:
            shortcut_threshold: max food distance for a shortcut, in percent of board size
            min_fill_ratio: no shortcuts while the snake fills less than this share of the board
            seed: seed for the random fallback move
        """
        super().__init__(seed=seed)
        self.shortcut_threshold = shortcut_threshold
        self.min_fill_ratio = min_fill_ratio
        self.cycle: List[Cell] = []
        self.cycle_index: Dict[Cell, int] = {}
        self.cycle_valid = False
        self.current_cycle_index = 0
        self.order_grid = None
        self.last_path: List[Cell] = []

        # Search helpers, only their find_path() is used
        self._bfs = BFSAlgorithm(seed=seed)
        self._astar = AStarAlgorithm(heuristic_weight=1.0, seed=seed)

    def initialize(self, board_size, snake, food, obstacles=None) -> None:
        super().initialize(board_size, snake, food, obstacles)
        self._build_cycle()
        self._sync_cycle_index()
        self.last_path = []

    def update(self, snake, food, obstacles=None) -> None:
        old_obstacles = self.obstacles
        super().update(snake, food, obstacles)
        if self.obstacles != old_obstacles:
            logger.info("Obstacles changed, rebuilding cycle")
            self._build_cycle()
        self._sync_cycle_index()

    def _build_cycle(self) -> None:
        self.cycle = generate_hamiltonian_cycle(self.board_size, self.obstacles)
        self.cycle_index = {pos: idx for idx, pos in enumerate(self.cycle)}

        breaks = cycle_breaks(self.cycle)
        self.cycle_valid = bool(self.cycle) and not breaks
        if breaks:
            logger.warning("Cycle has %d broken link(s), fallback moves will be used there",
                           len(breaks), extra={"event": "cycle_broken"})

        # Order grid for diagnostics: numpy array indexed by [y, x], -1 = not on the cycle
        self.order_grid = np.full((self.board_size, self.board_size), -1, dtype=int)
        for (x, y), order in self.cycle_index.items():
            self.order_grid[y, x] = order

        for engine in (self._bfs, self._astar):
            engine.board_size = self.board_size
            engine.obstacles = self.obstacles

    def _sync_cycle_index(self, head: Optional[Cell] = None) -> None:
        head = head or self.head
        if head in self.cycle_index:
            self.current_cycle_index = self.cycle_index[head]

    def is_safe_move(self, head: Cell, cell: Cell, snake: List[Cell]) -> bool:
        return is_adjacent(head, cell) and is_valid_cell(cell, self.board_size, snake, self.obstacles)

    def find_path(self, start, goal, snake: Optional[Iterable] = None) -> Optional[List[Cell]]:
        """Direct breadth-first route, ignoring the cycle."""
        return self._bfs.find_path(start, goal, self.snake if snake is None else snake)

    def get_next_direction(self, snake, current_direction: Direction = Direction.RIGHT) -> Direction:
        self.last_path = []
        snake = as_cells(snake)
        if not snake:
            return Direction.RIGHT
        head = snake[0]

        if not self.cycle or head not in self.cycle_index:
            logger.warning("Head %s is not on the cycle, recovering", head,
                           extra={"event": "head_off_cycle"})
            return self._fallback_direction(head, snake)
        self._sync_cycle_index(head)

        shortcut = self.find_shortcut(head, snake)
        if shortcut:
            self.last_path = shortcut
            return direction_between(head, shortcut[0])

        next_pos = self.next_cycle_move(head, snake)
        if next_pos is not None:
            self.last_path = [
                self.cycle[(self.current_cycle_index + 1 + j) % len(self.cycle)]
                for j in range(min(PREVIEW_LENGTH, len(self.cycle)))
            ]
            return direction_between(head, next_pos)

        logger.warning("No safe cycle move from %s, falling back", head,
                       extra={"event": "cycle_blocked"})
        return self._fallback_direction(head, snake)

    def next_cycle_move(self, head: Cell, snake: List[Cell]) -> Optional[Cell]:
        """First of the next few cycle cells we can step onto right now."""
        length = len(self.cycle)
        for i in range(1, min(CYCLE_LOOKAHEAD, length) + 1):
            candidate = self.cycle[(self.current_cycle_index + i) % length]
            if self.is_safe_move(head, candidate, snake):
                return candidate
        return None

    def _fallback_direction(self, head: Cell, snake: List[Cell]) -> Direction:
        # 1. A* to the food
        if self.food is not None:
            route = self._astar.find_path(head, self.food, snake)
            if route and self.is_safe_move(head, route[0], snake):
                logger.warning("Fallback: following A* route to food",
                               extra={"event": "fallback_astar"})
                self.last_path = route
                return direction_between(head, route[0])

        # 2. Any safe neighbour
        safe_neighbors = neighbors4(head, self.board_size, snake, self.obstacles)
        if safe_neighbors:
            choice = self.rng.choice(safe_neighbors)
            logger.warning("Fallback: random safe move to %s", choice,
                           extra={"event": "fallback_random"})
            self.last_path = [choice]
            return direction_between(head, choice)

        # 3. Nothing is safe, follow the raw cycle anyway (may collide)
        if self.cycle and head in self.cycle_index:
            forced = self.cycle[(self.cycle_index[head] + 1) % len(self.cycle)]
            logger.warning("Fallback: no safe moves, forcing cycle step to %s", forced,
                           extra={"event": "fallback_forced"})
            self.last_path = [forced]
            return direction_between(head, forced)

        logger.warning("Fallback: snake is trapped, defaulting RIGHT",
                       extra={"event": "fallback_trapped"})
        self.last_path = [step(head, Direction.RIGHT)]
        return Direction.RIGHT

    def find_shortcut(self, head: Cell, snake: Optional[List[Cell]] = None) -> Optional[List[Cell]]:
        """Direct route to the food when cutting across the cycle is safe, else None."""
        if self.food is None:
            return None
        snake = self.snake if snake is None else snake
        if not self.is_shortcut_safe(head, self.food, snake):
            return None
        return self.find_path(head, self.food, snake) or None

    def is_shortcut_safe(self, head, food, snake: Optional[Iterable] = None) -> bool:
        """
        Decide whether the snake may leave the cycle to grab the food.

        Args:
            head: current head cell
            food: target cell
            snake: body to judge against, defaults to the stored snapshot

        Returns:
            True only if the food is close, the board is roomy enough, no
            body segment sits between head and food along the cycle and
            the snake can still reach its tail after eating
        """
        head, food = as_cell(head), as_cell(food)
        snake = self.snake if snake is None else as_cells(snake)

        distance = manhattan(head, food)
        if distance == 0:
            return False
        window = int(self.board_size * self.shortcut_threshold / 100)
        if window <= 0 or distance > window:
            return False

        board_cells = self.board_size * self.board_size
        fill_ratio = len(snake) / board_cells
        if fill_ratio > SHORTCUT_MAX_FILL or fill_ratio < self.min_fill_ratio:
            return False

        remaining_space = board_cells - (len(snake) + 1) - len(self.obstacles)
        if remaining_space < board_cells * SHORTCUT_MIN_FREE:
            return False

        if head not in self.cycle_index or food not in self.cycle_index:
            return False
        if self._body_between(head, food, snake):
            return False

        return self.can_reach_tail_after_shortcut(food, snake)

    def _body_between(self, head: Cell, food: Cell, snake: List[Cell]) -> bool:
        length = len(self.cycle)
        start = self.cycle_index[head]
        food_distance = (self.cycle_index[food] - start) % length
        for segment in snake[1:]:
            if segment in self.cycle_index:
                if 0 < (self.cycle_index[segment] - start) % length < food_distance:
                    return True
        return False

    def can_reach_tail_after_shortcut(self, food, snake: Optional[Iterable] = None) -> bool:
        """Check that eating at food wouldn't cut the new head off from the tail."""
        snake = self.snake if snake is None else as_cells(snake)
        if len(snake) < 2:
            return True

        # Simulate eating: food becomes the head and the tail stays (snake grows)
        grown = [as_cell(food)] + snake
        new_head, new_tail = grown[0], grown[-1]
        path_to_tail = self.find_path(new_head, new_tail, grown)
        return path_to_tail is not None and len(path_to_tail) > 0

    def get_path(self) -> List[Cell]:
        return list(self.last_path)

    def get_visualization_data(self):
        return {
            "cycle": list(self.cycle),
            "cycle_valid": self.cycle_valid,
            "order_grid": None if self.order_grid is None else self.order_grid.copy(),
        }


def visualize_cycle(board_size: int = 10, obstacles: Optional[Iterable] = None):
    """Display the cycle in the console."""
    blocked = set(as_cells(obstacles))
    cycle = generate_hamiltonian_cycle(board_size, blocked)
    breaks = cycle_breaks(cycle)

    print("\n" + "=" * 60)
    print(f"Cycle for {board_size}x{board_size} Grid")
    print("=" * 60)
    print("Numbers show the order in which cells are visited (## = obstacle):")
    print()

    grid = [["." for _ in range(board_size)] for _ in range(board_size)]
    for order, (x, y) in enumerate(cycle):
        grid[y][x] = str(order)
    for x, y in blocked:
        grid[y][x] = "##"

    cell_width = len(str(max(len(cycle) - 1, 0))) + 1

    print("    ", end="")
    for x in range(board_size):
        print(f"x{x}".ljust(cell_width), end=" ")
    print()

    for y in range(board_size):
        print(f"y{y}  ", end="")
        for x in range(board_size):
            print(grid[y][x].ljust(cell_width), end=" ")
        print()

    if cycle:
        print(f"\nStart at {cycle[0]}, end at {cycle[-1]}, {len(cycle)} cells")
    print(f"Closed cycle: {'✓' if cycle and not breaks else f'✗ {len(breaks)} broken link(s)'}")
    print("=" * 60)


if __name__ == "__main__":
    visualize_cycle(10)
