"""
Grid geometry helpers shared by every pathfinding strategy
- Pure functions of their arguments, no state of their own
- Cells are (x, y) tuples, the board is square with side board_size
- The snake's tail is not treated as blocking (it moves away this tick)
"""

from __future__ import annotations
from enum import IntEnum
from typing import Iterable, List, Optional, Sequence, Set, Tuple
import random

Cell = Tuple[int, int]


class Direction(IntEnum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


# Directions: 0=UP, 1=DOWN, 2=LEFT, 3=RIGHT
DIRS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

OPPOSITE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def as_cell(pos) -> Cell:
    """Normalise [x, y] lists (or any 2-sequence) into a hashable cell."""
    return (int(pos[0]), int(pos[1]))


def as_cells(positions: Optional[Iterable]) -> List[Cell]:
    if not positions:
        return []
    return [as_cell(p) for p in positions]


def step(cell: Cell, direction: Direction) -> Cell:
    dx, dy = DIRS[direction]
    return (cell[0] + dx, cell[1] + dy)


def opposite(direction: Direction) -> Direction:
    return OPPOSITE[Direction(direction)]


def in_bounds(cell: Cell, board_size: int) -> bool:
    return 0 <= cell[0] < board_size and 0 <= cell[1] < board_size


def is_adjacent(a: Cell, b: Cell) -> bool:
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def manhattan(a: Cell, b: Cell, weight: float = 1) -> float:
    return weight * (abs(a[0] - b[0]) + abs(a[1] - b[1]))


def is_valid_cell(
    cell: Cell,
    board_size: int,
    snake_body: Sequence[Cell],
    obstacles: Iterable[Cell],
) -> bool:
    """
    Check whether the snake may occupy a cell on the next tick.

    Args:
        cell: (x, y) position to test
        board_size: side length of the square board
        snake_body: head-first snake segments (the last one is ignored)
        obstacles: static blocked cells (a set is fastest)

    Returns:
        False if out of bounds, on an obstacle, or on any segment but the tail
    """
    if not in_bounds(cell, board_size):
        return False
    if cell in obstacles:
        return False
    # Tail (last element) vacates the cell when the snake moves forward
    for segment in snake_body[:-1]:
        if segment == cell:
            return False
    return True


def neighbors4(
    cell: Cell,
    board_size: int,
    snake_body: Sequence[Cell],
    obstacles: Iterable[Cell],
) -> List[Cell]:
    """Valid adjacent cells, always in UP, DOWN, LEFT, RIGHT order."""
    x, y = cell
    candidates = [(x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)]
    blocked = set(snake_body[:-1])
    return [
        c for c in candidates
        if in_bounds(c, board_size) and c not in obstacles and c not in blocked
    ]


def direction_between(start: Cell, target: Cell) -> Direction:
    """Direction of travel from start towards target (horizontal checked first)."""
    if target[0] < start[0]:
        return Direction.LEFT
    if target[0] > start[0]:
        return Direction.RIGHT
    if target[1] < start[1]:
        return Direction.UP
    if target[1] > start[1]:
        return Direction.DOWN
    # Same cell, callers should never ask for this
    return Direction.RIGHT


def random_valid_direction(
    head: Cell,
    snake_body: Sequence[Cell],
    board_size: int,
    obstacles: Iterable[Cell],
    rng: Optional[random.Random] = None,
) -> Direction:
    """
    Uniformly pick a safe direction, or a best guess when none is safe.

    With no valid neighbour the snake keeps going the way it points
    (head minus second segment), and RIGHT when that is unknown.
    """
    rng = rng or random.Random()
    valid_moves = neighbors4(head, board_size, snake_body, obstacles)
    if valid_moves:
        return direction_between(head, rng.choice(valid_moves))

    if len(snake_body) > 1:
        dx = head[0] - snake_body[1][0]
        dy = head[1] - snake_body[1][1]
        if dx > 0:
            return Direction.RIGHT
        if dx < 0:
            return Direction.LEFT
        if dy > 0:
            return Direction.DOWN
        if dy < 0:
            return Direction.UP
    return Direction.RIGHT


def reachable_cells(
    start: Cell,
    board_size: int,
    snake_body: Sequence[Cell],
    obstacles: Iterable[Cell],
) -> Set[Cell]:
    """Flood fill from start over cells that are valid for the given body."""
    visited = {start}
    queue = [start]
    while queue:
        current = queue.pop()
        for nxt in neighbors4(current, board_size, snake_body, obstacles):
            if nxt not in visited:
                visited.add(nxt)
                queue.append(nxt)
    return visited
