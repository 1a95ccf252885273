import random

from algorithms.grid import (
    Direction,
    direction_between,
    is_valid_cell,
    manhattan,
    neighbors4,
    opposite,
    random_valid_direction,
    reachable_cells,
    step,
)


def test_is_valid_cell_rejects_bounds_obstacles_and_body() -> None:
    snake = [(2, 2), (2, 3), (2, 4)]
    obstacles = {(5, 5)}
    assert not is_valid_cell((-1, 0), 10, snake, obstacles)
    assert not is_valid_cell((0, 10), 10, snake, obstacles)
    assert not is_valid_cell((5, 5), 10, snake, obstacles)
    assert not is_valid_cell((2, 2), 10, snake, obstacles)
    assert not is_valid_cell((2, 3), 10, snake, obstacles)
    assert is_valid_cell((0, 0), 10, snake, obstacles)


def test_tail_is_not_blocking() -> None:
    """
    The tail moves away on the next tick, so it counts as free.
    """
    snake = [(2, 2), (2, 3), (2, 4)]
    assert is_valid_cell((2, 4), 10, snake, set())


def test_neighbors4_order_is_up_down_left_right() -> None:
    assert neighbors4((5, 5), 10, [(5, 5)], set()) == [(5, 4), (5, 6), (4, 5), (6, 5)]


def test_neighbors4_filters_invalid_cells() -> None:
    snake = [(0, 0), (1, 0), (2, 0)]
    assert neighbors4((0, 0), 10, snake, {(0, 1)}) == []
    assert neighbors4((1, 1), 10, snake, set()) == [(1, 2), (0, 1), (2, 1)]


def test_manhattan_weight() -> None:
    assert manhattan((0, 0), (3, 4)) == 7
    assert manhattan((0, 0), (3, 4), weight=2) == 14
    assert manhattan((1, 1), (1, 1)) == 0


def test_direction_between_checks_horizontal_first() -> None:
    assert direction_between((0, 0), (1, 1)) == Direction.RIGHT
    assert direction_between((1, 1), (0, 0)) == Direction.LEFT
    assert direction_between((1, 1), (1, 0)) == Direction.UP
    assert direction_between((1, 1), (1, 2)) == Direction.DOWN
    assert direction_between((3, 3), (3, 3)) == Direction.RIGHT


def test_step_and_opposite() -> None:
    assert step((3, 3), Direction.UP) == (3, 2)
    assert step((3, 3), Direction.LEFT) == (2, 3)
    assert opposite(Direction.UP) == Direction.DOWN
    assert opposite(Direction.RIGHT) == Direction.LEFT


def test_random_valid_direction_picks_a_safe_move() -> None:
    rng = random.Random(0)
    snake = [(0, 0), (1, 0)]
    for _ in range(20):
        direction = random_valid_direction((0, 0), snake, 10, set(), rng)
        # (1, 0) is the tail, so RIGHT is fine as well as DOWN
        assert direction in (Direction.DOWN, Direction.RIGHT)


def test_random_valid_direction_when_boxed_in() -> None:
    """
    With no valid neighbour the snake keeps the way it points.
    """
    snake = [(0, 0), (1, 0), (1, 1), (0, 1), (0, 2)]
    assert random_valid_direction((0, 0), snake, 10, set()) == Direction.LEFT
    assert random_valid_direction((0, 0), [(0, 0)], 10, {(1, 0), (0, 1)}) == Direction.RIGHT


def test_reachable_cells_respects_walls() -> None:
    obstacles = {(1, y) for y in range(4)}
    cells = reachable_cells((0, 0), 4, [(0, 0)], obstacles)
    assert cells == {(0, 0), (0, 1), (0, 2), (0, 3)}
