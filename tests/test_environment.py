import numpy as np
import pytest

from algorithms import SnakeController
from algorithms.grid import Direction
from demos.autopilot_demo import play_game, render_board
from game.environment import BODY, FOOD, HEAD, OBSTACLE, SnakeEnv


@pytest.mark.parametrize("difficulty, count", [("EASY", 0), ("MEDIUM", 5), ("HARD", 10), ("EXTREME", 15)])
def test_reset_places_obstacles_per_difficulty(difficulty, count) -> None:
    env = SnakeEnv(board_size=20, difficulty=difficulty, seed=1)
    assert len(env.obstacles) == count
    assert len(set(env.obstacles)) == count
    for x, y in env.obstacles:
        assert 1 <= x < 19 and 1 <= y < 19
    assert env.start not in env.obstacles
    assert env.food_pos not in env.obstacles
    assert env.snake_body == [(5, 5)]


def test_unknown_difficulty_rejected() -> None:
    with pytest.raises(ValueError):
        SnakeEnv(difficulty='IMPOSSIBLE')


def _empty_env(**kwargs):
    env = SnakeEnv(board_size=10, difficulty='EASY', seed=0, **kwargs)
    env.food_pos = (9, 9)
    return env


def test_eating_grows_and_scores() -> None:
    env = _empty_env()
    env.food_pos = (6, 5)
    event, done = env.step(Direction.RIGHT)
    assert (event, done) == ('eat', False)
    assert env.snake_body == [(6, 5), (5, 5)]
    assert env.score == 10
    assert env.food_pos not in env.snake_body


def test_reversal_is_ignored() -> None:
    env = _empty_env()
    env.snake_body = [(6, 5), (5, 5), (4, 5)]
    env.direction = Direction.RIGHT
    event, _ = env.step(Direction.LEFT)
    assert event == 'move'
    assert env.snake_body == [(7, 5), (6, 5), (5, 5)]


def test_two_segment_snake_can_turn_onto_its_tail() -> None:
    env = _empty_env()
    env.snake_body = [(6, 5), (5, 5)]
    env.direction = Direction.RIGHT
    assert env.step(Direction.LEFT) == ('move', False)
    assert env.snake_body == [(5, 5), (6, 5)]
    assert env.direction == Direction.LEFT


def test_autopilot_reaches_food_behind_a_two_segment_snake() -> None:
    """
    The food is right behind the snake, the shortest route goes through
    the tail cell as it empties.
    """
    env = _empty_env()
    env.snake_body = [(6, 5), (5, 5)]
    env.direction = Direction.RIGHT
    env.food_pos = (4, 5)
    controller = SnakeController(env.board_size, *env.snapshot(), 'astar')

    events = []
    for _ in range(2):
        controller.update(*env.snapshot())
        events.append(env.step(controller.get_next_direction()))
    assert events == [('move', False), ('eat', False)]
    assert env.snake_body[0] == (4, 5)
    assert len(env.snake_body) == 3


def test_wall_collision_ends_game() -> None:
    env = _empty_env(start=(0, 0))
    assert env.step(Direction.UP) == ('wall', True)
    assert env.game_over
    assert env.step(Direction.DOWN) == ('over', True)


def test_moving_into_the_tail_is_allowed() -> None:
    env = _empty_env()
    env.snake_body = [(1, 1), (2, 1), (2, 2), (1, 2)]
    env.direction = Direction.LEFT
    assert env.step(Direction.DOWN) == ('move', False)
    assert env.snake_body == [(1, 2), (1, 1), (2, 1), (2, 2)]


def test_self_and_obstacle_collisions() -> None:
    env = _empty_env()
    env.snake_body = [(1, 1), (2, 1), (2, 2), (1, 2), (0, 2)]
    env.direction = Direction.LEFT
    assert env.step(Direction.DOWN) == ('self', True)

    env = _empty_env()
    env.obstacles = [(6, 5)]
    assert env.step(Direction.RIGHT) == ('obstacle', True)


def test_filling_the_board_wins() -> None:
    env = SnakeEnv(board_size=3, difficulty='EASY', seed=0)
    env.snake_body = [(1, 0), (2, 0), (2, 1), (1, 1), (0, 1), (0, 2), (1, 2), (2, 2)]
    env.direction = Direction.LEFT
    env.food_pos = (0, 0)
    assert env.step(Direction.LEFT) == ('won', True)
    assert env.won
    assert env.food_pos is None


def test_grid_and_free_space() -> None:
    env = _empty_env()
    env.obstacles = [(0, 0)]
    env.snake_body = [(5, 5), (4, 5)]
    grid = env.get_grid()
    assert isinstance(grid, np.ndarray)
    assert grid[5, 5] == HEAD
    assert grid[5, 4] == BODY
    assert grid[9, 9] == FOOD
    assert grid[0, 0] == OBSTACLE
    assert env.free_space() == 98


def test_snapshot_is_a_copy() -> None:
    env = _empty_env()
    snake, food, obstacles = env.snapshot()
    snake.append((0, 0))
    assert env.snake_body == [(5, 5)]


def test_render_board_marks_snake_and_food() -> None:
    env = _empty_env()
    text = render_board(env, [(6, 5), (7, 5)])
    rows = text.splitlines()
    assert rows[5].split()[5] == '@'
    assert rows[5].split()[6] == '+'
    assert rows[9].split()[9] == '*'


def test_hamiltonian_autopilot_fills_small_board() -> None:
    env = SnakeEnv(board_size=6, difficulty='EASY', seed=1)
    result = play_game(env, 'hamiltonian', max_steps=5000)
    assert result['event'] == 'won'
    assert result['length'] == 36


@pytest.mark.parametrize("algorithm", ['astar', 'bfs', 'dijkstra', 'greedy'])
def test_search_autopilot_eats_food(algorithm) -> None:
    env = SnakeEnv(board_size=10, difficulty='EASY', seed=3)
    result = play_game(env, algorithm, config={'seed': 3}, max_steps=2000)
    assert result['score'] >= 10
    assert result['steps'] > 0
