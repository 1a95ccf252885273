import logging

import pytest

from algorithms import (
    AStarAlgorithm,
    BFSAlgorithm,
    DijkstraAlgorithm,
    GreedyAlgorithm,
    HamiltonianAlgorithm,
    SnakeController,
    create_algorithm,
)
from algorithms.factory import DEFAULT_CONFIG, resolve_config
from algorithms.grid import Direction


@pytest.mark.parametrize("name, cls", [
    ("astar", AStarAlgorithm),
    ("bfs", BFSAlgorithm),
    ("dijkstra", DijkstraAlgorithm),
    ("greedy", GreedyAlgorithm),
    ("hamiltonian", HamiltonianAlgorithm),
])
def test_factory_builds_initialized_strategy(name, cls) -> None:
    algo = create_algorithm(name, 10, [(5, 5)], (5, 6), [])
    assert type(algo) is cls
    assert algo.board_size == 10
    assert algo.snake == [(5, 5)]


def test_unknown_algorithm_defaults_to_astar(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        algo = create_algorithm("dfs", 10, [(5, 5)], (5, 6), [])
    assert type(algo) is AStarAlgorithm
    assert "unknown_algorithm" in [getattr(r, "event", None) for r in caplog.records]


def test_factory_passes_tunables() -> None:
    astar = create_algorithm("astar", 10, [(5, 5)], (5, 6), [], {"heuristic_weight": 2.5})
    assert astar.heuristic_weight == 2.5
    ham = create_algorithm("hamiltonian", 10, [(5, 5)], (5, 6), [], {"shortcut_threshold": 50})
    assert ham.shortcut_threshold == 50


def test_resolve_config_defaults_and_clamping(caplog) -> None:
    assert resolve_config() == DEFAULT_CONFIG
    assert resolve_config({"heuristic_weight": None})["heuristic_weight"] == 1.0
    with caplog.at_level(logging.WARNING):
        assert resolve_config({"shortcut_threshold": 150})["shortcut_threshold"] == 100
    assert resolve_config({"shortcut_threshold": -5})["shortcut_threshold"] == 0
    with pytest.raises(ValueError):
        resolve_config({"heuristic_weight": -0.5})


@pytest.mark.parametrize("snake, expected", [
    ([(5, 5)], Direction.RIGHT),
    ([(4, 5), (5, 5)], Direction.LEFT),
    ([(6, 5), (5, 5)], Direction.RIGHT),
    ([(5, 4), (5, 5)], Direction.UP),
    ([(5, 6), (5, 5)], Direction.DOWN),
])
def test_current_direction_from_head_and_neck(snake, expected) -> None:
    assert SnakeController.current_direction(snake) == expected


def test_controller_end_to_end_adjacent_food() -> None:
    controller = SnakeController(10, [(5, 5)], (5, 6), [], "astar")
    controller.update([(5, 5)], (5, 6), [])
    assert controller.get_next_direction() == Direction.DOWN
    assert controller.get_path() == [(5, 6)]


def test_controller_boxed_in_does_not_raise() -> None:
    controller = SnakeController(10, [(0, 0)], (5, 5), [(1, 0), (0, 1)], "astar")
    assert controller.pathfinder.find_path((0, 0), (5, 5)) is None
    assert controller.get_next_direction([(0, 0)]) == Direction.RIGHT


def test_switching_algorithm_rebuilds_strategy() -> None:
    controller = SnakeController(10, [(5, 5)], (5, 6), [], "astar")
    assert controller.get_hamiltonian_cycle() == []
    first = controller.pathfinder

    controller.update([(5, 6), (5, 5)], (0, 9), [])
    controller.set_algorithm("hamiltonian", {"shortcut_threshold": 20})
    assert controller.pathfinder is not first
    assert isinstance(controller.pathfinder, HamiltonianAlgorithm)
    assert controller.pathfinder.snake == [(5, 6), (5, 5)]
    assert controller.pathfinder.shortcut_threshold == 20
    assert len(controller.get_hamiltonian_cycle()) == 100


def test_controller_rejects_empty_snake() -> None:
    with pytest.raises(ValueError):
        SnakeController(10, [], (5, 6), [])


def test_controller_copies_caller_state() -> None:
    snake = [[5, 5], [4, 5]]
    controller = SnakeController(10, snake, [5, 8], [], "bfs")
    snake.insert(0, [6, 5])
    assert controller.snake == [(5, 5), (4, 5)]
    assert controller.pathfinder.snake == [(5, 5), (4, 5)]
