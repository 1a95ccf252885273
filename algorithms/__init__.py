"""Algorithms module - Pathfinding strategies and the controller that drives the snake"""
from .grid import Direction
from .search import AStarAlgorithm, BFSAlgorithm, DijkstraAlgorithm, GreedyAlgorithm
from .hamilton_cycle import HamiltonianAlgorithm, visualize_cycle, generate_hamiltonian_cycle
from .factory import ALGORITHMS, create_algorithm
from .controller import SnakeController

__all__ = [
    'Direction',
    'AStarAlgorithm',
    'BFSAlgorithm',
    'DijkstraAlgorithm',
    'GreedyAlgorithm',
    'HamiltonianAlgorithm',
    'visualize_cycle',
    'generate_hamiltonian_cycle',
    'ALGORITHMS',
    'create_algorithm',
    'SnakeController',
]
