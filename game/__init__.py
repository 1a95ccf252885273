"""Game module - Contains the headless Snake environment the controller plays in"""
from .environment import SnakeEnv, DIFFICULTY_SETTINGS

__all__ = ['SnakeEnv', 'DIFFICULTY_SETTINGS']
