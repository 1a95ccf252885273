"""
Snake Game Environment (headless)
Runs the game rules the controller plays against: moving, eating,
growing, food spawning, obstacles per difficulty and collisions.
"""

import logging
import random

import numpy as np

from algorithms.grid import DIRS, Direction, as_cell, opposite, reachable_cells

logger = logging.getLogger(__name__)

# Obstacle count per difficulty
DIFFICULTY_SETTINGS = {
    'EASY': {'obstacle_count': 0},
    'MEDIUM': {'obstacle_count': 5},
    'HARD': {'obstacle_count': 10},
    'EXTREME': {'obstacle_count': 15},
}

FOOD_SCORE = 10

# Cell codes used by get_grid()
EMPTY, BODY, HEAD, FOOD, OBSTACLE = 0, 1, 2, 3, 4


class SnakeEnv:
    def __init__(self, board_size=20, difficulty='MEDIUM', seed=None, start=None):
        """
        Initialize Snake Environment

        Args:
            board_size: Side length of the square board
            difficulty: EASY, MEDIUM, HARD or EXTREME (sets the obstacle count)
            seed: Random seed for obstacle and food placement
            start: (x, y) start cell of the snake. If None, uses (5, 5) or the centre of small boards
        """
        if board_size < 3:
            raise ValueError(f"board_size must be at least 3, got {board_size}")
        if difficulty not in DIFFICULTY_SETTINGS:
            raise ValueError(f"Unknown difficulty {difficulty!r}")
        self.board_size = board_size
        self.difficulty = difficulty
        self.rng = random.Random(seed)
        if start is None:
            start = (min(5, board_size // 2), min(5, board_size // 2))
        self.start = as_cell(start)

        self.reset()

    def reset(self):
        """Reset the game to initial state (new obstacles and food)"""
        # Snake starts as a single segment moving right
        self.snake_body = [self.start]
        self.direction = Direction.RIGHT
        self.score = 0
        self.steps = 0
        self.game_over = False
        self.won = False

        # Obstacles and the first food stay off the border
        self.obstacles = []
        self.food_pos = self._random_inner_cell(exclude=set(self.snake_body))
        obstacle_count = DIFFICULTY_SETTINGS[self.difficulty]['obstacle_count']
        for _ in range(obstacle_count):
            cell = self._random_inner_cell(
                exclude=set(self.snake_body) | set(self.obstacles) | {self.food_pos}
            )
            if cell is None:
                break
            self.obstacles.append(cell)

        logger.debug("New game: %d obstacles, food at %s", len(self.obstacles), self.food_pos)
        return self.snapshot()

    def _random_inner_cell(self, exclude):
        inner = [
            (x, y) for x in range(1, self.board_size - 1)
            for y in range(1, self.board_size - 1)
            if (x, y) not in exclude
        ]
        return self.rng.choice(inner) if inner else None

    def _spawn_food(self):
        """Spawn food at random empty position"""
        taken = set(self.snake_body) | set(self.obstacles)
        empties = [
            (x, y) for x in range(self.board_size)
            for y in range(self.board_size)
            if (x, y) not in taken
        ]
        return self.rng.choice(empties) if empties else None

    def _check_collision_type(self, pos, will_grow):
        """
        Check collision type for the new head position
        The tail only counts when the snake grows (otherwise it moves away)
        Returns: 'wall', 'obstacle', 'self', or None
        """
        if not (0 <= pos[0] < self.board_size and 0 <= pos[1] < self.board_size):
            return 'wall'
        if pos in self.obstacles:
            return 'obstacle'
        body = self.snake_body if will_grow else self.snake_body[:-1]
        if pos in body:
            return 'self'
        return None

    def step(self, action):
        """
        Move the snake one cell

        Args:
            action: Direction (0=UP, 1=DOWN, 2=LEFT, 3=RIGHT)

        Returns:
            event: 'move', 'eat', 'won', or the collision type ('wall', 'self', 'obstacle')
            done: whether game is over
        """
        if self.game_over:
            return 'over', True
        self.steps += 1

        # Update direction (prevent 180-degree turns, a 2-segment snake may turn onto its tail)
        action = Direction(action)
        if len(self.snake_body) <= 2 or action != opposite(self.direction):
            self.direction = action

        dx, dy = DIRS[self.direction]
        head_x, head_y = self.snake_body[0]
        new_head = (head_x + dx, head_y + dy)
        will_grow = new_head == self.food_pos

        collision_type = self._check_collision_type(new_head, will_grow)
        if collision_type:
            self.game_over = True
            logger.info("Game over at step %d: hit %s at %s, score %d",
                        self.steps, collision_type, new_head, self.score)
            return collision_type, True

        self.snake_body.insert(0, new_head)
        if not will_grow:
            self.snake_body.pop()
            return 'move', False

        self.score += FOOD_SCORE
        self.food_pos = self._spawn_food()
        if self.food_pos is None:
            # Board is full - game won!
            self.game_over = True
            self.won = True
            logger.info("Board filled after %d steps, score %d", self.steps, self.score)
            return 'won', True
        return 'eat', False

    def snapshot(self):
        """Copies of (snake, food, obstacles) for handing to the controller"""
        return list(self.snake_body), self.food_pos, list(self.obstacles)

    def get_grid(self):
        """Board as a numpy array indexed by [y, x] (see the cell codes above)"""
        grid = np.zeros((self.board_size, self.board_size), dtype=np.int8)
        for x, y in self.obstacles:
            grid[y, x] = OBSTACLE
        for x, y in self.snake_body[1:]:
            grid[y, x] = BODY
        if self.food_pos is not None:
            grid[self.food_pos[1], self.food_pos[0]] = FOOD
        head_x, head_y = self.snake_body[0]
        if 0 <= head_x < self.board_size and 0 <= head_y < self.board_size:
            grid[head_y, head_x] = HEAD
        return grid

    def free_space(self):
        """Count cells reachable from the head (flood fill, tail counts as free)"""
        head = self.snake_body[0]
        return len(reachable_cells(head, self.board_size, self.snake_body, set(self.obstacles))) - 1
