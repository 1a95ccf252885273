"""
Autopilot Demo - watch the pathfinding strategies play Snake
Runs the controller inside the headless environment, prints the board
as text and reports scores for one or all strategies.
"""

import time

from algorithms import ALGORITHMS, SnakeController
from game.environment import SnakeEnv

SYMBOLS = {'empty': '.', 'body': 'o', 'head': '@', 'food': '*', 'obstacle': '#', 'path': '+'}


def render_board(env, path=None):
    """Text picture of the board, with the planned path marked"""
    rows = [[SYMBOLS['empty'] for _ in range(env.board_size)] for _ in range(env.board_size)]
    for x, y in path or []:
        if 0 <= x < env.board_size and 0 <= y < env.board_size:
            rows[y][x] = SYMBOLS['path']
    for x, y in env.obstacles:
        rows[y][x] = SYMBOLS['obstacle']
    if env.food_pos is not None:
        rows[env.food_pos[1]][env.food_pos[0]] = SYMBOLS['food']
    for i, (x, y) in enumerate(env.snake_body):
        rows[y][x] = SYMBOLS['head'] if i == 0 else SYMBOLS['body']
    return "\n".join(" ".join(row) for row in rows)


def play_game(env, algorithm='astar', config=None, max_steps=10000, show_board=False, delay=0.0):
    """
    Play one game with the controller

    Args:
        env: SnakeEnv to play in (reset by the caller)
        algorithm: strategy name
        config: strategy config dict
        max_steps: safety limit against endless loops
        show_board: print the board after every move
        delay: seconds to sleep between printed moves

    Returns:
        dict with score, length, steps and the final event
    """
    snake, food, obstacles = env.snapshot()
    controller = SnakeController(env.board_size, snake, food, obstacles, algorithm, config)

    event = 'move'
    done = False
    while not done:
        controller.update(*env.snapshot())
        action = controller.get_next_direction()
        event, done = env.step(action)

        if show_board:
            print(render_board(env, controller.get_path()))
            print(f"Step {env.steps} | Score {env.score} | {event}\n")
            if delay:
                time.sleep(delay)

        # Safety check: prevent infinite loops
        if env.steps >= max_steps and not done:
            print(f"WARNING: Game exceeded {max_steps} steps. Ending game.")
            event = 'timeout'
            done = True

    return {
        'score': env.score,
        'length': len(env.snake_body),
        'steps': env.steps,
        'event': event,
    }


def run_autopilot(
    algorithm='astar',
    num_games=1,
    board_size=20,
    difficulty='MEDIUM',
    max_steps=10000,
    seed=None,
    config=None,
    show_board=False,
    delay=0.0
):
    """
    Play several games with one strategy and print a summary

    Returns:
        list of per-game result dicts
    """
    env = SnakeEnv(board_size=board_size, difficulty=difficulty, seed=seed)
    results = []

    print("\n" + "="*60)
    print(f"Autopilot: {algorithm} | {board_size}x{board_size} | {difficulty}")
    print("="*60)

    for game in range(num_games):
        env.reset()
        result = play_game(env, algorithm, config, max_steps, show_board, delay)
        results.append(result)
        print(f"Game {game + 1}/{num_games} finished | Score: {result['score']} | "
              f"Length: {result['length']} | Steps: {result['steps']} | End: {result['event']}")

    scores = [r['score'] for r in results]
    print("-"*60)
    print(f"Average Score: {sum(scores)/len(scores):.1f}")
    print(f"Best Score: {max(scores)}")
    print(f"Worst Score: {min(scores)}")
    print("="*60 + "\n")
    return results


def compare_algorithms(num_games=5, board_size=20, difficulty='MEDIUM', max_steps=10000, seed=0, config=None):
    """
    Run every strategy on the same seeded boards and print a table

    Returns:
        dict of algorithm name -> list of results
    """
    summary = {}
    for algorithm in ALGORITHMS:
        env = SnakeEnv(board_size=board_size, difficulty=difficulty, seed=seed)
        results = []
        for _ in range(num_games):
            env.reset()
            results.append(play_game(env, algorithm, config, max_steps))
        summary[algorithm] = results

    print("\n" + "="*60)
    print(f"Algorithm comparison | {num_games} game(s) | {board_size}x{board_size} | {difficulty}")
    print("="*60)
    print(f"{'Algorithm':<12} {'Avg score':>10} {'Best':>8} {'Avg steps':>10} {'Timeouts':>9}")
    for algorithm, results in summary.items():
        scores = [r['score'] for r in results]
        steps = [r['steps'] for r in results]
        timeouts = sum(1 for r in results if r['event'] == 'timeout')
        print(f"{algorithm:<12} {sum(scores)/len(scores):>10.1f} {max(scores):>8} "
              f"{sum(steps)/len(steps):>10.1f} {timeouts:>9}")
    print("="*60 + "\n")
    return summary


if __name__ == "__main__":
    run_autopilot(
        algorithm='hamiltonian',
        num_games=1,
        board_size=10,
        difficulty='EASY',
        show_board=True,
        delay=0.05
    )
