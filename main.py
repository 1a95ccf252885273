"""
Snake Autopilot - Main Entry Point
Run this file to watch and compare the pathfinding strategies
"""

import logging
import os
import sys

from algorithms import ALGORITHMS
from game.environment import DIFFICULTY_SETTINGS


def clear_screen():
    """Clear the terminal screen"""
    os.system('cls' if os.name == 'nt' else 'clear')


def print_banner():
    """Print the game banner"""
    print("\n" + "="*60)
    print("  🐍  SNAKE AUTOPILOT  🐍")
    print("="*60)


def print_menu():
    """Print the main menu"""
    print("\nChoose an option:")
    print("  1. 🤖 Watch Autopilot (pick a strategy)")
    print("  2. 📊 Compare All Strategies")
    print("  3. 🔁 Show Hamiltonian Cycle")
    print("  4. 🚪 Exit")
    print()


def get_config(mode_name, show_algorithm=True, show_tunables=True):
    """
    Get configuration from user for a specific mode

    Args:
        mode_name: Name of the mode (for display)
        show_algorithm: Whether to ask which strategy to use
        show_tunables: Whether to ask for heuristic weight / shortcut threshold

    Returns:
        dict: Configuration dictionary with keys: board_size, difficulty, algorithm, algorithm_config
    """
    print("\n" + "="*60)
    print(f"Configuration for {mode_name}")
    print("="*60)
    print("Press Enter to use default values shown in [brackets]\n")

    config = {}

    try:
        board_size = input("Board size [20]: ").strip()
        config['board_size'] = int(board_size) if board_size else 20
    except ValueError:
        print("Invalid input. Using default 20x20 board.")
        config['board_size'] = 20

    difficulty = input(f"Difficulty {'/'.join(DIFFICULTY_SETTINGS)} [MEDIUM]: ").strip().upper()
    config['difficulty'] = difficulty if difficulty in DIFFICULTY_SETTINGS else 'MEDIUM'

    if show_algorithm:
        algorithm = input(f"Strategy {'/'.join(ALGORITHMS)} [astar]: ").strip().lower()
        config['algorithm'] = algorithm or 'astar'
    else:
        config['algorithm'] = 'astar'

    algorithm_config = {}
    if show_tunables:
        try:
            weight = input("A* heuristic weight [1.0]: ").strip()
            algorithm_config['heuristic_weight'] = float(weight) if weight else 1.0
            threshold = input("Hamiltonian shortcut threshold in % [33]: ").strip()
            algorithm_config['shortcut_threshold'] = int(threshold) if threshold else 33
        except ValueError:
            print("Invalid input. Using default tunables.")
            algorithm_config = {}
    config['algorithm_config'] = algorithm_config

    print("\n" + "="*60)
    print("Configuration Summary:")
    print("="*60)
    print(f"  Board Size: {config['board_size']}x{config['board_size']}")
    print(f"  Difficulty: {config['difficulty']}")
    if show_algorithm:
        print(f"  Strategy: {config['algorithm']}")
    for key, value in algorithm_config.items():
        print(f"  {key}: {value}")
    print("="*60 + "\n")

    return config


def watch_autopilot():
    """Play games with one strategy"""
    config = get_config("Watch Autopilot")

    try:
        num_games = int(input("\nNumber of games to watch [1]: ").strip() or "1")
    except ValueError:
        num_games = 1

    show_board = input("Print the board every move? [y/N]: ").strip().lower() == 'y'

    try:
        from demos.autopilot_demo import run_autopilot
        run_autopilot(
            algorithm=config['algorithm'],
            num_games=num_games,
            board_size=config['board_size'],
            difficulty=config['difficulty'],
            config=config['algorithm_config'],
            show_board=show_board,
            delay=0.05 if show_board else 0.0
        )
    except ValueError as e:
        print(f"❌ Invalid configuration: {e}")

    input("\nPress Enter to return to menu...")


def compare_strategies():
    """Run every strategy on the same boards"""
    config = get_config("Strategy Comparison", show_algorithm=False)

    try:
        num_games = int(input("\nGames per strategy [5]: ").strip() or "5")
    except ValueError:
        num_games = 5

    print(f"\n🚀 Running {num_games} game(s) for each of {len(ALGORITHMS)} strategies...\n")

    try:
        from demos.autopilot_demo import compare_algorithms
        compare_algorithms(
            num_games=num_games,
            board_size=config['board_size'],
            difficulty=config['difficulty'],
            config=config['algorithm_config']
        )
    except ValueError as e:
        print(f"❌ Invalid configuration: {e}")

    input("\nPress Enter to return to menu...")


def show_cycle():
    """Print the cycle the Hamiltonian strategy follows"""
    try:
        board_size = int(input("\nBoard size [10]: ").strip() or "10")
    except ValueError:
        board_size = 10

    from algorithms.hamilton_cycle import visualize_cycle
    visualize_cycle(board_size)

    input("\nPress Enter to return to menu...")


def main():
    """Main menu loop"""
    logging.basicConfig(
        level=os.environ.get("SNAKE_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    while True:
        clear_screen()
        print_banner()
        print_menu()

        choice = input("Enter your choice (1-4): ").strip()

        if choice == '1':
            watch_autopilot()
        elif choice == '2':
            compare_strategies()
        elif choice == '3':
            show_cycle()
        elif choice == '4':
            print("\n👋 Thanks for watching! Goodbye!\n")
            sys.exit(0)
        else:
            print("\n❌ Invalid choice. Please enter 1-4.")
            input("Press Enter to continue...")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n\n👋 Interrupted by user. Goodbye!\n")
        sys.exit(0)
