"""
Minesweeper Game - Main Entry Point
Console driver for the minesweeper engine
"""

import argparse
import logging
import random
import sys
import os
import time

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from game import ConfigurationError, DIFFICULTIES, ManualScheduler, MinesweeperAPI


HELP_TEXT = """Commands:
  r X Y   reveal the cell at column X, row Y
  f X Y   flag/unflag the cell at column X, row Y
  n       new game
  d NAME  switch difficulty (beginner, intermediate, expert)
  q       quit"""


def print_status(api: MinesweeperAPI):
    state = api.get_game_state()
    print(api.render_text())
    print(f"💣 {state['remaining_mines']}   ⏱️  {state['elapsed_seconds']}s   "
          f"[{state['game_state']}]")
    if state['is_won']:
        print("🏆 You won!")
    elif state['is_lost']:
        print("💥 Game over!")


def play(api: MinesweeperAPI, scheduler: ManualScheduler):
    """Read commands from stdin until quit or end of input"""
    print(HELP_TEXT)
    print_status(api)
    last_tick = time.monotonic()

    for line in sys.stdin:
        # Catch the clock up with wall time before handling the command
        now = time.monotonic()
        scheduler.advance(now - last_tick)
        last_tick = now

        parts = line.split()
        if not parts:
            continue
        command, args = parts[0].lower(), parts[1:]

        if command == 'q':
            break
        elif command == 'n':
            api.restart()
        elif command == 'd' and len(args) == 1:
            try:
                api.select_difficulty(args[0])
            except ConfigurationError as e:
                print(f"❌ {e}")
                continue
        elif command in ('r', 'f') and len(args) == 2:
            try:
                x, y = int(args[0]), int(args[1])
            except ValueError:
                print("❌ Coordinates must be integers")
                continue
            if command == 'r':
                result = api.primary_action(x, y)
            else:
                result = api.secondary_action(x, y)
            if 'error' in result:
                print(f"❌ {result['error']}")
                continue
        else:
            print(HELP_TEXT)
            continue

        print_status(api)


def main(argv=None):
    """Main entry point for the minesweeper game"""
    parser = argparse.ArgumentParser(description='Play minesweeper in the terminal')
    parser.add_argument('--difficulty', default='beginner', choices=list(DIFFICULTIES),
                        help='Board preset (default: beginner)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for mine placement')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(asctime)s %(name)s %(levelname)s %(message)s')

    api = MinesweeperAPI(args.difficulty, rng=random.Random(args.seed))
    try:
        play(api, api.scheduler)
    except KeyboardInterrupt:
        print("\nGame interrupted by user")
    return 0


if __name__ == "__main__":
    sys.exit(main())
