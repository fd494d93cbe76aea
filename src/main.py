"""
Main entry point for playing a Love Strands puzzle in the terminal.

Usage:
    python -m src.main puzzles/love_strands.yaml
    python -m src.main puzzles/love_strands.yaml --solve
    python -m src.main puzzles/love_strands.yaml --words words.txt --verbose
"""

import argparse
import logging
import sys
from typing import Optional

from .game import StrandsGame, WordListOracle, load_puzzle
from .game.models import Feedback
from .grid import parse_path
from .utils.grid_visualizer import render_board, render_legend


HELP_TEXT = """Commands:
  ROW,COL ROW,COL ...   trace a path, e.g. 0,0 1,0 2,0
  hint                  spend points to reveal a theme word
  show                  redraw the board
  quit                  leave the game"""


def print_solutions(game: StrandsGame) -> None:
    """Print every theme word with its path."""
    for i, entry in enumerate(game.puzzle.theme_entries):
        path = game.puzzle.solution_for(i)
        label = " (spangram)" if entry.spangram else ""
        if path is None:
            print(f"{entry.word}{label}: no path")
        else:
            cells = " ".join(f"{c.row},{c.col}" for c in path)
            print(f"{entry.word}{label}: {cells}")


def print_board(game: StrandsGame) -> None:
    print()
    print(render_board(game.puzzle.grid, game.render_state()))
    print(render_legend())
    print(f"{game.progress()}  Points: {game.state.points}  Hint: {'ready' if game.can_use_hint else 'charging'}")


def play_path(game: StrandsGame, line: str) -> Optional[Feedback]:
    """Drive a full drag gesture along a typed path."""
    cells, errors = parse_path(line, game.puzzle.grid)
    if errors:
        for err in errors:
            print(f"  - {err.message}")
        return None

    game.pointer_down(cells[0])
    for cell in cells[1:]:
        if not game.pointer_move(cell):
            print(f"  - Skipped {cell.row},{cell.col}: not a legal next cell")
    return game.pointer_up()


def run(game: StrandsGame) -> int:
    """Interactive loop until the puzzle is complete or the player quits."""
    print(f"Theme: {game.puzzle.theme}")
    print(HELP_TEXT)
    print_board(game)

    while not game.is_complete:
        try:
            line = input("\n> ").strip()
        except EOFError:
            break

        if not line:
            continue
        command = line.lower()

        if command in ("quit", "exit", "q"):
            break
        if command == "show":
            print_board(game)
            continue
        if command == "help":
            print(HELP_TEXT)
            continue

        if command == "hint":
            feedback = game.use_hint()
        else:
            feedback = play_path(game, line)

        if feedback is not None:
            marker = "✓" if feedback.ok else "✗"
            print(f"{marker} {feedback.message}")
            print_board(game)

    if game.is_complete:
        print("\n*** All theme words found! ***")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Play a Love Strands puzzle",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example puzzle.yaml:
  theme: Things I Love About You
  grid:
    - SNOTTS
    - MCAJEN
  theme_entries:
    - word: SMART
    - word: NOTJUSTSEX
      spangram: true
  settings:
    min_word_length: 3
    hint_cost: 3
        """
    )
    parser.add_argument(
        "puzzle",
        help="Path to YAML puzzle file"
    )
    parser.add_argument(
        "--solve",
        action="store_true",
        help="Print the path of every theme word and exit"
    )
    parser.add_argument(
        "--words",
        help="Word list file (one word per line) used to accept non-theme words"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug output to stderr"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        puzzle = load_puzzle(args.puzzle)
        oracle = None
        if args.words:
            oracle = WordListOracle.from_file(args.words, min_length=puzzle.settings.min_word_length)
        game = StrandsGame.create(puzzle, oracle=oracle)
    except Exception as e:
        print(f"Error loading puzzle: {e}", file=sys.stderr)
        sys.exit(1)

    if args.solve:
        print_solutions(game)
        return 0

    try:
        return run(game)
    except KeyboardInterrupt:
        print("\nGame interrupted by user")
        return 0


if __name__ == "__main__":
    sys.exit(main())
