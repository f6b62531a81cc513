# cli_driver.py
# This file is intended to be run to play or test the 2048 game on the CLI

from typing import List, Optional, Sequence
import argparse
import logging
import random

import core
from best_score import FileBestScoreStore
from controller import GameController, GameState
from settings import load_settings

logger = logging.getLogger(__name__)

DIRECTION_KEYS = {'W': core.DIRECTION.UP, 'A': core.DIRECTION.LEFT, 'S': core.DIRECTION.DOWN, 'D': core.DIRECTION.RIGHT}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    settings = load_settings()
    parser = argparse.ArgumentParser(description='Play 2048 in the terminal')
    parser.add_argument('--size', type=int, default=settings.board_size, help='Board side length, clamped to 2..8 (default: %(default)s)')
    parser.add_argument('--win-tile', type=int, default=settings.win_tile, help='Tile value that wins the game (default: %(default)s)')
    parser.add_argument('--seed', type=int, default=settings.seed, help='Seed for reproducible tile spawning')
    parser.add_argument('--best-score-file', default=settings.best_score_path, help='Where the best score is kept (default: %(default)s)')
    parser.add_argument('--log-level', default=settings.log_level, help='Logging level (default: %(default)s)')
    return parser.parse_args(argv)


def _read(prompt: str) -> Optional[str]:
    """Reads one stripped line of input; None once input is exhausted (Ctrl-D)."""
    try:
        return input(prompt).strip()
    except EOFError:
        print()
        return None


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    rng = random.Random(args.seed) if args.seed is not None else None
    game = GameController(
        size=args.size,
        win_tile=args.win_tile,
        store=FileBestScoreStore(args.best_score_file),
        rng=rng,
    )
    display_board_state(game.state)

    # Game Loop
    while True:
        move_input = _read("Enter move (W/A/S/D for Up/Left/Down/Right, N for new game, Q to quit): ")

        if move_input is None or move_input.upper() == 'Q':
            print("Quitting game.")
            break
        move_input = move_input.upper()

        if move_input == 'N':
            size_input = _read(f"Board size [{game.state.size}]: ")
            if size_input is None:
                print("Quitting game.")
                break
            game.new_game(size_input or None)
            display_board_state(game.state)
            continue

        chosen_direction = DIRECTION_KEYS.get(move_input)
        if not chosen_direction:
            print("Invalid input. Use W, A, S, D, N or Q.")
            continue

        if game.state.status != core.GameStatus.PLAYING:
            print("The game is over. Press N for a new game or Q to quit.")
            continue

        previous = game.state
        if game.apply_move(chosen_direction) is previous:
            print("Move did not change the board. Try a different direction.")
            continue

        display_board_state(game.state)
        if game.state.status == core.GameStatus.WON:
            print(f"Congratulations! You reached the {game.state.win_tile} tile!")
        elif game.state.status == core.GameStatus.LOST:
            print("No more moves possible. Better luck next time!")


# --- Display Function (Example of external usage) ---
def format_board(board: Sequence[Sequence[int]]) -> str:
    """Renders the board as tab-separated rows, with empty cells shown as dots."""
    return "\n".join("\t".join(str(cell) if cell else "." for cell in row) for row in board)


def display_board_state(state: GameState):
    """Prints the board, score, best score and game status to the console."""
    print(f"\nScore: {state.score}\tBest: {state.best_score}")
    status_message = {
        core.GameStatus.PLAYING: f"Status: {state.status.name}",
        core.GameStatus.WON: "YOU WON!",
        core.GameStatus.LOST: "GAME OVER!"
    }
    print(status_message[state.status])
    print(format_board(state.board))
    print("-" * (state.size * 6)) # Adjust width based on board size


if __name__ == "__main__":
    main()
