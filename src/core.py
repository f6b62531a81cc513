# core.py
# This file is intended to be the stateless core logic for a sliding-tile merge game.

from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, Tuple
import random


MIN_BOARD_SIZE = 2
MAX_BOARD_SIZE = 8
DEFAULT_BOARD_SIZE = 4
DEFAULT_WIN_TILE = 2048

Line = Tuple[int, ...]
Board = Tuple[Line, ...]


class GameStatus(Enum):
    """Represents the current progress state of the game."""
    PLAYING = "PLAYING"
    WON = "WON"
    LOST = "LOST"


class DIRECTION(Enum):
    """Represents the possible move directions."""
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"


class MoveResult(NamedTuple):
    """Outcome of applying one direction to one board, before any tile is spawned."""
    board: Board
    moved: bool
    score_gained: int


# --- Board Helper Functions ---

def get_board_size(board: Sequence[Sequence[int]]) -> int:
    """
    Gets the size (N) of an N x N board.
    Args:
        board (Sequence[Sequence[int]]): The game board.
    Returns:
        int: The dimension of the board.
    Raises:
        ValueError: If the board is not square or empty.
    """
    if not board or not all(len(row) == len(board) for row in board):
        raise ValueError("Board must be a non-empty square matrix.")
    return len(board)


def to_board(rows: Sequence[Sequence[int]]) -> Board:
    """Freezes any sequence of rows into an immutable Board snapshot."""
    return tuple(tuple(int(cell) for cell in row) for row in rows)


def _is_tile_value(value: int) -> bool:
    return value == 0 or (value >= 2 and value & (value - 1) == 0)


def validate_board(board: Sequence[Sequence[int]]) -> Board:
    """
    Checks a board received from outside the core against the board invariants.
    Args:
        board (Sequence[Sequence[int]]): The candidate board.
    Returns:
        Board: The same board as an immutable snapshot.
    Raises:
        ValueError: If the board is not square, its size is outside the allowed
                    range, or a cell is neither 0 nor a positive power of two.
    """
    n = get_board_size(board)
    if not MIN_BOARD_SIZE <= n <= MAX_BOARD_SIZE:
        raise ValueError(
            f"Board size must be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}, got {n}."
        )
    for r, row in enumerate(board):
        for c, value in enumerate(row):
            if isinstance(value, bool) or not isinstance(value, int) or not _is_tile_value(value):
                raise ValueError(f"Invalid cell value {value!r} at ({r}, {c}).")
    return to_board(board)


def clamp_board_size(size: object) -> int:
    """
    Clamps a requested board size into the supported range.
    Args:
        size (object): The requested size; anything not parseable as an integer
                       falls back to the default size.
    Returns:
        int: A size in [MIN_BOARD_SIZE, MAX_BOARD_SIZE].
    """
    try:
        requested = int(size)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        requested = DEFAULT_BOARD_SIZE
    return max(MIN_BOARD_SIZE, min(MAX_BOARD_SIZE, requested))


def create_empty_board(size: int) -> Board:
    """Builds a size x size board with every cell empty."""
    return tuple((0,) * size for _ in range(size))


def get_empty_cells(board: Sequence[Sequence[int]]) -> List[Tuple[int, int]]:
    """
    Get coordinates of empty (0-value) cells in the given board, in row-major order.
    Args:
        board (Sequence[Sequence[int]]): The board to check.
    Returns:
        List[Tuple[int, int]]: List of (row, col) tuples for empty cells.
    """
    n = get_board_size(board)
    empty_cells = []
    for row in range(n):
        for col in range(n):
            if board[row][col] == 0:
                empty_cells.append((row, col))
    return empty_cells


def add_random_tile(board: Sequence[Sequence[int]], rng: Optional[random.Random] = None) -> Board:
    """
    Adds a new tile (90% chance of 2, 10% chance of 4) to a uniformly chosen empty cell.
    Args:
        board (Sequence[Sequence[int]]): The current game board. Never modified.
        rng (Optional[random.Random]): Source of randomness; the `random` module when omitted.
    Returns:
        Board: A new board with exactly one previously empty cell filled, or the
               same cell values if the board has no empty cell.
    """
    source = rng if rng is not None else random
    empty_cells = get_empty_cells(board)
    if not empty_cells:
        return to_board(board)

    row, col = source.choice(empty_cells)
    value = 2 if source.random() < 0.9 else 4
    return tuple(
        tuple(value if (r, c) == (row, col) else cell for c, cell in enumerate(line))
        for r, line in enumerate(board)
    )


def initialize_board(size: int = DEFAULT_BOARD_SIZE, rng: Optional[random.Random] = None) -> Board:
    """
    Initializes a new game board with two random tiles.
    Args:
        size (int): The requested dimension; clamped into the supported range.
        rng (Optional[random.Random]): Source of randomness.
    Returns:
        Board: The initial board.
    """
    board = create_empty_board(clamp_board_size(size))
    board = add_random_tile(board, rng)
    board = add_random_tile(board, rng)
    return board


# --- Line Manipulation (Core Move Logic) ---

def reduce_line(line: Sequence[int]) -> Tuple[Line, int]:
    """
    Slides a single line toward index 0, merging equal neighbours at most once each.
    Args:
        line (Sequence[int]): The line to reduce.
    Returns:
        Tuple[Line, int]: The reduced line (same length) and the score gained.
    """
    tiles = [value for value in line if value != 0]
    reduced: List[int] = []
    score_gained = 0
    i = 0
    while i < len(tiles):
        if i + 1 < len(tiles) and tiles[i] == tiles[i + 1]:
            merged_value = tiles[i] * 2
            reduced.append(merged_value)
            score_gained += merged_value
            i += 2  # the merged tile is not compared again this pass
        else:
            reduced.append(tiles[i])
            i += 1

    reduced += [0] * (len(line) - len(reduced))
    return tuple(reduced), score_gained


# --- Board Transformations ---

def transpose_board(board: Sequence[Sequence[int]]) -> Board:
    """
    Transposes a given board (swaps rows and columns).
    Args:
        board (Sequence[Sequence[int]]): The board to transpose.
    Returns:
        Board: A new transposed board.
    """
    get_board_size(board)
    return tuple(zip(*board))


def reverse_rows(board: Sequence[Sequence[int]]) -> Board:
    """
    Reverses each row in a given board.
    Args:
        board (Sequence[Sequence[int]]): The board whose rows are to be reversed.
    Returns:
        Board: A new board with rows reversed.
    """
    return tuple(tuple(row[::-1]) for row in board)


# --- Core Game Move Processing ---

def _apply_left_processing_to_all_lines(board: Sequence[Sequence[int]]) -> MoveResult:
    """
    Reduces every row of a board toward the left.
    Args:
        board (Sequence[Sequence[int]]): The board to process.
    Returns:
        MoveResult: The processed board, whether any row changed, and the total score gained.
    """
    get_board_size(board)
    rows = []
    moved = False
    score_gained = 0
    for row in board:
        reduced, row_score = reduce_line(row)
        if reduced != tuple(row):
            moved = True
        score_gained += row_score
        rows.append(reduced)
    return MoveResult(tuple(rows), moved, score_gained)


def process_move(board: Sequence[Sequence[int]], direction: DIRECTION) -> MoveResult:
    """
    Processes a move in the specified direction without touching the input board.
    Args:
        board (Sequence[Sequence[int]]): The current game board.
        direction (DIRECTION): The direction to move.
    Returns:
        MoveResult: The board after sliding and merging (no tile spawned), whether it
                    changed, and the score gained. An unchanged move returns a board
                    equal to the input and a score of 0.
    Raises:
        ValueError: If the board is not square or an invalid direction is specified.
    """
    if direction == DIRECTION.LEFT:
        return _apply_left_processing_to_all_lines(board)

    if direction == DIRECTION.RIGHT:
        result = _apply_left_processing_to_all_lines(reverse_rows(board))
        return result._replace(board=reverse_rows(result.board))

    if direction == DIRECTION.UP:
        result = _apply_left_processing_to_all_lines(transpose_board(board))
        return result._replace(board=transpose_board(result.board))

    if direction == DIRECTION.DOWN:
        result = process_move(transpose_board(board), DIRECTION.RIGHT)
        return result._replace(board=transpose_board(result.board))

    raise ValueError("Invalid direction specified for process_move.")


# --- Game State Checks ---

def check_for_win(board: Sequence[Sequence[int]], win_tile: int = DEFAULT_WIN_TILE) -> bool:
    """
    Check if the game is won (a tile with exactly the win_tile value exists).
    Args:
        board (Sequence[Sequence[int]]): The game board.
        win_tile (int): The tile value that signifies a win. Default is 2048.
    Returns:
        bool: True if the game is won, False otherwise.
    """
    return any(cell == win_tile for row in board for cell in row)


def can_move(board: Sequence[Sequence[int]]) -> bool:
    """
    Checks whether any direction could change the board.
    Args:
        board (Sequence[Sequence[int]]): The game board.
    Returns:
        bool: True if there is an empty cell or two equal orthogonal neighbours.
    """
    n = get_board_size(board)
    if get_empty_cells(board):
        return True

    for r in range(n):
        for c in range(n - 1):
            if board[r][c] == board[r][c + 1]:
                return True

    for c in range(n):
        for r in range(n - 1):
            if board[r][c] == board[r + 1][c]:
                return True

    return False


def determine_game_status(board: Sequence[Sequence[int]], win_tile: int = DEFAULT_WIN_TILE) -> GameStatus:
    """
    Determines the progress state of the game from the board alone.
    Args:
        board (Sequence[Sequence[int]]): The current game board.
        win_tile (int): The tile value that signifies a win. Default is 2048.
    Returns:
        GameStatus: WON if the win tile is present, else LOST if no move is left,
                    else PLAYING.
    """
    if check_for_win(board, win_tile):
        return GameStatus.WON
    if not can_move(board):
        return GameStatus.LOST
    return GameStatus.PLAYING
