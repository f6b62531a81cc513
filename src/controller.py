# controller.py
# Turn-by-turn game state machine built on the stateless core.

from typing import Optional
import logging
import random

from pydantic import BaseModel, ConfigDict, Field

import core
from best_score import BestScoreStore, BestScoreTracker, InMemoryBestScoreStore

logger = logging.getLogger(__name__)


class GameState(BaseModel):
    """Immutable snapshot of one game. Every transition returns a new instance."""
    model_config = ConfigDict(frozen=True)

    board: core.Board = Field(..., description="The N x N board.")
    score: int = Field(default=0, ge=0, description="Score of the current game.")
    best_score: int = Field(default=0, ge=0, description="Best score seen by this process.")
    status: core.GameStatus = Field(default=core.GameStatus.PLAYING)
    win_tile: int = Field(default=core.DEFAULT_WIN_TILE, gt=0)

    @property
    def size(self) -> int:
        return len(self.board)


def new_game(size: object = core.DEFAULT_BOARD_SIZE,
             best_score: int = 0,
             win_tile: int = core.DEFAULT_WIN_TILE,
             rng: Optional[random.Random] = None) -> GameState:
    """
    Starts a fresh game: clamped size, two spawned tiles, score 0, PLAYING.
    Args:
        size (object): Requested board side length; clamped, never rejected.
        best_score (int): Best score carried over from earlier games.
        win_tile (int): The tile value that wins the game.
        rng (Optional[random.Random]): Source of randomness for the two tiles.
    Returns:
        GameState: The initial state.
    """
    board = core.initialize_board(core.clamp_board_size(size), rng)
    return GameState(
        board=board,
        score=0,
        best_score=best_score,
        status=core.GameStatus.PLAYING,
        win_tile=win_tile,
    )


def apply_move(state: GameState, direction: core.DIRECTION,
               rng: Optional[random.Random] = None) -> GameState:
    """
    Plays one turn.
    Args:
        state (GameState): The state before the move.
        direction (core.DIRECTION): The direction to move.
        rng (Optional[random.Random]): Source of randomness for the spawned tile.
    Returns:
        GameState: The state after the move. The very same object is returned when
                   the game is already over or the move changes nothing.
    """
    if state.status != core.GameStatus.PLAYING:
        logger.debug("Ignoring %s: game is %s", direction.name, state.status.name)
        return state

    result = core.process_move(state.board, direction)
    if not result.moved:
        logger.debug("Ignoring %s: nothing moves", direction.name)
        return state

    board = core.add_random_tile(result.board, rng)
    score = state.score + result.score_gained
    best_score = max(state.best_score, score)

    if core.check_for_win(board, state.win_tile):
        status = core.GameStatus.WON
    elif not core.can_move(board):
        status = core.GameStatus.LOST
    else:
        status = core.GameStatus.PLAYING

    if status != core.GameStatus.PLAYING:
        logger.info("Game over: %s with score %d", status.name, score)

    return state.model_copy(update={
        "board": board,
        "score": score,
        "best_score": best_score,
        "status": status,
    })


class GameController:
    """
    Owns the authoritative game state and the best-score store.

    The store is read once here and written only when a move raises the best score.
    Calls are expected from a single thread, one command at a time.
    Passing `state` resumes that game instead of dealing a new board.
    """

    def __init__(self,
                 size: object = core.DEFAULT_BOARD_SIZE,
                 win_tile: int = core.DEFAULT_WIN_TILE,
                 store: Optional[BestScoreStore] = None,
                 rng: Optional[random.Random] = None,
                 state: Optional[GameState] = None):
        self.best = BestScoreTracker(store if store is not None else InMemoryBestScoreStore())
        self.rng = rng
        if state is None:
            self.win_tile = win_tile
            self._state = new_game(size, best_score=self.best.value, win_tile=win_tile, rng=rng)
        else:
            self.win_tile = state.win_tile
            self._state = state.model_copy(update={"best_score": max(state.best_score, self.best.value)})

    @property
    def store(self) -> BestScoreStore:
        return self.best.store

    @property
    def state(self) -> GameState:
        return self._state

    def new_game(self, size: Optional[object] = None) -> GameState:
        """Starts over; keeps the current board size when none is given."""
        if size is None:
            size = self._state.size
        self._state = new_game(size, best_score=self._state.best_score,
                               win_tile=self.win_tile, rng=self.rng)
        logger.info("New %dx%d game", self._state.size, self._state.size)
        return self._state

    def apply_move(self, direction: core.DIRECTION) -> GameState:
        self._state = apply_move(self._state, direction, self.rng)
        self.best.record(self._state.best_score)
        return self._state
