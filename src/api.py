from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field
from typing import List, Optional
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
import logging
import random

import core
import controller
from best_score import BestScoreTracker, FileBestScoreStore
from settings import load_settings

settings = load_settings()
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

# Read once at startup; kept in memory and written back only when beaten.
best_score_tracker = BestScoreTracker(FileBestScoreStore(settings.best_score_path))
rng = random.Random(settings.seed) if settings.seed is not None else None

# Initialize the rate limiter
limiter = Limiter(key_func=get_remote_address)
app = FastAPI(
    title="2048 Game API",
    description="A stateless API for playing the 2048 game. "\
                "Manage your game state (board, score, status, win_tile) on the client side.",
    version="2.0.0"
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# --- Pydantic Models for API requests and responses ---

class NewGameSettings(BaseModel):
    """Settings for creating a new game."""
    size: Optional[int] = Field(
        default=settings.board_size,
        description="Size of the N x N game board; clamped to the supported range 2..8."
    )
    win_tile: Optional[int] = Field(
        default=settings.win_tile,
        gt=0,
        description="The tile value to achieve for winning the game (e.g., 2048)."
    )

class GameStateData(BaseModel):
    """Represents the complete state of a game instance."""
    board: List[List[int]] = Field(..., description="The N x N game board, represented as a list of lists.")
    score: int = Field(..., ge=0, description="Current score of the game.")
    best_score: int = Field(..., ge=0, description="Best score known to the server or client.")
    status: core.GameStatus = Field(
        ...,
        description="Current progress state of the game (PLAYING, WON, LOST)."
    )
    win_tile: int = Field(..., gt=0, description="The tile value required to win this game instance.")
    board_size: int = Field(..., gt=0, description="The dimension N of the N x N board.")


class MoveRequestData(BaseModel):
    """Data required to make a move."""
    board: List[List[int]] = Field(..., description="Current N x N game board state before the move.")
    score: int = Field(..., ge=0, description="Current score before the move.")
    best_score: int = Field(default=0, ge=0, description="Best score held by the client.")
    status: core.GameStatus = Field(
        default=core.GameStatus.PLAYING,
        description="Progress state before the move; moves on a finished game are ignored."
    )
    direction: core.DIRECTION = Field(
        ...,
        description="Direction of the move (UP, DOWN, LEFT, RIGHT)."
    )
    win_tile: int = Field(default=core.DEFAULT_WIN_TILE, gt=0, description="The win condition tile for this game instance.")
    # board_size is implicitly derived from the board structure.

class MoveResponseData(GameStateData):
    """Response after a move, including the new game state and move effectiveness."""
    moved: bool = Field(
        ...,
        description="True if the move resulted in a change to the board state, False otherwise."
    )
    score_gained: int = Field(..., ge=0, description="Points earned by merges in this move.")
    message: Optional[str] = Field(
        default=None,
        description="An optional message, e.g., if a move was ignored or the game ended."
    )

class BestScoreData(BaseModel):
    best_score: int = Field(..., ge=0)


def _state_data(state: controller.GameState) -> dict:
    return {
        "board": [list(row) for row in state.board],
        "score": state.score,
        "best_score": state.best_score,
        "status": state.status,
        "win_tile": state.win_tile,
        "board_size": state.size,
    }


# --- API Endpoints ---

@app.post("/game/new", response_model=GameStateData, summary="Start a New 2048 Game")
@limiter.limit(settings.rate_limit)
async def start_new_game(request: Request, settings: NewGameSettings):
    """
    Initializes a new 2048 game based on the provided settings (size and win_tile).

    - **size**: Dimension of the N x N board (e.g., 4 for 4x4), clamped to 2..8.
    - **win_tile**: Tile value to reach to win (e.g., 2048). Default is 2048.

    Returns the initial game state, including the board with two random tiles,
    score (0), the server's best score, status (PLAYING), and the specified win_tile.
    """
    try:
        state = controller.new_game(
            settings.size if settings.size is not None else core.DEFAULT_BOARD_SIZE,
            best_score=best_score_tracker.value,
            win_tile=settings.win_tile if settings.win_tile is not None else core.DEFAULT_WIN_TILE,
            rng=rng,
        )
        return GameStateData(**_state_data(state))
    except Exception as e:
        logger.error("Unexpected error in /game/new: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=f"An unexpected error occurred during game creation: {str(e)}")


@app.post("/game/move", response_model=MoveResponseData, summary="Make a Move in the Game")
@limiter.limit(settings.rate_limit)
async def make_move(request: Request, request_data: MoveRequestData):
    """
    Processes a player's move in the game.

    Requires the current `board` state, `score`, the `direction` of the move,
    and optionally `best_score`, `status` and `win_tile` for this game instance.

    The API will:
    1. Ignore the move if the game is already WON or LOST.
    2. Attempt to process the move (slide tiles, merge).
    3. If the move changed the board, add a new random tile (2 or 4) and add the merge score.
    4. Determine the new status (WON before LOST) and record a new best score.

    Returns the updated game state, whether the move was effective, and an optional message.
    """
    try:
        board = core.validate_board(request_data.board)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid board structure in request: {str(e)}")

    state = controller.GameState(
        board=board,
        score=request_data.score,
        best_score=max(request_data.best_score, request_data.score),
        status=request_data.status,
        win_tile=request_data.win_tile,
    )

    try:
        next_state = controller.apply_move(state, request_data.direction, rng)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Error processing move: {str(e)}")
    except Exception as e:
        logger.error("Unexpected error in /game/move: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=f"An unexpected server error occurred while processing the move: {str(e)}")

    moved = next_state is not state
    message_for_client: Optional[str] = None
    if state.status != core.GameStatus.PLAYING:
        message_for_client = "Game has already ended; start a new game."
    elif not moved:
        message_for_client = "Move was not effective; board state unchanged by slide."
    elif next_state.status == core.GameStatus.WON:
        message_for_client = "Congratulations! You won!"
    elif next_state.status == core.GameStatus.LOST:
        message_for_client = "Game Over. No more valid moves."

    if moved:
        best_score_tracker.record(next_state.best_score)

    return MoveResponseData(
        **_state_data(next_state),
        moved=moved,
        score_gained=next_state.score - state.score,
        message=message_for_client,
    )


@app.get("/game/best-score", response_model=BestScoreData, summary="Read the Persisted Best Score")
@limiter.limit(settings.rate_limit)
async def get_best_score(request: Request):
    """Returns the best score persisted by the server."""
    return BestScoreData(best_score=best_score_tracker.value)
