# settings.py
# Runtime configuration shared by the CLI and the HTTP API.

from typing import Mapping, Optional
import os

from pydantic import BaseModel, Field, field_validator

import core

ENV_PREFIX = "GAME2048_"


class GameSettings(BaseModel):
    """Host configuration for a game session."""
    board_size: int = Field(
        default=core.DEFAULT_BOARD_SIZE,
        description="Side length of new boards; clamped into the supported range."
    )
    win_tile: int = Field(
        default=core.DEFAULT_WIN_TILE,
        gt=0,
        description="The tile value that wins the game."
    )
    best_score_path: str = Field(
        default="~/.2048_best_score.json",
        description="File holding the persisted best score."
    )
    seed: Optional[int] = Field(
        default=None,
        description="Seed for tile spawning; unset means non-deterministic play."
    )
    log_level: str = Field(default="INFO", description="Root logging level.")
    rate_limit: str = Field(default="100/minute", description="Per-client API rate limit.")

    @field_validator("board_size", mode="before")
    @classmethod
    def _clamp_board_size(cls, value: object) -> int:
        return core.clamp_board_size(value)

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> GameSettings:
    """
    Builds settings from GAME2048_* environment variables.
    Args:
        environ (Optional[Mapping[str, str]]): Variables to read; os.environ when omitted.
    Returns:
        GameSettings: Validated settings; unset variables keep their defaults.
    Raises:
        pydantic.ValidationError: If a variable holds an invalid value.
    """
    environ = os.environ if environ is None else environ
    values = {}
    for name in GameSettings.model_fields:
        key = ENV_PREFIX + name.upper()
        if key in environ:
            values[name] = environ[key]
    return GameSettings(**values)
