import pytest
from pydantic import ValidationError

from settings import GameSettings, load_settings


def test_defaults():
    settings = load_settings({})
    assert settings.board_size == 4
    assert settings.win_tile == 2048
    assert settings.seed is None
    assert settings.log_level == "INFO"


def test_reads_prefixed_environment():
    settings = load_settings({
        "GAME2048_BOARD_SIZE": "6",
        "GAME2048_WIN_TILE": "512",
        "GAME2048_SEED": "42",
        "GAME2048_LOG_LEVEL": "debug",
        "BOARD_SIZE": "3",
    })
    assert settings.board_size == 6
    assert settings.win_tile == 512
    assert settings.seed == 42
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("raw, expected", [("1", 2), ("30", 8), ("big", 4)])
def test_board_size_is_clamped(raw, expected):
    assert load_settings({"GAME2048_BOARD_SIZE": raw}).board_size == expected


def test_invalid_values_raise():
    with pytest.raises(ValidationError):
        load_settings({"GAME2048_WIN_TILE": "0"})
    with pytest.raises(ValidationError):
        GameSettings(log_level="chatty")
