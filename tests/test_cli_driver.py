import cli_driver
import core
from controller import GameState


def _feed(monkeypatch, *answers):
    replies = iter(answers)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(replies))


def test_format_board():
    assert cli_driver.format_board([[2, 0], [0, 4]]) == "2\t.\n.\t4"


def test_display_board_state(capsys):
    state = GameState(board=((2, 4), (4, 2)), score=12, best_score=30, status=core.GameStatus.LOST)
    cli_driver.display_board_state(state)
    out = capsys.readouterr().out
    assert "Score: 12\tBest: 30" in out
    assert "GAME OVER!" in out


def test_parse_args_flags():
    args = cli_driver.parse_args(["--size", "3", "--seed", "5", "--win-tile", "64"])
    assert args.size == 3
    assert args.seed == 5
    assert args.win_tile == 64


def test_main_runs_commands_until_quit(monkeypatch, tmp_path, capsys):
    best_file = tmp_path / "best.json"
    _feed(monkeypatch, "a", "d", "w", "s", "x", "n", "3", "q")
    cli_driver.main(["--size", "2", "--seed", "7", "--best-score-file", str(best_file), "--log-level", "WARNING"])
    out = capsys.readouterr().out
    assert "Invalid input" in out
    assert "Quitting game." in out
    assert out.count("Score: ") >= 2


def test_main_quits_cleanly_at_end_of_input(monkeypatch, tmp_path, capsys):
    def exhausted(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", exhausted)
    cli_driver.main(["--size", "2", "--seed", "1", "--best-score-file", str(tmp_path / "best.json")])
    assert "Quitting game." in capsys.readouterr().out


def test_main_quits_when_size_prompt_hits_end_of_input(monkeypatch, tmp_path, capsys):
    replies = iter(["n"])

    def answer(prompt=""):
        try:
            return next(replies)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", answer)
    cli_driver.main(["--size", "2", "--seed", "1", "--best-score-file", str(tmp_path / "best.json")])
    assert "Quitting game." in capsys.readouterr().out
