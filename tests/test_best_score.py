import json

import pytest

from best_score import BEST_SCORE_KEY, BestScoreTracker, FileBestScoreStore, InMemoryBestScoreStore, parse_best_score


@pytest.mark.parametrize("raw, expected", [
    (None, 0),
    (0, 0),
    (512, 512),
    ("2048", 2048),
    ("", 0),
    ("not a number", 0),
    (-4, 0),
    (12.0, 12),
    (12.5, 0),
    (True, 0),
    ([1], 0),
])
def test_parse_best_score(raw, expected):
    assert parse_best_score(raw) == expected


def test_file_store_missing_file_reads_zero(tmp_path):
    assert FileBestScoreStore(tmp_path / "best.json").load() == 0


def test_file_store_round_trip(tmp_path):
    path = tmp_path / "nested" / "best.json"
    store = FileBestScoreStore(path)
    store.save(1024)
    assert json.loads(path.read_text()) == {BEST_SCORE_KEY: 1024}
    assert FileBestScoreStore(path).load() == 1024


@pytest.mark.parametrize("content", ["{oops", '{"2048-best-score": "abc"}', '{"2048-best-score": -10}', "[]"])
def test_file_store_malformed_reads_zero(tmp_path, content):
    path = tmp_path / "best.json"
    path.write_text(content)
    assert FileBestScoreStore(path).load() == 0


def test_file_store_accepts_bare_number(tmp_path):
    path = tmp_path / "best.json"
    path.write_text("256")
    assert FileBestScoreStore(path).load() == 256


def test_in_memory_store_counts_writes():
    store = InMemoryBestScoreStore("64")
    assert store.load() == 64
    store.save(128)
    assert store.load() == 128
    assert store.writes == 1


def test_tracker_saves_only_on_increase():
    store = InMemoryBestScoreStore(50)
    tracker = BestScoreTracker(store)
    assert tracker.value == 50
    assert not tracker.record(20)
    assert not tracker.record(50)
    assert tracker.record(80)
    assert tracker.value == 80
    assert store.load() == 80
    assert store.writes == 1
