import random

import pytest


class StubRandom:
    """Deterministic stand-in for random.Random: picks a fixed candidate index and roll."""

    def __init__(self, pick=0, roll=0.0):
        self.pick = pick
        self.roll = roll

    def choice(self, seq):
        return seq[min(self.pick, len(seq) - 1)]

    def random(self):
        return self.roll


@pytest.fixture
def stub_rng():
    return StubRandom


def _random_board(rng, size):
    values = [0, 0, 0, 2, 2, 4, 4, 8, 16, 32]
    board = [[rng.choice(values) for _ in range(size)] for _ in range(size)]
    if not any(any(row) for row in board):
        board[rng.randrange(size)][rng.randrange(size)] = 2
    return tuple(tuple(row) for row in board)


def _full_board(rng, size):
    values = [2, 4, 8, 16]
    return tuple(tuple(rng.choice(values) for _ in range(size)) for _ in range(size))


def sample_boards(count=300, seed=2048):
    """Random boards of every supported size, each with at least one tile."""
    rng = random.Random(seed)
    boards = []
    for i in range(count):
        size = 2 + i % 7
        if i % 3 == 0:
            boards.append(_full_board(rng, size))
        else:
            boards.append(_random_board(rng, size))
    return boards


@pytest.fixture(scope="session")
def boards():
    return sample_boards()
