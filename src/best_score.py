# best_score.py
# Durable storage for the single best-score value, kept at the edge of the game logic.

from pathlib import Path
from typing import Dict, Optional, Protocol, Union
import json
import logging

logger = logging.getLogger(__name__)

BEST_SCORE_KEY = "2048-best-score"


def parse_best_score(raw: object) -> int:
    """
    Interprets a persisted best-score value.
    Args:
        raw (object): Whatever was read from storage (int, str, None, ...).
    Returns:
        int: The stored value, or 0 if it is absent, unparseable or negative.
    """
    if raw is None or isinstance(raw, bool):
        return 0
    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed best score %r", raw)
        return 0
    if isinstance(raw, float) and raw != value:
        logger.warning("Ignoring non-integer best score %r", raw)
        return 0
    if value < 0:
        logger.warning("Ignoring negative best score %r", raw)
        return 0
    return value


class BestScoreStore(Protocol):
    """Key/value store holding one non-negative integer."""

    def load(self) -> int:
        ...

    def save(self, value: int) -> None:
        ...


class InMemoryBestScoreStore:
    """Process-local store, used by tests and by hosts that do not persist anything."""

    def __init__(self, initial: object = 0):
        self._value = parse_best_score(initial)
        self.writes = 0

    def load(self) -> int:
        return self._value

    def save(self, value: int) -> None:
        self._value = value
        self.writes += 1


class FileBestScoreStore:
    """
    Stores the best score in a small JSON document on disk.

    The file holds a single object, ``{"2048-best-score": <int>}``. Reading never
    fails: a missing, unreadable or malformed file counts as a best score of 0.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def load(self) -> int:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return 0
        except OSError as e:
            logger.warning("Could not read best score from %s: %s", self.path, e)
            return 0

        try:
            document = json.loads(text)
        except json.JSONDecodeError:
            logger.warning("Best score file %s is not valid JSON", self.path)
            return 0

        raw: Optional[object] = document.get(BEST_SCORE_KEY) if isinstance(document, dict) else document
        return parse_best_score(raw)

    def save(self, value: int) -> None:
        """
        Writes the value, replacing the previous file atomically.
        Raises:
            OSError: If the file cannot be written.
        """
        document: Dict[str, int] = {BEST_SCORE_KEY: int(value)}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(json.dumps(document), encoding="utf-8")
        tmp_path.replace(self.path)
        logger.info("Saved best score %d to %s", value, self.path)


class BestScoreTracker:
    """
    Keeps the best score in memory on top of a store.

    The store is read once, when the tracker is created, and written only when
    a recorded score beats the current best.
    """

    def __init__(self, store: BestScoreStore):
        self.store = store
        self._value = store.load()

    @property
    def value(self) -> int:
        return self._value

    def record(self, score: int) -> bool:
        """
        Raises the best score to `score` if it is higher and persists it.
        Returns:
            bool: True if the best score increased.
        """
        if score <= self._value:
            return False
        self._value = score
        try:
            self.store.save(score)
        except OSError as e:
            logger.error("Could not persist best score %d: %s", score, e)
        return True
