# persistence.py
"""High score storage. Every store is best effort: a broken disk never stops a game."""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Protocol, Union

logger = logging.getLogger(__name__)


class HighScoreStore(Protocol):
    def load(self) -> int: ...
    def save(self, score: int) -> None: ...


class MemoryHighScoreStore:
    """Keeps the high score for the lifetime of the process only."""

    def __init__(self, initial: int = 0):
        self.value = max(0, int(initial))

    def load(self) -> int:
        return self.value

    def save(self, score: int) -> None:
        self.value = int(score)


class FileHighScoreStore:
    """A single integer in a UTF-8 text file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> int:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return 0
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read high score from %s: %s", self.path, exc)
            return 0

        try:
            value = int(text.strip() or "0")
        except ValueError:
            logger.warning("Ignoring malformed high score file %s", self.path)
            return 0
        return max(0, value)

    def save(self, score: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(str(int(score)), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not save high score to %s: %s", self.path, exc)
