from __future__ import annotations
from typing import Protocol


class HighScoreStore(Protocol):
    def load_high_score(self) -> int:
        ...

    def save_high_score(self, score: int) -> None:
        ...
