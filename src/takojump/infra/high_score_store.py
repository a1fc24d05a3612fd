from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from takojump.infra.exceptions import HighScoreLoadError, HighScoreSaveError

logger = logging.getLogger(__name__)

_FORMAT = "takojump.highscore"


class HighScoreFile:
    """
    Keeps the single best score in a small JSON file. A missing file reads as 0.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or (Path.cwd() / "takojump_highscore.json")

    @property
    def path(self) -> Path:
        return self._path

    def load_high_score(self) -> int:
        if not self._path.exists():
            return 0
        try:
            obj = json.loads(self._path.read_text(encoding="utf-8"))
            if obj.get("format") != _FORMAT:
                raise HighScoreLoadError("Invalid high score format marker.")
            score = obj.get("high_score")
            if not isinstance(score, int) or isinstance(score, bool) or score < 0:
                raise HighScoreLoadError("high_score must be a non-negative integer.")
            return score
        except HighScoreLoadError:
            raise
        except Exception as e:
            raise HighScoreLoadError(f"Failed to load high score from {self._path}: {e}") from e

    def save_high_score(self, score: int) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            text = json.dumps({"format": _FORMAT, "high_score": int(score)}, indent=2, sort_keys=True)

            # Atomic-ish write: write temp then replace.
            tmp.write_text(text, encoding="utf-8")
            os.replace(tmp, self._path)
            logger.info("high score %d saved to %s", score, self._path)
        except Exception as e:
            # best-effort cleanup
            try:
                if tmp.exists():
                    tmp.unlink()
            except OSError:
                pass
            raise HighScoreSaveError(f"Failed to save high score to {self._path}: {e}") from e

