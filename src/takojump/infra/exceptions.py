class StageConfigDecodeError(Exception):
    """Raised when a stage table file is malformed."""


class StageConfigEncodeError(Exception):
    """Raised when a stage table cannot be serialized."""


class HighScoreLoadError(Exception):
    """Raised when an existing high-score file cannot be read."""


class HighScoreSaveError(Exception):
    """Raised when the high score cannot be written."""
