from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from takojump.domain.game_state import SessionState


class StageCleared(Exception):
    """Raised by the domain when the character reaches the goal."""

    def __init__(self, state: SessionState) -> None:
        super().__init__("goal reached")
        self.state = state


class CharacterDrowned(Exception):
    """Raised when the character's bottom edge passes the water line."""

    def __init__(self, state: SessionState) -> None:
        super().__init__("character touched the water")
        self.state = state
