from __future__ import annotations

import pytest

from takojump.app.session import StageSession
from takojump.domain.config import DEFAULT_PHYSICS, GROUND_Y, StageConfig
from takojump.domain.game_state import Character, Platform, PlatformType, Vector2


class MemoryHighScoreStore:
    """In-memory high score store that records every save."""

    def __init__(self, initial: int = 0) -> None:
        self.high_score = initial
        self.saves: list[int] = []

    def load_high_score(self) -> int:
        return self.high_score

    def save_high_score(self, score: int) -> None:
        self.high_score = score
        self.saves.append(score)


def make_stage(number: int = 1, **overrides) -> StageConfig:
    values = dict(
        number=number,
        name=f"Stage {number}",
        total_height=5.3,
        platform_count=12,
        first_platform_gap=180.0,
        block_count_min=6,
        block_count_max=10,
        gap_min=150.0,
        gap_max=200.0,
        normal_ratio=0.4,
        ice_ratio=0.3,
        conveyor_ratio=0.3,
        hazard_count=2,
        water_speed=1.0,
        water_delay=2.0,
        base_time=45.0,
    )
    values.update(overrides)
    return StageConfig(**values)


def character_at(x: float, y: float, *, vx: float = 0.0, vy: float = 0.0, grounded: bool = False, **kw) -> Character:
    return Character(position=Vector2(x, y), velocity=Vector2(vx, vy), is_grounded=grounded, **kw)


def standing_on(platform: Platform, *, x: float | None = None, **kw) -> Character:
    px = platform.x + 10.0 if x is None else x
    return character_at(px, platform.y - DEFAULT_PHYSICS.height, grounded=True, **kw)


@pytest.fixture
def ground() -> Platform:
    return Platform(x=0.0, y=GROUND_Y, width=390.0, block_count=28)


@pytest.fixture
def ice() -> Platform:
    return Platform(x=100.0, y=500.0, width=98.0, type=PlatformType.ICE, block_count=7)


@pytest.fixture
def conveyor() -> Platform:
    return Platform(x=100.0, y=500.0, width=84.0, type=PlatformType.CONVEYOR, block_count=6, direction=1)


@pytest.fixture
def store() -> MemoryHighScoreStore:
    return MemoryHighScoreStore()


@pytest.fixture
def stages() -> tuple[StageConfig, ...]:
    return (make_stage(1), make_stage(2), make_stage(3))


@pytest.fixture
def session(store, stages) -> StageSession:
    return StageSession(store=store, stages=stages)
