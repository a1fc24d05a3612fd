from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Screen(Enum):
    TITLE = "title"
    PLAYING = "playing"
    PAUSED = "paused"
    CLEARED = "cleared"
    GAMEOVER = "gameover"


class CharacterState(Enum):
    IDLE = "idle"
    CHARGING = "charging"
    JUMPING = "jumping"
    DEAD = "dead"


class PlatformType(Enum):
    NORMAL = "normal"
    ICE = "ice"
    CONVEYOR = "conveyor"


class StarKind(Enum):
    DOT = "dot"
    CROSS = "cross"
    CRESCENT = "crescent"
    SPARKLE = "sparkle"


@dataclass(frozen=True)
class Vector2:
    x: float
    y: float


@dataclass(frozen=True)
class Character:
    position: Vector2
    velocity: Vector2
    state: CharacterState = CharacterState.IDLE
    charge_start_time: float | None = None
    charge_ratio: float = 0.0
    is_grounded: bool = True
    facing_right: bool = True
    # Horizontal speed captured when an in-air charge began; blocks air control.
    air_charge_locked_velocity_x: float | None = None
    latched_direction_x: int = 0  # 0 = straight up

    @property
    def is_dead(self) -> bool:
        return self.state is CharacterState.DEAD

    @property
    def is_charging(self) -> bool:
        return self.charge_start_time is not None


@dataclass(frozen=True)
class Platform:
    x: float
    y: float
    width: float
    type: PlatformType = PlatformType.NORMAL
    block_count: int = 1
    direction: int = 1  # conveyor only: -1 left, +1 right
    conveyor_offset: float = 0.0  # cosmetic

    @property
    def right(self) -> float:
        return self.x + self.width


@dataclass(frozen=True)
class Hazard:
    x: float
    y: float
    size: float
    rotation: float = 0.0
    is_collected: bool = False


@dataclass(frozen=True)
class Goal:
    x: float
    y: float
    size: float


@dataclass(frozen=True)
class WaterLine:
    y: float
    speed: float
    is_rising: bool = False
    wave_offset: float = 0.0


@dataclass(frozen=True)
class Camera:
    y: float
    target_y: float


@dataclass(frozen=True)
class Star:
    x: float
    y: float
    size: float
    kind: StarKind


@dataclass(frozen=True)
class SessionState:
    screen: Screen
    stage: int
    score: int
    high_score: int
    lives: int
    stage_start_time: float
    elapsed_time: float
    is_high_score_updated: bool

    character: Character
    platforms: tuple[Platform, ...]  # index 0 is the ground
    hazards: tuple[Hazard, ...]
    goal: Goal
    water: WaterLine
    camera: Camera
    stars: tuple[Star, ...]

    support_index: int | None = 0  # platform the character stands on
    is_all_clear: bool = False
