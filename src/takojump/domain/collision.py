from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, replace

from takojump.domain.config import (
    CONVEYOR_ANIMATION_STEP,
    CONVEYOR_SEGMENT_WIDTH,
    DEFAULT_PHYSICS,
    HAZARD_ROTATION_SPEED,
    SCREEN_WIDTH,
    PhysicsConfig,
)
from takojump.domain.game_state import (
    Character,
    CharacterState,
    Goal,
    Hazard,
    Platform,
    PlatformType,
    Vector2,
    WaterLine,
)

# Tolerance for the swept landing test; grounded bodies re-land every tick.
_EPS = 1e-6


@dataclass(frozen=True)
class PlatformBehavior:
    # (incoming vx, cfg) -> vx right after landing
    landing_velocity_x: Callable[[float, PhysicsConfig], float]
    # horizontal transport applied every grounded tick (multiplied by direction)
    transport_speed: Callable[[PhysicsConfig], float]


def _stop(_vx: float, _cfg: PhysicsConfig) -> float:
    return 0.0


def _slide(vx: float, cfg: PhysicsConfig) -> float:
    return max(-cfg.max_slide_speed, min(cfg.max_slide_speed, vx))


BEHAVIORS: dict[PlatformType, PlatformBehavior] = {
    PlatformType.NORMAL: PlatformBehavior(_stop, lambda cfg: 0.0),
    PlatformType.ICE: PlatformBehavior(_slide, lambda cfg: 0.0),
    PlatformType.CONVEYOR: PlatformBehavior(_stop, lambda cfg: cfg.conveyor_speed),
}


def resolve_platforms(
    character: Character,
    platforms: tuple[Platform, ...],
    cfg: PhysicsConfig = DEFAULT_PHYSICS,
) -> tuple[Character, int | None]:
    """
    Swept top-surface landing test. Returns the (possibly landed) character and
    the index of the platform landed on.
    """
    if character.is_dead or character.velocity.y <= 0:
        return character, None

    vy = character.velocity.y
    left = character.position.x
    right = left + cfg.width
    bottom = character.position.y + cfg.height
    prev_bottom = bottom - vy

    # Inset only applies to bodies arriving from the air.
    margin = 0.0 if character.is_grounded else cfg.landing_margin

    for i, platform in enumerate(platforms):
        if not (right - margin > platform.x and left + margin < platform.right):
            continue

        top = platform.y
        # Crossed the top this tick, and by no more than one tick's fall.
        if prev_bottom <= top + _EPS and bottom >= top and bottom - top <= vy + _EPS:
            behavior = BEHAVIORS[platform.type]
            landed = replace(
                character,
                position=Vector2(character.position.x, top - cfg.height),
                velocity=Vector2(behavior.landing_velocity_x(character.velocity.x, cfg), 0.0),
                state=CharacterState.CHARGING if character.is_charging else CharacterState.IDLE,
                is_grounded=True,
                air_charge_locked_velocity_x=None,
            )
            return landed, i

    return character, None


def apply_ice_behavior(character: Character, platform: Platform | None) -> Character:
    # Ice has zero friction: slide speed is kept until the character leaves it.
    return character


def apply_conveyor_behavior(
    character: Character,
    platform: Platform | None,
    cfg: PhysicsConfig = DEFAULT_PHYSICS,
) -> Character:
    if platform is None or character.is_dead or not character.is_grounded:
        return character
    speed = BEHAVIORS[platform.type].transport_speed(cfg)
    if speed == 0.0:
        return character

    moved = replace(
        character,
        position=Vector2(character.position.x + speed * platform.direction, character.position.y),
    )
    return detect_detachment(moved, platform, cfg)


def detect_detachment(
    character: Character,
    platform: Platform | None,
    cfg: PhysicsConfig = DEFAULT_PHYSICS,
) -> Character:
    if platform is None or character.is_dead or not character.is_grounded:
        return character

    left = character.position.x
    right = left + cfg.width
    if right > platform.x and left < platform.right:
        return character
    if character.is_charging:
        # Carried or slid off mid-charge: same as a charge started in the air.
        return replace(
            character,
            is_grounded=False,
            state=CharacterState.CHARGING,
            air_charge_locked_velocity_x=character.velocity.x,
        )
    return replace(character, is_grounded=False, state=CharacterState.JUMPING)


def clamp_horizontal_velocity(character: Character, cfg: PhysicsConfig = DEFAULT_PHYSICS) -> Character:
    vx = character.velocity.x
    clamped = max(-cfg.max_horizontal_speed, min(cfg.max_horizontal_speed, vx))
    if clamped == vx:
        return character
    return replace(character, velocity=Vector2(clamped, character.velocity.y))


def wrap_horizontally(character: Character, cfg: PhysicsConfig = DEFAULT_PHYSICS) -> Character:
    x = character.position.x
    if x > SCREEN_WIDTH:
        x = -cfg.width
    elif x < -cfg.width:
        x = SCREEN_WIDTH
    else:
        return character
    return replace(character, position=Vector2(x, character.position.y))


def resolve_hazards(
    character: Character,
    hazards: tuple[Hazard, ...],
    cfg: PhysicsConfig = DEFAULT_PHYSICS,
) -> tuple[Character, tuple[Hazard, ...]]:
    if character.is_dead:
        return character, hazards

    for i, hazard in enumerate(hazards):
        if hazard.is_collected:
            continue
        if not _touches(character, hazard.x, hazard.y, hazard.size, cfg):
            continue

        boosted = replace(
            character,
            velocity=Vector2(character.velocity.x, -cfg.hazard_impulse),
            state=CharacterState.JUMPING,
            is_grounded=False,
            charge_start_time=None,
            charge_ratio=0.0,
            air_charge_locked_velocity_x=None,
            latched_direction_x=0,
        )
        updated = hazards[:i] + (replace(hazard, is_collected=True),) + hazards[i + 1:]
        return boosted, updated

    return character, hazards


def resolve_goal(character: Character, goal: Goal, cfg: PhysicsConfig = DEFAULT_PHYSICS) -> bool:
    if character.is_dead:
        return False
    return _touches(character, goal.x, goal.y, goal.size, cfg)


def resolve_water(character: Character, water: WaterLine, cfg: PhysicsConfig = DEFAULT_PHYSICS) -> bool:
    if character.is_dead:
        return False
    return character.position.y + cfg.height > water.y


def animate_hazards(hazards: tuple[Hazard, ...]) -> tuple[Hazard, ...]:
    return tuple(replace(h, rotation=h.rotation + HAZARD_ROTATION_SPEED) for h in hazards)


def animate_conveyors(platforms: tuple[Platform, ...]) -> tuple[Platform, ...]:
    period = CONVEYOR_SEGMENT_WIDTH * 2
    return tuple(
        replace(p, conveyor_offset=(p.conveyor_offset + CONVEYOR_ANIMATION_STEP) % period)
        if p.type is PlatformType.CONVEYOR
        else p
        for p in platforms
    )


def _touches(character: Character, x: float, y: float, size: float, cfg: PhysicsConfig) -> bool:
    cx = character.position.x + cfg.width / 2.0
    cy = character.position.y + cfg.height / 2.0
    dx = cx - (x + size / 2.0)
    dy = cy - (y + size / 2.0)
    return math.hypot(dx, dy) < (cfg.width / 2.0 + size / 2.0) * cfg.hit_fraction
