from __future__ import annotations

import math
from dataclasses import replace

from takojump.domain.config import DEFAULT_PHYSICS, PhysicsConfig
from takojump.domain.game_state import Character, CharacterState, Vector2
from takojump.domain.input_state import InputState


def spawn_character(x: float, y: float) -> Character:
    return Character(position=Vector2(x, y), velocity=Vector2(0.0, 0.0))


def begin_or_continue_charge(
    character: Character,
    inp: InputState,
    now: float,
    dt: float,
    *,
    on_ice: bool,
    cfg: PhysicsConfig = DEFAULT_PHYSICS,
) -> Character:
    """
    Accumulate charge while the charge input is held. A charge still live with
    the input up and no release edge this tick (the release was lost, e.g. while
    paused) is dropped so it cannot resume later.
    """
    if character.is_dead:
        return character
    if not inp.charge_held:
        if character.is_charging and not inp.charge_just_released:
            return cancel_charge(character)
        return character

    c = character
    if c.charge_start_time is None:
        c = replace(
            c,
            charge_start_time=now,
            state=CharacterState.CHARGING,
            air_charge_locked_velocity_x=None if c.is_grounded else c.velocity.x,
        )

    ratio = min((now - c.charge_start_time) / cfg.max_charge_time, 1.0)
    c = replace(c, charge_ratio=max(0.0, ratio))

    # Sliding on ice cannot be steered.
    if c.is_grounded and not on_ice and (inp.direction_x != 0 or inp.direction_y != 0):
        c = replace(c, latched_direction_x=inp.direction_x)

    if not c.is_grounded and inp.direction_x != 0:
        nudge = inp.direction_x * cfg.air_control_charging * cfg.horizontal_factor * dt * 60
        c = replace(c, velocity=Vector2(c.velocity.x + nudge, c.velocity.y))

    return c


def release_charge(
    character: Character,
    *,
    on_ice: bool,
    cfg: PhysicsConfig = DEFAULT_PHYSICS,
) -> Character:
    """
    Charge input released. Airborne releases only cancel the charge and keep
    whatever drift the character has; grounded releases jump.
    """
    if not character.is_charging or character.is_dead:
        return character

    if not character.is_grounded:
        return cancel_charge(character)

    sliding = character.velocity.x if on_ice else 0.0
    vx, vy, facing_right = compute_jump(
        character.charge_ratio,
        character.latched_direction_x,
        sliding,
        cfg=cfg,
    )
    return replace(
        character,
        velocity=Vector2(vx, vy),
        state=CharacterState.JUMPING,
        is_grounded=False,
        facing_right=facing_right,
        charge_start_time=None,
        charge_ratio=0.0,
        air_charge_locked_velocity_x=None,
        latched_direction_x=0,
    )


def cancel_charge(character: Character) -> Character:
    """Drop the charge without jumping; drift is kept."""
    return replace(
        character,
        state=CharacterState.IDLE if character.is_grounded else CharacterState.JUMPING,
        charge_start_time=None,
        charge_ratio=0.0,
        air_charge_locked_velocity_x=None,
        latched_direction_x=0,
    )


def compute_jump(
    charge_ratio: float,
    direction_x: int,
    sliding_velocity: float = 0.0,
    *,
    cfg: PhysicsConfig = DEFAULT_PHYSICS,
) -> tuple[float, float, bool]:
    ratio = min(max(charge_ratio, 0.0), 1.0)
    power = cfg.min_jump_speed + (cfg.max_jump_speed - cfg.min_jump_speed) * ratio

    if direction_x == 0:
        angle = math.pi / 2
        base_vx = 0.0
    else:
        # Tilt away from vertical toward the latched direction.
        angle = math.pi / 2 - math.copysign(cfg.jump_tilt * math.pi, direction_x)
        base_vx = power * math.cos(angle) * cfg.horizontal_factor

    vx = base_vx + sliding_velocity
    vy = -power * math.sin(angle)

    if vx > 0:
        facing_right = True
    elif vx < 0:
        facing_right = False
    else:
        facing_right = direction_x >= 0
    return vx, vy, facing_right


def apply_air_control(
    character: Character,
    direction_x: int,
    dt: float,
    cfg: PhysicsConfig = DEFAULT_PHYSICS,
) -> Character:
    if (
        character.is_grounded
        or character.is_dead
        or character.air_charge_locked_velocity_x is not None
        or direction_x == 0
    ):
        return character

    nudge = direction_x * cfg.air_control * cfg.horizontal_factor * dt * 60
    return replace(character, velocity=Vector2(character.velocity.x + nudge, character.velocity.y))


def kill(character: Character) -> Character:
    return replace(
        character,
        state=CharacterState.DEAD,
        velocity=Vector2(0.0, 0.0),
        charge_start_time=None,
        charge_ratio=0.0,
        air_charge_locked_velocity_x=None,
    )
