from __future__ import annotations

from dataclasses import replace

from takojump.domain.character import (
    apply_air_control,
    begin_or_continue_charge,
    release_charge,
)
from takojump.domain.collision import (
    animate_conveyors,
    animate_hazards,
    apply_conveyor_behavior,
    apply_ice_behavior,
    clamp_horizontal_velocity,
    detect_detachment,
    resolve_goal,
    resolve_hazards,
    resolve_platforms,
    resolve_water,
    wrap_horizontally,
)
from takojump.domain.config import CAMERA_LEAD, DEFAULT_PHYSICS, WAVE_SPEED, PhysicsConfig
from takojump.domain.exceptions import CharacterDrowned, StageCleared
from takojump.domain.game_state import Camera, PlatformType, SessionState
from takojump.domain.input_state import InputState
from takojump.domain.physics import advance, apply_gravity


class World:
    def __init__(self, physics: PhysicsConfig = DEFAULT_PHYSICS) -> None:
        self.physics = physics

    def step(self, state: SessionState, inp: InputState, dt: float, now: float) -> SessionState:
        cfg = self.physics
        c = state.character
        support = state.support_index
        platforms = state.platforms

        elapsed = now - state.stage_start_time

        # ----- Charge / jump intent -----
        on_ice = (
            c.is_grounded
            and support is not None
            and platforms[support].type is PlatformType.ICE
        )
        c = begin_or_continue_charge(c, inp, now, dt, on_ice=on_ice, cfg=cfg)
        if inp.charge_just_released:
            c = release_charge(c, on_ice=on_ice, cfg=cfg)
        c = apply_air_control(c, inp.direction_x, dt, cfg)

        hazards = state.hazards

        # ----- Physics + collisions -----
        if not c.is_dead:
            c = apply_gravity(c, cfg)
            c = advance(c)

            c, landed_on = resolve_platforms(c, platforms, cfg)
            if landed_on is not None:
                support = landed_on
            elif not c.is_grounded:
                support = None

            current = platforms[support] if support is not None else None
            c = apply_ice_behavior(c, current)
            c = detect_detachment(c, current, cfg)
            c = apply_conveyor_behavior(c, current, cfg)
            if not c.is_grounded:
                support = None

            c = clamp_horizontal_velocity(c, cfg)
            c = wrap_horizontally(c, cfg)
            c, hazards = resolve_hazards(c, hazards, cfg)
            if not c.is_grounded:
                support = None

        stepped = replace(
            state,
            character=c,
            support_index=support,
            hazards=animate_hazards(hazards),
            platforms=animate_conveyors(platforms),
            elapsed_time=elapsed,
        )

        # ----- Terminal conditions -----
        if resolve_goal(c, state.goal, cfg):
            raise StageCleared(stepped)
        if resolve_water(c, state.water, cfg):
            raise CharacterDrowned(stepped)

        # ----- Water + camera -----
        water = state.water
        if water.is_rising:
            water = replace(
                water,
                y=water.y - water.speed,
                wave_offset=water.wave_offset + WAVE_SPEED * 60,
            )

        target = c.position.y - CAMERA_LEAD
        follow = 1.0 - (1.0 - cfg.camera_follow) ** (dt * 60)
        camera = Camera(y=state.camera.y + (target - state.camera.y) * follow, target_y=target)

        return replace(stepped, water=water, camera=camera)
