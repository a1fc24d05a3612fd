from __future__ import annotations

from dataclasses import replace

import pytest

from conftest import character_at, standing_on
from takojump.domain.config import CAMERA_LEAD, DEFAULT_PHYSICS, WAVE_SPEED
from takojump.domain.exceptions import CharacterDrowned, StageCleared
from takojump.domain.game_state import (
    Camera,
    CharacterState,
    Goal,
    Hazard,
    Screen,
    SessionState,
    WaterLine,
)
from takojump.domain.input_state import InputState
from takojump.domain.world import World

DT = 1.0 / 60.0
H = DEFAULT_PHYSICS.height
W = DEFAULT_PHYSICS.width


def playing(character, platforms, *, support=0, hazards=(), goal=None, water=None, camera=None) -> SessionState:
    return SessionState(
        screen=Screen.PLAYING,
        stage=1,
        score=0,
        high_score=0,
        lives=3,
        stage_start_time=0.0,
        elapsed_time=0.0,
        is_high_score_updated=False,
        character=character,
        platforms=tuple(platforms),
        hazards=tuple(hazards),
        goal=goal or Goal(x=155.0, y=-5000.0, size=80.0),
        water=water or WaterLine(y=5000.0, speed=1.0),
        camera=camera or Camera(y=0.0, target_y=0.0),
        stars=(),
        support_index=support,
    )


def centered_on(character, size: float) -> tuple[float, float]:
    return (
        character.position.x + W / 2 - size / 2,
        character.position.y + H / 2 - size / 2,
    )


class TestMovement:
    def test_standing_character_stays_put(self, ground):
        c = standing_on(ground, x=50.0)
        out = World().step(playing(c, [ground]), InputState(), DT, 1.0)
        assert out.character.position == c.position
        assert out.character.is_grounded
        assert out.support_index == 0
        assert out.elapsed_time == 1.0

    def test_conveyor_transports_rider(self, ground, conveyor):
        c = standing_on(conveyor)
        out = World().step(playing(c, [ground, conveyor], support=1), InputState(), DT, 1.0)
        assert out.character.position.x == pytest.approx(c.position.x + DEFAULT_PHYSICS.conveyor_speed)
        assert out.support_index == 1
        assert out.platforms[1].conveyor_offset != conveyor.conveyor_offset

    def test_ice_keeps_sliding(self, ground, ice):
        c = standing_on(ice, vx=2.0)
        out = World().step(playing(c, [ground, ice], support=1), InputState(), DT, 1.0)
        assert out.character.position.x == pytest.approx(c.position.x + 2.0)
        assert out.character.velocity.x == 2.0
        assert out.character.is_grounded

    def test_normal_ground_stops_stray_velocity(self, ground):
        c = standing_on(ground, x=50.0, vx=2.0)
        out = World().step(playing(c, [ground]), InputState(), DT, 1.0)
        assert out.character.velocity.x == 0.0

    def test_charge_and_release_jumps(self, ground):
        world = World()
        state = playing(standing_on(ground, x=50.0), [ground])
        now = 0.0
        for _ in range(30):
            now += DT
            state = world.step(state, InputState(charge_held=True), DT, now)
        assert state.character.state is CharacterState.CHARGING
        assert state.character.charge_ratio == pytest.approx(29 * DT)

        now += DT
        state = world.step(state, InputState(charge_just_released=True), DT, now)
        c = state.character
        assert c.velocity.y < 0
        assert not c.is_grounded
        assert c.state is CharacterState.JUMPING
        assert state.support_index is None

    def test_hazard_boost(self, ground):
        c = standing_on(ground, x=50.0, vx=0.0)
        hx, hy = centered_on(c, 32.0)
        state = playing(c, [ground], hazards=[Hazard(x=hx, y=hy, size=32.0)])
        out = World().step(state, InputState(), DT, 1.0)
        assert out.character.velocity.y == -DEFAULT_PHYSICS.hazard_impulse
        assert not out.character.is_grounded
        assert out.support_index is None
        assert out.hazards[0].is_collected
        assert out.hazards[0].rotation > 0

    def test_dead_body_does_not_move(self, ground):
        c = character_at(50.0, 300.0, vx=0.0, vy=0.0, state=CharacterState.DEAD)
        state = playing(c, [ground], support=None, water=WaterLine(y=0.0, speed=1.0))
        out = World().step(state, InputState(charge_held=True), DT, 1.0)
        assert out.character == c


class TestTerminal:
    def test_goal_raises_cleared(self, ground):
        c = standing_on(ground, x=50.0)
        gx, gy = centered_on(c, 80.0)
        state = replace(playing(c, [ground], goal=Goal(x=gx, y=gy, size=80.0)), stage_start_time=2.0)
        with pytest.raises(StageCleared) as exc:
            World().step(state, InputState(), DT, 14.5)
        assert exc.value.state.elapsed_time == pytest.approx(12.5)
        assert exc.value.state.screen is Screen.PLAYING

    def test_water_raises_drowned(self, ground):
        c = standing_on(ground, x=50.0)
        state = playing(c, [ground], water=WaterLine(y=ground.y - 1.0, speed=1.0))
        with pytest.raises(CharacterDrowned) as exc:
            World().step(state, InputState(), DT, 1.0)
        assert not exc.value.state.character.is_dead

    def test_goal_checked_before_water(self, ground):
        c = standing_on(ground, x=50.0)
        gx, gy = centered_on(c, 80.0)
        state = playing(
            c,
            [ground],
            goal=Goal(x=gx, y=gy, size=80.0),
            water=WaterLine(y=0.0, speed=1.0),
        )
        with pytest.raises(StageCleared):
            World().step(state, InputState(), DT, 1.0)


class TestWaterAndCamera:
    def test_water_waits_until_rising(self, ground):
        state = playing(standing_on(ground), [ground], water=WaterLine(y=2000.0, speed=1.5))
        assert World().step(state, InputState(), DT, 1.0).water.y == 2000.0

    def test_rising_water_climbs(self, ground):
        water = WaterLine(y=2000.0, speed=1.5, is_rising=True)
        out = World().step(playing(standing_on(ground), [ground], water=water), InputState(), DT, 1.0)
        assert out.water.y == 1998.5
        assert out.water.wave_offset == pytest.approx(WAVE_SPEED * 60)

    def test_camera_eases_toward_target(self, ground):
        c = standing_on(ground, x=50.0)
        out = World().step(playing(c, [ground], camera=Camera(y=0.0, target_y=0.0)), InputState(), DT, 1.0)
        target = c.position.y - CAMERA_LEAD
        assert out.camera.target_y == pytest.approx(target)
        assert out.camera.y == pytest.approx(target * 0.1)

    def test_camera_follow_is_frame_rate_independent(self, ground):
        c = standing_on(ground, x=50.0)
        world = World()
        one = world.step(playing(c, [ground]), InputState(), 2 * DT, 1.0)
        two = playing(c, [ground])
        two = world.step(two, InputState(), DT, 1.0)
        two = world.step(two, InputState(), DT, 1.0)
        assert one.camera.y == pytest.approx(two.camera.y)
