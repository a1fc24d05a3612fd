from __future__ import annotations

import math

import pytest

from conftest import make_stage
from takojump.domain.config import (
    BLOCK_SIZE,
    DEFAULT_STAGES,
    GOAL_OFFSET,
    GOAL_SIZE,
    GROUND_Y,
    HAZARD_HOVER,
    HAZARD_SIZE,
    MAX_HORIZONTAL_REACH,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    STARS_PER_SCREEN,
    WATER_START_DEPTH,
)
from takojump.domain.game_state import PlatformType, StarKind
from takojump.domain.rng import SeededRandom
from takojump.domain.stage import (
    calculate_score,
    generate_platforms,
    generate_stage,
    init_water,
)


class TestDeterminism:
    def test_two_runs_are_identical(self):
        cfg = make_stage(4)
        a = generate_stage(cfg)
        b = generate_stage(cfg, SeededRandom(4))
        assert a == b

    @pytest.mark.parametrize("cfg", DEFAULT_STAGES, ids=lambda c: c.name)
    def test_default_stages_reproducible(self, cfg):
        assert generate_stage(cfg) == generate_stage(cfg)

    def test_stage_number_changes_layout(self):
        assert generate_stage(make_stage(1)).platforms != generate_stage(make_stage(2)).platforms


class TestPlatforms:
    def test_ground_is_first_and_full_width(self):
        platforms = generate_stage(make_stage()).platforms
        ground = platforms[0]
        assert ground.x == 0.0
        assert ground.y == GROUND_Y
        assert ground.width == SCREEN_WIDTH
        assert ground.type is PlatformType.NORMAL

    def test_count_and_first_gap(self):
        cfg = make_stage(platform_count=9, first_platform_gap=210.0)
        platforms = generate_stage(cfg).platforms
        assert len(platforms) == 10
        assert platforms[1].y == pytest.approx(GROUND_Y - 210.0)

    def test_gaps_within_range(self):
        cfg = make_stage()
        platforms = generate_stage(cfg).platforms
        for lower, upper in zip(platforms[1:], platforms[2:]):
            gap = lower.y - upper.y
            assert cfg.gap_min - 1e-9 <= gap <= cfg.gap_max + 1e-9

    def test_widths_and_grid_snap(self):
        cfg = make_stage()
        for p in generate_stage(cfg).platforms[1:]:
            assert cfg.block_count_min <= p.block_count <= cfg.block_count_max
            assert p.width == p.block_count * BLOCK_SIZE
            assert p.x % BLOCK_SIZE == 0
            assert p.x >= 0 and p.right <= SCREEN_WIDTH

    def test_reachable_from_previous_center(self):
        platforms = generate_stage(make_stage(2)).platforms
        for prev, cur in zip(platforms, platforms[1:]):
            prev_center = prev.x + prev.width / 2
            cur_center = cur.x + cur.width / 2
            assert abs(cur_center - prev_center) <= MAX_HORIZONTAL_REACH + BLOCK_SIZE / 2

    def test_all_ice_when_ratio_is_one(self):
        cfg = make_stage(normal_ratio=0.0, ice_ratio=1.0, conveyor_ratio=0.0)
        assert all(p.type is PlatformType.ICE for p in generate_stage(cfg).platforms[1:])

    def test_conveyors_have_direction(self):
        cfg = make_stage(normal_ratio=0.0, ice_ratio=0.0, conveyor_ratio=1.0, platform_count=20)
        floating = generate_stage(cfg).platforms[1:]
        assert all(p.type is PlatformType.CONVEYOR for p in floating)
        assert all(p.direction in (-1, 1) for p in floating)

    def test_only_normal_when_ratios_zero(self):
        cfg = make_stage(normal_ratio=1.0, ice_ratio=0.0, conveyor_ratio=0.0)
        platforms = generate_platforms(cfg, SeededRandom(cfg.number))
        assert {p.type for p in platforms} == {PlatformType.NORMAL}


class TestGoalAndHazards:
    def test_goal_above_highest_platform(self):
        stage = generate_stage(make_stage())
        highest = min(p.y for p in stage.platforms)
        assert stage.goal.y == pytest.approx(highest - GOAL_OFFSET)
        assert stage.goal.x == pytest.approx(SCREEN_WIDTH / 2 - GOAL_SIZE / 2)

    def test_zero_platforms_degenerates_to_ground_and_goal(self):
        stage = generate_stage(make_stage(platform_count=0, hazard_count=3))
        assert len(stage.platforms) == 1
        assert stage.goal.y == pytest.approx(GROUND_Y - GOAL_OFFSET)
        assert stage.hazards == ()

    def test_hazards_sit_over_upper_floating_platforms(self):
        cfg = make_stage(platform_count=12, hazard_count=3)
        stage = generate_stage(cfg)
        upper = stage.platforms[1:][12 // 2:]
        assert len(stage.hazards) == 3
        for h in stage.hazards:
            assert not h.is_collected
            matches = [
                p for p in upper
                if h.x == pytest.approx(p.x + p.width / 2 - HAZARD_SIZE / 2)
                and h.y == pytest.approx(p.y - HAZARD_HOVER - HAZARD_SIZE)
            ]
            assert len(matches) == 1

    def test_hazards_on_distinct_platforms(self):
        stage = generate_stage(make_stage(hazard_count=5))
        assert len({(h.x, h.y) for h in stage.hazards}) == 5

    def test_hazard_count_capped_by_platforms(self):
        stage = generate_stage(make_stage(platform_count=2, hazard_count=5))
        assert len(stage.hazards) == 2


class TestStars:
    def test_star_count_scales_with_height(self):
        cfg = make_stage(total_height=7.1)
        total = cfg.total_height * SCREEN_HEIGHT
        expected = math.floor(total / SCREEN_HEIGHT * STARS_PER_SCREEN)
        assert len(generate_stage(cfg).stars) == expected

    def test_star_attributes(self):
        cfg = make_stage()
        total = cfg.total_height * SCREEN_HEIGHT
        for s in generate_stage(cfg).stars:
            assert isinstance(s.kind, StarKind)
            assert 0 <= s.x < SCREEN_WIDTH
            assert -total <= s.y < SCREEN_HEIGHT
            if s.kind is StarKind.CRESCENT:
                assert s.size == 12.0
            elif s.kind is StarKind.SPARKLE:
                assert s.size == 8.0
            else:
                assert 2.0 <= s.size < 4.0


class TestScoreAndWater:
    def test_score_with_time_bonus(self):
        assert calculate_score(1, 30, 45) == 1150

    def test_score_over_time_clamps_bonus(self):
        assert calculate_score(3, 60, 55) == 2000

    def test_score_floors_fractional_bonus(self):
        assert calculate_score(2, 44.95, 45) == math.floor((1000 + 0.5) * 1.5)

    def test_init_water_waits_below_ground(self):
        water = init_water(make_stage(water_speed=1.3))
        assert water.y == GROUND_Y + WATER_START_DEPTH
        assert water.speed == 1.3
        assert not water.is_rising
