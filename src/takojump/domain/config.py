from __future__ import annotations

from dataclasses import dataclass

# Screen / layout (px)
SCREEN_WIDTH = 390.0
SCREEN_HEIGHT = 844.0
GROUND_OFFSET = 50.0
GROUND_Y = SCREEN_HEIGHT - GROUND_OFFSET

BLOCK_SIZE = 14.0
PLATFORM_HEIGHT = 14.0
SIDE_MARGIN = 20.0
MAX_HORIZONTAL_REACH = SCREEN_WIDTH * 0.6

GOAL_SIZE = 80.0
GOAL_OFFSET = 200.0

HAZARD_SIZE = 32.0
HAZARD_HOVER = 60.0
HAZARD_ROTATION_SPEED = 0.02

CONVEYOR_SEGMENT_WIDTH = 7.0
CONVEYOR_ANIMATION_STEP = 0.5

WATER_START_DEPTH = 300.0
WAVE_SPEED = 0.05

STARS_PER_SCREEN = 30

# Game system
LIVES = 3
BASE_SCORE = 1000
TIME_BONUS_MULTIPLIER = 10
STAGE_MULTIPLIER_STEP = 0.5

# Seconds a dead character stays on screen before respawn / game over.
LIFE_END_DELAY = 1.0

SPAWN_OFFSET_X = 50.0
CAMERA_LEAD = SCREEN_HEIGHT * 0.6
CAMERA_SPAWN_MARGIN = 200.0


@dataclass(frozen=True)
class PhysicsConfig:
    """
    Per-tick tunables. Velocities are px/tick and accelerations px/tick^2 for a
    fixed 1/60 s tick.
    """
    width: float = 29.0
    height: float = 35.0
    gravity: float = 0.36
    max_fall_speed: float = 10.5
    air_control: float = 0.25
    air_control_charging: float = 0.05
    horizontal_factor: float = 0.7
    max_horizontal_speed: float = 6.0
    max_slide_speed: float = 4.0
    landing_margin: float = 4.0

    max_charge_time: float = 1.0  # seconds
    min_jump_speed: float = 5.3
    max_jump_speed: float = 15.8
    jump_tilt: float = 0.08  # fraction of pi away from vertical

    conveyor_speed: float = 1.5

    hazard_impulse: float = 24.0
    hit_fraction: float = 0.7

    camera_follow: float = 0.1  # fraction of the gap closed per 1/60 s


DEFAULT_PHYSICS = PhysicsConfig()


@dataclass(frozen=True)
class StageConfig:
    number: int
    name: str
    total_height: float  # in screens
    platform_count: int
    first_platform_gap: float
    block_count_min: int
    block_count_max: int
    gap_min: float
    gap_max: float
    normal_ratio: float
    ice_ratio: float
    conveyor_ratio: float
    hazard_count: int
    water_speed: float
    water_delay: float  # seconds
    base_time: float  # seconds


def _stage(number: int, **kw) -> StageConfig:
    return StageConfig(number=number, name=f"Stage {number}", **kw)


# Min/max pairs must satisfy min <= max; the generator does not check.
DEFAULT_STAGES: tuple[StageConfig, ...] = (
    _stage(1, total_height=5.3, platform_count=12, first_platform_gap=180,
           block_count_min=10, block_count_max=14, gap_min=150, gap_max=200,
           normal_ratio=1.0, ice_ratio=0.0, conveyor_ratio=0.0, hazard_count=0,
           water_speed=0.6, water_delay=8.0, base_time=45),
    _stage(2, total_height=5.3, platform_count=12, first_platform_gap=200,
           block_count_min=4, block_count_max=8, gap_min=220, gap_max=280,
           normal_ratio=1.0, ice_ratio=0.0, conveyor_ratio=0.0, hazard_count=0,
           water_speed=0.8, water_delay=6.0, base_time=50),
    _stage(3, total_height=5.3, platform_count=12, first_platform_gap=180,
           block_count_min=8, block_count_max=12, gap_min=150, gap_max=200,
           normal_ratio=0.5, ice_ratio=0.5, conveyor_ratio=0.0, hazard_count=0,
           water_speed=1.0, water_delay=8.0, base_time=55),
    _stage(4, total_height=5.3, platform_count=12, first_platform_gap=220,
           block_count_min=4, block_count_max=8, gap_min=220, gap_max=280,
           normal_ratio=0.3, ice_ratio=0.7, conveyor_ratio=0.0, hazard_count=0,
           water_speed=1.1, water_delay=8.0, base_time=60),
    _stage(5, total_height=5.3, platform_count=12, first_platform_gap=250,
           block_count_min=4, block_count_max=7, gap_min=250, gap_max=300,
           normal_ratio=0.0, ice_ratio=1.0, conveyor_ratio=0.0, hazard_count=0,
           water_speed=1.0, water_delay=8.0, base_time=65),
    _stage(6, total_height=7.1, platform_count=16, first_platform_gap=180,
           block_count_min=8, block_count_max=12, gap_min=150, gap_max=220,
           normal_ratio=0.8, ice_ratio=0.2, conveyor_ratio=0.0, hazard_count=3,
           water_speed=1.0, water_delay=6.0, base_time=70),
    _stage(7, total_height=8.0, platform_count=18, first_platform_gap=200,
           block_count_min=4, block_count_max=8, gap_min=200, gap_max=260,
           normal_ratio=0.6, ice_ratio=0.4, conveyor_ratio=0.0, hazard_count=5,
           water_speed=1.2, water_delay=6.0, base_time=80),
    _stage(8, total_height=6.2, platform_count=14, first_platform_gap=200,
           block_count_min=6, block_count_max=10, gap_min=180, gap_max=250,
           normal_ratio=0.4, ice_ratio=0.4, conveyor_ratio=0.2, hazard_count=2,
           water_speed=1.3, water_delay=9.0, base_time=65),
    _stage(9, total_height=7.1, platform_count=16, first_platform_gap=220,
           block_count_min=4, block_count_max=8, gap_min=220, gap_max=280,
           normal_ratio=0.2, ice_ratio=0.4, conveyor_ratio=0.4, hazard_count=2,
           water_speed=1.1, water_delay=4.0, base_time=75),
    _stage(10, total_height=7.1, platform_count=16, first_platform_gap=250,
           block_count_min=4, block_count_max=7, gap_min=250, gap_max=300,
           normal_ratio=0.0, ice_ratio=0.4, conveyor_ratio=0.6, hazard_count=2,
           water_speed=0.6, water_delay=3.0, base_time=80),
)
