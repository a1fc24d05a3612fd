from __future__ import annotations

import math
from dataclasses import dataclass

from takojump.domain.config import (
    BASE_SCORE,
    BLOCK_SIZE,
    GOAL_OFFSET,
    GOAL_SIZE,
    GROUND_Y,
    HAZARD_HOVER,
    HAZARD_SIZE,
    MAX_HORIZONTAL_REACH,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    SIDE_MARGIN,
    STAGE_MULTIPLIER_STEP,
    STARS_PER_SCREEN,
    TIME_BONUS_MULTIPLIER,
    WATER_START_DEPTH,
    StageConfig,
)
from takojump.domain.game_state import (
    Goal,
    Hazard,
    Platform,
    PlatformType,
    Star,
    StarKind,
    WaterLine,
)
from takojump.domain.rng import RandomSource, SeededRandom

_STAR_KINDS = (StarKind.DOT, StarKind.CROSS, StarKind.CRESCENT, StarKind.SPARKLE)


@dataclass(frozen=True)
class Stage:
    platforms: tuple[Platform, ...]
    goal: Goal
    hazards: tuple[Hazard, ...]
    stars: tuple[Star, ...]


def generate_stage(config: StageConfig, rng: RandomSource | None = None) -> Stage:
    """
    Build the full layout for one stage. With no generator given, one is seeded
    from the stage number, so the same config always yields the same layout.
    """
    if rng is None:
        rng = SeededRandom.for_stage(config.number)

    platforms = generate_platforms(config, rng)
    goal = generate_goal(platforms)
    hazards = generate_hazards(config, platforms, rng)
    stars = generate_stars(config.total_height * SCREEN_HEIGHT, rng)
    return Stage(platforms=platforms, goal=goal, hazards=hazards, stars=stars)


def ground_platform() -> Platform:
    return Platform(
        x=0.0,
        y=GROUND_Y,
        width=SCREEN_WIDTH,
        type=PlatformType.NORMAL,
        block_count=math.ceil(SCREEN_WIDTH / BLOCK_SIZE),
    )


def generate_platforms(config: StageConfig, rng: RandomSource) -> tuple[Platform, ...]:
    platforms: list[Platform] = [ground_platform()]

    current_y = GROUND_Y
    last_center = SCREEN_WIDTH / 2.0

    for i in range(config.platform_count):
        gap = config.first_platform_gap if i == 0 else _in_range(rng, config.gap_min, config.gap_max)
        current_y -= gap

        blocks = _int_in_range(rng, config.block_count_min, config.block_count_max)
        width = blocks * BLOCK_SIZE
        ptype = _pick_type(config, rng)
        direction = 1
        if ptype is PlatformType.CONVEYOR:
            direction = -1 if rng.random() < 0.5 else 1

        # Center must stay within reach of the previous platform's center.
        lo = max(SIDE_MARGIN + width / 2.0, last_center - MAX_HORIZONTAL_REACH)
        hi = min(SCREEN_WIDTH - SIDE_MARGIN - width / 2.0, last_center + MAX_HORIZONTAL_REACH)
        center = _in_range(rng, lo, hi) if lo <= hi else SCREEN_WIDTH / 2.0

        x = round((center - width / 2.0) / BLOCK_SIZE) * BLOCK_SIZE
        x = min(max(x, 0.0), max(0.0, SCREEN_WIDTH - width))

        platforms.append(
            Platform(
                x=float(x),
                y=current_y,
                width=width,
                type=ptype,
                block_count=blocks,
                direction=direction,
            )
        )
        last_center = x + width / 2.0

    return tuple(platforms)


def generate_goal(platforms: tuple[Platform, ...]) -> Goal:
    # Ground is always present, so min() never sees an empty sequence.
    highest = min(platforms, key=lambda p: p.y)
    return Goal(
        x=SCREEN_WIDTH / 2.0 - GOAL_SIZE / 2.0,
        y=highest.y - GOAL_OFFSET,
        size=GOAL_SIZE,
    )


def generate_hazards(
    config: StageConfig,
    platforms: tuple[Platform, ...],
    rng: RandomSource,
) -> tuple[Hazard, ...]:
    floating = list(platforms[1:])
    if config.hazard_count <= 0 or not floating:
        return ()

    # Upper half of the shaft; fall back to every floating platform if too few.
    candidates = floating[len(floating) // 2:]
    if len(candidates) < config.hazard_count:
        candidates = floating

    # Partial Fisher-Yates: draw without replacement.
    pool = list(candidates)
    count = min(config.hazard_count, len(pool))
    chosen: list[Platform] = []
    for i in range(count):
        j = i + int(rng.random() * (len(pool) - i))
        pool[i], pool[j] = pool[j], pool[i]
        chosen.append(pool[i])

    # Keep hazards ordered bottom-up regardless of draw order.
    chosen.sort(key=lambda p: -p.y)
    return tuple(
        Hazard(
            x=p.x + p.width / 2.0 - HAZARD_SIZE / 2.0,
            y=p.y - HAZARD_HOVER - HAZARD_SIZE,
            size=HAZARD_SIZE,
        )
        for p in chosen
    )


def generate_stars(total_height: float, rng: RandomSource) -> tuple[Star, ...]:
    count = math.floor(total_height / SCREEN_HEIGHT * STARS_PER_SCREEN)
    stars: list[Star] = []
    for _ in range(count):
        kind = _STAR_KINDS[int(rng.random() * len(_STAR_KINDS))]
        x = rng.random() * SCREEN_WIDTH
        y = -total_height + rng.random() * (total_height + SCREEN_HEIGHT)
        if kind is StarKind.CRESCENT:
            size = 12.0
        elif kind is StarKind.SPARKLE:
            size = 8.0
        else:
            size = _in_range(rng, 2.0, 4.0)
        stars.append(Star(x=x, y=y, size=size, kind=kind))
    return tuple(stars)


def init_water(config: StageConfig) -> WaterLine:
    # Starts below the visible ground and waits for the rise timer.
    return WaterLine(y=GROUND_Y + WATER_START_DEPTH, speed=config.water_speed, is_rising=False)


def calculate_score(
    stage_number: int,
    clear_time: float,
    base_time: float,
    *,
    base_score: int = BASE_SCORE,
    time_bonus_multiplier: int = TIME_BONUS_MULTIPLIER,
) -> int:
    time_bonus = max(0.0, base_time - clear_time) * time_bonus_multiplier
    stage_multiplier = 1 + (stage_number - 1) * STAGE_MULTIPLIER_STEP
    return math.floor((base_score + time_bonus) * stage_multiplier)


def _in_range(rng: RandomSource, lo: float, hi: float) -> float:
    return lo + rng.random() * (hi - lo)


def _int_in_range(rng: RandomSource, lo: int, hi: int) -> int:
    return lo + int(rng.random() * (hi - lo + 1))


def _pick_type(config: StageConfig, rng: RandomSource) -> PlatformType:
    r = rng.random()
    if r < config.ice_ratio:
        return PlatformType.ICE
    if r < config.ice_ratio + config.conveyor_ratio:
        return PlatformType.CONVEYOR
    return PlatformType.NORMAL
