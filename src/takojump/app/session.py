from __future__ import annotations

import logging
from dataclasses import replace

from takojump.app.scheduler import TaskScheduler, TimerKind
from takojump.domain.character import kill, spawn_character
from takojump.domain.config import (
    CAMERA_SPAWN_MARGIN,
    DEFAULT_STAGES,
    LIFE_END_DELAY,
    LIVES,
    SCREEN_HEIGHT,
    SPAWN_OFFSET_X,
    StageConfig,
)
from takojump.domain.exceptions import CharacterDrowned, StageCleared
from takojump.domain.game_state import Camera, Character, Platform, Screen, SessionState
from takojump.domain.high_score import HighScoreStore
from takojump.domain.input_state import InputState
from takojump.domain.stage import calculate_score, generate_stage, init_water
from takojump.domain.world import World

logger = logging.getLogger(__name__)


class StageSession:
    """
    Owns one play session: screen flow, lives, score, and the timed
    death/respawn/water transitions. Time only advances while playing.
    """

    FIXED_DT = 1.0 / 60.0
    MAX_STEPS = 5

    def __init__(
        self,
        *,
        store: HighScoreStore,
        stages: tuple[StageConfig, ...] = DEFAULT_STAGES,
        world: World | None = None,
        scheduler: TaskScheduler | None = None,
    ) -> None:
        if not stages:
            raise ValueError("at least one stage is required")
        self._store = store
        self._stages = stages
        self.world = world or World()
        self.timers = scheduler or TaskScheduler()

        self._clock = 0.0
        self._accum = 0.0
        self._life_id = 0
        self._carried: InputState | None = None

        self.state = self._title_state()

    # ---------- Read side ----------

    @property
    def clock(self) -> float:
        return self._clock

    def snapshot(self) -> SessionState:
        return self.state

    # ---------- Per-frame entry point ----------

    def update(self, inp: InputState, dt: float) -> SessionState:
        inp = self._merge_carried(inp)

        if self.state.screen is not Screen.PLAYING:
            self._accum = 0.0
            self.handle_menu_input(inp)
            return self.state

        if inp.pause_toggle_requested:
            self.pause()
            return self.state

        self._accum += dt
        steps = 0
        while self._accum >= self.FIXED_DT and steps < self.MAX_STEPS:
            self.step(inp)
            self._accum -= self.FIXED_DT
            steps += 1
            inp = inp.consumed()
            if self.state.screen is not Screen.PLAYING:
                self._accum = 0.0
                break

        if steps == self.MAX_STEPS and self._accum >= self.FIXED_DT:
            logger.debug("dropping %.3fs of frame time after %d steps", self._accum, steps)
            self._accum = 0.0

        # Edges seen on a frame too short to step are kept for the next one.
        if steps == 0:
            self._carried = inp
        return self.state

    def step(self, inp: InputState) -> None:
        """Run exactly one fixed simulation tick."""
        if self.state.screen is not Screen.PLAYING:
            return

        self._clock += self.FIXED_DT
        self.timers.run_due(self._clock, self._life_id)
        if self.state.screen is not Screen.PLAYING:
            return

        try:
            self.state = self.world.step(self.state, inp, self.FIXED_DT, self._clock)
        except StageCleared as e:
            self._on_stage_cleared(e.state)
        except CharacterDrowned as e:
            self._on_drowned(e.state)

    def handle_menu_input(self, inp: InputState) -> None:
        screen = self.state.screen
        if screen is Screen.TITLE:
            if inp.confirm_just_released:
                self.start_game()
        elif screen is Screen.CLEARED:
            if inp.confirm_just_released:
                self.next_stage()
        elif screen is Screen.GAMEOVER:
            if inp.confirm_just_released:
                self.return_to_title()
        elif screen is Screen.PAUSED:
            if inp.pause_toggle_requested:
                self.resume()
            elif inp.restart_requested:
                self.restart_from_beginning()
        elif screen is Screen.PLAYING:
            pass
        else:
            raise AssertionError(f"unhandled screen {screen!r}")

    # ---------- Screen transitions ----------

    def start_game(self) -> None:
        self._begin_stage(1, score=0, lives=LIVES, high_score=self.state.high_score)

    def next_stage(self) -> None:
        number = self.state.stage + 1
        if number > len(self._stages):
            logger.info("all %d stages cleared with score %d", len(self._stages), self.state.score)
            self.return_to_title()
            return
        self._begin_stage(
            number,
            score=self.state.score,
            lives=self.state.lives,
            high_score=self.state.high_score,
        )

    def return_to_title(self) -> None:
        self.timers.cancel_all()
        self._life_id += 1
        self.state = self._title_state()

    def restart_from_beginning(self) -> None:
        logger.info("restarting from stage 1")
        self.timers.cancel_all()
        self.start_game()

    def pause(self) -> None:
        if self.state.screen is Screen.PLAYING:
            self.state = replace(self.state, screen=Screen.PAUSED)

    def resume(self) -> None:
        if self.state.screen is Screen.PAUSED:
            self.state = replace(self.state, screen=Screen.PLAYING)

    # ---------- Terminal outcomes ----------

    def _on_stage_cleared(self, stepped: SessionState) -> None:
        self.timers.cancel_all()

        config = self._stages[stepped.stage - 1]
        gained = calculate_score(stepped.stage, stepped.elapsed_time, config.base_time)
        score = stepped.score + gained
        updated = score > stepped.high_score

        self.state = replace(
            stepped,
            screen=Screen.CLEARED,
            score=score,
            high_score=max(score, stepped.high_score),
            is_high_score_updated=updated,
            is_all_clear=stepped.stage >= len(self._stages),
        )
        logger.info(
            "stage %d cleared in %.2fs: +%d (total %d)",
            stepped.stage, stepped.elapsed_time, gained, score,
        )
        if updated:
            self._store.save_high_score(score)

    def _on_drowned(self, stepped: SessionState) -> None:
        self.timers.cancel(TimerKind.WATER_RISE)

        lives = stepped.lives - 1
        self.state = replace(
            stepped,
            character=kill(stepped.character),
            lives=lives,
            support_index=None,
        )
        logger.info("stage %d: drowned, %d lives left", stepped.stage, lives)

        callback = self._game_over if lives <= 0 else self._respawn
        self.timers.schedule(
            TimerKind.LIFE_END,
            now=self._clock,
            delay=LIFE_END_DELAY,
            life_id=self._life_id,
            callback=callback,
        )

    def _game_over(self) -> None:
        s = self.state
        updated = s.score > s.high_score
        self.state = replace(
            s,
            screen=Screen.GAMEOVER,
            high_score=max(s.score, s.high_score),
            is_high_score_updated=updated,
        )
        logger.info("game over at stage %d with score %d", s.stage, s.score)
        if updated:
            self._store.save_high_score(s.score)

    def _respawn(self) -> None:
        self._life_id += 1
        s = self.state
        ground = s.platforms[0]
        self.state = replace(
            s,
            character=_spawn_on(ground, self.world.physics.height),
            hazards=tuple(replace(h, is_collected=False) for h in s.hazards),
            water=init_water(self._stages[s.stage - 1]),
            camera=_camera_for(ground),
            support_index=0,
        )
        self._arm_water_rise()

    def _start_water_rise(self) -> None:
        self.state = replace(self.state, water=replace(self.state.water, is_rising=True))

    # ---------- Construction ----------

    def _begin_stage(self, number: int, *, score: int, lives: int, high_score: int) -> None:
        self.timers.cancel_all()
        self._life_id += 1
        self._accum = 0.0

        config = self._stages[number - 1]
        self.state = self._fresh_state(
            config,
            screen=Screen.PLAYING,
            score=score,
            lives=lives,
            high_score=high_score,
        )
        logger.info("stage %d started (%d lives, score %d)", number, lives, score)
        self._arm_water_rise()

    def _title_state(self) -> SessionState:
        return self._fresh_state(
            self._stages[0],
            screen=Screen.TITLE,
            score=0,
            lives=LIVES,
            high_score=self._store.load_high_score(),
        )

    def _fresh_state(
        self,
        config: StageConfig,
        *,
        screen: Screen,
        score: int,
        lives: int,
        high_score: int,
    ) -> SessionState:
        layout = generate_stage(config)
        ground = layout.platforms[0]
        return SessionState(
            screen=screen,
            stage=config.number,
            score=score,
            high_score=high_score,
            lives=lives,
            stage_start_time=self._clock,
            elapsed_time=0.0,
            is_high_score_updated=False,
            character=_spawn_on(ground, self.world.physics.height),
            platforms=layout.platforms,
            hazards=layout.hazards,
            goal=layout.goal,
            water=init_water(config),
            camera=_camera_for(ground),
            stars=layout.stars,
            support_index=0,
        )

    def _arm_water_rise(self) -> None:
        self.timers.schedule(
            TimerKind.WATER_RISE,
            now=self._clock,
            delay=self._stages[self.state.stage - 1].water_delay,
            life_id=self._life_id,
            callback=self._start_water_rise,
            replace=True,
        )

    def _merge_carried(self, inp: InputState) -> InputState:
        carried, self._carried = self._carried, None
        if carried is None:
            return inp
        return replace(
            inp,
            charge_just_released=inp.charge_just_released or carried.charge_just_released,
            confirm_just_released=inp.confirm_just_released or carried.confirm_just_released,
            pause_toggle_requested=inp.pause_toggle_requested or carried.pause_toggle_requested,
            restart_requested=inp.restart_requested or carried.restart_requested,
        )


def _spawn_on(ground: Platform, height: float) -> Character:
    return spawn_character(ground.x + SPAWN_OFFSET_X, ground.y - height)


def _camera_for(ground: Platform) -> Camera:
    y = ground.y - SCREEN_HEIGHT + CAMERA_SPAWN_MARGIN
    return Camera(y=y, target_y=y)
