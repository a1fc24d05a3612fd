from __future__ import annotations

import logging
import time
import tkinter as tk
from collections.abc import Callable

logger = logging.getLogger(__name__)

# Longest real frame handed to the session; longer gaps (window drag, minimize) are cut.
MAX_FRAME_DT = 0.1
RATE_LOG_INTERVAL = 5.0


class GameLoop:
    """Drives one frame callback from Tk's event loop with the measured delta time."""

    def __init__(
        self,
        *,
        root: tk.Tk,
        frame_fn: Callable[[float], None],
        fps: int = 60,
        max_frame_dt: float = MAX_FRAME_DT,
    ) -> None:
        self._root = root
        self._frame_fn = frame_fn
        self._interval_ms = max(1, int(1000 / max(1, fps)))
        self._max_frame_dt = max_frame_dt

        self._running = False
        self._pending: str | None = None
        self._last = 0.0

        self.frames = 0
        self._rate_frames = 0
        self._rate_since = 0.0

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._last = self._rate_since = time.monotonic()
        self._pending = self._root.after(self._interval_ms, self._on_frame)

    def stop(self) -> None:
        self._running = False
        if self._pending is None:
            return
        try:
            self._root.after_cancel(self._pending)
        except tk.TclError:
            logger.debug("frame callback outlived its root")
        finally:
            self._pending = None

    def _on_frame(self) -> None:
        if not self._running:
            return

        now = time.monotonic()
        dt = min(now - self._last, self._max_frame_dt)
        self._last = now

        try:
            self._frame_fn(dt)
        except Exception:
            logger.exception("frame %d failed; stopping loop", self.frames)
            self.stop()
            raise

        self.frames += 1
        self._log_rate(now)
        self._pending = self._root.after(self._interval_ms, self._on_frame)

    def _log_rate(self, now: float) -> None:
        self._rate_frames += 1
        span = now - self._rate_since
        if span >= RATE_LOG_INTERVAL:
            logger.debug("%.1f frames/s", self._rate_frames / span)
            self._rate_frames = 0
            self._rate_since = now
