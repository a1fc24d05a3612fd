from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class TimerKind(Enum):
    WATER_RISE = "water_rise"
    LIFE_END = "life_end"  # respawn or game over, never both


@dataclass(frozen=True)
class ScheduledTask:
    kind: TimerKind
    due: float
    life_id: int
    callback: Callable[[], None]


class TaskScheduler:
    """
    Single-shot deferred callbacks on the simulation clock. At most one task per
    kind is pending; each task remembers the life it was armed for and is
    dropped if that life is gone when it comes due.
    """

    def __init__(self) -> None:
        self._tasks: dict[TimerKind, ScheduledTask] = {}

    def schedule(
        self,
        kind: TimerKind,
        *,
        now: float,
        delay: float,
        life_id: int,
        callback: Callable[[], None],
        replace: bool = False,
    ) -> bool:
        if kind in self._tasks and not replace:
            logger.debug("%s already pending; not re-armed", kind.value)
            return False
        self._tasks[kind] = ScheduledTask(kind=kind, due=now + delay, life_id=life_id, callback=callback)
        logger.debug("armed %s for life %d (due %.3f)", kind.value, life_id, now + delay)
        return True

    def cancel(self, kind: TimerKind) -> bool:
        task = self._tasks.pop(kind, None)
        if task is not None:
            logger.debug("cancelled %s for life %d", kind.value, task.life_id)
        return task is not None

    def cancel_all(self) -> None:
        for kind in list(self._tasks):
            self.cancel(kind)

    def is_pending(self, kind: TimerKind) -> bool:
        return kind in self._tasks

    def run_due(self, now: float, current_life_id: int) -> int:
        """Fire every task whose due time has passed; returns how many ran."""
        due = sorted((t for t in self._tasks.values() if t.due <= now), key=lambda t: t.due)
        fired = 0
        for task in due:
            # A callback may have cancelled or replaced this task.
            if self._tasks.get(task.kind) is not task:
                continue
            del self._tasks[task.kind]
            if task.life_id != current_life_id:
                logger.debug("dropped stale %s for life %d", task.kind.value, task.life_id)
                continue
            task.callback()
            fired += 1
        return fired
