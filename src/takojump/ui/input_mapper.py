from __future__ import annotations
import tkinter as tk
from takojump.domain.input_state import InputState


class TkInputMapper:
    def __init__(self, root: tk.Tk) -> None:
        self._space_down = False
        self._space_released_edge = False
        self._pause_edge = False
        self._restart_edge = False
        self._held: set[str] = set()

        root.bind("<KeyPress-space>", self._on_space_down)
        root.bind("<KeyRelease-space>", self._on_space_up)
        root.bind("<KeyPress-Escape>", self._on_escape)
        root.bind("<KeyPress-r>", self._on_restart)
        for key in ("Left", "Right", "Up", "Down"):
            root.bind(f"<KeyPress-{key}>", lambda _e, k=key: self._held.add(k))
            root.bind(f"<KeyRelease-{key}>", lambda _e, k=key: self._held.discard(k))

        # Helps ensure root gets key events.
        root.focus_set()

    def _on_space_down(self, _evt: tk.Event) -> None:
        self._space_down = True

    def _on_space_up(self, _evt: tk.Event) -> None:
        if self._space_down:
            self._space_released_edge = True
        self._space_down = False

    def _on_escape(self, _evt: tk.Event) -> None:
        self._pause_edge = True

    def _on_restart(self, _evt: tk.Event) -> None:
        self._restart_edge = True

    def sample(self) -> InputState:
        # Edges are reported once, then cleared.
        released = self._space_released_edge
        pause = self._pause_edge
        restart = self._restart_edge
        self._space_released_edge = False
        self._pause_edge = False
        self._restart_edge = False

        dx = ("Right" in self._held) - ("Left" in self._held)
        dy = ("Down" in self._held) - ("Up" in self._held)
        return InputState(
            charge_held=self._space_down,
            charge_just_released=released,
            direction_x=dx,
            direction_y=dy,
            confirm_just_released=released,
            pause_toggle_requested=pause,
            restart_requested=restart,
        )
