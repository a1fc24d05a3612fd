import tkinter as tk

from takojump.domain.config import DEFAULT_PHYSICS, SCREEN_HEIGHT, SCREEN_WIDTH
from takojump.domain.game_state import CharacterState, PlatformType, Screen, SessionState

_PLATFORM_FILL = {
    PlatformType.NORMAL: "#E8A87C",
    PlatformType.ICE: "#87CEEB",
    PlatformType.CONVEYOR: "#808080",
}

_OVERLAY_TEXT = {
    Screen.TITLE: "TAKO JUMP\n\nHIGH SCORE\n{high}\n\nPRESS SPACE",
    Screen.PAUSED: "PAUSED\n\nESC: CONTINUE\nR: RESTART",
    Screen.CLEARED: "{clear}\n\nSCORE {score}\nHIGH SCORE {high}{updated}\n\nPRESS SPACE",
    Screen.GAMEOVER: "GAME OVER\n\nSCORE {score}\nHIGH SCORE {high}{updated}\n\nPRESS SPACE",
}


class TkCanvasView:
    def __init__(self, root: tk.Misc, *, width: int = int(SCREEN_WIDTH), height: int = int(SCREEN_HEIGHT)) -> None:
        self._w = width
        self._h = height

        self.canvas = tk.Canvas(root, width=width, height=height, highlightthickness=0, bg="#2D2A5A")
        self.canvas.pack(fill="both", expand=True)

    def render(self, state: SessionState) -> None:
        c = self.canvas
        c.delete("all")
        cam = state.camera.y

        for s in state.stars:
            y = s.y - cam
            if -s.size <= y <= self._h:
                c.create_oval(s.x, y, s.x + s.size, y + s.size, outline="", fill="#9B8AC4")

        g = state.goal
        c.create_oval(g.x, g.y - cam, g.x + g.size, g.y - cam + g.size, outline="", fill="#FFD93D")

        for p in state.platforms:
            y = p.y - cam
            if y < -20 or y > self._h + 20:
                continue
            c.create_rectangle(p.x, y, p.right, y + 14, outline="", fill=_PLATFORM_FILL[p.type])

        for h in state.hazards:
            if h.is_collected:
                continue
            y = h.y - cam
            c.create_oval(h.x, y, h.x + h.size, y + h.size, outline="", fill="#FF6B6B")

        water_top = state.water.y - cam
        if water_top < self._h:
            c.create_rectangle(0, water_top, self._w, self._h, outline="", fill="#660099")

        ch = state.character
        cfg = DEFAULT_PHYSICS
        x, y = ch.position.x, ch.position.y - cam
        fill = "#888" if ch.state is CharacterState.DEAD else "#F66"
        # Squash while charging.
        squash = cfg.height * 0.3 * ch.charge_ratio
        c.create_rectangle(x, y + squash, x + cfg.width, y + cfg.height, outline="", fill=fill)

        if state.screen in (Screen.PLAYING, Screen.PAUSED):
            c.create_text(
                10, 10, anchor="nw", fill="#FFF", font=("TkFixedFont", 11),
                text=(
                    f"STAGE {state.stage}  SCORE {state.score}  LIVES {state.lives}\n"
                    f"TIME {state.elapsed_time:5.1f}"
                ),
            )

        template = _OVERLAY_TEXT.get(state.screen)
        if template is not None:
            c.create_rectangle(40, 250, self._w - 40, 600, outline="#FFF", fill="#000", stipple="gray75")
            c.create_text(
                self._w / 2, 425, fill="#FFF", justify="center", font=("TkFixedFont", 14),
                text=template.format(
                    high=state.high_score,
                    score=state.score,
                    clear="ALL CLEAR!!" if state.is_all_clear else "STAGE CLEAR!",
                    updated="\nHIGH SCORE UPDATED!!" if state.is_high_score_updated else "",
                ),
            )
