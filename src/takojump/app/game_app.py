from __future__ import annotations

import argparse
import logging
import tkinter as tk
from pathlib import Path

from takojump.app.game_loop import GameLoop
from takojump.app.session import StageSession
from takojump.domain.config import DEFAULT_STAGES, SCREEN_HEIGHT, SCREEN_WIDTH, StageConfig
from takojump.infra.high_score_store import HighScoreFile
from takojump.infra.stage_files import load_stages_from_path, save_stages_to_path
from takojump.ui.input_mapper import TkInputMapper
from takojump.ui.tk_canvas_view import TkCanvasView

logger = logging.getLogger(__name__)


class GameApp:
    def __init__(self, *, stages: tuple[StageConfig, ...], high_score_path: Path | None = None) -> None:
        self.root = tk.Tk()
        self.root.title("Tako Jump")
        self.root.resizable(False, False)

        self.input = TkInputMapper(self.root)
        self.view = TkCanvasView(self.root, width=int(SCREEN_WIDTH), height=int(SCREEN_HEIGHT))
        self.session = StageSession(store=HighScoreFile(high_score_path), stages=stages)

        self.loop = GameLoop(root=self.root, frame_fn=self._frame, fps=60)
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

    def run(self) -> None:
        self.loop.start()
        self.root.mainloop()

    def _frame(self, dt: float) -> None:
        self.session.update(self.input.sample(), dt)
        self.view.render(self.session.snapshot())

    def _on_close(self) -> None:
        self.loop.stop()
        self.root.destroy()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="takojump", description="Charge-and-jump vertical platformer.")
    parser.add_argument("--stages", type=Path, help="JSON stage table (defaults to the built-in ten stages)")
    parser.add_argument("--high-score", type=Path, help="high score file (default: ./takojump_highscore.json)")
    parser.add_argument("--log-level", default="WARNING", help="logging level name")
    parser.add_argument("--dump-stages", type=Path, metavar="PATH", help="write the active stage table as JSON and exit")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    stages = load_stages_from_path(args.stages) if args.stages else DEFAULT_STAGES
    if args.dump_stages:
        save_stages_to_path(stages, args.dump_stages)
        return

    logger.info("starting with %d stages", len(stages))
    GameApp(stages=stages, high_score_path=args.high_score).run()


if __name__ == "__main__":
    main()
