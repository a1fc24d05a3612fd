from dataclasses import dataclass, replace


@dataclass(frozen=True)
class InputState:
    charge_held: bool = False
    charge_just_released: bool = False  # edge: true only on the release frame
    direction_x: int = 0  # -1, 0, 1
    direction_y: int = 0  # -1 up, 0, 1 down
    confirm_just_released: bool = False  # edge
    pause_toggle_requested: bool = False  # edge
    restart_requested: bool = False  # edge, honoured while paused

    def consumed(self) -> "InputState":
        """Same held state with every edge-triggered flag cleared."""
        return replace(
            self,
            charge_just_released=False,
            confirm_just_released=False,
            pause_toggle_requested=False,
            restart_requested=False,
        )
