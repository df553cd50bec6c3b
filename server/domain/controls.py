from dataclasses import dataclass
from typing import Dict

from domain.court import Court
from domain.paddle import Paddle

NET_MARGIN = 10  # Player paddle stays this far below the net
BOTTOM_MARGIN = 20

KEY_ALIASES = {
    "ArrowLeft": "left",
    "ArrowRight": "right",
    "ArrowUp": "up",
    "ArrowDown": "down",
}


@dataclass
class InputState:
    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False

    @classmethod
    def from_key_map(cls, keys: Dict[str, bool]) -> "InputState":
        """Build from a pressed/released map keyed by arrow key or direction name."""
        pressed = {}
        for key, is_pressed in keys.items():
            direction = KEY_ALIASES.get(key, key)
            if direction in ("left", "right", "up", "down"):
                pressed[direction] = pressed.get(direction, False) or bool(is_pressed)
        return cls(**pressed)


def player_limits(paddle: Paddle, court: Court):
    return (
        0,
        court.width - paddle.width,
        court.net_y + NET_MARGIN,
        court.height - paddle.height - BOTTOM_MARGIN,
    )


def move_player(paddle: Paddle, keys: InputState, court: Court) -> None:
    """Direct, un-eased movement of the human paddle."""
    if keys.left:
        paddle.move_left()
    if keys.right:
        paddle.move_right()
    if keys.up:
        paddle.move_up()
    if keys.down:
        paddle.move_down()
    paddle.clamp(*player_limits(paddle, court))
