from dataclasses import dataclass

import numpy as np

from domain.ball import Ball


@dataclass
class Paddle:
    x: float  # Top-left corner
    y: float
    width: float = 80
    height: float = 15
    speed: float = 5  # Movement per tick

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    def is_on_paddle(self, ball: Ball) -> bool:
        """Axis-aligned bounding box overlap between the ball and the paddle."""
        return (
            ball.x < self.x + self.width and
            ball.x + ball.width > self.x and
            ball.y < self.y + self.height and
            ball.y + ball.height > self.y
        )

    def clamp(self, x_min: float, x_max: float, y_min: float, y_max: float) -> None:
        self.x = float(np.clip(self.x, x_min, x_max))
        self.y = float(np.clip(self.y, y_min, y_max))

    def move_left(self) -> None:
        self.x -= self.speed

    def move_right(self) -> None:
        self.x += self.speed

    def move_up(self) -> None:
        self.y -= self.speed

    def move_down(self) -> None:
        self.y += self.speed
