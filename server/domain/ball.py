from dataclasses import dataclass

from domain.court import Court


@dataclass
class Ball:
    x: float = 0  # Top-left corner of the bounding box
    y: float = 0
    vx: float = 0  # Pixels per tick
    vy: float = 0
    width: float = 40
    height: float = 40
    max_speed: float = 4  # Replaced by the active difficulty profile

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    def advance(self) -> None:
        self.x += self.vx
        self.y += self.vy

    def center_on(self, court: Court) -> None:
        self.x = court.center_x - self.width / 2
        self.y = court.center_y - self.height / 2

    def set_velocity(self, vx: float, vy: float) -> None:
        self.vx = float(vx)
        self.vy = float(vy)
