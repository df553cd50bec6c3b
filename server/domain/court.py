from dataclasses import dataclass


@dataclass(frozen=True)
class Court:
    """Canvas and playable area, in pixels. Top-down view, net is horizontal."""
    width: float = 600
    height: float = 800
    left: float = 80  # Sidelines
    right: float = 520
    top: float = 50  # Baselines
    bottom: float = 750
    overshoot: float = 20  # How far past an edge the ball travels before it counts

    @property
    def net_y(self) -> float:
        return self.height / 2

    @property
    def center_x(self) -> float:
        return self.width / 2

    @property
    def center_y(self) -> float:
        return self.height / 2
