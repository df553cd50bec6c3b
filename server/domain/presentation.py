from dataclasses import dataclass


@dataclass
class EndAnimation:
    """Victory/defeat overlay state. Runs on its own clock, independent of the match."""
    DURATION = 180  # Ticks, 3 seconds at 60 fps
    MIN_FADE = 0.3

    kind: str = "none"  # 'victory', 'defeat' or 'none'
    frame: int = 0
    fade_opacity: float = 1.0

    @property
    def active(self) -> bool:
        return self.kind != "none"

    def start(self, kind: str) -> None:
        self.kind = kind
        self.frame = 0
        self.fade_opacity = 1.0

    def update(self) -> None:
        if not self.active:
            return

        self.frame += 1
        if self.kind == "defeat":
            self.fade_opacity = max(self.MIN_FADE, 1 - (self.frame / self.DURATION) * (1 - self.MIN_FADE))
        if self.frame >= self.DURATION:
            self.reset()

    def reset(self) -> None:
        self.kind = "none"
        self.frame = 0
        self.fade_opacity = 1.0
