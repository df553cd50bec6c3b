from dataclasses import dataclass, asdict
from typing import Dict, Tuple


@dataclass(frozen=True)
class DifficultyProfile:
    name: str
    ball_speed: Tuple[float, float]  # Base serve speed (x, y)
    ball_max_speed: float
    speed_growth: float  # Vertical speed multiplier per rally hit
    ai_speed: float  # Max AI paddle step per tick
    ai_reaction: float
    ai_dead_zone: float  # Horizontal moves smaller than this are skipped
    ai_vertical_dead_zone: float
    ai_vertical_reaction: float
    ai_smoothing: float  # Paddle -> tracked target
    ai_easing: float  # Tracked target -> ideal position
    ai_net_standoff: float  # Minimum distance between AI paddle and net

    def to_dict(self) -> Dict:
        return asdict(self)


BEGINNER = DifficultyProfile(
    name="beginner",
    ball_speed=(1.0, 0.8),
    ball_max_speed=2.5,
    speed_growth=1.005,
    ai_speed=2,
    ai_reaction=0.5,
    ai_dead_zone=3,
    ai_vertical_dead_zone=4,
    ai_vertical_reaction=0.3,
    ai_smoothing=0.15,
    ai_easing=0.03,
    ai_net_standoff=120,
)

ADVANCED = DifficultyProfile(
    name="advanced",
    ball_speed=(1.5, 1.2),
    ball_max_speed=3.5,
    speed_growth=1.01,
    ai_speed=3,
    ai_reaction=0.7,
    ai_dead_zone=2,
    ai_vertical_dead_zone=3,
    ai_vertical_reaction=0.5,
    ai_smoothing=0.25,
    ai_easing=0.05,
    ai_net_standoff=100,
)

EXPERT = DifficultyProfile(
    name="expert",
    ball_speed=(2.0, 1.8),
    ball_max_speed=4.5,
    speed_growth=1.02,
    ai_speed=4.5,
    ai_reaction=0.9,
    ai_dead_zone=1.5,
    ai_vertical_dead_zone=2.5,
    ai_vertical_reaction=0.7,
    ai_smoothing=0.35,
    ai_easing=0.07,
    ai_net_standoff=80,
)

PROFILES: Dict[str, DifficultyProfile] = {
    profile.name: profile for profile in (BEGINNER, ADVANCED, EXPERT)
}

DEFAULT_DIFFICULTY = BEGINNER.name


def get_profile(name: str) -> DifficultyProfile:
    try:
        return PROFILES[name]
    except KeyError:
        raise ValueError(f"Unknown difficulty: {name}") from None
