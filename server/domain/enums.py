from enum import Enum

class GameState(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    SCORING_DELAY = "scoring_delay"
    ENDED = "ended"

class GameSide(Enum):
    COMPUTER = "computer"  # Top paddle, AI controlled
    PLAYER = "player"  # Bottom paddle, human controlled

    @property
    def opponent(self) -> "GameSide":
        return GameSide.PLAYER if self == GameSide.COMPUTER else GameSide.COMPUTER

class GameEvent(Enum):
    PADDLE_HIT = "paddle_hit"
    POINT_SCORED = "point_scored"
    MATCH_ENDED = "match_ended"
    DIFFICULTY_CHANGED = "difficulty_changed"
