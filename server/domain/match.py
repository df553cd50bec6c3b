from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from domain.enums import GameSide, GameState


@dataclass
class MatchState:
    """Scores and phase of one match.

    Every transition method returns True when it applied and False when the
    action was not legal from the current phase, in which case nothing changes.
    """
    winning_score: int = 5
    state: GameState = GameState.NOT_STARTED
    scores: Dict[GameSide, int] = field(default_factory=lambda: {side: 0 for side in GameSide})
    winner: Optional[GameSide] = None
    serve_towards: Optional[GameSide] = None
    epoch: int = 0  # Bumped on every reset, stamped on deferred callbacks

    @property
    def player_score(self) -> int:
        return self.scores[GameSide.PLAYER]

    @property
    def computer_score(self) -> int:
        return self.scores[GameSide.COMPUTER]

    @property
    def is_over(self) -> bool:
        return self.state == GameState.ENDED

    def start(self) -> bool:
        if self.state != GameState.NOT_STARTED:
            return False
        self.state = GameState.RUNNING
        return True

    def toggle_pause(self) -> bool:
        if self.state == GameState.RUNNING:
            self.state = GameState.PAUSED
        elif self.state == GameState.PAUSED:
            self.state = GameState.RUNNING
        else:
            return False
        return True

    def award_point(self, scorer: GameSide) -> bool:
        if self.state != GameState.RUNNING:
            return False

        self.scores[scorer] += 1
        if self.scores[scorer] >= self.winning_score:
            self.state = GameState.ENDED
            self.winner = scorer
            self.serve_towards = None
        else:
            self.state = GameState.SCORING_DELAY
            self.serve_towards = scorer.opponent
        return True

    def finish_scoring_delay(self, epoch: int) -> bool:
        if epoch != self.epoch or self.state != GameState.SCORING_DELAY:
            return False
        self.state = GameState.RUNNING
        return True

    def reset(self) -> None:
        self.state = GameState.NOT_STARTED
        self.scores = {side: 0 for side in GameSide}
        self.winner = None
        self.serve_towards = None
        self.epoch += 1


class MatchTimer:
    """Wall time a match has been in play, pauses excluded."""

    def __init__(self, clock: Callable[[], float]):
        self.clock = clock
        self.elapsed = 0.0
        self._resumed_at: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._resumed_at is not None

    @property
    def elapsed_ms(self) -> int:
        total = self.elapsed
        if self.running:
            total += self.clock() - self._resumed_at
        return int(round(total * 1000))

    def resume(self) -> None:
        if not self.running:
            self._resumed_at = self.clock()

    def pause(self) -> None:
        if self.running:
            self.elapsed += self.clock() - self._resumed_at
            self._resumed_at = None

    def reset(self) -> None:
        self.elapsed = 0.0
        self._resumed_at = None
