from dataclasses import dataclass
from dataclasses import field
from typing import Dict, Optional

import numpy as np

from core.scheduler import Scheduler
from domain import ai, physics, shots
from domain.ai import AITarget
from domain.ball import Ball
from domain.controls import InputState, move_player
from domain.court import Court
from domain.difficulty import DEFAULT_DIFFICULTY, DifficultyProfile, get_profile
from domain.enums import GameEvent, GameSide, GameState
from domain.events import EventBus
from domain.match import MatchState, MatchTimer
from domain.paddle import Paddle
from domain.presentation import EndAnimation
from logger import logger


@dataclass
class Game:
    """Simulation context: everything one match against the computer needs.

    `update()` advances the simulation by one tick. All other public methods
    are player/UI actions; the ones that change the match phase return False
    and do nothing when the action is not legal from the current phase.
    """
    WINNING_SCORE = 5
    SCORE_DELAY = 1.5  # Seconds between a point and the next serve
    PLAYER_PADDLE_OFFSET = 35  # Player paddle starts this far above the canvas bottom
    PLAYER_SPEED = 5

    court: Court = field(default_factory=Court)
    difficulty: str = DEFAULT_DIFFICULTY
    winning_score: int = WINNING_SCORE
    rng: np.random.Generator = field(default_factory=np.random.default_rng)
    scheduler: Scheduler = field(default_factory=Scheduler)
    events: EventBus = field(default_factory=EventBus)
    session_id: Optional[str] = None

    profile: DifficultyProfile = field(init=False)
    ball: Ball = field(init=False, default_factory=Ball)
    computer_paddle: Paddle = field(init=False)
    player_paddle: Paddle = field(init=False)
    ai_target: AITarget = field(init=False, default_factory=AITarget)
    match: MatchState = field(init=False)
    animation: EndAnimation = field(init=False, default_factory=EndAnimation)
    timer: MatchTimer = field(init=False)
    keys: InputState = field(init=False, default_factory=InputState)
    rally_hits: int = field(init=False, default=0)
    last_hitter: Optional[GameSide] = field(init=False, default=None)

    def __post_init__(self):
        self.profile = get_profile(self.difficulty)
        self.computer_paddle = Paddle(0, self.court.top)
        self.player_paddle = Paddle(0, self.court.height - self.PLAYER_PADDLE_OFFSET, speed=self.PLAYER_SPEED)
        self.match = MatchState(winning_score=self.winning_score)
        self.timer = MatchTimer(self.scheduler.clock)
        self.reset()

    @property
    def state(self) -> GameState:
        return self.match.state

    @property
    def winner(self) -> Optional[GameSide]:
        return self.match.winner

    @property
    def duration_ms(self) -> int:
        return self.timer.elapsed_ms

    def apply_profile(self) -> None:
        """Derive live paddle and ball values from the active profile and serve."""
        self.computer_paddle.speed = self.profile.ai_speed
        self.ball.max_speed = self.profile.ball_max_speed
        self.serve()

    def serve(self, towards: GameSide | None = None) -> None:
        self.ball.center_on(self.court)
        self.ball.set_velocity(*shots.serve_velocity(self.profile, self.rng, towards))

    def reset(self) -> None:
        self.match.reset()
        self.timer.reset()
        self.animation.reset()
        self.keys = InputState()
        self.rally_hits = 0
        self.last_hitter = None

        self.computer_paddle.x = self.court.center_x - self.computer_paddle.width / 2
        self.computer_paddle.y = self.court.top
        self.player_paddle.x = self.court.center_x - self.player_paddle.width / 2
        self.player_paddle.y = self.court.height - self.PLAYER_PADDLE_OFFSET
        self.ai_target.snap_to(self.computer_paddle)

        self.apply_profile()
        logger.debug(f"Session {self.session_id}: Game reset on {self.profile.name}")

    def set_difficulty(self, name: str) -> None:
        self.profile = get_profile(name)
        self.difficulty = name
        self.apply_profile()
        if self.match.state != GameState.NOT_STARTED:
            self.reset()

        logger.info(f"Session {self.session_id}: Difficulty set to {name}")
        self.events.publish(GameEvent.DIFFICULTY_CHANGED, difficulty=name)

    def start(self) -> bool:
        if not self.match.start():
            return False
        self.timer.resume()
        logger.info(f"Session {self.session_id}: Game started on {self.profile.name}")
        return True

    def toggle_pause(self) -> bool:
        if not self.match.toggle_pause():
            return False
        if self.match.state == GameState.PAUSED:
            self.timer.pause()
        else:
            self.timer.resume()
        return True

    def set_keys(self, keys: Dict[str, bool]) -> None:
        self.keys = InputState.from_key_map(keys)

    def update(self) -> None:
        # Presentation runs whatever the match phase
        self.animation.update()

        if self.match.state != GameState.RUNNING:
            return

        move_player(self.player_paddle, self.keys, self.court)
        ai.update_ai(self.computer_paddle, self.ai_target, self.ball, self.court, self.profile)

        self.ball.advance()

        ball_exit = physics.find_exit(self.ball, self.court)
        if ball_exit is not None:
            self.handle_scoring(physics.exit_scorer(ball_exit, self.ball, self.court, self.last_hitter))
            return

        physics.bounce_off_walls(self.ball, self.court)

        hitter = physics.find_paddle_hit(self.ball, self.computer_paddle, self.player_paddle)
        if hitter is not None:
            self.handle_paddle_hit(hitter)

    def paddle_for(self, side: GameSide) -> Paddle:
        return self.computer_paddle if side == GameSide.COMPUTER else self.player_paddle

    def handle_paddle_hit(self, side: GameSide) -> None:
        vx, vy = shots.calculate_return(
            self.ball,
            self.paddle_for(side),
            self.paddle_for(side.opponent),
            self.court,
            self.profile,
            self.rng,
            side,
            self.rally_hits,
        )
        self.ball.set_velocity(vx, vy)
        self.rally_hits += 1
        self.last_hitter = side
        self.events.publish(GameEvent.PADDLE_HIT, side=side, vx=vx, vy=vy)

    def handle_scoring(self, scorer: GameSide) -> None:
        if not self.match.award_point(scorer):
            return

        logger.info(
            f"Session {self.session_id}: Current score - Player: {self.match.player_score}, "
            f"Computer: {self.match.computer_score} - {scorer.value.upper()} SCORED!"
        )
        self.rally_hits = 0
        self.last_hitter = None
        self.events.publish(
            GameEvent.POINT_SCORED,
            scorer=scorer,
            player_score=self.match.player_score,
            computer_score=self.match.computer_score,
        )

        if self.match.is_over:
            self._end_match()
        else:
            self.scheduler.call_later(self.SCORE_DELAY, self.restart_after_score, self.match.epoch)

    def restart_after_score(self, epoch: int) -> None:
        # A reset since the point was scored makes this a no-op
        if not self.match.finish_scoring_delay(epoch):
            return
        self.serve(self.match.serve_towards)

    def _end_match(self) -> None:
        self.timer.pause()
        self.animation.start("victory" if self.match.winner == GameSide.PLAYER else "defeat")
        logger.info(
            f"Session {self.session_id}: Match over, {self.match.winner.value} wins "
            f"{self.match.player_score}-{self.match.computer_score} in {self.duration_ms} ms"
        )
        self.events.publish(
            GameEvent.MATCH_ENDED,
            winner=self.match.winner,
            player_score=self.match.player_score,
            computer_score=self.match.computer_score,
            difficulty=self.profile.name,
            duration_ms=self.duration_ms,
        )

    def snapshot(self) -> Dict:
        """Read-only view of the simulation for renderers."""
        return {
            "ball": {
                "x": self.ball.x,
                "y": self.ball.y,
                "vx": self.ball.vx,
                "vy": self.ball.vy,
                "width": self.ball.width,
                "height": self.ball.height,
            },
            "computer_paddle": self._paddle_snapshot(self.computer_paddle),
            "player_paddle": self._paddle_snapshot(self.player_paddle),
            "ai_target": {"x": self.ai_target.x, "y": self.ai_target.y},
            "match": {
                "state": self.match.state.value,
                "player_score": self.match.player_score,
                "computer_score": self.match.computer_score,
                "winning_score": self.match.winning_score,
                "winner": self.match.winner.value if self.match.winner else None,
                "duration_ms": self.duration_ms,
                "timer_running": self.timer.running,
            },
            "difficulty": self.profile.name,
            "animation": {
                "kind": self.animation.kind,
                "frame": self.animation.frame,
                "fade_opacity": self.animation.fade_opacity,
            },
        }

    @staticmethod
    def _paddle_snapshot(paddle: Paddle) -> Dict:
        return {"x": paddle.x, "y": paddle.y, "width": paddle.width, "height": paddle.height}
