"""Computer paddle behaviour.

The AI does not steer its paddle directly. It keeps a tracked target that is
eased toward an ideal defensive position, and the paddle is in turn eased
toward that target. The two layers of easing give the paddle a human-like
reaction lag that shrinks as the difficulty goes up.
"""
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from domain.ball import Ball
from domain.court import Court
from domain.difficulty import DifficultyProfile
from domain.paddle import Paddle

PREDICTION_FRAMES = 8
PREDICTION_MIN_SPEED = 1
DEFENSIVE_OFFSET = 60  # Stay this far in front of an incoming ball
BASELINE_OFFSET = 40  # Resting distance inside the baseline
VERTICAL_EASING_RATIO = 0.7
VERTICAL_SMOOTHING_RATIO = 0.8


@dataclass
class AITarget:
    x: float = 0
    y: float = 0

    def snap_to(self, paddle: Paddle) -> None:
        self.x = paddle.x
        self.y = paddle.y


def vertical_limits(court: Court, profile: DifficultyProfile) -> Tuple[float, float]:
    """Legal y range for the AI paddle: the baseline down to the stand-off line."""
    return court.top, court.net_y - profile.ai_net_standoff


def ideal_position(ball: Ball, paddle: Paddle, court: Court, profile: DifficultyProfile) -> Tuple[float, float]:
    min_y, max_y = vertical_limits(court, profile)

    target_x = ball.center_x - paddle.width / 2
    if abs(ball.vx) > PREDICTION_MIN_SPEED:
        predicted_x = ball.x + ball.vx * PREDICTION_FRAMES
        target_x = predicted_x - paddle.width / 2

    if ball.vy < 0 and ball.center_y < court.net_y:
        # Ball is coming toward the AI half
        target_y = min(max(min_y, ball.center_y - DEFENSIVE_OFFSET), max_y)
    else:
        target_y = min_y + BASELINE_OFFSET

    return target_x, target_y


def update_target(target: AITarget, ideal: Tuple[float, float], paddle: Paddle,
                  court: Court, profile: DifficultyProfile) -> None:
    ideal_x, ideal_y = ideal
    min_y, max_y = vertical_limits(court, profile)

    target.x += (ideal_x - target.x) * profile.ai_easing
    target.y += (ideal_y - target.y) * profile.ai_easing * VERTICAL_EASING_RATIO

    target.x = float(np.clip(target.x, 0, court.width - paddle.width))
    target.y = float(np.clip(target.y, min_y, max_y))


def move_paddle(paddle: Paddle, target: AITarget, court: Court, profile: DifficultyProfile) -> None:
    min_y, max_y = vertical_limits(court, profile)
    x_diff = target.x - paddle.x
    y_diff = target.y - paddle.y

    if abs(x_diff) > profile.ai_dead_zone:
        step = x_diff * profile.ai_smoothing * profile.ai_reaction
        paddle.x += float(np.clip(step, -paddle.speed, paddle.speed))

    if abs(y_diff) > profile.ai_vertical_dead_zone:
        step = y_diff * profile.ai_smoothing * profile.ai_vertical_reaction * VERTICAL_SMOOTHING_RATIO
        paddle.y += float(np.clip(step, -paddle.speed, paddle.speed))

    paddle.clamp(0, court.width - paddle.width, min_y, max_y)


def update_ai(paddle: Paddle, target: AITarget, ball: Ball, court: Court, profile: DifficultyProfile) -> None:
    """One AI tick: aim, ease the tracked target, then ease the paddle."""
    ideal = ideal_position(ball, paddle, court, profile)
    update_target(target, ideal, paddle, court, profile)
    move_paddle(paddle, target, court, profile)
