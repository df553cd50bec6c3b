"""Ball velocity after a paddle contact or a serve.

Returns aim at a point on the opponent's half that is reachable: the target
is kept inside a safe band away from the sidelines and pulled away from the
corner the opponent already covers. Speeds are clamped so every shot stays
returnable and never stalls.
"""
from typing import Optional, Tuple

import numpy as np
from scipy import interpolate

from domain.ball import Ball
from domain.court import Court
from domain.difficulty import DifficultyProfile
from domain.enums import GameSide
from domain.paddle import Paddle

SIDELINE_MARGIN = 40  # Safe target band starts this far inside the sidelines
NET_CLEARANCE = 50  # Shots aim this far past the net
MIN_CROSSING_FRAMES = 20
CROSSING_SPEED_DIVISOR = 2

SAFE_HORIZONTAL_SPEED = 4
MIN_HORIZONTAL_SPEED = 0.3
MIN_VERTICAL_SPEED = 1.2
VERTICAL_CEILING_RATIO = 0.8
MIN_FINAL_SPEED = 0.8
JITTER_X = 0.4
JITTER_Y = 0.3

SERVE_HORIZONTAL_LIMIT = 3
SERVE_SPEED_VARIATION = 0.5
MIN_SERVE_SPEED = 0.8


def horizontal_limit(profile: DifficultyProfile) -> float:
    return min(SAFE_HORIZONTAL_SPEED, profile.ball_max_speed)


def hit_ratio(ball: Ball, paddle: Paddle) -> float:
    """Where the ball centre met the paddle, 0 at the left edge, 1 at the right."""
    return float(np.clip((ball.center_x - paddle.x) / paddle.width, 0, 1))


def choose_target_x(ratio: float, opponent: Paddle, court: Court) -> float:
    safe_left = court.left + SIDELINE_MARGIN
    safe_right = court.right - SIDELINE_MARGIN

    f = interpolate.interp1d([0, 1], [safe_left, safe_right])
    base_target_x = float(f(ratio))

    # Keep away from the corner the opponent is already standing in
    opponent_x = opponent.center_x
    if opponent_x < court.width * 0.3:
        return max(base_target_x, court.width * 0.4)
    if opponent_x > court.width * 0.7:
        return min(base_target_x, court.width * 0.6)
    return base_target_x


def _floor_magnitude(value: float, floor: float, rng: np.random.Generator) -> float:
    if abs(value) >= floor:
        return value
    sign = np.sign(value) or rng.choice([-1, 1])
    return float(floor * sign)


def calculate_return(
        ball: Ball,
        paddle: Paddle,
        opponent: Paddle,
        court: Court,
        profile: DifficultyProfile,
        rng: np.random.Generator,
        hitter: GameSide,
        rally_hits: int = 0,
) -> Tuple[float, float]:
    """Velocity (vx, vy) sending the ball from `paddle` toward `opponent`."""
    from_top = hitter == GameSide.COMPUTER
    direction = 1 if from_top else -1  # +y is toward the bottom of the court
    x_limit = horizontal_limit(profile)

    target_x = choose_target_x(hit_ratio(ball, paddle), opponent, court)
    horizontal_distance = target_x - ball.center_x

    if from_top:
        vertical_distance = (court.net_y + NET_CLEARANCE) - ball.y
    else:
        vertical_distance = ball.y - (court.net_y - NET_CLEARANCE)
    crossing_frames = max(MIN_CROSSING_FRAMES, abs(vertical_distance) / CROSSING_SPEED_DIVISOR)

    vx = float(np.clip(horizontal_distance / crossing_frames, -x_limit, x_limit))
    vy = abs(vertical_distance / crossing_frames)
    vy = float(np.clip(vy, MIN_VERTICAL_SPEED, profile.ball_max_speed * VERTICAL_CEILING_RATIO))
    vy *= profile.speed_growth ** rally_hits

    vx += rng.uniform(-JITTER_X, JITTER_X)
    vy += rng.uniform(-JITTER_Y, JITTER_Y)

    vx = float(np.clip(vx, -x_limit, x_limit))
    vx = _floor_magnitude(vx, MIN_HORIZONTAL_SPEED, rng)
    vy = float(np.clip(vy, MIN_FINAL_SPEED, profile.ball_max_speed))

    return vx, vy * direction


def serve_velocity(
        profile: DifficultyProfile,
        rng: np.random.Generator,
        towards: Optional[GameSide] = None,
) -> Tuple[float, float]:
    """Diagonal serve from centre court. No side given means a random direction."""
    base_x, base_y = profile.ball_speed
    cap = profile.ball_max_speed

    vx = (base_x + rng.uniform(0, SERVE_SPEED_VARIATION)) * rng.choice([-1, 1])
    vx = float(np.clip(vx, -SERVE_HORIZONTAL_LIMIT, SERVE_HORIZONTAL_LIMIT))
    vy = base_y + rng.uniform(0, SERVE_SPEED_VARIATION)

    if towards == GameSide.COMPUTER:
        direction = -1
    elif towards == GameSide.PLAYER:
        direction = 1
    else:
        direction = rng.choice([-1, 1])

    vx = _floor_magnitude(float(np.clip(vx, -cap, cap)), MIN_SERVE_SPEED, rng)
    vy = float(np.clip(vy, MIN_SERVE_SPEED, cap))

    return vx, vy * direction
