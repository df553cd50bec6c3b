from enum import Enum
from typing import Optional

from domain.ball import Ball
from domain.court import Court
from domain.enums import GameSide
from domain.paddle import Paddle


class BallExit(Enum):
    TOP = "top"
    BOTTOM = "bottom"
    SIDE = "side"


def find_exit(ball: Ball, court: Court) -> Optional[BallExit]:
    if ball.y <= -court.overshoot:
        return BallExit.TOP
    if ball.y >= court.height + court.overshoot:
        return BallExit.BOTTOM
    if ball.x <= -court.overshoot or ball.x >= court.width + court.overshoot:
        return BallExit.SIDE
    return None


def exit_scorer(ball_exit: BallExit, ball: Ball, court: Court, last_hitter: Optional[GameSide] = None) -> GameSide:
    """Side that wins the point when the ball leaves the court through `ball_exit`."""
    if ball_exit == BallExit.TOP:
        return GameSide.PLAYER
    if ball_exit == BallExit.BOTTOM:
        return GameSide.COMPUTER

    # Side exit. A mostly vertical ball was a missed return by whoever owns
    # the half it was in.
    upper_half = ball.y < court.height / 2
    if abs(ball.vy) > abs(ball.vx) or last_hitter is None:
        return GameSide.PLAYER if upper_half else GameSide.COMPUTER
    # Mostly horizontal: hit wide, point against the last hitter
    return last_hitter.opponent


def bounce_off_walls(ball: Ball, court: Court) -> bool:
    """Reflect the ball off the left and right canvas edges."""
    if ball.x < 0:
        ball.x = 0
        ball.vx = abs(ball.vx)
        return True
    if ball.x + ball.width > court.width:
        ball.x = court.width - ball.width
        ball.vx = -abs(ball.vx)
        return True
    return False


def find_paddle_hit(ball: Ball, top: Paddle, bottom: Paddle) -> Optional[GameSide]:
    """Paddle returning the ball this tick, if any.

    The top paddle is checked first and wins when the ball overlaps both.
    A paddle only returns a ball travelling toward it, so a ball still
    overlapping right after a hit is not struck twice.
    """
    if top.is_on_paddle(ball):
        return GameSide.COMPUTER if ball.vy < 0 else None
    if bottom.is_on_paddle(ball):
        return GameSide.PLAYER if ball.vy > 0 else None
    return None
