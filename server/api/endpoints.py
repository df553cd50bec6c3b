from typing import Dict

from fastapi import APIRouter, Request

from core.game_loop import game_loop
from domain.ball import Ball
from domain.court import Court
from domain.difficulty import DEFAULT_DIFFICULTY, PROFILES
from domain.game import Game
from domain.paddle import Paddle

endpoints = APIRouter()


@endpoints.get("/specs")
def get_game_specs(_: Request) -> Dict:
    """Get the game specifications needed to set up the playing field."""
    court = Court()
    ball = Ball()
    paddle = Paddle(0, 0)

    return {
        "court": {
            "width": court.width,
            "height": court.height,
            "bounds": {
                "left": court.left,
                "right": court.right,
                "top": court.top,
                "bottom": court.bottom,
            },
            "net_y": court.net_y,
            "overshoot": court.overshoot,
        },
        "ball": {
            "width": ball.width,
            "height": ball.height,
        },
        "paddle": {
            "width": paddle.width,
            "height": paddle.height,
            "player_speed": Game.PLAYER_SPEED,
        },
        "game": {
            "winning_score": Game.WINNING_SCORE,
            "score_delay": Game.SCORE_DELAY,
            "default_difficulty": DEFAULT_DIFFICULTY,
        },
        "difficulties": {name: profile.to_dict() for name, profile in PROFILES.items()},
    }


@endpoints.get("/games")
def get_games(_: Request) -> Dict:
    """Sessions currently registered with the game loop."""
    return {
        "active": len(game_loop.sessions),
        "games": [session.summary() for session in game_loop.sessions.values()],
    }


@endpoints.get("/health")
def health_check(_: Request) -> Dict:
    """Health check endpoint to verify the server is running."""
    return {
        "status": "healthy",
        "service": "tennis-pong-server"
    }
