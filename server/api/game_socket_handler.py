import asyncio
import json

from fastapi import WebSocket, WebSocketDisconnect

from config import ALLOWED_ORIGINS
from core.game_session import GameSession
from database.config import acquire_game_connection, release_game_connection
from domain.difficulty import DEFAULT_DIFFICULTY, PROFILES
from logger import logger


CONNECTION_TIMEOUT = 60 * 5  # Connection timeout in seconds


async def handle_game_connection(
        websocket: WebSocket,
        player_id: str | None = None,
        player_name: str | None = None,
        difficulty: str | None = None,
        game_loop=None
):
    if not player_id:
        await websocket.close(code=1003, reason="Player ID required")
        return

    client_origin = websocket.headers.get('origin')
    if client_origin not in ALLOWED_ORIGINS:
        await websocket.close(code=1003, reason="Origin not allowed")
        return

    difficulty = difficulty or DEFAULT_DIFFICULTY
    if difficulty not in PROFILES:
        await websocket.close(code=1003, reason=f"Unknown difficulty: {difficulty}")
        return

    if not acquire_game_connection():
        await websocket.close(code=1013, reason="Server at capacity")
        return

    session = None
    try:
        session = GameSession(websocket, player_id, player_name or "Player", difficulty)
        game_loop.add_session(session)
        await session.connect()

        while True:
            async with asyncio.timeout(CONNECTION_TIMEOUT):
                message = await websocket.receive()

            if message["type"] == "websocket.disconnect":
                break

            if message["type"] == "websocket.receive" and message.get("text"):
                try:
                    session.handle_command(json.loads(message["text"]))
                except (json.JSONDecodeError, AttributeError) as e:
                    logger.error(f"Error processing command: {e}")
                    continue

    except asyncio.TimeoutError:
        logger.warning(f"Connection timeout for session {session.session_id if session else None}")
        await websocket.close(code=1000, reason="Connection timeout")
    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected for player {player_id}")
    finally:
        if session:
            game_loop.remove_session(session.session_id)
        else:
            release_game_connection()
