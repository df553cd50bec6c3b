import asyncio
from typing import Dict

from core.game_session import GameSession
from logger import logger


class GameLoop:
    TICK_INTERVAL = 1/60

    def __init__(self):
        self.sessions: Dict[str, GameSession] = {}
        self.is_running = True

    async def run(self):
        self.is_running = True
        while self.is_running:
            try:
                # Clean up expired sessions
                expired = [session_id for session_id, session in self.sessions.items() if session.is_expired]
                for session_id in expired:
                    self.remove_session(session_id)
                    logger.info(f"Removed expired session {session_id}")

                # Update active sessions
                for session in list(self.sessions.values()):
                    try:
                        await session.update()
                    except Exception as e:
                        logger.error(f"Error updating session {session.session_id}: {e}")
            except Exception as e:
                logger.error(f"Error in game loop: {e}")
            await asyncio.sleep(self.TICK_INTERVAL)

    async def stop(self):
        """Stop game loop and clean up resources."""
        self.is_running = False
        for session_id in list(self.sessions.keys()):
            self.remove_session(session_id)

    def add_session(self, session: GameSession):
        self.sessions[session.session_id] = session

    def remove_session(self, session_id: str):
        session = self.sessions.pop(session_id, None)
        if session:
            session.close()

game_loop = GameLoop()
