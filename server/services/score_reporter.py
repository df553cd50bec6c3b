import asyncio
from typing import Callable, Dict, Optional

from sqlalchemy.orm import Session

from api.schemas import Match, Player
from config import SCORE_REPORTING
from database.config import new_session
from logger import logger
from services import player_service


class ScoreReporter:
    """Best-effort persistence of player identity and match results.

    Submissions run on a worker thread off the game loop. Failures are logged
    and dropped: nothing is retried or queued, and the simulation never sees
    the outcome.
    """

    def __init__(self, session_factory: Callable[[], Session] = new_session, enabled: bool = SCORE_REPORTING):
        self.session_factory = session_factory
        self.enabled = enabled

    async def register(self, player_id: str, player_name: str) -> Optional[Dict]:
        if not self.enabled:
            return None
        try:
            return await asyncio.to_thread(self._register, player_id, player_name)
        except Exception as e:
            logger.warning(f"Player registration for {player_id} dropped: {e}")
            return None

    def submit_match(self, player_id: str, score: int, difficulty: str, duration_ms: int,
                     won: bool) -> Optional[asyncio.Task]:
        """Fire and forget the score (and, for a win, the match time)."""
        if not self.enabled:
            return None
        return asyncio.create_task(self._submit_match(player_id, score, difficulty, duration_ms, won))

    async def _submit_match(self, player_id: str, score: int, difficulty: str, duration_ms: int,
                            won: bool) -> Optional[Dict]:
        try:
            return await asyncio.to_thread(self._write_match, player_id, score, difficulty, duration_ms, won)
        except Exception as e:
            logger.warning(f"Score submission for {player_id} dropped: {e}")
            return None

    def _register(self, player_id: str, player_name: str) -> Dict:
        db = self.session_factory()
        try:
            player = player_service.upsert_player(db, player_id, player_name)
            return Player.model_validate(player).model_dump(by_alias=True, mode="json")
        finally:
            db.close()

    def _write_match(self, player_id: str, score: int, difficulty: str, duration_ms: int, won: bool) -> Dict:
        db = self.session_factory()
        try:
            player = player_service.update_player_score(db, player_id, score)
            result = {"player": Player.model_validate(player).model_dump(by_alias=True, mode="json")}
            if won:
                match = player_service.record_match(db, player_id, difficulty, duration_ms)
                result["match"] = Match.model_validate(match).model_dump(by_alias=True, mode="json")
            logger.info(f"Recorded score {score} for player {player_id}")
            return result
        finally:
            db.close()
