"""Player identity, score aggregates and timed matches.

Every function takes an open SQLAlchemy session, commits its own work and
rolls back before re-raising on a database error.
"""
import uuid
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database.models import DEFAULT_PLAYER_NAME, GameScoreModel, MatchModel, PlayerModel, utcnow
from logger import logger


class InvalidPlayerId(ValueError):
    pass


def parse_player_id(player_id: str) -> Optional[str]:
    """Canonical UUID string, or None when `player_id` is not a UUID."""
    try:
        return str(uuid.UUID(str(player_id)))
    except (ValueError, AttributeError, TypeError):
        return None


def _require_player_id(player_id: str) -> str:
    pid = parse_player_id(player_id)
    if pid is None:
        raise InvalidPlayerId(f"Invalid playerId: {player_id}")
    return pid


def get_player(db: Session, player_id: str) -> Optional[PlayerModel]:
    pid = parse_player_id(player_id)
    if pid is None:
        return None
    return db.get(PlayerModel, pid)


def _ensure_player(db: Session, pid: str) -> PlayerModel:
    player = db.get(PlayerModel, pid)
    if player is None:
        player = PlayerModel(player_id=pid, player_name=DEFAULT_PLAYER_NAME)
        db.add(player)
        db.flush()
    return player


def upsert_player(db: Session, player_id: str, player_name: str) -> PlayerModel:
    """Register or refresh a player.

    A known id sent with a different name is never renamed: a new player with
    a fresh id is created instead, so two people sharing a device keep
    separate records. An id that is not a UUID is replaced by a new one.
    """
    pid = parse_player_id(player_id)
    try:
        existing = db.get(PlayerModel, pid) if pid else None

        if existing is not None and existing.player_name != player_name:
            player = PlayerModel(player_id=str(uuid.uuid4()), player_name=player_name)
            db.add(player)
            logger.info(f"Player {pid} renamed to {player_name}, forked as {player.player_id}")
        elif existing is not None:
            player = existing
            player.last_seen_at = utcnow()
        else:
            player = PlayerModel(player_id=pid or str(uuid.uuid4()), player_name=player_name)
            db.add(player)
            logger.info(f"Registered player {player.player_id} ({player_name})")

        db.commit()
        db.refresh(player)
        return player
    except SQLAlchemyError as e:
        logger.error(f"Failed to upsert player {player_id}: {e}")
        db.rollback()
        raise


def update_player_score(db: Session, player_id: str, score: int) -> PlayerModel:
    """Record one score sample and update the running aggregates."""
    pid = _require_player_id(player_id)
    try:
        player = _ensure_player(db, pid)
        player.current_score = score
        player.best_score = max(player.best_score or 0, score)
        player.games_played = (player.games_played or 0) + 1
        player.last_seen_at = utcnow()
        db.add(GameScoreModel(player_id=pid, score=score))

        db.commit()
        db.refresh(player)
        return player
    except SQLAlchemyError as e:
        logger.error(f"Failed to update score for player {pid}: {e}")
        db.rollback()
        raise


def get_score_history(db: Session, player_id: str, limit: int = 10) -> List[GameScoreModel]:
    pid = parse_player_id(player_id)
    if pid is None:
        return []
    query = (
        select(GameScoreModel)
        .where(GameScoreModel.player_id == pid)
        .order_by(GameScoreModel.game_date.desc())
        .limit(limit)
    )
    return list(db.scalars(query))


def get_leaderboard(db: Session, limit: int = 10) -> List[PlayerModel]:
    query = (
        select(PlayerModel)
        .where(PlayerModel.best_score > 0)
        .order_by(PlayerModel.best_score.desc(), PlayerModel.games_played.asc())
        .limit(limit)
    )
    return list(db.scalars(query))


def record_match(db: Session, player_id: str, difficulty: str, duration_ms: int) -> MatchModel:
    pid = _require_player_id(player_id)
    try:
        _ensure_player(db, pid)
        match = MatchModel(player_id=pid, difficulty=difficulty, duration_ms=duration_ms)
        db.add(match)

        db.commit()
        db.refresh(match)
        return match
    except SQLAlchemyError as e:
        logger.error(f"Failed to record match for player {pid}: {e}")
        db.rollback()
        raise


def get_best_match_timers(db: Session, difficulty: Optional[str] = None, limit: int = 5) -> List[dict]:
    """Fastest match per player, optionally for one difficulty only."""
    best_duration = func.min(MatchModel.duration_ms).label("best_duration_ms")
    query = (
        select(
            MatchModel.player_id,
            PlayerModel.player_name,
            best_duration,
            func.min(MatchModel.created_at).label("achieved_at"),
        )
        .outerjoin(PlayerModel, PlayerModel.player_id == MatchModel.player_id)
        .group_by(MatchModel.player_id, PlayerModel.player_name)
        .order_by(best_duration.asc())
        .limit(limit)
    )
    if difficulty is not None:
        query = query.where(MatchModel.difficulty == difficulty)

    return [
        {
            "player_id": row.player_id,
            "player_name": row.player_name,
            "best_duration_ms": row.best_duration_ms,
            "achieved_at": row.achieved_at,
        }
        for row in db.execute(query)
    ]
