import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

DEFAULT_PLAYER_NAME = "Player"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PlayerModel(Base):
    __tablename__ = "players"

    player_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    player_name = Column(String(100), nullable=False, default=DEFAULT_PLAYER_NAME)
    current_score = Column(Integer, nullable=False, default=0)
    best_score = Column(Integer, nullable=False, default=0)
    games_played = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    last_seen_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    scores = relationship("GameScoreModel", back_populates="player")
    matches = relationship("MatchModel", back_populates="player")


class GameScoreModel(Base):
    __tablename__ = "game_scores"

    score_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    player_id = Column(String(36), ForeignKey("players.player_id"), nullable=False, index=True)
    score = Column(Integer, nullable=False)
    game_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    player = relationship("PlayerModel", back_populates="scores")


class MatchModel(Base):
    __tablename__ = "matches"

    match_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    player_id = Column(String(36), ForeignKey("players.player_id"), nullable=False, index=True)
    difficulty = Column(String(50), nullable=False)
    duration_ms = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    player = relationship("PlayerModel", back_populates="matches")
