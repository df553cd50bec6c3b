from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PlayerIn(CamelModel):
    player_id: str = Field(min_length=1)
    player_name: str = Field(min_length=1, max_length=100)


class Player(CamelModel):
    player_id: str
    player_name: str
    current_score: int = 0
    best_score: int = 0
    games_played: int = 0
    created_at: Optional[datetime] = None
    last_seen_at: Optional[datetime] = None


class ScoreIn(CamelModel):
    player_id: str = Field(min_length=1)
    score: StrictInt


class GameScore(CamelModel):
    score_id: str
    player_id: str
    score: int
    game_date: datetime


class MatchIn(CamelModel):
    player_id: str = Field(min_length=1)
    difficulty: str = Field(min_length=1, max_length=50)
    duration_ms: StrictInt = Field(ge=0)


class Match(CamelModel):
    match_id: str
    player_id: str
    difficulty: str
    duration_ms: int
    created_at: datetime


class BestTimer(CamelModel):
    player_id: str
    player_name: Optional[str] = None
    best_duration_ms: int
    achieved_at: Optional[datetime] = None
