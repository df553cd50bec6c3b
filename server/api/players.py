from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api.schemas import GameScore, Player, PlayerIn
from database.config import get_db
from services import player_service

players = APIRouter(prefix="/players", tags=["players"])


@players.post("", response_model=Player)
def upsert_player(body: PlayerIn, db: Session = Depends(get_db)) -> Player:
    try:
        player = player_service.upsert_player(db, body.player_id, body.player_name)
    except SQLAlchemyError:
        raise HTTPException(status_code=500, detail="Internal server error")
    return Player.model_validate(player)


@players.get("/{player_id}", response_model=Player)
def get_player(player_id: str, db: Session = Depends(get_db)) -> Player:
    try:
        player = player_service.get_player(db, player_id)
    except SQLAlchemyError:
        raise HTTPException(status_code=500, detail="Internal server error")
    if player is None:
        raise HTTPException(status_code=404, detail="Player not found")
    return Player.model_validate(player)


@players.get("/{player_id}/scores", response_model=List[GameScore])
def get_score_history(player_id: str, limit: int = 10, db: Session = Depends(get_db)) -> List[GameScore]:
    if limit < 1:
        raise HTTPException(status_code=400, detail="limit must be positive")
    try:
        history = player_service.get_score_history(db, player_id, limit)
    except SQLAlchemyError:
        raise HTTPException(status_code=500, detail="Internal server error")
    return [GameScore.model_validate(score) for score in history]
