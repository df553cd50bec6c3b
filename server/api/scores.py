from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api.schemas import Player, ScoreIn
from database.config import get_db
from services import player_service

scores = APIRouter(prefix="/scores", tags=["scores"])


@scores.post("", response_model=Player)
def submit_score(body: ScoreIn, db: Session = Depends(get_db)) -> Player:
    """Record one finished game for a player, creating the player if needed."""
    try:
        player = player_service.update_player_score(db, body.player_id, body.score)
    except player_service.InvalidPlayerId as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError:
        raise HTTPException(status_code=500, detail="Internal server error")
    return Player.model_validate(player)
