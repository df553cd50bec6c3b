from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api.schemas import Match, MatchIn
from database.config import get_db
from services import player_service

matches = APIRouter(prefix="/matches", tags=["matches"])


@matches.post("", response_model=Match)
def record_match(body: MatchIn, db: Session = Depends(get_db)) -> Match:
    try:
        match = player_service.record_match(db, body.player_id, body.difficulty, body.duration_ms)
    except player_service.InvalidPlayerId as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError:
        raise HTTPException(status_code=500, detail="Internal server error")
    return Match.model_validate(match)
