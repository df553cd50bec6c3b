from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api.schemas import BestTimer, Player
from database.config import get_db
from services import player_service

leaderboard = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@leaderboard.get("", response_model=List[Player])
def get_leaderboard(limit: int = Query(10, ge=1, le=100), db: Session = Depends(get_db)) -> List[Player]:
    try:
        players = player_service.get_leaderboard(db, limit)
    except SQLAlchemyError:
        raise HTTPException(status_code=500, detail="Internal server error")
    return [Player.model_validate(player) for player in players]


@leaderboard.get("/timers", response_model=List[BestTimer])
def get_best_timers(
        difficulty: Optional[str] = None,
        limit: int = Query(5, ge=1, le=100),
        db: Session = Depends(get_db),
) -> List[BestTimer]:
    """Fastest match per player, optionally for a single difficulty."""
    try:
        timers = player_service.get_best_match_timers(db, difficulty or None, limit)
    except SQLAlchemyError:
        raise HTTPException(status_code=500, detail="Internal server error")
    return [BestTimer.model_validate(timer) for timer in timers]
