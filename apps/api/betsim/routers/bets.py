# apps/api/betsim/routers/bets.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from apps.api.betsim.core.db import get_db
from apps.api.betsim.routers.deps import current_user_id
from apps.api.betsim.schemas.bets import Bet, BetCreate, BetWithGame
from apps.api.betsim.services import bets

router = APIRouter(prefix="/bets", tags=["bets"])


@router.get("", summary="User's bets with games", response_model=List[BetWithGame])
def list_bets(user_id: str = Depends(current_user_id), db: Session = Depends(get_db)):
    return bets.list_bets(db, user_id)


@router.get("/recent", summary="Most recent bets", response_model=List[BetWithGame])
def recent_bets(
    limit: int = Query(5, ge=1, le=50),
    user_id: str = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    return bets.recent_bets(db, user_id, limit=limit)


@router.post("", summary="Place a bet", response_model=Bet, status_code=201)
def place_bet(
    payload: BetCreate,
    user_id: str = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    return bets.place_bet(
        db,
        user_id,
        game_id=payload.game_id,
        bet_type=payload.bet_type,
        amount=payload.amount,
        odds=payload.odds,
        pick=payload.pick,
        selection=payload.selection,
        prediction_id=payload.prediction_id,
    )
