# apps/api/betsim/routers/games.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from apps.api.betsim.core.db import get_db
from apps.api.betsim.schemas.games import (
    Game,
    GameCreate,
    GameStatusLiteral,
    GameWithPredictions,
    SimulationResponse,
)
from apps.api.betsim.services import games, settlement

router = APIRouter(prefix="/games", tags=["games"])


@router.get("", summary="List games with predictions", response_model=List[GameWithPredictions])
def list_games(
    status: Optional[GameStatusLiteral] = Query(None, description="Filter by status"),
    sport: Optional[str] = Query(None, description="Filter by sport (NBA, NFL, MLB, NHL)"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    return games.list_games(db, status=status, sport=sport, limit=limit, offset=offset)


@router.post("", summary="Create game", response_model=Game, status_code=201)
def create_game(payload: GameCreate, db: Session = Depends(get_db)):
    return games.create_game(db, payload.model_dump())


@router.get("/{game_id}", summary="Get single game", response_model=GameWithPredictions)
def get_game(game_id: int, db: Session = Depends(get_db)):
    return games.get_game(db, game_id)


@router.post("/{game_id}/simulate", summary="Simulate result and settle bets", response_model=SimulationResponse)
def simulate_game(game_id: int, db: Session = Depends(get_db)):
    """
    Simulates a final score, settles every pending bet on the game and
    credits winners. Calling it again on a finished game grades only wagers
    still pending, against the stored score; normally that is none and
    the response is the stored score with `updatedBets: 0`.
    """
    result = settlement.settle_game(db, game_id)
    return {
        "game_result": {"home_score": result.home_score, "away_score": result.away_score},
        "updated_bets": result.settled_bet_count,
    }
