# apps/api/betsim/services/games.py
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from apps.api.betsim.core.config import SUPPORTED_SPORTS
from apps.api.betsim.core.errors import InvalidRequestError, NotFoundError
from apps.api.betsim.models import Game, GameStatus

OPEN_STATUSES = (GameStatus.SCHEDULED.value, GameStatus.UPCOMING.value, GameStatus.LIVE.value)


def get_game(db: Session, game_id: int) -> Game:
    game = db.get(Game, game_id)
    if game is None:
        raise NotFoundError(f"Game {game_id} not found")
    return game


def list_games(
    db: Session,
    status: Optional[str] = None,
    sport: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> List[Game]:
    """Games ordered by start time, with their predictions loaded."""
    stmt = select(Game).options(selectinload(Game.predictions))
    if status:
        stmt = stmt.where(Game.status == status)
    if sport:
        stmt = stmt.where(Game.sport == sport.upper())
    stmt = stmt.order_by(Game.game_time, Game.id).limit(limit).offset(offset)
    return list(db.execute(stmt).scalars())


def create_game(db: Session, data: Dict[str, Any]) -> Game:
    sport = str(data.get("sport", "NBA")).upper()
    if sport not in SUPPORTED_SPORTS:
        raise InvalidRequestError(f"Unsupported sport: {sport}")
    if data.get("home_team") == data.get("away_team"):
        raise InvalidRequestError("Home and away team must differ")

    game = Game(**{**data, "sport": sport})
    db.add(game)
    db.commit()
    db.refresh(game)
    return game
