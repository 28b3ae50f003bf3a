# apps/api/betsim/schemas/games.py
from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import Field

from apps.api.betsim.core.config import MAX_ABS_ODDS
from apps.api.betsim.schemas.common import CamelModel, Line
from apps.api.betsim.schemas.predictions import Prediction

GameStatusLiteral = Literal["scheduled", "upcoming", "live", "finished"]


class GameCreate(CamelModel):
    home_team: str = Field(min_length=1, max_length=100)
    away_team: str = Field(min_length=1, max_length=100)
    sport: str = "NBA"
    game_time: datetime
    status: GameStatusLiteral = "scheduled"
    home_spread: Optional[Decimal] = Field(None, max_digits=5, decimal_places=1)
    total_points: Optional[Decimal] = Field(None, gt=0, max_digits=5, decimal_places=1)
    home_moneyline: Optional[int] = Field(None, ge=-MAX_ABS_ODDS, le=MAX_ABS_ODDS)
    away_moneyline: Optional[int] = Field(None, ge=-MAX_ABS_ODDS, le=MAX_ABS_ODDS)


class Game(CamelModel):
    id: int
    home_team: str
    away_team: str
    sport: str
    game_time: datetime
    status: str
    home_spread: Optional[Line] = None
    away_spread: Optional[Line] = None
    total_points: Optional[Line] = None
    home_moneyline: Optional[int] = None
    away_moneyline: Optional[int] = None
    home_score: Optional[int] = None
    away_score: Optional[int] = None


class GameWithPredictions(Game):
    predictions: List[Prediction] = []


class GameResult(CamelModel):
    home_score: int
    away_score: int


class SimulationResponse(CamelModel):
    game_result: GameResult
    updated_bets: int
