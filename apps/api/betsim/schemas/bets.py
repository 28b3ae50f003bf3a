# apps/api/betsim/schemas/bets.py
from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import Field, computed_field

from apps.api.betsim.core.config import MAX_ABS_ODDS
from apps.api.betsim.schemas.common import CamelModel, Line, Money
from apps.api.betsim.schemas.games import Game
from apps.api.betsim.services.odds import american_to_decimal


class BetCreate(CamelModel):
    """
    Either `selection` (structured) or `pick` (free text naming a team, or
    Over/Under) identifies the side. `selection` wins when both are sent.
    """
    game_id: int
    bet_type: Literal["spread", "moneyline", "total", "prop"]
    amount: Decimal = Field(max_digits=10, decimal_places=2)
    pick: Optional[str] = Field(None, max_length=120)
    selection: Optional[Literal["home", "away", "over", "under"]] = None
    odds: Optional[int] = Field(None, ge=-MAX_ABS_ODDS, le=MAX_ABS_ODDS)
    prediction_id: Optional[int] = None


class Bet(CamelModel):
    id: int
    user_id: str
    game_id: int
    prediction_id: Optional[int] = None
    bet_type: str
    selection: str
    line: Optional[Line] = None
    pick: str
    amount: Money
    odds: int
    status: str
    payout: Optional[Money] = None
    placed_at: datetime
    settled_at: Optional[datetime] = None

    @computed_field(alias="decimalOdds")
    @property
    def decimal_odds(self) -> float:
        return float(american_to_decimal(self.odds))


class BetWithGame(Bet):
    game: Game
