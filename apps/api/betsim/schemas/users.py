# apps/api/betsim/schemas/users.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from apps.api.betsim.schemas.common import CamelModel, Money


class UserCreate(CamelModel):
    username: str = Field(min_length=1, max_length=64)
    bankroll: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)


class User(CamelModel):
    id: str
    username: str
    bankroll: Money
    created_at: datetime


class LedgerEntry(CamelModel):
    id: int
    kind: str
    amount: Money
    balance_after: Money
    bet_id: Optional[int] = None
    game_id: Optional[int] = None
    created_at: datetime


class BankrollPoint(CamelModel):
    date: str
    amount: Money


class UserStats(CamelModel):
    total_pl: Money = Field(alias="totalPL")
    win_rate: float
    total_bets: int
    roi: float
    current_streak: int
    wins: int
    losses: int
    pushes: int
    total_staked: Money
    bankroll_history: List[BankrollPoint]
