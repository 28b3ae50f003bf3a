# apps/api/betsim/models.py
import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from apps.api.betsim.core.config import DEFAULT_ODDS, STARTING_BANKROLL
from apps.api.betsim.core.db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BetType(str, Enum):
    SPREAD = "spread"
    MONEYLINE = "moneyline"
    TOTAL = "total"
    PROP = "prop"


class BetStatus(str, Enum):
    PENDING = "pending"
    WON = "won"
    LOST = "lost"
    PUSH = "push"


class Selection(str, Enum):
    HOME = "home"
    AWAY = "away"
    OVER = "over"
    UNDER = "under"


class GameStatus(str, Enum):
    SCHEDULED = "scheduled"
    UPCOMING = "upcoming"
    LIVE = "live"
    FINISHED = "finished"


class LedgerKind(str, Enum):
    DEPOSIT = "deposit"
    WAGER = "wager"
    SETTLEMENT = "settlement"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String(64), unique=True, nullable=False)
    bankroll = Column(Numeric(10, 2), nullable=False, default=STARTING_BANKROLL)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    bets = relationship("Bet", back_populates="user")


class Game(Base):
    __tablename__ = "games"

    id = Column(Integer, primary_key=True, autoincrement=True)
    home_team = Column(String(100), nullable=False)
    away_team = Column(String(100), nullable=False)
    sport = Column(String(10), nullable=False, default="NBA")
    game_time = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(16), nullable=False, default=GameStatus.SCHEDULED.value, index=True)

    # away spread is always the negation of the home spread
    home_spread = Column(Numeric(5, 1), nullable=True)
    total_points = Column(Numeric(5, 1), nullable=True)
    home_moneyline = Column(Integer, nullable=True)
    away_moneyline = Column(Integer, nullable=True)

    home_score = Column(Integer, nullable=True)
    away_score = Column(Integer, nullable=True)

    predictions = relationship("Prediction", back_populates="game", order_by="Prediction.id")

    @property
    def away_spread(self):
        return -self.home_spread if self.home_spread is not None else None


class Prediction(Base):
    __tablename__ = "predictions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    game_id = Column(Integer, ForeignKey("games.id"), nullable=False, index=True)
    recommended_pick = Column(String(120), nullable=False)
    bet_type = Column(String(16), nullable=False)
    edge_score = Column(Numeric(3, 1), nullable=False)
    confidence_tier = Column(String(8), nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    reasoning = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    game = relationship("Game", back_populates="predictions")


class Bet(Base):
    __tablename__ = "bets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    game_id = Column(Integer, ForeignKey("games.id"), nullable=False)
    prediction_id = Column(Integer, ForeignKey("predictions.id"), nullable=True)

    bet_type = Column(String(16), nullable=False)
    selection = Column(String(8), nullable=False)
    # spread or total line locked at placement; null for moneyline
    line = Column(Numeric(5, 1), nullable=True)
    pick = Column(String(120), nullable=False)

    amount = Column(Numeric(10, 2), nullable=False)
    odds = Column(Integer, nullable=False, default=DEFAULT_ODDS)
    status = Column(String(8), nullable=False, default=BetStatus.PENDING.value)
    payout = Column(Numeric(10, 2), nullable=True)

    placed_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    settled_at = Column(DateTime(timezone=True), nullable=True)

    user = relationship("User", back_populates="bets")
    game = relationship("Game")

    __table_args__ = (
        CheckConstraint("amount > 0", name="positive_amount"),
        CheckConstraint("odds <> 0", name="nonzero_odds"),
        CheckConstraint(
            "(status = 'pending') = (payout IS NULL)",
            name="payout_set_once_settled",
        ),
        Index("idx_bets_game_status", "game_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<Bet {self.id} {self.pick} ${self.amount} @ {self.odds} [{self.status}]>"


class BankrollEntry(Base):
    """Append-only ledger of bankroll deltas."""

    __tablename__ = "bankroll_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    kind = Column(String(16), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    balance_after = Column(Numeric(10, 2), nullable=False)
    bet_id = Column(Integer, ForeignKey("bets.id"), nullable=True)
    game_id = Column(Integer, ForeignKey("games.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
