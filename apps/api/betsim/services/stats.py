# apps/api/betsim/services/stats.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Sequence

import pandas as pd
from sqlalchemy import select
from sqlalchemy.orm import Session

from apps.api.betsim.models import BankrollEntry, Bet, BetStatus
from apps.api.betsim.services.odds import to_money
from apps.api.betsim.services.users import get_user


@dataclass
class UserStats:
    total_pl: Decimal
    win_rate: float
    total_bets: int
    roi: float
    current_streak: int
    wins: int = 0
    losses: int = 0
    pushes: int = 0
    total_staked: Decimal = Decimal("0.00")
    bankroll_history: List[Dict[str, Any]] = field(default_factory=list)


def _profit(bet: Bet) -> Decimal:
    if bet.status == BetStatus.WON.value:
        return Decimal(bet.payout) - Decimal(bet.amount)
    if bet.status == BetStatus.LOST.value:
        return -Decimal(bet.amount)
    return Decimal(0)


def current_streak(settled_newest_first: Sequence[Bet]) -> int:
    """Consecutive most recent wins. A push neither extends nor breaks the run."""
    streak = 0
    for bet in settled_newest_first:
        if bet.status == BetStatus.WON.value:
            streak += 1
        elif bet.status == BetStatus.LOST.value:
            break
    return streak


def _as_utc(ts: datetime) -> datetime:
    # SQLite hands back naive timestamps; they are stored as UTC
    return ts.replace(tzinfo=timezone.utc) if ts.tzinfo is None else ts.astimezone(timezone.utc)


def bankroll_history(entries: Sequence[BankrollEntry]) -> List[Dict[str, Any]]:
    """Closing balance per calendar day (UTC), from the ledger."""
    if not entries:
        return []

    df = pd.DataFrame(
        {
            "at": pd.to_datetime([_as_utc(e.created_at) for e in entries], utc=True),
            "seq": [e.id for e in entries],
            "balance": [e.balance_after for e in entries],
        }
    )
    df = df.sort_values(["at", "seq"])
    df["date"] = df["at"].dt.strftime("%Y-%m-%d")
    daily = df.groupby("date", sort=True)["balance"].last()
    return [{"date": d, "amount": to_money(b)} for d, b in daily.items()]


def compute_stats(db: Session, user_id: str) -> UserStats:
    get_user(db, user_id)

    settled = list(db.execute(
        select(Bet)
        .where(Bet.user_id == user_id, Bet.status != BetStatus.PENDING.value)
        .order_by(Bet.placed_at.desc(), Bet.id.desc())
    ).scalars())
    entries = list(db.execute(
        select(BankrollEntry).where(BankrollEntry.user_id == user_id)
    ).scalars())

    wins = sum(1 for b in settled if b.status == BetStatus.WON.value)
    losses = sum(1 for b in settled if b.status == BetStatus.LOST.value)
    pushes = len(settled) - wins - losses

    total_pl = to_money(sum((_profit(b) for b in settled), Decimal(0)))
    total_staked = to_money(sum((Decimal(b.amount) for b in settled), Decimal(0)))

    win_rate = round(wins / len(settled) * 100, 2) if settled else 0.0
    roi = round(float(total_pl / total_staked * 100), 2) if total_staked > 0 else 0.0

    return UserStats(
        total_pl=total_pl,
        win_rate=win_rate,
        total_bets=len(settled),
        roi=roi,
        current_streak=current_streak(settled),
        wins=wins,
        losses=losses,
        pushes=pushes,
        total_staked=total_staked,
        bankroll_history=bankroll_history(entries),
    )
