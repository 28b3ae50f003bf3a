# apps/api/betsim/services/ledger.py
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from apps.api.betsim.core.errors import NotFoundError
from apps.api.betsim.models import BankrollEntry, LedgerKind, User
from apps.api.betsim.services.odds import to_money


def lock_user(db: Session, user_id: str) -> User:
    """Load a user with a row lock (no-op on SQLite). Callers hold user_locks too."""
    user = db.execute(
        select(User).where(User.id == user_id).with_for_update()
    ).scalar_one_or_none()
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    return user


def apply_delta(
    db: Session,
    user: User,
    amount: Decimal,
    kind: LedgerKind,
    bet_id: Optional[int] = None,
    game_id: Optional[int] = None,
) -> BankrollEntry:
    """Move the bankroll by `amount` and append the matching ledger entry.

    Does not commit; the caller owns the transaction.
    """
    amount = to_money(amount)
    user.bankroll = to_money(Decimal(user.bankroll) + amount)
    entry = BankrollEntry(
        user_id=user.id,
        kind=kind.value,
        amount=amount,
        balance_after=user.bankroll,
        bet_id=bet_id,
        game_id=game_id,
    )
    db.add(entry)
    return entry


def list_entries(db: Session, user_id: str, limit: int = 100, offset: int = 0) -> List[BankrollEntry]:
    stmt = (
        select(BankrollEntry)
        .where(BankrollEntry.user_id == user_id)
        .order_by(BankrollEntry.created_at.desc(), BankrollEntry.id.desc())
        .limit(limit)
        .offset(offset)
    )
    return list(db.execute(stmt).scalars())
