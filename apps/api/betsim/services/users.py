# apps/api/betsim/services/users.py
import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from apps.api.betsim.core.config import STARTING_BANKROLL
from apps.api.betsim.core.errors import ConflictError, NotFoundError
from apps.api.betsim.models import LedgerKind, User
from apps.api.betsim.services.ledger import apply_delta

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    return user


def create_user(db: Session, username: str, bankroll: Optional[Decimal] = None) -> User:
    """Create a user and open their ledger with the starting deposit."""
    if db.execute(select(User.id).where(User.username == username)).first():
        raise ConflictError(f"Username {username!r} is taken")

    user = User(username=username, bankroll=Decimal(0))
    db.add(user)
    db.flush()
    apply_delta(db, user, bankroll if bankroll is not None else STARTING_BANKROLL, LedgerKind.DEPOSIT)
    db.commit()

    logger.info("Created user %s (%s) with bankroll %s", user.id, username, user.bankroll)
    return user
