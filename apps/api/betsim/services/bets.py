# apps/api/betsim/services/bets.py
from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from apps.api.betsim.core.config import DEFAULT_ODDS
from apps.api.betsim.core.errors import (
    BetRejectedError,
    GameClosedError,
    InvalidSelectionError,
    NotFoundError,
)
from apps.api.betsim.core.locks import game_locks, user_locks
from apps.api.betsim.models import Bet, BetStatus, GameStatus, LedgerKind, Prediction
from apps.api.betsim.services.evaluator import (
    format_pick,
    locked_line,
    parse_selection,
    resolve_selection,
    supported_bet_type,
)
from apps.api.betsim.services.games import get_game
from apps.api.betsim.services.ledger import apply_delta, lock_user
from apps.api.betsim.services.odds import check_odds, to_money
from apps.api.betsim.services.validator import validate_bet

logger = logging.getLogger(__name__)


def place_bet(
    db: Session,
    user_id: str,
    game_id: int,
    bet_type: str,
    amount: Decimal,
    odds: Optional[int] = None,
    pick: Optional[str] = None,
    selection: Optional[str] = None,
    prediction_id: Optional[int] = None,
) -> Bet:
    """
    Accept a wager and deduct the stake from the user's bankroll.

    The side is taken from `selection` when given, otherwise resolved from the
    free-text `pick`; either way the stored pick is regenerated from the
    selection and the game's current line, which the bet keeps for grading.
    """
    bet_type = supported_bet_type(bet_type)
    odds = check_odds(DEFAULT_ODDS if odds is None else odds)
    amount = to_money(amount)

    game = get_game(db, game_id)
    if selection is None:
        if not pick:
            raise InvalidSelectionError("Either pick or selection is required")
        selection = resolve_selection(bet_type, pick, game)
    else:
        selection = parse_selection(selection)
    line = locked_line(bet_type, selection, game)
    display = format_pick(bet_type, selection, line, game)

    if prediction_id is not None:
        prediction = db.get(Prediction, prediction_id)
        if prediction is None:
            raise NotFoundError(f"Prediction {prediction_id} not found")
        if prediction.game_id != game.id:
            raise BetRejectedError("Prediction belongs to a different game")

    # same order as settlement: game first, then user
    with game_locks.hold(game.id), user_locks.hold(user_id):
        db.refresh(game)
        if game.status == GameStatus.FINISHED.value:
            raise GameClosedError("Game is no longer open for betting")

        user = lock_user(db, user_id)
        verdict = validate_bet(amount, user.bankroll)
        if not verdict.ok:
            db.rollback()
            raise BetRejectedError(verdict.reason)

        bet = Bet(
            user_id=user.id,
            game_id=game.id,
            prediction_id=prediction_id,
            bet_type=bet_type.value,
            selection=selection.value,
            line=line,
            pick=display,
            amount=amount,
            odds=odds,
            status=BetStatus.PENDING.value,
        )
        db.add(bet)
        db.flush()
        apply_delta(db, user, -amount, LedgerKind.WAGER, bet_id=bet.id, game_id=game.id)
        db.commit()

    logger.info(
        "Bet %s placed: user=%s game=%s %s $%s @ %s (bankroll now %s)",
        bet.id, user_id, game.id, display, amount, odds, user.bankroll,
    )
    return bet


def list_bets(db: Session, user_id: str, limit: Optional[int] = None) -> List[Bet]:
    """User's wagers, newest first, with their games loaded."""
    stmt = (
        select(Bet)
        .options(selectinload(Bet.game))
        .where(Bet.user_id == user_id)
        .order_by(Bet.placed_at.desc(), Bet.id.desc())
    )
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(db.execute(stmt).scalars())


def recent_bets(db: Session, user_id: str, limit: int = 5) -> List[Bet]:
    return list_bets(db, user_id, limit=limit)
