# apps/api/betsim/services/settlement.py
"""
Settle every pending wager on a game against a simulated final score.

The whole settlement is one transaction: wager updates, per-user bankroll
credits with their ledger entries, and the game's final score commit together
or not at all. Each wager is graded inside its own savepoint so a single bad
wager is skipped (and stays pending) without sinking the others.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from decimal import Decimal
from typing import Dict, NamedTuple, Optional

import numpy as np
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from apps.api.betsim.core.errors import BetsimError, SettlementError
from apps.api.betsim.core.locks import game_locks, user_locks
from apps.api.betsim.models import Bet, BetStatus, GameStatus, LedgerKind, utcnow
from apps.api.betsim.services.evaluator import evaluate_bet
from apps.api.betsim.services.games import get_game
from apps.api.betsim.services.ledger import apply_delta, lock_user
from apps.api.betsim.services.odds import Outcome, calculate_payout
from apps.api.betsim.services.simulator import SimulatedScore, simulate_game

logger = logging.getLogger(__name__)

STATUS_FOR = {
    Outcome.WIN: BetStatus.WON,
    Outcome.LOSS: BetStatus.LOST,
    Outcome.PUSH: BetStatus.PUSH,
}


class SettlementResult(NamedTuple):
    home_score: int
    away_score: int
    settled_bet_count: int
    credited: Dict[str, Decimal]


def _settle_one(db: Session, bet: Bet, game, score: SimulatedScore) -> Decimal:
    """Grade and pay one wager; returns what goes back to the bettor's bankroll."""
    outcome = evaluate_bet(bet, game, score.home_score, score.away_score)
    payout = calculate_payout(bet.amount, bet.odds, outcome)

    bet.status = STATUS_FOR[outcome].value
    bet.payout = payout
    bet.settled_at = utcnow()
    db.flush()
    return payout


def settle_game(db: Session, game_id: int, rng: Optional[np.random.Generator] = None) -> SettlementResult:
    """
    Settle the game's pending wagers. The first call simulates and stores the
    final score; later calls grade any wager still pending (one skipped by an
    earlier pass) against that stored score, so replays never move money twice.
    """
    with game_locks.hold(game_id):
        game = get_game(db, game_id)

        finished = game.status == GameStatus.FINISHED.value
        if finished:
            score = SimulatedScore(game.home_score or 0, game.away_score or 0)
        else:
            score = simulate_game(game, rng)

        pending = list(db.execute(
            select(Bet)
            .where(Bet.game_id == game_id, Bet.status == BetStatus.PENDING.value)
            .order_by(Bet.id)
        ).scalars())

        if finished and not pending:
            logger.info("Game %s already finished; nothing to settle", game_id)
            return SettlementResult(score.home_score, score.away_score, 0, {})

        with user_locks.hold_many(bet.user_id for bet in pending):
            credits: Dict[str, Decimal] = defaultdict(Decimal)
            settled = 0

            for bet in pending:
                try:
                    with db.begin_nested():
                        payout = _settle_one(db, bet, game, score)
                except (BetsimError, SQLAlchemyError) as e:
                    logger.warning("Skipping bet %s on game %s: %s", bet.id, game_id, e)
                    continue

                settled += 1
                # won pays stake + profit, push hands the stake back
                if bet.status in (BetStatus.WON.value, BetStatus.PUSH.value):
                    credits[bet.user_id] += payout

            try:
                for user_id in sorted(credits):
                    user = lock_user(db, user_id)
                    apply_delta(db, user, credits[user_id], LedgerKind.SETTLEMENT, game_id=game_id)

                game.home_score = score.home_score
                game.away_score = score.away_score
                game.status = GameStatus.FINISHED.value
                db.commit()
            except (BetsimError, SQLAlchemyError) as e:
                db.rollback()
                logger.exception("Settlement of game %s failed; rolled back", game_id)
                raise SettlementError(f"Settlement of game {game_id} failed: {e}") from e

    logger.info(
        "Game %s settled %d-%d: %d/%d bets updated, %d users credited",
        game_id, score.home_score, score.away_score, settled, len(pending), len(credits),
    )
    return SettlementResult(score.home_score, score.away_score, settled, dict(credits))
