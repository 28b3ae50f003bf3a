# apps/api/betsim/services/predictions.py
"""
Templated betting recommendations.

Heuristic stand-in for a real model: a random edge score drives the confidence
tier and one of a few canned angles is picked per game. Settlement never reads
these records; they only prefill the bet slip.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional

import numpy as np
from sqlalchemy import select
from sqlalchemy.orm import Session

from apps.api.betsim.models import BetType, Game, GameStatus, Prediction, Selection
from apps.api.betsim.services.evaluator import format_pick, locked_line

logger = logging.getLogger(__name__)

# games per generate call
GENERATE_BATCH = 5

ALL_TAGS = [
    "Smart Money",
    "Fade Public",
    "Line Movement",
    "Weather",
    "Injury News",
    "Home Favorite",
    "Road Dog",
    "Value",
    "Steam",
    "Trap Game",
]


def confidence_tier(edge_score: float) -> str:
    if edge_score >= 7:
        return "high"
    if edge_score >= 5:
        return "medium"
    return "low"


def _templates(game: Game):
    # (bet_type, selection, tags, reasoning); skipped when the market is missing
    if game.home_spread is not None:
        yield (
            BetType.SPREAD,
            Selection.AWAY,
            ["Smart Money", "Line Movement"],
            f"{game.away_team} has been excellent ATS as road underdogs this season",
        )
    if game.total_points is not None:
        yield (
            BetType.TOTAL,
            Selection.UNDER,
            ["Fade Public", "Weather"],
            "Public heavily on over, defensive matchup expected",
        )
    yield (
        BetType.MONEYLINE,
        Selection.HOME,
        ["Home Favorite", "Value"],
        f"{game.home_team} has strong home court advantage",
    )


def generate_prediction(game: Game, rng: Optional[np.random.Generator] = None) -> Prediction:
    """Build (but do not persist) a recommendation for one game."""
    rng = rng if rng is not None else np.random.default_rng()

    edge = float(np.clip(5 + abs(rng.uniform(-5, 5)), 1, 10))
    edge = round(edge, 1)

    options = list(_templates(game))
    bet_type, selection, tags, reasoning = options[int(rng.integers(len(options)))]

    line = locked_line(bet_type, selection, game)
    # one extra descriptive tag on top of the angle's own
    extra = [t for t in ALL_TAGS if t not in tags]
    tags = tags + [extra[int(rng.integers(len(extra)))]]

    return Prediction(
        game_id=game.id,
        recommended_pick=format_pick(bet_type, selection, line, game),
        bet_type=bet_type.value,
        edge_score=Decimal(str(edge)),
        confidence_tier=confidence_tier(edge),
        tags=tags,
        reasoning=reasoning,
    )


def generate_for_open_games(
    db: Session,
    rng: Optional[np.random.Generator] = None,
    limit: int = GENERATE_BATCH,
) -> List[Prediction]:
    """One prediction for each of the next `limit` open games that has none yet."""
    stmt = (
        select(Game)
        .where(
            Game.status.in_([GameStatus.SCHEDULED.value, GameStatus.UPCOMING.value]),
            ~Game.predictions.any(),
        )
        .order_by(Game.game_time, Game.id)
        .limit(limit)
    )

    created: List[Prediction] = []
    for game in list(db.execute(stmt).scalars()):
        prediction = generate_prediction(game, rng)
        db.add(prediction)
        created.append(prediction)

    db.commit()
    logger.info("Generated %d predictions", len(created))
    return created


def list_predictions(db: Session, limit: int = 50, offset: int = 0) -> List[Prediction]:
    stmt = (
        select(Prediction)
        .order_by(Prediction.created_at.desc(), Prediction.id.desc())
        .limit(limit)
        .offset(offset)
    )
    return list(db.execute(stmt).scalars())
