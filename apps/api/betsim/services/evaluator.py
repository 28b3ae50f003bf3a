# apps/api/betsim/services/evaluator.py
"""
Win/loss/push rules per bet type.

A wager carries a structured selection (home/away or over/under) and the line
that was posted when it was placed. Free-text picks are resolved into that
structure once, at placement; settlement never looks at the pick string.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Optional

from apps.api.betsim.core.errors import InvalidSelectionError, UnsupportedBetTypeError
from apps.api.betsim.models import BetType, Selection
from apps.api.betsim.services.odds import Outcome

SIDE_SELECTIONS = (Selection.HOME, Selection.AWAY)
TOTAL_SELECTIONS = (Selection.OVER, Selection.UNDER)


def supported_bet_type(value) -> BetType:
    """Bet types this engine can grade; prop and unknown types are rejected."""
    try:
        bet_type = BetType(value)
    except ValueError:
        raise UnsupportedBetTypeError(f"Unsupported bet type: {value}")
    if bet_type == BetType.PROP:
        raise UnsupportedBetTypeError("Prop bets cannot be settled by this engine")
    return bet_type


def parse_selection(value) -> Selection:
    try:
        return Selection(value)
    except ValueError:
        raise InvalidSelectionError(f"Unknown selection: {value}")


def _compare(value, threshold) -> Outcome:
    if value > threshold:
        return Outcome.WIN
    if value < threshold:
        return Outcome.LOSS
    return Outcome.PUSH


def _check_selection(bet_type: BetType, selection: Selection) -> None:
    if bet_type == BetType.TOTAL and selection not in TOTAL_SELECTIONS:
        raise InvalidSelectionError("Total bets take an over or under selection")
    if bet_type != BetType.TOTAL and selection not in SIDE_SELECTIONS:
        raise InvalidSelectionError(f"{bet_type.value.capitalize()} bets take a home or away selection")


def _flip(outcome: Outcome) -> Outcome:
    if outcome == Outcome.WIN:
        return Outcome.LOSS
    if outcome == Outcome.LOSS:
        return Outcome.WIN
    return outcome


# --- Placement-time helpers -------------------------------------------

def resolve_selection(bet_type, pick: str, game) -> Selection:
    """Turn a free-text pick ("Warriors +3.5", "Over 220.5", "Lakers ML") into a selection."""
    bet_type = supported_bet_type(bet_type)
    text = (pick or "").lower()

    if bet_type == BetType.TOTAL:
        over, under = "over" in text, "under" in text
        if over == under:
            raise InvalidSelectionError("Total pick must say either Over or Under")
        return Selection.OVER if over else Selection.UNDER

    home = game.home_team.lower() in text
    away = game.away_team.lower() in text
    if home == away:
        raise InvalidSelectionError(
            f"Pick must name exactly one of {game.home_team} or {game.away_team}"
        )
    return Selection.HOME if home else Selection.AWAY


def locked_line(bet_type, selection: Selection, game) -> Optional[Decimal]:
    """The line a wager is graded against, taken from the game's current market."""
    bet_type = supported_bet_type(bet_type)
    selection = parse_selection(selection)
    _check_selection(bet_type, selection)

    if bet_type == BetType.TOTAL:
        if game.total_points is None:
            raise InvalidSelectionError("Game has no total line posted")
        return Decimal(game.total_points)

    if bet_type == BetType.MONEYLINE:
        return None

    if game.home_spread is None:
        raise InvalidSelectionError("Game has no spread posted")
    spread = Decimal(game.home_spread)
    return spread if selection == Selection.HOME else -spread


def format_pick(bet_type, selection: Selection, line: Optional[Decimal], game) -> str:
    bet_type = supported_bet_type(bet_type)
    selection = parse_selection(selection)

    if bet_type == BetType.TOTAL:
        return f"{selection.value.capitalize()} {line}"

    team = game.home_team if selection == Selection.HOME else game.away_team
    if bet_type == BetType.MONEYLINE:
        return f"{team} ML"
    return f"{team} {Decimal(line):+}"


# --- Grading -------------------------------------------------------------

def evaluate_bet(bet, game, home_score: int, away_score: int) -> Outcome:
    bet_type = supported_bet_type(bet.bet_type)
    selection = parse_selection(bet.selection)
    _check_selection(bet_type, selection)
    line = bet.line if bet.line is not None else locked_line(bet_type, selection, game)

    if bet_type == BetType.SPREAD:
        # line is from the picked side's perspective; convert to the home line
        home_line = Decimal(line) if selection == Selection.HOME else -Decimal(line)
        outcome = _compare(home_score + home_line - away_score, 0)
        return outcome if selection == Selection.HOME else _flip(outcome)

    if bet_type == BetType.MONEYLINE:
        # a tied final score returns the stake
        outcome = _compare(home_score, away_score)
        return outcome if selection == Selection.HOME else _flip(outcome)

    outcome = _compare(home_score + away_score, Decimal(line))
    return outcome if selection == Selection.OVER else _flip(outcome)
