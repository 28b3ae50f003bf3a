# apps/api/betsim/services/odds.py
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum

from apps.api.betsim.core.config import MAX_ABS_ODDS
from apps.api.betsim.core.errors import InvalidOddsError

CENT = Decimal("0.01")
HUNDRED = Decimal(100)
DECIMAL_ODDS_STEP = Decimal("0.001")


class Outcome(str, Enum):
    WIN = "win"
    LOSS = "loss"
    PUSH = "push"


def to_money(value) -> Decimal:
    """Quantize anything numeric to cents."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def check_odds(odds: int) -> int:
    if odds == 0:
        raise InvalidOddsError("American odds cannot be 0")
    if abs(odds) > MAX_ABS_ODDS:
        raise InvalidOddsError(f"American odds must be between -{MAX_ABS_ODDS} and +{MAX_ABS_ODDS}")
    return odds


def american_to_decimal(odds: int) -> Decimal:
    """European-style odds (total return per 1 staked), for display next to the American price."""
    check_odds(odds)
    if odds > 0:
        value = 1 + Decimal(odds) / HUNDRED
    else:
        value = 1 + HUNDRED / abs(odds)
    return value.quantize(DECIMAL_ODDS_STEP, rounding=ROUND_HALF_UP)


def calculate_payout(stake: Decimal, odds: int, outcome: Outcome) -> Decimal:
    """
    Total amount returned to the bettor, stake included.

    Positive odds are profit per 100 staked (underdog); negative odds are the
    stake needed to profit 100 (favorite).
    """
    check_odds(odds)
    stake = Decimal(stake)

    if outcome == Outcome.PUSH:
        return to_money(stake)
    if outcome == Outcome.LOSS:
        return to_money(0)

    if odds > 0:
        return to_money(stake + stake * odds / HUNDRED)
    return to_money(stake + stake * HUNDRED / abs(odds))
