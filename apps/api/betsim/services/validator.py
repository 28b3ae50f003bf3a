# apps/api/betsim/services/validator.py
from decimal import Decimal
from typing import NamedTuple, Optional

from apps.api.betsim.core.config import MAX_STAKE_FRACTION, MIN_BET


class ValidationResult(NamedTuple):
    ok: bool
    reason: Optional[str] = None


def validate_bet(stake: Decimal, bankroll: Decimal) -> ValidationResult:
    """Admission check run once at placement. First failing rule wins."""
    stake, bankroll = Decimal(stake), Decimal(bankroll)

    if stake < MIN_BET:
        return ValidationResult(False, f"Minimum bet amount is ${MIN_BET:,.0f}")
    if stake > bankroll:
        return ValidationResult(False, "Insufficient bankroll")
    if stake > bankroll * MAX_STAKE_FRACTION:
        return ValidationResult(False, f"Bet amount exceeds {MAX_STAKE_FRACTION * 100:.0f}% of bankroll")
    return ValidationResult(True)
