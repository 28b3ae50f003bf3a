# apps/api/tests/test_odds.py
from decimal import Decimal

import pytest

from apps.api.betsim.core.errors import InvalidOddsError
from apps.api.betsim.services.odds import Outcome, american_to_decimal, calculate_payout, check_odds, to_money


@pytest.mark.parametrize("odds", [-110, -250, 100, 130, 450])
def test_push_returns_stake_and_loss_returns_nothing(odds):
    stake = Decimal("55.00")
    assert calculate_payout(stake, odds, Outcome.PUSH) == stake
    assert calculate_payout(stake, odds, Outcome.LOSS) == Decimal("0.00")


@pytest.mark.parametrize("odds", [-1000, -110, -100, 100, 150, 1000])
def test_win_always_pays_more_than_stake(odds):
    stake = Decimal("10.00")
    assert calculate_payout(stake, odds, Outcome.WIN) > stake


def test_favorite_payout():
    # 100 staked at -110 returns 100 + 100*100/110
    assert calculate_payout(Decimal("100"), -110, Outcome.WIN) == Decimal("190.91")


def test_underdog_payout():
    assert calculate_payout(Decimal("50"), 130, Outcome.WIN) == Decimal("115.00")


def test_even_money_is_double():
    assert calculate_payout(Decimal("20"), -100, Outcome.WIN) == Decimal("40.00")
    assert calculate_payout(Decimal("20"), 100, Outcome.WIN) == Decimal("40.00")


def test_zero_odds_rejected():
    with pytest.raises(InvalidOddsError):
        calculate_payout(Decimal("10"), 0, Outcome.WIN)


def test_to_money_rounds_half_up():
    assert to_money("1.005") == Decimal("1.01")
    assert to_money(3) == Decimal("3.00")


@pytest.mark.parametrize("odds", [200000, -100001, 2**64])
def test_odds_beyond_bound_rejected(odds):
    with pytest.raises(InvalidOddsError):
        check_odds(odds)


def test_odds_at_bound_accepted():
    assert check_odds(100000) == 100000
    assert check_odds(-100000) == -100000


@pytest.mark.parametrize(
    "odds,expected",
    [(-110, "1.909"), (-200, "1.500"), (100, "2.000"), (-100, "2.000"), (130, "2.300"), (450, "5.500")],
)
def test_american_to_decimal(odds, expected):
    assert american_to_decimal(odds) == Decimal(expected)


def test_decimal_odds_match_payout_per_unit():
    stake = Decimal("100")
    for odds in (-150, -110, 120, 333):
        payout = calculate_payout(stake, odds, Outcome.WIN)
        assert abs(payout / stake - american_to_decimal(odds)) < Decimal("0.001")


def test_american_to_decimal_rejects_zero():
    with pytest.raises(InvalidOddsError):
        american_to_decimal(0)
