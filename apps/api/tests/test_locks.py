# apps/api/tests/test_locks.py
import threading
from decimal import Decimal

from apps.api.betsim.core.db import SessionLocal
from apps.api.betsim.core.locks import LockRegistry, game_locks, user_locks
from apps.api.betsim.services.bets import place_bet
from apps.api.betsim.services.settlement import settle_game


def test_same_key_same_lock():
    reg = LockRegistry()
    assert reg.get("u1") is reg.get("u1")
    assert reg.get("u1") is not reg.get("u2")


def test_hold_many_deduplicates_and_releases():
    reg = LockRegistry()
    with reg.hold_many(["b", "a", "b"]):
        assert reg.get("a").locked()
        assert reg.get("b").locked()
    assert not reg.get("a").locked()
    assert not reg.get("b").locked()


def test_hold_many_empty():
    reg = LockRegistry()
    with reg.hold_many([]):
        pass


def test_hold_serializes_read_modify_write():
    reg = LockRegistry()
    state = {"balance": 0}

    def worker():
        for _ in range(200):
            with reg.hold("user"):
                current = state["balance"]
                state["balance"] = current + 1

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert state["balance"] == 1600


def _run_in_thread(target):
    """Start `target` in a thread; returns (thread, done event, captured errors)."""
    done, errors = threading.Event(), []

    def runner():
        try:
            target()
        except Exception as e:  # surfaced by the asserting test
            errors.append(e)
        finally:
            done.set()

    t = threading.Thread(target=runner, daemon=True)
    t.start()
    return t, done, errors


def test_placement_waits_for_the_users_lock(db, make_user, make_game):
    user = make_user()
    game = make_game()

    def place():
        with SessionLocal() as s:
            place_bet(s, user.id, game.id, "moneyline", Decimal("50"), selection="home")

    with user_locks.hold(user.id):
        t, done, errors = _run_in_thread(place)
        # blocked while a settlement (or another placement) owns this bankroll
        assert not done.wait(0.3)

    t.join(5)
    assert done.is_set()
    assert errors == []
    db.refresh(user)
    assert user.bankroll == Decimal("950.00")


def test_settlement_waits_for_the_games_lock(db, make_game):
    game = make_game()

    def settle():
        with SessionLocal() as s:
            settle_game(s, game.id)

    with game_locks.hold(game.id):
        t, done, errors = _run_in_thread(settle)
        assert not done.wait(0.3)

    t.join(5)
    assert done.is_set()
    assert errors == []
    db.refresh(game)
    assert game.status == "finished"


def test_settlement_waits_for_bettors_lock(db, make_user, make_game):
    user = make_user()
    game = make_game()
    place_bet(db, user.id, game.id, "moneyline", Decimal("50"), selection="home")

    def settle():
        with SessionLocal() as s:
            settle_game(s, game.id)

    with user_locks.hold(user.id):
        t, done, errors = _run_in_thread(settle)
        assert not done.wait(0.3)

    t.join(5)
    assert done.is_set()
    assert errors == []
    db.refresh(game)
    assert game.status == "finished"
