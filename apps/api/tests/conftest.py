import os

# must be set before the app (and its engine) is imported
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from starlette.testclient import TestClient

from apps.api.betsim.core.db import SessionLocal, reset_db
from apps.api.betsim.main import app
from apps.api.betsim.models import Game
from apps.api.betsim.services.users import create_user


@pytest.fixture(autouse=True)
def fresh_schema():
    """Every test starts from empty tables."""
    reset_db()
    yield


@pytest.fixture(scope="module")
def client():
    """Shared FastAPI test client for this test module"""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(bankroll="1000.00", username=None):
        counter["n"] += 1
        return create_user(db, username or f"user{counter['n']}", Decimal(bankroll))

    return _make


@pytest.fixture
def make_game(db):
    def _make(**overrides):
        row = {
            "home_team": "Lakers",
            "away_team": "Warriors",
            "sport": "NBA",
            "game_time": datetime.now(timezone.utc) + timedelta(hours=2),
            "status": "scheduled",
            "home_spread": Decimal("-3.5"),
            "total_points": Decimal("220.5"),
            "home_moneyline": -150,
            "away_moneyline": 130,
        }
        row.update(overrides)
        game = Game(**row)
        db.add(game)
        db.commit()
        return game

    return _make


@pytest.fixture
def fixed_score(monkeypatch):
    """Force the simulator used by settlement to return a chosen score."""
    from apps.api.betsim.services.simulator import SimulatedScore

    def _fix(home, away):
        monkeypatch.setattr(
            "apps.api.betsim.services.settlement.simulate_game",
            lambda game, rng=None: SimulatedScore(home, away),
            raising=True,
        )

    return _fix
