# apps/api/tests/test_predictions.py
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace

import numpy as np
import pytest

from apps.api.betsim.services.predictions import (
    ALL_TAGS,
    confidence_tier,
    generate_for_open_games,
    generate_prediction,
)


@pytest.mark.parametrize("edge,tier", [(9.5, "high"), (7.0, "high"), (6.9, "medium"), (5.0, "medium"), (4.9, "low")])
def test_confidence_tier(edge, tier):
    assert confidence_tier(edge) == tier


def test_generated_prediction_is_well_formed():
    game = SimpleNamespace(
        id=1, home_team="Lakers", away_team="Warriors",
        home_spread=Decimal("-3.5"), total_points=Decimal("220.5"),
    )
    rng = np.random.default_rng(11)
    for _ in range(30):
        p = generate_prediction(game, rng)
        assert Decimal("5") <= p.edge_score <= Decimal("10")
        assert p.confidence_tier in ("medium", "high")
        assert p.recommended_pick in ("Warriors +3.5", "Under 220.5", "Lakers ML")
        assert len(p.tags) == 3 and len(set(p.tags)) == 3
        assert set(p.tags) <= set(ALL_TAGS)


def test_missing_markets_fall_back_to_moneyline():
    game = SimpleNamespace(id=2, home_team="Bruins", away_team="Rangers", home_spread=None, total_points=None)
    p = generate_prediction(game, np.random.default_rng(0))
    assert p.bet_type == "moneyline"
    assert p.recommended_pick == "Bruins ML"


def test_only_open_games_get_predictions(db, make_game):
    open_game = make_game()
    make_game(home_team="Celtics", away_team="Heat", status="finished", home_score=100, away_score=90)

    created = generate_for_open_games(db, np.random.default_rng(1))
    assert [p.game_id for p in created] == [open_game.id]


def test_generate_and_list_endpoints(client, make_game):
    game = make_game()

    r = client.post("/predictions/generate")
    assert r.status_code == 200
    generated = r.json()
    assert len(generated) == 1
    assert generated[0]["gameId"] == game.id
    assert "edgeScore" in generated[0]

    r = client.get("/predictions", params={"limit": 10})
    body = r.json()
    assert body["totalReturned"] == 1
    assert body["limit"] == 10 and body["offset"] == 0

    r = client.get(f"/games/{game.id}")
    assert [p["id"] for p in r.json()["predictions"]] == [generated[0]["id"]]


def test_bet_can_reference_prediction(client, make_game):
    game = make_game()
    other = make_game(home_team="Celtics", away_team="Heat")
    prediction = client.post("/predictions/generate").json()[0]
    assert prediction["gameId"] == game.id

    user = client.post("/users", json={"username": "tipster"}).json()["id"]
    body = {"gameId": game.id, "betType": "moneyline", "pick": "Lakers ML", "amount": 50,
            "predictionId": prediction["id"]}
    r = client.post("/bets", json=body, headers={"X-User-Id": user})
    assert r.status_code == 201
    assert r.json()["predictionId"] == prediction["id"]

    body.update(gameId=other.id, pick="Celtics ML")
    r = client.post("/bets", json=body, headers={"X-User-Id": user})
    assert r.status_code == 400


def test_repeat_generation_adds_nothing(db, make_game):
    make_game()
    make_game(home_team="Celtics", away_team="Heat")

    assert len(generate_for_open_games(db, np.random.default_rng(2))) == 2
    assert generate_for_open_games(db, np.random.default_rng(3)) == []


def test_generation_is_capped_per_call(db, make_game):
    start = datetime(2026, 3, 1, 19, 0, tzinfo=timezone.utc)
    games = [
        make_game(home_team=f"Home{i}", away_team=f"Away{i}", game_time=start + timedelta(hours=i))
        for i in range(7)
    ]

    first = generate_for_open_games(db, np.random.default_rng(4))
    assert [p.game_id for p in first] == [g.id for g in games[:5]]

    rest = generate_for_open_games(db, np.random.default_rng(5), limit=10)
    assert [p.game_id for p in rest] == [g.id for g in games[5:]]


def test_generate_endpoint_limit(client, make_game):
    for i in range(3):
        make_game(home_team=f"Home{i}", away_team=f"Away{i}")

    assert len(client.post("/predictions/generate", params={"limit": 2}).json()) == 2
    assert len(client.post("/predictions/generate").json()) == 1
    assert client.post("/predictions/generate").json() == []
