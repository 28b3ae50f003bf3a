# apps/api/tests/test_api.py

def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_sports(client):
    r = client.get("/sports")
    assert r.status_code == 200
    assert r.json()["sports"] == ["MLB", "NBA", "NFL", "NHL"]


def test_root_redirects_to_docs(client):
    r = client.get("/", follow_redirects=False)
    assert r.status_code in (302, 307)
    assert r.headers["location"] == "/docs"


def test_unknown_route_uses_error_envelope(client):
    r = client.get("/nope")
    assert r.status_code == 404
    err = r.json()["error"]
    assert err["code"] == "NOT_FOUND"
    assert err["trace_id"]


def test_create_user_and_fetch(client):
    r = client.post("/users", json={"username": "alice", "bankroll": 1000})
    assert r.status_code == 201
    body = r.json()
    assert body["bankroll"] == "1000.00"
    assert "createdAt" in body

    r = client.get("/user", headers={"X-User-Id": body["id"]})
    assert r.status_code == 200
    assert r.json()["username"] == "alice"


def test_new_user_gets_starting_bankroll(client):
    r = client.post("/users", json={"username": "bob"})
    assert r.json()["bankroll"] == "10000.00"


def test_duplicate_username_conflicts(client):
    client.post("/users", json={"username": "carol"})
    r = client.post("/users", json={"username": "carol"})
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "CONFLICT"


def test_unknown_user_is_404(client):
    r = client.get("/user", headers={"X-User-Id": "does-not-exist"})
    assert r.status_code == 404


def test_missing_user_header_is_401(client):
    r = client.get("/user")
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "UNAUTHORIZED"


def test_create_and_list_games(client):
    r = client.post("/games", json={
        "homeTeam": "Celtics",
        "awayTeam": "Heat",
        "sport": "nba",
        "gameTime": "2026-03-01T19:00:00Z",
        "homeSpread": -7.0,
        "totalPoints": 215.5,
        "homeMoneyline": -280,
        "awayMoneyline": 240,
    })
    assert r.status_code == 201
    game = r.json()
    assert game["sport"] == "NBA"
    assert game["homeSpread"] == "-7.0"
    assert game["awaySpread"] == "7.0"
    assert game["status"] == "scheduled"

    r = client.get("/games", params={"status": "scheduled"})
    assert [g["id"] for g in r.json()] == [game["id"]]
    assert r.json()[0]["predictions"] == []

    r = client.get("/games", params={"status": "finished"})
    assert r.json() == []


def test_create_game_rejects_unknown_sport(client):
    r = client.post("/games", json={
        "homeTeam": "A", "awayTeam": "B", "sport": "curling", "gameTime": "2026-03-01T19:00:00Z",
    })
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Unsupported sport: CURLING"


def test_get_unknown_game(client):
    r = client.get("/games/4242")
    assert r.status_code == 404
    assert r.json()["error"]["type"] == "not_found"


def test_create_game_rejects_out_of_range_moneyline(client):
    r = client.post("/games", json={
        "homeTeam": "A", "awayTeam": "B", "sport": "NBA", "gameTime": "2026-03-01T19:00:00Z",
        "homeMoneyline": 2**40,
    })
    assert r.status_code == 422
