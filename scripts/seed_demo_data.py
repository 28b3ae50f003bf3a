# scripts/seed_demo_data.py
import sys, pathlib
# make repo root importable BEFORE any "from apps..." imports
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import select

from apps.api.betsim.core.db import SessionLocal, init_db
from apps.api.betsim.models import Game, User
from apps.api.betsim.services.games import create_game
from apps.api.betsim.services.predictions import generate_for_open_games
from apps.api.betsim.services.users import create_user

DEMO_USERNAME = "demo"

GAME_ROWS = [
    # home, away, sport, hours from now, home spread, total, home ML, away ML
    ("Lakers", "Warriors", "NBA", 2, "-3.5", "220.5", -150, 130),
    ("Celtics", "Heat", "NBA", 4, "-7.0", "215.5", -280, 240),
    ("Cowboys", "Giants", "NFL", 26, "-6.5", "44.5", -250, 210),
    ("Chiefs", "Bills", "NFL", 30, "-2.5", "48.5", -135, 115),
    ("Yankees", "Red Sox", "MLB", 6, "-1.5", "8.5", -160, 140),
    ("Bruins", "Rangers", "NHL", 8, "-1.5", "5.5", -125, 105),
]


def main():
    print(f"[{datetime.now(timezone.utc).isoformat()}] Seeding demo data")
    init_db()

    with SessionLocal() as db:
        user = db.execute(select(User).where(User.username == DEMO_USERNAME)).scalar_one_or_none()
        if user is None:
            user = create_user(db, DEMO_USERNAME)
        print("Demo user:", user.id, user.bankroll)

        if db.execute(select(Game.id)).first():
            print("Games already present, skipping")
            return

        now = datetime.now(timezone.utc)
        for home, away, sport, hours, spread, total, home_ml, away_ml in GAME_ROWS:
            game = create_game(db, {
                "home_team": home,
                "away_team": away,
                "sport": sport,
                "game_time": now + timedelta(hours=hours),
                "status": "scheduled",
                "home_spread": Decimal(spread),
                "total_points": Decimal(total),
                "home_moneyline": home_ml,
                "away_moneyline": away_ml,
            })
            print("GAME:", game.id, f"{away} @ {home}", sport)

        created = generate_for_open_games(db, limit=len(GAME_ROWS))
        for p in created:
            print("PREDICTION:", p.game_id, p.recommended_pick, p.confidence_tier)


if __name__ == "__main__":
    main()
