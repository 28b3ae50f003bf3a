import os
from decimal import Decimal
from dotenv import load_dotenv

load_dotenv()

POSTGRES_USER = os.getenv("POSTGRES_USER", "betsim")
POSTGRES_PASSWORD = os.getenv("POSTGRES_PASSWORD", "betsim")
POSTGRES_HOST = os.getenv("POSTGRES_HOST", "localhost")
POSTGRES_PORT = os.getenv("POSTGRES_PORT", "5432")
POSTGRES_DB = os.getenv("POSTGRES_DB", "betsim")

# SQLAlchemy DSN that *forces* the psycopg v3 driver, not psycopg2.
# DATABASE_URL wins when set (tests and local runs point it at SQLite).
SQLALCHEMY_DSN = os.getenv("DATABASE_URL") or (
    f"postgresql+psycopg://{POSTGRES_USER}:{POSTGRES_PASSWORD}@"
    f"{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DB}"
)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# --- Betting rules ---------------------------------------------------

STARTING_BANKROLL = Decimal(os.getenv("STARTING_BANKROLL", "10000.00"))
MIN_BET = Decimal(os.getenv("MIN_BET", "10.00"))
MAX_STAKE_FRACTION = Decimal(os.getenv("MAX_STAKE_FRACTION", "0.20"))
DEFAULT_ODDS = -110
MAX_ABS_ODDS = 100000

# Outcome simulator
DEFAULT_TOTAL_POINTS = 200.0
SIM_NOISE = 10.0

SUPPORTED_SPORTS = ("NBA", "NFL", "MLB", "NHL")
