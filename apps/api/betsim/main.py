# apps/api/betsim/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from fastapi.middleware.cors import CORSMiddleware

from .core.config import CORS_ORIGINS, LOG_LEVEL
from .core.db import init_db
from .core.errors import register_error_handlers

# Routers (each router file already sets its own prefix/tags)
from .routers.meta import router as meta_router
from .routers.users import router as users_router
from .routers.games import router as games_router
from .routers.bets import router as bets_router
from .routers.predictions import router as predictions_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database ready")
    yield


app = FastAPI(
    title="BetSim API",
    version="0.1.0",
    description=(
        "Virtual sports-betting simulator: synthetic bankrolls, simulated "
        "wagers, game settlement and performance analytics."
    ),
    lifespan=lifespan,
)

# CORS (open for dev; set CORS_ORIGINS in prod)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(meta_router)
app.include_router(users_router)
app.include_router(games_router)
app.include_router(bets_router)
app.include_router(predictions_router)


# Redirect root to Swagger UI
@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/docs")
