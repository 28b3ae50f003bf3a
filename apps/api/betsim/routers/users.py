# apps/api/betsim/routers/users.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from apps.api.betsim.core.db import get_db
from apps.api.betsim.routers.deps import current_user_id
from apps.api.betsim.schemas.users import LedgerEntry, User, UserCreate, UserStats
from apps.api.betsim.services import ledger, stats, users

router = APIRouter(tags=["users"])


@router.post("/users", summary="Create user", response_model=User, status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    return users.create_user(db, payload.username, payload.bankroll)


@router.get("/user", summary="Current user", response_model=User)
def get_current_user(user_id: str = Depends(current_user_id), db: Session = Depends(get_db)):
    return users.get_user(db, user_id)


@router.get("/user/stats", summary="Betting performance", response_model=UserStats)
def get_user_stats(user_id: str = Depends(current_user_id), db: Session = Depends(get_db)):
    return stats.compute_stats(db, user_id)


@router.get("/user/ledger", summary="Bankroll ledger, newest first", response_model=List[LedgerEntry])
def get_user_ledger(
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    user_id: str = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    users.get_user(db, user_id)
    return ledger.list_entries(db, user_id, limit=limit, offset=offset)
