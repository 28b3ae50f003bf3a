# apps/api/betsim/routers/predictions.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from apps.api.betsim.core.db import get_db
from apps.api.betsim.schemas.predictions import Prediction, PredictionList
from apps.api.betsim.services import predictions

router = APIRouter(prefix="/predictions", tags=["predictions"])


@router.get("", summary="List predictions", response_model=PredictionList)
def list_predictions(
    limit: int = Query(50, ge=1, le=200, description="Max items to return"),
    offset: int = Query(0, ge=0, description="Items to skip"),
    db: Session = Depends(get_db),
):
    items = predictions.list_predictions(db, limit=limit, offset=offset)
    return {"items": items, "total_returned": len(items), "limit": limit, "offset": offset}


@router.post("/generate", summary="Generate predictions for open games", response_model=List[Prediction])
def generate_predictions(
    limit: int = Query(predictions.GENERATE_BATCH, ge=1, le=50, description="Max games to cover"),
    db: Session = Depends(get_db),
):
    """Predicts the next open games that have no prediction yet; repeat calls add nothing new."""
    return predictions.generate_for_open_games(db, limit=limit)
