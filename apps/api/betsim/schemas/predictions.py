# apps/api/betsim/schemas/predictions.py
from datetime import datetime
from typing import List, Optional

from apps.api.betsim.schemas.common import CamelModel, Line


class Prediction(CamelModel):
    id: int
    game_id: int
    recommended_pick: str
    bet_type: str
    edge_score: Line
    confidence_tier: str
    tags: List[str]
    reasoning: Optional[str] = None
    created_at: datetime


class PredictionList(CamelModel):
    items: List[Prediction]
    total_returned: int
    limit: int
    offset: int
