# apps/api/betsim/services/simulator.py
from __future__ import annotations

import math
from typing import NamedTuple, Optional

import numpy as np

from apps.api.betsim.core.config import DEFAULT_TOTAL_POINTS, SIM_NOISE


class SimulatedScore(NamedTuple):
    home_score: int
    away_score: int


def simulate_game(game, rng: Optional[np.random.Generator] = None) -> SimulatedScore:
    """
    Draw a synthetic final score around the game's posted total.

    Placeholder oracle, not a statistical model: the home side takes 20-80% of
    the total, the away side the remainder plus +/- SIM_NOISE points.
    Pass a seeded generator for reproducible results.
    """
    rng = rng if rng is not None else np.random.default_rng()
    total = float(game.total_points) if game.total_points is not None else DEFAULT_TOTAL_POINTS

    home = math.floor(rng.random() * total * 0.6) + math.floor(total * 0.2)
    away = math.floor(total - home + rng.uniform(-SIM_NOISE, SIM_NOISE))

    return SimulatedScore(home_score=max(0, int(home)), away_score=max(0, int(away)))
