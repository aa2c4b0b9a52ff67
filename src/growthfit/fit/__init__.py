from __future__ import annotations

from .error import evaluate
from .growth import GROWTH_FUNCTIONS, GrowthFunction, growth_by_label
from .models import FitResult, Observation, Ranking, SearchSettings, Verdict
from .optimizer import optimal_constant
from .ranker import rank

__all__ = [
    "GROWTH_FUNCTIONS",
    "FitResult",
    "GrowthFunction",
    "Observation",
    "Ranking",
    "SearchSettings",
    "Verdict",
    "evaluate",
    "growth_by_label",
    "optimal_constant",
    "rank",
]
