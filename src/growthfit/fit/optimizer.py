from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from .error import evaluate
from .growth import GrowthFunction
from .models import Observation, SearchSettings

log = logging.getLogger(__name__)


def initial_bounds(dataset: Sequence[Observation]) -> tuple[float, float]:
    # Every shape is >= 1 for sizes above 2, so twice the last runtime bounds C.
    if not dataset:
        return 0.0, 0.0
    return 0.0, 2.0 * math.ceil(dataset[-1].runtime)


def narrow(lower: float, upper: float, best: float, partitions: int, mode: str) -> tuple[float, float]:
    step = (upper - lower) / partitions
    new_lower = best - step
    if mode == "legacy":
        # Historical ordering: the width is re-read after lower has moved.
        return new_lower, best + (upper - new_lower) / partitions
    return new_lower, best + step


def _relative_improvement(best_error: float, previous_error: float) -> float:
    if previous_error == 0:
        return 0.0
    return 1.0 - best_error / previous_error


def _grid_point(lower: float, upper: float, i: int, partitions: int) -> float:
    return lower + (i / partitions) * (upper - lower)


def _scan(
    dataset: Sequence[Observation],
    growth: GrowthFunction,
    lower: float,
    upper: float,
    partitions: int,
    best: float,
    best_error: float,
) -> tuple[float, float]:
    # Interior points only; a point replaces the incumbent on strictly lower error.
    for i in range(1, partitions - 1):
        candidate = _grid_point(lower, upper, i, partitions)
        err = evaluate(dataset, growth, candidate)
        if err < best_error:
            best, best_error = candidate, err
    return best, best_error


def optimal_constant(
    dataset: Sequence[Observation],
    growth: GrowthFunction,
    settings: SearchSettings | None = None,
) -> float:
    """Grid-search the scaling constant for ``growth`` on a shrinking interval.

    Each round evaluates the interior points of ``partitions`` equal steps,
    keeps the lowest-error point seen so far and re-centres the interval on it.
    The loop stops once the relative improvement between rounds is no longer
    above ``tolerance`` or after ``max_rounds`` rounds.
    """
    settings = settings or SearchSettings()
    p = settings.partitions
    lower, upper = initial_bounds(dataset)

    # The first grid point seeds the incumbent, even when its error is nan.
    best = _grid_point(lower, upper, 1, p)
    best_error = evaluate(dataset, growth, best)
    previous_error: float | None = None
    for round_no in range(1, settings.max_rounds + 1):
        best, best_error = _scan(dataset, growth, lower, upper, p, best, best_error)

        if previous_error is not None:
            delta = _relative_improvement(best_error, previous_error)
            # NaN deltas stop the search too.
            if not delta > settings.tolerance:
                log.debug(
                    "%s converged after %d rounds (C=%g, error=%g)", growth.label, round_no, best, best_error
                )
                return best

        previous_error = best_error
        lower, upper = narrow(lower, upper, best, p, settings.narrowing)

    log.warning(
        "%s did not converge within %d rounds; using C=%g", growth.label, settings.max_rounds, best
    )
    return best
