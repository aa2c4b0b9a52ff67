from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor

from .error import evaluate
from .growth import GROWTH_FUNCTIONS, GrowthFunction
from .models import FitResult, Observation, Ranking, SearchSettings, Verdict
from .optimizer import optimal_constant

log = logging.getLogger(__name__)

ResultCallback = Callable[[FitResult], None]


def fit_one(
    dataset: Sequence[Observation],
    growth: GrowthFunction,
    settings: SearchSettings | None = None,
) -> FitResult:
    constant = optimal_constant(dataset, growth, settings)
    return FitResult(label=growth.label, constant=constant, error=evaluate(dataset, growth, constant))


def _fit_all(
    dataset: Sequence[Observation],
    candidates: Sequence[GrowthFunction],
    settings: SearchSettings | None,
    workers: int,
) -> list[FitResult]:
    if workers <= 1 or len(candidates) <= 1:
        return [fit_one(dataset, growth, settings) for growth in candidates]
    with ThreadPoolExecutor(max_workers=workers) as executor:
        # map() yields in submission order, so the reduction below sees declared order.
        return list(executor.map(lambda g: fit_one(dataset, g, settings), candidates))


def rank(
    dataset: Sequence[Observation],
    settings: SearchSettings | None = None,
    candidates: Sequence[GrowthFunction] | None = None,
    workers: int = 0,
    on_result: ResultCallback | None = None,
) -> Ranking:
    """Fit every candidate growth function and pick the lowest-error one.

    Candidates are visited in declared order and only a strictly lower error
    replaces the current verdict, so ties go to the earliest candidate. The
    first result always seeds the verdict, even when its error is ``nan``.
    """
    pool = tuple(candidates) if candidates is not None else GROWTH_FUNCTIONS
    if not pool:
        raise ValueError("at least one growth function is required")

    results = _fit_all(dataset, pool, settings, workers)

    verdict = Verdict(label=results[0].label, error=results[0].error)
    for result in results:
        if on_result is not None:
            on_result(result)
        if result.error < verdict.error:
            verdict = Verdict(label=result.label, error=result.error)
    log.debug("Verdict %s (error=%g) over %d observations", verdict.label, verdict.error, len(dataset))
    return Ranking(verdict=verdict, results=results)
