from __future__ import annotations

import math
from collections.abc import Sequence

from .growth import GrowthFunction
from .models import Observation


def evaluate(dataset: Sequence[Observation], growth: GrowthFunction, constant: float) -> float:
    """Root of the summed squared residuals of ``constant * growth`` over ``n^2``.

    The ``n^2`` normalization is only meaningful for comparing errors computed
    on the same dataset. Non-finite shape values propagate as ``inf``/``nan``.
    """
    n = len(dataset)
    if n == 0:
        return 0.0
    norm = float(n * n)
    loss = 0.0
    for obs in dataset:
        residual = obs.runtime - constant * growth(obs.size)
        loss += residual * residual / norm
    return math.sqrt(loss)
