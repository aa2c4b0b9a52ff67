"""The closed set of growth shapes a dataset can be matched against.

Shapes use IEEE-754 semantics instead of raising: ``log(0)`` is ``-inf``, the
log of a negative size is ``nan`` and overflowing powers become ``inf``. Sizes
of 0 or 1 are not guarded against; the resulting values flow into the error.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass


def ieee_log(x: float) -> float:
    if x > 0:
        return math.log(x)
    if x == 0:
        return -math.inf
    return math.nan


def ieee_exp2(x: float) -> float:
    try:
        return 2.0**x
    except OverflowError:
        return math.inf


@dataclass(frozen=True)
class GrowthFunction:
    name: str
    label: str
    shape: Callable[[float], float]

    def __call__(self, size: float) -> float:
        return self.shape(size)


GROWTH_FUNCTIONS: tuple[GrowthFunction, ...] = (
    GrowthFunction("constant", "O(1)", lambda x: 1.0),
    GrowthFunction("logarithmic", "O(log n)", ieee_log),
    GrowthFunction("linear", "O(n)", lambda x: float(x)),
    GrowthFunction("linearithmic", "O(n log n)", lambda x: x * ieee_log(x)),
    GrowthFunction("quadratic", "O(n^2)", lambda x: float(x) * x),
    GrowthFunction("quadratic_log", "O(n^2 log n)", lambda x: float(x) * x * ieee_log(x)),
    GrowthFunction("cubic", "O(n^3)", lambda x: float(x) * x * x),
    GrowthFunction("exponential", "O(2^n)", ieee_exp2),
)

GROWTH_LABELS: tuple[str, ...] = tuple(g.label for g in GROWTH_FUNCTIONS)

_BY_LABEL: dict[str, GrowthFunction] = {g.label: g for g in GROWTH_FUNCTIONS}
_BY_NAME: dict[str, GrowthFunction] = {g.name: g for g in GROWTH_FUNCTIONS}


def growth_by_label(label: str) -> GrowthFunction:
    key = label.strip()
    if key in _BY_LABEL:
        return _BY_LABEL[key]
    if key.lower() in _BY_NAME:
        return _BY_NAME[key.lower()]
    raise KeyError(f"Unknown growth function: {label}")


def select_growth_functions(labels: list[str] | None) -> tuple[GrowthFunction, ...]:
    # Keeps declared order regardless of the order labels are given in.
    if not labels:
        return GROWTH_FUNCTIONS
    wanted = {growth_by_label(label).label for label in labels}
    return tuple(g for g in GROWTH_FUNCTIONS if g.label in wanted)
