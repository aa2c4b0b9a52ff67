from __future__ import annotations

from dataclasses import dataclass, field

NARROWING_MODES = ("symmetric", "legacy")


@dataclass(frozen=True)
class Observation:
    size: float
    runtime: float


@dataclass(frozen=True)
class FitResult:
    label: str
    constant: float
    error: float


@dataclass(frozen=True)
class Verdict:
    label: str
    error: float


@dataclass(frozen=True)
class Ranking:
    verdict: Verdict
    results: list[FitResult] = field(default_factory=list)

    def result_for(self, label: str) -> FitResult | None:
        for result in self.results:
            if result.label == label:
                return result
        return None


@dataclass(frozen=True)
class SearchSettings:
    """Knobs for the interval-narrowing search.

    ``narrowing="legacy"`` reproduces the historical update order where the new
    upper bound is derived from the already moved lower bound.
    """

    partitions: int = 32
    tolerance: float = 1e-5
    max_rounds: int = 500
    narrowing: str = "symmetric"

    def __post_init__(self) -> None:
        if self.partitions < 3:
            raise ValueError("partitions must be at least 3")
        if self.max_rounds < 1:
            raise ValueError("max_rounds must be at least 1")
        if self.narrowing not in NARROWING_MODES:
            raise ValueError(f"narrowing must be one of: {', '.join(NARROWING_MODES)}")
