from __future__ import annotations

from dataclasses import dataclass, field

from growthfit.fit.growth import GROWTH_LABELS
from growthfit.fit.models import SearchSettings


@dataclass(frozen=True)
class GrowthFitConfig:
    partitions: int = 32
    tolerance: float = 1e-5
    max_rounds: int = 500
    narrowing: str = "symmetric"
    candidates: list[str] = field(default_factory=lambda: list(GROWTH_LABELS))
    parallel_workers: int = 0
    diagnostics: bool = True
    measure_sizes: list[int] = field(default_factory=lambda: [64, 128, 256, 512, 1024])
    measure_trials: int = 3
    measure_warmups: int = 1

    def search_settings(self) -> SearchSettings:
        return SearchSettings(
            partitions=self.partitions,
            tolerance=self.tolerance,
            max_rounds=self.max_rounds,
            narrowing=self.narrowing,
        )
