from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any

from growthfit.fit.models import FitResult, Observation, Ranking, SearchSettings, Verdict

SCHEMA_VERSION = 1


def encode_float(value: float) -> float | str:
    # Strict JSON has no inf/nan.
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return value


def decode_float(value: Any) -> float:
    return float(value)


@dataclass(frozen=True)
class FitReport:
    schema_version: int
    generated_at: str
    observations: list[Observation]
    settings: SearchSettings
    verdict: Verdict
    results: list[FitResult] = field(default_factory=list)
    source: str = ""

    @classmethod
    def from_ranking(
        cls,
        ranking: Ranking,
        observations: list[Observation],
        settings: SearchSettings,
        generated_at: str,
        source: str = "",
    ) -> FitReport:
        return cls(
            schema_version=SCHEMA_VERSION,
            generated_at=generated_at,
            observations=list(observations),
            settings=settings,
            verdict=ranking.verdict,
            results=list(ranking.results),
            source=source,
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["observations"] = [
            {"size": encode_float(o.size), "runtime": encode_float(o.runtime)} for o in self.observations
        ]
        data["settings"]["tolerance"] = encode_float(self.settings.tolerance)
        data["verdict"]["error"] = encode_float(self.verdict.error)
        data["results"] = [
            {"label": r.label, "constant": encode_float(r.constant), "error": encode_float(r.error)}
            for r in self.results
        ]
        if not data.get("source"):
            data.pop("source", None)
        return data
