from __future__ import annotations

import json
from pathlib import Path

from growthfit.fit.models import FitResult, Observation, SearchSettings, Verdict

from .models import SCHEMA_VERSION, FitReport, decode_float


def write_json(report: FitReport, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report.to_dict(), indent=2, allow_nan=False), encoding="utf-8")


def read_json(path: Path) -> FitReport:
    raw = json.loads(path.read_text(encoding="utf-8"))
    observations = [
        Observation(size=decode_float(o.get("size", 0.0)), runtime=decode_float(o.get("runtime", 0.0)))
        for o in raw.get("observations", [])
        if isinstance(o, dict)
    ]
    settings_raw = raw.get("settings", {})
    if not isinstance(settings_raw, dict):
        settings_raw = {}
    defaults = SearchSettings()
    settings = SearchSettings(
        partitions=int(settings_raw.get("partitions", defaults.partitions)),
        tolerance=decode_float(settings_raw.get("tolerance", defaults.tolerance)),
        max_rounds=int(settings_raw.get("max_rounds", defaults.max_rounds)),
        narrowing=str(settings_raw.get("narrowing", defaults.narrowing)),
    )
    verdict_raw = raw.get("verdict", {})
    verdict = Verdict(
        label=str(verdict_raw.get("label", "")),
        error=decode_float(verdict_raw.get("error", 0.0)),
    )
    results = [
        FitResult(
            label=str(r.get("label", "")),
            constant=decode_float(r.get("constant", 0.0)),
            error=decode_float(r.get("error", 0.0)),
        )
        for r in raw.get("results", [])
        if isinstance(r, dict)
    ]
    return FitReport(
        schema_version=int(raw.get("schema_version", SCHEMA_VERSION)),
        generated_at=str(raw.get("generated_at", "")),
        observations=observations,
        settings=settings,
        verdict=verdict,
        results=results,
        source=str(raw.get("source", "")),
    )
