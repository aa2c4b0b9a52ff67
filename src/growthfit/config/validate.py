from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from growthfit.fit.growth import growth_by_label
from growthfit.fit.models import NARROWING_MODES

# Integer keys and the smallest value each accepts.
INT_MINIMUMS = {
    "partitions": 3,
    "max_rounds": 1,
    "parallel_workers": 0,
    "measure_trials": 1,
    "measure_warmups": 0,
}

KNOWN_KEYS = {*INT_MINIMUMS, "tolerance", "narrowing", "candidates", "diagnostics", "measure_sizes"}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _candidate_errors(value: Any) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        return ["candidates must be a list of strings"]
    if not value:
        return ["candidates must not be empty"]
    unknown: list[str] = []
    for label in value:
        try:
            growth_by_label(label)
        except KeyError:
            unknown.append(label)
    if unknown:
        return [f"candidates contains unknown growth functions: {', '.join(unknown)}"]
    return []


def validate_raw_config(raw: dict[str, Any]) -> list[str]:
    errors = [f"Unknown key: {key}" for key in raw if key not in KNOWN_KEYS]

    for key, minimum in INT_MINIMUMS.items():
        value = raw.get(key)
        if value is None:
            continue
        if not _is_int(value):
            errors.append(f"{key} must be an integer")
        elif value < minimum:
            errors.append(f"{key} must be at least {minimum}")

    tolerance = raw.get("tolerance")
    if tolerance is not None:
        if isinstance(tolerance, bool) or not isinstance(tolerance, (int, float)):
            errors.append("tolerance must be a number")
        elif tolerance < 0:
            errors.append("tolerance must not be negative")

    narrowing = raw.get("narrowing")
    if narrowing is not None:
        if not isinstance(narrowing, str):
            errors.append("narrowing must be a string")
        elif narrowing.lower() not in NARROWING_MODES:
            errors.append(f"narrowing must be one of: {', '.join(NARROWING_MODES)}")

    if raw.get("diagnostics") is not None and not isinstance(raw.get("diagnostics"), bool):
        errors.append("diagnostics must be a boolean")

    if "measure_sizes" in raw:
        sizes = raw.get("measure_sizes")
        if not isinstance(sizes, list) or not all(_is_int(v) and v > 0 for v in sizes):
            errors.append("measure_sizes must be a list of positive integers")

    if "candidates" in raw:
        errors.extend(_candidate_errors(raw.get("candidates")))
    return errors


def _file_errors(path: Path) -> list[str]:
    if not path.exists():
        return ["file not found"]
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        return [f"failed to read ({exc})"]
    if raw is None:
        return []
    if not isinstance(raw, dict):
        return ["config must be a mapping"]
    return validate_raw_config(raw)


def validate_config_paths(paths: Iterable[Path]) -> list[str]:
    return [f"{path}: {err}" for path in paths for err in _file_errors(path)]
