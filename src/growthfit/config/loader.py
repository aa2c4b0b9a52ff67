from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import yaml

from growthfit.fit.growth import growth_by_label
from growthfit.fit.models import NARROWING_MODES

from .schema import GrowthFitConfig

log = logging.getLogger(__name__)

CONFIG_FILENAME = ".growthfit.yml"

_TRUE_WORDS = {"true", "yes", "1", "on"}
_FALSE_WORDS = {"false", "no", "0", "off"}


def _read_mapping(path: Path) -> dict[str, Any] | None:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        log.warning("Failed to load %s (%s). Skipping.", path, e)
        return None
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        log.warning("Config %s is not a mapping; skipping.", path)
        return None
    return raw


def _number(raw: dict[str, Any], key: str, cast: Callable[[Any], Any], minimum: float) -> Any:
    """``cast(raw[key])`` when it converts and is at least ``minimum``, else None."""
    value = raw.get(key)
    if value is None or isinstance(value, bool):
        return None
    try:
        out = cast(value)
    except (TypeError, ValueError):
        return None
    return out if out >= minimum else None


def _flag(raw: dict[str, Any], key: str, default: bool) -> bool:
    value = raw.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    return default


def _candidates(raw: dict[str, Any]) -> list[str] | None:
    value = raw.get("candidates")
    if not isinstance(value, list):
        return None
    out: list[str] = []
    for item in value:
        try:
            out.append(growth_by_label(str(item)).label)
        except KeyError:
            log.warning("Unknown growth function %r in candidates; ignoring.", item)
    return out or None


def _sizes(raw: dict[str, Any]) -> list[int] | None:
    value = raw.get("measure_sizes")
    if not isinstance(value, list):
        return None
    out: list[int] = []
    for item in value:
        size = _number({"size": item}, "size", int, 1)
        if size is not None:
            out.append(size)
    return out or None


def _narrowing(raw: dict[str, Any]) -> str | None:
    value = raw.get("narrowing")
    if isinstance(value, str) and value.strip().lower() in NARROWING_MODES:
        return value.strip().lower()
    return None


def _merge_config(base: GrowthFitConfig, raw: dict[str, Any]) -> GrowthFitConfig:
    def pick(value: Any, fallback: Any) -> Any:
        return fallback if value is None else value

    return GrowthFitConfig(
        partitions=pick(_number(raw, "partitions", int, 3), base.partitions),
        tolerance=pick(_number(raw, "tolerance", float, 0.0), base.tolerance),
        max_rounds=pick(_number(raw, "max_rounds", int, 1), base.max_rounds),
        narrowing=pick(_narrowing(raw), base.narrowing),
        candidates=pick(_candidates(raw), base.candidates),
        parallel_workers=pick(_number(raw, "parallel_workers", int, 0), base.parallel_workers),
        diagnostics=_flag(raw, "diagnostics", base.diagnostics),
        measure_sizes=pick(_sizes(raw), base.measure_sizes),
        measure_trials=pick(_number(raw, "measure_trials", int, 1), base.measure_trials),
        measure_warmups=pick(_number(raw, "measure_warmups", int, 0), base.measure_warmups),
    )


def resolve_config_paths(root: Path, config_paths: Iterable[Path] | None) -> list[Path]:
    if config_paths is None:
        return [root / CONFIG_FILENAME]
    return [path if path.is_absolute() else root / path for path in config_paths]


def load_config(root: Path, config_paths: Iterable[Path] | None = None) -> GrowthFitConfig:
    """Merge config files in order; later files win and bad values keep the earlier ones.

    Without explicit paths only ``root/.growthfit.yml`` is read, and its absence
    is silent.
    """
    explicit = config_paths is not None
    cfg = GrowthFitConfig()
    for path in resolve_config_paths(root, config_paths):
        if not path.exists():
            if explicit:
                log.warning("Config %s not found; skipping.", path)
            continue
        raw = _read_mapping(path)
        if raw is not None:
            cfg = _merge_config(cfg, raw)
    return cfg
