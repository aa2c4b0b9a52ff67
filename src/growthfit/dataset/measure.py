from __future__ import annotations

import contextlib
import importlib
import inspect
import io
import logging
import statistics
import time
from collections.abc import Callable, Iterable
from typing import Any

from growthfit.fit.models import Observation

log = logging.getLogger(__name__)

ArgBuilder = Callable[[Callable[..., Any], int], tuple[list[Any], dict[str, Any]]]


class TargetError(RuntimeError):
    pass


def load_target(ref: str) -> Callable[..., Any]:
    module_name, sep, qualname = ref.partition(":")
    if not sep or not module_name or not qualname:
        raise TargetError(f"target must look like 'package.module:function', got {ref!r}")
    try:
        obj: Any = importlib.import_module(module_name)
    except Exception as exc:
        raise TargetError(f"failed to import {module_name}: {exc}") from exc
    for part in qualname.split("."):
        if not hasattr(obj, part):
            raise TargetError(f"{qualname} not found in {module_name}")
        obj = getattr(obj, part)
    if not callable(obj):
        raise TargetError(f"{ref} is not callable")
    return obj


def _make_arg(name: str, annotation: Any, size: int) -> Any:
    lowered = name.lower()
    if lowered in {"n", "size", "count", "limit", "length"}:
        return size
    if lowered in {"mapping", "dict", "map", "lookup"}:
        return {i: i for i in range(size)}
    if annotation in {int, float}:
        return size
    return list(range(size))


def build_args(func: Callable[..., Any], size: int) -> tuple[list[Any], dict[str, Any]]:
    sig = inspect.signature(func)
    args: list[Any] = []
    kwargs: dict[str, Any] = {}
    required = [
        p
        for p in sig.parameters.values()
        if p.default is inspect.Parameter.empty
        and p.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]
    if len(required) > 3:
        raise TargetError(f"{getattr(func, '__name__', func)} has too many required parameters")
    for param in required:
        value = _make_arg(param.name, param.annotation, size)
        if param.kind == inspect.Parameter.KEYWORD_ONLY:
            kwargs[param.name] = value
        else:
            args.append(value)
    return args, kwargs


def measure_callable(
    func: Callable[..., Any],
    sizes: Iterable[int],
    trials: int = 3,
    warmups: int = 1,
    make_args: ArgBuilder | None = None,
) -> list[Observation]:
    """Time ``func`` at each size and return the median runtimes in microseconds.

    Output the target writes to stdout/stderr is discarded. Sizes are measured
    in ascending order so the resulting dataset is ordered by size.
    """
    builder = make_args or build_args
    dataset: list[Observation] = []
    for size in sorted(int(s) for s in sizes):
        args, kwargs = builder(func, size)
        durations: list[float] = []
        with contextlib.redirect_stdout(io.StringIO()), contextlib.redirect_stderr(io.StringIO()):
            for _ in range(max(warmups, 0)):
                func(*args, **kwargs)
            for _ in range(max(trials, 1)):
                start = time.perf_counter()
                func(*args, **kwargs)
                durations.append(time.perf_counter() - start)
        median_us = statistics.median(durations) * 1e6
        log.debug("size=%d median=%.3fus over %d trials", size, median_us, len(durations))
        dataset.append(Observation(size=float(size), runtime=median_us))
    return dataset
