"""Reader for the plain-text dataset format.

The input is a whitespace separated token stream: the number of observations
``n`` followed by ``n`` pairs of ``size runtime``. Sizes are not checked for
positivity; a size of 0 or 1 is passed through to the fit untouched.
"""

from __future__ import annotations

import math
import sys
from pathlib import Path
from typing import TextIO

from growthfit.fit.models import Observation


class DatasetError(ValueError):
    pass


def _parse_number(token: str, what: str) -> float:
    try:
        value = float(int(token))
    except ValueError:
        try:
            value = float(token)
        except ValueError:
            raise DatasetError(f"{what} is not numeric: {token!r}") from None
    except OverflowError:
        raise DatasetError(f"{what} is too large: {token[:20]}...") from None
    if not math.isfinite(value):
        raise DatasetError(f"{what} is not a finite number: {token!r}")
    return value


def _parse_count(token: str) -> int:
    try:
        count = int(token)
    except ValueError:
        raise DatasetError(f"observation count is not an integer: {token!r}") from None
    if count < 0:
        raise DatasetError(f"observation count must not be negative: {count}")
    return count


def parse_dataset(text: str) -> list[Observation]:
    tokens = text.split()
    if not tokens:
        raise DatasetError("input is empty")
    count = _parse_count(tokens[0])
    values = tokens[1:]
    if len(values) < 2 * count:
        raise DatasetError(f"expected {2 * count} values after the count, got {len(values)}")
    if len(values) > 2 * count:
        raise DatasetError(f"expected {count} pairs, got {len(values) - 2 * count} extra values")

    out: list[Observation] = []
    for idx in range(count):
        size = _parse_number(values[2 * idx], f"size #{idx + 1}")
        runtime = _parse_number(values[2 * idx + 1], f"runtime #{idx + 1}")
        out.append(Observation(size=size, runtime=runtime))
    return out


def read_dataset(path: Path) -> list[Observation]:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DatasetError(f"{path}: not UTF-8 text ({exc.reason} at byte {exc.start})") from exc
    except OSError as exc:
        raise DatasetError(f"{path}: failed to read ({exc})") from exc
    return parse_dataset(text)


def read_stream(stream: TextIO | None = None) -> list[Observation]:
    try:
        text = (stream or sys.stdin).read()
    except UnicodeDecodeError as exc:
        raise DatasetError(f"input is not UTF-8 text ({exc.reason} at byte {exc.start})") from exc
    return parse_dataset(text)


def format_dataset(dataset: list[Observation]) -> str:
    def fmt(value: float) -> str:
        return str(int(value)) if float(value).is_integer() else repr(value)

    lines = [str(len(dataset))]
    lines.extend(f"{fmt(obs.size)} {fmt(obs.runtime)}" for obs in dataset)
    return "\n".join(lines) + "\n"
