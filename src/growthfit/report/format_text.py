from __future__ import annotations

import sys
from typing import TextIO

from growthfit.fit.models import FitResult, Verdict


def format_diagnostic(result: FitResult) -> str:
    return f"------{result.label}-------\nC={result.constant:f}\nError={result.error:f}"


def format_verdict(verdict: Verdict) -> str:
    return verdict.label


class DiagnosticWriter:
    """Writes one block per fitted candidate as results arrive."""

    def __init__(self, stream: TextIO | None = None, enabled: bool = True) -> None:
        self.stream = stream
        self.enabled = enabled

    def __call__(self, result: FitResult) -> None:
        if not self.enabled:
            return
        out = self.stream or sys.stderr
        out.write(format_diagnostic(result) + "\n")
        out.flush()
