from __future__ import annotations

import math

from .models import FitReport


def _fmt(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        return str(value)
    return f"{value:.6g}"


def to_markdown(report: FitReport) -> str:
    lines: list[str] = []
    lines.append("# growthfit report")
    lines.append("")
    lines.append(f"- Generated: `{report.generated_at}`")
    if report.source:
        lines.append(f"- Source: `{report.source}`")
    lines.append(f"- Observations: `{len(report.observations)}`")
    lines.append(
        f"- Search: `partitions={report.settings.partitions}, tolerance={report.settings.tolerance:g}, "
        f"max_rounds={report.settings.max_rounds}, narrowing={report.settings.narrowing}`"
    )
    lines.append(f"- Schema: `v{report.schema_version}`")
    lines.append("")
    lines.append(f"**Best fit: `{report.verdict.label}`** (error {_fmt(report.verdict.error)})")
    lines.append("")

    if report.results:
        lines.append("## Candidates")
        lines.append("")
        lines.append("| | Growth | C | Error |")
        lines.append("|---|---|---:|---:|")
        for r in report.results:
            mark = "✅" if r.label == report.verdict.label else ""
            lines.append(f"| {mark} | `{r.label}` | {_fmt(r.constant)} | {_fmt(r.error)} |")
        lines.append("")

    if report.observations:
        lines.append("<details><summary>Observations</summary>")
        lines.append("")
        lines.append("| Size | Runtime |")
        lines.append("|---:|---:|")
        for o in report.observations:
            lines.append(f"| {_fmt(o.size)} | {_fmt(o.runtime)} |")
        lines.append("")
        lines.append("</details>")
        lines.append("")

    return "\n".join(lines)
