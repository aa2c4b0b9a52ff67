from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

from growthfit.fit.growth import GROWTH_LABELS

SRC = Path(__file__).resolve().parents[1] / "src"


def _run(args: list[str], cwd: Path, stdin: str | None = None) -> subprocess.CompletedProcess[str]:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in [str(SRC), env.get("PYTHONPATH", "")] if p)
    return subprocess.run(
        [sys.executable, "-m", "growthfit", *args],
        cwd=cwd,
        input=stdin,
        capture_output=True,
        text=True,
        check=False,
        env=env,
    )


def test_fit_file(tmp_path: Path) -> None:
    data = tmp_path / "data.txt"
    data.write_text("3\n10 100\n100 10000\n1000 1000000\n", encoding="utf-8")

    p = _run(["fit", str(data), "--json", "out/fit.json", "--md", "out/fit.md"], tmp_path)

    assert p.returncode == 0, p.stderr
    assert p.stdout.strip() == "O(n^2)"
    assert "------O(1)-------" in p.stderr
    assert "------O(2^n)-------" in p.stderr
    report = json.loads((tmp_path / "out" / "fit.json").read_text(encoding="utf-8"))
    assert report["verdict"]["label"] == "O(n^2)"
    assert [r["label"] for r in report["results"]] == list(GROWTH_LABELS)
    assert "Best fit" in (tmp_path / "out" / "fit.md").read_text(encoding="utf-8")


def test_fit_stdin_quiet(tmp_path: Path) -> None:
    p = _run(["fit", "--quiet"], tmp_path, stdin="4\n2 2\n4 4\n8 8\n16 16\n")
    assert p.returncode == 0, p.stderr
    assert p.stdout.strip() == "O(n)"
    assert "-------" not in p.stderr


def test_fit_single_point(tmp_path: Path) -> None:
    p = _run(["fit", "-", "--workers", "4"], tmp_path, stdin="1\n5 50\n")
    assert p.returncode == 0, p.stderr
    assert p.stdout.strip() == "O(1)"


def test_malformed_input_exit_code(tmp_path: Path) -> None:
    p = _run(["fit"], tmp_path, stdin="3\n1 2\n")
    assert p.returncode == 2
    assert "Malformed input" in p.stderr
    assert p.stdout == ""


def test_config_candidates_are_used(tmp_path: Path) -> None:
    (tmp_path / ".growthfit.yml").write_text("candidates: ['O(n)', 'O(n^3)']\ndiagnostics: false\n", encoding="utf-8")
    p = _run(["fit"], tmp_path, stdin="3\n10 100\n100 10000\n1000 1000000\n")
    assert p.returncode == 0, p.stderr
    assert p.stdout.strip() in {"O(n)", "O(n^3)"}
    assert "-------" not in p.stderr


def test_measure_callable(tmp_path: Path) -> None:
    (tmp_path / "workload.py").write_text(
        "def work(n):\n    return sum(i * i for i in range(n))\n", encoding="utf-8"
    )
    p = _run(
        ["measure", "workload:work", "--sizes", "200,400,800", "--trials", "1", "--warmups", "0", "-q",
         "--save-data", "timings.txt"],
        tmp_path,
    )
    assert p.returncode == 0, p.stderr
    assert p.stdout.strip() in GROWTH_LABELS
    assert (tmp_path / "timings.txt").read_text(encoding="utf-8").splitlines()[0] == "3"


def test_measure_bad_target(tmp_path: Path) -> None:
    p = _run(["measure", "no_such_module_for_growthfit:f"], tmp_path)
    assert p.returncode == 1
