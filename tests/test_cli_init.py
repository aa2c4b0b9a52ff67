from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

SRC = Path(__file__).resolve().parents[1] / "src"


def _run(args: list[str]) -> subprocess.CompletedProcess[str]:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in [str(SRC), env.get("PYTHONPATH", "")] if p)
    return subprocess.run(
        [sys.executable, "-m", "growthfit", *args],
        capture_output=True,
        text=True,
        check=False,
        env=env,
    )


def test_cli_init_writes_config(tmp_path: Path) -> None:
    result = _run(["init", str(tmp_path), "--preset", "minimal"])
    assert result.returncode == 0
    cfg = tmp_path / ".growthfit.yml"
    assert cfg.exists()
    assert "narrowing:" in cfg.read_text(encoding="utf-8")


def test_cli_init_refuses_to_overwrite(tmp_path: Path) -> None:
    (tmp_path / ".growthfit.yml").write_text("partitions: 8\n", encoding="utf-8")
    result = _run(["init", str(tmp_path)])
    assert result.returncode == 1
    assert (tmp_path / ".growthfit.yml").read_text(encoding="utf-8") == "partitions: 8\n"
    assert _run(["init", str(tmp_path), "--force"]).returncode == 0


def test_cli_config_validate_and_show(tmp_path: Path) -> None:
    assert _run(["init", str(tmp_path)]).returncode == 0
    assert _run(["config", "validate", str(tmp_path)]).returncode == 0

    shown = _run(["config", "show", str(tmp_path)])
    assert shown.returncode == 0
    assert "partitions: 32" in shown.stdout

    bad = tmp_path / "bad.yml"
    bad.write_text("partitions: two\nfoo: 1\n", encoding="utf-8")
    result = _run(["config", "validate", str(tmp_path), "--config", "bad.yml"])
    assert result.returncode == 1
    assert "Unknown key: foo" in result.stderr
