from __future__ import annotations

from pathlib import Path

from growthfit.config.loader import load_config
from growthfit.config.schema import GrowthFitConfig
from growthfit.fit.models import SearchSettings


def test_defaults_without_config(tmp_path: Path) -> None:
    cfg = load_config(tmp_path)
    assert cfg == GrowthFitConfig()
    assert cfg.search_settings() == SearchSettings()


def test_load_multiple_configs_merges(tmp_path: Path) -> None:
    cfg1 = tmp_path / "a.yml"
    cfg2 = tmp_path / "b.yml"
    cfg1.write_text("partitions: 16\nnarrowing: legacy\ncandidates: ['O(n)', 'O(1)']\n", encoding="utf-8")
    cfg2.write_text("partitions: 64\nmeasure_sizes: [10, 20]\ndiagnostics: off\n", encoding="utf-8")

    cfg = load_config(tmp_path, [cfg1, cfg2])

    assert cfg.partitions == 64
    assert cfg.narrowing == "legacy"
    assert cfg.candidates == ["O(n)", "O(1)"]
    assert cfg.measure_sizes == [10, 20]
    assert cfg.diagnostics is False


def test_invalid_values_keep_defaults(tmp_path: Path) -> None:
    path = tmp_path / ".growthfit.yml"
    path.write_text(
        "partitions: 2\ntolerance: lots\nmax_rounds: 0\nnarrowing: sideways\ncandidates: ['O(n!)']\n",
        encoding="utf-8",
    )
    cfg = load_config(tmp_path)
    assert cfg == GrowthFitConfig()


def test_non_mapping_config_is_skipped(tmp_path: Path) -> None:
    path = tmp_path / "list.yml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    assert load_config(tmp_path, [path, tmp_path / "missing.yml"]) == GrowthFitConfig()
