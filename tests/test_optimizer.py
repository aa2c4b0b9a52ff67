from __future__ import annotations

import logging

import pytest

from growthfit.fit.error import evaluate
from growthfit.fit.growth import growth_by_label
from growthfit.fit.models import Observation, SearchSettings
from growthfit.fit.optimizer import initial_bounds, narrow, optimal_constant

QUADRATIC_DATA = [Observation(10, 100), Observation(100, 10_000), Observation(1000, 1_000_000)]


def test_initial_bounds_use_last_runtime() -> None:
    assert initial_bounds([Observation(1, 7), Observation(2, 2.5)]) == (0.0, 6.0)
    assert initial_bounds([]) == (0.0, 0.0)


def test_symmetric_narrowing() -> None:
    assert narrow(0.0, 32.0, 10.0, 32, "symmetric") == (9.0, 11.0)


def test_legacy_narrowing_uses_moved_lower_bound() -> None:
    lower, upper = narrow(0.0, 32.0, 10.0, 32, "legacy")
    assert lower == 9.0
    assert upper == 10.0 + (32.0 - 9.0) / 32


def test_recovers_quadratic_constant() -> None:
    growth = growth_by_label("O(n^2)")
    c = optimal_constant(QUADRATIC_DATA, growth)
    assert c == pytest.approx(1.0, rel=0.01)
    assert evaluate(QUADRATIC_DATA, growth, c) < 1e-4


def test_grid_hit_returns_exact_constant() -> None:
    data = [Observation(2, 2), Observation(4, 4), Observation(8, 8), Observation(16, 16)]
    assert optimal_constant(data, growth_by_label("O(n)")) == 1.0


def test_is_deterministic() -> None:
    growth = growth_by_label("O(n log n)")
    assert optimal_constant(QUADRATIC_DATA, growth) == optimal_constant(QUADRATIC_DATA, growth)


@pytest.mark.parametrize("dataset", [[], [Observation(5, 0)], [Observation(1, 0), Observation(2, 0)]])
def test_degenerate_datasets_return_zero(dataset: list[Observation]) -> None:
    assert optimal_constant(dataset, growth_by_label("O(n)")) == 0.0


def test_single_point_terminates() -> None:
    c = optimal_constant([Observation(5, 50)], growth_by_label("O(n)"))
    assert c == pytest.approx(10.0, rel=0.01)


def test_round_cap_returns_best_so_far(caplog: pytest.LogCaptureFixture) -> None:
    settings = SearchSettings(max_rounds=1)
    with caplog.at_level(logging.WARNING, logger="growthfit.fit.optimizer"):
        c = optimal_constant(QUADRATIC_DATA, growth_by_label("O(n^2)"), settings)
    assert c == 62_500.0
    assert "did not converge" in caplog.text


def test_infinite_errors_stop_the_search() -> None:
    growth = growth_by_label("O(2^n)")
    c = optimal_constant(QUADRATIC_DATA, growth)
    assert c > 0


def test_legacy_mode_still_finds_exact_grid_point() -> None:
    data = [Observation(2, 2), Observation(4, 4), Observation(8, 8), Observation(16, 16)]
    settings = SearchSettings(narrowing="legacy")
    assert optimal_constant(data, growth_by_label("O(n)"), settings) == 1.0


def test_settings_are_validated() -> None:
    with pytest.raises(ValueError):
        SearchSettings(partitions=2)
    with pytest.raises(ValueError):
        SearchSettings(max_rounds=0)
    with pytest.raises(ValueError):
        SearchSettings(narrowing="sideways")


def test_nan_errors_keep_the_first_grid_point() -> None:
    # log(-1) is nan for every constant, so nothing ever beats the seed.
    c = optimal_constant([Observation(-1, 1)], growth_by_label("O(log n)"))
    assert c == 2.0 / 32
