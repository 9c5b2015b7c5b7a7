"""
Тесты для Distance Aggregator

Проверяемые инварианты:
1. total_distance == sum(per_observation_distance) для всех метрик
2. Порядок per_observation совпадает с порядком столбцов
3. 1-D rankings трактуются как одно наблюдение
4. DimensionMismatch при несовпадении n_items
"""

import numpy as np
import pytest

from src.core.domain import DimensionMismatch, Metric, UnsupportedMetric
from src.distances import distance, per_observation_distance, total_distance

ALL_METRICS = [m.value for m in Metric]


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def sample():
    """Матрица (n_items=5, n_obs=6), столбцы — перестановки 1..5."""
    rng = np.random.default_rng(2024)
    columns = [rng.permutation(5) + 1 for _ in range(6)]
    return np.column_stack(columns).astype(float)


@pytest.fixture
def rho():
    return np.array([1.0, 2.0, 3.0, 4.0, 5.0])


# =============================================================================
# ТЕСТЫ
# =============================================================================


class TestPerObservationDistance:
    """per_observation_distance: вектор расстояний по столбцам."""

    @pytest.mark.parametrize("metric", ALL_METRICS)
    def test_matches_pairwise_distance(self, sample, rho, metric):
        result = per_observation_distance(sample, rho, metric)
        expected = [distance(sample[:, j], rho, metric) for j in range(sample.shape[1])]
        assert result.shape == (sample.shape[1],)
        np.testing.assert_array_equal(result, expected)

    def test_column_order_preserved(self, rho):
        rankings = np.column_stack([rho, rho[::-1], rho])
        result = per_observation_distance(rankings, rho, "footrule")
        np.testing.assert_array_equal(result, [0.0, 12.0, 0.0])

    def test_single_vector_is_one_observation(self, rho):
        result = per_observation_distance([5, 4, 3, 2, 1], rho, "kendall")
        np.testing.assert_array_equal(result, [10.0])

    def test_dimension_mismatch(self, sample):
        with pytest.raises(DimensionMismatch, match="different number of elements"):
            per_observation_distance(sample, [1, 2, 3, 4], "footrule")

    def test_unknown_metric(self, sample, rho):
        with pytest.raises(UnsupportedMetric):
            per_observation_distance(sample, rho, "euclid")


class TestTotalDistance:
    """total_distance: сумма по наблюдениям."""

    @pytest.mark.parametrize("metric", ALL_METRICS)
    def test_equals_sum_of_per_observation(self, sample, rho, metric):
        total = total_distance(sample, rho, metric)
        per_obs = per_observation_distance(sample, rho, metric)
        assert total == pytest.approx(per_obs.sum())

    def test_zero_when_all_equal_reference(self, rho):
        rankings = np.column_stack([rho] * 4)
        for metric in ALL_METRICS:
            assert total_distance(rankings, rho, metric) == 0.0

    def test_known_value(self):
        rankings = [[1, 2], [2, 1]]
        assert total_distance(rankings, [1, 2], "footrule") == 2.0

    def test_dimension_mismatch(self, sample):
        with pytest.raises(DimensionMismatch):
            total_distance(sample, [1, 2, 3, 4, 5, 6], "kendall")

    def test_rankings_not_mutated(self, sample, rho):
        before = sample.copy()
        total_distance(sample, rho, "cayley")
        np.testing.assert_array_equal(sample, before)
