"""
Тесты для Partition Function и Mallows log-likelihood

Проверяемые инварианты:
1. Closed forms (kendall, cayley, hamming) совпадают с полным перебором
2. log Z(0) == log n! для всех стратегий
3. Cardinalities стратегия для footrule совпадает с перебором
4. logz_estimate — степенной ряд по alpha
5. log Z убывает по alpha
6. loglik линейна по alpha: loglik(a) = -a/n * sum d
"""

import math

import numpy as np
import pytest

from src.core.domain import DimensionMismatch, UnsupportedMetric
from src.core.math import log_sum_exp
from src.partition import (
    achievable_distances,
    count_cardinalities,
    log_partition,
    logz_cayley,
    logz_hamming,
    logz_kendall,
    mallows_loglik,
)


# =============================================================================
# HELPERS
# =============================================================================


def brute_force_logz(n: int, alpha: float, metric: str) -> float:
    """log Z полным перебором через cardinalities на сетке 0..max."""
    counts = count_cardinalities(n, metric)
    d = np.arange(counts.size)
    with np.errstate(divide="ignore"):
        return log_sum_exp(np.log(counts) - alpha * d / n)


# =============================================================================
# ТЕСТЫ: Closed forms
# =============================================================================


class TestClosedForms:
    """Kendall, Cayley, Hamming."""

    @pytest.mark.parametrize("metric", ["kendall", "cayley", "hamming"])
    @pytest.mark.parametrize("n", [1, 2, 4, 6])
    @pytest.mark.parametrize("alpha", [0.3, 1.0, 4.5, 20.0])
    def test_matches_brute_force(self, metric, n, alpha):
        expected = brute_force_logz(n, alpha, metric)
        assert log_partition(n, alpha, metric=metric) == pytest.approx(expected, rel=1e-9, abs=1e-12)

    @pytest.mark.parametrize("func", [logz_kendall, logz_cayley, logz_hamming])
    def test_alpha_zero_is_log_factorial(self, func):
        assert func(0.0, 5) == pytest.approx(math.lgamma(6))

    @pytest.mark.parametrize("metric", ["kendall", "cayley", "hamming"])
    def test_decreasing_in_alpha(self, metric):
        values = [log_partition(8, a, metric=metric) for a in (0.1, 1.0, 5.0, 25.0)]
        assert all(a > b for a, b in zip(values, values[1:]))

    def test_closed_form_takes_precedence_over_estimate(self):
        """Для kendall logz_estimate игнорируется."""
        exact = log_partition(5, 2.0, metric="kendall")
        assert log_partition(5, 2.0, logz_estimate=[100.0], metric="kendall") == exact

    def test_large_alpha_is_finite(self):
        """Большие alpha не дают overflow / NaN."""
        for metric in ("kendall", "cayley", "hamming"):
            value = log_partition(20, 1e4, metric=metric)
            assert math.isfinite(value)
            assert value == pytest.approx(0.0, abs=1e-6)


# =============================================================================
# ТЕСТЫ: Cardinalities
# =============================================================================


class TestCardinalitiesStrategy:
    """Footrule / Spearman через cardinalities."""

    @pytest.mark.parametrize("alpha", [0.0, 0.5, 2.0, 10.0])
    def test_footrule_matches_brute_force(self, alpha):
        n = 5
        counts = count_cardinalities(n, "footrule")
        result = log_partition(n, alpha, cardinalities=counts, metric="footrule")
        assert result == pytest.approx(brute_force_logz(n, alpha, "footrule"))

    def test_alpha_zero_is_log_total_count(self):
        counts = count_cardinalities(4, "footrule")
        assert log_partition(4, 0.0, cardinalities=counts, metric="footrule") == pytest.approx(
            math.log(24)
        )

    def test_spearman_uses_achievable_grid(self):
        n = 4
        grid = achievable_distances(n, "spearman")
        counts = np.ones(grid.size)
        expected = log_sum_exp(-1.5 * grid / n)
        assert log_partition(n, 1.5, cardinalities=counts, metric="spearman") == pytest.approx(expected)

    def test_length_mismatch(self):
        with pytest.raises(DimensionMismatch, match="cardinalities must have 9 entries"):
            log_partition(4, 1.0, cardinalities=[1.0, 2.0], metric="footrule")

    def test_negative_cardinalities_rejected(self):
        counts = -np.ones(9)
        with pytest.raises(ValueError, match="non-negative"):
            log_partition(4, 1.0, cardinalities=counts, metric="footrule")

    def test_cardinalities_take_precedence_over_estimate(self):
        counts = count_cardinalities(3, "footrule")
        with_both = log_partition(3, 1.0, cardinalities=counts, logz_estimate=[42.0], metric="footrule")
        only_counts = log_partition(3, 1.0, cardinalities=counts, metric="footrule")
        assert with_both == only_counts


# =============================================================================
# ТЕСТЫ: logz_estimate
# =============================================================================


class TestEstimateStrategy:
    """Степенной ряд log Z(alpha)."""

    def test_power_series(self):
        assert log_partition(10, 2.0, logz_estimate=[1.0, 0.5, 0.25], metric="ulam") == pytest.approx(3.0)

    def test_constant_series(self):
        assert log_partition(10, 7.0, logz_estimate=[4.2], metric="footrule") == pytest.approx(4.2)

    def test_no_strategy_available(self):
        with pytest.raises(ValueError, match="Partition function not available"):
            log_partition(10, 1.0, metric="ulam")

    def test_ulam_cardinalities_unsupported(self):
        with pytest.raises(UnsupportedMetric):
            log_partition(4, 1.0, cardinalities=[1.0, 1.0, 1.0, 1.0], metric="ulam")


class TestPartitionValidation:
    """Валидация входов."""

    def test_negative_alpha(self):
        with pytest.raises(ValueError, match="non-negative"):
            log_partition(4, -1.0, metric="kendall")

    def test_bad_n_items(self):
        with pytest.raises(ValueError, match="n_items"):
            log_partition(0, 1.0, metric="kendall")

    def test_unknown_metric(self):
        with pytest.raises(UnsupportedMetric):
            log_partition(4, 1.0, metric="chebyshev")


# =============================================================================
# ТЕСТЫ: Log-likelihood
# =============================================================================


class TestMallowsLoglik:
    """Log-likelihood без нормирующей константы."""

    def test_known_value(self):
        rankings = [[4], [3], [2], [1]]
        assert mallows_loglik(2.0, [1, 2, 3, 4], 4, rankings, "footrule") == pytest.approx(-4.0)

    def test_zero_at_consensus(self):
        rho = [1, 2, 3]
        rankings = np.column_stack([rho, rho])
        assert mallows_loglik(3.0, rho, 3, rankings, "kendall") == 0.0

    def test_linear_in_alpha(self):
        rho = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
        rankings = np.column_stack([rho[::-1], [2, 1, 3, 5, 4]])
        a = mallows_loglik(1.0, rho, 5, rankings, "spearman")
        b = mallows_loglik(3.0, rho, 5, rankings, "spearman")
        diff = mallows_loglik(2.0, rho, 5, rankings, "spearman")
        assert b - a == pytest.approx(diff)

    def test_negative_delta_allowed(self):
        assert mallows_loglik(-1.0, [1, 2], 2, [[2], [1]], "footrule") == pytest.approx(1.0)

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionMismatch):
            mallows_loglik(1.0, [1, 2, 3], 3, [[1], [2]], "footrule")
