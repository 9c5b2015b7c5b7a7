"""
Partition Function — log нормирующей константы Mallows модели

    Z(alpha) = sum_{pi in S_n} exp(-alpha / n * d(pi, rho))

Стратегии (в порядке приоритета):
1. Closed form для kendall, cayley, hamming (точно для любого n)
2. Cardinalities для footrule / spearman:
       log Z = logsumexp(log N(d) - alpha * d / n), d ∈ achievable_distances
3. logz_estimate: коэффициенты степенного ряда log Z(alpha) = sum_i c_i alpha^i
   (полином, подогнанный вызывающим к сетке importance-sampling оценок)
4. Иначе → ValueError: нет доступной стратегии

Closed forms (q = exp(-alpha / n)):
    kendall: log Z = sum_{i=1..n} log((1 - q^i) / (1 - q))     (→ log n! при alpha → 0)
    cayley:  log Z = sum_{i=1..n-1} log(1 + i q)
    hamming: log Z = log sum_{k=0..n} n!/k! (1/q - 1)^k e^{-alpha}
"""

import math
from typing import Optional, Protocol, Sequence

import numpy as np

from src.core.domain.errors import DimensionMismatch
from src.core.domain.metric import Metric
from src.core.math.numerical_safeguards import (
    EPS_ALPHA_LIMIT,
    evaluate_power_series,
    log_sum_exp,
    validate_non_negative,
    validate_positive_int,
)
from src.partition.enumerator import achievable_distances

FloatVector = Sequence[float] | np.ndarray


class PartitionFunctionEvaluator(Protocol):
    """Контракт evaluator'а log Z, который вызывает alpha sampler."""

    def __call__(
        self,
        n_items: int,
        alpha: float,
        cardinalities: Optional[FloatVector],
        logz_estimate: Optional[FloatVector],
        metric: Metric | str,
    ) -> float: ...


# =============================================================================
# CLOSED FORMS
# =============================================================================


def logz_kendall(alpha: float, n_items: int) -> float:
    """log Z для Kendall distance (произведение q-чисел)."""
    a = alpha / n_items
    if abs(a) < EPS_ALPHA_LIMIT:
        return math.lgamma(n_items + 1)
    i = np.arange(1, n_items + 1)
    # log(1 - q^i) через expm1 для малых a
    return float(np.sum(np.log(-np.expm1(-i * a)) - math.log(-math.expm1(-a))))


def logz_cayley(alpha: float, n_items: int) -> float:
    """log Z для Cayley distance (Stirling числа первого рода)."""
    i = np.arange(1, n_items)
    return float(np.sum(np.log1p(i * math.exp(-alpha / n_items))))


def logz_hamming(alpha: float, n_items: int) -> float:
    """log Z для Hamming distance (через число частичных беспорядков)."""
    a = alpha / n_items
    log_n_factorial = math.lgamma(n_items + 1)
    if abs(a) < EPS_ALPHA_LIMIT:
        return log_n_factorial
    k = np.arange(1, n_items + 1)
    log_base = math.log(math.expm1(a))
    log_terms = [log_n_factorial]
    log_terms.extend(log_n_factorial - np.array([math.lgamma(x + 1) for x in k]) + k * log_base)
    return log_sum_exp(log_terms) - alpha


# =============================================================================
# ENTRY POINT
# =============================================================================


def logz_from_cardinalities(
    n_items: int,
    alpha: float,
    cardinalities: FloatVector,
    metric: Metric | str,
) -> float:
    """
    log Z по таблице cardinalities на сетке achievable_distances.

    Raises:
        DimensionMismatch: если длина cardinalities не совпадает с сеткой
        ValueError: если cardinalities содержат отрицательные значения
    """
    distances = achievable_distances(n_items, metric)
    counts = np.asarray(cardinalities, dtype=float)
    if counts.ndim != 1 or counts.size != distances.size:
        raise DimensionMismatch(
            f"cardinalities must have {distances.size} entries for n={n_items}, "
            f"got shape {counts.shape}"
        )
    if np.any(counts < 0):
        raise ValueError("cardinalities must be non-negative")
    with np.errstate(divide="ignore"):
        log_counts = np.log(counts)
    return log_sum_exp(log_counts - alpha * distances / n_items)


def log_partition(
    n_items: int,
    alpha: float,
    cardinalities: Optional[FloatVector] = None,
    logz_estimate: Optional[FloatVector] = None,
    metric: Metric | str = Metric.FOOTRULE,
) -> float:
    """
    log Z(alpha) для заданной метрики и числа элементов.

    Args:
        n_items: Число элементов (>= 1)
        alpha: Scale parameter
        cardinalities: N(d) на сетке achievable_distances (footrule/spearman)
        logz_estimate: Коэффициенты степенного ряда log Z(alpha)
        metric: Метрика

    Returns:
        log нормирующей константы

    Raises:
        UnsupportedMetric: неизвестная метрика
        ValueError: ни одна стратегия не применима

    Examples:
        >>> round(log_partition(3, 0.0, metric="kendall"), 12) == round(math.log(6), 12)
        True
    """
    validate_positive_int(n_items, "n_items")
    validate_non_negative(alpha, "alpha")
    resolved = Metric.parse(metric)

    match resolved:
        case Metric.KENDALL:
            return logz_kendall(alpha, n_items)
        case Metric.CAYLEY:
            return logz_cayley(alpha, n_items)
        case Metric.HAMMING:
            return logz_hamming(alpha, n_items)

    if cardinalities is not None:
        return logz_from_cardinalities(n_items, alpha, cardinalities, resolved)
    if logz_estimate is not None:
        return evaluate_power_series(logz_estimate, alpha)
    raise ValueError(
        f"Partition function not available for metric {resolved.value!r} with n={n_items}: "
        "supply cardinalities or logz_estimate"
    )
