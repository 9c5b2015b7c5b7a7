"""
Distance Metric Library — расстояния между rank-векторами

Шесть метрик над rank-векторами одинаковой длины n:
- footrule: ||r1 - r2||_1
- spearman: ||r1 - r2||_2 ** 2 (квадрат L2 нормы, не сама норма)
- hamming: число позиций, где r1 и r2 различаются
- kendall: число дискордантных пар, полный перебор O(n²)
- cayley: минимальное число транспозиций (cycle-following)
- ulam: n - LIS(r1 ∘ r2^{-1}), только целочисленные ранги

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. d(r, r) == 0, d(r1, r2) == d(r2, r1)
2. Несовпадение длин → DimensionMismatch
3. Неизвестная метрика → UnsupportedMetric
4. Входы не мутируются
"""

import numpy as np

from src.core.domain.errors import UnsupportedMetric
from src.core.domain.metric import Metric
from src.core.domain.rankings import (
    RankVectorLike,
    as_rank_vector,
    check_same_length,
    to_zero_based_permutation,
)
from src.core.math.permutation_lis import perm0_distance


# =============================================================================
# МЕТРИКИ
# =============================================================================


def footrule_distance(r1: np.ndarray, r2: np.ndarray) -> float:
    """Footrule: сумма абсолютных разностей рангов."""
    return float(np.linalg.norm(r1 - r2, 1))


def spearman_distance(r1: np.ndarray, r2: np.ndarray) -> float:
    """Spearman: квадрат евклидовой нормы разности (без sqrt, точно на целых)."""
    diff = r1 - r2
    return float(np.dot(diff, diff))


def hamming_distance(r1: np.ndarray, r2: np.ndarray) -> float:
    """Hamming: число несовпадающих позиций."""
    return float(np.count_nonzero(r1 != r2))


def kendall_distance(r1: np.ndarray, r2: np.ndarray) -> float:
    """
    Kendall: число пар (i, j), упорядоченных по-разному в r1 и r2.

    Полный перебор пар, O(n²). Пары с ничьей в одном из векторов
    дискордантными не считаются.
    """
    distance = 0
    n = r1.shape[0]
    for i in range(n):
        for j in range(i):
            if (r1[j] > r1[i] and r2[j] < r2[i]) or (r1[j] < r1[i] and r2[j] > r2[i]):
                distance += 1
    return float(distance)


def cayley_distance(r1: np.ndarray, r2: np.ndarray) -> float:
    """
    Cayley: минимальное число транспозиций, переводящих r1 в r2.

    Cycle-following на рабочей копии: на каждой позиции i, где копия
    расходится с r2, ставим r2[i] и переносим вытесненное значение на все
    позиции, где встречалось r2[i] (поиск по равенству). Каждое такое
    исправление — одна транспозиция. Итог равен n - число циклов r2^{-1} ∘ r1.

    Сложность O(n²) из-за линейного поиска на каждом шаге.
    """
    distance = 0
    work = r1.copy()
    for i in range(work.shape[0]):
        if work[i] != r2[i]:
            distance += 1
            displaced = work[i]
            target = r2[i]
            work[np.flatnonzero(work == target)] = displaced
            work[i] = target
    return float(distance)


def ulam_distance(r1: np.ndarray, r2: np.ndarray) -> float:
    """
    Ulam: минимальное число операций "удалить и вставить" для r1 → r2.

    Ранги сначала переводятся в zero-based перестановки (rank - 1),
    затем считается n - LIS (см. src.core.math.permutation_lis).

    Raises:
        InvalidPermutation: если ранги не целые или не образуют 1..n
    """
    p1 = to_zero_based_permutation(r1, "r1")
    p2 = to_zero_based_permutation(r2, "r2")
    return float(perm0_distance(p1, p2))


# =============================================================================
# DISPATCH
# =============================================================================


def metric_distance(r1: np.ndarray, r2: np.ndarray, metric: Metric) -> float:
    """
    Маршрутизация к функции метрики без повторной валидации входов.

    Используется агрегатором, который валидирует размерности один раз.
    """
    match metric:
        case Metric.FOOTRULE:
            return footrule_distance(r1, r2)
        case Metric.SPEARMAN:
            return spearman_distance(r1, r2)
        case Metric.HAMMING:
            return hamming_distance(r1, r2)
        case Metric.KENDALL:
            return kendall_distance(r1, r2)
        case Metric.CAYLEY:
            return cayley_distance(r1, r2)
        case Metric.ULAM:
            return ulam_distance(r1, r2)
        case _:
            raise UnsupportedMetric(f"Inadmissible value of metric: {metric!r}")


def distance(r1: RankVectorLike, r2: RankVectorLike, metric: Metric | str = Metric.FOOTRULE) -> float:
    """
    Расстояние между двумя rank-векторами по выбранной метрике.

    Args:
        r1: Вектор рангов
        r2: Вектор рангов той же длины
        metric: Metric или строка ("footrule", "kendall", "cayley",
            "hamming", "spearman", "ulam"). Default: footrule

    Returns:
        Неотрицательное расстояние (float)

    Raises:
        DimensionMismatch: если длины r1 и r2 различаются
        UnsupportedMetric: если метрика неизвестна

    Examples:
        >>> distance([1, 2, 3, 4], [4, 3, 2, 1], "footrule")
        8.0
        >>> distance([1, 2, 3, 4], [4, 3, 2, 1], "kendall")
        6.0
    """
    a = as_rank_vector(r1, "r1")
    b = as_rank_vector(r2, "r2")
    check_same_length(a, b)
    return metric_distance(a, b, Metric.parse(metric))
