"""
Achievable-Distance Enumerator — сетка значений расстояний для точной Z(alpha)

Точная нормирующая константа для footrule / spearman считается как
    Z(alpha) = sum_d N(d) * exp(-alpha * d / n)
где d пробегает сетку achievable_distances(n, metric), а N(d) —
cardinalities (число перестановок на расстоянии d), поставляемые вызывающим.

Границы точного перебора:
- footrule: n <= 50, max = floor(n² / 2)
- spearman: n <= 13, max = 2 * C(n, 3)
Остальные метрики здесь не поддерживаются (closed form или оценка).
"""

import itertools
import math
from typing import Final

import numpy as np

from src.core.domain.errors import DomainBoundExceeded, UnsupportedMetric
from src.core.domain.metric import Metric
from src.core.math.numerical_safeguards import validate_positive_int
from src.core.structured_logging import get_logger
from src.distances.metrics import metric_distance

logger = get_logger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

FOOTRULE_MAX_ITEMS: Final[int] = 50

SPEARMAN_MAX_ITEMS: Final[int] = 13

# Верхняя граница полного перебора (8! = 40320 перестановок)
BRUTE_FORCE_MAX_ITEMS: Final[int] = 8


# =============================================================================
# ACHIEVABLE DISTANCES
# =============================================================================


def achievable_distances(n: int, metric: Metric | str = Metric.FOOTRULE) -> np.ndarray:
    """
    Возрастающая сетка 0, 1, ..., max значений расстояния для n элементов.

    Args:
        n: Число элементов (>= 1)
        metric: "footrule" или "spearman"

    Returns:
        float64 массив [0, 1, ..., max]

    Raises:
        DomainBoundExceeded: n > 50 (footrule) или n > 13 (spearman)
        UnsupportedMetric: любая другая метрика

    Examples:
        >>> achievable_distances(4, "footrule").tolist()
        [0.0, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0]
    """
    validate_positive_int(n, "n")
    resolved = Metric.parse(metric)

    match resolved:
        case Metric.FOOTRULE:
            if n > FOOTRULE_MAX_ITEMS:
                raise DomainBoundExceeded(
                    f"n > {FOOTRULE_MAX_ITEMS} currently not supported for footrule, got n={n}"
                )
            max_distance = n * n // 2
        case Metric.SPEARMAN:
            if n > SPEARMAN_MAX_ITEMS:
                raise DomainBoundExceeded(
                    f"n > {SPEARMAN_MAX_ITEMS} currently not supported for Spearman distance, got n={n}"
                )
            max_distance = 2 * math.comb(n, 3)
        case _:
            raise UnsupportedMetric(
                f"Inadmissible value of metric for exact enumeration: {resolved.value!r}. "
                "Only footrule and spearman are supported"
            )

    logger.debug(
        "achievable_distances_enumerated",
        metric=resolved.value,
        n_items=n,
        max_distance=max_distance,
    )
    return np.linspace(0, max_distance, max_distance + 1)


# =============================================================================
# BRUTE-FORCE CARDINALITIES
# =============================================================================


def count_cardinalities(n: int, metric: Metric | str = Metric.FOOTRULE) -> np.ndarray:
    """
    Число перестановок на каждом расстоянии от identity (полный перебор).

    По правой инвариантности метрик распределение расстояний от identity
    совпадает с распределением от любого фиксированного rho.

    Args:
        n: Число элементов (1 <= n <= 8)
        metric: Любая из шести метрик

    Returns:
        float64 массив длины metric.max_distance(n) + 1; элемент d — N(d).
        Сумма равна n!.

    Raises:
        DomainBoundExceeded: n > 8
    """
    validate_positive_int(n, "n")
    resolved = Metric.parse(metric)
    if n > BRUTE_FORCE_MAX_ITEMS:
        raise DomainBoundExceeded(
            f"brute-force cardinalities limited to n <= {BRUTE_FORCE_MAX_ITEMS}, got n={n}"
        )

    identity = np.arange(1, n + 1, dtype=float)
    counts = np.zeros(resolved.max_distance(n) + 1)
    for perm in itertools.permutations(range(1, n + 1)):
        d = metric_distance(np.asarray(perm, dtype=float), identity, resolved)
        counts[int(round(d))] += 1
    return counts
