"""
Distance Aggregator — расстояния от reference до каждого наблюдения выборки

rankings: матрица (n_items, n_obs), столбцы — наблюдения.

ИНВАРИАНТ:
    total_distance(R, rho, m) == sum(per_observation_distance(R, rho, m))
"""

import numpy as np

from src.core.domain.metric import Metric
from src.core.domain.rankings import (
    RankMatrixLike,
    RankVectorLike,
    as_rank_matrix,
    as_rank_vector,
    check_rankings_match_reference,
)
from src.distances.metrics import metric_distance


def per_observation_distance(
    rankings: RankMatrixLike,
    reference: RankVectorLike,
    metric: Metric | str = Metric.FOOTRULE,
) -> np.ndarray:
    """
    Вектор расстояний от reference до каждого столбца rankings.

    Args:
        rankings: Матрица рангов (n_items, n_obs) или один вектор
        reference: Rank-вектор длины n_items (например, consensus rho)
        metric: Метрика расстояния

    Returns:
        float64 массив длины n_obs, в порядке столбцов

    Raises:
        DimensionMismatch: если число строк rankings != len(reference)
        UnsupportedMetric: если метрика неизвестна
    """
    matrix = as_rank_matrix(rankings)
    rho = as_rank_vector(reference, "reference")
    check_rankings_match_reference(matrix, rho)
    resolved = Metric.parse(metric)

    result = np.zeros(matrix.shape[1])
    for j in range(matrix.shape[1]):
        result[j] = metric_distance(matrix[:, j], rho, resolved)
    return result


def total_distance(
    rankings: RankMatrixLike,
    reference: RankVectorLike,
    metric: Metric | str = Metric.FOOTRULE,
) -> float:
    """
    Сумма расстояний от reference до всех наблюдений.

    Достаточная статистика для log-likelihood Mallows модели.

    Examples:
        >>> total_distance([[1, 2], [2, 1]], [1, 2], "footrule")
        2.0
    """
    return float(np.sum(per_observation_distance(rankings, reference, metric)))
