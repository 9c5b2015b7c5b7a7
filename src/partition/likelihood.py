"""
Mallows log-likelihood (без нормирующей константы).

    loglik(alpha) = -alpha / n * sum_j d(R_j, rho)

Линейна по alpha, поэтому разность log-likelihood между alpha' и alpha
получается вызовом с alpha_delta = alpha' - alpha.
"""

from typing import Protocol

from src.core.domain.metric import Metric
from src.core.domain.rankings import RankMatrixLike, RankVectorLike
from src.core.math.numerical_safeguards import is_valid_float, validate_positive_int
from src.distances.aggregate import total_distance


class LikelihoodEvaluator(Protocol):
    """Контракт evaluator'а log-likelihood, который вызывает alpha sampler."""

    def __call__(
        self,
        alpha: float,
        consensus: RankVectorLike,
        n_items: int,
        rankings: RankMatrixLike,
        metric: Metric | str,
    ) -> float: ...


def mallows_loglik(
    alpha: float,
    consensus: RankVectorLike,
    n_items: int,
    rankings: RankMatrixLike,
    metric: Metric | str,
) -> float:
    """
    Log-likelihood Mallows модели без log Z.

    Args:
        alpha: Scale (или разность scale) — может быть отрицательным
        consensus: Consensus ranking rho
        n_items: Число элементов
        rankings: Матрица рангов (n_items, n_obs)
        metric: Метрика расстояния

    Returns:
        -alpha / n_items * total_distance(rankings, consensus, metric)

    Raises:
        DimensionMismatch: если rankings и consensus разной длины
    """
    if not is_valid_float(alpha):
        raise ValueError(f"alpha must be a valid float (not NaN/Inf), got {alpha}")
    validate_positive_int(n_items, "n_items")
    return -alpha / n_items * total_distance(rankings, consensus, metric)
