"""Partition — нормирующая константа и log-likelihood Mallows модели.

- Сетка достижимых расстояний для точной Z (footrule, spearman)
- Closed form log Z для kendall, cayley, hamming
- Log-likelihood без нормирующей константы
"""

from .enumerator import (
    BRUTE_FORCE_MAX_ITEMS,
    FOOTRULE_MAX_ITEMS,
    SPEARMAN_MAX_ITEMS,
    achievable_distances,
    count_cardinalities,
)
from .likelihood import LikelihoodEvaluator, mallows_loglik
from .partition_function import (
    PartitionFunctionEvaluator,
    log_partition,
    logz_cayley,
    logz_from_cardinalities,
    logz_hamming,
    logz_kendall,
)

__all__ = [
    "FOOTRULE_MAX_ITEMS",
    "SPEARMAN_MAX_ITEMS",
    "BRUTE_FORCE_MAX_ITEMS",
    "achievable_distances",
    "count_cardinalities",
    "LikelihoodEvaluator",
    "mallows_loglik",
    "PartitionFunctionEvaluator",
    "log_partition",
    "logz_kendall",
    "logz_cayley",
    "logz_hamming",
    "logz_from_cardinalities",
]
