"""Distances — метрики между перестановками и агрегирование по выборке.

- footrule, spearman, hamming, kendall, cayley, ulam
- total / per-observation расстояния до reference ranking
"""

from .aggregate import per_observation_distance, total_distance
from .metrics import (
    cayley_distance,
    distance,
    footrule_distance,
    hamming_distance,
    kendall_distance,
    metric_distance,
    spearman_distance,
    ulam_distance,
)

__all__ = [
    "distance",
    "metric_distance",
    "footrule_distance",
    "spearman_distance",
    "hamming_distance",
    "kendall_distance",
    "cayley_distance",
    "ulam_distance",
    "total_distance",
    "per_observation_distance",
]
