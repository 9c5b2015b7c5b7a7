"""
Domain models and value objects.

Contains metric identifiers, rank-vector coercion, rank-data payloads,
alpha update records and the invalid-argument error hierarchy.
"""

from src.core.domain.alpha import (
    AlphaDecision,
    AlphaProposal,
    AlphaState,
    AlphaUpdateResult,
)
from src.core.domain.errors import (
    DimensionMismatch,
    DomainBoundExceeded,
    InvalidPermutation,
    MallowsArgumentError,
    UnsupportedMetric,
)
from src.core.domain.metric import Metric
from src.core.domain.rank_data import RankData
from src.core.domain.rankings import (
    as_rank_matrix,
    as_rank_vector,
    check_rankings_match_reference,
    check_same_length,
    to_zero_based_permutation,
)

__all__ = [
    # Errors
    "MallowsArgumentError",
    "DimensionMismatch",
    "UnsupportedMetric",
    "DomainBoundExceeded",
    "InvalidPermutation",
    # Metric
    "Metric",
    # Rankings
    "as_rank_vector",
    "as_rank_matrix",
    "check_same_length",
    "check_rankings_match_reference",
    "to_zero_based_permutation",
    "RankData",
    # Alpha update
    "AlphaState",
    "AlphaDecision",
    "AlphaProposal",
    "AlphaUpdateResult",
]
