"""
Core math modules

Численные примитивы (log-пространство) и комбинаторика перестановок.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_ALPHA_LIMIT,
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    # Checks
    is_close,
    is_valid_float,
    # Log space
    evaluate_power_series,
    log_sum_exp,
    safe_log,
    # Validation
    validate_non_negative,
    validate_positive,
    validate_positive_int,
)

# Permutation LIS
from src.core.math.permutation_lis import (
    compose_permutations,
    inverse_permutation,
    longest_increasing_subsequence_length,
    perm0_distance,
    validate_permutation0,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_ALPHA_LIMIT",
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    # Numerical Safeguards — Checks
    "is_close",
    "is_valid_float",
    # Numerical Safeguards — Log space
    "evaluate_power_series",
    "log_sum_exp",
    "safe_log",
    # Numerical Safeguards — Validation
    "validate_non_negative",
    "validate_positive",
    "validate_positive_int",
    # Permutation LIS
    "compose_permutations",
    "inverse_permutation",
    "longest_increasing_subsequence_length",
    "perm0_distance",
    "validate_permutation0",
]
