"""
Rankings — приведение rank-векторов и матриц рангов к numpy

Rank vector: 1-D float64 массив длины n (позиция i — всегда один и тот же item).
Rank matrix: 2-D массив формы (n_items, n_obs), столбцы — наблюдения.

ИНВАРИАНТЫ:
1. Векторы и матрицы не пустые, все значения конечные
2. Входы не мутируются (возвращаются копии только при смене dtype)
3. Несовпадение длин → DimensionMismatch в точке обнаружения
"""

from typing import Sequence, Union

import numpy as np

from src.core.domain.errors import DimensionMismatch, InvalidPermutation

RankVectorLike = Union[Sequence[float], np.ndarray]
RankMatrixLike = Union[Sequence[Sequence[float]], np.ndarray]


def as_rank_vector(values: RankVectorLike, name: str = "rank vector") -> np.ndarray:
    """
    Приведение к 1-D float64 rank-вектору.

    Raises:
        ValueError: если вход не 1-D, пустой или содержит NaN/Inf
    """
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be 1-D, got shape {arr.shape}")
    if arr.size == 0:
        raise ValueError(f"{name} must not be empty")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} contains NaN/Inf: {arr.tolist()}")
    return arr


def as_rank_matrix(values: RankMatrixLike, name: str = "rankings") -> np.ndarray:
    """
    Приведение к 2-D матрице рангов (n_items, n_obs).

    1-D вход трактуется как одно наблюдение: форма (n, 1).
    """
    arr = np.asarray(values, dtype=float)
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise ValueError(f"{name} must be 1-D or 2-D, got shape {arr.shape}")
    if arr.size == 0:
        raise ValueError(f"{name} must not be empty")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} contains NaN/Inf")
    return arr


def check_same_length(r1: np.ndarray, r2: np.ndarray) -> None:
    """DimensionMismatch если длины rank-векторов различаются."""
    if r1.shape[0] != r2.shape[0]:
        raise DimensionMismatch(
            f"r1 and r2 must have the same length, got {r1.shape[0]} and {r2.shape[0]}"
        )


def check_rankings_match_reference(rankings: np.ndarray, reference: np.ndarray) -> None:
    """DimensionMismatch если число строк rankings != длине reference."""
    if rankings.shape[0] != reference.shape[0]:
        raise DimensionMismatch(
            "rankings and reference have different number of elements: "
            f"{rankings.shape[0]} rows vs {reference.shape[0]} items"
        )


def to_zero_based_permutation(ranks: np.ndarray, name: str = "ranks") -> np.ndarray:
    """
    Конверсия рангов 1..n в zero-based целочисленную перестановку (rank - 1).

    Raises:
        InvalidPermutation: если значения не целые или не образуют 1..n
    """
    if not np.all(np.equal(np.mod(ranks, 1), 0)):
        raise InvalidPermutation(f"{name} must contain integer ranks, got {ranks.tolist()}")
    perm = ranks.astype(np.int64) - 1
    n = perm.size
    if not np.array_equal(np.sort(perm), np.arange(n)):
        raise InvalidPermutation(f"{name} must be a permutation of 1..{n}, got {ranks.tolist()}")
    return perm
