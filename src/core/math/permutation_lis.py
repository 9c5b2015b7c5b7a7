"""
Permutation LIS — longest increasing subsequence и Ulam distance на перестановках

Комбинаторное ядро для Ulam метрики. Работает только с zero-based
перестановками 0..n-1 (конверсия из рангов 1..n выполняется вызывающим кодом).

Алгоритм LIS (patience sorting):
    tails[k] = минимальный последний элемент среди возрастающих
    подпоследовательностей длины k+1. Для каждого x бинарным поиском
    находим позицию bisect_left(tails, x) и заменяем/дописываем.
    Длина tails в конце = длина LIS. Сложность O(n log n).

Ulam distance:
    d(p1, p2) = n - LIS(p1 ∘ p2^{-1})
    Минимальное число операций "удалить элемент и вставить в другое место",
    переводящих одну перестановку в другую.
"""

from bisect import bisect_left
from typing import Sequence

import numpy as np

from src.core.domain.errors import DimensionMismatch, InvalidPermutation


def validate_permutation0(p: Sequence[int] | np.ndarray, name: str = "permutation") -> np.ndarray:
    """
    Проверка, что p является перестановкой 0..n-1.

    Returns:
        p как numpy int64 массив

    Raises:
        InvalidPermutation: если p не перестановка
    """
    arr = np.asarray(p)
    if arr.ndim != 1:
        raise InvalidPermutation(f"{name} must be 1-D, got shape {arr.shape}")
    if arr.size and not np.issubdtype(arr.dtype, np.integer):
        raise InvalidPermutation(f"{name} must contain integers, got dtype {arr.dtype}")
    arr = arr.astype(np.int64, copy=False)
    n = arr.size
    if not np.array_equal(np.sort(arr), np.arange(n)):
        raise InvalidPermutation(f"{name} is not a permutation of 0..{n - 1}: {arr.tolist()}")
    return arr


def longest_increasing_subsequence_length(seq: Sequence[int] | np.ndarray) -> int:
    """
    Длина строго возрастающей подпоследовательности максимальной длины.

    Examples:
        >>> longest_increasing_subsequence_length([3, 1, 2, 0])
        2
        >>> longest_increasing_subsequence_length([])
        0
    """
    tails: list[int] = []
    for x in seq:
        k = bisect_left(tails, x)
        if k == len(tails):
            tails.append(x)
        else:
            tails[k] = x
    return len(tails)


def inverse_permutation(p: Sequence[int] | np.ndarray) -> np.ndarray:
    """
    Обратная перестановка: inv[p[i]] = i.

    Examples:
        >>> inverse_permutation([2, 0, 1]).tolist()
        [1, 2, 0]
    """
    arr = validate_permutation0(p)
    inv = np.empty_like(arr)
    inv[arr] = np.arange(arr.size)
    return inv


def compose_permutations(p: Sequence[int] | np.ndarray, q: Sequence[int] | np.ndarray) -> np.ndarray:
    """
    Композиция (p ∘ q)[i] = p[q[i]].
    """
    p_arr = validate_permutation0(p, "p")
    q_arr = validate_permutation0(q, "q")
    if p_arr.size != q_arr.size:
        raise DimensionMismatch(
            f"permutations must have the same length, got {p_arr.size} and {q_arr.size}"
        )
    return p_arr[q_arr]


def perm0_distance(p1: Sequence[int] | np.ndarray, p2: Sequence[int] | np.ndarray) -> int:
    """
    Ulam distance между двумя zero-based перестановками.

    Args:
        p1: Перестановка 0..n-1
        p2: Перестановка 0..n-1 той же длины

    Returns:
        n - LIS(p1 ∘ p2^{-1}), значение в [0, n-1]

    Raises:
        DimensionMismatch: если длины различаются
        InvalidPermutation: если вход не перестановка

    Examples:
        >>> perm0_distance([0, 1, 2, 3], [3, 2, 1, 0])
        3
        >>> perm0_distance([1, 0, 2], [1, 0, 2])
        0
    """
    a = validate_permutation0(p1, "p1")
    b = validate_permutation0(p2, "p2")
    if a.size != b.size:
        raise DimensionMismatch(
            f"permutations must have the same length, got {a.size} and {b.size}"
        )
    composed = compose_permutations(a, inverse_permutation(b))
    return int(a.size - longest_increasing_subsequence_length(composed.tolist()))
