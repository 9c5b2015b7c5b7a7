"""
Numerical Safeguards — безопасные примитивы для вычислений в log-пространстве

Модуль обеспечивает численную устойчивость вычислений Mallows модели:
- Валидация скалярных параметров (alpha, sd, rate) с понятными сообщениями
- NaN/Inf проверки до того, как значение попадёт в log/exp
- log-sum-exp для нормирующих констант (scipy.special.logsumexp)
- Вычисление степенного ряда log Z(alpha) по коэффициентам

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. log/exp никогда не вызываются на невалидных значениях (NaN/Inf/<= 0 для log)
2. Суммы экспонент считаются только через log-sum-exp (нет overflow)
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final, Sequence

import numpy as np
from scipy.special import logsumexp

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Epsilon для сравнения float (относительная толерантность)
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Epsilon для сравнения float (абсолютная толерантность)
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12

# Порог, ниже которого alpha / n считается нулём в closed-form формулах
# (предел 0/0 раскрывается аналитически)
EPS_ALPHA_LIMIT: Final[float] = 1e-12


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Examples:
        >>> is_valid_float(1.0)
        True
        >>> is_valid_float(float('nan'))
        False
    """
    return math.isfinite(value)


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение float с учётом машинной точности.

    Алгоритм:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


# =============================================================================
# LOG-ПРОСТРАНСТВО
# =============================================================================


def safe_log(value: float, name: str = "value") -> float:
    """
    log(value) с явной проверкой домена.

    Args:
        value: Аргумент логарифма (> 0, конечный)
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        math.log(value)

    Raises:
        ValueError: если value <= 0 или NaN/Inf

    Examples:
        >>> safe_log(1.0)
        0.0
        >>> safe_log(0.0)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        ValueError: value must be positive for log, got 0.0
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")
    if value <= 0:
        raise ValueError(f"{name} must be positive for log, got {value}")
    return math.log(value)


def log_sum_exp(log_terms: Sequence[float] | np.ndarray) -> float:
    """
    Численно устойчивый log(sum(exp(x_i))).

    Используется для нормирующих констант вида
    log Z = log sum_d N(d) * exp(-alpha * d / n).

    Args:
        log_terms: Слагаемые в log-пространстве (могут содержать -inf)

    Returns:
        log(sum(exp(log_terms))); -inf для пустого входа

    Examples:
        >>> log_sum_exp([0.0, 0.0])
        0.6931471805599453
        >>> round(log_sum_exp([1000.0, 1000.0]) - 1000.0, 6)
        0.693147
    """
    terms = np.asarray(log_terms, dtype=float)
    if terms.size == 0:
        return float("-inf")
    return float(logsumexp(terms))


def evaluate_power_series(coefficients: Sequence[float] | np.ndarray, x: float) -> float:
    """
    Значение степенного ряда sum_i c_i * x**i.

    Коэффициенты задаются в порядке возрастания степени (c_0 первым).

    Examples:
        >>> evaluate_power_series([1.0, 2.0, 3.0], 2.0)
        17.0
    """
    coefs = np.asarray(coefficients, dtype=float)
    if coefs.ndim != 1 or coefs.size == 0:
        raise ValueError(
            f"power series coefficients must be a non-empty 1-D vector, got shape {coefs.shape}"
        )
    # polyval ожидает старшую степень первой
    return float(np.polyval(coefs[::-1], x))


# =============================================================================
# ВАЛИДАЦИЯ И ПРОВЕРКИ
# =============================================================================


def validate_positive(value: float, name: str) -> None:
    """
    Валидация, что значение строго положительное.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если value <= 0 или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


def validate_non_negative(value: float, name: str) -> None:
    """
    Валидация, что значение неотрицательное.

    Raises:
        ValueError: Если value < 0 или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def validate_positive_int(value: int, name: str) -> None:
    """Валидация, что значение является целым числом >= 1."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")
