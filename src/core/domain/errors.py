"""
Exceptions для ошибок вызова (invalid-argument) ядра Mallows модели.

Все ошибки наследуются от ValueError: это ошибки вызывающего кода
(неверные размерности, неизвестная метрика, превышение границы n),
а не стохастические исходы. Поднимаются в точке обнаружения и не
перехватываются внутри библиотеки.
"""


class MallowsArgumentError(ValueError):
    """Базовый класс для invalid-argument ошибок."""


class DimensionMismatch(MallowsArgumentError):
    """
    Rank-векторы (или rankings и reference) разной длины.

    Пример: distance([1, 2, 3], [1, 2]) → DimensionMismatch.
    """


class UnsupportedMetric(MallowsArgumentError):
    """
    Неизвестный идентификатор метрики или метрика, не поддерживаемая операцией.

    Пример: achievable_distances(5, "ulam") → UnsupportedMetric.
    """


class DomainBoundExceeded(MallowsArgumentError):
    """
    Число элементов n превышает границу точного перебора для метрики.

    footrule: n <= 50, spearman: n <= 13.
    """


class InvalidPermutation(MallowsArgumentError):
    """Вектор не является перестановкой (нужно для Ulam distance)."""
