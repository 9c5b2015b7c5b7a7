"""
Metric — идентификатор метрики расстояния между перестановками

Закрытый набор из шести метрик. Любое другое значение → UnsupportedMetric.
"""

from enum import Enum

from src.core.domain.errors import UnsupportedMetric


# =============================================================================
# ENUMS
# =============================================================================


class Metric(str, Enum):
    """Метрика расстояния между rank-векторами."""

    FOOTRULE = "footrule"
    KENDALL = "kendall"
    CAYLEY = "cayley"
    HAMMING = "hamming"
    SPEARMAN = "spearman"
    ULAM = "ulam"

    @classmethod
    def parse(cls, value: "Metric | str") -> "Metric":
        """
        Приведение строки или Metric к Metric.

        Raises:
            UnsupportedMetric: если значение не входит в набор метрик
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        allowed = ", ".join(m.value for m in cls)
        raise UnsupportedMetric(
            f"Inadmissible value of metric: {value!r}. Available options: {allowed}"
        )

    @property
    def requires_integer_ranks(self) -> bool:
        """Ulam работает только с целочисленными перестановками."""
        return self is Metric.ULAM

    def max_distance(self, n_items: int) -> int:
        """
        Максимальное значение расстояния для перестановок длины n.

        footrule: floor(n²/2), spearman: 2*C(n+1, 3) = (n³ - n)/3,
        kendall: C(n, 2), cayley / ulam: n - 1, hamming: n (0 при n = 1).
        """
        n = n_items
        match self:
            case Metric.FOOTRULE:
                return n * n // 2
            case Metric.SPEARMAN:
                return (n ** 3 - n) // 3
            case Metric.KENDALL:
                return n * (n - 1) // 2
            case Metric.CAYLEY | Metric.ULAM:
                return max(n - 1, 0)
            case Metric.HAMMING:
                return n if n > 1 else 0
