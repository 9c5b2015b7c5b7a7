"""Alpha Sampler — Metropolis-Hastings шаг для scale parameter Mallows модели.

Один вызов = один полный цикл PROPOSED → RESOLVED:
1. z ~ N(0, 1); log(alpha') = z * alpha_prop_sd + log(alpha)  (log-normal random walk)
2. loglik_diff = loglik(alpha' - alpha, rho, n, R, metric)
3. logz(alpha), logz(alpha') через partition-function evaluator
4. obs_freq = R.size / n_items  (= N наблюдений)
5. loga = loglik_diff + lambda * (alpha - alpha')
          + obs_freq * (logz(alpha) - logz(alpha'))
          + log(alpha') - log(alpha)           # Jacobian log-шкалы
6. p ~ U(0, 1); accept iff log(p) <= loga AND alpha' < alpha_max

Prior: truncated exponential на (0, alpha_max) с rate lambda.
Ровно два обращения к rng на вызов (standard_normal, затем random).
Состояние цепи не мутируется: новое alpha возвращается по значению.
"""

from dataclasses import dataclass
import math
from typing import Any, Dict, Optional

import numpy as np

from src.core.contracts import validate_alpha_sampler_config
from src.core.domain.alpha import AlphaDecision, AlphaProposal, AlphaUpdateResult
from src.core.domain.errors import DimensionMismatch
from src.core.domain.metric import Metric
from src.core.domain.rankings import (
    RankMatrixLike,
    RankVectorLike,
    as_rank_matrix,
    as_rank_vector,
    check_rankings_match_reference,
)
from src.core.math.numerical_safeguards import (
    validate_non_negative,
    validate_positive,
    validate_positive_int,
)
from src.core.structured_logging import bind_chain, get_logger
from src.partition.likelihood import LikelihoodEvaluator, mallows_loglik
from src.partition.partition_function import (
    FloatVector,
    PartitionFunctionEvaluator,
    log_partition,
)

logger = get_logger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class AlphaSamplerConfig:
    """Конфигурация alpha sampler'а.

    - alpha_prop_sd: sd log-normal предложения (> 0)
    - lambda_rate: rate truncated exponential prior (> 0)
    - alpha_max: верхняя граница prior (>= 0; alpha' >= alpha_max всегда отклоняется)
    """

    alpha_prop_sd: float = 0.1
    lambda_rate: float = 0.1
    alpha_max: float = 1e6

    def __post_init__(self) -> None:
        validate_positive(self.alpha_prop_sd, "alpha_prop_sd")
        validate_positive(self.lambda_rate, "lambda_rate")
        validate_non_negative(self.alpha_max, "alpha_max")

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "AlphaSamplerConfig":
        """Конфигурация из JSON payload (проверка по alpha_sampler_config.json)."""
        validate_alpha_sampler_config(payload)
        return cls(
            alpha_prop_sd=payload["alpha_prop_sd"],
            lambda_rate=payload["lambda_rate"],
            alpha_max=payload["alpha_max"],
        )


# =============================================================================
# STEPS
# =============================================================================


def propose_alpha(alpha: float, alpha_prop_sd: float, rng: np.random.Generator) -> AlphaProposal:
    """Log-normal предложение alpha' (одно обращение к rng)."""
    z = float(rng.standard_normal())
    log_alpha_prime = z * alpha_prop_sd + math.log(alpha)
    return AlphaProposal(
        alpha_current=alpha,
        alpha_prime=math.exp(log_alpha_prime),
        log_alpha_prime=log_alpha_prime,
        z=z,
    )


def _validate_inputs(
    alpha: float,
    n_items: int,
    rankings: RankMatrixLike,
    consensus: RankVectorLike,
    metric: Metric | str,
    alpha_prop_sd: float,
    lambda_rate: float,
    alpha_max: float,
) -> tuple[np.ndarray, np.ndarray, Metric]:
    validate_positive(alpha, "alpha")
    validate_positive_int(n_items, "n_items")
    validate_positive(alpha_prop_sd, "alpha_prop_sd")
    validate_positive(lambda_rate, "lambda_rate")
    validate_non_negative(alpha_max, "alpha_max")
    resolved = Metric.parse(metric)

    matrix = as_rank_matrix(rankings)
    rho = as_rank_vector(consensus, "consensus")
    check_rankings_match_reference(matrix, rho)
    if rho.shape[0] != n_items:
        raise DimensionMismatch(
            f"consensus has {rho.shape[0]} elements, expected n_items={n_items}"
        )
    return matrix, rho, resolved


def metropolis_hastings_alpha(
    alpha: float,
    n_items: int,
    rankings: RankMatrixLike,
    metric: Metric | str,
    consensus: RankVectorLike,
    logz_estimate: Optional[FloatVector],
    alpha_prop_sd: float,
    lambda_rate: float,
    alpha_max: float,
    *,
    rng: np.random.Generator,
    cardinalities: Optional[FloatVector] = None,
    loglik: LikelihoodEvaluator = mallows_loglik,
    partition: PartitionFunctionEvaluator = log_partition,
) -> AlphaUpdateResult:
    """Один MH шаг для alpha с полной диагностикой.

    Args:
        alpha: Текущее значение scale (> 0)
        n_items: Число элементов
        rankings: Матрица рангов (n_items, n_obs) или один вектор
        metric: Метрика расстояния
        consensus: Текущий consensus ranking rho (только чтение)
        logz_estimate: Коэффициенты оценки log Z (или None)
        alpha_prop_sd: sd log-normal предложения
        lambda_rate: rate exponential prior
        alpha_max: верхняя граница prior
        rng: Источник случайности (numpy Generator, владелец — вызывающий)
        cardinalities: N(d) для точной log Z (footrule/spearman)
        loglik: evaluator log-likelihood
        partition: evaluator log Z

    Returns:
        AlphaUpdateResult (state=RESOLVED)

    Raises:
        DimensionMismatch: rankings / consensus / n_items не согласованы
        UnsupportedMetric: неизвестная метрика
        ValueError: невалидные скалярные параметры
    """
    matrix, rho, resolved = _validate_inputs(
        alpha, n_items, rankings, consensus, metric, alpha_prop_sd, lambda_rate, alpha_max
    )

    # 1. PROPOSED
    proposal = propose_alpha(alpha, alpha_prop_sd, rng)
    alpha_prime = proposal.alpha_prime

    # 2-3. Likelihood и partition function
    loglik_diff = loglik(alpha_prime - alpha, rho, n_items, matrix, resolved)
    logz_alpha = partition(n_items, alpha, cardinalities, logz_estimate, resolved)
    logz_alpha_prime = partition(n_items, alpha_prime, cardinalities, logz_estimate, resolved)

    # 4. Число наблюдений
    obs_freq = matrix.size / n_items

    # 5. MH ratio
    log_ratio = (
        loglik_diff
        + lambda_rate * (alpha - alpha_prime)
        + obs_freq * (logz_alpha - logz_alpha_prime)
        + proposal.log_alpha_prime
        - math.log(alpha)
    )

    # 6. RESOLVED
    p = float(rng.random())
    log_p = math.log(p) if p > 0 else float("-inf")

    if alpha_prime >= alpha_max:
        decision = AlphaDecision.REJECTED_CEILING
    elif log_p <= log_ratio:
        decision = AlphaDecision.ACCEPTED
    else:
        decision = AlphaDecision.REJECTED_RATIO
    accepted = decision is AlphaDecision.ACCEPTED

    return AlphaUpdateResult(
        alpha=alpha_prime if accepted else alpha,
        alpha_current=alpha,
        alpha_prime=alpha_prime,
        loglik_diff=loglik_diff,
        logz_alpha=logz_alpha,
        logz_alpha_prime=logz_alpha_prime,
        obs_freq=obs_freq,
        log_ratio=log_ratio,
        log_uniform=log_p,
        accepted=accepted,
        decision=decision,
    )


def update_alpha(
    alpha: float,
    n_items: int,
    rankings: RankMatrixLike,
    metric: Metric | str,
    consensus: RankVectorLike,
    logz_estimate: Optional[FloatVector],
    alpha_prop_sd: float,
    lambda_rate: float,
    alpha_max: float,
    *,
    rng: np.random.Generator,
    cardinalities: Optional[FloatVector] = None,
    loglik: LikelihoodEvaluator = mallows_loglik,
    partition: PartitionFunctionEvaluator = log_partition,
) -> float:
    """MH шаг для alpha: возвращает alpha' при принятии, иначе исходное alpha.

    Examples:
        >>> rng = np.random.default_rng(1)
        >>> update_alpha(1.0, 3, [[1], [2], [3]], "kendall", [1, 2, 3], None,
        ...              0.1, 0.1, 0.0, rng=rng)
        1.0
    """
    result = metropolis_hastings_alpha(
        alpha,
        n_items,
        rankings,
        metric,
        consensus,
        logz_estimate,
        alpha_prop_sd,
        lambda_rate,
        alpha_max,
        rng=rng,
        cardinalities=cardinalities,
        loglik=loglik,
        partition=partition,
    )
    logger.debug(
        "alpha_update_resolved",
        alpha=result.alpha_current,
        alpha_prime=result.alpha_prime,
        log_ratio=result.log_ratio,
        decision=result.decision.value,
    )
    return result.alpha


# =============================================================================
# SAMPLER
# =============================================================================


class AlphaSampler:
    """Alpha sampler с фиксированной конфигурацией и собственным rng.

    Один экземпляр на MCMC цепь: независимый seed на цепь делает вызовы
    воспроизводимыми и безопасными для параллельного запуска цепей.
    """

    def __init__(
        self,
        config: AlphaSamplerConfig | None = None,
        rng: np.random.Generator | None = None,
        loglik: LikelihoodEvaluator = mallows_loglik,
        partition: PartitionFunctionEvaluator = log_partition,
        chain_id: str | int | None = None,
    ):
        """
        Args:
            config: конфигурация (опционально, используется default)
            rng: numpy Generator (опционально, default_rng() без seed)
            loglik: evaluator log-likelihood
            partition: evaluator log Z
            chain_id: идентификатор цепи для логов
        """
        self.config = config or AlphaSamplerConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.loglik = loglik
        self.partition = partition
        self._log = bind_chain(chain_id) if chain_id is not None else logger

        self.n_proposed = 0
        self.n_accepted = 0

    @property
    def acceptance_rate(self) -> float:
        if self.n_proposed == 0:
            return 0.0
        return self.n_accepted / self.n_proposed

    def step(
        self,
        alpha: float,
        n_items: int,
        rankings: RankMatrixLike,
        metric: Metric | str,
        consensus: RankVectorLike,
        logz_estimate: Optional[FloatVector] = None,
        cardinalities: Optional[FloatVector] = None,
    ) -> AlphaUpdateResult:
        """Один MH шаг с параметрами из config."""
        result = metropolis_hastings_alpha(
            alpha,
            n_items,
            rankings,
            metric,
            consensus,
            logz_estimate,
            self.config.alpha_prop_sd,
            self.config.lambda_rate,
            self.config.alpha_max,
            rng=self.rng,
            cardinalities=cardinalities,
            loglik=self.loglik,
            partition=self.partition,
        )
        self.n_proposed += 1
        if result.accepted:
            self.n_accepted += 1

        self._log.debug(
            "alpha_update_resolved",
            alpha=result.alpha_current,
            alpha_prime=result.alpha_prime,
            log_ratio=result.log_ratio,
            decision=result.decision.value,
            acceptance_rate=self.acceptance_rate,
        )
        return result
