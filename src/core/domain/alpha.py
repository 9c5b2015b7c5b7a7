"""
AlphaUpdateResult — запись одного Metropolis-Hastings перехода для alpha

Immutable Pydantic модель. Каждый вызов alpha sampler'а проходит цикл
PROPOSED → RESOLVED; результат фиксирует обе половины цикла: предложение
alpha' и решение (принято / отклонено и почему).
"""

from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class AlphaState(str, Enum):
    """Состояние перехода."""

    PROPOSED = "PROPOSED"
    RESOLVED = "RESOLVED"


class AlphaDecision(str, Enum):
    """
    Решение по предложению alpha'.

    - ACCEPTED: log(p) <= loga и alpha' < alpha_max
    - REJECTED_RATIO: log(p) > loga
    - REJECTED_CEILING: alpha' >= alpha_max (независимо от ratio)
    """

    ACCEPTED = "ACCEPTED"
    REJECTED_RATIO = "REJECTED_RATIO"
    REJECTED_CEILING = "REJECTED_CEILING"


# =============================================================================
# MODELS
# =============================================================================


class AlphaProposal(BaseModel):
    """
    Предложение alpha' (log-normal random walk).

    log(alpha') = z * alpha_prop_sd + log(alpha), z ~ N(0, 1)
    """

    state: AlphaState = Field(AlphaState.PROPOSED, description="Состояние перехода")
    alpha_current: float = Field(..., gt=0, description="Исходное alpha")
    alpha_prime: float = Field(..., ge=0, description="Предложенное alpha'")
    log_alpha_prime: float = Field(..., description="log(alpha')")
    z: float = Field(..., description="Стандартная нормальная величина")

    model_config = {"frozen": True}


class AlphaUpdateResult(BaseModel):
    """Результат alpha update: новое значение и диагностика MH шага."""

    state: AlphaState = Field(AlphaState.RESOLVED, description="Состояние перехода")

    # Значения
    alpha: float = Field(..., description="Значение alpha после шага (alpha' или исходное)")
    alpha_current: float = Field(..., gt=0, description="Исходное alpha")
    alpha_prime: float = Field(..., ge=0, description="Предложенное alpha'")

    # Компоненты MH ratio
    loglik_diff: float = Field(..., description="loglik(alpha') - loglik(alpha) без log Z")
    logz_alpha: float = Field(..., description="log Z(alpha)")
    logz_alpha_prime: float = Field(..., description="log Z(alpha')")
    obs_freq: float = Field(..., ge=0, description="Число наблюдений N")
    log_ratio: float = Field(..., description="log acceptance ratio (loga)")
    log_uniform: float = Field(..., description="log(p), p ~ U(0, 1)")

    # Решение
    accepted: bool = Field(..., description="True если alpha' принято")
    decision: AlphaDecision = Field(..., description="Причина решения")

    model_config = {"frozen": True}
