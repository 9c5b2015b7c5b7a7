"""
RankData — выборка рангов, полученная из JSON payload

Immutable Pydantic модель. В payload каждое наблюдение — отдельный
rank-вектор (строка); для вычислений выборка разворачивается в матрицу
(n_items, n_obs), где столбцы — наблюдения.
"""

from typing import Any, Dict

import numpy as np
from pydantic import BaseModel, Field, field_validator

from src.core.contracts import validate_rank_data


class RankData(BaseModel):
    """
    Выборка наблюдённых рангов и опциональный consensus.

    Инварианты:
    - все наблюдения имеют длину n_items
    - consensus (если задан) имеет длину n_items
    """

    n_items: int = Field(..., ge=1, description="Число ранжируемых элементов")
    rankings: list[list[float]] = Field(..., min_length=1, description="Наблюдения (по строкам)")
    consensus: list[float] | None = Field(None, description="Consensus ranking rho")

    model_config = {"frozen": True}

    @field_validator("rankings")
    @classmethod
    def validate_rankings_length(cls, v: list[list[float]], info) -> list[list[float]]:
        """Каждое наблюдение имеет длину n_items."""
        if "n_items" in info.data:
            n_items = info.data["n_items"]
            for j, obs in enumerate(v):
                if len(obs) != n_items:
                    raise ValueError(
                        f"observation {j} has {len(obs)} ranks, expected n_items={n_items}"
                    )
        return v

    @field_validator("consensus")
    @classmethod
    def validate_consensus_length(cls, v: list[float] | None, info) -> list[float] | None:
        """consensus имеет длину n_items."""
        if v is not None and "n_items" in info.data:
            n_items = info.data["n_items"]
            if len(v) != n_items:
                raise ValueError(f"consensus has {len(v)} ranks, expected n_items={n_items}")
        return v

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "RankData":
        """Проверка по JSON Schema rank_data, затем построение модели."""
        validate_rank_data(payload)
        return cls(**payload)

    @property
    def n_obs(self) -> int:
        return len(self.rankings)

    def matrix(self) -> np.ndarray:
        """Матрица рангов (n_items, n_obs), столбцы — наблюдения."""
        return np.asarray(self.rankings, dtype=float).T

    def consensus_vector(self) -> np.ndarray | None:
        if self.consensus is None:
            return None
        return np.asarray(self.consensus, dtype=float)
