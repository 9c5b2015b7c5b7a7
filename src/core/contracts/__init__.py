"""
Contract Validation Module

Валидация JSON контрактов (конфигурация alpha sampler'а, выборки рангов).
"""

from .validators import (
    AlphaSamplerConfigValidator,
    ContractValidator,
    RankDataValidator,
    SchemaLoader,
    validate_alpha_sampler_config,
    validate_rank_data,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "AlphaSamplerConfigValidator",
    "RankDataValidator",
    # Functions
    "validate_alpha_sampler_config",
    "validate_rank_data",
]
