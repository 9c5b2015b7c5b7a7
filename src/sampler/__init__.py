"""Sampler — Metropolis-Hastings шаг для scale parameter alpha.

Вызывается внешним MCMC driver'ом один раз на итерацию.
"""

from .alpha_mh import (
    AlphaSampler,
    AlphaSamplerConfig,
    metropolis_hastings_alpha,
    propose_alpha,
    update_alpha,
)

__all__ = [
    "AlphaSampler",
    "AlphaSamplerConfig",
    "metropolis_hastings_alpha",
    "propose_alpha",
    "update_alpha",
]
