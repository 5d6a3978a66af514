"""
MLX-Bayes: Sampling and Bayesian inference on MLX

Probability samplers for common laws, Monte Carlo estimators and a small
inference layer (conjugate updates, Metropolis-Hastings, Gibbs, HMC,
importance, rejection and ABC sampling) built on Apple's MLX framework.

Example:
    >>> from mlx_bayes import Normal, HalfNormal, MCMC
    >>>
    >>> def log_prob(params):
    ...     mu = params['mu']
    ...     sigma = params['sigma']
    ...     return Normal(0, 10).log_prob(mu) + HalfNormal(5).log_prob(sigma)
    >>>
    >>> mcmc = MCMC(log_prob)
    >>> samples = mcmc.run({'mu': 0.0, 'sigma': 1.0}, num_samples=1000, random_seed=0)
"""

import logging

__version__ = "0.1.0-alpha"
__license__ = "MIT"

from mlx_bayes import stats
from mlx_bayes.random import prng_key
from mlx_bayes.errors import (
    DegenerateChainWarning,
    EmptyInputError,
    ParameterError,
    RejectionExhausted,
    TargetEvaluationError,
)
from mlx_bayes.distributions import *  # noqa: F401,F403
from mlx_bayes.distributions import __all__ as _distributions
from mlx_bayes.kernels.metropolis import metropolis_hastings
from mlx_bayes.kernels.gibbs import gibbs
from mlx_bayes.kernels.hmc import hmc
from mlx_bayes.inference import *  # noqa: F401,F403
from mlx_bayes.inference import __all__ as _inference

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "stats",
    "prng_key",
    "ParameterError",
    "EmptyInputError",
    "RejectionExhausted",
    "TargetEvaluationError",
    "DegenerateChainWarning",
    "metropolis_hastings",
    "gibbs",
    "hmc",
] + _distributions + _inference
