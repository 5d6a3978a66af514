"""High-level inference API."""

from mlx_bayes.inference.mcmc import MCMC
from mlx_bayes.inference.conjugate import (
    beta_binomial_update,
    gamma_poisson_update,
    normal_known_variance_update,
)
from mlx_bayes.inference.importance import ImportanceResult, importance_sample
from mlx_bayes.inference.rejection import RejectionResult, rejection_sample
from mlx_bayes.inference.abc import ABCResult, abc_rejection

__all__ = [
    "MCMC",
    "beta_binomial_update",
    "normal_known_variance_update",
    "gamma_poisson_update",
    "ImportanceResult",
    "importance_sample",
    "RejectionResult",
    "rejection_sample",
    "ABCResult",
    "abc_rejection",
]
