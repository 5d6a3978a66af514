"""MCMC sampling kernels."""

from mlx_bayes.kernels.metropolis import metropolis_hastings
from mlx_bayes.kernels.gibbs import gibbs
from mlx_bayes.kernels.hmc import hmc, leapfrog

__all__ = ["metropolis_hastings", "gibbs", "hmc", "leapfrog"]
