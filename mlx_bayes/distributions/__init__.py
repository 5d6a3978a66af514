"""Probability distribution implementations for MLX-Bayes."""

from mlx_bayes.distributions.base import Distribution
from mlx_bayes.distributions.uniform import Uniform, DiscreteUniform
from mlx_bayes.distributions.normal import Normal, LogNormal
from mlx_bayes.distributions.halfnormal import HalfNormal
from mlx_bayes.distributions.exponential import Exponential
from mlx_bayes.distributions.weibull import Weibull
from mlx_bayes.distributions.pareto import Pareto
from mlx_bayes.distributions.laplace import Laplace
from mlx_bayes.distributions.cauchy import Cauchy
from mlx_bayes.distributions.triangular import Triangular
from mlx_bayes.distributions.gamma import Gamma, ChiSquared, StudentT, FDistribution
from mlx_bayes.distributions.beta import Beta
from mlx_bayes.distributions.bernoulli import Bernoulli, Binomial, Geometric
from mlx_bayes.distributions.poisson import Poisson
from mlx_bayes.distributions.categorical import Categorical, Multinomial
from mlx_bayes.distributions.zipf import Zipf
from mlx_bayes.distributions.mixture import Mixture

__all__ = [
    "Distribution",
    "Uniform",
    "DiscreteUniform",
    "Normal",
    "LogNormal",
    "HalfNormal",
    "Exponential",
    "Weibull",
    "Pareto",
    "Laplace",
    "Cauchy",
    "Triangular",
    "Gamma",
    "ChiSquared",
    "StudentT",
    "FDistribution",
    "Beta",
    "Bernoulli",
    "Binomial",
    "Geometric",
    "Poisson",
    "Categorical",
    "Multinomial",
    "Zipf",
    "Mixture",
]
