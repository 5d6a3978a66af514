"""Closed-form conjugate posterior updates.

These are deterministic functions of the prior parameters and data
summaries; no randomness is consumed.
"""

import numpy as np

from mlx_bayes.distributions.beta import Beta
from mlx_bayes.distributions.gamma import Gamma
from mlx_bayes.distributions.normal import Normal
from mlx_bayes.errors import ParameterError


def beta_binomial_update(prior, successes, trials):
    """Posterior of a Beta prior after observing binomial data.

    Beta(α, β) with k successes in n trials gives Beta(α + k, β + n - k).

    Parameters
    ----------
    prior : Beta
        Prior on the success probability
    successes : int
        Number of successes k
    trials : int
        Number of trials n, with 0 <= k <= n

    Returns
    -------
    posterior : Beta

    Examples
    --------
    >>> beta_binomial_update(Beta(1, 1), successes=7, trials=10)
    Beta(alpha=8.000, beta=4.000)
    """
    if not 0 <= successes <= trials:
        raise ParameterError(
            f"need 0 <= successes <= trials, got {successes} of {trials}"
        )
    alpha = float(prior.alpha) + successes
    beta = float(prior.beta) + (trials - successes)
    return Beta(alpha, beta)


def normal_known_variance_update(prior, data=None, noise_scale=1.0, n=None, total=None):
    """Posterior of a Normal prior on the mean of Normal data with known noise.

    With prior N(μ0, τ0²), noise σ² and n observations summing to S:
        precision = 1/τ0² + n/σ²
        mean = (μ0/τ0² + S/σ²) / precision

    Either pass the observations as ``data`` or their summaries ``n`` and
    ``total``.

    Parameters
    ----------
    prior : Normal
        Prior on the unknown mean
    data : array_like, optional
        Observations
    noise_scale : float
        Known observation standard deviation σ
    n : int, optional
        Number of observations (with ``total``)
    total : float, optional
        Sum of observations (with ``n``)

    Returns
    -------
    posterior : Normal
    """
    if noise_scale <= 0:
        raise ParameterError(f"noise_scale must be positive, got {noise_scale}")
    if data is not None:
        x = np.asarray(data, dtype=np.float64).reshape(-1)
        n, total = x.size, float(x.sum())
    elif n is None or total is None:
        raise ParameterError("pass either data or both n and total")
    if n < 0:
        raise ParameterError(f"n must be non-negative, got {n}")

    prior_mean = float(prior.loc)
    prior_precision = 1.0 / float(prior.scale) ** 2
    noise_precision = 1.0 / noise_scale ** 2

    precision = prior_precision + n * noise_precision
    mean = (prior_mean * prior_precision + total * noise_precision) / precision
    return Normal(mean, (1.0 / precision) ** 0.5)


def gamma_poisson_update(prior, counts):
    """Posterior of a Gamma prior on a Poisson rate.

    Gamma(k, θ) with observed counts x_1..x_n gives
    Gamma(k + Σx, θ / (1 + nθ)).

    Parameters
    ----------
    prior : Gamma
        Prior on the rate (shape-scale parameterisation)
    counts : array_like
        Non-negative integer counts

    Returns
    -------
    posterior : Gamma
    """
    x = np.asarray(counts, dtype=np.float64).reshape(-1)
    if np.any(x < 0) or np.any(np.floor(x) != x):
        raise ParameterError("counts must be non-negative integers")
    shape = float(prior.shape) + float(x.sum())
    scale = float(prior.scale) / (1.0 + x.size * float(prior.scale))
    return Gamma(shape, scale)
