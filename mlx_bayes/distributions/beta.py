"""Beta distribution."""

import mlx.core as mx
import numpy as np
from scipy.special import betaln
from mlx_bayes.distributions.base import (
    FLOAT32_TINY,
    Distribution,
    _log_standard_gamma,
    _positive,
)

# largest float32 below one
_BELOW_ONE = 1.0 - 2.0 ** -24


class Beta(Distribution):
    """Beta distribution.

    The Beta distribution is a continuous probability distribution on the interval (0, 1).
    It's commonly used for modeling probabilities, proportions, and rates.

    Parameters
    ----------
    alpha : float or array_like
        First shape parameter (concentration1), must be positive
    beta : float or array_like
        Second shape parameter (concentration2), must be positive

    Notes
    -----
    Draws are sigmoid(log X - log Y) for independent standard gammas X and Y,
    so tiny shapes do not produce 0 / 0. Values are clipped to the float32
    numbers strictly inside (0, 1).

    Examples
    --------
    >>> from mlx_bayes import Beta
    >>>
    >>> # Uniform prior on [0, 1]
    >>> prior = Beta(1, 1)
    >>>
    >>> # Skeptical prior (favors values near 0.5)
    >>> prior = Beta(5, 5)
    >>>
    >>> # Prior favoring high probabilities
    >>> prior = Beta(8, 2)
    """

    def __init__(self, alpha, beta):
        """Initialize Beta distribution.

        Parameters
        ----------
        alpha : float or array_like
            First shape parameter (concentration1), must be positive
        beta : float or array_like
            Second shape parameter (concentration2), must be positive
        """
        self.alpha = _positive(alpha, "alpha")
        self.beta = _positive(beta, "beta")

        # log B(a, b) = log Γ(a) + log Γ(b) - log Γ(a+b)
        self._log_beta_const = mx.array(
            betaln(np.asarray(alpha, dtype=np.float64), np.asarray(beta, dtype=np.float64)),
            dtype=mx.float32,
        )

    def log_prob(self, value):
        """Compute log probability density.

        Parameters
        ----------
        value : array_like
            Value at which to evaluate the log probability

        Returns
        -------
        log_prob : array_like
            Log probability density
        """
        value = mx.array(value)
        inside = (value > 0) & (value < 1)
        safe = mx.where(inside, value, 0.5)

        # log PDF: (alpha-1)*log(x) + (beta-1)*log(1-x) - log B(alpha, beta)
        log_prob = (
            (self.alpha - 1) * mx.log(safe) +
            (self.beta - 1) * mx.log(1 - safe) -
            self._log_beta_const
        )

        # Return -inf for values outside (0, 1)
        return mx.where(inside, log_prob, mx.array(-mx.inf))

    def _sample(self, key, shape):
        # X / (X + Y) = sigmoid(log X - log Y) with X ~ Gamma(alpha, 1), Y ~ Gamma(beta, 1)
        kx, ky = mx.random.split(key)
        log_x = _log_standard_gamma(kx, shape, self.alpha)
        log_y = _log_standard_gamma(ky, shape, self.beta)
        return mx.clip(mx.sigmoid(log_x - log_y), FLOAT32_TINY, _BELOW_ONE)

    def mean(self):
        """Compute the mean of the distribution.

        Returns
        -------
        mean : array_like
            Mean: alpha / (alpha + beta)
        """
        return self.alpha / (self.alpha + self.beta)

    def variance(self):
        """Compute the variance of the distribution.

        Returns
        -------
        variance : array_like
            Variance: (alpha * beta) / ((alpha + beta)^2 * (alpha + beta + 1))
        """
        ab_sum = self.alpha + self.beta
        return (self.alpha * self.beta) / (ab_sum ** 2 * (ab_sum + 1))

    def __repr__(self):
        return f"Beta(alpha={float(self.alpha):.3f}, beta={float(self.beta):.3f})"
