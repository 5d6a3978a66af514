"""Exponential distribution."""

import math

import mlx.core as mx
from mlx_bayes.distributions.base import Distribution, _positive
from mlx_bayes.random import uniform


class Exponential(Distribution):
    """Exponential distribution with density λ exp(-λ x) on x >= 0.

    Waiting time between events of a Poisson process; the Gamma law with
    shape 1. Draws use inversion of the CDF.

    Parameters
    ----------
    rate : float or array_like
        Rate λ, must be positive. The mean waiting time is 1 / λ.

    Examples
    --------
    >>> from mlx_bayes import Exponential
    >>> import mlx.core as mx
    >>>
    >>> wait = Exponential(0.5)  # mean wait of 2 time units
    >>> wait.sample(mx.random.key(0), shape=(3,))
    """

    def __init__(self, rate):
        self.rate = _positive(rate, "rate")
        self._log_rate = mx.log(self.rate)

    def log_prob(self, value):
        """Log density; -inf below zero.

        Parameters
        ----------
        value : array_like
            Points at which to evaluate

        Returns
        -------
        log_prob : mlx.core.array
            log λ - λ x on the support
        """
        value = mx.array(value)
        log_prob = self._log_rate - self.rate * value
        return mx.where(value >= 0, log_prob, mx.array(-mx.inf))

    def _sample(self, key, shape):
        # F^-1(u) = -log(1 - u) / λ, finite since u < 1
        return -mx.log(1 - uniform(key, shape)) / self.rate

    def mean(self):
        return 1.0 / self.rate

    def variance(self):
        return 1.0 / (self.rate ** 2)

    def mode(self):
        return mx.array(0.0)

    def median(self):
        return math.log(2.0) / self.rate

    def __repr__(self):
        return f"Exponential(rate={float(self.rate):.3f})"
