"""Weibull distribution."""

import math

import mlx.core as mx
from mlx_bayes.distributions.base import Distribution, _positive
from mlx_bayes.random import uniform


class Weibull(Distribution):
    """Weibull distribution.

    CDF: F(x) = 1 - exp(-(x/λ)^k) for x >= 0

    Parameters
    ----------
    scale : float
        Scale λ, must be positive
    shape : float
        Shape k, must be positive. k = 1 recovers the exponential.
    """

    def __init__(self, scale, shape):
        self.scale = _positive(scale, "scale")
        self.shape = _positive(shape, "shape")

    def log_prob(self, value):
        value = mx.array(value)
        k, lam = self.shape, self.scale
        z = mx.where(value > 0, value, 1.0) / lam
        log_prob = mx.log(k) - mx.log(lam) + (k - 1) * mx.log(z) - mx.power(z, k)
        return mx.where(value > 0, log_prob, mx.array(-mx.inf))

    def _sample(self, key, shape):
        # x = λ (-ln(1 - u))^(1/k)
        u = uniform(key, shape)
        return self.scale * mx.power(-mx.log(1 - u), 1.0 / self.shape)

    def mean(self):
        return float(self.scale) * math.gamma(1 + 1 / float(self.shape))

    def variance(self):
        k = float(self.shape)
        g1 = math.gamma(1 + 1 / k)
        g2 = math.gamma(1 + 2 / k)
        return float(self.scale) ** 2 * (g2 - g1 ** 2)

    def __repr__(self):
        return f"Weibull(scale={float(self.scale):.3f}, shape={float(self.shape):.3f})"
