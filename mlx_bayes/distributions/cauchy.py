"""Cauchy distribution."""

import math

import mlx.core as mx
from mlx_bayes.distributions.base import Distribution, _param, _positive
from mlx_bayes.random import uniform


class Cauchy(Distribution):
    """Cauchy distribution.

    Has no finite mean or variance; use the median and quantiles instead.

    Parameters
    ----------
    loc : float
        Location (median)
    scale : float
        Half width at half maximum, must be positive
    """

    def __init__(self, loc, scale):
        self.loc = _param(loc, "loc")
        self.scale = _positive(scale, "scale")

    def log_prob(self, value):
        value = mx.array(value)
        z = (value - self.loc) / self.scale
        return -math.log(math.pi) - mx.log(self.scale) - mx.log(1 + z * z)

    def _sample(self, key, shape):
        # x = μ + γ tan(π (u - 1/2))
        u = uniform(key, shape)
        return self.loc + self.scale * mx.tan(mx.pi * (u - 0.5))

    def median(self):
        return self.loc

    def __repr__(self):
        return f"Cauchy(loc={float(self.loc):.3f}, scale={float(self.scale):.3f})"
