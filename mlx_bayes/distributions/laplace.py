"""Laplace (double exponential) distribution."""

import mlx.core as mx
from mlx_bayes.distributions.base import Distribution, _param, _positive
from mlx_bayes.random import uniform

_TINY = 2.0 ** -24


class Laplace(Distribution):
    """Laplace distribution.

        p(x | μ, b) = exp(-|x - μ| / b) / (2b)

    Parameters
    ----------
    loc : float
        Location μ
    scale : float
        Scale b, must be positive
    """

    def __init__(self, loc, scale):
        self.loc = _param(loc, "loc")
        self.scale = _positive(scale, "scale")

    def log_prob(self, value):
        value = mx.array(value)
        return -mx.log(2 * self.scale) - mx.abs(value - self.loc) / self.scale

    def _sample(self, key, shape):
        # inverse CDF with v = u - 1/2 in [-1/2, 1/2); the floor keeps v = -1/2 finite
        v = uniform(key, shape) - 0.5
        tail = mx.maximum(1 - 2 * mx.abs(v), _TINY)
        return self.loc - self.scale * mx.sign(v) * mx.log(tail)

    def mean(self):
        return self.loc

    def variance(self):
        return 2 * self.scale ** 2

    def __repr__(self):
        return f"Laplace(loc={float(self.loc):.3f}, scale={float(self.scale):.3f})"
