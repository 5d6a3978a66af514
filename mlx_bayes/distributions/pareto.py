"""Pareto distribution."""

import math

import mlx.core as mx
from mlx_bayes.distributions.base import Distribution, _positive
from mlx_bayes.random import uniform


class Pareto(Distribution):
    """Pareto (type I) distribution on [scale, ∞).

    Parameters
    ----------
    scale : float
        Minimum value x_m, must be positive
    shape : float
        Tail index α, must be positive. The mean is finite only for α > 1
        and the variance only for α > 2.
    """

    def __init__(self, scale, shape):
        self.scale = _positive(scale, "scale")
        self.shape = _positive(shape, "shape")

    def log_prob(self, value):
        value = mx.array(value)
        safe = mx.where(value >= self.scale, value, self.scale)
        log_prob = (
            mx.log(self.shape)
            + self.shape * mx.log(self.scale)
            - (self.shape + 1) * mx.log(safe)
        )
        return mx.where(value >= self.scale, log_prob, mx.array(-mx.inf))

    def _sample(self, key, shape):
        # x = x_m / (1 - u)^(1/α)
        u = uniform(key, shape)
        return self.scale / mx.power(1 - u, 1.0 / self.shape)

    def mean(self):
        a, xm = float(self.shape), float(self.scale)
        if a <= 1:
            return math.inf
        return a * xm / (a - 1)

    def variance(self):
        a, xm = float(self.shape), float(self.scale)
        if a <= 2:
            return math.inf
        return xm ** 2 * a / ((a - 1) ** 2 * (a - 2))

    def __repr__(self):
        return f"Pareto(scale={float(self.scale):.3f}, shape={float(self.shape):.3f})"
