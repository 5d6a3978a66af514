"""Continuous and discrete uniform distributions."""

import math

import mlx.core as mx
import numpy as np
from mlx_bayes.distributions.base import Distribution, _check, _param
from mlx_bayes.random import INDEX_SPAN, randint, uniform


class Uniform(Distribution):
    """Continuous uniform distribution on [low, high).

    Parameters
    ----------
    low : float
        Lower bound (inclusive)
    high : float
        Upper bound (exclusive), must exceed ``low``
    """

    def __init__(self, low=0.0, high=1.0):
        _check(np.asarray(low, dtype=float) < np.asarray(high, dtype=float),
               f"Uniform requires low < high, got [{low}, {high})")
        self.low = _param(low, "low")
        self.high = _param(high, "high")

    def log_prob(self, value):
        value = mx.array(value)
        inside = (value >= self.low) & (value < self.high)
        return mx.where(inside, -mx.log(self.high - self.low), mx.array(-mx.inf))

    def _sample(self, key, shape):
        return self.low + (self.high - self.low) * uniform(key, shape)

    def mean(self):
        return (self.low + self.high) / 2

    def variance(self):
        return (self.high - self.low) ** 2 / 12

    def __repr__(self):
        return f"Uniform(low={float(self.low):.3f}, high={float(self.high):.3f})"


class DiscreteUniform(Distribution):
    """Uniform distribution over the integers low, low + 1, ..., high.

    Parameters
    ----------
    low : int
        Smallest value
    high : int
        Largest value (inclusive), must be >= ``low``
    """

    def __init__(self, low, high):
        _check(int(low) == low and int(high) == high,
               f"DiscreteUniform bounds must be integers, got {low}, {high}")
        _check(low <= high, f"DiscreteUniform requires low <= high, got [{low}, {high}]")
        _check(high - low < INDEX_SPAN,
               f"DiscreteUniform supports at most 2**48 values, got [{low}, {high}]")
        self.low = int(low)
        self.high = int(high)
        self._n = self.high - self.low + 1

    def log_prob(self, value):
        value = mx.array(value)
        inside = (value >= self.low) & (value <= self.high)
        if not mx.issubdtype(value.dtype, mx.integer):
            inside = inside & (mx.floor(value) == value)
        return mx.where(inside, mx.array(-math.log(self._n)), mx.array(-mx.inf))

    def _sample(self, key, shape):
        return randint(key, self.low, self.high + 1, shape)

    def mean(self):
        return (self.low + self.high) / 2

    def variance(self):
        return (self._n ** 2 - 1) / 12

    def __repr__(self):
        return f"DiscreteUniform(low={self.low}, high={self.high})"
