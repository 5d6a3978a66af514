"""Triangular distribution."""

import mlx.core as mx
from mlx_bayes.distributions.base import Distribution, _check
from mlx_bayes.random import uniform


class Triangular(Distribution):
    """Triangular distribution on [low, high] peaking at ``mode``.

    Parameters
    ----------
    low : float
        Lower bound
    high : float
        Upper bound, must exceed ``low``
    mode : float
        Peak, with low <= mode <= high
    """

    def __init__(self, low, high, mode):
        _check(low < high, f"Triangular requires low < high, got {low}, {high}")
        _check(low <= mode <= high,
               f"Triangular requires low <= mode <= high, got mode={mode}")
        self.low = float(low)
        self.high = float(high)
        self.mode = float(mode)
        self._split = (self.mode - self.low) / (self.high - self.low)

    def log_prob(self, value):
        value = mx.array(value)
        a, b, c = self.low, self.high, self.mode
        width = b - a
        rising = 2 * (value - a) / (width * max(c - a, 1e-300))
        falling = 2 * (b - value) / (width * max(b - c, 1e-300))
        density = mx.where(value < c, rising, falling)
        inside = (value >= a) & (value <= b) & (density > 0)
        return mx.where(inside, mx.log(mx.where(inside, density, 1.0)), mx.array(-mx.inf))

    def _sample(self, key, shape):
        # piecewise inverse CDF, split where the CDF reaches the mode
        a, b, c = self.low, self.high, self.mode
        u = uniform(key, shape)
        left = a + mx.sqrt(u * (b - a) * (c - a))
        right = b - mx.sqrt((1 - u) * (b - a) * (b - c))
        return mx.where(u < self._split, left, right)

    def mean(self):
        return (self.low + self.high + self.mode) / 3

    def variance(self):
        a, b, c = self.low, self.high, self.mode
        return (a * a + b * b + c * c - a * b - a * c - b * c) / 18

    def __repr__(self):
        return f"Triangular(low={self.low:.3f}, high={self.high:.3f}, mode={self.mode:.3f})"
